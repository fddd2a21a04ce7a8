"""
Reading-series primitives shared by the analytics modules.

Sorting, adjacent pairing and the interval admission policy live here so
every engine operation applies them identically. Nothing is cached: each
caller sorts its own copy of the series.

CHANGELOG:
- 2026-10-19: Deterministic order for equal timestamps (STORY-013)
- 2026-10-12: Initial creation (STORY-002)

TODO:
- None
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence

from energylens.analytics.models import IntervalConsumption, Reading

SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0


def sorted_by_date(readings: Iterable[Reading]) -> list[Reading]:
    """Return a new list of *readings* ordered by ascending date.

    Readings sharing a timestamp are ordered by value, then id, so the
    result never depends on the order the caller supplied.
    """
    return sorted(readings, key=lambda r: (r.date, r.value, r.id or ""))


def iter_meters(
    meter_readings: Mapping[str, Sequence[Reading]],
) -> Iterator[tuple[str, list[Reading]]]:
    """Yield ``(meter_id, sorted_readings)`` in lexicographic meter order.

    Iterating by sorted key keeps sums and tie-breaks independent of the
    mapping's insertion order.
    """
    for meter_id in sorted(meter_readings):
        yield meter_id, sorted_by_date(meter_readings[meter_id])


def adjacent_pairs(ordered: Sequence[Reading]) -> Iterator[tuple[Reading, Reading]]:
    """Yield each ``(earlier, later)`` neighbour pair of an ordered series."""
    for i in range(len(ordered) - 1):
        yield ordered[i], ordered[i + 1]


def hours_between(start: Reading, end: Reading) -> float:
    return (end.date - start.date).total_seconds() / SECONDS_PER_HOUR


def days_between(start: Reading, end: Reading) -> float:
    return (end.date - start.date).total_seconds() / SECONDS_PER_DAY


def admit_interval(
    meter_id: str,
    start: Reading,
    end: Reading,
) -> IntervalConsumption | None:
    """Apply the admission policy to two adjacent readings.

    An interval is discarded when its duration is not positive (duplicate
    or inverted timestamps) or when the counter went backwards (reset,
    meter swap, bad entry). Negative deltas are never clamped.

    Args:
        meter_id: Meter the readings belong to.
        start: The earlier reading.
        end: The later reading.

    Returns:
        The admitted interval, or ``None`` when it is discarded.
    """
    hours = hours_between(start, end)
    if hours <= 0:
        return None

    delta = end.value - start.value
    if delta < 0:
        return None

    return IntervalConsumption(
        meter_id=meter_id,
        start_date=start.date,
        end_date=end.date,
        consumption_kwh=delta,
        hours=hours,
        kwh_per_hour=delta / hours,
    )


def raw_delta_sum(ordered: Sequence[Reading]) -> float:
    """Sum every adjacent delta with no admission filter (resets included)."""
    return sum((end.value - start.value for start, end in adjacent_pairs(ordered)), 0.0)
