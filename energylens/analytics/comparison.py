"""
Cross-meter comparison statistics.

Used when several meters are compared side by side. These figures sum
*raw* adjacent deltas without the interval admission policy: a counter
reset lowers a meter's total instead of being skipped. That divergence
from :mod:`energylens.analytics.consumption` is intentional and the two
code paths are kept separate.

Meters are visited in lexicographic order of their identifier, which also
decides ties in :func:`find_highest_consuming_meter`.

CHANGELOG:
- 2026-10-14: Initial creation (STORY-005)

TODO:
- None
"""

from collections.abc import Mapping, Sequence
from datetime import datetime

from energylens.analytics.models import Meter, Reading, require_aware
from energylens.analytics.series import days_between, iter_meters, raw_delta_sum
from energylens.analytics.single_meter import DAYS_PER_MONTH, recent_readings

MeterReadings = Mapping[str, Sequence[Reading]]


def _meter_names(meters: Sequence[Meter]) -> dict[str, str]:
    # First meter wins when the list carries a duplicate number.
    names: dict[str, str] = {}
    for meter in meters:
        names.setdefault(meter.meter_number, meter.name)
    return names


def _raw_consumption_per_meter(meter_readings: MeterReadings) -> list[tuple[str, float]]:
    return [
        (meter_id, raw_delta_sum(ordered))
        for meter_id, ordered in iter_meters(meter_readings)
        if len(ordered) >= 2
    ]


def calculate_total_consumption(meter_readings: MeterReadings) -> float:
    """Sum of every adjacent delta of every meter, resets included."""
    return sum(
        (raw_delta_sum(ordered) for _, ordered in iter_meters(meter_readings)),
        0.0,
    )


def calculate_average_daily_consumption(meter_readings: MeterReadings) -> float | None:
    """Pooled daily average across meters.

    Each meter with a positive day span contributes its raw delta sum and
    its first-to-last span; the pooled consumption is divided by the pooled
    days.

    Returns:
        kWh per day, or ``None`` when no meter has a positive span.
    """
    total_consumption = 0.0
    total_days = 0.0
    for _, ordered in iter_meters(meter_readings):
        if len(ordered) < 2:
            continue
        days = days_between(ordered[0], ordered[-1])
        if days > 0:
            total_consumption += raw_delta_sum(ordered)
            total_days += days

    if total_days <= 0:
        return None
    return total_consumption / total_days


def find_highest_consuming_meter(
    meter_readings: MeterReadings,
    meters: Sequence[Meter],
) -> str | None:
    """Name of the meter with the largest raw delta sum.

    Only meters with a strictly positive delta sum qualify. On a tie the
    lexicographically smallest meter identifier wins.

    Args:
        meter_readings: Mapping of meter identifier to readings.
        meters: Meters used to resolve the winner's display name.

    Returns:
        The display name, or ``None`` when no meter qualifies or the
        winning identifier is not in *meters*.
    """
    max_consumption = 0.0
    max_meter_id: str | None = None
    for meter_id, consumption in _raw_consumption_per_meter(meter_readings):
        if consumption > max_consumption:
            max_consumption = consumption
            max_meter_id = meter_id

    if max_meter_id is None:
        return None
    return _meter_names(meters).get(max_meter_id)


def _meter_daily_rate(ordered: Sequence[Reading], now: datetime) -> float | None:
    recent = recent_readings(ordered, now)
    window = recent if len(recent) >= 2 else ordered
    days = days_between(window[0], window[-1])
    if days <= 0:
        return None
    return raw_delta_sum(window) / days


def calculate_combined_monthly_prediction(
    meter_readings: MeterReadings,
    now: datetime,
) -> float:
    """Predicted combined consumption of all meters over the next 30 days.

    Each meter uses its trailing 30-day rate when at least two of its
    readings fall inside the window, otherwise its all-data rate. Meters
    whose chosen window spans zero days are left out.

    Args:
        meter_readings: Mapping of meter identifier to readings.
        now: Current time (timezone-aware).

    Returns:
        Summed 30-day prediction in kWh; ``0.0`` when no meter has a rate.

    Raises:
        ValueError: If ``now`` is naive.
    """
    require_aware(now)
    total = 0.0
    for _, ordered in iter_meters(meter_readings):
        if len(ordered) < 2:
            continue
        avg_daily = _meter_daily_rate(ordered, now)
        if avg_daily is None:
            continue
        total += avg_daily * DAYS_PER_MONTH
    return total


def calculate_consumption_percentages(
    meter_readings: MeterReadings,
    meters: Sequence[Meter],
) -> list[tuple[str, float]]:
    """Share of each meter in the combined raw consumption.

    Meters missing from *meters* still count toward the total but are left
    out of the result.

    Returns:
        ``(name, percentage)`` pairs sorted by descending percentage, or an
        empty list when the combined consumption is exactly zero.
    """
    consumptions = _raw_consumption_per_meter(meter_readings)
    total = sum((c for _, c in consumptions), 0.0)
    if total == 0:
        return []

    names = _meter_names(meters)
    shares = [
        (names[meter_id], consumption / total * 100)
        for meter_id, consumption in consumptions
        if meter_id in names
    ]
    return sorted(shares, key=lambda item: item[1], reverse=True)
