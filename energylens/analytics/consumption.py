"""
Multi-meter consumption analytics: intervals, averages and projections.

Every function takes the full ``meter_id -> readings`` mapping by value,
sorts each series itself and applies the interval admission policy from
:mod:`energylens.analytics.series`. Functions are pure: no I/O, no clock,
no mutation of the input. Insufficient data is signalled by ``None``.

Two projection families coexist on purpose:

- *all-data*: time-weighted average rate over every admitted interval.
- *last-interval*: the most recent interval of each meter, summed across
  meters (combined simultaneous draw).

CHANGELOG:
- 2026-10-12: Initial creation (STORY-002)
- 2026-10-13: Add last-interval projection family (STORY-003)

TODO:
- None
"""

from collections.abc import Mapping, Sequence

from energylens.analytics.models import IntervalConsumption, Reading
from energylens.analytics.series import adjacent_pairs, admit_interval, iter_meters

HOURS_PER_DAY = 24.0
# Non-leap year.
HOURS_PER_YEAR = 8760.0

MeterReadings = Mapping[str, Sequence[Reading]]


def _admitted_intervals(meter_readings: MeterReadings) -> list[IntervalConsumption]:
    intervals: list[IntervalConsumption] = []
    for meter_id, ordered in iter_meters(meter_readings):
        for start, end in adjacent_pairs(ordered):
            interval = admit_interval(meter_id, start, end)
            if interval is not None:
                intervals.append(interval)
    return intervals


def hourly_consumption_per_interval(
    meter_readings: MeterReadings,
) -> list[IntervalConsumption]:
    """Return every admitted interval of every meter.

    Args:
        meter_readings: Mapping of meter identifier to its readings, in any
            order.

    Returns:
        Admitted intervals across all meters, sorted ascending by
        ``start_date``. Meters with fewer than two readings contribute
        nothing.
    """
    return sorted(_admitted_intervals(meter_readings), key=lambda i: i.start_date)


def last_interval_per_meter(
    meter_readings: MeterReadings,
) -> list[IntervalConsumption]:
    """Return the interval between the two latest readings of each meter.

    Only the final pair of each sorted series is considered; if that pair
    fails admission the meter contributes nothing (earlier pairs are not
    tried).

    Returns:
        At most one interval per meter, sorted ascending by ``end_date``.
    """
    results: list[IntervalConsumption] = []
    for meter_id, ordered in iter_meters(meter_readings):
        if len(ordered) < 2:
            continue
        interval = admit_interval(meter_id, ordered[-2], ordered[-1])
        if interval is not None:
            results.append(interval)
    return sorted(results, key=lambda i: i.end_date)


def average_hourly_consumption_all_data(meter_readings: MeterReadings) -> float | None:
    """Time-weighted average rate: ``sum(delta) / sum(hours)``.

    This pools interval totals; it is not the mean of per-interval rates,
    so long intervals weigh more than short ones.

    Returns:
        Average kWh per hour, or ``None`` when no interval was admitted.
    """
    total_kwh = 0.0
    total_hours = 0.0
    for interval in _admitted_intervals(meter_readings):
        total_kwh += interval.consumption_kwh
        total_hours += interval.hours

    if total_hours <= 0:
        return None
    return total_kwh / total_hours


def projected_daily_consumption_all_data(meter_readings: MeterReadings) -> float | None:
    """Daily kWh projected from the all-data average rate."""
    avg_hourly = average_hourly_consumption_all_data(meter_readings)
    if avg_hourly is None:
        return None
    return avg_hourly * HOURS_PER_DAY


def projected_yearly_consumption_all_data(meter_readings: MeterReadings) -> float | None:
    """Yearly kWh projected from the all-data average rate (8760 h)."""
    avg_hourly = average_hourly_consumption_all_data(meter_readings)
    if avg_hourly is None:
        return None
    return avg_hourly * HOURS_PER_YEAR


def _last_interval_hourly_sum(meter_readings: MeterReadings) -> float | None:
    intervals = last_interval_per_meter(meter_readings)
    if not intervals:
        return None
    return sum(i.kwh_per_hour for i in intervals)


def projected_daily_consumption_from_last_interval(
    meter_readings: MeterReadings,
) -> float | None:
    """Daily kWh projected from the summed latest-interval rates."""
    hourly_sum = _last_interval_hourly_sum(meter_readings)
    if hourly_sum is None:
        return None
    return hourly_sum * HOURS_PER_DAY


def projected_yearly_consumption_from_last_interval(
    meter_readings: MeterReadings,
) -> float | None:
    """Yearly kWh projected from the summed latest-interval rates."""
    hourly_sum = _last_interval_hourly_sum(meter_readings)
    if hourly_sum is None:
        return None
    return hourly_sum * HOURS_PER_YEAR


def total_consumption_kwh(meter_readings: MeterReadings) -> float:
    """Sum of consumption over every admitted interval, in kWh.

    Counter resets are excluded. Returns ``0.0`` when nothing is admitted;
    total consumption has no "no data" state.
    """
    return sum((i.consumption_kwh for i in _admitted_intervals(meter_readings)), 0.0)
