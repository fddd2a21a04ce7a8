"""
Step-chart series for a single meter's consumption rate.

Turns one meter's readings into the points a step chart draws (kWh per
day held constant across each interval), the oldest-to-newest average
line, and the tooltip lookup that snaps a chart position to the interval
under it.

CHANGELOG:
- 2026-10-15: Initial creation (STORY-007)

TODO:
- None
"""

from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from energylens.analytics.consumption import HOURS_PER_DAY
from energylens.analytics.formatting import round_half_up
from energylens.analytics.models import IntervalConsumption, Reading
from energylens.analytics.series import (
    adjacent_pairs,
    admit_interval,
    hours_between,
    sorted_by_date,
)


class StepPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: datetime
    kwh_per_day: float


class AverageLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    kwh_per_day: float


class IntervalTooltip(BaseModel):
    """Chart tooltip for the interval under the pointer.

    Attributes:
        at: Midpoint of the interval, where the marker snaps to.
        kwh_per_day: Interval rate per day, rounded half away from zero.
    """

    model_config = ConfigDict(frozen=True)

    at: datetime
    kwh_per_day: int


def meter_intervals(readings: Sequence[Reading]) -> list[IntervalConsumption]:
    """Admitted intervals of one meter's series, in chronological order.

    Each interval is attributed to the meter of its starting reading.
    """
    ordered = sorted_by_date(readings)
    intervals: list[IntervalConsumption] = []
    for start, end in adjacent_pairs(ordered):
        interval = admit_interval(start.meter_id, start, end)
        if interval is not None:
            intervals.append(interval)
    return intervals


def step_points(readings: Sequence[Reading]) -> list[StepPoint]:
    """Two points per admitted interval: its start and its end, same height."""
    points: list[StepPoint] = []
    for interval in meter_intervals(readings):
        per_day = interval.kwh_per_hour * HOURS_PER_DAY
        points.append(StepPoint(x=interval.start_date, kwh_per_day=per_day))
        points.append(StepPoint(x=interval.end_date, kwh_per_day=per_day))
    return points


def average_line(readings: Sequence[Reading]) -> AverageLine | None:
    """Oldest-to-newest daily rate, drawn as a horizontal reference line.

    Returns:
        The line, or ``None`` with fewer than two readings, a non-positive
        span or a counter that went backwards.
    """
    ordered = sorted_by_date(readings)
    if len(ordered) < 2:
        return None

    oldest, newest = ordered[0], ordered[-1]
    hours = hours_between(oldest, newest)
    if hours <= 0:
        return None
    delta = newest.value - oldest.value
    if delta < 0:
        return None

    return AverageLine(
        start=oldest.date,
        end=newest.date,
        kwh_per_day=delta / hours * HOURS_PER_DAY,
    )


def interval_at(
    intervals: Sequence[IntervalConsumption],
    at: datetime,
) -> IntervalTooltip | None:
    """Find the first interval containing *at* (bounds inclusive)."""
    for interval in intervals:
        if interval.start_date <= at <= interval.end_date:
            midpoint = interval.start_date + (interval.end_date - interval.start_date) / 2
            return IntervalTooltip(
                at=midpoint,
                kwh_per_day=round_half_up(interval.kwh_per_hour * HOURS_PER_DAY),
            )
    return None
