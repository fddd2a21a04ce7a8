"""
Single-meter statistics over one reading series.

These are the per-meter figures shown on a meter's detail screen. Unlike
:mod:`energylens.analytics.consumption` they look only at the oldest and
newest reading of the chosen window, not at individual intervals.

Two year-end figures answer different questions and are kept apart:

- :func:`predicted_year_end_reading` projects the *absolute meter value*
  on December 31 using the trailing 30-day rate when available.
- :func:`projected_annual_consumption_from_all_data` projects the
  *annual consumption total* from the all-data rate.

Functions that depend on the current time take ``now`` as a parameter.

CHANGELOG:
- 2026-10-13: Initial creation (STORY-004)

TODO:
- None
"""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from energylens.analytics.consumption import HOURS_PER_YEAR
from energylens.analytics.models import Reading, require_aware
from energylens.analytics.series import days_between, hours_between, sorted_by_date

RECENT_WINDOW_DAYS = 30
DAYS_PER_MONTH = 30.0

# Oldest/newest spans at or below this many hours are treated as empty.
_MIN_SPAN_HOURS = 1e-6


def recent_readings(ordered: Sequence[Reading], now: datetime) -> list[Reading]:
    """Return readings dated within the trailing window ending at *now*."""
    cutoff = now - timedelta(days=RECENT_WINDOW_DAYS)
    return [r for r in ordered if r.date >= cutoff]


def _span_daily_rate(ordered: Sequence[Reading]) -> float | None:
    days = days_between(ordered[0], ordered[-1])
    if days <= 0:
        return None
    return (ordered[-1].value - ordered[0].value) / days


def _windowed_daily_rate(ordered: Sequence[Reading], now: datetime) -> float | None:
    """Daily rate from the trailing window, falling back to the full series.

    The fallback only applies when fewer than two readings fall inside the
    window. A window with two readings but a zero-day span yields ``None``.
    """
    recent = recent_readings(ordered, now)
    if len(recent) >= 2:
        return _span_daily_rate(recent)
    if len(ordered) >= 2:
        return _span_daily_rate(ordered)
    return None


def average_daily_consumption(readings: Sequence[Reading]) -> float | None:
    """Average kWh per day between the oldest and newest reading.

    Args:
        readings: One meter's readings in any order.

    Returns:
        ``(newest.value - oldest.value) / days``, or ``None`` with fewer
        than two readings or a non-positive span.
    """
    ordered = sorted_by_date(readings)
    if len(ordered) < 2:
        return None
    return _span_daily_rate(ordered)


def end_of_year(now: datetime) -> datetime:
    """December 31, 23:59 of *now*'s year, in *now*'s timezone."""
    return datetime(now.year, 12, 31, 23, 59, tzinfo=now.tzinfo)


def predicted_year_end_reading(readings: Sequence[Reading], now: datetime) -> float | None:
    """Predict the absolute meter reading at the end of the current year.

    Uses the trailing 30-day daily rate when at least two readings fall in
    the window, otherwise the all-data rate, and extrapolates from the
    latest reading over the days remaining until December 31, 23:59.

    Args:
        readings: One meter's readings in any order.
        now: Current time (timezone-aware).

    Returns:
        Predicted meter value in kWh, or ``None`` when no rate is available.

    Raises:
        ValueError: If ``now`` is naive.
    """
    require_aware(now)
    ordered = sorted_by_date(readings)
    if not ordered:
        return None

    avg_daily = _windowed_daily_rate(ordered, now)
    if avg_daily is None:
        return None

    remaining = end_of_year(now).astimezone(UTC) - now.astimezone(UTC)
    days_remaining = max(0.0, remaining.total_seconds() / 86400.0)
    return ordered[-1].value + avg_daily * days_remaining


def projected_annual_consumption_from_all_data(readings: Sequence[Reading]) -> float | None:
    """Project a year's consumption from the oldest-to-newest rate.

    Ignores any recent window. Returns ``None`` with fewer than two
    readings, a negligible time span or a counter that went backwards.
    """
    ordered = sorted_by_date(readings)
    if len(ordered) < 2:
        return None

    oldest, newest = ordered[0], ordered[-1]
    hours = max(0.0, hours_between(oldest, newest))
    if hours <= _MIN_SPAN_HOURS:
        return None

    delta = newest.value - oldest.value
    if delta < 0:
        return None

    return delta / hours * HOURS_PER_YEAR


def monthly_prediction(readings: Sequence[Reading], now: datetime) -> float | None:
    """Predict the next 30 days of consumption.

    Raises:
        ValueError: If ``now`` is naive.
    """
    require_aware(now)
    ordered = sorted_by_date(readings)
    if len(ordered) < 2:
        return None

    avg_daily = _windowed_daily_rate(ordered, now)
    if avg_daily is None:
        return None
    return avg_daily * DAYS_PER_MONTH
