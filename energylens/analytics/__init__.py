"""
Consumption analytics engine: pure transforms over meter reading series.

CHANGELOG:
- 2026-10-12: Initial creation (STORY-002)
- 2026-10-14: Export comparison statistics and formatting (STORY-005, STORY-006)

TODO:
- None
"""

from energylens.analytics.comparison import (
    calculate_average_daily_consumption,
    calculate_combined_monthly_prediction,
    calculate_consumption_percentages,
    calculate_total_consumption,
    find_highest_consuming_meter,
)
from energylens.analytics.consumption import (
    average_hourly_consumption_all_data,
    hourly_consumption_per_interval,
    last_interval_per_meter,
    projected_daily_consumption_all_data,
    projected_daily_consumption_from_last_interval,
    projected_yearly_consumption_all_data,
    projected_yearly_consumption_from_last_interval,
    total_consumption_kwh,
)
from energylens.analytics.formatting import NO_DATA, format_daily, format_whole
from energylens.analytics.models import IntervalConsumption, Meter, Reading
from energylens.analytics.single_meter import (
    average_daily_consumption,
    monthly_prediction,
    predicted_year_end_reading,
    projected_annual_consumption_from_all_data,
)

__all__ = [
    "NO_DATA",
    "IntervalConsumption",
    "Meter",
    "Reading",
    "average_daily_consumption",
    "average_hourly_consumption_all_data",
    "calculate_average_daily_consumption",
    "calculate_combined_monthly_prediction",
    "calculate_consumption_percentages",
    "calculate_total_consumption",
    "find_highest_consuming_meter",
    "format_daily",
    "format_whole",
    "hourly_consumption_per_interval",
    "last_interval_per_meter",
    "monthly_prediction",
    "predicted_year_end_reading",
    "projected_annual_consumption_from_all_data",
    "projected_daily_consumption_all_data",
    "projected_daily_consumption_from_last_interval",
    "projected_yearly_consumption_all_data",
    "projected_yearly_consumption_from_last_interval",
    "total_consumption_kwh",
]
