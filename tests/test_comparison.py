"""
Tests for cross-meter comparison statistics (STORY-005).

These figures use raw adjacent deltas, so counter resets lower totals
instead of being skipped. Several tests pin down that difference from the
consumption module.

CHANGELOG:
- 2026-10-14: Initial creation (STORY-005)

TODO:
- None
"""

from datetime import UTC, datetime, timedelta

import pytest
from factories import at, meter, reading

from energylens.analytics.comparison import (
    calculate_average_daily_consumption,
    calculate_combined_monthly_prediction,
    calculate_consumption_percentages,
    calculate_total_consumption,
    find_highest_consuming_meter,
)
from energylens.analytics.consumption import total_consumption_kwh

NOW = datetime(2024, 6, 30, 12, tzinfo=UTC)


def _series(meter_id: str, *points: tuple[int, float]) -> list:
    """Readings at ``NOW - days`` for each ``(days_ago, value)`` point."""
    return [reading(meter_id, value, NOW - timedelta(days=days)) for days, value in points]


class TestCalculateTotalConsumption:
    def test_includes_negative_deltas(self) -> None:
        data = {"A": [reading("A", 100, at(1)), reading("A", 150, at(2)), reading("A", 20, at(3))]}

        assert calculate_total_consumption(data) == -80
        assert total_consumption_kwh(data) == 50

    def test_sums_across_meters(self) -> None:
        data = {
            "A": [reading("A", 0, at(1)), reading("A", 300, at(2))],
            "B": [reading("B", 50, at(1)), reading("B", 150, at(2))],
            "C": [reading("C", 7, at(1))],
        }

        assert calculate_total_consumption(data) == 400

    def test_empty(self) -> None:
        assert calculate_total_consumption({}) == 0.0


class TestCalculateAverageDailyConsumption:
    def test_pools_consumption_and_days(self) -> None:
        """(100 + 300) kWh over (10 + 10) days."""
        data = {
            "A": [reading("A", 0, at(1)), reading("A", 100, at(11))],
            "B": [reading("B", 0, at(1)), reading("B", 300, at(11))],
        }

        assert calculate_average_daily_consumption(data) == pytest.approx(20.0)

    def test_skips_zero_span_meters(self) -> None:
        data = {
            "A": [reading("A", 0, at(1)), reading("A", 100, at(11))],
            "B": [reading("B", 0, at(5)), reading("B", 999, at(5))],
        }

        assert calculate_average_daily_consumption(data) == pytest.approx(10.0)

    def test_no_span_is_no_data(self) -> None:
        data = {"A": [reading("A", 0, at(1))]}
        assert calculate_average_daily_consumption(data) is None


class TestFindHighestConsumingMeter:
    def test_returns_display_name(self) -> None:
        data = {
            "a": [reading("a", 0, at(1)), reading("a", 10, at(2))],
            "b": [reading("b", 0, at(1)), reading("b", 30, at(2))],
        }
        meters = [meter("a", "Kitchen"), meter("b", "Garage")]

        assert find_highest_consuming_meter(data, meters) == "Garage"

    def test_tie_goes_to_smallest_identifier(self) -> None:
        data = {
            "z": [reading("z", 0, at(1)), reading("z", 10, at(2))],
            "m": [reading("m", 0, at(1)), reading("m", 10, at(2))],
        }
        meters = [meter("z", "Zed"), meter("m", "Em")]

        assert find_highest_consuming_meter(data, meters) == "Em"

    def test_non_positive_totals_do_not_qualify(self) -> None:
        data = {
            "a": [reading("a", 10, at(1)), reading("a", 10, at(2))],
            "b": [reading("b", 30, at(1)), reading("b", 5, at(2))],
        }

        assert find_highest_consuming_meter(data, [meter("a"), meter("b")]) is None

    def test_unknown_winner_is_none(self) -> None:
        data = {"x": [reading("x", 0, at(1)), reading("x", 10, at(2))]}
        assert find_highest_consuming_meter(data, [meter("a")]) is None


class TestCalculateCombinedMonthlyPrediction:
    def test_prefers_window_per_meter(self) -> None:
        data = {
            # window: 20 kWh over 10 days -> 2/day -> 60
            "A": _series("A", (200, 0), (20, 500), (10, 520)),
            # window has one reading -> all data: 100 over 100 days -> 1/day -> 30
            "B": _series("B", (100, 0), (0, 100)),
        }

        assert calculate_combined_monthly_prediction(data, NOW) == pytest.approx(90.0)

    def test_window_uses_raw_deltas(self) -> None:
        data = {"A": _series("A", (20, 100), (15, 50), (10, 80))}

        assert calculate_combined_monthly_prediction(data, NOW) == pytest.approx(-60.0)

    def test_skips_zero_span_and_short_meters(self) -> None:
        data = {
            "A": _series("A", (5, 0), (5, 10)),
            "B": _series("B", (3, 1)),
        }

        assert calculate_combined_monthly_prediction(data, NOW) == 0.0

    def test_naive_now_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            calculate_combined_monthly_prediction({}, datetime(2024, 6, 30))


class TestCalculateConsumptionPercentages:
    def test_scenario_sorted_descending(self) -> None:
        data = {
            "b": [reading("b", 0, at(1)), reading("b", 100, at(2))],
            "a": [reading("a", 0, at(1)), reading("a", 300, at(2))],
        }
        meters = [meter("a", "meterA"), meter("b", "meterB")]

        assert calculate_consumption_percentages(data, meters) == [
            ("meterA", 75.0),
            ("meterB", 25.0),
        ]

    def test_unknown_meter_counts_toward_total(self) -> None:
        data = {
            "a": [reading("a", 0, at(1)), reading("a", 50, at(2))],
            "ghost": [reading("ghost", 0, at(1)), reading("ghost", 50, at(2))],
        }

        assert calculate_consumption_percentages(data, [meter("a", "A")]) == [("A", 50.0)]

    def test_zero_total_is_empty(self) -> None:
        data = {
            "a": [reading("a", 0, at(1)), reading("a", 10, at(2))],
            "b": [reading("b", 10, at(1)), reading("b", 0, at(2))],
        }

        assert calculate_consumption_percentages(data, [meter("a"), meter("b")]) == []

    def test_first_duplicate_meter_name_wins(self) -> None:
        data = {"a": [reading("a", 0, at(1)), reading("a", 10, at(2))]}
        meters = [meter("a", "First"), meter("a", "Second")]

        assert calculate_consumption_percentages(data, meters) == [("First", 100.0)]
