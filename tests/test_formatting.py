"""
Tests for display formatting (STORY-006).

CHANGELOG:
- 2026-10-14: Initial creation (STORY-006)

TODO:
- None
"""

import pytest

from energylens.analytics.formatting import NO_DATA, format_daily, format_whole, round_half_up


class TestFormatDaily:
    def test_one_decimal(self) -> None:
        assert format_daily(24.0) == "24.0"
        assert format_daily(3.14159) == "3.1"

    def test_none_is_placeholder(self) -> None:
        assert format_daily(None) == NO_DATA == "-"

    def test_zero_is_not_placeholder(self) -> None:
        assert format_daily(0.0) == "0.0"


class TestFormatWhole:
    def test_no_decimals(self) -> None:
        assert format_whole(8760.0) == "8760"
        assert format_whole(1234.4) == "1234"

    def test_none_is_placeholder(self) -> None:
        assert format_whole(None) == "-"


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.5, 3), (3.5, 4), (2.4, 2), (-2.5, -3), (0.0, 0), (71.99, 72)],
    )
    def test_halves_round_away_from_zero(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected
