"""
Display formatting for analytics results.

The engine returns raw floats and ``None`` for "no data". Presentation
callers consume fixed-decimal strings: one decimal for daily-scale
figures, none for yearly or absolute figures, and :data:`NO_DATA` as the
placeholder glyph when a figure cannot be computed.

CHANGELOG:
- 2026-10-14: Initial creation (STORY-006)

TODO:
- None
"""

from decimal import ROUND_HALF_UP, Decimal

NO_DATA = "-"


def format_daily(value: float | None) -> str:
    """Format a daily-scale figure with one decimal, e.g. ``"24.0"``."""
    if value is None:
        return NO_DATA
    return f"{value:.1f}"


def format_whole(value: float | None) -> str:
    """Format a yearly or absolute figure with no decimals, e.g. ``"8760"``."""
    if value is None:
        return NO_DATA
    return f"{value:.0f}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))
