"""
adsheets/services/formatting.py

Display helpers shared by reporting consumers: compact Indian-style number
formatting and the standard reporting date windows.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Literal

NumberKind = Literal["number", "currency", "percent"]
PeriodName = Literal["today", "yesterday", "last7", "last30", "thisMonth", "lastMonth"]

CURRENCY_SYMBOL = "₹"

# (threshold, divisor, suffix, decimals), largest first.
_COMPACT_UNITS: tuple[tuple[float, float, str, int], ...] = (
    (10_000_000, 10_000_000, "Cr", 2),
    (100_000, 100_000, "L", 2),
    (1_000, 1_000, "K", 1),
)


def format_number(value: float, kind: NumberKind = "number") -> str:
    """
    Format a metric for display.

    Crore (1e7), lakh (1e5) and thousand (1e3) suffixes apply to currency
    and plain numbers; currency is prefixed with the rupee sign. Percent
    values are shown with two decimals.
    """

    if kind == "percent":
        return f"{value:.2f}%"

    prefix = CURRENCY_SYMBOL if kind == "currency" else ""
    for threshold, divisor, suffix, decimals in _COMPACT_UNITS:
        if value >= threshold:
            return f"{prefix}{value / divisor:.{decimals}f}{suffix}"

    if kind == "currency":
        return f"{prefix}{value:.0f}"
    return f"{value:.2f}" if value < 10 else f"{value:.0f}"


def get_date_range(period: PeriodName, today: date | None = None) -> tuple[date, date]:
    """
    Return the inclusive ``(start, end)`` window for a named period.

    Unknown period names fall back to today.
    """

    current = today or date.today()

    if period == "yesterday":
        yesterday = current - timedelta(days=1)
        return yesterday, yesterday
    if period == "last7":
        return current - timedelta(days=6), current
    if period == "last30":
        return current - timedelta(days=29), current
    if period == "thisMonth":
        return current.replace(day=1), current
    if period == "lastMonth":
        last_month_end = current.replace(day=1) - timedelta(days=1)
        return last_month_end.replace(day=1), last_month_end
    return current, current
