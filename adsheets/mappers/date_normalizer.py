"""
adsheets/mappers/date_normalizer.py

Best-effort conversion of sheet date cells to ``YYYY-MM-DD``.

Order of attempts:

1. ``Mon-YY`` month abbreviations (``Nov-25`` -> ``2025-11-01``);
2. a fixed list of unambiguous and month-first formats;
3. slash/dash digit triples: a leading 4-digit component is the year,
   otherwise day-month-year is assumed (no locale check is made);
4. anything else is returned unchanged.
"""

from __future__ import annotations

import re
from datetime import datetime

MONTH_ABBREVIATIONS: tuple[str, ...] = (
    "jan",
    "feb",
    "mar",
    "apr",
    "may",
    "jun",
    "jul",
    "aug",
    "sep",
    "oct",
    "nov",
    "dec",
)

DATE_PATTERNS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%a %b %d %Y",
)

_MONTH_YEAR = re.compile(r"^([A-Za-z]{3})-(\d{2})$")
_DATE_PARTS_SEPARATOR = re.compile(r"[/\-]")


def normalize_date(value: str) -> str:
    """
    Return ``value`` as ``YYYY-MM-DD`` when recognizable, else unchanged.
    """

    if not value:
        return ""
    text = value.strip()

    month_year = _from_month_abbreviation(text)
    if month_year is not None:
        return month_year

    for pattern in DATE_PATTERNS:
        try:
            return datetime.strptime(text, pattern).date().isoformat()
        except ValueError:
            continue

    triple = _from_digit_triple(text)
    if triple is not None:
        return triple
    return value


def _from_month_abbreviation(text: str) -> str | None:
    match = _MONTH_YEAR.match(text)
    if match is None:
        return None
    month_key = match.group(1).lower()
    if month_key not in MONTH_ABBREVIATIONS:
        return None
    month = MONTH_ABBREVIATIONS.index(month_key) + 1
    year = 2000 + int(match.group(2))
    return f"{year}-{month:02d}-01"


def _from_digit_triple(text: str) -> str | None:
    parts = _DATE_PARTS_SEPARATOR.split(text)
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return None

    first, second, third = parts
    if len(first) == 4:
        year, month, day = first, second, third
    else:
        day, month, year = first, second, third
    if len(year) == 2:
        year = f"20{year}"
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"
