"""
tests/test_date_normalizer.py

Pytest unit tests for sheet date normalization.

Coverage
--------
- Month abbreviation cells (Mon-YY)
- ISO and month-first formats
- Day-first digit triples with 2- and 4-digit years
- Unrecognized text passes through unchanged
"""

from __future__ import annotations

import pytest

from adsheets.mappers.date_normalizer import normalize_date


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Nov-25", "2025-11-01"),
        ("jan-24", "2024-01-01"),
        ("2025-01-05", "2025-01-05"),
        ("2025-01-05T10:30:00", "2025-01-05"),
        ("2025/1/5", "2025-01-05"),
        ("January 5, 2025", "2025-01-05"),
        ("5 Jan 2025", "2025-01-05"),
        ("15/01/2025", "2025-01-15"),
        ("5-1-25", "2025-01-05"),
        ("31-12-24", "2024-12-31"),
    ],
)
def test_recognized_dates_become_iso(raw: str, expected: str) -> None:
    assert normalize_date(raw) == expected


@pytest.mark.parametrize("raw", ["Week 1", "Foo-25", "12/2025", "1/2/x"])
def test_unrecognized_values_pass_through(raw: str) -> None:
    assert normalize_date(raw) == raw


def test_empty_value_stays_empty() -> None:
    assert normalize_date("") == ""
