"""
Parsing layer for exported sheet text.
"""

from adsheets.parsing.csv_records import parse_csv_records
from adsheets.parsing.sheet_rows import coerce_cell, parse_delimited_text, parse_sheet

__all__ = [
    "coerce_cell",
    "parse_csv_records",
    "parse_delimited_text",
    "parse_sheet",
]
