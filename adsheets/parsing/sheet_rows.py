"""
adsheets/parsing/sheet_rows.py

Turns exported tab text into typed rows keyed by the tab's header row.

Exports often start with title or spacer rows, so the header is the first
record (within the first ``HEADER_SCAN_LIMIT``) that has at least
``MIN_HEADER_FIELDS`` non-blank fields. Everything before it is noise.
"""

from __future__ import annotations

import logging
import re

from adsheets.domain.sheets import ParsedSheet, SheetRow, SheetValue
from adsheets.parsing.csv_records import RawRecord, parse_csv_records

logger = logging.getLogger(__name__)

HEADER_SCAN_LIMIT = 10
MIN_HEADER_FIELDS = 3
MIN_DATA_FIELDS = 2

NUMERIC_PATTERN = re.compile(r"^-?\d+\.?\d*$")
CURRENCY_PUNCTUATION = re.compile(r"[₹$,]")


def is_date_header(header: str) -> bool:
    """
    Date-like columns keep their text so date normalization sees the original.
    """

    lowered = header.lower()
    return "date" in lowered or lowered in {"month", "day"}


def coerce_cell(value: str) -> SheetValue:
    """
    Return a float for currency/number-looking text, else the value unchanged.
    """

    cleaned = CURRENCY_PUNCTUATION.sub("", value.strip())
    if cleaned and NUMERIC_PATTERN.match(cleaned):
        return float(cleaned)
    return value


def find_header_index(records: list[RawRecord]) -> int | None:
    for index, record in enumerate(records[:HEADER_SCAN_LIMIT]):
        if _non_blank_count(record) >= MIN_HEADER_FIELDS:
            return index
    return None


def build_row(headers: list[str], values: RawRecord) -> SheetRow:
    row: SheetRow = {}
    for position, header in enumerate(headers):
        if not header.strip():
            continue
        value = values[position] if position < len(values) else ""
        if is_date_header(header):
            row[header] = value.strip()
        else:
            row[header] = coerce_cell(value)
    return row


def parse_sheet(text: str) -> ParsedSheet:
    """
    Parse exported tab text into header + typed rows.

    Returns an empty ``ParsedSheet`` when there are fewer than two records
    or no header row is found; never raises for malformed input.
    """

    records = parse_csv_records(text)
    if len(records) < 2:
        logger.debug("parse_sheet: %d records, nothing to parse", len(records))
        return ParsedSheet()

    header_index = find_header_index(records)
    if header_index is None:
        logger.warning(
            "parse_sheet: no header row within first %d records", HEADER_SCAN_LIMIT
        )
        return ParsedSheet()

    headers = records[header_index]
    rows: list[SheetRow] = []
    skipped = 0
    for values in records[header_index + 1 :]:
        if _non_blank_count(values) < MIN_DATA_FIELDS:
            skipped += 1
            continue
        rows.append(build_row(headers, values))

    logger.debug(
        "parse_sheet: header at record %d, %d columns, %d rows, %d skipped",
        header_index,
        len(headers),
        len(rows),
        skipped,
    )
    return ParsedSheet(
        headers=list(dict.fromkeys(header for header in headers if header.strip())),
        rows=rows,
        header_index=header_index,
        skipped_rows=skipped,
    )


def parse_delimited_text(text: str) -> list[SheetRow]:
    return parse_sheet(text).rows


def _non_blank_count(record: RawRecord) -> int:
    return sum(1 for field in record if field.strip())
