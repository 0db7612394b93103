"""
adsheets/mappers/ads_normalizer.py

Maps parsed sheet rows onto the canonical ads record shape.

Each raw header is resolved through the synonym table. Core fields are
assigned in header order, so when two synonyms of the same field appear in
one row the right-most column wins. Rows with no positive volume metric
and no campaign label are treated as noise and dropped.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Sequence

from adsheets.domain.ads_record import (
    CORE_NUMERIC_FIELDS,
    CORE_TEXT_FIELDS,
    EXTENSION_FIELDS,
    CanonicalAdsRecord,
    FieldIssue,
    NormalizationBatch,
)
from adsheets.domain.sheets import SheetRow, SheetValue
from adsheets.mappers.column_mapping import normalize_column_name
from adsheets.mappers.date_normalizer import normalize_date

logger = logging.getLogger(__name__)

_NUMERIC_PATTERN = re.compile(r"^-?\d+\.?\d*$")
_NUMERIC_PUNCTUATION = re.compile(r"[₹$,%\s]")


def coerce_number(value: SheetValue) -> float | None:
    """
    Return ``value`` as a float, stripping currency, grouping and percent signs.

    Floats pass through unchanged; ``None`` means the text is not numeric.
    """

    if isinstance(value, (int, float)):
        return float(value)
    cleaned = _NUMERIC_PUNCTUATION.sub("", value)
    if cleaned and _NUMERIC_PATTERN.match(cleaned):
        return float(cleaned)
    return None


def as_text(value: SheetValue) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


class AdsRecordNormalizer:
    """
    Builds canonical records for one platform tag at a time.
    """

    def __init__(self, *, keep_unmapped: bool = False) -> None:
        self._keep_unmapped = keep_unmapped

    def normalize(
        self,
        rows: Sequence[SheetRow],
        platform: str,
        *,
        generated_at_ms: int | None = None,
        row_offset: int = 0,
    ) -> NormalizationBatch:
        """
        Normalize rows and report dropped rows plus uncoercible values.

        Record ids number rows from ``row_offset``, so batches sharing one
        ``generated_at_ms`` stay unique when offsets do not overlap.
        """

        stamp = generated_at_ms if generated_at_ms is not None else int(time.time() * 1000)
        records: list[CanonicalAdsRecord] = []
        issues: list[FieldIssue] = []
        dropped = 0

        for index, row in enumerate(rows):
            record = self._normalize_row(
                row=row,
                record_id=f"{platform}-{row_offset + index}-{stamp}",
                platform=platform,
                row_index=index,
                issues=issues,
            )
            if record.has_signal():
                records.append(record)
            else:
                dropped += 1

        logger.debug(
            "normalize platform=%r rows=%d kept=%d dropped=%d field_issues=%d",
            platform,
            len(rows),
            len(records),
            dropped,
            len(issues),
        )
        return NormalizationBatch(records=records, dropped_rows=dropped, field_issues=issues)

    def _normalize_row(
        self,
        *,
        row: SheetRow,
        record_id: str,
        platform: str,
        row_index: int,
        issues: list[FieldIssue],
    ) -> CanonicalAdsRecord:
        record = CanonicalAdsRecord(id=record_id, platform=platform)

        for column, value in row.items():
            field_name = normalize_column_name(column)
            if field_name in CORE_TEXT_FIELDS:
                setattr(record, field_name, as_text(value))
            elif field_name in CORE_NUMERIC_FIELDS:
                number = coerce_number(value)
                if number is None:
                    if as_text(value):
                        issues.append(
                            FieldIssue(
                                row_index=row_index,
                                column=column,
                                canonical_field=field_name,
                                value=as_text(value),
                            )
                        )
                    continue
                setattr(record, field_name, number)
            elif field_name in EXTENSION_FIELDS:
                if as_text(value):
                    record.extensions[field_name] = value
            elif self._keep_unmapped and as_text(value):
                record.extensions[field_name] = value

        if record.metrics_date:
            record.metrics_date = normalize_date(record.metrics_date)
        return record


def normalize_rows(
    rows: Sequence[SheetRow],
    platform: str,
) -> list[CanonicalAdsRecord]:
    return AdsRecordNormalizer().normalize(rows, platform).records
