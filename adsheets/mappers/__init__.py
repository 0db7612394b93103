"""
Column mapping, value normalization and tab classification.
"""

from adsheets.mappers.ads_normalizer import AdsRecordNormalizer, coerce_number, normalize_rows
from adsheets.mappers.column_mapping import (
    CANONICAL_COLUMN_ALIASES,
    COLUMN_MAPPINGS,
    normalize_column_name,
)
from adsheets.mappers.date_normalizer import normalize_date
from adsheets.mappers.type_detector import classify_tab_type

__all__ = [
    "AdsRecordNormalizer",
    "CANONICAL_COLUMN_ALIASES",
    "COLUMN_MAPPINGS",
    "classify_tab_type",
    "coerce_number",
    "normalize_column_name",
    "normalize_date",
    "normalize_rows",
]
