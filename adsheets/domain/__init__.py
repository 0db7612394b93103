"""
Domain models shared across ingestion, discovery and aggregation.
"""

from adsheets.domain.ads_record import CanonicalAdsRecord, FieldIssue, NormalizationBatch
from adsheets.domain.metrics import (
    DailyMetric,
    DerivedMetrics,
    MonthlyBucket,
    PlatformSummary,
    WeeklyBucket,
)
from adsheets.domain.sheets import (
    ParsedSheet,
    SheetPreview,
    SheetRow,
    SheetValidationResult,
    SheetValue,
    TabDataType,
    TabDescriptor,
    TabSelection,
)

__all__ = [
    "CanonicalAdsRecord",
    "DailyMetric",
    "DerivedMetrics",
    "FieldIssue",
    "MonthlyBucket",
    "NormalizationBatch",
    "ParsedSheet",
    "PlatformSummary",
    "SheetPreview",
    "SheetRow",
    "SheetValidationResult",
    "SheetValue",
    "TabDataType",
    "TabDescriptor",
    "TabSelection",
    "WeeklyBucket",
]
