"""
Service layer: ingestion entry points, aggregation and display formatting.
"""

from adsheets.services.aggregation_service import (
    aggregate_monthly,
    aggregate_weekly,
    calculate_metrics,
    daily_metrics_from_records,
    group_by_platform,
)
from adsheets.services.formatting import format_number, get_date_range
from adsheets.services.sheet_ingestion_service import (
    SheetIngestionService,
    SourceFetchResult,
    get_sheet_ingestion_service,
)

__all__ = [
    "SheetIngestionService",
    "SourceFetchResult",
    "aggregate_monthly",
    "aggregate_weekly",
    "calculate_metrics",
    "daily_metrics_from_records",
    "format_number",
    "get_date_range",
    "get_sheet_ingestion_service",
    "group_by_platform",
]
