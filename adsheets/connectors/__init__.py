"""
Document fetchers.
"""

from adsheets.connectors.base import DocumentFetcher, DocumentFetchError, ListingView
from adsheets.connectors.google_sheets import (
    GoogleSheetsFetcher,
    build_csv_export_url,
    build_listing_url,
    extract_document_id,
)

__all__ = [
    "DocumentFetchError",
    "DocumentFetcher",
    "GoogleSheetsFetcher",
    "ListingView",
    "build_csv_export_url",
    "build_listing_url",
    "extract_document_id",
]
