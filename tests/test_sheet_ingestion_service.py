"""
tests/test_sheet_ingestion_service.py

Pytest unit tests for SheetIngestionService.

The fetcher and discovery engine are mocks; no network access.

Coverage
--------
- URL validation: invalid URL, no tabs, discovery failure, success
- Multi-tab ingestion with per-tab soft failure
- Record ids unique across tabs sharing a platform
- Sheet preview shape, row limit and failure fallback
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from adsheets.connectors.base import DocumentFetcher, DocumentFetchError
from adsheets.discovery.engine import TabDiscoveryEngine
from adsheets.domain.sheets import TabDescriptor, TabSelection
from adsheets.services.sheet_ingestion_service import (
    INACCESSIBLE_MESSAGE,
    INVALID_URL_MESSAGE,
    NO_TABS_MESSAGE,
    SheetIngestionService,
)

SHEET_URL = "https://docs.google.com/spreadsheets/d/doc123/edit#gid=0"
ADS_CSV = "Title Row\n,,\nDate,Spend,Impressions\n2025-01-01,100,1000\n,,\n2025-01-02,200,2000\n"


def _fetch_unless_broken(document_id: str, tab_name: str | None = None, gid: str | None = None) -> str:
    if tab_name == "Broken":
        raise DocumentFetchError("HTTP 400")
    return ADS_CSV


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fetcher() -> MagicMock:
    return MagicMock(spec=DocumentFetcher)


@pytest.fixture()
def engine() -> MagicMock:
    return MagicMock(spec=TabDiscoveryEngine)


@pytest.fixture()
def service(fetcher: MagicMock, engine: MagicMock) -> SheetIngestionService:
    return SheetIngestionService(fetcher=fetcher, engine=engine)


# ---------------------------------------------------------------------------
# validate_sheet_url
# ---------------------------------------------------------------------------


class TestValidateSheetUrl:
    def test_invalid_url(self, service: SheetIngestionService, engine: MagicMock) -> None:
        result = service.validate_sheet_url("https://example.com/not-a-sheet")

        assert result.valid is False
        assert result.document_id is None
        assert result.error == INVALID_URL_MESSAGE
        engine.discover_tabs.assert_not_called()

    def test_no_tabs(self, service: SheetIngestionService, engine: MagicMock) -> None:
        engine.discover_tabs.return_value = []

        result = service.validate_sheet_url(SHEET_URL)

        assert result.valid is False
        assert result.document_id == "doc123"
        assert result.error == NO_TABS_MESSAGE

    def test_discovery_failure(self, service: SheetIngestionService, engine: MagicMock) -> None:
        engine.discover_tabs.side_effect = RuntimeError("boom")

        result = service.validate_sheet_url(SHEET_URL)

        assert result.valid is False
        assert result.error == INACCESSIBLE_MESSAGE

    def test_success(self, service: SheetIngestionService, engine: MagicMock) -> None:
        tabs = [TabDescriptor(name="Ads", gid="0", row_count=2, headers=["Date"])]
        engine.discover_tabs.return_value = tabs

        result = service.validate_sheet_url(SHEET_URL)

        assert result.valid is True
        assert result.tabs == tabs
        assert result.error is None
        engine.discover_tabs.assert_called_once_with("doc123")


# ---------------------------------------------------------------------------
# fetch_data_from_source
# ---------------------------------------------------------------------------


class TestFetchDataFromSource:
    def test_failed_tab_is_skipped(self, service: SheetIngestionService, fetcher: MagicMock) -> None:
        fetcher.fetch_tab_data.side_effect = _fetch_unless_broken
        selections = [
            TabSelection(name="Swiggy Ads", platform="swiggy", gid="0"),
            TabSelection(name="Broken", platform="zomato", gid="5"),
        ]

        result = service.fetch_data_from_source("doc123", selections)

        assert len(result.records) == 2
        assert {record.platform for record in result.records} == {"swiggy"}
        assert [record.total_budget_burnt for record in result.records] == [100.0, 200.0]
        assert result.failed_tabs == ["Broken"]
        assert "HTTP 400" in result.errors["Broken"]

    def test_records_from_all_tabs_are_concatenated(
        self, service: SheetIngestionService, fetcher: MagicMock
    ) -> None:
        fetcher.fetch_tab_data.return_value = ADS_CSV
        selections = [
            TabSelection(name="A", platform="swiggy"),
            TabSelection(name="B", platform="zomato"),
        ]

        result = service.fetch_data_from_source("doc123", selections)

        assert [record.platform for record in result.records] == ["swiggy", "swiggy", "zomato", "zomato"]
        assert result.failed_tabs == []

    def test_record_ids_are_unique_across_tabs_of_one_platform(
        self, service: SheetIngestionService, fetcher: MagicMock
    ) -> None:
        fetcher.fetch_tab_data.side_effect = _fetch_unless_broken
        selections = [
            TabSelection(name="Week 1", platform="swiggy"),
            TabSelection(name="Broken", platform="swiggy"),
            TabSelection(name="Week 2", platform="swiggy"),
        ]

        result = service.fetch_data_from_source("doc123", selections)

        ids = [record.id for record in result.records]
        assert len(ids) == 4
        assert len(set(ids)) == 4
        assert len({record_id.rsplit("-", 1)[1] for record_id in ids}) == 1

    def test_dropped_rows_are_tallied(self, service: SheetIngestionService, fetcher: MagicMock) -> None:
        fetcher.fetch_tab_data.return_value = "Campaign,Spend,Clicks\n,0,0\nBrand,10,1\n"

        result = service.fetch_data_from_source("doc123", [TabSelection(name="A", platform="swiggy")])

        assert len(result.records) == 1
        assert result.dropped_rows == 1


# ---------------------------------------------------------------------------
# fetch_sheet_preview / fetch_tab_rows
# ---------------------------------------------------------------------------


class TestPreview:
    def test_preview_rows_are_positional(self, service: SheetIngestionService, fetcher: MagicMock) -> None:
        fetcher.fetch_tab_data.return_value = ADS_CSV

        preview = service.fetch_sheet_preview("doc123", "Ads", "0", limit=1)

        assert preview.headers == ["Date", "Spend", "Impressions"]
        assert preview.rows == [["2025-01-01", 100.0, 1000.0]]

    def test_preview_failure_is_empty(self, service: SheetIngestionService, fetcher: MagicMock) -> None:
        fetcher.fetch_tab_data.side_effect = DocumentFetchError("HTTP 403")

        preview = service.fetch_sheet_preview("doc123", "Ads")

        assert preview.headers == []
        assert preview.rows == []

    def test_fetch_tab_rows_propagates_fetch_errors(
        self, service: SheetIngestionService, fetcher: MagicMock
    ) -> None:
        fetcher.fetch_tab_data.side_effect = DocumentFetchError("HTTP 403")

        with pytest.raises(DocumentFetchError):
            service.fetch_tab_rows("doc123", "Ads")

    def test_fetch_tab_rows_passes_tab_identity(
        self, service: SheetIngestionService, fetcher: MagicMock
    ) -> None:
        fetcher.fetch_tab_data.return_value = ADS_CSV

        rows = service.fetch_tab_rows("doc123", "Ads", "9")

        assert len(rows) == 2
        fetcher.fetch_tab_data.assert_called_once_with("doc123", "Ads", "9")
