"""
adsheets/services/sheet_ingestion_service.py

Entry points that tie the fetcher, discovery engine, parser and normalizer
together for one shared spreadsheet document.

Only ``validate_sheet_url`` reports failure to its caller, as a
``SheetValidationResult``. Multi-tab ingestion soft-fails per tab: a tab
that cannot be fetched is logged, listed in ``failed_tabs`` and skipped,
and the remaining tabs are still ingested.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import lru_cache

from adsheets.connectors.base import DocumentFetcher
from adsheets.connectors.google_sheets import GoogleSheetsFetcher, extract_document_id
from adsheets.discovery.engine import TabDiscoveryEngine, fetch_parsed_tab
from adsheets.domain.ads_record import CanonicalAdsRecord, FieldIssue
from adsheets.domain.sheets import (
    SheetPreview,
    SheetRow,
    SheetValidationResult,
    TabSelection,
)
from adsheets.logging_utils import log_event
from adsheets.mappers.ads_normalizer import AdsRecordNormalizer

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "Invalid Google Sheets URL"
NO_TABS_MESSAGE = "Sheet is empty or not accessible. Make sure it's published to web."
INACCESSIBLE_MESSAGE = (
    "Could not access sheet. Make sure it's publicly accessible "
    "(Publish to web or share with anyone with link)."
)
DEFAULT_PREVIEW_LIMIT = 5


@dataclass
class SourceFetchResult:
    """
    Records ingested from a document's configured tabs plus per-tab failures.
    """

    records: list[CanonicalAdsRecord] = field(default_factory=list)
    failed_tabs: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)
    dropped_rows: int = 0
    field_issues: list[FieldIssue] = field(default_factory=list)


class SheetIngestionService:
    """
    Validates sheet references and pulls canonical records out of their tabs.
    """

    def __init__(
        self,
        *,
        fetcher: DocumentFetcher | None = None,
        engine: TabDiscoveryEngine | None = None,
        normalizer: AdsRecordNormalizer | None = None,
    ) -> None:
        self._fetcher = fetcher or GoogleSheetsFetcher()
        self._engine = engine or TabDiscoveryEngine(fetcher=self._fetcher)
        self._normalizer = normalizer or AdsRecordNormalizer()

    def validate_sheet_url(self, url: str) -> SheetValidationResult:
        """
        Resolve a sheet URL to its document id and discovered tabs.
        """

        document_id = extract_document_id(url)
        if not document_id:
            return SheetValidationResult(valid=False, document_id=None, error=INVALID_URL_MESSAGE)

        try:
            tabs = self._engine.discover_tabs(document_id)
        except Exception as exc:
            log_event(
                logger,
                logging.WARNING,
                "sheet_validation_failed",
                document_id=document_id,
                error=str(exc),
            )
            return SheetValidationResult(
                valid=False,
                document_id=document_id,
                error=INACCESSIBLE_MESSAGE,
            )

        if not tabs:
            return SheetValidationResult(valid=False, document_id=document_id, error=NO_TABS_MESSAGE)
        return SheetValidationResult(valid=True, document_id=document_id, tabs=tabs)

    def fetch_tab_rows(
        self,
        document_id: str,
        tab_name: str | None = None,
        gid: str | None = None,
    ) -> list[SheetRow]:
        """
        Fetch and parse one tab. Fetch failures propagate as ``DocumentFetchError``.
        """

        return fetch_parsed_tab(self._fetcher, document_id, tab_name, gid).rows

    def fetch_data_from_source(
        self,
        document_id: str,
        selections: Sequence[TabSelection],
    ) -> SourceFetchResult:
        """
        Ingest every selected tab in order, normalizing rows under each
        tab's platform tag.
        """

        result = SourceFetchResult()
        generated_at_ms = int(time.time() * 1000)
        row_offset = 0
        for selection in selections:
            try:
                rows = self.fetch_tab_rows(document_id, selection.name, selection.gid)
            except Exception as exc:
                result.failed_tabs.append(selection.name)
                result.errors[selection.name] = str(exc)
                log_event(
                    logger,
                    logging.WARNING,
                    "tab_ingestion_failed",
                    document_id=document_id,
                    tab=selection.name,
                    gid=selection.gid,
                    error=str(exc),
                )
                continue

            batch = self._normalizer.normalize(
                rows,
                selection.platform,
                generated_at_ms=generated_at_ms,
                row_offset=row_offset,
            )
            row_offset += len(rows)
            result.records.extend(batch.records)
            result.dropped_rows += batch.dropped_rows
            result.field_issues.extend(batch.field_issues)
            log_event(
                logger,
                logging.INFO,
                "tab_ingested",
                document_id=document_id,
                tab=selection.name,
                platform=selection.platform,
                rows=len(rows),
                records=len(batch.records),
                dropped_rows=batch.dropped_rows,
            )

        log_event(
            logger,
            logging.INFO,
            "source_ingestion_completed",
            document_id=document_id,
            tab_count=len(selections),
            record_count=len(result.records),
            failed_tabs=result.failed_tabs,
        )
        return result

    def fetch_sheet_preview(
        self,
        document_id: str,
        tab_name: str | None = None,
        gid: str | None = None,
        limit: int = DEFAULT_PREVIEW_LIMIT,
    ) -> SheetPreview:
        """
        Return headers and the first ``limit`` rows as positional values.

        Any failure yields an empty preview.
        """

        try:
            rows = self.fetch_tab_rows(document_id, tab_name, gid)
        except Exception as exc:
            log_event(
                logger,
                logging.WARNING,
                "sheet_preview_failed",
                document_id=document_id,
                tab=tab_name,
                gid=gid,
                error=str(exc),
            )
            return SheetPreview()

        if not rows:
            return SheetPreview()

        headers = list(rows[0])
        preview_rows = [[row.get(header, "") for header in headers] for row in rows[:limit]]
        return SheetPreview(headers=headers, rows=preview_rows)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_sheet_ingestion_service() -> SheetIngestionService:
    """
    Build and cache the ingestion service with env-driven settings.
    """

    return SheetIngestionService()
