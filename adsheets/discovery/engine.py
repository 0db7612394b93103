"""
Tab discovery engine.

Runs the strategy chain until one strategy finds tabs, falls back to gid
probing and then to the default tab, and finally hydrates row counts and
headers. Every fetch is sequential; any single failure only removes that
strategy or tab from consideration.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from adsheets.config import TabDiscoverySettings, get_tab_discovery_settings
from adsheets.connectors.base import DocumentFetcher
from adsheets.discovery.base import ListingPages, TabDiscoveryStrategy, dedupe_tabs
from adsheets.discovery.strategies import default_strategies
from adsheets.domain.sheets import ParsedSheet, TabDescriptor
from adsheets.logging_utils import log_event
from adsheets.parsing.sheet_rows import parse_sheet

logger = logging.getLogger(__name__)

DEFAULT_TAB_NAME = "Sheet1"
DEFAULT_TAB_GID = "0"


def fetch_parsed_tab(
    fetcher: DocumentFetcher,
    document_id: str,
    tab_name: str | None = None,
    gid: str | None = None,
) -> ParsedSheet:
    """
    Fetch one tab export and parse it.
    """

    text = fetcher.fetch_tab_data(document_id, tab_name, gid)
    return parse_sheet(text)


class TabDiscoveryEngine:
    """
    Layered, short-circuiting tab discovery for one document at a time.
    """

    def __init__(
        self,
        *,
        fetcher: DocumentFetcher,
        strategies: Sequence[TabDiscoveryStrategy] | None = None,
        settings: TabDiscoverySettings | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._strategies = list(strategies) if strategies is not None else default_strategies()
        self._settings = settings or get_tab_discovery_settings()

    def discover_tabs(self, document_id: str) -> list[TabDescriptor]:
        """
        Return the document's tabs, deduplicated by gid.
        """

        pages = ListingPages(fetcher=self._fetcher, document_id=document_id)
        tabs = self._run_strategies(document_id, pages)
        source = "strategy"

        if not tabs:
            tabs = self._probe_gids(document_id)
            source = "probe"
        if not tabs:
            tabs = self._default_tab(document_id)
            source = "default"

        if self._settings.hydrate_tabs:
            self._hydrate(document_id, tabs)

        log_event(
            logger,
            logging.INFO,
            "discovery_completed",
            document_id=document_id,
            source=source,
            tab_count=len(tabs),
            tabs=[f"{tab.name} (gid:{tab.gid})" for tab in tabs],
            views_fetched=[view.value for view in pages.fetched_views],
        )
        return tabs

    def _run_strategies(self, document_id: str, pages: ListingPages) -> list[TabDescriptor]:
        for strategy in self._strategies:
            try:
                found = dedupe_tabs(strategy.discover(document_id, pages))
            except Exception as exc:
                log_event(
                    logger,
                    logging.WARNING,
                    "strategy_failed",
                    document_id=document_id,
                    strategy=strategy.name,
                    error=str(exc),
                )
                continue

            if found:
                log_event(
                    logger,
                    logging.INFO,
                    "strategy_matched",
                    document_id=document_id,
                    strategy=strategy.name,
                    tab_count=len(found),
                )
                return found
            log_event(
                logger,
                logging.DEBUG,
                "strategy_empty",
                document_id=document_id,
                strategy=strategy.name,
            )
        return []

    def _probe_gids(self, document_id: str) -> list[TabDescriptor]:
        tabs: list[TabDescriptor] = []
        for gid_number in range(self._settings.probe_max_gid + 1):
            gid = str(gid_number)
            try:
                parsed = fetch_parsed_tab(self._fetcher, document_id, None, gid)
            except Exception as exc:
                log_event(
                    logger,
                    logging.DEBUG,
                    "probe_miss",
                    document_id=document_id,
                    gid=gid,
                    error=str(exc),
                )
                continue
            if parsed.is_empty:
                continue

            tabs.append(
                TabDescriptor(
                    name=f"Sheet {len(tabs) + 1}",
                    gid=gid,
                    row_count=len(parsed.rows),
                    headers=list(parsed.headers),
                )
            )
            log_event(
                logger,
                logging.INFO,
                "probe_hit",
                document_id=document_id,
                gid=gid,
                row_count=len(parsed.rows),
            )
        return tabs

    def _default_tab(self, document_id: str) -> list[TabDescriptor]:
        try:
            parsed = fetch_parsed_tab(self._fetcher, document_id)
        except Exception as exc:
            log_event(
                logger,
                logging.WARNING,
                "default_tab_failed",
                document_id=document_id,
                error=str(exc),
            )
            return []
        if parsed.is_empty:
            return []
        return [
            TabDescriptor(
                name=DEFAULT_TAB_NAME,
                gid=DEFAULT_TAB_GID,
                row_count=len(parsed.rows),
                headers=list(parsed.headers),
            )
        ]

    def _hydrate(self, document_id: str, tabs: list[TabDescriptor]) -> None:
        for tab in tabs:
            if tab.is_hydrated:
                continue
            try:
                parsed = fetch_parsed_tab(self._fetcher, document_id, tab.name, tab.gid)
            except Exception as exc:
                log_event(
                    logger,
                    logging.WARNING,
                    "tab_hydration_failed",
                    document_id=document_id,
                    tab=tab.name,
                    gid=tab.gid,
                    error=str(exc),
                )
                continue

            tab.row_count = len(parsed.rows)
            if parsed.rows:
                tab.headers = list(parsed.headers)
            log_event(
                logger,
                logging.INFO,
                "tab_hydrated",
                document_id=document_id,
                tab=tab.name,
                gid=tab.gid,
                row_count=tab.row_count,
                column_count=len(tab.headers),
            )
