"""
Base abstractions for tab discovery strategies.
"""

from __future__ import annotations

import html
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from adsheets.connectors.base import DocumentFetcher, ListingView
from adsheets.domain.sheets import TabDescriptor
from adsheets.logging_utils import log_event

logger = logging.getLogger(__name__)


class ListingPages:
    """
    Per-run memo of document views so strategies sharing a view fetch it once.

    A failed fetch is remembered as ``None``.
    """

    def __init__(self, *, fetcher: DocumentFetcher, document_id: str) -> None:
        self._fetcher = fetcher
        self._document_id = document_id
        self._pages: dict[ListingView, str | None] = {}

    def get(self, view: ListingView) -> str | None:
        if view in self._pages:
            return self._pages[view]

        try:
            page = self._fetcher.fetch_listing(self._document_id, view)
            log_event(
                logger,
                logging.DEBUG,
                "listing_fetched",
                document_id=self._document_id,
                view=view.value,
                chars=len(page),
            )
        except Exception as exc:
            page = None
            log_event(
                logger,
                logging.INFO,
                "listing_fetch_failed",
                document_id=self._document_id,
                view=view.value,
                error=str(exc),
            )
        self._pages[view] = page
        return page

    @property
    def fetched_views(self) -> list[ListingView]:
        return list(self._pages)


class TabCollector:
    """
    Accumulates tabs in discovery order, keeping the first name per gid.
    """

    def __init__(self) -> None:
        self._tabs: list[TabDescriptor] = []
        self._seen_gids: set[str] = set()

    def add(self, *, name: str, gid: str) -> bool:
        cleaned = clean_tab_name(name)
        if not cleaned or gid in self._seen_gids:
            return False
        self._seen_gids.add(gid)
        self._tabs.append(TabDescriptor(name=cleaned, gid=gid))
        return True

    @property
    def tabs(self) -> list[TabDescriptor]:
        return list(self._tabs)


def clean_tab_name(raw: str) -> str:
    return html.unescape(raw.replace("\\/", "/")).strip()


def dedupe_tabs(tabs: Iterable[TabDescriptor]) -> list[TabDescriptor]:
    seen: set[str] = set()
    deduped: list[TabDescriptor] = []
    for tab in tabs:
        if tab.gid in seen:
            continue
        seen.add(tab.gid)
        deduped.append(tab)
    return deduped


class TabDiscoveryStrategy(ABC):
    """
    One heuristic for listing a document's tabs.

    Strategies are interchangeable: each returns the tabs it can see, or an
    empty list when its document view is unavailable or unrecognized.
    """

    name: str = "strategy"

    @abstractmethod
    def discover(self, document_id: str, pages: ListingPages) -> list[TabDescriptor]:
        """
        Return tabs found by this strategy, in document order.
        """


@dataclass(frozen=True)
class TabPattern:
    """
    Regex over raw page text with named ``name`` and ``gid`` groups.
    """

    regex: re.Pattern[str]
    max_name_length: int | None = None
    reject_backslash: bool = False

    def accepts(self, name: str) -> bool:
        if self.reject_backslash and "\\" in name:
            return False
        if self.max_name_length is not None and len(name.strip()) >= self.max_name_length:
            return False
        return True


class PatternStrategy(TabDiscoveryStrategy):
    """
    Scans views in order with an ordered list of patterns.

    The first (view, pattern) pair that yields any tab wins.
    """

    views: Sequence[ListingView] = ()
    patterns: Sequence[TabPattern] = ()

    def discover(self, document_id: str, pages: ListingPages) -> list[TabDescriptor]:
        for view in self.views:
            page = pages.get(view)
            if not page:
                continue
            for tabs in self._extract_each(page):
                if tabs:
                    return tabs
        return []

    def _extract_each(self, page: str) -> Iterable[list[TabDescriptor]]:
        for pattern in self.patterns:
            collector = TabCollector()
            for match in pattern.regex.finditer(page):
                name = match.group("name")
                if not pattern.accepts(name):
                    continue
                collector.add(name=name, gid=match.group("gid"))
            yield collector.tabs
