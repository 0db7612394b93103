"""
Concrete tab discovery strategies, in default priority order.

The public views of a Google Sheets document are undocumented and change
with how the document was shared, so each strategy targets one known shape.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable

from bs4 import BeautifulSoup

from adsheets.connectors.base import ListingView
from adsheets.discovery.base import (
    ListingPages,
    PatternStrategy,
    TabCollector,
    TabDiscoveryStrategy,
    TabPattern,
)
from adsheets.domain.sheets import TabDescriptor
from adsheets.logging_utils import log_event

logger = logging.getLogger(__name__)

_SHEET_BUTTON_ID = re.compile(r"^sheet-button-(\d+)$")
_GID_IN_URL = re.compile(r"gid=(\d+)")


class EmbeddedScriptStrategy(PatternStrategy):
    """
    ``htmlembed`` pages build their tab bar from script calls like
    ``items.push({name: "Sales", pageUrl: "...gid=123..."})``.
    """

    name = "embedded_script"
    views = (ListingView.HTMLEMBED,)
    patterns = (
        TabPattern(re.compile(r'items\.push\(\{name:\s*"(?P<name>[^"]+)"[^}]*gid=(?P<gid>\d+)')),
        TabPattern(re.compile(r'name:\s*"(?P<name>[^"]+)"[^}]*gid:\s*"(?P<gid>\d+)"')),
    )


class SheetButtonStrategy(TabDiscoveryStrategy):
    """
    ``pubhtml`` tab buttons: ``<li id="sheet-button-123"><a>Name</a></li>``.
    """

    name = "sheet_button"
    view = ListingView.PUBHTML

    def discover(self, document_id: str, pages: ListingPages) -> list[TabDescriptor]:
        page = pages.get(self.view)
        if not page:
            return []

        soup = BeautifulSoup(page, "html.parser")
        collector = TabCollector()
        for node in soup.select('[id^="sheet-button-"]'):
            match = _SHEET_BUTTON_ID.match(str(node.get("id", "")))
            if match is None:
                continue
            anchor = node.find("a")
            label = anchor.get_text(" ", strip=True) if anchor is not None else node.get_text(" ", strip=True)
            collector.add(name=label, gid=match.group(1))
        return collector.tabs


class SheetMenuStrategy(PatternStrategy):
    """
    Alternate ``pubhtml`` listings: ``switchToSheet`` handlers, ``data-id``
    menu items and ``sheet-menu-button`` elements.
    """

    name = "sheet_menu"
    views = (ListingView.PUBHTML,)
    patterns = (
        TabPattern(
            re.compile(
                r"switchToSheet\(['\"](?P<gid>\d+)['\"]\)[^>]*>(?P<name>[^<]+)<",
                re.IGNORECASE,
            )
        ),
        TabPattern(
            re.compile(
                r'data-id="(?P<gid>\d+)"[^>]*>[^<]*<a[^>]*>(?P<name>[^<]+)</a>',
                re.IGNORECASE,
            )
        ),
        TabPattern(
            re.compile(
                r"onclick=\"[^\"]*switchToSheet\(['\"]?(?P<gid>\d+)['\"]?\)[^\"]*\"[^>]*>(?P<name>[^<]+)<",
                re.IGNORECASE,
            )
        ),
        TabPattern(
            re.compile(
                r'class="[^"]*sheet-menu-button[^"]*"[^>]*data-sheetid="(?P<gid>\d+)"[^>]*>(?P<name>[^<]*)<',
                re.IGNORECASE,
            )
        ),
    )


class GidAnchorStrategy(PatternStrategy):
    """
    Any anchor whose target carries ``gid=N`` followed by short link text.
    """

    name = "gid_anchor"
    views = (ListingView.PUBHTML, ListingView.PUBLISHED_PUBHTML)
    patterns = (
        TabPattern(
            re.compile(r"#gid=(?P<gid>\d+)[^>]*>(?P<name>[^<]{1,100})<", re.IGNORECASE),
            max_name_length=100,
        ),
        TabPattern(
            re.compile(r"gid=(?P<gid>\d+)[^>]*>(?P<name>[^<]+)<", re.IGNORECASE),
            max_name_length=100,
        ),
    )


class EditPageStrategy(PatternStrategy):
    """
    Bootstrap data in the editor page: ``["Name",123,0,0,0,0,0]`` arrays and
    ``{"name":"Name",...,"sheetId":123}`` objects.
    """

    name = "edit_page"
    views = (ListingView.EDIT, ListingView.PUBHTML)
    patterns = (
        TabPattern(
            re.compile(
                r'\["(?P<name>[^"]{1,100})",\s*(?P<gid>\d+),\s*\d+,\s*\d+,\s*\d+,\s*\d+,\s*\d+\]'
            ),
            reject_backslash=True,
        ),
        TabPattern(re.compile(r'"name":\s*"(?P<name>[^"]+)"[^}]*"sheetId":\s*(?P<gid>\d+)')),
    )


class LegacyFeedStrategy(TabDiscoveryStrategy):
    """
    Legacy worksheets Atom feed: one ``<entry>`` per tab, the gid carried by
    one of its link hrefs.
    """

    name = "legacy_feed"
    view = ListingView.WORKSHEETS_FEED

    def discover(self, document_id: str, pages: ListingPages) -> list[TabDescriptor]:
        page = pages.get(self.view)
        if not page:
            return []

        try:
            root = ET.fromstring(page)
        except ET.ParseError as exc:
            log_event(
                logger,
                logging.INFO,
                "legacy_feed_unparseable",
                document_id=document_id,
                error=str(exc),
            )
            return []

        collector = TabCollector()
        for entry in _children(root, "entry"):
            title = _child_text(entry, "title")
            gid = _entry_gid(entry)
            if title and gid is not None:
                collector.add(name=title, gid=gid)
        return collector.tabs


def default_strategies() -> list[TabDiscoveryStrategy]:
    return [
        EmbeddedScriptStrategy(),
        SheetButtonStrategy(),
        SheetMenuStrategy(),
        GidAnchorStrategy(),
        EditPageStrategy(),
        LegacyFeedStrategy(),
    ]


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(node: ET.Element, local_name: str) -> Iterable[ET.Element]:
    return (child for child in node.iter() if _local_name(child.tag) == local_name)


def _child_text(node: ET.Element, local_name: str) -> str | None:
    for child in list(node):
        if _local_name(child.tag) == local_name:
            return child.text
    return None


def _entry_gid(entry: ET.Element) -> str | None:
    for child in list(entry):
        if _local_name(child.tag) != "link":
            continue
        match = _GID_IN_URL.search(child.get("href", ""))
        if match is not None:
            return match.group(1)
    return None
