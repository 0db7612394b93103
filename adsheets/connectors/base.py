"""
adsheets/connectors/base.py

Document fetcher interface the ingestion core calls into.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class DocumentFetchError(RuntimeError):
    """
    Raised when a document view or tab export cannot be fetched.
    """


class ListingView(str, Enum):
    """
    Representations of a document that may list its tabs.
    """

    HTMLEMBED = "htmlembed"
    PUBHTML = "pubhtml"
    PUBLISHED_PUBHTML = "published_pubhtml"
    EDIT = "edit"
    WORKSHEETS_FEED = "worksheets_feed"


class DocumentFetcher(ABC):
    """
    Transport for raw document text. Implementations raise
    :class:`DocumentFetchError` on network/HTTP failure or an empty payload.
    """

    @abstractmethod
    def fetch_listing(self, document_id: str, view: ListingView) -> str:
        """
        Return the raw HTML/JS/XML of one document view.
        """

    @abstractmethod
    def fetch_tab_data(
        self,
        document_id: str,
        tab_name: str | None = None,
        gid: str | None = None,
    ) -> str:
        """
        Return one tab's content as delimited text.
        """
