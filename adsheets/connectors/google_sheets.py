"""
adsheets/connectors/google_sheets.py

requests-based fetcher for public Google Sheets documents.
"""

from __future__ import annotations

import logging
import re
import time
from urllib.parse import quote

import requests

from adsheets.config import DEFAULT_SHEETS_BASE_URL, SheetsHTTPSettings, get_sheets_http_settings
from adsheets.connectors.base import DocumentFetcher, DocumentFetchError, ListingView
from adsheets.logging_utils import log_event

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
LEGACY_FEED_BASE_URL = "https://spreadsheets.google.com/feeds"
DEFAULT_TAB_NAME = "Sheet1"

_DOCUMENT_ID_PATTERN = re.compile(r"/spreadsheets/d/([a-zA-Z0-9-_]+)")


def extract_document_id(url: str) -> str | None:
    """
    Extract the document id from a Google Sheets URL.
    """

    match = _DOCUMENT_ID_PATTERN.search(url or "")
    return match.group(1) if match else None


def build_csv_export_url(
    document_id: str,
    tab_name: str | None = None,
    gid: str | None = None,
    *,
    base_url: str = DEFAULT_SHEETS_BASE_URL,
) -> str:
    """
    Build the CSV export URL for a tab.

    A gid wins; a named tab other than the default uses the gviz endpoint;
    otherwise the document's default tab is exported.
    """

    root = f"{base_url.rstrip('/')}/d/{document_id}"
    if gid:
        return f"{root}/export?format=csv&gid={gid}"
    if tab_name and tab_name != DEFAULT_TAB_NAME:
        return f"{root}/gviz/tq?tqx=out:csv&sheet={quote(tab_name, safe='')}"
    return f"{root}/export?format=csv"


def build_listing_url(
    document_id: str,
    view: ListingView,
    *,
    base_url: str = DEFAULT_SHEETS_BASE_URL,
) -> str:
    root = base_url.rstrip("/")
    if view is ListingView.HTMLEMBED:
        return f"{root}/d/{document_id}/htmlembed"
    if view is ListingView.PUBHTML:
        return f"{root}/d/{document_id}/pubhtml"
    if view is ListingView.PUBLISHED_PUBHTML:
        return f"{root}/d/e/{document_id}/pubhtml"
    if view is ListingView.EDIT:
        return f"{root}/d/{document_id}/edit"
    if view is ListingView.WORKSHEETS_FEED:
        return f"{LEGACY_FEED_BASE_URL}/worksheets/{document_id}/public/basic"
    raise ValueError(f"Unsupported listing view: {view!r}")


class GoogleSheetsFetcher(DocumentFetcher):
    """
    Fetch document views and CSV exports over HTTP.
    """

    def __init__(
        self,
        *,
        settings: SheetsHTTPSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._settings = settings or get_sheets_http_settings()
        self._session = session or requests.Session()
        self._headers = {"User-Agent": self._settings.user_agent}
        self._min_request_interval_seconds = (
            1.0 / self._settings.rate_limit_per_second
            if self._settings.rate_limit_per_second > 0
            else 0.0
        )
        self._last_request_monotonic: float = 0.0

    def fetch_listing(self, document_id: str, view: ListingView) -> str:
        url = build_listing_url(document_id, view, base_url=self._settings.base_url)
        response = self._request(url)
        return self._require_text(response, url)

    def fetch_tab_data(
        self,
        document_id: str,
        tab_name: str | None = None,
        gid: str | None = None,
    ) -> str:
        url = build_csv_export_url(
            document_id,
            tab_name,
            gid,
            base_url=self._settings.base_url,
        )
        response = self._request(url)
        content_type = response.headers.get("Content-Type", "").lower()
        if "text/html" in content_type:
            # Private documents redirect to a sign-in page instead of CSV.
            raise DocumentFetchError(f"Expected CSV but received HTML from {url}.")
        return self._require_text(response, url)

    def _request(self, url: str) -> requests.Response:
        """
        GET with optional spacing between requests and exponential backoff.
        """

        last_error: Exception | None = None
        for attempt in range(self._settings.max_retries + 1):
            self._apply_rate_limit()
            try:
                response = self._session.get(
                    url,
                    headers=self._headers,
                    timeout=self._settings.timeout_seconds,
                    allow_redirects=True,
                )
                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise requests.HTTPError(
                        f"Retryable HTTP status code: {response.status_code}",
                        response=response,
                    )
                response.raise_for_status()
                return response
            except requests.HTTPError as exc:
                last_error = exc
                status_code = exc.response.status_code if exc.response is not None else None
                if status_code not in RETRYABLE_STATUS_CODES:
                    log_event(
                        logger,
                        logging.INFO,
                        "sheet_request_failed",
                        url=url,
                        status_code=status_code,
                    )
                    raise DocumentFetchError(f"HTTP {status_code} from {url}.") from exc
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_error = exc
            except requests.RequestException as exc:
                log_event(
                    logger,
                    logging.INFO,
                    "sheet_request_failed",
                    url=url,
                    error_type=type(exc).__name__,
                )
                raise DocumentFetchError(f"Request to {url} failed: {exc}") from exc

            if attempt >= self._settings.max_retries:
                break

            backoff_seconds = self._settings.backoff_initial_seconds * (
                self._settings.backoff_multiplier**attempt
            )
            log_event(
                logger,
                logging.WARNING,
                "sheet_request_retry",
                url=url,
                attempt=attempt + 1,
                max_retries=self._settings.max_retries,
                wait_seconds=round(backoff_seconds, 2),
            )
            time.sleep(backoff_seconds)

        raise DocumentFetchError(f"Request to {url} failed: {last_error}") from last_error

    def _apply_rate_limit(self) -> None:
        if self._min_request_interval_seconds <= 0:
            return

        now = time.monotonic()
        elapsed = now - self._last_request_monotonic
        remaining = self._min_request_interval_seconds - elapsed
        if remaining > 0:
            time.sleep(remaining)
        self._last_request_monotonic = time.monotonic()

    @staticmethod
    def _require_text(response: requests.Response, url: str) -> str:
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = "utf-8"
        text = response.text.lstrip("\ufeff")
        if not text.strip():
            raise DocumentFetchError(f"Empty payload from {url}.")
        return text
