"""
Discover the tabs of a shared Google Sheets document from CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import re

from adsheets.domain.sheets import TabSelection
from adsheets.mappers.type_detector import classify_tab_type
from adsheets.services.sheet_ingestion_service import SheetIngestionService


def _platform_slug(tab_name: str) -> str:
    return re.sub(r"\W+", "_", tab_name.strip().lower()).strip("_") or "sheet"


def main() -> int:
    parser = argparse.ArgumentParser(description="List the tabs of a published Google Sheet.")
    parser.add_argument("url", help="Google Sheets document URL.")
    parser.add_argument(
        "--preview",
        dest="preview",
        action="store_true",
        help="Include the first rows of each tab.",
    )
    parser.add_argument(
        "--records",
        dest="records",
        action="store_true",
        help="Also ingest every tab and print its canonical records.",
    )
    parser.add_argument(
        "--platform",
        dest="platform",
        default=None,
        help="Platform tag for ingested records (defaults to a slug of each tab name).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        help="Logging level for discovery events.",
    )
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    service = SheetIngestionService()
    result = service.validate_sheet_url(args.url)
    if not result.valid:
        print(json.dumps({"valid": False, "error": result.error}, indent=2))
        return 1

    tabs = []
    for tab in result.tabs:
        entry = {
            "name": tab.name,
            "gid": tab.gid,
            "row_count": tab.row_count,
            "headers": tab.headers,
            "data_type": classify_tab_type(tab.headers).value,
        }
        if args.preview:
            preview = service.fetch_sheet_preview(result.document_id, tab.name, tab.gid)
            entry["preview"] = {"headers": preview.headers, "rows": preview.rows}
        tabs.append(entry)

    payload = {"valid": True, "document_id": result.document_id, "tabs": tabs}

    if args.records:
        selections = [
            TabSelection(
                name=tab.name,
                platform=args.platform or _platform_slug(tab.name),
                gid=tab.gid,
            )
            for tab in result.tabs
        ]
        ingested = service.fetch_data_from_source(result.document_id, selections)
        payload["records"] = [record.to_dict() for record in ingested.records]
        payload["failed_tabs"] = ingested.failed_tabs
        payload["dropped_rows"] = ingested.dropped_rows

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
