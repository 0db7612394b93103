"""
adsheets/mappers/column_mapping.py

Static synonym table mapping sheet column headers to canonical field names.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

CANONICAL_COLUMN_ALIASES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "metrics_date": (
            "date",
            "metrics_date",
            "metrics date",
            "month",
            "ordered_date",
            "report_date",
        ),
        "campaign_name": (
            "campaign",
            "campaign_name",
            "campaign name",
            "product_name",
            "ad_name",
            "ad name",
            "menu_name",
            "product",
            "item_name",
            "item",
            "name",
        ),
        "total_budget_burnt": (
            "spends",
            "spend",
            "total_budget_burnt",
            "budget burnt",
            "budget spent",
            "cost",
            "daily budget",
            "budget_burnt",
            "total_spend",
            "total_spends",
            "amount_spent",
        ),
        "total_impressions": (
            "impressions",
            "total_impressions",
            "impr",
            "views",
            "total_views",
        ),
        "total_clicks": ("clicks", "total_clicks", "click"),
        "total_gmv": (
            "sales",
            "gmv",
            "total_gmv",
            "revenue",
            "total_direct_gmv_14_days",
            "total_direct_gmv_7_days",
            "total_sales",
            "order_value",
            "total_revenue",
        ),
        "total_ctr": ("ctr", "total_ctr"),
        "total_roi": (
            "roi",
            "roas",
            "total_roi",
            "total_direct_roi_14_days",
            "total_direct_roi_7_days",
        ),
        "city": ("city", "location", "region"),
        "area_name": ("area_name",),
        "brand": ("brand", "brand_name"),
        "total_conversions": ("total_conversions", "conversions", "orders", "total_orders"),
        "total_a2c": ("total_a2c",),
        "units_sold": ("units_sold", "quantity", "qty"),
    }
)

COLUMN_MAPPINGS: Mapping[str, str] = MappingProxyType(
    {
        alias: canonical
        for canonical, aliases in CANONICAL_COLUMN_ALIASES.items()
        for alias in aliases
    }
)
"""Lowercase header -> canonical field. Read-only, built once at import."""

_WHITESPACE = re.compile(r"\s+")


def normalize_column_name(header: str) -> str:
    """
    Resolve a raw header to its canonical field, or to a slug when unknown.
    """

    lowered = header.strip().lower()
    return COLUMN_MAPPINGS.get(lowered) or _WHITESPACE.sub("_", lowered)
