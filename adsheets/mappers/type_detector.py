"""
Ads vs. sales classification of a tab from its header vocabulary.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from adsheets.domain.sheets import TabDataType

ADS_INDICATORS: tuple[str, ...] = (
    "impressions",
    "clicks",
    "ctr",
    "cpi",
    "roi",
    "roas",
    "budget",
    "spend",
    "spends",
    "ad_name",
    "campaign",
    "budget_burnt",
)

SALES_INDICATORS: tuple[str, ...] = (
    "order_id",
    "order",
    "quantity",
    "units_sold",
    "sku",
    "product_name",
    "mrp",
    "discount",
    "net_amount",
)


def indicator_score(headers: Sequence[str], indicators: Iterable[str]) -> int:
    """
    Count indicators that occur as a substring of at least one header.
    """

    lowered = [header.lower() for header in headers]
    return sum(1 for indicator in indicators if any(indicator in header for header in lowered))


def classify_tab_type(headers: Sequence[str]) -> TabDataType:
    """
    Classify a tab as ads or sales; ties go to ads.
    """

    ads_score = indicator_score(headers, ADS_INDICATORS)
    sales_score = indicator_score(headers, SALES_INDICATORS)
    return TabDataType.ADS if ads_score >= sales_score else TabDataType.SALES
