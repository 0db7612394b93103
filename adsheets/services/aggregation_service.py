"""
adsheets/services/aggregation_service.py

Time and platform aggregation of daily ad metrics.

All functions are pure transforms over in-memory ``DailyMetric`` rows.
Totals are summed first and ratios are derived once from the sums, so a
high-volume day weighs more than a low-volume one.

Formulas
--------
CPI   = spend / impressions
CTR   = 100 * clicks / impressions
CPC   = spend / clicks
ROAS  = sales / spend

Each ratio is ``0.0`` when its denominator is zero.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from adsheets.domain.ads_record import CanonicalAdsRecord
from adsheets.domain.metrics import (
    DailyMetric,
    DerivedMetrics,
    MonthlyBucket,
    PlatformSummary,
    WeeklyBucket,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


@dataclass
class _Totals:
    spend: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    sales: float = 0.0

    def add(self, metric: DailyMetric) -> None:
        self.spend += metric.total_spend or 0.0
        self.impressions += metric.total_impressions or 0.0
        self.clicks += metric.total_clicks or 0.0
        self.sales += metric.total_sales or 0.0

    def derived(self) -> DerivedMetrics:
        return calculate_metrics(
            spend=self.spend,
            impressions=self.impressions,
            clicks=self.clicks,
            sales=self.sales,
        )


def _safe_divide(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def week_start_for(day: date) -> date:
    """
    Sunday on or before ``day``.
    """

    # date.weekday(): Monday == 0 ... Sunday == 6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def month_start_for(day: date) -> date:
    return day.replace(day=1)


def _group_totals(
    metrics: Iterable[DailyMetric],
    key_fn: Callable[[DailyMetric], Hashable],
) -> dict[Hashable, _Totals]:
    grouped: dict[Hashable, _Totals] = defaultdict(_Totals)
    for metric in metrics:
        grouped[key_fn(metric)].add(metric)
    return grouped


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def calculate_metrics(
    *,
    spend: float,
    impressions: float,
    clicks: float,
    sales: float,
) -> DerivedMetrics:
    """
    Derive CPI, CTR (percent), CPC and ROAS from raw totals.
    """

    return DerivedMetrics(
        cpi=_safe_divide(spend, impressions),
        ctr=_safe_divide(clicks, impressions) * 100,
        cpc=_safe_divide(spend, clicks),
        roas=_safe_divide(sales, spend),
    )


def aggregate_weekly(daily_metrics: Sequence[DailyMetric]) -> list[WeeklyBucket]:
    """
    Bucket daily metrics into Sunday-aligned weeks, ascending by week start.
    """

    grouped = _group_totals(daily_metrics, lambda metric: week_start_for(metric.date))
    buckets: list[WeeklyBucket] = []
    for week_start in sorted(grouped):
        totals = grouped[week_start]
        derived = totals.derived()
        buckets.append(
            WeeklyBucket(
                week_start=week_start,
                week_end=week_start + timedelta(days=6),
                total_spend=totals.spend,
                total_impressions=totals.impressions,
                total_clicks=totals.clicks,
                total_sales=totals.sales,
                cpi=derived.cpi,
                ctr=derived.ctr,
                cpc=derived.cpc,
                roas=derived.roas,
            )
        )
    logger.debug("aggregate_weekly metrics=%d weeks=%d", len(daily_metrics), len(buckets))
    return buckets


def aggregate_monthly(daily_metrics: Sequence[DailyMetric]) -> list[MonthlyBucket]:
    """
    Bucket daily metrics into calendar months, ascending by month start.
    """

    grouped = _group_totals(daily_metrics, lambda metric: month_start_for(metric.date))
    buckets: list[MonthlyBucket] = []
    for month in sorted(grouped):
        totals = grouped[month]
        derived = totals.derived()
        buckets.append(
            MonthlyBucket(
                month=month,
                month_label=month.strftime("%b %Y"),
                total_spend=totals.spend,
                total_impressions=totals.impressions,
                total_clicks=totals.clicks,
                total_sales=totals.sales,
                cpi=derived.cpi,
                ctr=derived.ctr,
                cpc=derived.cpc,
                roas=derived.roas,
            )
        )
    logger.debug("aggregate_monthly metrics=%d months=%d", len(daily_metrics), len(buckets))
    return buckets


def group_by_platform(daily_metrics: Sequence[DailyMetric]) -> list[PlatformSummary]:
    """
    Sum metrics per platform tag. Group order is not guaranteed.
    """

    grouped = _group_totals(daily_metrics, lambda metric: metric.platform)
    summaries: list[PlatformSummary] = []
    for platform, totals in grouped.items():
        derived = totals.derived()
        summaries.append(
            PlatformSummary(
                platform=display_platform(platform),
                total_spend=totals.spend,
                total_impressions=totals.impressions,
                total_clicks=totals.clicks,
                total_sales=totals.sales,
                cpi=derived.cpi,
                ctr=derived.ctr,
                cpc=derived.cpc,
                roas=derived.roas,
            )
        )
    return summaries


def display_platform(platform: str) -> str:
    return platform[:1].upper() + platform[1:]


def daily_metrics_from_records(
    records: Iterable[CanonicalAdsRecord],
    *,
    data_type: str = "ads",
) -> list[DailyMetric]:
    """
    Fold canonical records into one ``DailyMetric`` per (date, platform).

    Records whose ``metrics_date`` is not an ISO date are skipped.
    """

    grouped: dict[tuple[date, str], _Totals] = defaultdict(_Totals)
    skipped = 0
    for record in records:
        try:
            day = date.fromisoformat(record.metrics_date)
        except ValueError:
            skipped += 1
            continue
        totals = grouped[(day, record.platform)]
        totals.spend += record.total_budget_burnt
        totals.impressions += record.total_impressions
        totals.clicks += record.total_clicks
        totals.sales += record.total_gmv

    if skipped:
        logger.debug("daily_metrics_from_records skipped %d undated records", skipped)

    return [
        DailyMetric(
            date=day,
            platform=platform,
            total_spend=totals.spend,
            total_impressions=totals.impressions,
            total_clicks=totals.clicks,
            total_sales=totals.sales,
            data_type=data_type,
        )
        for (day, platform), totals in sorted(grouped.items(), key=lambda item: item[0])
    ]
