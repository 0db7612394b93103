"""
adsheets/domain/metrics.py

Aggregation input and output shapes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyMetric:
    """
    Raw totals for one (date, platform, data type) combination.
    """

    date: date
    platform: str
    total_spend: float = 0.0
    total_impressions: float = 0.0
    total_clicks: float = 0.0
    total_sales: float = 0.0
    data_type: str = "ads"


@dataclass(frozen=True)
class DerivedMetrics:
    """
    Ratios computed from summed totals.

    ``ctr`` is a percentage; the others are plain ratios.
    """

    cpi: float
    ctr: float
    cpc: float
    roas: float


@dataclass(frozen=True)
class WeeklyBucket:
    week_start: date
    week_end: date
    total_spend: float
    total_impressions: float
    total_clicks: float
    total_sales: float
    cpi: float
    ctr: float
    cpc: float
    roas: float


@dataclass(frozen=True)
class MonthlyBucket:
    month: date
    month_label: str
    total_spend: float
    total_impressions: float
    total_clicks: float
    total_sales: float
    cpi: float
    ctr: float
    cpc: float
    roas: float


@dataclass(frozen=True)
class PlatformSummary:
    platform: str
    total_spend: float
    total_impressions: float
    total_clicks: float
    total_sales: float
    cpi: float
    ctr: float
    cpc: float
    roas: float
