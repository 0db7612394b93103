"""
adsheets/domain/ads_record.py

Canonical ads record shape consumed by reporting and aggregation.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from adsheets.domain.sheets import SheetValue

CORE_TEXT_FIELDS: tuple[str, ...] = (
    "metrics_date",
    "campaign_name",
)

CORE_NUMERIC_FIELDS: tuple[str, ...] = (
    "total_budget_burnt",
    "total_impressions",
    "total_clicks",
    "total_gmv",
    "total_ctr",
    "total_roi",
)

EXTENSION_FIELDS: tuple[str, ...] = (
    "city",
    "area_name",
    "brand",
    "total_conversions",
    "total_a2c",
    "units_sold",
)


@dataclass
class CanonicalAdsRecord:
    """
    Normalized row shape shared by every platform.

    ``extensions`` holds optional platform-specific columns (location,
    brand, conversions, units sold, ...) that are present in the source.
    """

    id: str
    platform: str
    metrics_date: str = ""
    campaign_name: str = ""
    total_budget_burnt: float = 0.0
    total_impressions: float = 0.0
    total_clicks: float = 0.0
    total_gmv: float = 0.0
    total_ctr: float = 0.0
    total_roi: float = 0.0
    extensions: dict[str, SheetValue] = field(default_factory=dict)

    def has_signal(self) -> bool:
        """
        Whether the record carries any positive volume metric or a campaign label.
        """

        has_numeric_value = (
            self.total_budget_burnt > 0
            or self.total_impressions > 0
            or self.total_clicks > 0
            or self.total_gmv > 0
        )
        return has_numeric_value or bool(self.campaign_name)

    def to_dict(self) -> dict[str, SheetValue]:
        payload: dict[str, SheetValue] = {
            "id": self.id,
            "platform": self.platform,
            "metrics_date": self.metrics_date,
            "campaign_name": self.campaign_name,
            "total_budget_burnt": self.total_budget_burnt,
            "total_impressions": self.total_impressions,
            "total_clicks": self.total_clicks,
            "total_gmv": self.total_gmv,
            "total_ctr": self.total_ctr,
            "total_roi": self.total_roi,
        }
        for key, value in self.extensions.items():
            payload.setdefault(key, value)
        return payload


@dataclass(frozen=True)
class FieldIssue:
    """
    A source value that could not be coerced into its canonical field.
    """

    row_index: int
    column: str
    canonical_field: str
    value: str


@dataclass(frozen=True)
class NormalizationBatch:
    """
    Records produced from one tab plus soft-failure tallies.
    """

    records: list[CanonicalAdsRecord] = field(default_factory=list)
    dropped_rows: int = 0
    field_issues: list[FieldIssue] = field(default_factory=list)
