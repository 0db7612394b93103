from __future__ import annotations

import unittest

from adsheets.domain.sheets import TabDataType
from adsheets.mappers.column_mapping import COLUMN_MAPPINGS, normalize_column_name
from adsheets.mappers.type_detector import classify_tab_type, indicator_score


class TestClassifyTabType(unittest.TestCase):
    def test_ad_metric_headers_classify_as_ads(self) -> None:
        headers = ["impressions", "clicks", "spend", "campaign"]

        self.assertEqual(classify_tab_type(headers), TabDataType.ADS)

    def test_order_headers_classify_as_sales(self) -> None:
        headers = ["order_id", "sku", "quantity"]

        self.assertEqual(classify_tab_type(headers), TabDataType.SALES)

    def test_matching_is_case_insensitive_substring(self) -> None:
        headers = ["Total Impressions", "Ad Spend (INR)"]

        self.assertEqual(indicator_score(headers, ("impressions", "spend", "sku")), 2)

    def test_ties_resolve_to_ads(self) -> None:
        self.assertEqual(classify_tab_type([]), TabDataType.ADS)
        self.assertEqual(classify_tab_type(["clicks", "sku"]), TabDataType.ADS)


class TestColumnMapping(unittest.TestCase):
    def test_synonyms_resolve_case_insensitively(self) -> None:
        self.assertEqual(normalize_column_name("Spends"), "total_budget_burnt")
        self.assertEqual(normalize_column_name(" GMV "), "total_gmv")
        self.assertEqual(normalize_column_name("Campaign Name"), "campaign_name")
        self.assertEqual(normalize_column_name("ROAS"), "total_roi")

    def test_unknown_headers_become_slugs(self) -> None:
        self.assertEqual(normalize_column_name("Ad  Group Name"), "ad_group_name")

    def test_mapping_table_is_read_only(self) -> None:
        with self.assertRaises(TypeError):
            COLUMN_MAPPINGS["spend"] = "other"  # type: ignore[index]


if __name__ == "__main__":
    unittest.main()
