"""
Tab discovery: strategy chain, fallbacks and hydration.
"""

from adsheets.discovery.base import ListingPages, PatternStrategy, TabDiscoveryStrategy, TabPattern
from adsheets.discovery.engine import TabDiscoveryEngine, fetch_parsed_tab
from adsheets.discovery.strategies import (
    EditPageStrategy,
    EmbeddedScriptStrategy,
    GidAnchorStrategy,
    LegacyFeedStrategy,
    SheetButtonStrategy,
    SheetMenuStrategy,
    default_strategies,
)

__all__ = [
    "EditPageStrategy",
    "EmbeddedScriptStrategy",
    "GidAnchorStrategy",
    "LegacyFeedStrategy",
    "ListingPages",
    "PatternStrategy",
    "SheetButtonStrategy",
    "SheetMenuStrategy",
    "TabDiscoveryEngine",
    "TabDiscoveryStrategy",
    "TabPattern",
    "default_strategies",
    "fetch_parsed_tab",
]
