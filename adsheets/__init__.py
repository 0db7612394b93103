"""
Google Sheets ingestion, normalization and aggregation for ads/sales reporting.
"""

__version__ = "0.1.0"
