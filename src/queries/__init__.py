"""Query package: search and statistics over the ledger."""

from src.queries.search import filter_receipts, matches
from src.queries.stats import compute_stats

__all__ = ["compute_stats", "filter_receipts", "matches"]
