"""
Ledger Statistics

Recomputed from the full ledger on every call. Nothing is kept as a
running total, so the figures can never drift from the stored receipts.
"""

from decimal import Decimal
from typing import Sequence

from src.models.receipt import LedgerStats, Receipt


def compute_stats(receipts: Sequence[Receipt]) -> LedgerStats:
    """Total collection and number of receipts."""
    return LedgerStats(
        total_collection=sum((r.total for r in receipts), Decimal("0.00")),
        total_receipts=len(receipts),
    )
