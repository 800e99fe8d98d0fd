"""Ledger store package."""

from src.ledger.store import RECEIPT_NO_SEED, LedgerStore, parse_receipt_no

__all__ = ["RECEIPT_NO_SEED", "LedgerStore", "parse_receipt_no"]
