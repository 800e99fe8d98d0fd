"""
Receipt Search

DESIGN DECISION: Search is a plain in-memory filter over the ledger.
A society issues a few hundred receipts a year; there is no index and
no pagination.

All three fields are case-insensitive substring matches, combined with AND.
Receipt numbers are matched case-insensitively as well, so "a" finds "105A".
"""

from typing import Iterable

from src.models.receipt import Receipt, SearchQuery


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def matches(receipt: Receipt, query: SearchQuery) -> bool:
    """Does this receipt match every field of the query?"""
    return (
        _contains(receipt.name, query.name)
        and _contains(receipt.house_no, query.house)
        and _contains(receipt.receipt_no, query.receipt_no)
    )


def filter_receipts(receipts: Iterable[Receipt], query: SearchQuery) -> list[Receipt]:
    """
    Receipts matching the query, in ledger order.

    An empty query returns every receipt.
    """
    return [r for r in receipts if matches(r, query)]
