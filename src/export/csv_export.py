"""
CSV export of the ledger

CSV columns: Date, Receipt No, Name, House No, Total Amount, Payer

Name, House No and Payer are always quoted so spreadsheet programs keep
house numbers like "3/12" as text. Total Amount is a bare number.
"""

from datetime import date
from typing import Iterable

from src.models.receipt import Receipt


CSV_HEADERS = ["Date", "Receipt No", "Name", "House No", "Total Amount", "Payer"]

_NEEDS_QUOTES = (",", '"', "\n", "\r")


def _quoted(value: str) -> str:
    return '"' + (value or "").replace('"', '""') + '"'


def _plain(value: str) -> str:
    value = value or ""
    if any(ch in value for ch in _NEEDS_QUOTES):
        return _quoted(value)
    return value


def receipt_to_row(receipt: Receipt) -> list[str]:
    """One CSV line for a receipt, as already-escaped fields."""
    return [
        _plain(receipt.date),
        _plain(receipt.receipt_no),
        _quoted(receipt.name),
        _quoted(receipt.house_no),
        f"{receipt.total:.2f}",
        _quoted(receipt.payer),
    ]


def export_csv(receipts: Iterable[Receipt]) -> str:
    """Full CSV report, header first, receipts in ledger order."""
    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(receipt_to_row(r)) for r in receipts)
    return "\n".join(lines)


def export_filename(prefix: str, today: date) -> str:
    """Report file name, e.g. Nilkanth_Apartment_Report_2024-12-15.csv"""
    return f"{prefix}_{today.isoformat()}.csv"
