"""
Data Models Package

This package contains all Pydantic models used by the receipt ledger.
Everything written to the ledger slot conforms to these schemas.
"""

from src.models.receipt import (
    Amount,
    LedgerStats,
    Receipt,
    ReceiptLineItem,
    SearchQuery,
    dump_ledger,
    parse_ledger,
)
from src.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Receipt models
    "Amount",
    "LedgerStats",
    "Receipt",
    "ReceiptLineItem",
    "SearchQuery",
    "dump_ledger",
    "parse_ledger",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
