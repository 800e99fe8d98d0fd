"""
Audit Models for the Receipt Ledger

Every change to the ledger is logged as an audit event.
This provides:
1. Traceability of who was issued which receipt, and when it changed
2. Debugging information when a stored ledger fails to load
3. A record of deletions, which otherwise leave no trace in the blob

DESIGN DECISION: Audit events are written to the structured log only.
They never go into the ledger blob itself.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Draft handling
    DRAFT_STARTED = "draft_started"
    DRAFT_LOADED = "draft_loaded"

    # Persistence
    RECEIPT_CREATED = "receipt_created"
    RECEIPT_UPDATED = "receipt_updated"
    RECEIPT_DELETED = "receipt_deleted"
    VALIDATION_FAILED = "validation_failed"

    # Ledger slot
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_LOAD_FAILED = "ledger_load_failed"
    LEDGER_EXPORTED = "ledger_exported"

    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    One entry of the audit trail.

    Receipt events carry the receipt's id and number; ledger-wide events
    (load, export, errors) leave them empty.
    """

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    receipt_id: Optional[UUID] = None
    receipt_no: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    # False for events the application raises on its own (load, errors)
    by_operator: bool = False

    def to_log_dict(self) -> dict:
        """Flat, JSON-safe fields for the structured log."""
        data = self.model_dump(mode="json", exclude_none=True)
        data.pop("details", None)
        data.update(self.details)
        return data


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.receipt_saved(receipt_id, "105", "1500.00", created=True)
        event = AuditEventBuilder.receipt_deleted(receipt_id, "105")
    """

    @staticmethod
    def draft_started(receipt_id: UUID, receipt_no: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DRAFT_STARTED,
            receipt_id=receipt_id,
            receipt_no=receipt_no,
            description=f"New receipt draft: {receipt_no}",
            by_operator=True,
        )

    @staticmethod
    def draft_loaded(receipt_id: UUID, receipt_no: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DRAFT_LOADED,
            receipt_id=receipt_id,
            receipt_no=receipt_no,
            description=f"Receipt {receipt_no} opened for editing",
            by_operator=True,
        )

    @staticmethod
    def receipt_saved(
        receipt_id: UUID,
        receipt_no: str,
        amount: str,
        created: bool,
    ) -> AuditEvent:
        if created:
            event_type, action = AuditEventType.RECEIPT_CREATED, "saved"
        else:
            event_type, action = AuditEventType.RECEIPT_UPDATED, "updated"
        return AuditEvent(
            event_type=event_type,
            receipt_id=receipt_id,
            receipt_no=receipt_no,
            description=f"Receipt {receipt_no} {action}: ₹{amount}",
            details={"amount": amount},
            by_operator=True,
        )

    @staticmethod
    def receipt_deleted(receipt_id: UUID, receipt_no: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECEIPT_DELETED,
            severity=AuditSeverity.WARNING,
            receipt_id=receipt_id,
            receipt_no=receipt_no,
            description=f"Receipt {receipt_no} deleted",
            by_operator=True,
        )

    @staticmethod
    def validation_failed(receipt_id: UUID, code: str, message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            receipt_id=receipt_id,
            description=f"Receipt not saved: {message}",
            details={"code": code},
            by_operator=True,
        )

    @staticmethod
    def ledger_loaded(receipt_count: int, next_receipt_no: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            description=f"Ledger loaded with {receipt_count} receipts",
            details={
                "receipt_count": receipt_count,
                "next_receipt_no": next_receipt_no,
            },
        )

    @staticmethod
    def ledger_load_failed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            description="Stored ledger could not be read; starting empty",
            error_message=error_message,
        )

    @staticmethod
    def ledger_exported(receipt_count: int, filename: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_EXPORTED,
            description=f"Exported {receipt_count} receipts to {filename}",
            details={"receipt_count": receipt_count, "filename": filename},
            by_operator=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
