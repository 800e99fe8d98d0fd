"""
Tests for the Receipt Ledger

Test strategy:
1. Unit tests for individual components (models, words, store, editor)
2. Flow tests for the receipt desk with an in-memory slot
3. No real timers or files unless a test says so (use fakes / tmp_path)
"""

import json
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from src.models.receipt import (
    AMOUNT_LIMIT,
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


class TestReceiptModels:
    """Tests for receipt Pydantic models."""

    def test_line_item_defaults_to_zero(self):
        """A template row starts with a zero amount."""
        item = ReceiptLineItem(label="Maintenance Charges")
        assert item.amount == Decimal("0.00")

    def test_line_item_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValueError):
            ReceiptLineItem(label="Test", amount=Decimal("-100"))

    def test_line_item_quantizes_amount(self):
        """Amounts are kept at two decimals."""
        item = ReceiptLineItem(label="Test", amount=Decimal("10.005"))
        assert item.amount == Decimal("10.01")

    def test_receipt_creation(self):
        """Test Receipt model creation with defaults."""
        receipt = Receipt(receipt_no="101", name="Ramesh Patel")
        assert receipt.receipt_no == "101"
        assert receipt.total == Decimal("0.00")
        assert receipt.words == ""
        assert receipt.rows == []
        assert receipt.created_at.tzinfo is not None

    def test_receipt_accepts_camel_case_keys(self):
        """Blobs use camelCase keys."""
        receipt = Receipt.model_validate({
            "receiptNo": "105",
            "houseNo": "B/12",
            "checkDetails": "SBI 12-03",
            "name": "Asha",
        })
        assert receipt.receipt_no == "105"
        assert receipt.house_no == "B/12"
        assert receipt.check_details == "SBI 12-03"

    def test_rows_total(self):
        """rows_total sums the row amounts."""
        receipt = Receipt(rows=[
            ReceiptLineItem(label="A", amount=Decimal("100.50")),
            ReceiptLineItem(label="B", amount=Decimal("20")),
        ])
        assert receipt.rows_total == Decimal("120.50")

    def test_search_query_defaults_match_everything(self):
        """An empty query has empty strings."""
        query = SearchQuery()
        assert (query.name, query.house, query.receipt_no) == ("", "", "")

    def test_ledger_stats_defaults(self):
        """Empty stats are zero."""
        stats = LedgerStats()
        assert stats.total_collection == Decimal("0.00")
        assert stats.total_receipts == 0


class TestLedgerBlob:
    """Tests for the serialized ledger format."""

    def test_dump_uses_camel_case_and_numbers(self):
        """Amounts are JSON numbers and keys are camelCase."""
        receipt = Receipt(
            receipt_no="101",
            house_no="A/1",
            rows=[ReceiptLineItem(label="Maintenance Charges", amount=Decimal("1500.50"))],
            total=Decimal("1500.50"),
            words="One Thousand Five Hundred Only",
        )
        data = json.loads(dump_ledger([receipt]))
        assert data[0]["receiptNo"] == "101"
        assert data[0]["houseNo"] == "A/1"
        assert data[0]["total"] == 1500.5
        assert data[0]["rows"][0]["amount"] == 1500.5
        assert "createdAt" in data[0]

    def test_parse_legacy_blob(self):
        """Blobs written by the browser version load (epoch-ms timestamps)."""
        blob = json.dumps([{
            "id": str(uuid4()),
            "receiptNo": "117",
            "date": "05 - 01 - 2025",
            "houseNo": "3/22",
            "name": "Kiran Shah",
            "payer": "Self",
            "rows": [{"label": "Maintenance Charges", "amount": 1200}],
            "total": 1200,
            "words": "One Thousand Two Hundred Only",
            "checkDetails": "",
            "createdAt": 1736073600000,
        }])
        [receipt] = parse_ledger(blob)
        assert receipt.total == Decimal("1200.00")
        assert receipt.created_at == datetime(2025, 1, 5, 10, 40, tzinfo=timezone.utc)

    def test_round_trip_is_stable(self):
        """Dumping a parsed blob gives the same blob."""
        receipt = Receipt(
            receipt_no="101",
            rows=[ReceiptLineItem(label="Water Charges", amount=Decimal("99.99"))],
            total=Decimal("99.99"),
            words="Ninety Nine Only",
        )
        blob = dump_ledger([receipt])
        assert dump_ledger(parse_ledger(blob)) == blob

    def test_integral_amounts_and_timestamps_keep_browser_form(self):
        """Whole rupees are written as integers and createdAt as epoch milliseconds."""
        receipt = Receipt(
            rows=[ReceiptLineItem(label="Maintenance Charges", amount=Decimal("1200"))],
            total=Decimal("1200"),
            created_at=datetime(2025, 1, 5, 10, 40, 0, 123000, tzinfo=timezone.utc),
        )
        data = json.loads(dump_ledger([receipt]))
        assert data[0]["total"] == 1200
        assert isinstance(data[0]["total"], int)
        assert isinstance(data[0]["rows"][0]["amount"], int)
        assert data[0]["createdAt"] == 1736073600123

    def test_iso_timestamps_are_accepted(self):
        """ISO createdAt strings load and are written back as milliseconds."""
        blob = json.dumps([{"id": str(uuid4()), "createdAt": "2025-01-05T10:40:00Z"}])
        [receipt] = parse_ledger(blob)
        assert receipt.created_at == datetime(2025, 1, 5, 10, 40, tzinfo=timezone.utc)
        assert json.loads(dump_ledger([receipt]))[0]["createdAt"] == 1736073600000

    def test_rejects_amounts_at_limit(self):
        """Amounts must stay below AMOUNT_LIMIT to be stored exactly."""
        with pytest.raises(ValueError):
            Receipt(total=AMOUNT_LIMIT)
        with pytest.raises(ValueError):
            ReceiptLineItem(label="Test", amount=AMOUNT_LIMIT)

    def test_default_timestamp_has_millisecond_precision(self):
        """A new receipt's createdAt is unchanged by a save and reload."""
        receipt = Receipt()
        assert receipt.created_at.microsecond % 1000 == 0
        [reloaded] = parse_ledger(dump_ledger([receipt]))
        assert reloaded.created_at == receipt.created_at

    def test_parse_rejects_wrong_shape(self):
        """A blob that is not a list of receipts is rejected."""
        with pytest.raises(ValueError):
            parse_ledger('{"receipts": []}')


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_defaults(self):
        """Events default to INFO and not operator-triggered."""
        event = AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            description="Ledger loaded",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.by_operator is False
        assert event.receipt_id is None

    def test_log_dict_is_flat_and_json_safe(self):
        """Details are merged in, ids are strings, empty fields dropped."""
        receipt_id = uuid4()
        event = AuditEvent(
            event_type=AuditEventType.RECEIPT_UPDATED,
            receipt_id=receipt_id,
            receipt_no="105",
            description="Receipt updated",
            details={"amount": "1000.00"},
        )
        log_dict = event.to_log_dict()

        assert log_dict["event_type"] == "receipt_updated"
        assert log_dict["receipt_id"] == str(receipt_id)
        assert log_dict["amount"] == "1000.00"
        assert "details" not in log_dict
        assert "error_message" not in log_dict
        json.dumps(log_dict)

    def test_builder_receipt_saved(self):
        """receipt_saved picks created/updated from the flag."""
        receipt_id = uuid4()

        created = AuditEventBuilder.receipt_saved(receipt_id, "105", "1500.00", created=True)
        updated = AuditEventBuilder.receipt_saved(receipt_id, "105", "1500.00", created=False)

        assert created.event_type == AuditEventType.RECEIPT_CREATED
        assert updated.event_type == AuditEventType.RECEIPT_UPDATED
        assert created.receipt_id == receipt_id
        assert created.receipt_no == "105"
        assert created.by_operator is True

    def test_builder_deleted_is_warning(self):
        """Deletions stand out in the log."""
        event = AuditEventBuilder.receipt_deleted(uuid4(), "105")
        assert event.severity == AuditSeverity.WARNING

    def test_builder_load_failed(self):
        """Load failures are errors."""
        event = AuditEventBuilder.ledger_load_failed("bad json")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "bad json"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
