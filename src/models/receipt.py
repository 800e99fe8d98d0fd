"""
Core Data Models for the Receipt Ledger

These models define the schema of the persisted ledger blob.
They are designed to:
1. Read blobs written by earlier versions (camelCase keys, numeric amounts,
   epoch-millisecond timestamps)
2. Write the same shape back (key order, integral amounts as integers,
   timestamps as epoch milliseconds), so load-then-persist is byte-stable
   for any blob whose amounts have at most two decimals
3. Keep amounts as two-decimal Decimals in memory

DESIGN DECISION: `total` and `words` are stored, not computed properties.
They are derived fields, and the editor is the only code that changes rows,
so it recomputes both in the same step.
"""

from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Union
from uuid import UUID, uuid4

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    TypeAdapter,
)
from pydantic.alias_generators import to_camel


CENTS = Decimal("0.01")

# Largest amount kept; two-decimal values below it survive a JSON float exactly
AMOUNT_LIMIT = Decimal("1e13")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _json_number(value: Decimal) -> Union[int, float]:
    # 1200 stays 1200 and 1500.5 stays 1500.5, as the browser wrote them
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _epoch_millis(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // timedelta(milliseconds=1)


# Two-decimal rupee amount, written to JSON as a number
Amount = Annotated[
    Decimal,
    Field(lt=AMOUNT_LIMIT),
    AfterValidator(_quantize),
    PlainSerializer(_json_number, return_type=Union[int, float], when_used="json"),
]

# Written as epoch milliseconds; ISO strings are accepted on load too
Timestamp = Annotated[
    datetime,
    PlainSerializer(_epoch_millis, return_type=int, when_used="json"),
]


def utcnow_millis() -> datetime:
    """Current UTC time, truncated to what the blob stores."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class LedgerModel(BaseModel):
    """Base for persisted models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# RECEIPT
# =============================================================================

class ReceiptLineItem(LedgerModel):
    """
    One charge head on a receipt.

    The label comes from the configured template and never changes;
    only the amount is edited.
    """

    label: str = Field(
        ...,
        min_length=1,
        description="Charge head from the line-item template"
    )
    amount: Annotated[Amount, Field(ge=0)] = Field(
        default=Decimal("0.00"),
        description="Amount in INR"
    )


class Receipt(LedgerModel):
    """
    A single issued (or drafted) receipt.

    `id` is the only identity key; `receipt_no` is free text and is not
    guaranteed unique.
    """

    # Identity
    id: UUID = Field(
        default_factory=uuid4,
        description="Unique receipt ID"
    )

    # Free-text fields, editable on the form
    receipt_no: str = Field(
        default="",
        description="Receipt number printed on the form"
    )
    date: str = Field(
        default="",
        description="Receipt date in display format"
    )
    house_no: str = Field(
        default="",
        description="Block / house number"
    )
    name: str = Field(
        default="",
        description="Member the receipt is issued to"
    )
    payer: str = Field(
        default="",
        description="Person who handed over the payment"
    )

    # Line items and derived fields
    rows: list[ReceiptLineItem] = Field(default_factory=list)
    total: Amount = Field(
        default=Decimal("0.00"),
        description="Sum of all row amounts"
    )
    words: str = Field(
        default="",
        description="Total in English words"
    )

    # Blob key order puts checkDetails after words
    check_details: str = Field(
        default="",
        description="Cheque date and bank, if paid by cheque"
    )

    created_at: Timestamp = Field(
        default_factory=utcnow_millis,
        description="When the receipt was first drafted"
    )

    @property
    def rows_total(self) -> Decimal:
        """Sum of the row amounts as they stand."""
        return sum((row.amount for row in self.rows), Decimal("0.00"))


# Serializer for the whole ledger blob
LEDGER_ADAPTER = TypeAdapter(list[Receipt])


def dump_ledger(receipts: list[Receipt]) -> str:
    """Serialize a ledger to the JSON blob stored in the slot."""
    return LEDGER_ADAPTER.dump_json(receipts, by_alias=True).decode("utf-8")


def parse_ledger(blob: str) -> list[Receipt]:
    """
    Parse a ledger blob.

    Raises:
        pydantic.ValidationError: If the blob is not valid JSON or
            does not have the ledger shape
    """
    return LEDGER_ADAPTER.validate_json(blob)


# =============================================================================
# QUERY / STATS MODELS
# =============================================================================

class SearchQuery(BaseModel):
    """Search box contents. Empty strings match every receipt."""

    name: str = ""
    house: str = ""
    receipt_no: str = ""


class LedgerStats(BaseModel):
    """Dashboard figures derived from the ledger."""

    total_collection: Decimal = Field(
        default=Decimal("0.00"),
        description="Sum of all receipt totals"
    )
    total_receipts: int = Field(
        default=0,
        ge=0,
        description="Number of receipts in the ledger"
    )
