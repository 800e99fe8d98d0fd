"""
Ledger Store

Owns the ordered list of saved receipts and its persistent slot.

GUARANTEES:
- Newest receipts first: inserts are prepended, updates keep their position
- Every mutation rewrites the whole blob (no partial persistence)
- A mutation either persists and takes effect, or raises and changes nothing
- A corrupt stored ledger never stops startup; the store starts empty
- Receipts go in and come out as copies, so callers cannot alias entries
"""

import re
from typing import Optional
from uuid import UUID

import structlog
from pydantic import ValidationError

from src.models.receipt import Receipt, dump_ledger, parse_ledger
from src.services.storage import LedgerSlot, StorageReadError


logger = structlog.get_logger(__name__)

RECEIPT_NO_SEED = 101

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_receipt_no(receipt_no: str) -> int:
    """
    Leading integer of a receipt number; 0 if it has none.

    "105" -> 105, "105/A" -> 105, "A-105" -> 0
    """
    match = _LEADING_INT.match(receipt_no or "")
    return int(match.group(1)) if match else 0


class LedgerStore:
    """In-memory ledger backed by a single persistent slot."""

    def __init__(self, slot: LedgerSlot, receipt_no_seed: int = RECEIPT_NO_SEED):
        self._slot = slot
        self._seed = receipt_no_seed
        self._receipts: list[Receipt] = []
        self.last_load_error: Optional[StorageReadError] = None

    def __len__(self) -> int:
        return len(self._receipts)

    @property
    def receipts(self) -> list[Receipt]:
        """Copy of the ledger, newest first."""
        return [r.model_copy(deep=True) for r in self._receipts]

    def get(self, receipt_id: UUID) -> Optional[Receipt]:
        """Copy of the receipt with this id, or None."""
        index = self._index_of(receipt_id)
        if index is None:
            return None
        return self._receipts[index].model_copy(deep=True)

    def load(self) -> list[Receipt]:
        """
        Load the ledger from the slot.

        An absent blob is an empty ledger. An unreadable or malformed blob
        is also treated as empty; the problem is kept in `last_load_error`
        and logged. The stored blob is left as it is.
        """
        self.last_load_error = None
        try:
            blob = self._slot.read()
            receipts = parse_ledger(blob) if blob is not None else []
        except StorageReadError as e:
            self._fail_load(e)
            return []
        except ValidationError as e:
            self._fail_load(StorageReadError(
                f"Ledger in slot '{self._slot.key}' is not valid: "
                f"{e.error_count()} errors"
            ))
            return []

        self._receipts = receipts
        logger.info("ledger_loaded", slot=self._slot.key, receipts=len(receipts))
        return self.receipts

    def _fail_load(self, error: StorageReadError) -> None:
        self._receipts = []
        self.last_load_error = error
        logger.warning("ledger_load_failed", slot=self._slot.key, error=str(error))

    def next_receipt_no(self) -> str:
        """
        Suggested number for the next receipt.

        One more than the highest numeric receipt number, or the seed
        when the ledger is empty.
        """
        if not self._receipts:
            return str(self._seed)
        highest = max(parse_receipt_no(r.receipt_no) for r in self._receipts)
        return str(highest + 1)

    def upsert(self, receipt: Receipt) -> list[Receipt]:
        """
        Save a receipt by identity and persist.

        Replaces the entry with the same id in place, otherwise prepends.

        Raises:
            StorageWriteError: If persisting fails (ledger unchanged)
        """
        entry = receipt.model_copy(deep=True)
        updated = list(self._receipts)

        index = self._index_of(receipt.id)
        if index is not None:
            updated[index] = entry
        else:
            updated.insert(0, entry)

        self._commit(updated)
        logger.info(
            "receipt_upserted",
            receipt_id=str(receipt.id),
            receipt_no=receipt.receipt_no,
            created=index is None,
        )
        return self.receipts

    def delete(self, receipt_id: UUID) -> list[Receipt]:
        """
        Remove the receipt with this id and persist.

        Deleting an unknown id is a no-op and does not touch the slot.

        Raises:
            StorageWriteError: If persisting fails (ledger unchanged)
        """
        index = self._index_of(receipt_id)
        if index is None:
            logger.debug("receipt_delete_missing", receipt_id=str(receipt_id))
            return self.receipts

        updated = self._receipts[:index] + self._receipts[index + 1:]
        self._commit(updated)
        logger.info("receipt_deleted", receipt_id=str(receipt_id))
        return self.receipts

    def persist(self) -> None:
        """Write the whole ledger to the slot, replacing what was there."""
        self._slot.write(dump_ledger(self._receipts))

    def _commit(self, updated: list[Receipt]) -> None:
        # Write first: a failed write must leave the in-memory ledger as it was
        self._slot.write(dump_ledger(updated))
        self._receipts = updated

    def _index_of(self, receipt_id: UUID) -> Optional[int]:
        for index, existing in enumerate(self._receipts):
            if existing.id == receipt_id:
                return index
        return None
