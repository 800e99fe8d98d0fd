"""
Abstract Storage Interface

DESIGN DECISION: The ledger lives in a single named slot that holds one
serialized blob. We define an abstract interface for that slot.
This allows us to:
1. Keep the ledger on local disk in the application
2. Use in-memory storage for testing
3. Keep the ledger store decoupled from where the bytes live

The interface is intentionally tiny: read the whole blob, write the whole
blob. There is no incremental or append persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional


class LedgerSlot(ABC):
    """
    Abstract interface for the persistent slot holding the ledger blob.
    """

    @property
    @abstractmethod
    def key(self) -> str:
        """Name of the slot."""
        pass

    @abstractmethod
    def read(self) -> Optional[str]:
        """
        Read the stored blob.

        Returns:
            The blob, or None if nothing has been stored yet

        Raises:
            StorageReadError: If the slot exists but cannot be read
        """
        pass

    @abstractmethod
    def write(self, blob: str) -> None:
        """
        Replace the stored blob entirely.

        Raises:
            StorageWriteError: If the blob could not be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored ledger is unreadable or not a valid ledger."""
    pass


class StorageWriteError(StorageError):
    """Ledger could not be written to the slot."""
    pass
