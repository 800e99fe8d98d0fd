"""Services package."""

from src.services.storage import (
    InMemorySlot,
    JsonFileSlot,
    LedgerSlot,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    # Storage services
    "InMemorySlot",
    "JsonFileSlot",
    "LedgerSlot",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
