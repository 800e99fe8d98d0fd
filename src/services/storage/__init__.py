"""
Storage Services Package

Provides the abstract ledger slot interface and its implementations.
The application stores the ledger as a JSON file; tests use memory.
"""

from src.services.storage.interface import (
    LedgerSlot,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from src.services.storage.json_file import InMemorySlot, JsonFileSlot

__all__ = [
    # Interfaces
    "LedgerSlot",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemorySlot",
    "JsonFileSlot",
]
