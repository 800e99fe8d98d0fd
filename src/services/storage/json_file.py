"""
JSON File Storage Implementation

DESIGN DECISION: The ledger slot is a single JSON file on local disk because:
1. The society runs the ledger on one machine for one operator
2. The file can be copied as a backup or opened in any editor
3. No database setup required

Writes go to a temporary file in the same directory which then replaces
the slot file, so a crash mid-write never leaves half a ledger behind.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog

from src.services.storage.interface import (
    LedgerSlot,
    StorageReadError,
    StorageWriteError,
)


logger = structlog.get_logger(__name__)


class JsonFileSlot(LedgerSlot):
    """Ledger slot backed by `<directory>/<key>.json`."""

    def __init__(self, directory: Path, key: str):
        self._directory = Path(directory)
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @property
    def path(self) -> Path:
        return self._directory / f"{self._key}.json"

    def read(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {self.path}: {e}") from e

    def write(self, blob: str) -> None:
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._directory,
                prefix=f".{self._key}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(blob)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageWriteError(f"Failed to write {self.path}: {e}") from e

        logger.debug("ledger_blob_written", path=str(self.path), size=len(blob))


class InMemorySlot(LedgerSlot):
    """
    Ledger slot held in memory.

    Used by tests in place of a JSON file.
    """

    def __init__(self, key: str = "ledger", blob: Optional[str] = None):
        self._key = key
        self._blob = blob
        self.write_count = 0

    @property
    def key(self) -> str:
        return self._key

    @property
    def blob(self) -> Optional[str]:
        return self._blob

    def read(self) -> Optional[str]:
        return self._blob

    def write(self, blob: str) -> None:
        self._blob = blob
        self.write_count += 1
