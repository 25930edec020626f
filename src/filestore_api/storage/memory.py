"""
In-memory storage backend.

Simulates a cloud object store inside the process. Content does not survive a
restart.
"""

import io
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO, Dict, List

from filestore_api.schemas import FileRecord
from filestore_api.storage.base import Storage
from filestore_api.storage.errors import (
    AlreadyExistsError,
    NotFoundError,
    StorageIOError,
    TooLargeError,
)
from filestore_api.storage.locks import ReadWriteLock
from filestore_api.storage.validation import validate_filename
from filestore_api.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)

MAX_MEMORY_FILE_SIZE = 100 * 1024 * 1024  # 100 MiB
MEMORY_PATH_SCHEME = "memory://"


@dataclass(frozen=True)
class MemoryFile:
    """A file held in memory."""
    name: str
    data: bytes
    size: int
    mod_time: datetime


class MemoryStorage(Storage):
    """Process-memory backend keyed by filename."""

    def __init__(self, max_file_size: int = MAX_MEMORY_FILE_SIZE):
        self.max_file_size = max_file_size
        self._files: Dict[str, MemoryFile] = {}
        self._lock = ReadWriteLock()

    @property
    def kind(self) -> str:
        return "memory"

    @log_execution_time
    def save(self, filename: str, source: BinaryIO) -> None:
        validate_filename(filename)

        with self._lock.write_locked():
            if filename in self._files:
                raise AlreadyExistsError(filename)

            try:
                data = bytes(source.read())
            except OSError as e:
                raise StorageIOError(f"failed to read file data for {filename}: {e}", filename) from e

            if len(data) > self.max_file_size:
                raise TooLargeError(filename, len(data), self.max_file_size)

            self._files[filename] = MemoryFile(
                name=filename,
                data=data,
                size=len(data),
                mod_time=datetime.now(timezone.utc),
            )

        logger.info(f"Saved {filename} to memory storage ({len(data)} bytes)")

    def get(self, filename: str) -> BinaryIO:
        validate_filename(filename)

        with self._lock.read_locked():
            stored = self._files.get(filename)
            if stored is None:
                raise NotFoundError(filename)
            # BytesIO copies, so readers never share the stored buffer
            return io.BytesIO(stored.data)

    @log_execution_time
    def delete(self, filename: str) -> None:
        validate_filename(filename)

        with self._lock.write_locked():
            if filename not in self._files:
                raise NotFoundError(filename)
            del self._files[filename]

        logger.info(f"Deleted {filename} from memory storage")

    def list(self) -> List[FileRecord]:
        with self._lock.read_locked():
            return [
                FileRecord(
                    name=stored.name,
                    size=stored.size,
                    path=f"{MEMORY_PATH_SCHEME}{stored.name}",
                    is_dir=False,
                    mod_time=stored.mod_time,
                )
                for stored in self._files.values()
            ]

    def clear(self) -> None:
        """Drop every stored file. Meant for test setup and resets."""
        with self._lock.write_locked():
            self._files = {}
        logger.info("Cleared memory storage")
