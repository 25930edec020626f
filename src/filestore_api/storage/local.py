"""
Local filesystem storage backend.

Files live directly under a root directory, one file per record, addressed by
name relative to the root. The root must exist before the backend is used.
"""

import logging
import os
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, List, Union

from filestore_api.schemas import FileRecord
from filestore_api.storage.base import Storage
from filestore_api.storage.errors import AlreadyExistsError, NotFoundError, StorageIOError
from filestore_api.storage.locks import ReadWriteLock
from filestore_api.storage.validation import validate_filename
from filestore_api.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 1024 * 1024


class LocalStorage(Storage):
    """Filesystem backend rooted at ``base_path``."""

    def __init__(self, base_path: Union[str, Path]):
        self.base_path = Path(base_path)
        self._lock = ReadWriteLock()

    @property
    def kind(self) -> str:
        return "local"

    def _resolve(self, filename: str) -> Path:
        validate_filename(filename)
        return self.base_path / filename

    @log_execution_time
    def save(self, filename: str, source: BinaryIO) -> None:
        full_path = self._resolve(filename)

        with self._lock.write_locked():
            # the exclusive lock covers both the check and the create
            if os.path.lexists(full_path):
                raise AlreadyExistsError(filename)

            try:
                destination = open(full_path, "xb")
            except FileExistsError as e:
                raise AlreadyExistsError(filename) from e
            except OSError as e:
                raise StorageIOError(f"failed to create file {filename}: {e}", filename) from e

            try:
                with destination:
                    shutil.copyfileobj(source, destination, COPY_CHUNK_SIZE)
            except OSError as e:
                self._discard_partial(full_path)
                raise StorageIOError(f"failed to save file {filename}: {e}", filename) from e
            except BaseException:
                self._discard_partial(full_path)
                raise

        logger.info(f"Saved {filename} to local storage at {full_path}")

    def _discard_partial(self, full_path: Path) -> None:
        """Best-effort removal of a half-written file."""
        try:
            full_path.unlink()
        except OSError as e:
            logger.error(f"Could not remove partial file {full_path}: {str(e)}")

    def get(self, filename: str) -> BinaryIO:
        full_path = self._resolve(filename)

        with self._lock.read_locked():
            try:
                return open(full_path, "rb")
            except FileNotFoundError as e:
                raise NotFoundError(filename) from e
            except OSError as e:
                raise StorageIOError(f"failed to open file {filename}: {e}", filename) from e

    @log_execution_time
    def delete(self, filename: str) -> None:
        full_path = self._resolve(filename)

        with self._lock.write_locked():
            try:
                os.remove(full_path)
            except FileNotFoundError as e:
                raise NotFoundError(filename) from e
            except OSError as e:
                raise StorageIOError(f"failed to delete file {filename}: {e}", filename) from e

        logger.info(f"Deleted {filename} from local storage")

    def list(self) -> List[FileRecord]:
        files: List[FileRecord] = []

        with self._lock.read_locked():
            try:
                with os.scandir(self.base_path) as entries:
                    for entry in entries:
                        info = entry.stat(follow_symlinks=False)
                        files.append(
                            FileRecord(
                                name=entry.name,
                                size=info.st_size,
                                path=str(self.base_path / entry.name),
                                is_dir=entry.is_dir(follow_symlinks=False),
                                mod_time=datetime.fromtimestamp(info.st_mtime, tz=timezone.utc),
                            )
                        )
            except OSError as e:
                raise StorageIOError(f"failed to read directory {self.base_path}: {e}") from e

        return files
