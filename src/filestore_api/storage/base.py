"""
Storage contract shared by every backend.

Both backends own their namespace exclusively; callers only ever go through
the five operations below.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO, List

from filestore_api.schemas import FileRecord


class Storage(ABC):
    """Abstract storage backend."""

    @property
    @abstractmethod
    def kind(self) -> str:
        """Static identifier of the backend, used for diagnostics."""

    @abstractmethod
    def save(self, filename: str, source: BinaryIO) -> None:
        """
        Read ``source`` to the end and store it under ``filename``.

        Saving never replaces an existing file.

        :raises InvalidNameError: If ``filename`` fails validation.
        :raises AlreadyExistsError: If ``filename`` is already stored.
        :raises StorageIOError: If reading the source or writing the medium fails.
        """

    @abstractmethod
    def get(self, filename: str) -> BinaryIO:
        """
        Open a read-once stream over the stored content.

        The caller owns the returned stream and must close it.

        :raises InvalidNameError: If ``filename`` fails validation.
        :raises NotFoundError: If nothing is stored under ``filename``.
        """

    @abstractmethod
    def delete(self, filename: str) -> None:
        """
        Remove a stored file.

        :raises InvalidNameError: If ``filename`` fails validation.
        :raises NotFoundError: If nothing is stored under ``filename``.
        """

    @abstractmethod
    def list(self) -> List[FileRecord]:
        """
        Describe every file currently stored. Order is unspecified.

        :raises StorageIOError: If the backing medium cannot be enumerated.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind!r})"
