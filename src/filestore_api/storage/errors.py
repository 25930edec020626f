"""Typed failures raised by the storage backends."""


class StorageError(Exception):
    """Base class for every storage failure.

    :param filename: The name the failing operation was called with, if any.
    """

    def __init__(self, message: str, filename: str | None = None):
        super().__init__(message)
        self.filename = filename


class InvalidNameError(StorageError):
    """The filename was rejected by the validation policy."""

    def __init__(self, filename: str):
        super().__init__(f"invalid file name: {filename!r}", filename)


class AlreadyExistsError(StorageError):
    """A create-only save collided with an existing file."""

    def __init__(self, filename: str):
        super().__init__(f"file already exists: {filename}", filename)


class NotFoundError(StorageError):
    """The requested file is not present in the backend."""

    def __init__(self, filename: str):
        super().__init__(f"file not found: {filename}", filename)


class TooLargeError(StorageError):
    """The content exceeds the backend's size ceiling."""

    def __init__(self, filename: str, size: int, limit: int):
        super().__init__(
            f"file too large: {filename} is {size} bytes, maximum {limit} bytes allowed",
            filename,
        )
        self.size = size
        self.limit = limit


class StorageIOError(StorageError):
    """The underlying storage medium failed (disk I/O, permissions, unreadable directory)."""
