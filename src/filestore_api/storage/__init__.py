"""
Storage layer for the Filestore API.

Contains the shared storage contract, the local filesystem and in-memory
backends, the filename validation policy and the backend selector.
"""

from filestore_api.storage.base import Storage
from filestore_api.storage.errors import (
    AlreadyExistsError,
    InvalidNameError,
    NotFoundError,
    StorageError,
    StorageIOError,
    TooLargeError,
)
from filestore_api.storage.local import LocalStorage
from filestore_api.storage.memory import MAX_MEMORY_FILE_SIZE, MemoryStorage
from filestore_api.storage.selector import StorageSelector
from filestore_api.storage.validation import validate_filename

__all__ = [
    "Storage",
    "LocalStorage",
    "MemoryStorage",
    "MAX_MEMORY_FILE_SIZE",
    "StorageSelector",
    "validate_filename",
    "StorageError",
    "InvalidNameError",
    "AlreadyExistsError",
    "NotFoundError",
    "TooLargeError",
    "StorageIOError",
]
