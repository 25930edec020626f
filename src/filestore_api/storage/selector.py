"""Maps a caller-supplied backend name to one of the long-lived backends."""

from typing import Optional

from filestore_api.storage.base import Storage

MEMORY_STORAGE = "memory"
LOCAL_STORAGE = "local"


class StorageSelector:
    """
    Holds both backends for the lifetime of the process.

    Anything other than ``"memory"`` (including no name at all) selects the
    local backend.
    """

    def __init__(self, local: Storage, memory: Storage):
        self.local = local
        self.memory = memory

    def select(self, storage_type: Optional[str]) -> Storage:
        if storage_type == MEMORY_STORAGE:
            return self.memory
        return self.local
