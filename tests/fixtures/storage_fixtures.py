"""Storage backend fixtures."""
import io

import pytest

from filestore_api.storage import LocalStorage, MemoryStorage


def as_stream(content: bytes) -> io.BytesIO:
    """Wrap raw bytes in the readable stream ``save`` expects."""
    return io.BytesIO(content)


@pytest.fixture
def storage_root(tmp_path):
    root = tmp_path / "uploads"
    root.mkdir()
    return root


@pytest.fixture
def local_storage(storage_root) -> LocalStorage:
    return LocalStorage(storage_root)


@pytest.fixture
def memory_storage() -> MemoryStorage:
    storage = MemoryStorage()
    yield storage
    storage.clear()


@pytest.fixture(params=["local", "memory"])
def any_storage(request, local_storage, memory_storage):
    """Each contract test runs once per backend."""
    if request.param == "memory":
        return memory_storage
    return local_storage
