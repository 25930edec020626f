import pytest

from filestore_api.storage import (
    MAX_MEMORY_FILE_SIZE,
    AlreadyExistsError,
    MemoryStorage,
    NotFoundError,
    TooLargeError,
)
from tests.consts import TEST_FILE_CONTENT, TEST_FILE_NAME
from tests.fixtures.storage_fixtures import as_stream


def test_default_limit_is_100_mib():
    assert MAX_MEMORY_FILE_SIZE == 100 * 1024 * 1024
    assert MemoryStorage().max_file_size == MAX_MEMORY_FILE_SIZE


def test_save_over_limit_fails_without_creating_record():
    storage = MemoryStorage(max_file_size=8)

    with pytest.raises(TooLargeError) as exc_info:
        storage.save("big.bin", as_stream(b"123456789"))

    assert exc_info.value.size == 9
    assert exc_info.value.limit == 8
    assert storage.list() == []
    with pytest.raises(NotFoundError):
        storage.get("big.bin")


def test_save_at_limit_succeeds():
    storage = MemoryStorage(max_file_size=8)

    storage.save("exact.bin", as_stream(b"12345678"))

    [record] = storage.list()
    assert record.size == 8


def test_existing_name_is_reported_before_size():
    storage = MemoryStorage(max_file_size=4)
    storage.save(TEST_FILE_NAME, as_stream(b"ok"))

    with pytest.raises(AlreadyExistsError):
        storage.save(TEST_FILE_NAME, as_stream(b"far too large"))


def test_list_uses_memory_scheme(memory_storage):
    memory_storage.save(TEST_FILE_NAME, as_stream(TEST_FILE_CONTENT))

    [record] = memory_storage.list()

    assert record.name == TEST_FILE_NAME
    assert record.path == f"memory://{TEST_FILE_NAME}"
    assert record.is_dir is False
    assert record.size == len(TEST_FILE_CONTENT)


def test_reader_is_detached_from_later_changes(memory_storage):
    memory_storage.save(TEST_FILE_NAME, as_stream(b"original"))
    stream = memory_storage.get(TEST_FILE_NAME)

    memory_storage.delete(TEST_FILE_NAME)
    memory_storage.save(TEST_FILE_NAME, as_stream(b"replaced"))

    assert stream.read() == b"original"


def test_clear_empties_storage(memory_storage):
    memory_storage.save("a.txt", as_stream(b"a"))
    memory_storage.save("b.txt", as_stream(b"b"))

    memory_storage.clear()

    assert memory_storage.list() == []
    memory_storage.save("a.txt", as_stream(b"again"))
