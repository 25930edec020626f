import io
import os
from datetime import datetime, timezone

import pytest

from filestore_api.storage import (
    InvalidNameError,
    LocalStorage,
    NotFoundError,
    StorageIOError,
)
from tests.consts import TEST_FILE_CONTENT, TEST_FILE_NAME, TRAVERSAL_FILE_NAME
from tests.fixtures.storage_fixtures import as_stream


class ClosedUploadStream(io.RawIOBase):
    """Yields some bytes, then fails the way a closed upload file does."""

    def __init__(self):
        self._sent = False

    def readable(self):
        return True

    def readinto(self, buffer):
        if not self._sent:
            self._sent = True
            buffer[:4] = b"part"
            return 4
        raise ValueError("I/O operation on closed file.")


class FailingStream(io.RawIOBase):
    """Yields some bytes, then fails like a dropped connection."""

    def __init__(self):
        self._sent = False

    def readable(self):
        return True

    def readinto(self, buffer):
        if not self._sent:
            self._sent = True
            buffer[:4] = b"part"
            return 4
        raise OSError("connection reset")


def test_report_scenario(local_storage, storage_root):
    local_storage.save(TEST_FILE_NAME, as_stream(TEST_FILE_CONTENT))

    [record] = local_storage.list()
    assert record.name == TEST_FILE_NAME
    assert record.size == 5
    assert record.is_dir is False
    assert record.path == str(storage_root / TEST_FILE_NAME)

    with local_storage.get(TEST_FILE_NAME) as stream:
        assert stream.read() == b"hello"

    local_storage.delete(TEST_FILE_NAME)
    with pytest.raises(NotFoundError):
        local_storage.get(TEST_FILE_NAME)


def test_save_writes_under_root(local_storage, storage_root):
    local_storage.save(TEST_FILE_NAME, as_stream(TEST_FILE_CONTENT))

    assert (storage_root / TEST_FILE_NAME).read_bytes() == TEST_FILE_CONTENT


def test_traversal_name_never_touches_disk(local_storage, storage_root, tmp_path):
    with pytest.raises(InvalidNameError):
        local_storage.save(TRAVERSAL_FILE_NAME, as_stream(b"pwned"))

    assert list(storage_root.iterdir()) == []
    assert sorted(p.name for p in tmp_path.iterdir()) == ["uploads"]


def test_list_is_not_recursive_and_reports_directories(local_storage, storage_root):
    nested = storage_root / "nested"
    nested.mkdir()
    (nested / "inner.txt").write_bytes(b"inner")
    local_storage.save(TEST_FILE_NAME, as_stream(TEST_FILE_CONTENT))

    records = {record.name: record for record in local_storage.list()}

    assert set(records) == {"nested", TEST_FILE_NAME}
    assert records["nested"].is_dir is True
    assert records[TEST_FILE_NAME].is_dir is False


def test_list_uses_filesystem_mtime(local_storage, storage_root):
    local_storage.save(TEST_FILE_NAME, as_stream(TEST_FILE_CONTENT))
    mtime = datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp()
    os.utime(storage_root / TEST_FILE_NAME, (mtime, mtime))

    [record] = local_storage.list()

    assert record.mod_time == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_list_reflects_size_at_listing_time(local_storage, storage_root):
    local_storage.save(TEST_FILE_NAME, as_stream(TEST_FILE_CONTENT))
    (storage_root / TEST_FILE_NAME).write_bytes(b"grown outside the backend")

    [record] = local_storage.list()

    assert record.size == len(b"grown outside the backend")


def test_list_missing_root_is_io_failure(tmp_path):
    storage = LocalStorage(tmp_path / "does-not-exist")

    with pytest.raises(StorageIOError):
        storage.list()


def test_failed_copy_leaves_no_record(local_storage, storage_root):
    with pytest.raises(StorageIOError) as exc_info:
        local_storage.save(TEST_FILE_NAME, io.BufferedReader(FailingStream()))

    assert exc_info.value.filename == TEST_FILE_NAME
    assert isinstance(exc_info.value.__cause__, OSError)
    assert not (storage_root / TEST_FILE_NAME).exists()
    assert local_storage.list() == []


def test_save_into_missing_subdirectory_is_io_failure(local_storage):
    with pytest.raises(StorageIOError):
        local_storage.save("missing-dir/file.txt", as_stream(b"x"))


def test_open_streams_are_independent(local_storage):
    local_storage.save(TEST_FILE_NAME, as_stream(TEST_FILE_CONTENT))

    first = local_storage.get(TEST_FILE_NAME)
    second = local_storage.get(TEST_FILE_NAME)
    first.close()

    with second:
        assert second.read() == TEST_FILE_CONTENT


def test_non_io_failure_mid_copy_leaves_no_record(local_storage, storage_root):
    with pytest.raises(ValueError):
        local_storage.save(TEST_FILE_NAME, ClosedUploadStream())

    assert list(storage_root.iterdir()) == []
    assert local_storage.list() == []

    # the name is free again
    local_storage.save(TEST_FILE_NAME, as_stream(TEST_FILE_CONTENT))


def test_list_tolerates_dangling_symlink(local_storage, storage_root):
    (storage_root / "dangling").symlink_to(storage_root / "no-such-target")
    local_storage.save(TEST_FILE_NAME, as_stream(TEST_FILE_CONTENT))

    records = {record.name: record for record in local_storage.list()}

    assert set(records) == {"dangling", TEST_FILE_NAME}
    assert records["dangling"].is_dir is False
    assert records[TEST_FILE_NAME].size == len(TEST_FILE_CONTENT)
