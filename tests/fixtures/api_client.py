"""FastAPI test client fixtures."""
import pytest
from fastapi.testclient import TestClient

from filestore_api.config.settings import Settings
from filestore_api.main import create_app

TEST_MAX_UPLOAD_SIZE = 1024


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        storage_dir=str(tmp_path / "uploads"),
        max_upload_size_bytes=TEST_MAX_UPLOAD_SIZE,
    )


@pytest.fixture
def client(settings) -> TestClient:
    app = create_app(settings=settings)
    with TestClient(app) as client:
        yield client
