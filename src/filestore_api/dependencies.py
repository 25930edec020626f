from typing import Optional

from fastapi import Request

from filestore_api.config.settings import Settings
from filestore_api.storage import Storage, StorageSelector


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def resolve_storage(request: Request, storage_type: Optional[str]) -> Storage:
    """Pick the backend named by the request; no name means local storage."""
    selector: StorageSelector = request.app.state.storage_selector
    return selector.select(storage_type)
