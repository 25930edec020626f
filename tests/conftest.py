from tests.fixtures.api_client import client, settings  # noqa: F401
from tests.fixtures.storage_fixtures import (  # noqa: F401
    any_storage,
    local_storage,
    memory_storage,
    storage_root,
)
