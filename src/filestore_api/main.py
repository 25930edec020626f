from pathlib import Path
from textwrap import dedent
import logging
import pydantic
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from fastapi.middleware.cors import CORSMiddleware

from filestore_api.errors import (
    handle_broad_exceptions,
    handle_pydantic_validation_errors,
    handle_storage_errors,
)
from filestore_api.routers.files import router as files_router
from filestore_api.routers.health import router as health_router
from filestore_api.config.settings import Settings
from filestore_api.storage import (
    LocalStorage,
    MemoryStorage,
    StorageError,
    StorageSelector,
)

# Set up logging
logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or Settings()

    app = FastAPI(
        title="Filestore API",
        summary="Upload, download, list and delete files on local or in-memory storage",
        version="v1",  # a fancier version would read the semver from pkg metadata
        description=dedent(
            """\
        | Endpoint | Notes |
        | --- | --- |
        | `GET /v1/files?storage=local` | List files |
        | `GET /v1/files/{filename}?storage=local` | Download a file |
        | `DELETE /v1/files/{filename}?storage=local` | Delete a file |
        | `POST /v1/upload` | Upload a file (multipart field `file`, optional field `storage`) |

        `storage` is `local` or `memory`; anything else uses local storage.
        """
        ),
        docs_url="/",  # its easier to find the docs when they live on the base url
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.state.settings = settings
    app.state.storage_selector = create_storage_selector(settings)

    app.include_router(files_router, prefix="/v1", tags=["files"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=StorageError,
        handler=handle_storage_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=RequestValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def create_storage_selector(settings: Settings) -> StorageSelector:
    """Build both backends; the local root is created if missing."""
    storage_dir = Path(settings.storage_dir)
    storage_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Local storage rooted at {storage_dir.resolve()}")

    return StorageSelector(
        local=LocalStorage(storage_dir),
        memory=MemoryStorage(max_file_size=settings.memory_max_file_size_bytes),
    )


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)
