"""Translate exceptions into the JSON error envelope."""

import logging

import pydantic
from fastapi import (
    Request,
    status,
)
from fastapi.responses import JSONResponse

from filestore_api.schemas import ErrorResponse
from filestore_api.storage.errors import (
    AlreadyExistsError,
    InvalidNameError,
    NotFoundError,
    StorageError,
    StorageIOError,
    TooLargeError,
)

logger = logging.getLogger(__name__)

HTTP_413_CONTENT_TOO_LARGE = 413
HTTP_422_UNPROCESSABLE_CONTENT = 422

# (status code, summary) for each storage failure kind
STORAGE_ERROR_STATUS = {
    InvalidNameError: (status.HTTP_400_BAD_REQUEST, "Invalid file name"),
    NotFoundError: (status.HTTP_404_NOT_FOUND, "File not found"),
    AlreadyExistsError: (status.HTTP_409_CONFLICT, "File already exists"),
    TooLargeError: (HTTP_413_CONTENT_TOO_LARGE, "File too large"),
    StorageIOError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Storage failure"),
}


def error_response(status_code: int, summary: str, detail: str | None = None) -> JSONResponse:
    """Build an error envelope; ``detail`` is appended to the summary in ``message``."""
    body = ErrorResponse(
        error=summary,
        code=status_code,
        message=f"{summary}: {detail}" if detail else summary,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def handle_storage_errors(request: Request, exc: StorageError) -> JSONResponse:
    """Map each storage failure kind onto its HTTP status."""
    status_code, summary = status.HTTP_500_INTERNAL_SERVER_ERROR, "Storage failure"
    for exc_class, mapped in STORAGE_ERROR_STATUS.items():
        if isinstance(exc, exc_class):
            status_code, summary = mapped
            break

    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {str(exc)}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {str(exc)}")
    return error_response(status_code, summary, str(exc))


async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
    errors = exc.errors()
    detail = "; ".join(f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in errors)
    return error_response(HTTP_422_UNPROCESSABLE_CONTENT, "Invalid request", detail)


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception as e:  # pylint: disable=broad-except
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(e))
