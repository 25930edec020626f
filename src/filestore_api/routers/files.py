import logging
from urllib.parse import quote
from typing import BinaryIO, Iterator, List, Optional

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    Path,
    Query,
    Request,
    UploadFile,
    status
)
from fastapi.responses import StreamingResponse

from filestore_api.config.settings import Settings
from filestore_api.dependencies import get_app_settings, resolve_storage
from filestore_api.errors import HTTP_413_CONTENT_TOO_LARGE, error_response
from filestore_api.schemas import (
    ErrorResponse,
    FileOperationResponse,
    FileRecord,
)

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 64 * 1024

router = APIRouter()

STORAGE_QUERY_DESCRIPTION = "Storage backend: `local` or `memory`. Anything else, or nothing, uses `local`."


def content_disposition(filename: str) -> str:
    """
    Attachment header safe for any filename (RFC 6266).

    Non-ASCII names get a `?`-substituted `filename` fallback plus the exact
    name percent-encoded in `filename*`.
    """
    fallback = filename.encode("ascii", "replace").decode("ascii")
    fallback = fallback.replace("\\", "\\\\").replace('"', '\\"')
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def iter_stream(stream: BinaryIO, chunk_size: int = DOWNLOAD_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield ``stream`` in chunks, closing it even if the client goes away mid-download."""
    try:
        while chunk := stream.read(chunk_size):
            yield chunk
    finally:
        stream.close()


@router.get("/files", response_model=List[FileRecord])
def list_files(
    request: Request,
    storage: Optional[str] = Query(None, description=STORAGE_QUERY_DESCRIPTION),
):
    """
    List every file held by the selected backend.

    Order is not guaranteed.
    """
    selected_storage = resolve_storage(request, storage)
    return selected_storage.list()


@router.get(
    "/files/{filename}",
    response_class=StreamingResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def download_file(
    request: Request,
    filename: str = Path(..., description="The name of the file to download"),
    storage: Optional[str] = Query(None, description=STORAGE_QUERY_DESCRIPTION),
):
    """
    Download a file as an attachment.

    The content is streamed straight from the backend.
    """
    selected_storage = resolve_storage(request, storage)
    headers = {"Content-Disposition": content_disposition(filename)}
    stream = selected_storage.get(filename)

    try:
        return StreamingResponse(
            iter_stream(stream),
            media_type="application/octet-stream",
            headers=headers,
        )
    except BaseException:
        stream.close()
        raise


@router.delete(
    "/files/{filename}",
    response_model=FileOperationResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def delete_file(
    request: Request,
    filename: str = Path(..., description="The name of the file to delete"),
    storage: Optional[str] = Query(None, description=STORAGE_QUERY_DESCRIPTION),
) -> FileOperationResponse:
    """Delete a file from the selected backend."""
    selected_storage = resolve_storage(request, storage)
    selected_storage.delete(filename)

    return FileOperationResponse(
        success=True,
        message="File deleted successfully",
        filename=filename,
    )


@router.post(
    "/upload",
    response_model=FileOperationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
        HTTP_413_CONTENT_TOO_LARGE: {"model": ErrorResponse},
    },
)
def upload_file(
    request: Request,
    file: Optional[UploadFile] = File(None, description="The file to upload"),
    storage: Optional[str] = Form(None, description=STORAGE_QUERY_DESCRIPTION),
    settings: Settings = Depends(get_app_settings),
):
    """
    Upload a file from a multipart form.

    Uploads never replace an existing file: saving a name that is already
    stored answers 409.
    """
    if file is None or not file.filename:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Failed to get file from request",
            "the form has no 'file' field",
        )

    if file.size is not None and file.size > settings.max_upload_size_bytes:
        return error_response(
            HTTP_413_CONTENT_TOO_LARGE,
            "File too large",
            f"uploads are limited to {settings.max_upload_size_bytes} bytes",
        )

    selected_storage = resolve_storage(request, storage)
    selected_storage.save(file.filename, file.file)

    logger.info(f"Uploaded {file.filename} to {selected_storage.kind} storage")
    return FileOperationResponse(
        success=True,
        message=f"File uploaded successfully to {selected_storage.kind} storage",
        filename=file.filename,
    )
