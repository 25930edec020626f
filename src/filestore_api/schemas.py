####################################
# --- Request/response schemas --- #
####################################

from datetime import datetime

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


class FileRecord(BaseModel):
    """Metadata of a stored file, recomputed on every listing."""
    name: str = Field(
        description="The name of the file, unique within its storage backend.",
        json_schema_extra={"example": "report.txt"},
    )
    size: int = Field(description="The size of the file in bytes.", ge=0)
    path: str = Field(
        description="Filesystem path for local files, `memory://<name>` for in-memory files.",
        json_schema_extra={"example": "uploads/report.txt"},
    )
    is_dir: bool = Field(default=False, alias="isDir", description="Whether the entry is a directory.")
    mod_time: datetime = Field(alias="modTime", description="The last modified date of the file.")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "report.txt",
                "size": 5,
                "path": "uploads/report.txt",
                "isDir": False,
                "modTime": "2024-01-01T00:00:00Z",
            }
        },
    )


class FileOperationResponse(BaseModel):
    """Response model for `POST /v1/upload` and `DELETE /v1/files/:filename`."""
    success: bool = Field(description="Whether the operation succeeded.")
    message: str = Field(description="A message about the operation.")
    filename: str = Field(
        description="The name of the affected file.",
        json_schema_extra={"example": "report.txt"},
    )


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str = Field(description="Short summary of what failed.")
    code: int = Field(description="The HTTP status code.")
    message: str = Field(description="Summary followed by the underlying cause.")
