# src/filestore_api/config/settings.py
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from filestore_api.config.settings import get_settings
        settings = get_settings()
        storage_dir = settings.storage_dir
    """

    # Application Settings
    app_name: str = Field(
        default="filestore-api",
        description="Application name"
    )

    # Storage Configuration
    storage_dir: str = Field(
        default="uploads",
        description="Root directory of the local storage backend"
    )

    max_upload_size_bytes: int = Field(
        default=32 * 1024 * 1024,
        gt=0,
        description="Largest accepted multipart upload"
    )

    memory_max_file_size_bytes: int = Field(
        default=100 * 1024 * 1024,
        gt=0,
        description="Largest file the memory backend will hold"
    )

    # HTTP Server
    host: str = Field(
        default="0.0.0.0",
        description="Interface uvicorn binds to"
    )

    port: int = Field(
        default=8080,
        description="Port uvicorn listens on"
    )

    cors_allow_origins: List[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v):
        """Accept level names in any case."""
        level = str(v).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {v}")
        return level

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
