# cli.py
import logging
from pathlib import Path

import click
import uvicorn

from filestore_api.config.settings import get_settings

# Configure logging
logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the Filestore API"""
    pass


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    print(f"  App Name: {settings.app_name}")
    print(f"  Storage Directory: {settings.storage_dir}")
    print(f"  Max Upload Size: {settings.max_upload_size_bytes} bytes")
    print(f"  Memory File Limit: {settings.memory_max_file_size_bytes} bytes")
    print(f"  Listen Address: {settings.host}:{settings.port}")
    print(f"  CORS Origins: {', '.join(settings.cors_allow_origins)}")
    print(f"  Log Level: {settings.log_level}")


@cli.command()
@click.option("--host", default=None, help="Interface to bind (defaults to settings.host)")
@click.option("--port", type=int, default=None, help="Port to listen on (defaults to settings.port)")
@click.option("--reload", is_flag=True, default=False, help="Restart the server when code changes")
def serve(host, port, reload):
    """Run the API with uvicorn"""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    Path(settings.storage_dir).mkdir(parents=True, exist_ok=True)
    host = host or settings.host
    port = port or settings.port

    logger.info(f"Server starting on http://{host}:{port}")
    logger.info("API endpoints:")
    logger.info("  GET    /v1/files?storage=local")
    logger.info("  GET    /v1/files/{filename}?storage=local")
    logger.info("  DELETE /v1/files/{filename}?storage=local")
    logger.info("  POST   /v1/upload")

    uvicorn.run(
        "filestore_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
