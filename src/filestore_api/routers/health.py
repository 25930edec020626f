import logging

from fastapi import APIRouter, Request

from filestore_api.storage import StorageError, StorageSelector

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
def health_check(request: Request):
    """
    Health check endpoint for monitoring API status and backend readiness.

    A backend is ready when it can list its contents.
    """
    selector: StorageSelector = request.app.state.storage_selector

    health_status = {
        "status": "ok",
        "components": {
            "api": "ready",
        },
        "ready": False
    }

    for backend in (selector.local, selector.memory):
        try:
            backend.list()
            health_status["components"][backend.kind] = "ready"
        except StorageError as e:
            logger.warning(f"{backend.kind} storage is not ready: {str(e)}")
            health_status["components"][backend.kind] = f"error: {str(e)}"
            health_status["status"] = "degraded"

    health_status["ready"] = all(
        state == "ready" for state in health_status["components"].values()
    )

    return health_status
