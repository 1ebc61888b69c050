from __future__ import annotations

from fastapi import APIRouter, Request

from .. import __version__

SERVICE_NAME = "task-manager-api"

router = APIRouter(tags=["health"])


# PUBLIC_INTERFACE
@router.get("/", summary="Welcome")
def root():
    """
    Welcome endpoint.

    Returns:
        A JSON object with a greeting and the API version.
    """
    return {"message": "Welcome to Task Manager API", "version": __version__}


# PUBLIC_INTERFACE
@router.get("/health", summary="Health Check")
def health_check(request: Request):
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health and the active storage backend.
    """
    return {
        "status": "UP",
        "service": SERVICE_NAME,
        "backend": request.app.state.settings.persistence_backend,
    }
