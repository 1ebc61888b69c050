from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .logging_setup import setup_logging
from .repositories import StoreError, TaskStore, build_task_store
from .routers import health as health_router
from .routers import tasks as tasks_router
from .services import TaskService
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "tasks", "description": "CRUD operations for tasks, completion filters, search and toggling."},
]


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            # Validator errors carry the raised exception object in ctx
            "detail": jsonable_encoder(exc.errors()),
        },
    )


async def store_exception_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Answer 503 when the task store fails underneath a request."""
    logger.error("Task store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"error": "StoreError", "message": "Task store unavailable"},
    )


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, store: Optional[TaskStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The task store is constructed here once per app and shared by every request
    through app.state.task_service. Pass `store` to inject one (tests do).
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Task Manager API",
        description="REST API for managing tasks with pluggable storage backends.",
        version=__version__,
        openapi_tags=openapi_tags,
    )

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StoreError, store_exception_handler)  # type: ignore[arg-type]

    app.state.settings = settings
    app.state.task_service = TaskService(store if store is not None else build_task_store(settings))

    app.include_router(health_router.router)
    app.include_router(tasks_router.router)

    logger.info("Task Manager API %s ready (backend=%s)", __version__, settings.persistence_backend)
    return app
