"""
Default application instance for ASGI servers:

    uvicorn task_api.main:app

Importing this module builds the configured task store.
"""
from .application import create_app, openapi_tags  # noqa: F401

app = create_app()
