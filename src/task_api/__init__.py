"""
FastAPI Task Manager package.

The application is built by task_api.application.create_app; task_api.main.app is the
default instance for ASGI servers (e.g. `uvicorn task_api.main:app`).
"""

__version__ = "1.0.0"
