from __future__ import annotations

from datetime import datetime
from typing import Optional, TypedDict


# PUBLIC_INTERFACE
class TaskEntity(TypedDict):
    """
    A lightweight domain model representing a task for non-ORM storage
    backends.

    Fields:
    - id: Unique integer identifier, None until the task is first saved
    - title: Short title (1..200 chars, trimmed on input via schemas)
    - description: Optional detailed description
    - completed: Boolean completion flag
    - created_at: Local creation timestamp, set by the store on insert
    - updated_at: Local last update timestamp, set by the store on every save
    """

    id: Optional[int]
    title: str
    description: Optional[str]
    completed: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


def new_task(title: str, description: Optional[str] = None, completed: bool = False) -> TaskEntity:
    """Build an unsaved TaskEntity; the store fills in id and timestamps."""
    return {
        "id": None,
        "title": title,
        "description": description,
        "completed": completed,
        "created_at": None,
        "updated_at": None,
    }
