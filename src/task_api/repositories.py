from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from threading import RLock
from typing import List, Optional

from .models import TaskEntity
from .settings import Settings

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised by a task store when its backing storage fails."""


# PUBLIC_INTERFACE
class TaskStore(ABC):
    """Abstract persistence contract for task storage backends."""

    @abstractmethod
    def find_all(self) -> List[TaskEntity]:
        """Return every task, ordered by id."""

    @abstractmethod
    def find_by_id(self, task_id: int) -> Optional[TaskEntity]:
        """Return a task by id, or None if not found."""

    @abstractmethod
    def find_by_completed(self, completed: bool) -> List[TaskEntity]:
        """Return the tasks whose completed flag equals `completed`, ordered by id."""

    @abstractmethod
    def save(self, task: TaskEntity) -> TaskEntity:
        """
        Insert or update a task and return the stored record.
        - id None: allocate an id, stamp created_at and updated_at
        - id set: overwrite that record, keep created_at, refresh updated_at
        """

    @abstractmethod
    def delete(self, task: TaskEntity) -> None:
        """Remove the record with task['id']. Absent records are ignored."""


class InMemoryTaskStore(TaskStore):
    """
    Thread-safe in-memory store suitable for testing and default runtime.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[int, TaskEntity] = {}
        self._next_id = 1

    def _now(self) -> datetime:
        return datetime.now()

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def find_all(self) -> List[TaskEntity]:
        with self._lock:
            return [self._items[k].copy() for k in sorted(self._items)]

    def find_by_id(self, task_id: int) -> Optional[TaskEntity]:
        with self._lock:
            item = self._items.get(task_id)
            return None if item is None else item.copy()

    def find_by_completed(self, completed: bool) -> List[TaskEntity]:
        return [t for t in self.find_all() if t["completed"] == completed]

    def save(self, task: TaskEntity) -> TaskEntity:
        now = self._now()
        with self._lock:
            stored = task.copy()
            existing = self._items.get(task["id"]) if task["id"] is not None else None
            if task["id"] is None:
                stored["id"] = self._allocate_id()
                stored["created_at"] = now
            elif existing is not None:
                stored["created_at"] = existing["created_at"]
            else:
                # Explicit id not yet held; keep the counter ahead of it
                stored["created_at"] = now
                self._next_id = max(self._next_id, task["id"] + 1)
            stored["updated_at"] = now
            self._items[stored["id"]] = stored
            return stored.copy()

    def delete(self, task: TaskEntity) -> None:
        with self._lock:
            if task["id"] is not None:
                self._items.pop(task["id"], None)


# PUBLIC_INTERFACE
def build_task_store(settings: Settings) -> TaskStore:
    """
    Return the configured task store based on settings.
    - memory: InMemoryTaskStore
    - sqlite: SQLiteTaskStore at settings.sqlite_db_path
    """
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteTaskStore

        logger.info("Using sqlite task store at %s", settings.sqlite_db_path)
        return SQLiteTaskStore(settings.sqlite_db_path)
    logger.info("Using in-memory task store")
    return InMemoryTaskStore()
