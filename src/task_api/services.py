from __future__ import annotations

import logging
from typing import List, Optional

from .models import TaskEntity, new_task
from .repositories import TaskStore
from .schemas import TaskCreate

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TaskService:
    """
    Business rules for tasks on top of a TaskStore.

    Lookups that find nothing return None (or False for delete) instead of
    raising. Every call re-reads from the store; nothing is cached here.
    """

    def __init__(self, store: TaskStore) -> None:
        self.store = store

    def get_all_tasks(self) -> List[TaskEntity]:
        return self.store.find_all()

    def get_task_by_id(self, task_id: int) -> Optional[TaskEntity]:
        task = self.store.find_by_id(task_id)
        if task is None:
            logger.debug("Task %s not found", task_id)
        return task

    def create_task(self, data: TaskCreate) -> TaskEntity:
        created = self.store.save(new_task(data.title, data.description, data.completed))
        logger.info("Created task %s", created["id"])
        return created

    def update_task(self, task_id: int, data: TaskCreate) -> Optional[TaskEntity]:
        """Replace title, description and completed wholesale."""
        task = self.get_task_by_id(task_id)
        if task is None:
            return None
        task["title"] = data.title
        task["description"] = data.description
        task["completed"] = data.completed
        updated = self.store.save(task)
        logger.info("Updated task %s", task_id)
        return updated

    def delete_task(self, task_id: int) -> bool:
        task = self.get_task_by_id(task_id)
        if task is None:
            return False
        self.store.delete(task)
        logger.info("Deleted task %s", task_id)
        return True

    def get_completed_tasks(self) -> List[TaskEntity]:
        return self.store.find_by_completed(True)

    def get_pending_tasks(self) -> List[TaskEntity]:
        return self.store.find_by_completed(False)

    def search_tasks(self, keyword: str) -> List[TaskEntity]:
        """
        Return tasks whose title or description contains `keyword`, ignoring case.
        An empty keyword matches every task; store order is kept.
        """
        k = keyword.lower()

        def matches(t: TaskEntity) -> bool:
            return k in t["title"].lower() or k in (t["description"] or "").lower()

        return [t for t in self.store.find_all() if matches(t)]

    def toggle_task_status(self, task_id: int) -> Optional[TaskEntity]:
        task = self.get_task_by_id(task_id)
        if task is None:
            return None
        task["completed"] = not task["completed"]
        toggled = self.store.save(task)
        logger.info("Toggled task %s to completed=%s", task_id, toggled["completed"])
        return toggled
