from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from ..models import TaskEntity
from ..schemas import TaskCreate, TaskOut
from ..services import TaskService

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
)

_NOT_FOUND = {404: {"description": "Task not found"}}


def get_task_service(request: Request) -> TaskService:
    """
    Dependency returning the TaskService built for this app instance.
    """
    return request.app.state.task_service


def _found(task: TaskEntity | None) -> TaskOut:
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return TaskOut(**task)  # type: ignore[arg-type]


def _many(tasks: List[TaskEntity]) -> List[TaskOut]:
    return [TaskOut(**t) for t in tasks]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TaskOut],
    summary="List Tasks",
    description="Return every task in store order.",
)
def get_all_tasks(service: TaskService = Depends(get_task_service)) -> List[TaskOut]:
    return _many(service.get_all_tasks())


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a new task and return the created resource.",
    responses={
        201: {"description": "Task created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_task(payload: TaskCreate, service: TaskService = Depends(get_task_service)) -> TaskOut:
    """
    Create a new task. The store assigns its id and timestamps.
    """
    created = service.create_task(payload)
    return TaskOut(**created)  # type: ignore[arg-type]


# Static paths are declared before /{task_id} so they are matched first.

# PUBLIC_INTERFACE
@router.get(
    "/completed",
    response_model=List[TaskOut],
    summary="List Completed Tasks",
)
def get_completed_tasks(service: TaskService = Depends(get_task_service)) -> List[TaskOut]:
    return _many(service.get_completed_tasks())


# PUBLIC_INTERFACE
@router.get(
    "/pending",
    response_model=List[TaskOut],
    summary="List Pending Tasks",
)
def get_pending_tasks(service: TaskService = Depends(get_task_service)) -> List[TaskOut]:
    return _many(service.get_pending_tasks())


# PUBLIC_INTERFACE
@router.get(
    "/search",
    response_model=List[TaskOut],
    summary="Search Tasks",
    description=(
        "Return tasks whose title or description contains the keyword (case-insensitive). "
        "An empty keyword returns every task."
    ),
)
def search_tasks(
    keyword: str = Query(..., description="Substring to look for in title/description"),
    service: TaskService = Depends(get_task_service),
) -> List[TaskOut]:
    return _many(service.search_tasks(keyword))


# PUBLIC_INTERFACE
@router.get(
    "/{task_id}",
    response_model=TaskOut,
    summary="Get Task",
    description="Get a single task by ID.",
    responses=_NOT_FOUND,
)
def get_task(task_id: int, service: TaskService = Depends(get_task_service)) -> TaskOut:
    return _found(service.get_task_by_id(task_id))


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}",
    response_model=TaskOut,
    summary="Replace Task",
    description=(
        "Replace title, description and completed of an existing task. Omitted fields "
        "are reset to their schema defaults."
    ),
    responses=_NOT_FOUND,
)
def update_task(task_id: int, payload: TaskCreate, service: TaskService = Depends(get_task_service)) -> TaskOut:
    return _found(service.update_task(task_id, payload))


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Task",
    description="Delete a task by ID.",
    responses={204: {"description": "Task deleted"}, **_NOT_FOUND},
)
def delete_task(task_id: int, service: TaskService = Depends(get_task_service)) -> None:
    """
    Delete a task. Returns 204 on success, 404 if not found.
    """
    if not service.delete_task(task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return None


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}/toggle",
    response_model=TaskOut,
    summary="Toggle Task Status",
    description="Flip the completed flag of a task.",
    responses=_NOT_FOUND,
)
def toggle_task_status(task_id: int, service: TaskService = Depends(get_task_service)) -> TaskOut:
    return _found(service.toggle_task_status(task_id))
