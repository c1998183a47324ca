from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from ..database import get_db
from ..schemas.task import Task as TaskSchema, TaskPayload, TaskStatusUpdate
from ..schemas.user import TokenClaims
from ..security import get_current_user
from ..stores import tasks as task_store

router = APIRouter()


def _get_update_data(payload: TaskPayload) -> dict:
    return payload.model_dump(exclude_unset=True, exclude_none=True)


@router.post("/tasks", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskPayload,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a new task owned by the caller."""
    return task_store.create_task(db, _get_update_data(task), current_user.id)


@router.get("/tasks", response_model=List[TaskSchema])
def get_tasks(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the caller's tasks, optionally restricted to one status."""
    return task_store.list_tasks(db, current_user.id, status_filter)


@router.get("/tasks/{task_id}", response_model=TaskSchema)
def get_task(
    task_id: str,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return task_store.get_task(db, task_id, current_user.id)


@router.put("/tasks/{task_id}", response_model=TaskSchema)
def update_task(
    task_id: str,
    task_update: TaskPayload,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Replace the provided fields of a task."""
    return task_store.update_task(db, task_id, current_user.id, _get_update_data(task_update))


@router.patch("/tasks/{task_id}/status", response_model=TaskSchema)
def update_task_status(
    task_id: str,
    payload: TaskStatusUpdate,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return task_store.update_task_status(db, task_id, current_user.id, payload.status)


@router.delete("/tasks/{task_id}", response_model=TaskSchema)
def delete_task(
    task_id: str,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a task and return it."""
    return task_store.delete_task(db, task_id, current_user.id)
