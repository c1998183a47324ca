"""Task persistence.

Every lookup filters on the task id *and* the owner id, so a task that
belongs to someone else is reported exactly like one that does not exist.
Updates and deletes are single owner-filtered statements with RETURNING,
so a row removed concurrently also surfaces as NotFound.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, update
from sqlmodel import Session, select

from ..errors import NotFound
from ..models import Task


def _owned(task_id: str, owner_id: str):
    return (Task.id == task_id, Task.owner_id == owner_id)


def _first_or_not_found(session: Session, statement) -> Task:
    task = session.execute(statement).scalars().first()
    session.commit()
    if task is None:
        raise NotFound()
    return task


def create_task(session: Session, fields: Dict[str, Any], owner_id: str) -> Task:
    task = Task(**fields, owner_id=owner_id)
    session.add(task)
    session.commit()
    session.refresh(task)
    return task


def list_tasks(session: Session, owner_id: str, status: Optional[str] = None) -> List[Task]:
    query = select(Task).where(Task.owner_id == owner_id)
    if status:
        query = query.where(Task.status == status)
    return list(session.exec(query).all())


def get_task(session: Session, task_id: str, owner_id: str) -> Task:
    task = session.exec(select(Task).where(*_owned(task_id, owner_id))).first()
    if not task:
        raise NotFound()
    return task


def update_task(session: Session, task_id: str, owner_id: str, fields: Dict[str, Any]) -> Task:
    """Overwrite the provided fields of an owned task."""
    statement = (
        update(Task)
        .where(*_owned(task_id, owner_id))
        .values(**fields, updated_at=datetime.now(timezone.utc))
        .returning(Task)
        .execution_options(populate_existing=True)
    )
    return _first_or_not_found(session, statement)


def update_task_status(session: Session, task_id: str, owner_id: str, status: str) -> Task:
    return update_task(session, task_id, owner_id, {"status": status})


def delete_task(session: Session, task_id: str, owner_id: str) -> Task:
    """Delete an owned task and return its last state."""
    statement = delete(Task).where(*_owned(task_id, owner_id)).returning(Task)
    return _first_or_not_found(session, statement)
