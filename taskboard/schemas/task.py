from pydantic import BaseModel, Field, field_validator
from datetime import datetime, timezone
from typing import Optional

from ..models.task import TaskPriority, TaskStatus


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return an aware UTC datetime; naive values are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class TaskPayload(BaseModel):
    """Body accepted by task creation and full update.

    The owner is never taken from the body; unknown keys are rejected.
    """
    title: str = Field(min_length=1)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    status: Optional[TaskStatus] = None

    class Config:
        extra = "forbid"
        use_enum_values = True

    @field_validator("due_date")
    @classmethod
    def due_date_in_utc(cls, value):
        return as_utc(value)


class TaskStatusUpdate(BaseModel):
    """Schema for the status-only update."""
    status: TaskStatus

    class Config:
        use_enum_values = True


class Task(BaseModel):
    """Task as returned by the API."""
    id: str
    title: str
    description: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[datetime] = Field(default=None, serialization_alias="dueDate")
    status: str
    owner_id: str = Field(serialization_alias="owner")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    class Config:
        from_attributes = True

    # SQLite hands datetimes back without tzinfo.
    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def timestamps_in_utc(cls, value):
        return as_utc(value)
