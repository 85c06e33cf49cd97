from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime, timezone

from app.api.todo.label.schemas import LabelOut
from app.db.models.todo import TaskStatus, TaskPriority

class TaskBase(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[str] = None         # 🗓 Due Date (date string)

class TaskCreate(TaskBase):
    labels: List[int] = Field(default_factory=list)

class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[str] = None
    # None (or absent) leaves associations alone, [] clears them
    labels: Optional[List[int]] = None

    @field_validator("title", "status", "priority")
    @classmethod
    def reject_explicit_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value

class TaskOut(TaskBase):
    id: int
    created_at: datetime
    updated_at: datetime
    labels: List[LabelOut] = Field(default_factory=list)

    model_config = {
        "from_attributes": True
    }

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive values; they were written as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

class TaskFilter(BaseModel):
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    label: Optional[int] = None
    search: Optional[str] = None
    sort: str = "created_at"
    order: str = "desc"
