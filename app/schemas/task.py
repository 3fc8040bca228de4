"""
Task Pydantic schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import field_validator

from app.models.task import TaskPriority, TaskStatus
from app.schemas.base import CamelModel
from app.utils.time import as_utc


class TaskCreate(CamelModel):
    """Schema for creating a new task. Field rules live in services.validators."""

    title: Optional[str] = None
    description: Optional[str] = None
    priority: int = int(TaskPriority.MEDIUM)
    due_date: Optional[datetime] = None
    tags: Optional[str] = None


class TaskUpdate(CamelModel):
    """Schema for replacing the mutable fields of a task."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: int = int(TaskStatus.PENDING)
    priority: int = int(TaskPriority.MEDIUM)
    due_date: Optional[datetime] = None
    tags: Optional[str] = None


class BulkUpdateRequest(CamelModel):
    """Apply a status change and/or soft delete to several tasks at once."""

    task_ids: Optional[List[int]] = None
    status: Optional[int] = None
    delete: Optional[bool] = None


class TaskRead(CamelModel):
    """Schema for reading task data (API response)."""

    id: int
    title: str
    description: Optional[str] = None
    status: int
    priority: int
    due_date: Optional[datetime] = None
    tags: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None
    owner_user_id: Optional[int] = None

    @field_validator("due_date", "created_at", "updated_at", "deleted_at")
    @classmethod
    def _aware_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class TaskListResponse(CamelModel):
    """One page of tasks plus the cursor for the next one."""

    tasks: List[TaskRead]
    has_next_page: bool
    next_cursor: Optional[int] = None
    limit: int
