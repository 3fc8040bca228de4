"""
Task repository - database operations for Task.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.task import Task, TaskStatus
from app.repositories.task_query import TaskListParams, TaskPage, build_list_query, build_page
from app.schemas.task import TaskCreate, TaskUpdate
from app.utils.time import as_utc, utc_now


def _owned(query, owner_user_id: Optional[int]):
    if owner_user_id is not None:
        query = query.where(Task.owner_user_id == owner_user_id)
    return query


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, params: TaskListParams, anchor: Optional[Task] = None) -> TaskPage:
        """
        List one page of tasks for the given parameters.

        ``anchor`` is the cursor row, required when paging a sorted list.
        """
        result = await self.db.execute(build_list_query(params, anchor))
        return build_page(list(result.scalars().all()), params.limit)

    async def get_cursor_anchor(self, owner_user_id: Optional[int], task_id: int) -> Optional[Task]:
        """Load the row a cursor points at, deleted or not."""
        result = await self.db.execute(_owned(select(Task).where(Task.id == task_id), owner_user_id))
        return result.scalar_one_or_none()

    async def get_by_id(
        self,
        owner_user_id: Optional[int],
        task_id: int,
        include_deleted: bool = False,
    ) -> Optional[Task]:
        """Get an active task by ID for a specific owner."""
        query = _owned(select(Task).where(Task.id == task_id), owner_user_id)
        if not include_deleted:
            query = query.where(Task.deleted_at.is_(None))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_deleted_by_id(self, owner_user_id: Optional[int], task_id: int) -> Optional[Task]:
        """Get a soft-deleted task by ID for a specific owner."""
        query = _owned(
            select(Task).where(Task.id == task_id, Task.deleted_at.is_not(None)),
            owner_user_id,
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_active_by_ids(self, owner_user_id: Optional[int], task_ids: Iterable[int]) -> List[Task]:
        """Get the active tasks among ``task_ids`` owned by the caller."""
        query = _owned(
            select(Task).where(Task.id.in_(list(task_ids)), Task.deleted_at.is_(None)),
            owner_user_id,
        )
        result = await self.db.execute(query.order_by(Task.id.asc()))
        return list(result.scalars().all())

    async def create(self, owner_user_id: Optional[int], data: TaskCreate) -> Task:
        """Create a new task in Pending state."""
        now = utc_now()
        task = Task(
            title=data.title,
            description=data.description,
            status=int(TaskStatus.PENDING),
            priority=data.priority,
            due_date=as_utc(data.due_date),
            tags=data.tags or "[]",
            created_at=now,
            updated_at=now,
            owner_user_id=owner_user_id,
        )
        self.db.add(task)
        await self.db.flush()
        await self.db.refresh(task)
        return task

    async def replace(self, task: Task, data: TaskUpdate) -> Task:
        """Overwrite every mutable field of ``task``."""
        task.title = data.title
        task.description = data.description
        task.status = data.status
        task.priority = data.priority
        task.due_date = as_utc(data.due_date)
        task.tags = data.tags or "[]"
        task.updated_at = utc_now()
        await self.db.flush()
        await self.db.refresh(task)
        return task

    async def soft_delete(self, task: Task) -> Task:
        now = utc_now()
        task.deleted_at = now
        task.updated_at = now
        await self.db.flush()
        return task

    async def restore(self, task: Task) -> Task:
        task.deleted_at = None
        task.updated_at = utc_now()
        await self.db.flush()
        return task

    async def bulk_apply(
        self,
        tasks: List[Task],
        status: Optional[int] = None,
        delete: bool = False,
        now: Optional[datetime] = None,
    ) -> List[Task]:
        """Apply a status change and/or soft delete to already-loaded tasks."""
        now = now or utc_now()
        for task in tasks:
            if status is not None:
                task.status = status
            if delete:
                task.deleted_at = now
            task.updated_at = now
        await self.db.flush()
        return tasks

    async def add_all(self, tasks: List[Task]) -> None:
        self.db.add_all(tasks)
        await self.db.flush()

    async def has_any(self) -> bool:
        result = await self.db.execute(select(Task.id).limit(1))
        return result.first() is not None
