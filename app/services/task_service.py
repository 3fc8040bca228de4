"""
Task business logic service.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import BadRequest, NotFound, ValidationFailed
from app.models.task import Task
from app.repositories.task_query import InvalidSortField, TaskListParams, TaskPage
from app.repositories.task_repository import TaskRepository
from app.schemas.base import FieldError
from app.schemas.task import BulkUpdateRequest, TaskCreate, TaskUpdate
from app.services.validators import (
    PRIORITY_MESSAGE,
    STATUS_MESSAGE,
    ensure_valid,
    is_valid_priority,
    is_valid_status,
    validate_bulk_update,
    validate_task_create,
    validate_task_update,
)

logger = logging.getLogger(__name__)


def _check_task_id(task_id: int) -> None:
    if task_id <= 0:
        raise BadRequest("Invalid task ID")


class TaskService:
    """
    Service for task business logic.

    ``owner_user_id`` is the caller; None means unauthenticated access with
    auth disabled, in which case no ownership filter applies.
    """

    def __init__(self, db: AsyncSession):
        self.repository = TaskRepository(db)

    async def list_tasks(
        self,
        owner_user_id: Optional[int],
        status: Optional[int] = None,
        priority: Optional[int] = None,
        search: Optional[str] = None,
        include_deleted: bool = False,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        cursor: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> TaskPage:
        """List one page of tasks with filters, sort and cursor."""
        errors = []
        if status is not None and not is_valid_status(status):
            errors.append(FieldError(field="Status", message=STATUS_MESSAGE))
        if priority is not None and not is_valid_priority(priority):
            errors.append(FieldError(field="Priority", message=PRIORITY_MESSAGE))
        ensure_valid(errors)

        try:
            params = TaskListParams.from_request(
                owner_user_id=owner_user_id,
                status=status,
                priority=priority,
                search=search,
                include_deleted=include_deleted,
                sort_by=sort_by,
                sort_order=sort_order,
                cursor=cursor,
                limit=limit,
            )
        except InvalidSortField as exc:
            raise ValidationFailed([FieldError(field="SortBy", message=str(exc))]) from exc

        anchor = None
        if params.cursor is not None and params.sort_by is not None:
            anchor = await self.repository.get_cursor_anchor(owner_user_id, params.cursor)
            if anchor is None:
                raise ValidationFailed([FieldError(field="Cursor", message="Invalid cursor")])

        page = await self.repository.list(params, anchor)
        logger.info(
            "Retrieved %d tasks with filters: status=%s priority=%s search=%s sort=%s %s",
            len(page.tasks), status, priority, search, params.sort_by or "id", params.sort_order,
        )
        return page

    async def get_task(self, owner_user_id: Optional[int], task_id: int, include_deleted: bool = False) -> Task:
        """Get a task by ID or raise NotFound."""
        _check_task_id(task_id)
        task = await self.repository.get_by_id(owner_user_id, task_id, include_deleted=include_deleted)
        if task is None:
            raise NotFound("Task not found")
        return task

    async def create_task(self, owner_user_id: Optional[int], data: TaskCreate) -> Task:
        """Create a new task owned by the caller."""
        ensure_valid(validate_task_create(data))
        task = await self.repository.create(owner_user_id, data)
        logger.info("Created new task with ID: %s", task.id)
        return task

    async def update_task(self, owner_user_id: Optional[int], task_id: int, data: TaskUpdate) -> Task:
        """Replace all mutable fields of an active task."""
        _check_task_id(task_id)
        ensure_valid(validate_task_update(data))

        task = await self.repository.get_by_id(owner_user_id, task_id)
        if task is None:
            raise NotFound("Task not found")

        task = await self.repository.replace(task, data)
        logger.info("Updated task with ID: %s", task_id)
        return task

    async def delete_task(self, owner_user_id: Optional[int], task_id: int) -> Task:
        """Soft delete an active task."""
        _check_task_id(task_id)
        task = await self.repository.get_by_id(owner_user_id, task_id)
        if task is None:
            raise NotFound("Task not found")

        await self.repository.soft_delete(task)
        logger.info("Soft deleted task with ID: %s", task_id)
        return task

    async def restore_task(self, owner_user_id: Optional[int], task_id: int) -> Task:
        """Clear the soft delete of a deleted task."""
        _check_task_id(task_id)
        task = await self.repository.get_deleted_by_id(owner_user_id, task_id)
        if task is None:
            raise NotFound("Deleted task not found")

        await self.repository.restore(task)
        logger.info("Restored task with ID: %s", task_id)
        return task

    async def bulk_update(self, owner_user_id: Optional[int], data: BulkUpdateRequest) -> Tuple[int, str]:
        """
        Apply status and/or soft delete to every requested task, or to none.

        Returns:
            Tuple of (number of tasks changed, "updated" or "deleted")

        Raises:
            NotFound: none of the ids resolve
            BadRequest: some ids are missing, deleted, or not owned by the caller
        """
        ensure_valid(validate_bulk_update(data))

        requested = list(dict.fromkeys(data.task_ids))
        tasks = await self.repository.get_active_by_ids(owner_user_id, requested)

        if not tasks:
            raise NotFound("No tasks found to update")

        if len(tasks) != len(requested):
            found = {task.id for task in tasks}
            missing = [task_id for task_id in requested if task_id not in found]
            raise BadRequest(f"Tasks not found: {', '.join(str(i) for i in missing)}")

        delete = data.delete is True
        await self.repository.bulk_apply(tasks, status=data.status, delete=delete)

        action = "deleted" if delete else "updated"
        logger.info("Bulk %s %d tasks", action, len(tasks))
        return len(tasks), action
