"""
Task router - API endpoints for tasks.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_task_owner
from app.errors import operation_guard
from app.schemas.base import ApiResponse
from app.schemas.task import BulkUpdateRequest, TaskCreate, TaskListResponse, TaskRead, TaskUpdate
from app.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=ApiResponse[TaskListResponse])
async def list_tasks(
    owner_id: Optional[int] = Depends(get_task_owner),
    db: AsyncSession = Depends(get_db),
    status: Optional[int] = None,
    priority: Optional[int] = None,
    search: Optional[str] = None,
    include_deleted: bool = Query(False, alias="includeDeleted"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    cursor: Optional[int] = None,
    limit: int = 10,
):
    """
    List tasks with cursor pagination and filters.

    Filters: status, priority, search (title, case-insensitive), includeDeleted.
    Sort: sortBy (dueDate, createdAt, updatedAt, priority, status, title), sortOrder.
    """
    with operation_guard("Failed to retrieve tasks"):
        service = TaskService(db)
        page = await service.list_tasks(
            owner_id,
            status=status,
            priority=priority,
            search=search,
            include_deleted=include_deleted,
            sort_by=sort_by,
            sort_order=sort_order,
            cursor=cursor,
            limit=limit,
        )
        data = TaskListResponse(
            tasks=[TaskRead.model_validate(t) for t in page.tasks],
            has_next_page=page.has_next_page,
            next_cursor=page.next_cursor,
            limit=page.limit,
        )
    return ApiResponse.ok(data)


@router.patch("/bulk", response_model=ApiResponse[None])
async def bulk_update_tasks(
    data: BulkUpdateRequest,
    owner_id: Optional[int] = Depends(get_task_owner),
    db: AsyncSession = Depends(get_db),
):
    """Change status and/or soft delete several tasks; all or nothing."""
    with operation_guard("Failed to perform bulk update"):
        service = TaskService(db)
        count, action = await service.bulk_update(owner_id, data)
        await db.commit()
    return ApiResponse.ok(message=f"{count} tasks {action} successfully")


@router.get("/{task_id}", response_model=ApiResponse[TaskRead])
async def get_task(
    task_id: int,
    owner_id: Optional[int] = Depends(get_task_owner),
    db: AsyncSession = Depends(get_db),
    include_deleted: bool = Query(False, alias="includeDeleted"),
):
    """Get a task by ID."""
    with operation_guard("Failed to retrieve task", task_id=task_id):
        service = TaskService(db)
        task = await service.get_task(owner_id, task_id, include_deleted=include_deleted)
        data = TaskRead.model_validate(task)
    return ApiResponse.ok(data)


@router.post("", response_model=ApiResponse[TaskRead], status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    owner_id: Optional[int] = Depends(get_task_owner),
    db: AsyncSession = Depends(get_db),
):
    """Create a new task."""
    with operation_guard("Failed to create task"):
        service = TaskService(db)
        task = await service.create_task(owner_id, data)
        await db.commit()
        created = TaskRead.model_validate(task)
    return ApiResponse.ok(created, "Task created successfully")


@router.put("/{task_id}", response_model=ApiResponse[TaskRead])
async def update_task(
    task_id: int,
    data: TaskUpdate,
    owner_id: Optional[int] = Depends(get_task_owner),
    db: AsyncSession = Depends(get_db),
):
    """Replace a task's title, description, status, priority, due date and tags."""
    with operation_guard("Failed to update task", task_id=task_id):
        service = TaskService(db)
        task = await service.update_task(owner_id, task_id, data)
        await db.commit()
        updated = TaskRead.model_validate(task)
    return ApiResponse.ok(updated, "Task updated successfully")


@router.delete("/{task_id}", response_model=ApiResponse[None])
async def delete_task(
    task_id: int,
    owner_id: Optional[int] = Depends(get_task_owner),
    db: AsyncSession = Depends(get_db),
):
    """Soft delete a task."""
    with operation_guard("Failed to delete task", task_id=task_id):
        service = TaskService(db)
        await service.delete_task(owner_id, task_id)
        await db.commit()
    return ApiResponse.ok(message="Task deleted successfully")


@router.post("/{task_id}/restore", response_model=ApiResponse[None])
async def restore_task(
    task_id: int,
    owner_id: Optional[int] = Depends(get_task_owner),
    db: AsyncSession = Depends(get_db),
):
    """Restore a soft-deleted task."""
    with operation_guard("Failed to restore task", task_id=task_id):
        service = TaskService(db)
        await service.restore_task(owner_id, task_id)
        await db.commit()
    return ApiResponse.ok(message="Task restored successfully")
