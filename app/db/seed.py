"""
Demo data loader.

Runs once at startup when SEED_ON_STARTUP is set and the database has no
users and no tasks yet.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.task import Task, TaskPriority, TaskStatus
from app.repositories.task_repository import TaskRepository
from app.repositories.user_repository import UserRepository
from app.utils.time import utc_now

logger = logging.getLogger(__name__)

DEMO_USER_NAME = "Demo User"
DEMO_USER_EMAIL = "demo@example.com"
DEMO_USER_PASSWORD = "Password123"


class SeedTask(BaseModel):
    """One task entry of the seed file."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: Optional[str] = None
    status: int = int(TaskStatus.PENDING)
    priority: int = int(TaskPriority.MEDIUM)
    tags: Optional[str] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    deleted_at: Optional[datetime] = Field(default=None, alias="deletedAt")


class SeedData(BaseModel):
    tasks: List[SeedTask] = []


def load_seed_file(path: Path) -> Optional[SeedData]:
    """Read and parse the seed file; None when it does not exist."""
    if not path.exists():
        logger.warning("Seed data file not found at: %s", path)
        return None
    with path.open("r", encoding="utf-8") as f:
        return SeedData.model_validate(json.load(f))


async def seed_database(db: AsyncSession, seed_path: Path) -> int:
    """
    Create the demo user and its tasks in an empty database.

    Returns:
        Number of tasks inserted
    """
    users = UserRepository(db)
    tasks = TaskRepository(db)

    if await users.has_any() or await tasks.has_any():
        return 0

    demo_user = await users.create(DEMO_USER_NAME, DEMO_USER_EMAIL, DEMO_USER_PASSWORD)

    seed_data = load_seed_file(seed_path)
    if seed_data is None or not seed_data.tasks:
        logger.info("No tasks found in seed data")
        return 0

    now = utc_now()
    rows = [
        Task(
            title=item.title,
            description=item.description,
            status=item.status,
            priority=item.priority,
            tags=item.tags or "[]",
            due_date=item.due_date,
            deleted_at=item.deleted_at,
            created_at=now,
            updated_at=now,
            owner_user_id=demo_user.id,
        )
        for item in seed_data.tasks
    ]
    await tasks.add_all(rows)

    logger.info("Seeded %d tasks into the database", len(rows))
    return len(rows)
