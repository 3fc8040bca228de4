"""
Models package.

Import all models here so they are registered with SQLAlchemy.
This file also makes it easy to import models from one place.
"""

from app.models.user import User
from app.models.task import Task, TaskPriority, TaskStatus

# Export all models
__all__ = [
    "User",
    "Task",
    "TaskStatus",
    "TaskPriority",
]
