"""
Task model.

Represents a to-do item owned by a single user.
"""

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.utils.time import utc_now


class TaskStatus(enum.IntEnum):
    """Task workflow state. Integer values are part of the wire format."""

    PENDING = 0
    IN_PROGRESS = 1
    COMPLETED = 2


class TaskPriority(enum.IntEnum):
    """Task priority. Integer values are part of the wire format."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2


class Task(Base):
    """
    Task table - represents to-do items.

    ``deleted_at`` marks a soft delete; rows are never removed.
    """

    __tablename__ = "task"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Stored as plain integers so enum values survive any backend
    status: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=int(TaskStatus.PENDING),
        index=True,
    )

    priority: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=int(TaskPriority.MEDIUM),
    )

    due_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )

    # Serialized JSON array of strings
    tags: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="[]",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )

    # Nullable only for tasks created while AUTH_ENABLED is off
    owner_user_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("user.id"),
        nullable=True,
        index=True,
    )
