"""
Request validation rules.

Each ``validate_*`` function returns the list of field errors for a
request body; ``ensure_valid`` raises them as a single 400.
"""

import json
from datetime import datetime
from typing import List, Optional

from app.errors import ValidationFailed
from app.models.task import TaskPriority, TaskStatus
from app.schemas.base import FieldError
from app.schemas.task import BulkUpdateRequest, TaskCreate, TaskUpdate
from app.schemas.user import LoginRequest, RegisterRequest
from app.utils.time import utc_today

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6

STATUS_MESSAGE = "Status must be a valid value (Pending, InProgress, Completed)"
PRIORITY_MESSAGE = "Priority must be a valid value (Low, Medium, High)"
TAGS_MESSAGE = "Tags must be a valid JSON array"


def ensure_valid(errors: List[FieldError]) -> None:
    if errors:
        raise ValidationFailed(errors)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_valid_status(value: Optional[int]) -> bool:
    return value in {s.value for s in TaskStatus}


def is_valid_priority(value: Optional[int]) -> bool:
    return value in {p.value for p in TaskPriority}


def is_valid_tags(tags: Optional[str]) -> bool:
    """True when tags is empty or a JSON array of non-blank strings."""
    if not tags:
        return True
    try:
        parsed = json.loads(tags)
    except ValueError:
        return False
    if not isinstance(parsed, list):
        return False
    return all(isinstance(tag, str) and tag.strip() for tag in parsed)


def is_not_past(due_date: datetime) -> bool:
    """
    Date-only comparison against the current UTC date; today is allowed.

    The calendar date is taken as submitted, in its own offset.
    """
    return due_date.date() >= utc_today()


def _task_field_errors(title: Optional[str], description: Optional[str], priority: int, tags: Optional[str]) -> List[FieldError]:
    errors: List[FieldError] = []

    if is_blank(title):
        errors.append(FieldError(field="Title", message="Title is required"))
    elif len(title) > TITLE_MAX_LENGTH:
        errors.append(FieldError(field="Title", message="Title must be less than 200 characters"))

    if description and len(description) > DESCRIPTION_MAX_LENGTH:
        errors.append(FieldError(field="Description", message="Description must be less than 2000 characters"))

    if not is_valid_priority(priority):
        errors.append(FieldError(field="Priority", message=PRIORITY_MESSAGE))

    if not is_valid_tags(tags):
        errors.append(FieldError(field="Tags", message=TAGS_MESSAGE))

    return errors


def validate_task_create(data: TaskCreate) -> List[FieldError]:
    return _task_field_errors(data.title, data.description, data.priority, data.tags)


def validate_task_update(data: TaskUpdate) -> List[FieldError]:
    errors = _task_field_errors(data.title, data.description, data.priority, data.tags)

    if not is_valid_status(data.status):
        errors.append(FieldError(field="Status", message=STATUS_MESSAGE))

    if data.due_date is not None and not is_not_past(data.due_date):
        errors.append(FieldError(field="DueDate", message="Due date cannot be in the past"))

    return errors


def validate_bulk_update(data: BulkUpdateRequest) -> List[FieldError]:
    errors: List[FieldError] = []

    if not data.task_ids:
        errors.append(FieldError(field="TaskIds", message="At least one task ID is required"))
    else:
        for index, task_id in enumerate(data.task_ids):
            if task_id <= 0:
                errors.append(FieldError(field=f"TaskIds[{index}]", message="Task IDs must be positive numbers"))

    if data.status is not None and not is_valid_status(data.status):
        errors.append(FieldError(field="Status", message=STATUS_MESSAGE))

    if data.status is None and data.delete is None:
        errors.append(FieldError(field="Request", message="Either Status or Delete must be specified"))

    return errors


def validate_register(data: RegisterRequest) -> List[FieldError]:
    errors: List[FieldError] = []

    if is_blank(data.name):
        errors.append(FieldError(field="Name", message="Name is required"))
    elif len(data.name) > NAME_MAX_LENGTH:
        errors.append(FieldError(field="Name", message="Name must be less than 100 characters"))

    if len(data.email) > EMAIL_MAX_LENGTH:
        errors.append(FieldError(field="Email", message="Email must be less than 100 characters"))

    if not data.password:
        errors.append(FieldError(field="Password", message="Password is required"))
    elif len(data.password) < PASSWORD_MIN_LENGTH:
        errors.append(FieldError(field="Password", message="Password must be at least 6 characters"))

    return errors


def validate_login(data: LoginRequest) -> List[FieldError]:
    if not data.password:
        return [FieldError(field="Password", message="Password is required")]
    return []
