from datetime import datetime, timedelta, timezone

import pytest

from app.schemas.task import BulkUpdateRequest, TaskCreate, TaskUpdate
from app.schemas.user import RegisterRequest
from app.services.validators import (
    is_valid_tags,
    validate_bulk_update,
    validate_register,
    validate_task_create,
    validate_task_update,
)

pytestmark = pytest.mark.unit


def _messages(errors):
    return {(e.field, e.message) for e in errors}


def test_valid_create_request_passes():
    data = TaskCreate(title="Write docs", description="Short", priority=2, tags='["docs"]')
    assert validate_task_create(data) == []


def test_empty_title_is_required():
    errors = validate_task_create(TaskCreate(title="", priority=1))
    assert ("Title", "Title is required") in _messages(errors)


def test_missing_title_is_required():
    errors = validate_task_create(TaskCreate(priority=1))
    assert ("Title", "Title is required") in _messages(errors)


def test_title_over_200_characters_fails():
    errors = validate_task_create(TaskCreate(title="x" * 201))
    assert _messages(errors) == {("Title", "Title must be less than 200 characters")}


def test_title_of_exactly_200_characters_passes():
    assert validate_task_create(TaskCreate(title="x" * 200)) == []


def test_description_over_2000_characters_fails():
    errors = validate_task_create(TaskCreate(title="ok", description="d" * 2001))
    assert _messages(errors) == {("Description", "Description must be less than 2000 characters")}


def test_unknown_priority_fails():
    errors = validate_task_create(TaskCreate(title="ok", priority=7))
    assert _messages(errors) == {("Priority", "Priority must be a valid value (Low, Medium, High)")}


def test_invalid_json_tags_fail():
    errors = validate_task_create(TaskCreate(title="ok", tags="invalid json"))
    assert _messages(errors) == {("Tags", "Tags must be a valid JSON array")}


@pytest.mark.parametrize(
    "tags, expected",
    [
        (None, True),
        ("", True),
        ("[]", True),
        ('["a", "b"]', True),
        ('["a", " "]', False),
        ('["a", null]', False),
        ("[1, 2]", False),
        ('{"a": 1}', False),
        ('"a"', False),
    ],
)
def test_tags_must_be_array_of_non_blank_strings(tags, expected):
    assert is_valid_tags(tags) is expected


def test_update_rejects_unknown_status():
    errors = validate_task_update(TaskUpdate(title="ok", status=9, priority=1))
    assert ("Status", "Status must be a valid value (Pending, InProgress, Completed)") in _messages(errors)


def test_update_rejects_past_due_date():
    yesterday = datetime.now(timezone.utc) - timedelta(days=1)
    errors = validate_task_update(TaskUpdate(title="ok", status=0, priority=1, due_date=yesterday))
    assert _messages(errors) == {("DueDate", "Due date cannot be in the past")}


def test_update_allows_due_date_today():
    today = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    assert validate_task_update(TaskUpdate(title="ok", status=1, priority=1, due_date=today)) == []


def test_bulk_update_requires_ids():
    errors = validate_bulk_update(BulkUpdateRequest(task_ids=[], status=2))
    assert _messages(errors) == {("TaskIds", "At least one task ID is required")}


def test_bulk_update_requires_positive_ids():
    errors = validate_bulk_update(BulkUpdateRequest(task_ids=[1, 0, -3], delete=True))
    assert _messages(errors) == {
        ("TaskIds[1]", "Task IDs must be positive numbers"),
        ("TaskIds[2]", "Task IDs must be positive numbers"),
    }


def test_bulk_update_requires_status_or_delete():
    errors = validate_bulk_update(BulkUpdateRequest(task_ids=[1]))
    assert _messages(errors) == {("Request", "Either Status or Delete must be specified")}


def test_bulk_update_valid_request_passes():
    assert validate_bulk_update(BulkUpdateRequest(task_ids=[1, 2], status=2)) == []


def test_register_rules():
    errors = validate_register(RegisterRequest(name=" ", email="a@example.com", password="123"))
    assert _messages(errors) == {
        ("Name", "Name is required"),
        ("Password", "Password must be at least 6 characters"),
    }


def test_due_date_today_in_positive_offset_is_allowed():
    today = datetime.now(timezone.utc).date()
    local_midnight = datetime(today.year, today.month, today.day, tzinfo=timezone(timedelta(hours=5)))
    assert validate_task_update(TaskUpdate(title="ok", status=0, priority=1, due_date=local_midnight)) == []
