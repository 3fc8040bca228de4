import pytest

from app.models.task import Task
from app.repositories.task_query import (
    InvalidSortField,
    TaskListParams,
    build_list_query,
    build_page,
    clamp_limit,
    normalize_sort_by,
    normalize_sort_order,
)

pytestmark = pytest.mark.unit


def _sql(query) -> str:
    return str(query.compile(compile_kwargs={"literal_binds": True}))


@pytest.mark.parametrize("limit, expected", [(None, 10), (0, 1), (-5, 1), (1, 1), (50, 50), (100, 100), (101, 100)])
def test_limit_is_clamped(limit, expected):
    assert clamp_limit(limit) == expected


def test_sort_by_is_case_insensitive():
    assert normalize_sort_by("DUEDATE") == "dueDate"
    assert normalize_sort_by("title") == "title"
    assert normalize_sort_by(None) is None
    assert normalize_sort_by("  ") is None


def test_unknown_sort_by_lists_valid_options():
    with pytest.raises(InvalidSortField) as exc_info:
        normalize_sort_by("owner")
    message = str(exc_info.value)
    for option in ("dueDate", "createdAt", "updatedAt", "priority", "status", "title"):
        assert option in message


@pytest.mark.parametrize("value, expected", [(None, "asc"), ("asc", "asc"), ("DESC", "desc"), ("sideways", "asc")])
def test_unknown_sort_order_falls_back_to_ascending(value, expected):
    assert normalize_sort_order(value) == expected


def test_default_query_excludes_deleted_and_orders_by_id():
    sql = _sql(build_list_query(TaskListParams.from_request(owner_user_id=3)))
    assert "task.owner_user_id = 3" in sql
    assert "task.deleted_at IS NULL" in sql
    assert "ORDER BY task.id ASC" in sql
    assert "LIMIT 11" in sql


def test_include_deleted_drops_deleted_filter():
    sql = _sql(build_list_query(TaskListParams.from_request(owner_user_id=3, include_deleted=True)))
    assert "deleted_at IS NULL" not in sql


def test_simple_cursor_seeks_on_id():
    asc = _sql(build_list_query(TaskListParams.from_request(cursor=20)))
    desc = _sql(build_list_query(TaskListParams.from_request(cursor=20, sort_order="desc")))
    assert "task.id > 20" in asc
    assert "task.id < 20" in desc
    assert "ORDER BY task.id DESC" in desc


def test_sorted_query_breaks_ties_on_id_in_same_direction():
    sql = _sql(build_list_query(TaskListParams.from_request(sort_by="priority", sort_order="desc")))
    assert "ORDER BY task.priority DESC, task.id DESC" in sql


def test_sorted_cursor_seeks_past_anchor_pair():
    anchor = Task(id=5, priority=1, title="anchor")
    params = TaskListParams.from_request(sort_by="priority", cursor=5)
    sql = _sql(build_list_query(params, anchor))
    assert "task.priority > 1" in sql
    assert "task.priority = 1 AND task.id > 5" in sql


def test_build_page_sets_cursor_only_when_more_rows_exist():
    rows = [Task(id=i, title=str(i)) for i in (1, 2, 3)]

    page = build_page(rows, 2)
    assert [t.id for t in page.tasks] == [1, 2]
    assert page.has_next_page is True
    assert page.next_cursor == 2

    last = build_page(rows[:2], 2)
    assert last.has_next_page is False
    assert last.next_cursor is None


def test_search_matches_raw_value_and_ignores_blank():
    assert TaskListParams.from_request(search=" foo").search == " foo"
    assert TaskListParams.from_request(search="   ").search is None
    assert TaskListParams.from_request(search="").search is None
