"""
Task list query composition.

Turns list parameters (filters, sort, cursor, limit) into a bounded,
totally ordered SELECT. Ordering is always ``(sort field, id)`` in the
same direction, and the cursor is the id of the last row already seen.
With a sort field the cursor row is loaded and the query seeks past its
``(sort value, id)`` pair, so pages stay stable under ties.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import Select, and_, or_, select
from sqlalchemy.sql.elements import ColumnElement

from app.models.task import Task

DEFAULT_LIMIT = 10
MIN_LIMIT = 1
MAX_LIMIT = 100

# Wire name -> column
SORT_FIELDS: Dict[str, Any] = {
    "dueDate": Task.due_date,
    "createdAt": Task.created_at,
    "updatedAt": Task.updated_at,
    "priority": Task.priority,
    "status": Task.status,
    "title": Task.title,
}

# Only due_date can be NULL among sortable columns
NULLABLE_SORT_FIELDS = {"dueDate"}


class InvalidSortField(ValueError):
    """Raised for a sortBy value outside SORT_FIELDS."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid sort field '{value}'. Valid options: {', '.join(SORT_FIELDS)}")


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return max(MIN_LIMIT, min(MAX_LIMIT, limit))


def normalize_sort_by(sort_by: Optional[str]) -> Optional[str]:
    """Resolve a sortBy value case-insensitively; None/blank means id order."""
    if sort_by is None or not sort_by.strip():
        return None
    wanted = sort_by.strip().lower()
    for name in SORT_FIELDS:
        if name.lower() == wanted:
            return name
    raise InvalidSortField(sort_by)


def normalize_sort_order(sort_order: Optional[str]) -> str:
    """Anything other than 'desc' falls back to ascending."""
    if sort_order is not None and sort_order.strip().lower() == "desc":
        return "desc"
    return "asc"


@dataclass
class TaskListParams:
    """Validated list parameters."""

    owner_user_id: Optional[int] = None
    status: Optional[int] = None
    priority: Optional[int] = None
    search: Optional[str] = None
    include_deleted: bool = False
    sort_by: Optional[str] = None
    sort_order: str = "asc"
    cursor: Optional[int] = None
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_request(
        cls,
        owner_user_id: Optional[int] = None,
        status: Optional[int] = None,
        priority: Optional[int] = None,
        search: Optional[str] = None,
        include_deleted: bool = False,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        cursor: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> "TaskListParams":
        return cls(
            owner_user_id=owner_user_id,
            status=status,
            priority=priority,
            search=search if search and search.strip() else None,
            include_deleted=include_deleted,
            sort_by=normalize_sort_by(sort_by),
            sort_order=normalize_sort_order(sort_order),
            cursor=cursor,
            limit=clamp_limit(limit),
        )

    @property
    def descending(self) -> bool:
        return self.sort_order == "desc"


@dataclass
class TaskPage:
    """One page of list results."""

    tasks: List[Task] = field(default_factory=list)
    has_next_page: bool = False
    next_cursor: Optional[int] = None
    limit: int = DEFAULT_LIMIT


def filter_conditions(params: TaskListParams) -> List[ColumnElement]:
    """WHERE clauses shared by every list query."""
    conditions: List[ColumnElement] = []

    if params.owner_user_id is not None:
        conditions.append(Task.owner_user_id == params.owner_user_id)
    if not params.include_deleted:
        conditions.append(Task.deleted_at.is_(None))
    if params.status is not None:
        conditions.append(Task.status == params.status)
    if params.priority is not None:
        conditions.append(Task.priority == params.priority)
    if params.search:
        conditions.append(Task.title.icontains(params.search, autoescape=True))

    return conditions


def order_clauses(params: TaskListParams) -> list:
    """Compound ORDER BY: sort field then id, same direction, NULLs last."""
    if params.sort_by is None:
        return [Task.id.desc() if params.descending else Task.id.asc()]

    column = SORT_FIELDS[params.sort_by]
    primary = column.desc() if params.descending else column.asc()
    if params.sort_by in NULLABLE_SORT_FIELDS:
        primary = primary.nulls_last()
    tie_break = Task.id.desc() if params.descending else Task.id.asc()
    return [primary, tie_break]


def seek_condition(params: TaskListParams, anchor: Optional[Task]) -> Optional[ColumnElement]:
    """
    Predicate selecting rows strictly after the cursor in list order.

    Without a sort field only the id is compared. With one, ``anchor`` is
    the cursor row and rows after ``(anchor value, anchor id)`` are kept.
    """
    if params.cursor is None:
        return None

    if params.sort_by is None:
        return Task.id < params.cursor if params.descending else Task.id > params.cursor

    column = SORT_FIELDS[params.sort_by]
    value = getattr(anchor, column.key)
    id_after = Task.id < anchor.id if params.descending else Task.id > anchor.id

    if value is None:
        # NULLs sort last, so only other NULL rows can follow a NULL anchor
        return and_(column.is_(None), id_after)

    value_after = column < value if params.descending else column > value
    condition = or_(value_after, and_(column == value, id_after))
    if params.sort_by in NULLABLE_SORT_FIELDS:
        condition = or_(condition, column.is_(None))
    return condition


def build_list_query(params: TaskListParams, anchor: Optional[Task] = None) -> Select:
    """Build the page query; fetches limit + 1 rows to detect a next page."""
    query = select(Task)

    conditions = filter_conditions(params)
    seek = seek_condition(params, anchor)
    if seek is not None:
        conditions.append(seek)
    if conditions:
        query = query.where(*conditions)

    return query.order_by(*order_clauses(params)).limit(params.limit + 1)


def build_page(rows: List[Task], limit: int) -> TaskPage:
    """Trim the limit + 1 fetch and derive the next cursor."""
    has_next_page = len(rows) > limit
    tasks = rows[:limit]
    next_cursor = tasks[-1].id if has_next_page and tasks else None
    return TaskPage(tasks=tasks, has_next_page=has_next_page, next_cursor=next_cursor, limit=limit)
