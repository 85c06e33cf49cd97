from sqlalchemy import Select, and_, case, exists, or_, select

from app.api.todo.task.schemas import TaskFilter
from app.core.errors import ValidationError
from app.db.models.todo import Task, TaskLabel, TaskStatus, TaskPriority

# Rank-ordered so "priority asc" means low -> high rather than alphabetical
_PRIORITY_RANK = case(
    {member.value: rank for rank, member in enumerate(TaskPriority)},
    value=Task.priority,
)
_STATUS_RANK = case(
    {member.value: rank for rank, member in enumerate(TaskStatus)},
    value=Task.status,
)

SORTABLE_COLUMNS = {
    "created_at": Task.created_at,
    "updated_at": Task.updated_at,
    "title": Task.title,
    "priority": _PRIORITY_RANK,
    "status": _STATUS_RANK,
    "due_date": Task.due_date,
}

SORT_ORDERS = ("asc", "desc")

LIKE_ESCAPE = "\\"


def _like_pattern(term: str) -> str:
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def build_task_query(task_filter: TaskFilter) -> Select:
    """Build the listing query for ``task_filter``. Every given filter is AND-ed."""
    sort_key = SORTABLE_COLUMNS.get(task_filter.sort)
    if sort_key is None:
        raise ValidationError(
            f"Unsupported sort field '{task_filter.sort}'",
            {"allowed": sorted(SORTABLE_COLUMNS)},
        )

    order = task_filter.order.lower()
    if order not in SORT_ORDERS:
        raise ValidationError(
            f"Unsupported sort order '{task_filter.order}'",
            {"allowed": list(SORT_ORDERS)},
        )

    conditions = []

    if task_filter.status:
        conditions.append(Task.status == task_filter.status.value)

    if task_filter.priority:
        conditions.append(Task.priority == task_filter.priority.value)

    if task_filter.label is not None:
        conditions.append(
            exists().where(
                TaskLabel.task_id == Task.id,
                TaskLabel.label_id == task_filter.label,
            )
        )

    if task_filter.search:
        pattern = _like_pattern(task_filter.search)
        conditions.append(
            or_(
                Task.title.like(pattern, escape=LIKE_ESCAPE),
                Task.description.like(pattern, escape=LIKE_ESCAPE),
            )
        )

    query = select(Task)
    if conditions:
        query = query.where(and_(*conditions))

    if order == "asc":
        return query.order_by(sort_key.asc(), Task.id.asc())
    return query.order_by(sort_key.desc(), Task.id.desc())
