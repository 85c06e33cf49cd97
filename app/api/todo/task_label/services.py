import logging
from collections import defaultdict
from typing import Iterable

from sqlalchemy import delete, insert, select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.models.todo import Label, TaskLabel

logger = logging.getLogger(__name__)


def set_labels(db: Session, task_id: int, label_ids: Iterable[int]) -> list[int]:
    """
    Replace the whole label set of a task.

    Must run inside the caller's ``transaction``: nothing is committed here,
    so a failure also undoes whatever the caller wrote before calling in.
    Duplicate ids are collapsed, first occurrence wins. Unknown label ids
    raise ``NotFoundError`` before any association row is touched.
    """
    wanted = list(dict.fromkeys(label_ids))

    if wanted:
        found = set(db.scalars(select(Label.id).where(Label.id.in_(wanted))))
        missing = [label_id for label_id in wanted if label_id not in found]
        if missing:
            logger.warning("Task %s references unknown labels %s", task_id, missing)
            raise NotFoundError(
                f"Label(s) not found: {', '.join(str(i) for i in missing)}",
                {"label_ids": missing},
            )

    db.execute(delete(TaskLabel).where(TaskLabel.task_id == task_id))
    if wanted:
        db.execute(
            insert(TaskLabel),
            [{"task_id": task_id, "label_id": label_id} for label_id in wanted],
        )
    return wanted


def labels_by_task(db: Session, task_ids: Iterable[int]) -> dict[int, list[Label]]:
    """
    Fetch the labels of many tasks with a single query.

    Returns task id -> labels ordered by label id. Tasks without any
    association are simply absent from the mapping.
    """
    ids = list(task_ids)
    grouped: dict[int, list[Label]] = defaultdict(list)
    if not ids:
        return grouped

    rows = db.execute(
        select(TaskLabel.task_id, Label)
        .join(Label, Label.id == TaskLabel.label_id)
        .where(TaskLabel.task_id.in_(ids))
        .order_by(TaskLabel.task_id, Label.id)
    )
    for task_id, label in rows:
        grouped[task_id].append(label)
    return grouped


def remove_task_associations(db: Session, task_id: int) -> None:
    db.execute(delete(TaskLabel).where(TaskLabel.task_id == task_id))


def remove_label_associations(db: Session, label_id: int) -> None:
    db.execute(delete(TaskLabel).where(TaskLabel.label_id == label_id))
