import logging

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.api.todo.task import schemas
from app.api.todo.task.query import build_task_query
from app.api.todo.task_label.services import (
    labels_by_task,
    remove_task_associations,
    set_labels,
)
from app.core.errors import NotFoundError
from app.db.models.todo import Task
from app.db.session import transaction
from app.utils.time import utc_now

logger = logging.getLogger(__name__)

# Columns a TaskUpdate may touch; labels are handled separately
_SCALAR_FIELDS = ("title", "description", "status", "priority", "due_date")


def to_task_out(task: Task, labels) -> schemas.TaskOut:
    """Nest the label rows under their task. No labels -> empty list."""
    return schemas.TaskOut(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        due_date=task.due_date,
        created_at=task.created_at,
        updated_at=task.updated_at,
        labels=[schemas.LabelOut.model_validate(label) for label in labels],
    )


def to_task_outs(db: Session, tasks: list[Task]) -> list[schemas.TaskOut]:
    grouped = labels_by_task(db, [task.id for task in tasks])
    return [to_task_out(task, grouped.get(task.id, [])) for task in tasks]


def _get_task_row(db: Session, task_id: int) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise NotFoundError("Task not found", {"task_id": task_id})
    return task


def list_tasks(db: Session, task_filter: schemas.TaskFilter) -> list[schemas.TaskOut]:
    tasks = list(db.scalars(build_task_query(task_filter)))
    return to_task_outs(db, tasks)


def get_task(db: Session, task_id: int) -> schemas.TaskOut:
    task = _get_task_row(db, task_id)
    return to_task_outs(db, [task])[0]


def create_task(db: Session, task: schemas.TaskCreate) -> schemas.TaskOut:
    data = task.model_dump(exclude={"labels"}, mode="json")
    now = utc_now()

    with transaction(db):
        db_task = Task(**data, created_at=now, updated_at=now)
        db.add(db_task)
        db.flush()  # to get the id
        set_labels(db, db_task.id, task.labels)

    db.refresh(db_task)
    logger.info("Created task %s with %d label(s)", db_task.id, len(set(task.labels)))
    return get_task(db, db_task.id)


def update_task(db: Session, task_id: int, task: schemas.TaskUpdate) -> schemas.TaskOut:
    update_data = task.model_dump(exclude_unset=True, mode="json")
    labels = update_data.pop("labels", None)

    with transaction(db):
        db_task = _get_task_row(db, task_id)
        for key in _SCALAR_FIELDS:
            if key in update_data:
                setattr(db_task, key, update_data[key])
        db_task.updated_at = utc_now()
        db.flush()

        if labels is not None:
            set_labels(db, task_id, labels)

    db.refresh(db_task)
    return get_task(db, task_id)


def delete_task(db: Session, task_id: int) -> None:
    with transaction(db):
        _get_task_row(db, task_id)
        remove_task_associations(db, task_id)
        db.execute(delete(Task).where(Task.id == task_id))
    logger.info("Deleted task %s", task_id)
