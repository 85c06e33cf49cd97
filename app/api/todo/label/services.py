import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.todo.label import schemas
from app.api.todo.task.schemas import TaskOut
from app.api.todo.task.services import to_task_outs
from app.api.todo.task_label.services import remove_label_associations
from app.core.errors import ConflictError, NotFoundError
from app.db.models.todo import Label, Task, TaskLabel
from app.db.session import transaction

logger = logging.getLogger(__name__)


def _ensure_name_free(db: Session, name: str, exclude_id: int | None = None) -> None:
    query = db.query(Label).filter(Label.name == name)
    if exclude_id is not None:
        query = query.filter(Label.id != exclude_id)
    if query.first():
        logger.warning("Rejected duplicate label name %r", name)
        raise ConflictError("Label with this name already exists", {"name": name})


def get_labels(db: Session) -> list[Label]:
    return db.query(Label).order_by(Label.name).all()

def get_label(db: Session, label_id: int) -> Label:
    label = db.query(Label).filter(Label.id == label_id).first()
    if not label:
        raise NotFoundError("Label not found", {"label_id": label_id})
    return label

def create_label(db: Session, label: schemas.LabelCreate) -> Label:
    try:
        with transaction(db):
            _ensure_name_free(db, label.name)
            db_label = Label(**label.model_dump())
            db.add(db_label)
    except IntegrityError:
        # Lost a race against a concurrent insert of the same name
        raise ConflictError("Label with this name already exists", {"name": label.name})
    db.refresh(db_label)
    logger.info("Created label %s (%s)", db_label.id, db_label.name)
    return db_label

def update_label(db: Session, label_id: int, label: schemas.LabelUpdate) -> Label:
    update_data = {k: v for k, v in label.model_dump(exclude_unset=True).items() if v is not None}
    try:
        with transaction(db):
            db_label = get_label(db, label_id)
            new_name = update_data.get("name")
            if new_name is not None and new_name != db_label.name:
                _ensure_name_free(db, new_name, exclude_id=label_id)
            for key, value in update_data.items():
                setattr(db_label, key, value)
            db.flush()
    except IntegrityError:
        raise ConflictError("Label with this name already exists", {"name": update_data.get("name")})
    db.refresh(db_label)
    return db_label

def delete_label(db: Session, label_id: int) -> None:
    with transaction(db):
        get_label(db, label_id)
        remove_label_associations(db, label_id)
        db.execute(delete(Label).where(Label.id == label_id))
    logger.info("Deleted label %s", label_id)

def get_tasks_by_label(db: Session, label_id: int) -> list[TaskOut]:
    get_label(db, label_id)
    tasks = list(
        db.scalars(
            select(Task)
            .join(TaskLabel, TaskLabel.task_id == Task.id)
            .where(TaskLabel.label_id == label_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
    )
    return to_task_outs(db, tasks)
