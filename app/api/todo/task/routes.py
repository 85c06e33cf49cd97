from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.db.models.todo import TaskStatus, TaskPriority
from . import schemas, services

router = APIRouter()

@router.get("", response_model=list[schemas.TaskOut])
def list_tasks(
    status_: Optional[TaskStatus] = Query(None, alias="status"),
    priority: Optional[TaskPriority] = None,
    label: Optional[int] = None,
    search: Optional[str] = None,
    sort: str = "created_at",
    order: str = "desc",
    db: Session = Depends(get_db),
):
    task_filter = schemas.TaskFilter(
        status=status_,
        priority=priority,
        label=label,
        search=search,
        sort=sort,
        order=order,
    )
    return services.list_tasks(db, task_filter)

@router.get("/{task_id}", response_model=schemas.TaskOut)
def get_task(task_id: int, db: Session = Depends(get_db)):
    return services.get_task(db, task_id)

@router.post("", response_model=schemas.TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(task: schemas.TaskCreate, db: Session = Depends(get_db)):
    return services.create_task(db, task)

@router.put("/{task_id}", response_model=schemas.TaskOut)
def update_task(task_id: int, task: schemas.TaskUpdate, db: Session = Depends(get_db)):
    return services.update_task(db, task_id, task)

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    services.delete_task(db, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
