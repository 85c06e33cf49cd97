from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.api.todo.task.schemas import TaskOut
from . import schemas, services

router = APIRouter()

@router.get("", response_model=list[schemas.LabelOut])
def get_labels(db: Session = Depends(get_db)):
    return services.get_labels(db)

@router.get("/{label_id}", response_model=schemas.LabelOut)
def get_label(label_id: int, db: Session = Depends(get_db)):
    return services.get_label(db, label_id)

@router.post("", response_model=schemas.LabelOut, status_code=status.HTTP_201_CREATED)
def create_label(label: schemas.LabelCreate, db: Session = Depends(get_db)):
    return services.create_label(db, label)

@router.put("/{label_id}", response_model=schemas.LabelOut)
def update_label(label_id: int, label: schemas.LabelUpdate, db: Session = Depends(get_db)):
    return services.update_label(db, label_id, label)

@router.delete("/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_label(label_id: int, db: Session = Depends(get_db)):
    services.delete_label(db, label_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{label_id}/tasks", response_model=list[TaskOut])
def tasks_by_label(label_id: int, db: Session = Depends(get_db)):
    return services.get_tasks_by_label(db, label_id)
