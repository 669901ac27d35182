from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from planner import storage
from planner.core.config import settings
from planner.db import get_db
from planner.schemas.task import TaskCreate, TaskRead, TaskUpdate


router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskRead])
def list_tasks(db: Session = Depends(get_db)):
    return storage.list_tasks(db)


@router.get("/by-schedule/{weekly_schedule_id}", response_model=list[TaskRead])
def list_tasks_for_schedule(weekly_schedule_id: int, db: Session = Depends(get_db)):
    return storage.list_tasks_for_schedule(db, weekly_schedule_id)


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: int, db: Session = Depends(get_db)):
    row = storage.get_task(db, task_id)
    if not row:
        raise HTTPException(status_code=404, detail="Task not found")
    return row


@router.post("", response_model=TaskRead, status_code=201)
def create_task(payload: TaskCreate, db: Session = Depends(get_db)):
    row = storage.create_task(
        db,
        payload.model_dump(),
        enforce_consistency=settings.enforce_task_consistency,
    )
    return storage.get_task(db, row.id)


@router.put("/{task_id}", response_model=TaskRead)
def update_task(task_id: int, payload: TaskUpdate, db: Session = Depends(get_db)):
    fields = payload.model_dump(exclude_unset=True)
    # only target_id may be cleared; other nulls mean "leave as is"
    fields = {k: v for k, v in fields.items() if v is not None or k == "target_id"}
    row = storage.update_task(
        db,
        task_id,
        fields,
        enforce_consistency=settings.enforce_task_consistency,
    )
    if not row:
        raise HTTPException(status_code=404, detail="Task not found")
    return storage.get_task(db, row.id)


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    if not storage.delete_task(db, task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=204)
