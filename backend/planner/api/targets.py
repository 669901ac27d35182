from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from planner import storage
from planner.core.aggregation import target_progress
from planner.core.config import settings
from planner.core.constants import WORKING_DAYS
from planner.core.drag import draft_from_target
from planner.core.time_utils import week_dates
from planner.db import get_db
from planner.schemas.summary import TargetProgressRead
from planner.schemas.target import TargetCreate, TargetRead, TargetUpdate, TargetWithProgress
from planner.schemas.task import TaskDraftRead


router = APIRouter(prefix="/api/targets", tags=["targets"])


@router.get("", response_model=list[TargetRead])
def list_targets(db: Session = Depends(get_db)):
    return storage.list_targets(db)


@router.get("/by-schedule/{weekly_schedule_id}", response_model=list[TargetWithProgress])
def list_targets_for_schedule(weekly_schedule_id: int, db: Session = Depends(get_db)):
    """Targets of one week, each with how many of its hours are planned."""
    targets = storage.list_targets_for_schedule(db, weekly_schedule_id)
    tasks = storage.list_tasks_for_schedule(db, weekly_schedule_id)
    results: list[TargetWithProgress] = []
    for target in targets:
        base = TargetRead.model_validate(target)
        progress = TargetProgressRead.model_validate(target_progress(target, tasks))
        results.append(TargetWithProgress(**base.model_dump(), progress=progress))
    return results


@router.get("/{target_id}", response_model=TargetRead)
def get_target(target_id: int, db: Session = Depends(get_db)):
    row = storage.get_target(db, target_id)
    if not row:
        raise HTTPException(status_code=404, detail="Target not found")
    return row


@router.get("/{target_id}/draft", response_model=TaskDraftRead)
def draft_task_from_target(
    target_id: int,
    day_index: int = Query(..., ge=0, le=WORKING_DAYS - 1),
    db: Session = Depends(get_db),
):
    """Task form defaults for this target dropped on day `day_index` of its week.

    Nothing is written; the client posts the (edited) draft to /api/tasks.
    """
    target = storage.get_target(db, target_id)
    if not target:
        raise HTTPException(status_code=404, detail="Target not found")
    schedule = target.weekly_schedule
    draft = draft_from_target(target, day_index, week_dates(schedule.year, schedule.week))
    return TaskDraftRead(**draft.as_dict())


@router.post("", response_model=TargetRead, status_code=201)
def create_target(payload: TargetCreate, db: Session = Depends(get_db)):
    row = storage.create_target(db, payload.model_dump())
    return storage.get_target(db, row.id)


@router.put("/{target_id}", response_model=TargetRead)
def update_target(target_id: int, payload: TargetUpdate, db: Session = Depends(get_db)):
    fields = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    row = storage.update_target(
        db, target_id, fields, enforce_consistency=settings.enforce_task_consistency
    )
    if not row:
        raise HTTPException(status_code=404, detail="Target not found")
    return storage.get_target(db, row.id)


@router.delete("/{target_id}", status_code=204)
def delete_target(target_id: int, db: Session = Depends(get_db)):
    if not storage.delete_target(db, target_id):
        raise HTTPException(status_code=404, detail="Target not found")
    return Response(status_code=204)
