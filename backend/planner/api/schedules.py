from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from planner import storage
from planner.core.aggregation import week_summary
from planner.core.config import settings
from planner.core.time_utils import format_week_range
from planner.db import get_db
from planner.schemas.schedule import (
    WeeklyScheduleCreate,
    WeeklyScheduleDetail,
    WeeklyScheduleRead,
    WeeklyScheduleUpdate,
    WeeklyScheduleUpsert,
)
from planner.schemas.summary import (
    DaySummaryRead,
    TargetProgressRead,
    TargetSummaryRead,
    TotalsRead,
    WeekSummaryRead,
    WeekTotalsRead,
)


router = APIRouter(prefix="/api/weekly-schedules", tags=["weekly-schedules"])


@router.get("", response_model=list[WeeklyScheduleRead])
def list_weekly_schedules(db: Session = Depends(get_db)):
    # newest week first
    return storage.list_weekly_schedules(db)


@router.get("/by-week/{year}/{week}", response_model=WeeklyScheduleDetail)
def get_schedule_by_week(year: int, week: int, db: Session = Depends(get_db)):
    row = storage.get_schedule_by_year_week(db, year, week)
    if not row:
        raise HTTPException(status_code=404, detail="Weekly schedule not found")
    return row


@router.put("/by-week/{year}/{week}", response_model=WeeklyScheduleDetail)
def upsert_schedule_by_week(
    year: int,
    week: int,
    payload: WeeklyScheduleUpsert,
    db: Session = Depends(get_db),
):
    """Create the week's schedule on first visit, otherwise update its goal."""
    row = storage.get_schedule_by_year_week(db, year, week)
    if not row:
        fields = WeeklyScheduleCreate(year=year, week=week, overall_goal=payload.overall_goal)
        row = storage.create_weekly_schedule(db, fields.model_dump())
    else:
        storage.update_weekly_schedule(db, row.id, {"overall_goal": payload.overall_goal})
    return storage.get_weekly_schedule(db, row.id)


@router.get("/{schedule_id}", response_model=WeeklyScheduleDetail)
def get_weekly_schedule(schedule_id: int, db: Session = Depends(get_db)):
    row = storage.get_weekly_schedule(db, schedule_id)
    if not row:
        raise HTTPException(status_code=404, detail="Weekly schedule not found")
    return row


@router.get("/{schedule_id}/summary", response_model=WeekSummaryRead)
def get_weekly_summary(schedule_id: int, db: Session = Depends(get_db)):
    """Per-day and per-week hours/revenue plus progress of every target."""
    schedule = storage.get_weekly_schedule(db, schedule_id)
    if not schedule:
        raise HTTPException(status_code=404, detail="Weekly schedule not found")

    summary = week_summary(
        schedule.year,
        schedule.week,
        storage.list_tasks_for_schedule(db, schedule_id),
        storage.list_targets_for_schedule(db, schedule_id),
    )

    return WeekSummaryRead(
        weekly_schedule_id=schedule.id,
        year=summary.year,
        week=summary.week,
        label=format_week_range(summary.year, summary.week),
        days=[
            DaySummaryRead(
                index=day.index,
                name=day.name,
                date=day.date,
                task_ids=[t.id for t in day.tasks],
                totals=TotalsRead.model_validate(day.totals),
            )
            for day in summary.days
        ],
        totals=WeekTotalsRead.model_validate(summary.totals),
        targets=[
            TargetSummaryRead(
                target_id=target.id,
                customer_id=target.customer_id,
                customer_name=target.customer.name,
                goal=target.goal,
                progress=TargetProgressRead.model_validate(progress),
            )
            for target, progress in summary.targets
        ],
    )


@router.post("", response_model=WeeklyScheduleRead, status_code=201)
def create_weekly_schedule(payload: WeeklyScheduleCreate, db: Session = Depends(get_db)):
    return storage.create_weekly_schedule(db, payload.model_dump())


@router.put("/{schedule_id}", response_model=WeeklyScheduleRead)
def update_weekly_schedule(
    schedule_id: int,
    payload: WeeklyScheduleUpdate,
    db: Session = Depends(get_db),
):
    fields = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    row = storage.update_weekly_schedule(
        db, schedule_id, fields, enforce_consistency=settings.enforce_task_consistency
    )
    if not row:
        raise HTTPException(status_code=404, detail="Weekly schedule not found")
    return row


@router.delete("/{schedule_id}", status_code=204)
def delete_weekly_schedule(schedule_id: int, db: Session = Depends(get_db)):
    if not storage.delete_weekly_schedule(db, schedule_id):
        raise HTTPException(status_code=404, detail="Weekly schedule not found")
    return Response(status_code=204)
