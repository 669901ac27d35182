"""Read/write access to customers, weekly schedules, targets and tasks.

Routers never query the ORM directly; they go through these functions so the
denormalized relations (task.customer, task.target, target.customer) are
loaded the same way everywhere.

Create/update functions take plain dicts of column values (already validated
by the pydantic schemas) and raise `ValidationFailed` for problems that
involve other rows. Lookups return None for unknown ids.
"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from planner.core.time_utils import week_dates, weeks_in_year
from planner.core.validation import ValidationFailed, field_error, task_consistency_errors
from planner.models.customer import Customer
from planner.models.target import Target
from planner.models.task import Task
from planner.models.weekly_schedule import WeeklySchedule


logger = logging.getLogger(__name__)


def _apply(row: Any, fields: dict) -> None:
    for key, value in fields.items():
        setattr(row, key, value)


def _save(db: Session, row: Any) -> Any:
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


# --- customers --------------------------------------------------------------

def list_customers(db: Session) -> list[Customer]:
    return db.query(Customer).order_by(Customer.name, Customer.id).all()


def get_customer(db: Session, customer_id: int) -> Optional[Customer]:
    return db.get(Customer, customer_id)


def create_customer(db: Session, fields: dict) -> Customer:
    row = _save(db, Customer(**fields))
    logger.info("Created customer %s (%s)", row.id, row.name)
    return row


def update_customer(db: Session, customer_id: int, fields: dict) -> Optional[Customer]:
    row = get_customer(db, customer_id)
    if row is None:
        return None
    _apply(row, fields)
    return _save(db, row)


def delete_customer(db: Session, customer_id: int) -> bool:
    row = get_customer(db, customer_id)
    if row is None:
        return False
    n_targets = db.query(Target).filter(Target.customer_id == customer_id).count()
    n_tasks = db.query(Task).filter(Task.customer_id == customer_id).count()
    if n_targets or n_tasks:
        raise ValidationFailed(
            "Customer is still in use",
            [field_error(
                "id",
                f"Customer {customer_id} has {n_targets} target(s) and {n_tasks} task(s)",
                "in_use",
            )],
        )
    db.delete(row)
    db.commit()
    logger.info("Deleted customer %s", customer_id)
    return True


# --- weekly schedules -------------------------------------------------------

def _schedule_query(db: Session):
    return db.query(WeeklySchedule).options(
        selectinload(WeeklySchedule.targets).joinedload(Target.customer),
        selectinload(WeeklySchedule.tasks).joinedload(Task.customer),
    )


def list_weekly_schedules(db: Session) -> list[WeeklySchedule]:
    return (
        db.query(WeeklySchedule)
        .order_by(WeeklySchedule.year.desc(), WeeklySchedule.week.desc())
        .all()
    )


def get_weekly_schedule(db: Session, schedule_id: int) -> Optional[WeeklySchedule]:
    return _schedule_query(db).filter(WeeklySchedule.id == schedule_id).first()


def get_schedule_by_year_week(db: Session, year: int, week: int) -> Optional[WeeklySchedule]:
    return (
        _schedule_query(db)
        .filter(WeeklySchedule.year == year, WeeklySchedule.week == week)
        .first()
    )


def _check_week(db: Session, year: int, week: int, exclude_id: Optional[int] = None) -> None:
    if week > weeks_in_year(year):
        raise ValidationFailed(
            "Invalid weekly schedule data",
            [field_error("week", f"{year} has only {weeks_in_year(year)} ISO weeks")],
        )
    q = db.query(WeeklySchedule.id).filter(
        WeeklySchedule.year == year, WeeklySchedule.week == week
    )
    if exclude_id is not None:
        q = q.filter(WeeklySchedule.id != exclude_id)
    if q.first() is not None:
        raise ValidationFailed(
            "Invalid weekly schedule data",
            [field_error("week", f"A schedule for week {week} of {year} already exists", "unique")],
        )


def _check_tasks_fit_week(db: Session, schedule_id: int, year: int, week: int) -> None:
    """Moving a schedule to another week must not strand its tasks outside it."""
    days = set(week_dates(year, week))
    stranded = (
        db.query(Task)
        .filter(Task.weekly_schedule_id == schedule_id)
        .order_by(Task.date, Task.id)
        .all()
    )
    stranded = [t for t in stranded if t.date not in days]
    if stranded:
        raise ValidationFailed(
            "Invalid weekly schedule data",
            [field_error(
                "week",
                f"Task {t.id} on {t.date.isoformat()} would fall outside week {week} of {year}",
            ) for t in stranded],
        )


def _commit_schedule(db: Session, row: WeeklySchedule) -> WeeklySchedule:
    try:
        return _save(db, row)
    except IntegrityError:
        # lost a race with a concurrent create for the same week
        db.rollback()
        raise ValidationFailed(
            "Invalid weekly schedule data",
            [field_error("week", f"A schedule for week {row.week} of {row.year} already exists", "unique")],
        )


def create_weekly_schedule(db: Session, fields: dict) -> WeeklySchedule:
    _check_week(db, fields["year"], fields["week"])
    row = _commit_schedule(db, WeeklySchedule(**fields))
    logger.info("Created weekly schedule %s for %s-W%02d", row.id, row.year, row.week)
    return row


def update_weekly_schedule(
    db: Session,
    schedule_id: int,
    fields: dict,
    enforce_consistency: bool = True,
) -> Optional[WeeklySchedule]:
    row = db.get(WeeklySchedule, schedule_id)
    if row is None:
        return None
    year = fields.get("year", row.year)
    week = fields.get("week", row.week)
    if (year, week) != (row.year, row.week):
        _check_week(db, year, week, exclude_id=schedule_id)
        if enforce_consistency:
            _check_tasks_fit_week(db, schedule_id, year, week)
    _apply(row, fields)
    return _commit_schedule(db, row)


def delete_weekly_schedule(db: Session, schedule_id: int) -> bool:
    row = db.get(WeeklySchedule, schedule_id)
    if row is None:
        return False
    db.delete(row)  # targets and tasks go with it (relationship cascade)
    db.commit()
    logger.info("Deleted weekly schedule %s", schedule_id)
    return True


# --- targets ----------------------------------------------------------------

def _target_query(db: Session):
    return db.query(Target).options(joinedload(Target.customer))


def list_targets(db: Session) -> list[Target]:
    return _target_query(db).order_by(Target.id).all()


def get_target(db: Session, target_id: int) -> Optional[Target]:
    return _target_query(db).filter(Target.id == target_id).first()


def list_targets_for_schedule(db: Session, schedule_id: int) -> list[Target]:
    return (
        _target_query(db)
        .filter(Target.weekly_schedule_id == schedule_id)
        .order_by(Target.id)
        .all()
    )


def _check_refs(db: Session, fields: dict) -> None:
    errors = []
    if "weekly_schedule_id" in fields and db.get(WeeklySchedule, fields["weekly_schedule_id"]) is None:
        errors.append(field_error("weekly_schedule_id", f"Weekly schedule {fields['weekly_schedule_id']} not found"))
    if "customer_id" in fields and db.get(Customer, fields["customer_id"]) is None:
        errors.append(field_error("customer_id", f"Customer {fields['customer_id']} not found"))
    if fields.get("target_id") is not None and db.get(Target, fields["target_id"]) is None:
        errors.append(field_error("target_id", f"Target {fields['target_id']} not found"))
    if errors:
        raise ValidationFailed("Invalid reference", errors)


def _check_target_move(db: Session, row: Target, fields: dict) -> None:
    """A target with linked tasks keeps its schedule and customer."""
    errors = []
    for key in ("weekly_schedule_id", "customer_id"):
        if key in fields and fields[key] != getattr(row, key):
            n_tasks = db.query(Task).filter(Task.target_id == row.id).count()
            if n_tasks:
                errors.append(field_error(
                    key,
                    f"Target {row.id} has {n_tasks} task(s); unlink them before changing {key}",
                    "in_use",
                ))
    if errors:
        raise ValidationFailed("Invalid target data", errors)


def create_target(db: Session, fields: dict) -> Target:
    _check_refs(db, fields)
    row = _save(db, Target(**fields))
    logger.info(
        "Created target %s: %s h for customer %s in schedule %s",
        row.id, row.target_hours, row.customer_id, row.weekly_schedule_id,
    )
    return row


def update_target(
    db: Session,
    target_id: int,
    fields: dict,
    enforce_consistency: bool = True,
) -> Optional[Target]:
    row = db.get(Target, target_id)
    if row is None:
        return None
    _check_refs(db, fields)
    if enforce_consistency:
        _check_target_move(db, row, fields)
    _apply(row, fields)
    return _save(db, row)


def delete_target(db: Session, target_id: int) -> bool:
    row = db.get(Target, target_id)
    if row is None:
        return False
    # tasks outlive their target; they just stop counting against it
    db.query(Task).filter(Task.target_id == target_id).update(
        {Task.target_id: None}, synchronize_session=False
    )
    db.delete(row)
    db.commit()
    logger.info("Deleted target %s", target_id)
    return True


# --- tasks ------------------------------------------------------------------

def _task_query(db: Session):
    return db.query(Task).options(
        joinedload(Task.customer),
        joinedload(Task.target).joinedload(Target.customer),
    )


def list_tasks(db: Session) -> list[Task]:
    return _task_query(db).order_by(Task.date, Task.id).all()


def get_task(db: Session, task_id: int) -> Optional[Task]:
    return _task_query(db).filter(Task.id == task_id).first()


def list_tasks_for_schedule(db: Session, schedule_id: int) -> list[Task]:
    return (
        _task_query(db)
        .filter(Task.weekly_schedule_id == schedule_id)
        .order_by(Task.date, Task.id)
        .all()
    )


def _check_task(db: Session, values: dict, enforce: bool) -> None:
    _check_refs(db, values)
    if not enforce:
        return
    schedule = db.get(WeeklySchedule, values["weekly_schedule_id"])
    target = db.get(Target, values["target_id"]) if values.get("target_id") is not None else None
    errors = task_consistency_errors(schedule, values["customer_id"], values["date"], target)
    if errors:
        logger.warning("Rejected task write: %s", "; ".join(e["msg"] for e in errors))
        raise ValidationFailed("Invalid task data", errors)


def create_task(db: Session, fields: dict, enforce_consistency: bool = True) -> Task:
    _check_task(db, fields, enforce_consistency)
    row = _save(db, Task(**fields))
    logger.info(
        "Created task %s on %s for customer %s (target %s)",
        row.id, row.date, row.customer_id, row.target_id,
    )
    return row


def update_task(
    db: Session,
    task_id: int,
    fields: dict,
    enforce_consistency: bool = True,
) -> Optional[Task]:
    row = db.get(Task, task_id)
    if row is None:
        return None
    merged = {
        "weekly_schedule_id": row.weekly_schedule_id,
        "customer_id": row.customer_id,
        "target_id": row.target_id,
        "date": row.date,
    }
    merged.update({k: v for k, v in fields.items() if k in merged})
    _check_task(db, merged, enforce_consistency)
    _apply(row, fields)
    return _save(db, row)


def delete_task(db: Session, task_id: int) -> bool:
    row = db.get(Task, task_id)
    if row is None:
        return False
    db.delete(row)
    db.commit()
    logger.info("Deleted task %s", task_id)
    return True
