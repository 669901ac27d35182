"""Cross-entity checks that a single request body can't express.

Errors are itemized per field in the same shape pydantic uses
(`loc`/`msg`/`type`) so the API renders both kinds identically.
"""

from typing import Any, Optional

from planner.core.time_utils import week_dates


class ValidationFailed(Exception):
    def __init__(self, message: str, errors: Optional[list[dict]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


def field_error(field: str, msg: str, kind: str = "value_error", source: str = "body") -> dict:
    return {"loc": [source, field], "msg": msg, "type": kind}


def task_consistency_errors(
    schedule: Any,
    customer_id: int,
    task_date,
    target: Any = None,
) -> list[dict]:
    """Problems with a task's links to its schedule, customer and target.

    - the target (if any) must belong to the same schedule and customer
    - the date must be one of the schedule's six working days
    """
    errors: list[dict] = []
    if target is not None:
        if target.weekly_schedule_id != schedule.id:
            errors.append(field_error(
                "target_id",
                f"Target {target.id} belongs to weekly schedule "
                f"{target.weekly_schedule_id}, not {schedule.id}",
            ))
        if target.customer_id != customer_id:
            errors.append(field_error(
                "target_id",
                f"Target {target.id} belongs to customer {target.customer_id}, "
                f"not {customer_id}",
            ))

    try:
        days = week_dates(schedule.year, schedule.week)
    except ValueError:
        # schedule for a week that doesn't exist; nothing to compare against
        days = []
    if days and task_date not in days:
        errors.append(field_error(
            "date",
            f"Date {task_date.isoformat()} is outside week {schedule.week} of "
            f"{schedule.year} ({days[0].isoformat()} to {days[-1].isoformat()})",
        ))
    return errors
