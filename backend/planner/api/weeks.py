from fastapi import APIRouter

from planner.core.config import settings
from planner.core.constants import DAY_NAMES
from planner.core.navigation import next_week, previous_week
from planner.core.time_utils import current_week, format_week_range, week_dates
from planner.core.validation import ValidationFailed, field_error
from planner.schemas.summary import WeekCursor, WeekInfoRead


router = APIRouter(prefix="/api/weeks", tags=["weeks"])


def _week_info(year: int, week: int) -> WeekInfoRead:
    try:
        dates = week_dates(year, week)
        strict = settings.iso_week_navigation
        prev_y, prev_w = previous_week(year, week, strict_iso=strict)
        next_y, next_w = next_week(year, week, strict_iso=strict)
    except ValueError as e:
        raise ValidationFailed("Invalid week", [field_error("week", str(e), source="path")])

    return WeekInfoRead(
        year=year,
        week=week,
        label=format_week_range(year, week),
        dates=dates,
        day_names=list(DAY_NAMES),
        previous=WeekCursor(year=prev_y, week=prev_w),
        next=WeekCursor(year=next_y, week=next_w),
    )


@router.get("/current", response_model=WeekInfoRead)
def get_current_week():
    year, week = current_week()
    return _week_info(year, week)


@router.get("/{year}/{week}", response_model=WeekInfoRead)
def get_week(year: int, week: int):
    return _week_info(year, week)
