from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from planner.schemas.target import TargetRead
from planner.schemas.task import TaskRead


class WeeklyScheduleBase(BaseModel):
    year: int = Field(ge=1, le=9999)
    week: int = Field(ge=1, le=53)  # ISO week; 53 only exists in long years
    overall_goal: str = Field(min_length=1)


class WeeklyScheduleCreate(WeeklyScheduleBase):
    pass


class WeeklyScheduleUpdate(BaseModel):
    year: Optional[int] = Field(default=None, ge=1, le=9999)
    week: Optional[int] = Field(default=None, ge=1, le=53)
    overall_goal: Optional[str] = Field(default=None, min_length=1)

    model_config = ConfigDict(extra="ignore")


class WeeklyScheduleUpsert(BaseModel):
    """Body for PUT /by-week/{year}/{week}: the week comes from the path."""

    overall_goal: str = Field(min_length=1)


class WeeklyScheduleRead(WeeklyScheduleBase):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class WeeklyScheduleDetail(WeeklyScheduleRead):
    """A schedule with its targets and tasks, customers embedded."""

    targets: list[TargetRead] = []
    tasks: list[TaskRead] = []
