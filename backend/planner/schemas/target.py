from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from planner.schemas.customer import CustomerRead
from planner.schemas.summary import TargetProgressRead


class TargetBase(BaseModel):
    weekly_schedule_id: int
    customer_id: int
    target_hours: Decimal = Field(ge=0, max_digits=5, decimal_places=2)
    goal: str = Field(min_length=1)


class TargetCreate(TargetBase):
    pass


class TargetUpdate(BaseModel):
    weekly_schedule_id: Optional[int] = None
    customer_id: Optional[int] = None
    target_hours: Optional[Decimal] = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    goal: Optional[str] = Field(default=None, min_length=1)

    model_config = ConfigDict(extra="ignore")


class TargetBrief(TargetBase):
    """Target without its relations, as embedded in a task."""

    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TargetRead(TargetBrief):
    customer: CustomerRead


class TargetWithProgress(TargetRead):
    progress: TargetProgressRead
