import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from planner.schemas.customer import CustomerRead
from planner.schemas.target import TargetBrief


class TaskBase(BaseModel):
    weekly_schedule_id: int
    customer_id: int
    target_id: Optional[int] = None
    date: dt.date
    estimated_hours: Decimal = Field(ge=0, max_digits=5, decimal_places=2)
    actual_hours: Decimal = Field(default=Decimal("0"), ge=0, max_digits=5, decimal_places=2)
    notes: str  # required, may be empty
    billable: bool = True


class TaskCreate(TaskBase):
    """Schema for creating a new task."""
    pass


class TaskUpdate(BaseModel):
    """Schema for updating an existing task (all fields optional)."""

    weekly_schedule_id: Optional[int] = None
    customer_id: Optional[int] = None
    # explicit null unlinks the task from its target
    target_id: Optional[int] = None
    date: Optional[dt.date] = None
    estimated_hours: Optional[Decimal] = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    actual_hours: Optional[Decimal] = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    notes: Optional[str] = None
    billable: Optional[bool] = None

    # Tolerate relation blobs a client echoes back from a read
    model_config = ConfigDict(extra="ignore")


class TaskRead(TaskBase):
    id: int
    created_at: Optional[dt.datetime] = None
    customer: CustomerRead
    target: Optional[TargetBrief] = None

    model_config = ConfigDict(from_attributes=True)


class TaskDraftRead(BaseModel):
    """Pre-filled task form values; not persisted."""

    weekly_schedule_id: Optional[int] = None
    customer_id: int
    target_id: Optional[int] = None
    date: str
    estimated_hours: str = ""
    actual_hours: str = "0"
    notes: str = ""
    billable: bool = True

    model_config = ConfigDict(from_attributes=True)
