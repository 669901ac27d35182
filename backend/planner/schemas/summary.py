import datetime as dt
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict

from planner.core.aggregation import money, round_hours

# Two-place decimals on the wire, e.g. "400.00"
Money = Annotated[Decimal, AfterValidator(money)]
Hours = Annotated[Decimal, AfterValidator(round_hours)]


class TotalsRead(BaseModel):
    estimated_hours: Hours
    actual_hours: Hours
    estimated_revenue: Money
    actual_revenue: Money

    model_config = ConfigDict(from_attributes=True)


class WeekTotalsRead(TotalsRead):
    total_target_hours: Hours


class TargetProgressRead(BaseModel):
    allocated_hours: Hours
    target_hours: Hours
    percentage: Hours
    remaining_hours: Hours

    model_config = ConfigDict(from_attributes=True)


class DaySummaryRead(BaseModel):
    index: int
    name: str
    date: dt.date
    task_ids: list[int]
    totals: TotalsRead


class TargetSummaryRead(BaseModel):
    target_id: int
    customer_id: int
    customer_name: str
    goal: str
    progress: TargetProgressRead


class WeekSummaryRead(BaseModel):
    weekly_schedule_id: int
    year: int
    week: int
    label: str
    days: list[DaySummaryRead]
    totals: WeekTotalsRead
    targets: list[TargetSummaryRead]


class WeekCursor(BaseModel):
    year: int
    week: int


class WeekInfoRead(BaseModel):
    """Everything the board header needs to show and step a week."""

    year: int
    week: int
    label: str
    dates: list[dt.date]
    day_names: list[str]
    previous: WeekCursor
    next: WeekCursor
