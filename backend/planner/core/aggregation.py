"""Weekly totals and target progress.

Everything here is a pure function of the tasks/targets handed in. Callers
pass ORM rows straight from the storage layer (or any object with the same
attribute names):

  task:   estimated_hours, actual_hours, billable, target_id, date,
          customer.billing_rate
  target: id, target_hours

Sums are exact `Decimal`s. Nothing is rounded here; use `money()` or
`round_hours()` when presenting a value.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from planner.core.constants import CENT, HUNDRED, ZERO
from planner.core.time_utils import day_name, parse_task_date, week_dates


def to_decimal(value: Any) -> Decimal:
    """Coerce a stored quantity (Decimal, int, decimal string) to Decimal.

    Floats go through str() so 0.1 stays 0.1 instead of its binary expansion.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def money(value: Any) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


# Hours and percentages use the same two-place scale as the stored columns
round_hours = money


@dataclass(frozen=True)
class Totals:
    estimated_hours: Decimal = ZERO
    actual_hours: Decimal = ZERO
    estimated_revenue: Decimal = ZERO
    actual_revenue: Decimal = ZERO

    def __add__(self, other: "Totals") -> "Totals":
        return Totals(
            estimated_hours=self.estimated_hours + other.estimated_hours,
            actual_hours=self.actual_hours + other.actual_hours,
            estimated_revenue=self.estimated_revenue + other.estimated_revenue,
            actual_revenue=self.actual_revenue + other.actual_revenue,
        )


@dataclass(frozen=True)
class WeekTotals(Totals):
    total_target_hours: Decimal = ZERO


@dataclass(frozen=True)
class TargetProgress:
    allocated_hours: Decimal
    target_hours: Decimal
    percentage: Decimal
    remaining_hours: Decimal


@dataclass
class DayBreakdown:
    index: int
    name: str
    date: date
    tasks: list = field(default_factory=list)
    totals: Totals = field(default_factory=Totals)


@dataclass
class WeekSummary:
    year: int
    week: int
    days: list[DayBreakdown]
    totals: WeekTotals
    # (target, progress) in the order the targets were supplied
    targets: list[tuple[Any, TargetProgress]]


def day_totals(tasks: Iterable[Any]) -> Totals:
    """Hours and revenue for one column of tasks.

    Non-billable tasks add their hours but no revenue.
    """
    est_h = act_h = est_rev = act_rev = ZERO
    for task in tasks:
        est = to_decimal(task.estimated_hours)
        act = to_decimal(task.actual_hours)
        est_h += est
        act_h += act
        if task.billable:
            rate = to_decimal(task.customer.billing_rate)
            est_rev += est * rate
            act_rev += act * rate
    return Totals(
        estimated_hours=est_h,
        actual_hours=act_h,
        estimated_revenue=est_rev,
        actual_revenue=act_rev,
    )


def week_totals(tasks: Iterable[Any], targets: Iterable[Any]) -> WeekTotals:
    """Same sums as `day_totals` over the whole schedule, plus target hours.

    Targets are weekly allocations, so they only appear in this total.
    """
    t = day_totals(tasks)
    total_target = sum((to_decimal(tg.target_hours) for tg in targets), ZERO)
    return WeekTotals(
        estimated_hours=t.estimated_hours,
        actual_hours=t.actual_hours,
        estimated_revenue=t.estimated_revenue,
        actual_revenue=t.actual_revenue,
        total_target_hours=total_target,
    )


def target_progress(target: Any, tasks: Iterable[Any]) -> TargetProgress:
    """How much of a target is planned.

    Counts estimated (not actual) hours of tasks whose target_id matches.
    `tasks` must already be scoped to the target's schedule.
    """
    allocated = sum(
        (to_decimal(t.estimated_hours) for t in tasks if t.target_id == target.id),
        ZERO,
    )
    target_hours = to_decimal(target.target_hours)
    if target_hours > 0:
        pct = allocated / target_hours * HUNDRED
        pct = max(ZERO, min(pct, HUNDRED))
    else:
        pct = ZERO
    return TargetProgress(
        allocated_hours=allocated,
        target_hours=target_hours,
        percentage=pct,
        remaining_hours=max(target_hours - allocated, ZERO),
    )


def daily_breakdown(tasks: Iterable[Any], dates: list[date]) -> list[DayBreakdown]:
    """Split tasks into the board's day columns and total each one.

    Tasks dated outside `dates` land in no column.
    """
    columns = [
        DayBreakdown(index=i, name=day_name(i), date=d) for i, d in enumerate(dates)
    ]
    by_date = {col.date: col for col in columns}
    for task in tasks:
        d = task.date if isinstance(task.date, date) else parse_task_date(task.date)
        col = by_date.get(d)
        if col is not None:
            col.tasks.append(task)
    for col in columns:
        col.totals = day_totals(col.tasks)
    return columns


def week_summary(year: int, week: int, tasks: Iterable[Any], targets: Iterable[Any]) -> WeekSummary:
    tasks = list(tasks)
    targets = list(targets)
    return WeekSummary(
        year=year,
        week=week,
        days=daily_breakdown(tasks, week_dates(year, week)),
        totals=week_totals(tasks, targets),
        targets=[(tg, target_progress(tg, tasks)) for tg in targets],
    )
