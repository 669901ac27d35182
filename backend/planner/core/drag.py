"""Turning a target dropped on a day column into a task draft.

The board keeps at most one pending drop. A day column that sees the pending
target aimed at its own index opens the task form pre-filled from it; closing
that form (saved or cancelled) always clears the capture so a stale drop can't
reopen the form later.

    r = DropReconciler()
    r.drop(target, 2)                 # IDLE -> PENDING
    draft = r.open_form(2, dates)     # PENDING -> RESOLVED
    r.close()                         # -> IDLE
"""

from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional

from planner.core.constants import WORKING_DAYS
from planner.core.time_utils import format_task_date


class DropState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class TaskDraft:
    """Default field values for a task form; nothing is persisted."""

    customer_id: int
    target_id: Optional[int]
    date: str
    weekly_schedule_id: Optional[int] = None
    estimated_hours: str = ""
    actual_hours: str = "0"
    notes: str = ""
    billable: bool = True

    def as_dict(self) -> dict:
        return asdict(self)


def _check_day_index(day_index: int) -> None:
    if day_index < 0 or day_index >= WORKING_DAYS:
        raise IndexError(f"day index must be 0..{WORKING_DAYS - 1}, got {day_index}")


def draft_from_target(
    target: Any,
    day_index: int,
    dates: list[date],
    weekly_schedule_id: Optional[int] = None,
) -> TaskDraft:
    """Draft for `target` dropped on column `day_index` of the week `dates`.

    Customer and target come from the target; the schedule defaults to the
    target's own schedule.
    """
    _check_day_index(day_index)
    if weekly_schedule_id is None:
        weekly_schedule_id = getattr(target, "weekly_schedule_id", None)
    return TaskDraft(
        customer_id=target.customer_id,
        target_id=target.id,
        date=format_task_date(dates[day_index]),
        weekly_schedule_id=weekly_schedule_id,
    )


class DropReconciler:
    def __init__(self):
        self.state = DropState.IDLE
        self._target: Any = None
        self._day_index: Optional[int] = None

    @property
    def pending(self) -> Optional[tuple[Any, int]]:
        if self._target is None:
            return None
        return self._target, self._day_index

    def drop(self, target: Any, day_index: int) -> None:
        """A target card was released over a day column. Last drop wins."""
        _check_day_index(day_index)
        self._target = target
        self._day_index = day_index
        self.state = DropState.PENDING

    def pending_for(self, day_index: int) -> Any:
        """The pending target if it was dropped on this column, else None."""
        if self.state is DropState.PENDING and self._day_index == day_index:
            return self._target
        return None

    def open_form(self, day_index: int, dates: list[date]) -> Optional[TaskDraft]:
        target = self.pending_for(day_index)
        if target is None:
            return None
        self.state = DropState.RESOLVED
        return draft_from_target(target, day_index, dates)

    def close(self) -> None:
        self._target = None
        self._day_index = None
        self.state = DropState.IDLE
