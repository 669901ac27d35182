from datetime import date, timedelta

from planner.core.constants import DAY_NAMES, WORKING_DAYS


def current_week(today: date | None = None) -> tuple[int, int]:
    """Return (ISO year, ISO week) for today, or for `today` if given.

    Uses the ISO week-year, so 2024-12-30 -> (2025, 1).
    """
    d = today or date.today()
    iso = d.isocalendar()
    return iso[0], iso[1]


def weeks_in_year(year: int) -> int:
    """Number of ISO weeks in `year` (52 or 53).

    Dec 28 always falls in the last ISO week of its year.
    """
    return date(year, 12, 28).isocalendar()[1]


def week_dates(year: int, week: int) -> list[date]:
    """
    Monday..Saturday of ISO (year, week).
    Example: (2024, 1) -> [2024-01-01, ..., 2024-01-06]
    """
    if week < 1 or week > weeks_in_year(year):
        raise ValueError(f"{year} has no ISO week {week}")
    monday = date.fromisocalendar(year, week, 1)
    return [monday + timedelta(days=i) for i in range(WORKING_DAYS)]


def format_week_range(year: int, week: int) -> str:
    """
    Human label for the working week.
    Example: (2024, 10) -> 'Mar 4 - Mar 9, 2024'
    """
    dates = week_dates(year, week)
    start, end = dates[0], dates[-1]
    return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"


def day_name(index: int) -> str:
    """0 -> 'Monday' ... 5 -> 'Saturday'. Raises IndexError outside 0..5."""
    if index < 0 or index >= WORKING_DAYS:
        raise IndexError(f"day index must be 0..{WORKING_DAYS - 1}, got {index}")
    return DAY_NAMES[index]


def day_index(d: date) -> int:
    """Column of `d` on the board (Monday=0). Sundays have no column."""
    idx = d.weekday()
    if idx >= WORKING_DAYS:
        raise ValueError(f"{d.isoformat()} is not a working day")
    return idx


def format_task_date(d: date) -> str:
    """date -> 'YYYY-MM-DD'."""
    # isoformat zero-pads the year, strftime('%Y') does not on every platform
    return d.isoformat()


def parse_task_date(s: str) -> date:
    """'YYYY-MM-DD' -> date. Raises ValueError on anything else."""
    if s is None:
        raise ValueError("Date is required")
    # fromisoformat alone also takes "20240306" and "2024-W10-3"
    if not isinstance(s, str) or len(s) != 10 or s[4] != "-" or s[7] != "-":
        raise ValueError(f"Invalid date {s!r}, expected YYYY-MM-DD")
    return date.fromisoformat(s)
