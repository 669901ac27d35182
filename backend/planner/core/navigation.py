"""Week cursor navigation for the board header.

The board has always wrapped at week 52, which makes week 53 of a long ISO
year unreachable by stepping. `strict_iso=True` wraps at the real week count
instead; the API picks the mode from `settings.iso_week_navigation`.
"""

from planner.core.constants import APPROX_WEEKS_PER_YEAR
from planner.core.time_utils import weeks_in_year


def _last_week(year: int, strict_iso: bool) -> int:
    return weeks_in_year(year) if strict_iso else APPROX_WEEKS_PER_YEAR


def previous_week(year: int, week: int, strict_iso: bool = False) -> tuple[int, int]:
    week -= 1
    if week < 1:
        year -= 1
        week = _last_week(year, strict_iso)
    return year, week


def next_week(year: int, week: int, strict_iso: bool = False) -> tuple[int, int]:
    week += 1
    if week > _last_week(year, strict_iso):
        week = 1
        year += 1
    return year, week
