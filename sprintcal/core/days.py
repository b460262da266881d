from datetime import date, timedelta
from typing import List, Tuple

from babel.dates import format_skeleton

from .calendar import DateLike, as_date, iso_year, week_number
from .context import SprintContext
from .mapping import sprint_from_week, WEEKS_PER_SPRINT
from .resolver import sprint_boundaries

SPRINT_DURATION_DAYS = WEEKS_PER_SPRINT * 7


def sprint_days(sprint: int, year: int) -> List[date]:
    _, _, start_date, _ = sprint_boundaries(sprint, year)
    return [start_date + timedelta(days=i) for i in range(SPRINT_DURATION_DAYS)]


def sprint_day_labels(g: SprintContext, sprint: int, year: int) -> List[str]:
    """Chart axis labels, "19/01" style for the configured locale."""
    return [format_skeleton("MMdd", d, locale=g.locale) for d in sprint_days(sprint, year)]


def is_date_in_sprint(d: DateLike, sprint: int, year: int) -> bool:
    _, _, start_date, end_date = sprint_boundaries(sprint, year)
    return start_date <= as_date(d) <= end_date


def sprint_for_date(d: DateLike) -> Tuple[int, int]:
    """(ISO year, sprint number) of a date."""
    return iso_year(d), sprint_from_week(week_number(d))
