from datetime import date, timedelta
from typing import Optional

from babel.dates import format_date
from structlog import get_logger

from sprintcal.datatypes import SprintRecord, SprintDateRange
from sprintcal.settings import DEFAULT_LOCALE, normalize_locale

from .calendar import date_from_week, iso_year, week_number
from .context import SprintContext
from .mapping import resolve_sprint_weeks, roll_back, sprint_from_week

logger = get_logger(__name__)


def _month_name(d: date, locale: str) -> str:
    return format_date(d, "MMMM", locale=locale)


def format_range(start_date: date, end_date: date, locale: Optional[str] = None) -> str:
    """
    "6 - 19 janvier 2026" within a month, "26 janvier - 8 février 2026" within
    a year, "29 décembre 2025 - 11 janvier 2026" across years.
    """
    locale = normalize_locale(locale or DEFAULT_LOCALE)
    start_month = _month_name(start_date, locale)
    end_month = _month_name(end_date, locale)

    if start_date.year == end_date.year and start_date.month == end_date.month:
        return f"{start_date.day} - {end_date.day} {start_month} {start_date.year}"
    if start_date.year == end_date.year:
        return f"{start_date.day} {start_month} - {end_date.day} {end_month} {end_date.year}"
    return f"{start_date.day} {start_month} {start_date.year} - {end_date.day} {end_month} {end_date.year}"


def sprint_boundaries(sprint: int, year: int):
    first_week, second_week = resolve_sprint_weeks(sprint, year)
    start_date = date_from_week(first_week.week_number, first_week.year)
    end_date = date_from_week(second_week.week_number, second_week.year) + timedelta(days=6)
    return first_week, second_week, start_date, end_date


def build_sprint(g: SprintContext, number: int, year: int, is_current: bool = False, **positional) -> SprintRecord:
    first_week, second_week, start_date, end_date = sprint_boundaries(number, year)
    return SprintRecord(
        number=number,
        name=f"Sprint {number}",
        weeks=(first_week.week_number, second_week.week_number),
        year=year,
        end_week_year=second_week.year,
        start_date=start_date,
        end_date=end_date,
        formatted=format_range(start_date, end_date, g.locale),
        is_current=is_current,
        **positional,
    )


def current_sprint(g: SprintContext, reference_date: Optional[date] = None) -> SprintRecord:
    reference_date = g.resolve_date(reference_date)
    week = week_number(reference_date)
    year = iso_year(reference_date)
    number = sprint_from_week(week)
    start_week, end_week = resolve_sprint_weeks(number, year)

    is_start_week = week == start_week.week_number
    return build_sprint(
        g,
        number,
        year,
        is_current=True,
        current_week=week,
        is_start_week=is_start_week,
        is_end_week=week == end_week.week_number,
        week_in_sprint=1 if is_start_week else 2,
    )


def current_sprint_number(g: SprintContext, reference_date: Optional[date] = None) -> int:
    return sprint_from_week(week_number(g.resolve_date(reference_date)))


def previous_sprint(g: SprintContext, reference_date: Optional[date] = None) -> SprintRecord:
    current = current_sprint(g, reference_date)
    year, number = roll_back(current.number, current.year)
    if year != current.year:
        logger.debug("previous sprint is in the previous ISO year", year=year, sprint=number)
    return build_sprint(g, number, year)


def sprint_date_range(g: SprintContext, sprint: int) -> SprintDateRange:
    """Dates of a sprint in the current calendar year with display strings."""
    _, _, start_date, end_date = sprint_boundaries(sprint, g.today().year)
    return SprintDateRange(
        start_date=start_date,
        end_date=end_date,
        start_formatted=format_date(start_date, "d MMMM", locale=g.locale),
        end_formatted=format_date(end_date, "d MMMM y", locale=g.locale),
    )
