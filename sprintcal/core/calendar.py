"""
ISO-8601 calendar primitives.

ISO weeks start on Monday and are owned by the year of their Thursday, so the
first days of January can belong to the last week of the previous year and
the last days of December to week 1 of the next one.
"""
import math
from datetime import date, datetime, timedelta
from typing import Union

from dateutil.parser import parse as parse_date_str

DateLike = Union[date, datetime, str]

DAYS_PER_WEEK = 7


def as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    elif isinstance(value, date):
        return value
    elif isinstance(value, str):
        return parse_date_str(value).date()
    raise TypeError(f"Cannot convert {value!r} to a date")


def thursday_of(d: DateLike) -> date:
    d = as_date(d)
    return d + timedelta(days=3 - d.weekday())


def monday_of(d: DateLike) -> date:
    d = as_date(d)
    return d - timedelta(days=d.weekday())


def sunday_of(d: DateLike) -> date:
    return monday_of(d) + timedelta(days=6)


def week_number(d: DateLike) -> int:
    thursday = thursday_of(d)
    year_start = date(thursday.year, 1, 1)
    return math.ceil(((thursday - year_start).days + 1) / DAYS_PER_WEEK)


def iso_year(d: DateLike) -> int:
    return thursday_of(d).year


def date_from_week(week: int, year: int) -> date:
    """Monday of the given ISO week. 4 January is always in week 1."""
    jan4 = date(year, 1, 4)
    week1_monday = jan4 - timedelta(days=jan4.weekday())
    return week1_monday + timedelta(weeks=week - 1)
