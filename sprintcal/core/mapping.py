import math
from typing import Tuple

from sprintcal.datatypes import IsoWeek
from sprintcal.exceptions import InvalidSprintException

WEEKS_PER_SPRINT = 2
MAX_SPRINTS_PER_YEAR = 26
WRAP_AFTER_WEEK = WEEKS_PER_SPRINT * MAX_SPRINTS_PER_YEAR


def sprint_from_week(week: int) -> int:
    """
    W01 is a partial week folded into sprint 1, otherwise sprint N is made of
    weeks 2N and 2N+1.
    Non-positive weeks are not validated.
    """
    if week == 1:
        return 1
    return week // WEEKS_PER_SPRINT


def sprint_weeks(sprint: int) -> Tuple[int, int]:
    """
    The two week numbers of a sprint. Past week 52 the second week wraps to the
    low week numbers of the next ISO year; the year itself is not part of the
    result, see resolve_sprint_weeks.
    """
    start_week = sprint * WEEKS_PER_SPRINT
    end_week = start_week + 1
    if end_week > WRAP_AFTER_WEEK:
        end_week -= WRAP_AFTER_WEEK
    return start_week, end_week


def resolve_sprint_weeks(sprint: int, year: int) -> Tuple[IsoWeek, IsoWeek]:
    if not 1 <= sprint <= MAX_SPRINTS_PER_YEAR:
        raise InvalidSprintException(f"Sprint number must be between 1 and {MAX_SPRINTS_PER_YEAR}, got {sprint}")
    start_week, end_week = sprint_weeks(sprint)
    year_delta = 1 if end_week < start_week else 0
    return (
        IsoWeek(week_number=start_week, year=year),
        IsoWeek(week_number=end_week, year=year + year_delta),
    )


def roll_back(sprint: int, year: int, steps: int = 1) -> Tuple[int, int]:
    """
    Walk `steps` sprints back from (year, sprint) and return the resulting
    (year, sprint) pair. Running below sprint 1 continues at sprint 26 of the
    previous ISO year, as many years back as needed.
    """
    number = sprint - steps
    if number >= 1:
        return year, number
    years_back = math.ceil((1 - number) / MAX_SPRINTS_PER_YEAR)
    return year - years_back, number + years_back * MAX_SPRINTS_PER_YEAR
