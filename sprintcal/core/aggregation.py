"""
Sprint level views of weekly bucketed data.

Weekly records come from the caller and may be dirty: entries without a usable
`week` are skipped, never raised on. `scan_weekly_records` reports what was
skipped and why for callers that want to be strict about it.
"""
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from pydantic import ValidationError
from structlog import get_logger

from sprintcal.datatypes import (
    IsoWeek,
    ScannedRecord,
    SkippedRecord,
    SkipReason,
    SprintAggregate,
    SprintRecord,
    WeeklyRecord,
    WeeklyScan,
)

from .context import SprintContext
from .history import sprint_history
from .mapping import sprint_from_week, sprint_weeks
from .resolver import build_sprint

logger = get_logger(__name__)

ResultT = TypeVar("ResultT")
Reducer = Callable[[List[Any]], ResultT]


def _as_items(records: Any) -> list:
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        logger.warning("weekly records are not a collection, treating as no data", type=type(records).__name__)
        return []
    return list(records)


def _read_week(item: Any) -> Any:
    if isinstance(item, WeeklyRecord):
        return item.week
    elif isinstance(item, Mapping):
        return item.get("week")
    return getattr(item, "week", None)


def _parse_week(raw: Any) -> IsoWeek:
    if isinstance(raw, IsoWeek):
        return raw
    return IsoWeek.model_validate(raw)


def scan_weekly_records(records: Any, require_year: bool = True) -> WeeklyScan:
    scanned: List[ScannedRecord] = []
    skipped: List[SkippedRecord] = []

    for index, item in enumerate(_as_items(records)):
        raw_week = _read_week(item)
        if not raw_week:
            skipped.append(SkippedRecord(index=index, reason=SkipReason.missing_week, value=item))
            continue
        try:
            week = _parse_week(raw_week)
        except ValidationError:
            skipped.append(SkippedRecord(index=index, reason=SkipReason.invalid_week, value=raw_week))
            continue
        if require_year and week.year is None:
            skipped.append(SkippedRecord(index=index, reason=SkipReason.missing_year, value=raw_week))
            continue
        scanned.append(ScannedRecord(index=index, item=item, week=week))

    if skipped:
        logger.debug(
            "skipped weekly records",
            skipped=len(skipped),
            reasons=sorted({s.reason.value for s in skipped}),
        )
    return WeeklyScan(records=scanned, skipped=skipped)


def extract_sprints(g: SprintContext, weekly_records: Any) -> List[SprintRecord]:
    """Distinct sprints present in the data, latest first."""
    sprints: Dict[str, SprintRecord] = {}
    for scanned in scan_weekly_records(weekly_records).records:
        year = scanned.week.year
        number = sprint_from_week(scanned.week.week_number)
        key = f"{year}-{number}"
        if key not in sprints:
            sprints[key] = build_sprint(g, number, year)

    return sorted(sprints.values(), key=lambda s: (s.year, s.number), reverse=True)


def sprint_history_from_data(
    g: SprintContext,
    weekly_records: Any,
    min_count: Optional[int] = None,
    reference_date: Optional[date] = None,
) -> List[SprintRecord]:
    min_count = g.settings.history_count if min_count is None else min_count
    sprints = extract_sprints(g, weekly_records)
    if not sprints:
        return sprint_history(g, min_count, reference_date)
    if min_count <= 0:
        return []
    return sprints[:min_count]


def _expected_years(sprint: int, year: int, wrap_year: bool) -> Dict[int, int]:
    start_week, end_week = sprint_weeks(sprint)
    if not wrap_year:
        return {start_week: year, end_week: year}
    return {start_week: year, end_week: year + 1 if end_week < start_week else year}


def _select_sprint_items(items: list, sprint: int, year: Optional[int], wrap_year: bool = False) -> list:
    weeks = sprint_weeks(sprint)
    expected_years = _expected_years(sprint, year, wrap_year) if year is not None else {}

    ret = []
    for scanned in scan_weekly_records(items, require_year=False).records:
        week = scanned.week
        if week.week_number not in weeks:
            continue
        if year is not None and week.year is not None and week.year != expected_years[week.week_number]:
            continue
        ret.append(scanned.item)
    return ret


def aggregate_weekly_to_sprint(
    weekly_records: Any,
    sprint: int,
    reducer: Reducer,
    year: Optional[int] = None,
    wrap_year: bool = False,
) -> Optional[ResultT]:
    """
    Applies `reducer` to the records of the sprint's two weeks. When `year` is
    given, records carrying a year must belong to it. With `wrap_year` the
    wrapped second week of sprint 26 is taken from the following year instead.
    Returns None when nothing matches.
    """
    items = _select_sprint_items(_as_items(weekly_records), sprint, year, wrap_year)
    if not items:
        return None
    return reducer(items)


def aggregate_multiple_sprints(
    weekly_records: Any,
    sprint_numbers: Sequence[int],
    reducer: Reducer,
) -> List[SprintAggregate]:
    items = _as_items(weekly_records)
    ret = []
    for sprint in sprint_numbers:
        data = aggregate_weekly_to_sprint(items, sprint, reducer)
        if data is not None:
            ret.append(SprintAggregate(sprint=sprint, data=data))
    return ret
