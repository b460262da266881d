from typing import List, Sequence, Union

import pandas as pd
from structlog import get_logger

from sprintcal.datatypes import SprintRecord

from .mapping import WEEKS_PER_SPRINT

logger = get_logger(__name__)

SPRINT_FRAME_COLUMNS = ["year", "sprint", "name", "start_date", "end_date", "formatted", "is_current"]


def weekly_frame_to_sprints(
    frame: pd.DataFrame,
    value_columns: Union[str, Sequence[str]],
    how: str = "sum",
    year_column: str = "year",
    week_column: str = "week_number",
) -> pd.DataFrame:
    """
    Groups a weekly bucketed DataFrame into sprint rows.

    Rows without a usable week number or year are dropped. The result has one
    row per (year, sprint), latest first, with `how` applied to every value
    column (any pandas groupby aggregation name: sum, mean, max...).
    """
    if isinstance(value_columns, str):
        value_columns = [value_columns]
    value_columns = list(value_columns)

    weeks = pd.to_numeric(frame[week_column], errors="coerce")
    years = pd.to_numeric(frame[year_column], errors="coerce")
    valid = weeks.between(1, 53) & years.notna()
    if not valid.all():
        logger.debug("dropping rows without week data", dropped=int((~valid).sum()))

    df = frame.loc[valid, value_columns].copy()
    df["year"] = years[valid].astype(int)
    # week 1 belongs to sprint 1, otherwise sprint N = weeks 2N and 2N+1
    df["sprint"] = (weeks[valid].astype(int) // WEEKS_PER_SPRINT).clip(lower=1)

    if df.empty:
        return pd.DataFrame(columns=["year", "sprint", *value_columns])

    ret = df.groupby(["year", "sprint"], as_index=False)[value_columns].agg(how)
    return ret.sort_values(["year", "sprint"], ascending=False, ignore_index=True)


def sprints_to_frame(sprints: List[SprintRecord]) -> pd.DataFrame:
    rows = [
        {
            "year": s.year,
            "sprint": s.number,
            "name": s.name,
            "start_date": s.start_date,
            "end_date": s.end_date,
            "formatted": s.formatted,
            "is_current": s.is_current,
        }
        for s in sprints
    ]
    return pd.DataFrame(rows, columns=SPRINT_FRAME_COLUMNS)
