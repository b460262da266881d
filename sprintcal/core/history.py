from datetime import date
from typing import List, Optional

from structlog import get_logger

from sprintcal.datatypes import SprintRecord

from .context import SprintContext
from .mapping import roll_back
from .resolver import build_sprint, current_sprint

logger = get_logger(__name__)


def sprint_history(g: SprintContext, count: Optional[int] = None, reference_date: Optional[date] = None) -> List[SprintRecord]:
    """
    The last `count` sprints, most recent first. The first entry is the
    current sprint of the reference date, the only one flagged as current.
    """
    count = g.settings.history_count if count is None else count
    if count <= 0:
        return []

    current = current_sprint(g, reference_date)
    ret = [current]
    for steps in range(1, count):
        year, number = roll_back(current.number, current.year, steps)
        ret.append(build_sprint(g, number, year))

    logger.debug("sprint history generated", count=count, first=current.key, last=ret[-1].key)
    return ret
