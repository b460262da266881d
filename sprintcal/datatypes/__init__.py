from .common import CoreModel
from .weeks import IsoWeek, WeeklyRecord
from .sprints import (
    SprintRecord,
    SprintDateRange,
    SkipReason,
    SkippedRecord,
    ScannedRecord,
    WeeklyScan,
    SprintAggregate,
)
