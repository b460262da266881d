from datetime import date
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import ConfigDict

from .common import CoreModel
from .weeks import IsoWeek


class SprintRecord(CoreModel):
    model_config = ConfigDict(frozen=True)

    number: int
    name: str
    weeks: Tuple[int, int]
    year: int
    end_week_year: int
    start_date: date
    end_date: date
    formatted: str
    is_current: bool = False

    # Only filled for a sprint resolved from a reference date
    current_week: Optional[int] = None
    is_start_week: Optional[bool] = None
    is_end_week: Optional[bool] = None
    week_in_sprint: Optional[int] = None

    @property
    def key(self) -> str:
        return f"{self.year}-{self.number}"

    @property
    def wraps_year(self) -> bool:
        return self.end_week_year != self.year


class SprintDateRange(CoreModel):
    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date
    start_formatted: str
    end_formatted: str


class SkipReason(str, Enum):
    missing_week = "missing_week"
    invalid_week = "invalid_week"
    missing_year = "missing_year"


class SkippedRecord(CoreModel):
    index: int
    reason: SkipReason
    value: Any = None


class ScannedRecord(CoreModel):
    index: int
    item: Any
    week: IsoWeek


class WeeklyScan(CoreModel):
    records: List[ScannedRecord] = []
    skipped: List[SkippedRecord] = []

    @property
    def is_clean(self) -> bool:
        return not self.skipped


class SprintAggregate(CoreModel):
    sprint: int
    data: Any
