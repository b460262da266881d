from typing import Generic, Optional, TypeVar

from pydantic import ConfigDict, Field

from .common import CoreModel

PayloadT = TypeVar("PayloadT")


class IsoWeek(CoreModel):
    """ISO-8601 week reference. The year is optional on input records."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    week_number: int = Field(alias="weekNumber", ge=1, le=53)
    year: Optional[int] = Field(default=None, ge=1, le=9998)

    def __str__(self) -> str:
        if self.year is None:
            return f"W{self.week_number:02d}"
        return f"{self.year}-W{self.week_number:02d}"


class WeeklyRecord(CoreModel, Generic[PayloadT]):
    week: IsoWeek
    payload: PayloadT
