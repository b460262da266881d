from datetime import date, datetime, timezone
from typing import Callable, Optional

from sprintcal.settings import SprintcalSettings

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now(timezone.utc)


class SprintContext:
    """
    Everything the sprint calculus needs besides its arguments: settings and
    the clock. Functions that default to "now" ask the context, never the
    system clock directly, so a fixed clock can be injected.
    """

    def __init__(self, settings: SprintcalSettings, clock: Optional[Clock] = None):
        self._settings = settings
        self._clock = clock or system_clock

    def current_time(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self.current_time().date()

    def resolve_date(self, reference_date: Optional[date] = None) -> date:
        if reference_date is None:
            return self.today()
        if isinstance(reference_date, datetime):
            return reference_date.date()
        return reference_date

    @property
    def settings(self) -> SprintcalSettings:
        return self._settings

    @property
    def locale(self) -> str:
        return self._settings.locale


def init_context_from_settings(settings: SprintcalSettings, clock: Optional[Clock] = None) -> SprintContext:
    return SprintContext(settings=settings, clock=clock)
