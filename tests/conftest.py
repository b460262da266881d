from datetime import datetime, timezone

import pytest

from sprintcal.core.context import SprintContext
from sprintcal.settings import SprintcalSettings

# Thursday of ISO week 3 of 2026, inside sprint 1 (weeks 2 and 3)
FIXED_NOW = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


def fixed_clock(now: datetime = FIXED_NOW):
    return lambda: now


@pytest.fixture
def settings() -> SprintcalSettings:
    return SprintcalSettings()


@pytest.fixture
def g(settings) -> SprintContext:
    return SprintContext(settings, clock=fixed_clock())


@pytest.fixture
def context_at():
    def _context_at(now: datetime, **settings_kwargs) -> SprintContext:
        return SprintContext(SprintcalSettings(**settings_kwargs), clock=fixed_clock(now))

    return _context_at
