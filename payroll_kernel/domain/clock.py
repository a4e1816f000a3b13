"""
Injectable clock.

Report code never reads the system time.  The two places that need "now"
(the trend window ending at the current month, and the upcoming-holiday
list) get it from a Clock handed to the service, which keeps every report
reproducible in tests.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone

_DEFAULT_TEST_TIME = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class Clock(ABC):
    """Source of the current time; ``now()`` is timezone-aware."""

    @abstractmethod
    def now(self) -> datetime:
        ...

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Clock frozen at a given instant.

    ``advance()`` moves it forward by whole seconds; ``set_time()`` jumps to
    a new instant.  Repeated ``now()`` calls in between return the same value.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._current = fixed_time or _DEFAULT_TEST_TIME

    def now(self) -> datetime:
        return self._current

    def set_time(self, time: datetime) -> None:
        self._current = time

    def advance(self, seconds: int = 1) -> None:
        self._current += timedelta(seconds=seconds)
