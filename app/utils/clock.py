"""
Clock abstraction.

Services read time only through a Clock so that timers can be driven
deterministically in tests.
"""

from datetime import datetime, timedelta
from typing import Protocol

from app.utils.datetime_utils import utc_now


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return utc_now()


class ManualClock:
    """
    Clock that only moves when told to.

    Args:
        start: Initial moment (defaults to current UTC time)
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or utc_now()

    def now(self) -> datetime:
        return self._now

    def advance(self, delta: timedelta | None = None, **kwargs: float) -> datetime:
        """Move forward by delta or by timedelta keyword arguments."""
        self._now += delta if delta is not None else timedelta(**kwargs)
        return self._now

    def set(self, moment: datetime) -> None:
        self._now = moment
