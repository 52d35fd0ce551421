"""
Clock used by the engine for "today" and "now".

Components take an optional clock so date arithmetic can be pinned in tests.
"""

from datetime import date, datetime, timedelta


class Clock:
    """System clock (local, naive timestamps)"""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return self.now().date()


class FixedClock(Clock):
    """Clock frozen at a given instant"""

    def __init__(self, instant: datetime):
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, **kwargs) -> None:
        """Move the frozen instant forward by timedelta keyword arguments"""
        self._instant = self._instant + timedelta(**kwargs)
