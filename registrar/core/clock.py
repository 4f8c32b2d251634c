"""Clock abstraction for every timestamp the services assign."""

from datetime import datetime, timedelta, timezone


class SystemClock:
    """Wall clock in UTC, returned naive to match the DATETIME columns."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)


class FixedClock:
    """Deterministic clock for tests and replays."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


system_clock = SystemClock()
