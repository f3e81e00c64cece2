"""Clock adapters."""

from datetime import datetime, timezone

from flashy.application.utils.time import ensure_utc
from flashy.domain.scheduling.ports import Clock


class SystemClock(Clock):
    """Reads the process wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Always returns the same instant."""

    def __init__(self, instant: datetime):
        self.instant = ensure_utc(instant)

    def now(self) -> datetime:
        return self.instant
