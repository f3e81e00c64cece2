"""
Clock Factory
Centralizes the choice of clock adapter for the scheduling modules.
"""

from datetime import datetime

from flashy.domain.scheduling.ports import Clock
from flashy.infrastructure.adapters.system_clock import FixedClock, SystemClock

_system_clock = SystemClock()


def get_clock(clock: Clock | None = None) -> Clock:
    """
    Returns the given clock, or the shared system UTC clock when None.
    """
    return clock or _system_clock


def frozen_clock(instant: datetime) -> Clock:
    """
    Returns a clock pinned to one instant.
    """
    return FixedClock(instant)
