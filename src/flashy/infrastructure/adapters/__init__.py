# Infrastructure Adapters Package
from .card_file import CardFileRepository
from .system_clock import FixedClock, SystemClock

__all__ = ["CardFileRepository", "FixedClock", "SystemClock"]
