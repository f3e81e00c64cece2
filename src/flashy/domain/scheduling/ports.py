"""
Ports (interfaces) for the scheduler's dependencies.

The wall clock and the random source are injected so that callers and tests
can supply fixed instants and scripted draws. Card storage is only ever read.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Protocol

from .models import CardSnapshot


class Clock(ABC):
    """
    Port for reading the current time.

    Implementations:
        - SystemClock: Timezone-aware UTC wall clock.
    """

    @abstractmethod
    def now(self) -> datetime:
        """
        Return the current instant.

        Returns:
            A timezone-aware datetime.
        """
        pass


class RandomSource(Protocol):
    """
    Source of uniform draws in [0, 1).

    `random.Random` instances and the `random` module itself satisfy this.
    """

    def random(self) -> float: ...


class CardSource(ABC):
    """
    Port for reading card snapshots from the card storage.

    Implementations:
        - CardFileRepository: Reads a YAML or JSON snapshot file.
    """

    @abstractmethod
    def load_cards(self) -> list[CardSnapshot]:
        """
        Load every card in the source.

        Returns:
            CardSnapshot objects in storage order.
        """
        pass

    def get_card(self, card_id: int) -> CardSnapshot | None:
        """Find a single card by ID, or None."""
        return next((c for c in self.load_cards() if c.id == card_id), None)
