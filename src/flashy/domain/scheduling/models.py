"""
Domain models for spaced-repetition scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from types import MappingProxyType
from typing import Protocol

from flashy.domain.constants import DEFAULT_CONFIDENCE_LEVEL, DEFAULT_EASE_FACTOR
from flashy.domain.errors import InvalidArgumentError


class ConfidenceLevel(IntEnum):
    """How well the learner already knows a card."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @classmethod
    def parse(cls, value: object) -> "ConfidenceLevel":
        """
        Coerce a raw value into a ConfidenceLevel.

        Raises:
            InvalidArgumentError: If value is not exactly 1, 2 or 3.
        """
        # bool is an int subclass; True would otherwise pass as LOW
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgumentError(
                f"Confidence level must be 1, 2 or 3, got {value!r}"
            )
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError(
                f"Confidence level must be 1, 2 or 3, got {value!r}"
            ) from None


@dataclass(frozen=True)
class ConfidenceProfile:
    """
    Scheduling parameters for one confidence level.

    Attributes:
        label: Human-readable name shown next to the rating buttons.
        weight: Relative sampling weight; higher means reviewed sooner.
        difficulty_multiplier: Interval growth adjustment, always > 1.
    """

    label: str
    weight: float
    difficulty_multiplier: float


CONFIDENCE_PROFILES: MappingProxyType[ConfidenceLevel, ConfidenceProfile] = MappingProxyType(
    {
        ConfidenceLevel.LOW: ConfidenceProfile("Less Confident", 6, 1.1),
        ConfidenceLevel.MEDIUM: ConfidenceProfile("Medium", 3, 1.3),
        ConfidenceLevel.HIGH: ConfidenceProfile("More Confident", 1, 1.8),
    }
)


def get_confidence_profile(level: object) -> ConfidenceProfile:
    """Look up the profile for a confidence level, validating it first."""
    return CONFIDENCE_PROFILES[ConfidenceLevel.parse(level)]


def get_confidence_weight(level: object | None) -> float:
    """
    Sampling weight for a card's confidence level.

    A missing level counts as medium confidence.
    """
    if level is None:
        level = DEFAULT_CONFIDENCE_LEVEL
    return get_confidence_profile(level).weight


class ReviewableCard(Protocol):
    """Anything the session selector can schedule."""

    last_reviewed_at: datetime | None
    next_due_at: datetime | None
    confidence_level: int | None


@dataclass(frozen=True)
class CardSnapshot:
    """
    Immutable view of a stored flashcard at the time of a call.

    Owned by the card storage; the scheduler only reads it and returns
    replacement values.
    """

    id: int
    question: str = ""
    answer: str = ""
    deck_id: int | None = None
    confidence_level: int | None = DEFAULT_CONFIDENCE_LEVEL
    last_reviewed_at: datetime | None = None
    next_due_at: datetime | None = None
    review_count: int = 0
    ease_factor: float = DEFAULT_EASE_FACTOR


@dataclass(frozen=True)
class ReviewOutcome:
    """
    Result of one interval calculation.

    Attributes:
        interval_days: Whole days until the next review (>= 1).
        next_due_at: Absolute UTC timestamp of the next review.
    """

    interval_days: int
    next_due_at: datetime


@dataclass(frozen=True)
class ReviewResult:
    """A review outcome together with the card state the caller should persist."""

    card: CardSnapshot
    outcome: ReviewOutcome
    previous_interval_days: int


@dataclass
class ReviewSession:
    """Ordered due cards for one study session."""

    session_id: str
    generated_at: datetime
    total_count: int  # Cards offered to the selector
    due_count: int  # Cards that were due, before any session limit
    cards: list = field(default_factory=list)
