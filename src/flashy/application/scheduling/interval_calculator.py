"""
Interval calculator for spaced-repetition reviews.

Converts "how long since the last review" plus "how confident was the
learner" into "how long until the next review".

This is a pure computation module; the only outside input is the clock.
"""

import logging
import math
from datetime import datetime, timedelta

from flashy.application.factory import get_clock
from flashy.application.utils.time import ensure_utc
from flashy.domain.constants import (
    BASE_GROWTH,
    MIN_INTERVAL_DAYS,
    NEW_CARD_BASE_INTERVAL_DAYS,
    SECONDS_PER_DAY,
)
from flashy.domain.errors import InvalidArgumentError
from flashy.domain.scheduling.models import ReviewOutcome, get_confidence_profile
from flashy.domain.scheduling.ports import Clock

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_next_review(
    current_interval_days: int,
    confidence_rating: int,
    *,
    clock: Clock | None = None,
) -> ReviewOutcome:
    """
    Calculate the next review date for a card.

    new_interval = base_interval * BASE_GROWTH * difficulty_multiplier,
    where base_interval is 1 for cards that were never reviewed.

    Args:
        current_interval_days: Current interval in days (0 for new cards).
        confidence_rating: Learner's confidence rating (1-3).
        clock: Time source; defaults to the system UTC clock.

    Returns:
        ReviewOutcome with the rounded interval and the absolute due date.

    Raises:
        InvalidArgumentError: On a negative interval, a rating outside 1-3,
            or a due date past the last representable datetime.
    """
    if isinstance(current_interval_days, bool) or not isinstance(current_interval_days, int):
        raise InvalidArgumentError(
            f"Interval must be a whole number of days, got {current_interval_days!r}"
        )
    if current_interval_days < 0:
        raise InvalidArgumentError(
            f"Interval cannot be negative, got {current_interval_days}"
        )
    if current_interval_days > timedelta.max.days:
        raise InvalidArgumentError(
            f"Interval too large to schedule: {current_interval_days} days"
        )

    profile = get_confidence_profile(confidence_rating)

    base_interval = (
        NEW_CARD_BASE_INTERVAL_DAYS if current_interval_days == 0 else current_interval_days
    )
    raw_interval = base_interval * BASE_GROWTH * profile.difficulty_multiplier

    # Unreachable with the shipped multipliers, kept as a floor
    if raw_interval < MIN_INTERVAL_DAYS:
        raw_interval = MIN_INTERVAL_DAYS

    interval_days = _round_half_up(raw_interval)
    now = ensure_utc(get_clock(clock).now())
    try:
        next_due_at = now + timedelta(days=interval_days)
    except OverflowError as e:
        raise InvalidArgumentError(
            f"Interval too large to schedule: {interval_days} days from {now.isoformat()}"
        ) from e

    logger.debug(
        f"Interval {current_interval_days}d at confidence {int(confidence_rating)} "
        f"-> {interval_days}d (due {next_due_at.isoformat()})"
    )
    return ReviewOutcome(interval_days=interval_days, next_due_at=next_due_at)


def get_current_interval(
    last_reviewed_at: datetime | None,
    *,
    clock: Clock | None = None,
) -> int:
    """
    Whole days elapsed since the last review.

    Returns 0 for cards that were never reviewed. A last review in the
    future (clock skew) also yields 0, never a negative value.
    """
    if last_reviewed_at is None:
        return 0

    now = ensure_utc(get_clock(clock).now())
    elapsed = (now - ensure_utc(last_reviewed_at)).total_seconds()
    return max(0, math.floor(elapsed / SECONDS_PER_DAY))
