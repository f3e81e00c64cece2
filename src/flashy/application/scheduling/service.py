"""
Review Scheduler: application-layer orchestrator.

Binds a clock and a random source once and exposes the scheduling
operations the review and study workflows call.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from ulid import ULID

from flashy.application.factory import frozen_clock, get_clock
from flashy.application.utils.time import ensure_utc
from flashy.domain.constants import SESSION_ID_PREFIX
from flashy.domain.scheduling.models import (
    CardSnapshot,
    ReviewOutcome,
    ReviewResult,
    ReviewSession,
)
from flashy.domain.scheduling.ports import Clock, RandomSource

from .interval_calculator import calculate_next_review, get_current_interval
from .session_selector import filter_due_cards, select_cards_for_review

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    """Generate a sortable session ID using ULID."""
    return f"{SESSION_ID_PREFIX}{ULID()}"


class ReviewScheduler:
    """
    Application service for review outcomes and study sessions.

    Stateless apart from the injected clock and random source. It never
    writes card state; callers persist what it returns.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        rng: RandomSource | None = None,
    ):
        """
        Args:
            clock: Time source; uses the system UTC clock if not provided.
            rng: Random source; uses the `random` module if not provided.
        """
        self._clock = get_clock(clock)
        self._rng = rng

    def now(self) -> datetime:
        return ensure_utc(self._clock.now())

    def current_interval(self, last_reviewed_at: datetime | None) -> int:
        return get_current_interval(last_reviewed_at, clock=self._clock)

    def next_review(self, interval_days: int, rating: int) -> ReviewOutcome:
        return calculate_next_review(interval_days, rating, clock=self._clock)

    def review(self, card: CardSnapshot, rating: int) -> ReviewResult:
        """
        Review a card and compute the state to persist.

        The interval is derived from the time since the card's last review.
        The returned snapshot has the new due date, the review timestamp and
        an incremented review count; confidence level and ease factor are
        carried over unchanged.
        """
        now = self.now()
        clock = frozen_clock(now)
        previous = get_current_interval(card.last_reviewed_at, clock=clock)
        outcome = calculate_next_review(previous, rating, clock=clock)

        updated = replace(
            card,
            last_reviewed_at=now,
            next_due_at=outcome.next_due_at,
            review_count=card.review_count + 1,
        )
        logger.info(
            f"Reviewed card {card.id}: rating={rating}, "
            f"interval {previous}d -> {outcome.interval_days}d"
        )
        return ReviewResult(card=updated, outcome=outcome, previous_interval_days=previous)

    def build_session(
        self,
        cards: Iterable[CardSnapshot],
        limit: int | None = None,
    ) -> ReviewSession:
        """
        Build a study session from a deck's cards.

        Args:
            cards: All cards in the deck.
            limit: Optional cap on the number of cards in the session.

        Returns:
            ReviewSession with the weighted order of the due cards.
        """
        cards = list(cards)
        now = self.now()
        due_count = len(filter_due_cards(cards, now))
        # Freeze the instant so the due count and the ordering agree
        ordered = select_cards_for_review(
            cards, clock=frozen_clock(now), rng=self._rng, limit=limit
        )

        session = ReviewSession(
            session_id=generate_session_id(),
            generated_at=now,
            total_count=len(cards),
            due_count=due_count,
            cards=ordered,
        )
        logger.info(
            f"Built {session.session_id}: {len(ordered)} of {due_count} due "
            f"({len(cards)} total)"
        )
        return session
