"""
Review session selector.

Decides which cards are due now and in what order to show them, so that
weaker cards come up earlier without the order becoming fixed.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import TypeVar

from flashy.application.factory import get_clock
from flashy.application.utils.time import ensure_utc
from flashy.domain.errors import InvalidArgumentError
from flashy.domain.scheduling.models import ReviewableCard, get_confidence_weight
from flashy.domain.scheduling.ports import Clock, RandomSource

from .weighted_sampling import weighted_random_select

logger = logging.getLogger(__name__)

CardT = TypeVar("CardT", bound=ReviewableCard)


def is_due(card: ReviewableCard, now: datetime) -> bool:
    """A card is due when it was never scheduled or its due date has passed."""
    if card.next_due_at is None:
        return True
    return ensure_utc(card.next_due_at) <= ensure_utc(now)


def filter_due_cards(cards: Iterable[CardT], now: datetime) -> list[CardT]:
    """Keep the due cards, preserving input order."""
    return [card for card in cards if is_due(card, now)]


def select_cards_for_review(
    cards: Iterable[CardT],
    *,
    clock: Clock | None = None,
    rng: RandomSource | None = None,
    limit: int | None = None,
) -> list[CardT]:
    """
    Order the due cards for a study session, weighted by confidence.

    Every due card is returned unless `limit` asks for fewer; cards with a
    future due date are dropped. Lower-confidence cards tend to appear
    earlier.

    Args:
        cards: All cards in the deck.
        clock: Time source for the due check.
        rng: Random source for the weighted ordering.
        limit: Optional cap on the number of cards returned.

    Returns:
        The due cards in session order.
    """
    if limit is not None and limit < 0:
        raise InvalidArgumentError(f"Session limit cannot be negative, got {limit}")

    cards = list(cards)
    now = get_clock(clock).now()
    due_cards = filter_due_cards(cards, now)

    if not due_cards:
        logger.debug(f"No due cards among {len(cards)}")
        return []

    weights = [get_confidence_weight(card.confidence_level) for card in due_cards]
    count = len(due_cards) if limit is None else limit

    logger.debug(f"Ordering {len(due_cards)}/{len(cards)} due cards (count={count})")
    return weighted_random_select(due_cards, weights, count, rng=rng)
