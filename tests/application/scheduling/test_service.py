import random
from datetime import timedelta

import pytest

from flashy.application.scheduling.service import ReviewScheduler, generate_session_id
from flashy.domain.errors import InvalidArgumentError


@pytest.fixture
def scheduler(clock):
    return ReviewScheduler(clock=clock, rng=random.Random(42))


def test_review_new_card(scheduler, make_card, now):
    card = make_card(1, confidence_level=2)

    result = scheduler.review(card, 1)

    assert result.previous_interval_days == 0
    assert result.outcome.interval_days == 2
    assert result.card.last_reviewed_at == now
    assert result.card.next_due_at == now + timedelta(days=2)
    assert result.card.review_count == 1


def test_review_uses_time_since_last_review(scheduler, make_card, now):
    card = make_card(7, reviewed_days_ago=10.5, due_in_days=-0.5, review_count=4)

    result = scheduler.review(card, 2)

    assert result.previous_interval_days == 10
    assert result.outcome.interval_days == 26
    assert result.card.next_due_at == now + timedelta(days=26)
    assert result.card.review_count == 5


def test_review_carries_other_fields_unchanged(scheduler, make_card):
    card = make_card(3, confidence_level=1, deck_id=9, ease_factor=2.1)

    updated = scheduler.review(card, 3).card

    assert updated.id == 3
    assert updated.deck_id == 9
    assert updated.question == card.question
    assert updated.confidence_level == 1
    assert updated.ease_factor == 2.1
    # The input snapshot is untouched
    assert card.review_count == 0
    assert card.last_reviewed_at is None


def test_review_rejects_invalid_rating(scheduler, make_card):
    with pytest.raises(InvalidArgumentError):
        scheduler.review(make_card(1), 0)


def test_next_review_and_current_interval(scheduler, now):
    assert scheduler.next_review(10, 2).interval_days == 26
    assert scheduler.current_interval(now - timedelta(days=4)) == 4
    assert scheduler.current_interval(None) == 0


def test_build_session(scheduler, make_card, now):
    cards = [
        make_card(1, confidence_level=1),
        make_card(2, confidence_level=3, due_in_days=-2),
        make_card(3, due_in_days=5),
    ]

    session = scheduler.build_session(cards)

    assert session.session_id.startswith("session_")
    assert session.generated_at == now
    assert session.total_count == 3
    assert session.due_count == 2
    assert sorted(c.id for c in session.cards) == [1, 2]


def test_build_session_limit_keeps_due_count(scheduler, make_card):
    cards = [make_card(i) for i in range(6)]

    session = scheduler.build_session(cards, limit=2)

    assert session.due_count == 6
    assert len(session.cards) == 2


def test_build_session_with_nothing_due(scheduler, make_card):
    session = scheduler.build_session([make_card(1, due_in_days=1)])
    assert session.due_count == 0
    assert session.cards == []


def test_seeded_sessions_are_reproducible(clock, make_card):
    cards = [make_card(i, confidence_level=(i % 3) + 1) for i in range(12)]

    first = ReviewScheduler(clock=clock, rng=random.Random(5)).build_session(cards)
    second = ReviewScheduler(clock=clock, rng=random.Random(5)).build_session(cards)

    assert [c.id for c in first.cards] == [c.id for c in second.cards]
    assert first.session_id != second.session_id


def test_session_ids_are_unique():
    assert len({generate_session_id() for _ in range(50)}) == 50
