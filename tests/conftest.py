from datetime import datetime, timedelta, timezone

import pytest

from flashy.domain.scheduling.models import CardSnapshot
from flashy.infrastructure.adapters.system_clock import FixedClock

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


class ScriptedRandom:
    """Returns pre-set draws in order, for deterministic sampling tests."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        value = self.draws[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def make_card():
    """Factory for card snapshots relative to the fixed clock."""

    def _make(
        card_id: int,
        confidence_level: int | None = 2,
        due_in_days: float | None = None,
        reviewed_days_ago: float | None = None,
        **kwargs,
    ) -> CardSnapshot:
        return CardSnapshot(
            id=card_id,
            question=kwargs.pop("question", f"Question {card_id}"),
            answer=kwargs.pop("answer", f"Answer {card_id}"),
            confidence_level=confidence_level,
            next_due_at=None if due_in_days is None else NOW + timedelta(days=due_in_days),
            last_reviewed_at=(
                None if reviewed_days_ago is None else NOW - timedelta(days=reviewed_days_ago)
            ),
            **kwargs,
        )

    return _make


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for var in ("FLASHY_CARD_FILE", "FLASHY_SEED", "FLASHY_SESSION_LIMIT", "FLASHY_PORT"):
        monkeypatch.delenv(var, raising=False)
    return home
