"""
Card File Repository: infrastructure adapter for card snapshot files.

Implements CardSource over a YAML or JSON export of a deck. The file is
either a list of cards or a mapping with a `cards` list. Keys may use
snake_case or the camelCase names of the web app's card table.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
import yaml.error
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from flashy.application.utils.time import ensure_utc
from flashy.domain.constants import DEFAULT_CONFIDENCE_LEVEL, DEFAULT_EASE_FACTOR
from flashy.domain.errors import CardFileError
from flashy.domain.scheduling.models import CardSnapshot
from flashy.domain.scheduling.ports import CardSource

logger = logging.getLogger(__name__)


class CardRecord(BaseModel):
    """Validated shape of one card entry in a snapshot file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    question: str = ""
    answer: str = ""
    deck_id: int | None = Field(default=None, alias="deckId")
    confidence_level: int | None = Field(
        default=DEFAULT_CONFIDENCE_LEVEL, alias="confidenceLevel", ge=1, le=3
    )
    last_reviewed_at: datetime | None = Field(default=None, alias="lastReviewedAt")
    next_due_at: datetime | None = Field(default=None, alias="nextDueAt")
    review_count: int = Field(default=0, alias="reviewCount", ge=0)
    ease_factor: float | None = Field(default=DEFAULT_EASE_FACTOR, alias="easeFactor")

    @field_validator("last_reviewed_at", "next_due_at")
    @classmethod
    def to_utc(cls, v: datetime | None) -> datetime | None:
        if v is None:
            return None
        return ensure_utc(v)

    def to_snapshot(self) -> CardSnapshot:
        return CardSnapshot(
            id=self.id,
            question=self.question,
            answer=self.answer,
            deck_id=self.deck_id,
            confidence_level=self.confidence_level,
            last_reviewed_at=self.last_reviewed_at,
            next_due_at=self.next_due_at,
            review_count=self.review_count,
            ease_factor=self.ease_factor if self.ease_factor is not None else DEFAULT_EASE_FACTOR,
        )


class CardFileRepository(CardSource):
    """
    Reads card snapshots from a YAML or JSON file.

    The file is re-read on every call; nothing is cached or written back.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load_cards(self) -> list[CardSnapshot]:
        raw = self._read()
        entries = raw.get("cards", []) if isinstance(raw, dict) else raw

        if entries is None:
            return []
        if not isinstance(entries, list):
            raise CardFileError(self.path, "expected a list of cards")

        cards: list[CardSnapshot] = []
        for position, entry in enumerate(entries, start=1):
            if not isinstance(entry, dict):
                raise CardFileError(self.path, f"card #{position} is not a mapping")
            try:
                cards.append(CardRecord.model_validate(entry).to_snapshot())
            except ValidationError as e:
                raise CardFileError(self.path, f"card #{position}: {_first_error(e)}") from e

        logger.debug(f"Loaded {len(cards)} cards from {self.path}")
        return cards

    def _read(self) -> Any:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise CardFileError(self.path, "file not found") from None
        except UnicodeDecodeError as e:
            raise CardFileError(self.path, f"not valid UTF-8: {e.reason}") from e
        except OSError as e:
            raise CardFileError(self.path, str(e)) from e

        try:
            # JSON is a subset of YAML, so one loader covers both
            return yaml.safe_load(text) or []
        except yaml.error.YAMLError as e:
            raise CardFileError(self.path, f"invalid YAML/JSON: {e}") from e


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    location = ".".join(str(part) for part in err["loc"])
    return f"{location}: {err['msg']}"
