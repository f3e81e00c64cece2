import logging
import random
import time
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from flashy.application.scheduling.service import ReviewScheduler
from flashy.application.utils.time import ensure_utc
from flashy.consts import VERSION
from flashy.domain.errors import InvalidArgumentError
from flashy.domain.scheduling.models import CardSnapshot
from flashy.infrastructure.adapters.system_clock import FixedClock

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("flashy.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"flashy server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("flashy server shutting down...")


app = FastAPI(
    title="flashy",
    description="Spaced-repetition scheduling for flashcard decks.",
    version=VERSION,
    lifespan=lifespan,
)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


start_time = time.time()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


def _scheduler(at: datetime | None = None, seed: int | None = None) -> ReviewScheduler:
    clock = FixedClock(at) if at is not None else None
    rng = random.Random(seed) if seed is not None else None
    return ReviewScheduler(clock=clock, rng=rng)


class NextReviewRequest(BaseModel):
    interval_days: int
    confidence_rating: int
    at: datetime | None = None  # Defaults to server time


class ReviewOutcomeResponse(BaseModel):
    interval_days: int
    next_due_at: datetime


@app.post("/review/next", response_model=ReviewOutcomeResponse)
async def next_review(req: NextReviewRequest):
    """Compute the next interval and due date for one review."""
    try:
        outcome = _scheduler(at=req.at).next_review(req.interval_days, req.confidence_rating)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return ReviewOutcomeResponse(
        interval_days=outcome.interval_days, next_due_at=outcome.next_due_at
    )


class IntervalRequest(BaseModel):
    last_reviewed_at: datetime | None = None
    at: datetime | None = None


class IntervalResponse(BaseModel):
    interval_days: int


@app.post("/review/interval", response_model=IntervalResponse)
async def current_interval(req: IntervalRequest):
    """Whole days since the last review (0 for new cards)."""
    days = _scheduler(at=req.at).current_interval(req.last_reviewed_at)
    return IntervalResponse(interval_days=days)


class CardPayload(BaseModel):
    id: int
    question: str = ""
    answer: str = ""
    deck_id: int | None = None
    confidence_level: int | None = None
    last_reviewed_at: datetime | None = None
    next_due_at: datetime | None = None
    review_count: int = 0

    def to_snapshot(self) -> CardSnapshot:
        return CardSnapshot(
            id=self.id,
            question=self.question,
            answer=self.answer,
            deck_id=self.deck_id,
            confidence_level=self.confidence_level,
            last_reviewed_at=ensure_utc(self.last_reviewed_at) if self.last_reviewed_at else None,
            next_due_at=ensure_utc(self.next_due_at) if self.next_due_at else None,
            review_count=self.review_count,
        )


class SessionRequest(BaseModel):
    cards: list[CardPayload]
    limit: int | None = Field(default=None, ge=0)
    seed: int | None = None
    at: datetime | None = None


class SessionResponse(BaseModel):
    session_id: str
    generated_at: datetime
    total_count: int
    due_count: int
    card_ids: list[int]


@app.post("/session", response_model=SessionResponse)
async def build_session(req: SessionRequest):
    """Order a deck's due cards for a study session."""
    scheduler = _scheduler(at=req.at, seed=req.seed)
    try:
        plan = scheduler.build_session(
            [card.to_snapshot() for card in req.cards], limit=req.limit
        )
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Session build failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return SessionResponse(
        session_id=plan.session_id,
        generated_at=plan.generated_at,
        total_count=plan.total_count,
        due_count=plan.due_count,
        card_ids=[card.id for card in plan.cards],
    )
