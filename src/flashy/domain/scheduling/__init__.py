# Domain Scheduling Package
from .models import (
    CONFIDENCE_PROFILES,
    CardSnapshot,
    ConfidenceLevel,
    ConfidenceProfile,
    ReviewableCard,
    ReviewOutcome,
    ReviewResult,
    ReviewSession,
    get_confidence_profile,
    get_confidence_weight,
)
from .ports import CardSource, Clock, RandomSource

__all__ = [
    "CONFIDENCE_PROFILES",
    "CardSnapshot",
    "CardSource",
    "Clock",
    "ConfidenceLevel",
    "ConfidenceProfile",
    "RandomSource",
    "ReviewOutcome",
    "ReviewResult",
    "ReviewSession",
    "ReviewableCard",
    "get_confidence_profile",
    "get_confidence_weight",
]
