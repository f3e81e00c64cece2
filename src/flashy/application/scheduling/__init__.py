# Application Scheduling Package
from .interval_calculator import calculate_next_review, get_current_interval
from .service import ReviewScheduler
from .session_selector import filter_due_cards, is_due, select_cards_for_review
from .weighted_sampling import weighted_random_select

__all__ = [
    "ReviewScheduler",
    "calculate_next_review",
    "filter_due_cards",
    "get_current_interval",
    "is_due",
    "select_cards_for_review",
    "weighted_random_select",
]
