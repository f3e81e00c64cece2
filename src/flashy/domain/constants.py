"""Centralized constants for the scheduling core.

All magic numbers and defaults live here so every layer imports from a
single source of truth.
"""

# ---------- Interval growth ----------
BASE_GROWTH = 2.0
MIN_INTERVAL_DAYS = 1
NEW_CARD_BASE_INTERVAL_DAYS = 1

# ---------- Confidence ----------
DEFAULT_CONFIDENCE_LEVEL = 2

# ---------- Time ----------
SECONDS_PER_DAY = 86400

# ---------- Card defaults ----------
DEFAULT_EASE_FACTOR = 2.5

# ---------- Sessions ----------
SESSION_ID_PREFIX = "session_"
