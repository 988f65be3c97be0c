"""Centralized constants for the studyflow engine.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Time ----------
DAY_IN_MS = 24 * 60 * 60 * 1000
MINUTE_IN_MS = 60 * 1000

# ---------- SM-2 ----------
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6

# ---------- Deck Stats ----------
LEARNING_REPETITIONS = 3  # Cards below this are still "learning"
MASTERED_INTERVAL_DAYS = 21

# ---------- Analytics Windows ----------
BURNOUT_WINDOW_DAYS = 60
BURNOUT_MEDIUM_STREAK = 7
BURNOUT_HIGH_STREAK = 10
FORECAST_WINDOW_DAYS = 7
WEAK_TOPIC_WINDOW_DAYS = 30
WEAK_TOPIC_LIMIT = 5
WEAK_TOPIC_FRONT_LEN = 80
