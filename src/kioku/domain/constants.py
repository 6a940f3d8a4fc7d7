"""Centralized constants for the kioku scheduler.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Ease factor ----------
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
MAX_EASE_FACTOR = 3.0
EASE_FACTOR_INCREASE = 0.1
EASE_FACTOR_DECREASE = 0.15
EASE_PRECISION = 4  # decimal places kept after each update

# ---------- Intervals (days) ----------
GRADED_INTERVAL_TABLE = (1, 1, 3, 7, 14, 30, 90)
MAX_INTERVAL = 180
DEFAULT_INTERVAL = 1

# ---------- Graded outcomes ----------
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3

# ---------- Insights ----------
MASTERED_MIN_REPETITIONS = 5
MASTERED_MIN_INTERVAL = 30
EASY_EASE_THRESHOLD = 2.5
MEDIUM_EASE_THRESHOLD = 2.0
LEARNING_MAX_REPETITIONS = 2
REVIEWING_MAX_REPETITIONS = 5
OVERDUE_GRACE_DAYS = 1

# ---------- Daily queue ----------
DAILY_NEW_CARDS_LIMIT = 20
DAILY_REVIEW_LIMIT = 0  # 0 = unlimited
