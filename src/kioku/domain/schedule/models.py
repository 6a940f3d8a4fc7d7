"""
Domain models for review scheduling.

These are pure data structures with no I/O or external dependencies.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from kioku.domain import constants as c
from kioku.domain.exceptions import InvalidSchedulerConfigError

CardId = int | str


@dataclass(frozen=True)
class CardScheduleState:
    """
    Scheduling state for one card and learner.

    Attributes:
        card_id: Opaque identifier of the scheduled flashcard.
        interval_days: Days until the next scheduled review (>= 1).
        repetitions: Consecutive successful reviews since the last lapse.
        ease_factor: Multiplier controlling interval growth.
        streak: Consecutive correct answers, used for display only.
        total_reviews: Lifetime review count, never reset.
        last_reviewed_at: Time of the most recent review, None if never reviewed.
        next_review_at: Time the card becomes due, None if never reviewed.
    """

    card_id: CardId
    interval_days: int = c.DEFAULT_INTERVAL
    repetitions: int = 0
    ease_factor: float = c.DEFAULT_EASE_FACTOR
    streak: int = 0
    total_reviews: int = 0
    last_reviewed_at: datetime | None = None
    next_review_at: datetime | None = None

    @property
    def is_new(self) -> bool:
        return self.last_reviewed_at is None


class ReviewOrder(str, Enum):
    """How new cards and due reviews are interleaved in a session."""

    NEW_FIRST = "new_first"
    REVIEWS_FIRST = "reviews_first"
    MIXED = "mixed"


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Tunable constants of the review scheduler.

    Attributes:
        ease_factor_increase: Added to the ease factor on a correct answer.
        ease_factor_decrease: Subtracted from the ease factor on a lapse.
        min_ease_factor: Lower clamp for the ease factor.
        max_ease_factor: Upper clamp for the ease factor.
        default_ease_factor: Ease factor given to newly created states.
        graded_interval_table: Fixed intervals indexed by repetition count.
            Entry 0 is the new-card / relearn interval.
        max_interval: Interval ceiling in days.
        graduated_intervals: Use the table during the learning phase.
        ease_adjustment: Let the ease factor move after each review.
        max_streak: Optional cap on the streak counter, None for no cap.
    """

    ease_factor_increase: float = c.EASE_FACTOR_INCREASE
    ease_factor_decrease: float = c.EASE_FACTOR_DECREASE
    min_ease_factor: float = c.MIN_EASE_FACTOR
    max_ease_factor: float = c.MAX_EASE_FACTOR
    default_ease_factor: float = c.DEFAULT_EASE_FACTOR
    graded_interval_table: tuple[int, ...] = c.GRADED_INTERVAL_TABLE
    max_interval: int = c.MAX_INTERVAL
    graduated_intervals: bool = True
    ease_adjustment: bool = True
    max_streak: int | None = None

    @property
    def relearn_interval(self) -> int:
        return self.graded_interval_table[0]

    def problems(self) -> list[str]:
        """Return a human-readable list of everything wrong with this config."""
        found: list[str] = []
        table = self.graded_interval_table

        if not table:
            found.append("graded_interval_table must not be empty")
        else:
            if any(days < 1 for days in table):
                found.append("graded_interval_table entries must be >= 1")
            learning = table[1:]
            if any(b <= a for a, b in zip(learning, learning[1:])):
                found.append("graded_interval_table must increase after the first entry")
            if self.max_interval <= table[-1]:
                found.append(
                    f"max_interval ({self.max_interval}) must exceed "
                    f"the last table entry ({table[-1]})"
                )

        if not (0 < self.min_ease_factor < self.max_ease_factor):
            found.append("ease bounds must satisfy 0 < min_ease_factor < max_ease_factor")
        elif not (self.min_ease_factor <= self.default_ease_factor <= self.max_ease_factor):
            found.append("default_ease_factor must lie within the ease bounds")

        for name in ("ease_factor_increase", "ease_factor_decrease"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                found.append(f"{name} must be a positive number")

        if self.max_streak is not None and self.max_streak <= 0:
            found.append("max_streak must be positive when set")

        return found

    def validate(self) -> "SchedulerConfig":
        found = self.problems()
        if found:
            raise InvalidSchedulerConfigError(found)
        return self


@dataclass(frozen=True)
class ReviewPreset:
    """A named bundle of scheduler tuning and daily queue policy."""

    name: str
    scheduler: SchedulerConfig
    daily_new_cards_limit: int = c.DAILY_NEW_CARDS_LIMIT
    review_order: ReviewOrder = ReviewOrder.NEW_FIRST


@dataclass(frozen=True)
class ReviewStats:
    """Counts of cards by review status at a point in time."""

    total: int
    new: int
    review: int
    overdue: int


@dataclass(frozen=True)
class ProgressStats:
    """
    Overall learning progress across a set of cards.

    Attributes:
        mastery_percentage: Share of mastered cards, 0-100.
        average_ease_factor: Mean ease factor, 0.0 for an empty set.
    """

    total_cards: int
    mastered_cards: int
    due_cards: int
    mastery_percentage: float
    average_ease_factor: float


@dataclass
class ReviewQueue:
    """Cards selected for today's session."""

    new_cards: list[CardScheduleState] = field(default_factory=list)
    due_cards: list[CardScheduleState] = field(default_factory=list)
    ordered: list[CardScheduleState] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.ordered)
