# Application Scheduler Package
from .insights import ScheduleInsights
from .queue_builder import build_review_queue
from .review_scheduler import (
    DEFAULT_CONFIG,
    check_state,
    interval_label,
    is_due,
    new_state,
    outcome_from_quality,
    outcome_from_swipe,
    record_review,
)
from .service import ReviewService

__all__ = [
    "DEFAULT_CONFIG",
    "record_review",
    "is_due",
    "interval_label",
    "new_state",
    "check_state",
    "outcome_from_quality",
    "outcome_from_swipe",
    "ScheduleInsights",
    "build_review_queue",
    "ReviewService",
]
