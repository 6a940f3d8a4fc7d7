"""
Review Service: Application layer orchestrator.

Loads schedule states from the repository, applies the pure scheduler and
stores the result. The scheduler itself never touches storage.
"""

import logging
from datetime import datetime

from kioku.domain import constants as c
from kioku.domain.schedule.models import (
    CardId,
    CardScheduleState,
    ProgressStats,
    ReviewOrder,
    ReviewQueue,
    ReviewStats,
    SchedulerConfig,
)
from kioku.domain.schedule.ports import ScheduleRepository

from .insights import ScheduleInsights
from .queue_builder import build_review_queue
from .review_scheduler import (
    DEFAULT_CONFIG,
    is_due,
    new_state,
    outcome_from_quality,
    outcome_from_swipe,
    record_review,
)

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Application service for recording reviews and querying due cards.

    Follows Dependency Inversion: depends on the ScheduleRepository
    abstraction, not on a concrete store.
    """

    def __init__(
        self,
        repository: ScheduleRepository,
        config: SchedulerConfig = DEFAULT_CONFIG,
        insights: ScheduleInsights | None = None,
    ):
        """
        Args:
            repository: The repository (port) holding schedule states.
            config: Scheduler tuning passed to every review.
            insights: Optional custom insights; uses default if not provided.
        """
        self._repo = repository
        self._config = config.validate()
        self._insights = insights or ScheduleInsights()

    @property
    def config(self) -> SchedulerConfig:
        return self._config

    def get_state(self, card_id: CardId) -> CardScheduleState:
        """Stored state for a card, or a fresh default if it was never reviewed."""
        state = self._repo.get(card_id)
        if state is None:
            return new_state(card_id, self._config)
        return state

    def record(self, card_id: CardId, is_correct: bool, now: datetime) -> CardScheduleState:
        """
        Record a pass/fail review for a card and persist the new state.
        """
        previous = self.get_state(card_id)
        updated = record_review(previous, is_correct, now, self._config)
        self._repo.save(updated)

        logger.info(
            f"Reviewed card {card_id}: {'correct' if is_correct else 'incorrect'}, "
            f"interval {previous.interval_days} -> {updated.interval_days} days, "
            f"ease {previous.ease_factor} -> {updated.ease_factor}"
        )
        return updated

    def record_quality(self, card_id: CardId, quality: int, now: datetime) -> CardScheduleState:
        """Record a review graded on the SM-2 0-5 quality scale."""
        return self.record(card_id, outcome_from_quality(quality), now)

    def record_swipe(
        self, card_id: CardId, direction: str, now: datetime
    ) -> CardScheduleState | None:
        """
        Record a review from a swipe gesture.

        Returns:
            The new state, or None when the swipe skips the card.
        """
        outcome = outcome_from_swipe(direction)
        if outcome is None:
            logger.debug(f"Swipe '{direction}' on card {card_id} skipped")
            return None
        return self.record(card_id, outcome, now)

    def forget(self, card_id: CardId) -> bool:
        """Drop a card's schedule, e.g. when the card itself is deleted."""
        removed = self._repo.delete(card_id)
        if removed:
            logger.info(f"Removed schedule for card {card_id}")
        return removed

    def due_states(self, now: datetime) -> list[CardScheduleState]:
        return [s for s in self._repo.list_all() if is_due(s, now)]

    def build_queue(
        self,
        now: datetime,
        daily_new_cards_limit: int = c.DAILY_NEW_CARDS_LIMIT,
        daily_review_limit: int = c.DAILY_REVIEW_LIMIT,
        review_order: ReviewOrder = ReviewOrder.NEW_FIRST,
        extra_card_ids: list[CardId] | None = None,
    ) -> ReviewQueue:
        """
        Build today's queue from stored states.

        Args:
            extra_card_ids: Known cards without a stored state yet; they are
                offered as new cards.
        """
        states = self._repo.list_all()
        known = {s.card_id for s in states}
        for card_id in extra_card_ids or []:
            if card_id not in known:
                states.append(new_state(card_id, self._config))
                known.add(card_id)

        return build_review_queue(
            states,
            now,
            daily_new_cards_limit=daily_new_cards_limit,
            daily_review_limit=daily_review_limit,
            review_order=review_order,
        )

    def stats(self, now: datetime) -> tuple[ReviewStats, ProgressStats]:
        states = self._repo.list_all()
        return (
            self._insights.review_stats(states, now),
            self._insights.progress_stats(states, now),
        )
