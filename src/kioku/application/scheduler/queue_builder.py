"""
Queue builder for daily review sessions.

Builds the session queue by:
1. Splitting states into never-reviewed cards and due reviews
2. Applying the daily limits
3. Ordering new cards and reviews according to the review order
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from itertools import zip_longest

from kioku.domain import constants as c
from kioku.domain.schedule.models import CardScheduleState, ReviewOrder, ReviewQueue

from .review_scheduler import is_due

logger = logging.getLogger(__name__)


def build_review_queue(
    states: Iterable[CardScheduleState],
    now: datetime,
    daily_new_cards_limit: int = c.DAILY_NEW_CARDS_LIMIT,
    daily_review_limit: int = c.DAILY_REVIEW_LIMIT,
    review_order: ReviewOrder = ReviewOrder.NEW_FIRST,
) -> ReviewQueue:
    """
    Select and order today's cards.

    Args:
        states: Candidate schedule states (any order).
        now: Current time; reviews with next_review_at <= now are due.
        daily_new_cards_limit: Maximum never-reviewed cards to include.
        daily_review_limit: Maximum due reviews to include (0 = unlimited).
        review_order: How new cards and reviews are combined.

    Returns:
        ReviewQueue with the selected new cards, due cards (most overdue
        first) and the combined session order.
    """
    new_cards: list[CardScheduleState] = []
    due_cards: list[CardScheduleState] = []

    for state in states:
        if state.is_new:
            new_cards.append(state)
        elif is_due(state, now):
            due_cards.append(state)

    due_cards.sort(key=lambda s: (s.next_review_at, str(s.card_id)))

    new_cards = new_cards[: max(0, daily_new_cards_limit)]
    if daily_review_limit > 0:
        due_cards = due_cards[:daily_review_limit]

    ordered = _combine(new_cards, due_cards, ReviewOrder(review_order))
    logger.debug(
        f"Built review queue: {len(new_cards)} new, {len(due_cards)} due, order={review_order}"
    )
    return ReviewQueue(new_cards=new_cards, due_cards=due_cards, ordered=ordered)


def _combine(
    new_cards: list[CardScheduleState],
    due_cards: list[CardScheduleState],
    order: ReviewOrder,
) -> list[CardScheduleState]:
    if order == ReviewOrder.NEW_FIRST:
        return new_cards + due_cards
    if order == ReviewOrder.REVIEWS_FIRST:
        return due_cards + new_cards

    # Mixed: alternate, starting with a review.
    mixed: list[CardScheduleState] = []
    for review, new in zip_longest(due_cards, new_cards):
        if review is not None:
            mixed.append(review)
        if new is not None:
            mixed.append(new)
    return mixed
