"""
Schedule insights derived from card states.

Stateless and side-effect free, like the scheduler itself.
"""

import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from kioku.domain import constants as c
from kioku.domain.schedule.models import CardScheduleState, ProgressStats, ReviewStats

from .review_scheduler import is_due

ONE_DAY = timedelta(days=1)


class ScheduleInsights:
    """
    Computes display-oriented metrics from CardScheduleState objects.

    Every method takes ``now`` explicitly so results are reproducible.
    """

    def is_overdue(self, state: CardScheduleState, now: datetime) -> bool:
        """
        A reviewed card is overdue once it has been due for more than a day.
        """
        if state.is_new or state.next_review_at is None:
            return False
        return now > state.next_review_at + timedelta(days=c.OVERDUE_GRACE_DAYS)

    def days_until_review(self, state: CardScheduleState, now: datetime) -> int:
        if state.next_review_at is None:
            return 0
        remaining = (state.next_review_at - now) / ONE_DAY
        return max(0, math.ceil(remaining))

    def days_overdue(self, state: CardScheduleState, now: datetime) -> int:
        if state.next_review_at is None:
            return 0
        return max(0, (now - state.next_review_at) // ONE_DAY)

    def due_description(self, state: CardScheduleState, now: datetime) -> str:
        """
        Short relative description of the due date: "Today", "Tomorrow",
        "In 5 days" or "Overdue by 2 days".
        """
        if state.next_review_at is None:
            return "Today"

        # Whole days, truncated toward zero.
        days = int((state.next_review_at - now) / ONE_DAY)
        if days == 0:
            return "Today"
        if days == 1:
            return "Tomorrow"
        if days > 1:
            return f"In {days} days"
        overdue = -days
        return f"Overdue by {overdue} day{'s' if overdue > 1 else ''}"

    def difficulty_level(self, state: CardScheduleState) -> str:
        if state.ease_factor >= c.EASY_EASE_THRESHOLD:
            return "Easy"
        if state.ease_factor >= c.MEDIUM_EASE_THRESHOLD:
            return "Medium"
        return "Hard"

    def learning_stage(self, state: CardScheduleState) -> str:
        if state.repetitions == 0:
            return "New"
        if state.repetitions <= c.LEARNING_MAX_REPETITIONS:
            return "Learning"
        if state.repetitions <= c.REVIEWING_MAX_REPETITIONS:
            return "Reviewing"
        return "Mastered"

    def is_mastered(self, state: CardScheduleState) -> bool:
        return (
            state.repetitions >= c.MASTERED_MIN_REPETITIONS
            and state.interval_days >= c.MASTERED_MIN_INTERVAL
        )

    def review_stats(self, states: Iterable[CardScheduleState], now: datetime) -> ReviewStats:
        """
        Bucket cards into new, overdue and due-for-review.

        Cards that are neither new nor due are only counted in the total.
        """
        total = new = review = overdue = 0
        for state in states:
            total += 1
            if state.is_new:
                new += 1
            elif self.is_overdue(state, now):
                overdue += 1
            elif is_due(state, now):
                review += 1
        return ReviewStats(total=total, new=new, review=review, overdue=overdue)

    def progress_stats(
        self, states: Iterable[CardScheduleState], now: datetime
    ) -> ProgressStats:
        states = list(states)
        if not states:
            return ProgressStats(
                total_cards=0,
                mastered_cards=0,
                due_cards=0,
                mastery_percentage=0.0,
                average_ease_factor=0.0,
            )

        total = len(states)
        mastered = sum(1 for s in states if self.is_mastered(s))
        due = sum(1 for s in states if is_due(s, now))
        return ProgressStats(
            total_cards=total,
            mastered_cards=mastered,
            due_cards=due,
            mastery_percentage=mastered / total * 100,
            average_ease_factor=sum(s.ease_factor for s in states) / total,
        )
