"""
Review scheduler: the SuperMemo-2 style update rule.

This is a pure computation module with no I/O. Every function takes the
current time and the scheduler config explicitly and returns fresh values;
inputs are never mutated.
"""

import math
from dataclasses import replace
from datetime import datetime, timedelta

from kioku.domain import constants as c
from kioku.domain.exceptions import InvalidOutcomeError, InvalidScheduleStateError
from kioku.domain.schedule.models import CardId, CardScheduleState, SchedulerConfig

DEFAULT_CONFIG = SchedulerConfig()


def new_state(card_id: CardId, config: SchedulerConfig = DEFAULT_CONFIG) -> CardScheduleState:
    """Default state for a card that has never been reviewed."""
    return CardScheduleState(
        card_id=card_id,
        interval_days=c.DEFAULT_INTERVAL,
        repetitions=0,
        ease_factor=config.default_ease_factor,
        streak=0,
        total_reviews=0,
    )


def check_state(
    state: CardScheduleState, config: SchedulerConfig = DEFAULT_CONFIG
) -> CardScheduleState:
    """
    Validate a state loaded from outside and normalize its ease factor.

    Negative counters, a zero or negative interval and a non-finite ease factor
    are rejected with InvalidScheduleStateError. A finite ease factor outside
    the configured bounds is clamped. An inconsistent config raises
    InvalidSchedulerConfigError before the state is looked at.
    """
    config.validate()
    if state.interval_days < 1:
        raise InvalidScheduleStateError("interval_days", state.interval_days, "must be >= 1")
    for name in ("repetitions", "streak", "total_reviews"):
        value = getattr(state, name)
        if value < 0:
            raise InvalidScheduleStateError(name, value, "must be >= 0")
    if not math.isfinite(state.ease_factor):
        raise InvalidScheduleStateError("ease_factor", state.ease_factor, "must be finite")

    clamped = _clamp_ease(state.ease_factor, config)
    if clamped != state.ease_factor:
        return replace(state, ease_factor=clamped)
    return state


def record_review(
    state: CardScheduleState,
    is_correct: bool,
    now: datetime,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> CardScheduleState:
    """
    Apply one review outcome and return the updated state.

    Correct answers grow the repetition count, streak and ease factor, and pick
    the next interval from the graduated table while the card is still in its
    learning phase, then from ``previous interval * ease``. A lapse resets the
    counters, lowers the ease factor and restarts at the first table entry.
    The next review lands ``interval_days`` calendar days after ``now``.
    """
    state = check_state(state, config)
    ease = state.ease_factor

    if is_correct:
        repetitions = state.repetitions + 1
        streak = state.streak + 1
        if config.max_streak is not None:
            streak = min(streak, config.max_streak)
        if config.ease_adjustment:
            ease = ease + config.ease_factor_increase
        ease = _clamp_ease(ease, config)
        interval = _next_interval(state.interval_days, repetitions, ease, config)
    else:
        repetitions = 0
        streak = 0
        if config.ease_adjustment:
            ease = ease - config.ease_factor_decrease
        ease = _clamp_ease(ease, config)
        interval = config.relearn_interval

    interval = max(1, interval)

    return replace(
        state,
        interval_days=interval,
        repetitions=repetitions,
        ease_factor=ease,
        streak=streak,
        total_reviews=state.total_reviews + 1,
        last_reviewed_at=now,
        next_review_at=now + timedelta(days=interval),
    )


def is_due(state: CardScheduleState, now: datetime) -> bool:
    """True once ``now`` reaches the next review time. Never-reviewed states are always due."""
    if state.next_review_at is None:
        return True
    return now >= state.next_review_at


def interval_label(interval_days: int) -> str:
    """
    Human-readable interval: days under a week, then weeks, months and years.

    >>> interval_label(1)
    '1 day'
    >>> interval_label(14)
    '2 weeks'
    """
    if interval_days < 0:
        raise ValueError(f"interval_days must be non-negative, got {interval_days}")

    if interval_days < 7:
        return _plural(interval_days, "day")
    if interval_days < 30:
        return _plural(round_half_up(interval_days / 7), "week")
    if interval_days < 365:
        return _plural(round_half_up(interval_days / 30), "month")
    return _plural(round_half_up(interval_days / 365), "year")


def outcome_from_quality(quality: int) -> bool:
    """Map an SM-2 quality grade (0 = blackout, 5 = perfect) to pass/fail."""
    if not c.MIN_QUALITY <= quality <= c.MAX_QUALITY:
        raise InvalidOutcomeError(
            f"Quality must be between {c.MIN_QUALITY} and {c.MAX_QUALITY}, got {quality}"
        )
    return quality >= c.PASSING_QUALITY


def outcome_from_swipe(direction: str) -> bool | None:
    """
    Map a card swipe to an outcome.

    Returns:
        True for right (remembered), False for left (forgot), None for
        up/down, which skip the card without recording anything.
    """
    normalized = direction.strip().lower()
    if normalized == "right":
        return True
    if normalized == "left":
        return False
    if normalized in ("up", "down"):
        return None
    raise InvalidOutcomeError(f"Invalid swipe direction: {direction!r}")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


def _next_interval(
    previous: int, repetitions: int, ease: float, config: SchedulerConfig
) -> int:
    table = config.graded_interval_table
    if config.graduated_intervals and repetitions < len(table):
        return table[repetitions]
    grown = round_half_up(previous * ease)
    return max(1, min(grown, config.max_interval))


def _clamp_ease(ease: float, config: SchedulerConfig) -> float:
    ease = round(ease, c.EASE_PRECISION)
    return max(config.min_ease_factor, min(config.max_ease_factor, ease))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"
