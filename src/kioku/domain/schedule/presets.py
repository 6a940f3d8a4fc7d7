"""Preset review configurations for different learning styles."""

from kioku.domain.exceptions import KiokuError

from .models import ReviewOrder, ReviewPreset, SchedulerConfig

BEGINNER = ReviewPreset(
    name="beginner",
    scheduler=SchedulerConfig(graded_interval_table=(1, 1, 2, 4, 7, 14, 30), max_interval=60),
    daily_new_cards_limit=10,
    review_order=ReviewOrder.NEW_FIRST,
)

STANDARD = ReviewPreset(
    name="standard",
    scheduler=SchedulerConfig(),
    daily_new_cards_limit=20,
    review_order=ReviewOrder.NEW_FIRST,
)

INTENSIVE = ReviewPreset(
    name="intensive",
    scheduler=SchedulerConfig(graded_interval_table=(1, 1, 2, 3, 5, 7, 14), max_interval=30),
    daily_new_cards_limit=50,
    review_order=ReviewOrder.MIXED,
)

RELAXED = ReviewPreset(
    name="relaxed",
    scheduler=SchedulerConfig(graded_interval_table=(2, 3, 7, 14, 30, 60, 120), max_interval=365),
    daily_new_cards_limit=5,
    review_order=ReviewOrder.REVIEWS_FIRST,
)

PRESETS: dict[str, ReviewPreset] = {
    p.name: p for p in (BEGINNER, STANDARD, INTENSIVE, RELAXED)
}


def get_preset(name: str) -> ReviewPreset:
    try:
        return PRESETS[name]
    except KeyError:
        raise KiokuError(
            f"Unknown preset '{name}'. Choose one of: {', '.join(PRESETS)}"
        ) from None
