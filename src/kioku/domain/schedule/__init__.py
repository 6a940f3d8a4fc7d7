# Domain Schedule Package
from .models import (
    CardId,
    CardScheduleState,
    ProgressStats,
    ReviewOrder,
    ReviewPreset,
    ReviewQueue,
    ReviewStats,
    SchedulerConfig,
)
from .ports import ScheduleRepository
from .presets import PRESETS, get_preset

__all__ = [
    "CardId",
    "CardScheduleState",
    "SchedulerConfig",
    "ReviewOrder",
    "ReviewPreset",
    "ReviewStats",
    "ProgressStats",
    "ReviewQueue",
    "ScheduleRepository",
    "PRESETS",
    "get_preset",
]
