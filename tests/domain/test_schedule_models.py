from dataclasses import FrozenInstanceError

import pytest

from kioku.domain.exceptions import InvalidSchedulerConfigError, KiokuError
from kioku.domain.schedule.models import CardScheduleState, ReviewQueue, SchedulerConfig
from kioku.domain.schedule.presets import PRESETS, get_preset


def test_state_is_immutable():
    state = CardScheduleState(card_id=1)
    with pytest.raises(FrozenInstanceError):
        state.repetitions = 3


def test_state_defaults():
    state = CardScheduleState(card_id="a")
    assert state.interval_days == 1
    assert state.ease_factor == 2.5
    assert state.is_new


def test_default_config_is_valid():
    config = SchedulerConfig()
    assert config.problems() == []
    assert config.validate() is config
    assert config.relearn_interval == 1
    assert config.max_streak is None


@pytest.mark.parametrize("name", sorted(PRESETS))
def test_presets_are_valid(name):
    preset = get_preset(name)
    assert preset.name == name
    assert preset.scheduler.problems() == []


def test_unknown_preset():
    with pytest.raises(KiokuError, match="Unknown preset"):
        get_preset("cramming")


@pytest.mark.parametrize(
    "kwargs,fragment",
    [
        ({"graded_interval_table": ()}, "must not be empty"),
        ({"graded_interval_table": (0, 1, 3)}, "entries must be >= 1"),
        ({"graded_interval_table": (1, 3, 3, 7)}, "must increase"),
        ({"max_interval": 90}, "max_interval"),
        ({"min_ease_factor": 3.0, "max_ease_factor": 2.0}, "ease bounds"),
        ({"default_ease_factor": 3.5}, "default_ease_factor"),
        ({"ease_factor_decrease": 0.0}, "ease_factor_decrease"),
        ({"max_streak": 0}, "max_streak"),
    ],
)
def test_config_problems(kwargs, fragment):
    config = SchedulerConfig(**kwargs)
    assert any(fragment in p for p in config.problems())
    with pytest.raises(InvalidSchedulerConfigError):
        config.validate()


def test_repeated_first_table_entries_allowed():
    # The relearn interval may equal the first learning interval.
    assert SchedulerConfig(graded_interval_table=(1, 1, 3)).problems() == []


def test_review_queue_len():
    queue = ReviewQueue(ordered=[CardScheduleState(card_id=1), CardScheduleState(card_id=2)])
    assert len(queue) == 2
    assert len(ReviewQueue()) == 0
