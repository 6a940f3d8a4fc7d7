from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from kioku.application.scheduler.service import ReviewService
from kioku.domain.exceptions import InvalidOutcomeError, InvalidSchedulerConfigError
from kioku.domain.schedule.models import CardScheduleState, ReviewOrder, SchedulerConfig
from kioku.domain.schedule.ports import ScheduleRepository


@pytest.fixture
def service(memory_repo):
    return ReviewService(memory_repo)


def test_get_state_defaults_for_unknown_card(service):
    state = service.get_state("neko")
    assert state.card_id == "neko"
    assert state.is_new
    assert state.ease_factor == 2.5


def test_record_persists_new_state(service, memory_repo, now):
    updated = service.record(1, True, now)

    assert memory_repo.get(1) == updated
    assert updated.repetitions == 1
    assert updated.next_review_at == now + timedelta(days=1)


def test_record_builds_on_stored_state(service, memory_repo, now):
    service.record(1, True, now)
    second = service.record(1, True, now + timedelta(days=1))

    assert second.repetitions == 2
    assert second.interval_days == 3
    assert memory_repo.get(1).total_reviews == 2


def test_record_uses_service_config(memory_repo, now):
    config = SchedulerConfig(graded_interval_table=(2, 3, 7, 14, 30, 60, 120), max_interval=365)
    service = ReviewService(memory_repo, config)

    assert service.config is config
    assert service.get_state(5).interval_days == 1
    assert service.record(5, True, now).interval_days == 3
    assert service.record(5, False, now).interval_days == 2


def test_invalid_config_rejected(memory_repo):
    with pytest.raises(InvalidSchedulerConfigError) as exc_info:
        ReviewService(memory_repo, SchedulerConfig(graded_interval_table=()))
    assert exc_info.value.problems


def test_record_quality(service, now):
    assert service.record_quality(1, 4, now).repetitions == 1
    assert service.record_quality(1, 1, now).repetitions == 0
    with pytest.raises(InvalidOutcomeError):
        service.record_quality(1, 9, now)


def test_record_swipe_skip_leaves_store_untouched(service, memory_repo, now):
    assert service.record_swipe(1, "up", now) is None
    assert memory_repo.get(1) is None

    state = service.record_swipe(1, "right", now)
    assert state.streak == 1


def test_forget(service, now):
    service.record(1, True, now)
    assert service.forget(1) is True
    assert service.forget(1) is False
    assert service.get_state(1).is_new


def test_due_states(service, now):
    service.record(1, True, now)
    service.record(2, True, now - timedelta(days=3))

    due = service.due_states(now)
    assert [s.card_id for s in due] == [2]


def test_build_queue_adds_unseen_cards(service, now):
    service.record(1, True, now - timedelta(days=2))
    service.record(2, True, now)

    queue = service.build_queue(now, extra_card_ids=[1, 3, 4, 3])

    assert [s.card_id for s in queue.new_cards] == [3, 4]
    assert [s.card_id for s in queue.due_cards] == [1]
    assert [s.card_id for s in queue.ordered] == [3, 4, 1]


def test_build_queue_passes_limits(service, now):
    queue = service.build_queue(
        now,
        daily_new_cards_limit=1,
        review_order=ReviewOrder.REVIEWS_FIRST,
        extra_card_ids=["a", "b"],
    )
    assert len(queue) == 1


def test_stats(service, now):
    service.record(1, True, now - timedelta(days=3))
    service.record(2, False, now)

    review, progress = service.stats(now)

    assert review.total == 2
    assert review.overdue == 1
    assert progress.total_cards == 2
    assert progress.due_cards == 1


def test_service_only_talks_to_the_port(now):
    repo = MagicMock(spec=ScheduleRepository)
    repo.get.return_value = CardScheduleState(card_id=9, repetitions=1, streak=1)
    service = ReviewService(repo)

    updated = service.record(9, True, now)

    repo.get.assert_called_once_with(9)
    repo.save.assert_called_once_with(updated)
    assert updated.repetitions == 2
