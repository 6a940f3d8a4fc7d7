from datetime import datetime, timezone

import pytest

from kioku.domain.schedule.models import CardScheduleState
from kioku.infrastructure.adapters.schedule.memory_store import InMemoryScheduleRepository
from kioku.infrastructure.adapters.schedule.serialization import (
    FIELDS,
    state_from_record,
    state_to_record,
)


def test_record_uses_iso_timestamps(now):
    state = CardScheduleState(card_id=3, last_reviewed_at=now, next_review_at=now)
    record = state_to_record(state)

    assert tuple(record) == FIELDS
    assert record["last_reviewed_at"] == "2025-03-10T09:30:00+00:00"
    assert state_from_record(record) == state


def test_never_reviewed_times_are_null():
    record = state_to_record(CardScheduleState(card_id="a"))
    assert record["last_reviewed_at"] is None
    assert state_from_record(record).is_new


def test_from_record_coerces_numbers():
    state = state_from_record(
        {
            "card_id": "a",
            "interval_days": "3",
            "repetitions": 2,
            "ease_factor": "2.7",
            "streak": 2,
            "total_reviews": 2,
            "last_reviewed_at": "",
            "next_review_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
        }
    )
    assert state.interval_days == 3
    assert state.ease_factor == 2.7
    assert state.last_reviewed_at is None
    assert state.next_review_at == datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_missing_field():
    with pytest.raises(KeyError):
        state_from_record({"card_id": 1})


def test_bad_timestamp():
    record = state_to_record(CardScheduleState(card_id=1))
    record["next_review_at"] = "soon"
    with pytest.raises(ValueError):
        state_from_record(record)


def test_memory_repository():
    repo = InMemoryScheduleRepository([CardScheduleState(card_id=1)])
    repo.save(CardScheduleState(card_id=2))

    assert {s.card_id for s in repo.list_all()} == {1, 2}
    assert repo.delete(1) is True
    assert repo.delete(1) is False
    assert repo.get(1) is None
