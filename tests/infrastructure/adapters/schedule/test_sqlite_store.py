import sqlite3
from datetime import timedelta

import pytest

from kioku.application.scheduler.review_scheduler import record_review
from kioku.domain.exceptions import ScheduleStoreError
from kioku.domain.schedule.models import CardScheduleState
from kioku.infrastructure.adapters.schedule.sqlite_store import SqliteScheduleRepository


@pytest.fixture
def repo(tmp_path):
    with SqliteScheduleRepository(tmp_path / "data" / "schedule.db") as r:
        yield r


def test_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "schedule.db"
    with SqliteScheduleRepository(path):
        pass
    assert path.exists()


def test_get_missing(repo):
    assert repo.get(1) is None


def test_save_and_get(repo, now, fresh_state):
    state = record_review(fresh_state, True, now)
    repo.save(state)
    assert repo.get(1) == state


def test_int_and_str_ids_are_distinct(repo):
    repo.save(CardScheduleState(card_id=7, streak=1))
    repo.save(CardScheduleState(card_id="7", streak=2))

    assert repo.get(7).streak == 1
    assert repo.get("7").streak == 2
    assert isinstance(repo.get(7).card_id, int)
    assert isinstance(repo.get("7").card_id, str)


def test_save_replaces(repo, now, fresh_state):
    first = record_review(fresh_state, True, now)
    second = record_review(first, False, now + timedelta(days=1))
    repo.save(first)
    repo.save(second)

    assert repo.get(1) == second
    assert len(repo.list_all()) == 1


def test_delete(repo):
    repo.save(CardScheduleState(card_id="x"))
    assert repo.delete("x") is True
    assert repo.delete("x") is False
    assert repo.get("x") is None


def test_list_all_ordered_by_next_review(repo, now):
    for card_id, days in (("b", 5), ("a", 1), ("c", 3)):
        repo.save(
            CardScheduleState(
                card_id=card_id,
                last_reviewed_at=now,
                next_review_at=now + timedelta(days=days),
            )
        )
    assert [s.card_id for s in repo.list_all()] == ["a", "c", "b"]


def test_persists_across_connections(tmp_path, now, fresh_state):
    path = tmp_path / "schedule.db"
    state = record_review(fresh_state, True, now)
    with SqliteScheduleRepository(path) as repo:
        repo.save(state)

    with SqliteScheduleRepository(path) as repo:
        assert repo.get(1) == state


def test_corrupt_row_skipped_in_listing(repo, caplog):
    repo.save(CardScheduleState(card_id="good"))
    with repo.conn:
        repo.conn.execute(
            "INSERT INTO card_schedule (card_id, last_reviewed_at) VALUES ('bad', 'yesterday')"
        )

    states = repo.list_all()

    assert [s.card_id for s in states] == ["good"]
    assert "Skipping corrupt schedule row for card bad" in caplog.text
    with pytest.raises(ScheduleStoreError, match="Corrupt"):
        repo.get("bad")


def test_closed_connection_raises_store_error(tmp_path):
    repo = SqliteScheduleRepository(tmp_path / "schedule.db")
    repo.close()
    with pytest.raises(ScheduleStoreError):
        repo.get(1)


def test_memory_database():
    with SqliteScheduleRepository(":memory:") as repo:
        repo.save(CardScheduleState(card_id=1))
        assert repo.get(1) is not None


def test_schema_has_next_review_index(repo):
    names = {
        row[0]
        for row in repo.conn.execute("SELECT name FROM sqlite_master WHERE type = 'index'")
    }
    assert "idx_card_schedule_next_review" in names
    assert isinstance(repo.conn, sqlite3.Connection)
