from datetime import datetime, timezone

import pytest

from kioku.domain.schedule.models import CardScheduleState, SchedulerConfig
from kioku.infrastructure.adapters.schedule.memory_store import InMemoryScheduleRepository


@pytest.fixture
def now():
    """A fixed review time so results are reproducible."""
    return datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def config():
    return SchedulerConfig()


@pytest.fixture
def fresh_state():
    """Default state for a card that has never been reviewed."""
    return CardScheduleState(card_id=1)


@pytest.fixture
def memory_repo():
    return InMemoryScheduleRepository()


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config and the database
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "KIOKU_DB_PATH",
        "KIOKU_PRESET",
        "KIOKU_MAX_STREAK",
        "KIOKU_MAX_INTERVAL",
        "KIOKU_GRADED_INTERVAL_TABLE",
        "KIOKU_REVIEW_ORDER",
    ):
        monkeypatch.delenv(var, raising=False)
    return home
