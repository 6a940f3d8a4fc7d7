"""
SQLite Schedule Repository: Infrastructure adapter for a local database.

Implements ScheduleRepository on a single ``card_schedule`` table.
Saves are last-write-wins upserts.
"""

import logging
import sqlite3
from pathlib import Path

from kioku.domain.exceptions import ScheduleStoreError
from kioku.domain.schedule.models import CardId, CardScheduleState
from kioku.domain.schedule.ports import ScheduleRepository

from .serialization import FIELDS, state_from_record, state_to_record

logger = logging.getLogger(__name__)

# card_id has no declared type so integer and text ids keep their type.
SCHEMA = """
CREATE TABLE IF NOT EXISTS card_schedule (
    card_id PRIMARY KEY,
    interval_days INTEGER NOT NULL DEFAULT 1,
    repetitions INTEGER NOT NULL DEFAULT 0,
    ease_factor REAL NOT NULL DEFAULT 2.5,
    streak INTEGER NOT NULL DEFAULT 0,
    total_reviews INTEGER NOT NULL DEFAULT 0,
    last_reviewed_at TEXT,
    next_review_at TEXT
);
CREATE INDEX IF NOT EXISTS idx_card_schedule_next_review ON card_schedule(next_review_at);
"""

_COLUMNS = ", ".join(FIELDS)
_PLACEHOLDERS = ", ".join(f":{name}" for name in FIELDS)


class SqliteScheduleRepository(ScheduleRepository):
    """
    Stores schedule states in SQLite.

    Usable as a context manager; the connection is closed on exit.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self.conn = sqlite3.connect(self.db_path, timeout=10.0)
            self.conn.row_factory = sqlite3.Row
            self.conn.executescript(SCHEMA)
            self.conn.commit()
        except sqlite3.Error as e:
            raise ScheduleStoreError(f"Could not open schedule database {self.db_path}: {e}") from e

    def __enter__(self) -> "SqliteScheduleRepository":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.conn.close()

    def get(self, card_id: CardId) -> CardScheduleState | None:
        try:
            row = self.conn.execute(
                f"SELECT {_COLUMNS} FROM card_schedule WHERE card_id = ?", (card_id,)
            ).fetchone()
        except sqlite3.Error as e:
            raise ScheduleStoreError(f"Failed to load card {card_id}: {e}") from e

        if row is None:
            return None
        try:
            return state_from_record(dict(row))
        except (KeyError, ValueError) as e:
            raise ScheduleStoreError(f"Corrupt schedule row for card {card_id}: {e}") from e

    def save(self, state: CardScheduleState) -> None:
        try:
            with self.conn:
                self.conn.execute(
                    f"INSERT OR REPLACE INTO card_schedule ({_COLUMNS}) VALUES ({_PLACEHOLDERS})",
                    state_to_record(state),
                )
        except sqlite3.Error as e:
            raise ScheduleStoreError(f"Failed to save card {state.card_id}: {e}") from e

    def delete(self, card_id: CardId) -> bool:
        try:
            with self.conn:
                cur = self.conn.execute("DELETE FROM card_schedule WHERE card_id = ?", (card_id,))
        except sqlite3.Error as e:
            raise ScheduleStoreError(f"Failed to delete card {card_id}: {e}") from e
        return cur.rowcount > 0

    def list_all(self) -> list[CardScheduleState]:
        try:
            rows = self.conn.execute(
                f"SELECT {_COLUMNS} FROM card_schedule ORDER BY next_review_at"
            ).fetchall()
        except sqlite3.Error as e:
            raise ScheduleStoreError(f"Failed to list schedules: {e}") from e

        states: list[CardScheduleState] = []
        for row in rows:
            try:
                states.append(state_from_record(dict(row)))
            except (KeyError, ValueError) as e:
                logger.warning(f"Skipping corrupt schedule row for card {row['card_id']}: {e}")
        return states
