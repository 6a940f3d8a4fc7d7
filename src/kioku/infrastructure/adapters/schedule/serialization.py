"""
Serialization adapter between CardScheduleState and flat records.

Records are plain dicts with ISO-8601 timestamps, suitable for SQLite rows,
JSON output or any other store. The scheduler never sees this mapping.
"""

from datetime import datetime
from typing import Any

from kioku.domain.schedule.models import CardScheduleState

FIELDS = (
    "card_id",
    "interval_days",
    "repetitions",
    "ease_factor",
    "streak",
    "total_reviews",
    "last_reviewed_at",
    "next_review_at",
)


def state_to_record(state: CardScheduleState) -> dict[str, Any]:
    return {
        "card_id": state.card_id,
        "interval_days": state.interval_days,
        "repetitions": state.repetitions,
        "ease_factor": state.ease_factor,
        "streak": state.streak,
        "total_reviews": state.total_reviews,
        "last_reviewed_at": _format_time(state.last_reviewed_at),
        "next_review_at": _format_time(state.next_review_at),
    }


def state_from_record(record: dict[str, Any]) -> CardScheduleState:
    """
    Rebuild a state from a record produced by state_to_record.

    Raises:
        KeyError: if a required field is missing.
        ValueError: if a field cannot be converted.
    """
    return CardScheduleState(
        card_id=record["card_id"],
        interval_days=int(record["interval_days"]),
        repetitions=int(record["repetitions"]),
        ease_factor=float(record["ease_factor"]),
        streak=int(record["streak"]),
        total_reviews=int(record["total_reviews"]),
        last_reviewed_at=_parse_time(record.get("last_reviewed_at")),
        next_review_at=_parse_time(record.get("next_review_at")),
    )


def _format_time(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_time(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
