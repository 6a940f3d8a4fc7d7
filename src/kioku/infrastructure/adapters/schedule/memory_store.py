"""In-memory schedule repository."""

from kioku.domain.schedule.models import CardId, CardScheduleState
from kioku.domain.schedule.ports import ScheduleRepository


class InMemoryScheduleRepository(ScheduleRepository):
    """Dict-backed repository. States are immutable, so no copies are needed."""

    def __init__(self, states: list[CardScheduleState] | None = None):
        self._states: dict[CardId, CardScheduleState] = {
            s.card_id: s for s in states or []
        }

    def get(self, card_id: CardId) -> CardScheduleState | None:
        return self._states.get(card_id)

    def save(self, state: CardScheduleState) -> None:
        self._states[state.card_id] = state

    def delete(self, card_id: CardId) -> bool:
        return self._states.pop(card_id, None) is not None

    def list_all(self) -> list[CardScheduleState]:
        return list(self._states.values())
