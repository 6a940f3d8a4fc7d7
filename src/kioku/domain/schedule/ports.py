"""
Ports (interfaces) for schedule persistence.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import CardId, CardScheduleState


class ScheduleRepository(ABC):
    """
    Port for loading and storing card schedule states.

    Implementations:
        - InMemoryScheduleRepository: dict-backed, for tests and scripting.
        - SqliteScheduleRepository: a single SQLite table.
    """

    @abstractmethod
    def get(self, card_id: CardId) -> CardScheduleState | None:
        """
        Load the schedule state for a card.

        Returns:
            The stored state, or None if the card has never been reviewed.
        """
        pass

    @abstractmethod
    def save(self, state: CardScheduleState) -> None:
        """Store a state, replacing any previous state for the same card."""
        pass

    @abstractmethod
    def delete(self, card_id: CardId) -> bool:
        """
        Remove a card's state.

        Returns:
            True if a state was removed, False if none existed.
        """
        pass

    @abstractmethod
    def list_all(self) -> list[CardScheduleState]:
        """Return every stored state."""
        pass
