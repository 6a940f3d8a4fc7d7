# Infrastructure Schedule Adapters Package
from .memory_store import InMemoryScheduleRepository
from .serialization import state_from_record, state_to_record
from .sqlite_store import SqliteScheduleRepository

__all__ = [
    "InMemoryScheduleRepository",
    "SqliteScheduleRepository",
    "state_to_record",
    "state_from_record",
]
