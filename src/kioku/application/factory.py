"""
Service Factory
Centralizes wiring of the configured repository into the review service.
"""

from kioku.application.config import AppConfig
from kioku.application.scheduler.service import ReviewService
from kioku.domain.schedule.ports import ScheduleRepository
from kioku.infrastructure.adapters.schedule.sqlite_store import SqliteScheduleRepository


def get_schedule_repository(config: AppConfig) -> ScheduleRepository:
    """
    Returns the SQLite repository at the configured path.
    """
    return SqliteScheduleRepository(config.db_path)


def get_review_service(
    config: AppConfig, repository: ScheduleRepository | None = None
) -> ReviewService:
    """
    Returns a ReviewService using the config's scheduler tuning.
    """
    return ReviewService(
        repository or get_schedule_repository(config),
        config=config.scheduler_config(),
    )
