import dataclasses
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from pydantic_settings.sources.types import NoDecode

from kioku.domain import constants as c
from kioku.domain.schedule.models import ReviewOrder, SchedulerConfig
from kioku.domain.schedule.presets import get_preset


def config_file_candidates() -> list[Path]:
    return [
        Path.home() / ".config/kioku/config.toml",
        Path.home() / ".kioku.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for kioku.
    Supports loading from:
    1. Manual overrides (CLI)
    2. Environment variables (KIOKU_*)
    3. Config file (~/.config/kioku/config.toml or ~/.kioku.toml)
    """

    model_config = SettingsConfigDict(
        env_prefix="KIOKU_",
        extra="ignore",
    )

    # Storage
    db_path: Path = Field(
        default_factory=lambda: Path.home() / ".local/share/kioku/schedule.db"
    )

    # Logging
    verbose: int = 1

    # Scheduling preset, refined by the optional overrides below
    preset: Literal["beginner", "standard", "intensive", "relaxed"] = "standard"

    ease_factor_increase: float | None = None
    ease_factor_decrease: float | None = None
    min_ease_factor: float | None = None
    max_ease_factor: float | None = None
    default_ease_factor: float | None = None
    graded_interval_table: Annotated[list[int] | None, NoDecode] = None
    max_interval: int | None = None
    graduated_intervals: bool | None = None
    ease_adjustment: bool | None = None
    max_streak: int | None = None

    # Daily queue
    daily_new_cards_limit: int | None = None
    daily_review_limit: int = c.DAILY_REVIEW_LIMIT
    review_order: ReviewOrder | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Find the first existing file
        toml_file = None
        for f in config_file_candidates():
            if f.exists():
                toml_file = f
                break

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        else:
            return (
                init_settings,
                env_settings,
            )

    @field_validator("db_path", mode="before")
    @classmethod
    def resolve_db_path(cls, v: Any) -> Path:
        return Path(v).expanduser()

    @field_validator("graded_interval_table", mode="before")
    @classmethod
    def parse_interval_table(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [int(part) for part in v.split(",") if part.strip()]
        return v

    def scheduler_config(self) -> SchedulerConfig:
        """
        The preset's scheduler tuning with any explicit overrides applied.

        Raises:
            InvalidSchedulerConfigError: if the combination is inconsistent.
        """
        base = get_preset(self.preset).scheduler
        overrides: dict[str, Any] = {}
        for f in dataclasses.fields(SchedulerConfig):
            value = getattr(self, f.name, None)
            if value is not None:
                overrides[f.name] = value
        if "graded_interval_table" in overrides:
            overrides["graded_interval_table"] = tuple(overrides["graded_interval_table"])
        return dataclasses.replace(base, **overrides).validate()

    def new_cards_limit(self) -> int:
        if self.daily_new_cards_limit is not None:
            return self.daily_new_cards_limit
        return get_preset(self.preset).daily_new_cards_limit

    def queue_order(self) -> ReviewOrder:
        if self.review_order is not None:
            return self.review_order
        return get_preset(self.preset).review_order


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/kioku/config.toml (if exists)
    3. Environment variables (KIOKU_*)
    4. cli_overrides (passed from Typer)
    """
    # Typer passes None for options the user did not give.
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
