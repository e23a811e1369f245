import calendar
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from leetsrs.domain.constants import (
    CYCLE_START_DAY,
    CYCLE_START_MONTH,
    MASTERY_INTERVAL_DAYS,
    NEW_ATTEMPTS_PER_DAY,
    NEW_PROBLEMS_PER_DAY,
    REPEAT_ATTEMPTS_PER_DAY,
    ROLLING_WINDOW_DAYS,
)


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/leetsrs/config.toml",
        Path.home() / ".leetsrs.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for leetsrs.
    Supports loading from:
    1. Environment variables (LEETSRS_*)
    2. Config file (~/.config/leetsrs/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEETSRS_",
        extra="ignore",
    )

    # Paths
    data_file: Path = Field(
        default_factory=lambda: Path.home() / ".local/share/leetsrs/problems.json"
    )
    log_dir: Path = Field(default_factory=lambda: Path.home() / ".config/leetsrs/logs")

    # Update engine
    interval_policy: Literal["doubling", "graduated"] = "doubling"
    mastery_interval: int = Field(default=MASTERY_INTERVAL_DAYS, ge=1)

    # Selection engine
    new_problems_per_day: int = Field(default=NEW_PROBLEMS_PER_DAY, ge=0)
    new_attempts_per_day: int = Field(default=NEW_ATTEMPTS_PER_DAY, ge=1)
    repeat_attempts_per_day: int = Field(default=REPEAT_ATTEMPTS_PER_DAY, ge=1)

    # Aggregation engine
    rolling_window_days: int = Field(default=ROLLING_WINDOW_DAYS, ge=1)
    cycle_start_month: int = Field(default=CYCLE_START_MONTH, ge=1, le=12)
    cycle_start_day: int = Field(default=CYCLE_START_DAY, ge=1, le=31)

    verbose: int = 1

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

        toml_file = next((f for f in config_files() if f.exists()), None)

        # Earlier sources win: overrides, then env, then the TOML file.
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("data_file", "log_dir", mode="before")
    @classmethod
    def resolve_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    @model_validator(mode="after")
    def check_cycle_start(self) -> "AppConfig":
        # The cycle must start on the same day every year, so Feb 29 is out.
        _, days_in_month = calendar.monthrange(2001, self.cycle_start_month)
        if self.cycle_start_day > days_in_month:
            raise ValueError(
                f"cycle_start_day {self.cycle_start_day} does not exist in "
                f"month {self.cycle_start_month} every year"
            )
        return self


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/leetsrs/config.toml (if exists)
    3. Environment variables (LEETSRS_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
