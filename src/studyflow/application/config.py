from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from studyflow.domain.constants import (
    BURNOUT_HIGH_STREAK,
    BURNOUT_MEDIUM_STREAK,
    BURNOUT_WINDOW_DAYS,
    FORECAST_WINDOW_DAYS,
    WEAK_TOPIC_LIMIT,
    WEAK_TOPIC_WINDOW_DAYS,
)


class AppConfig(BaseSettings):
    """
    Configuration model for studyflow.
    Supports loading from:
    1. Environment variables (STUDYFLOW_*)
    2. Config file (~/.config/studyflow/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="STUDYFLOW_",
        extra="ignore",
    )

    # Data
    data_file: Path | None = None

    # Calendar
    tz_offset_minutes: int = Field(default=0, ge=-14 * 60, le=14 * 60)

    # Analytics windows and thresholds
    burnout_window_days: int = Field(default=BURNOUT_WINDOW_DAYS, gt=0)
    burnout_medium_streak: int = BURNOUT_MEDIUM_STREAK
    burnout_high_streak: int = BURNOUT_HIGH_STREAK
    forecast_window_days: int = Field(default=FORECAST_WINDOW_DAYS, gt=0)
    weak_topic_window_days: int = Field(default=WEAK_TOPIC_WINDOW_DAYS, gt=0)
    weak_topic_limit: int = Field(default=WEAK_TOPIC_LIMIT, gt=0)

    # 0 = warnings only, 1 = info, 2+ = debug
    verbose: int = Field(default=1, ge=0)

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

        # First existing file wins; init (CLI) overrides beat env beat file
        toml_file = next((f for f in _config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("data_file", mode="before")
    @classmethod
    def resolve_data_file(cls, v: Any) -> Path | None:
        if v is None or v == "":
            return None
        return Path(v).expanduser().resolve()


def _config_files() -> list[Path]:
    # Re-evaluated on every load so a patched HOME is honoured
    home = Path.home()
    return [home / ".config/studyflow/config.toml", home / ".studyflow.toml"]


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/studyflow/config.toml (if exists)
    3. Environment variables (STUDYFLOW_*)
    4. cli_overrides (passed from Typer), None values ignored
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
