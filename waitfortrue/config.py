from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from waitfortrue.models import DEFAULT_INTERVAL_S, WaitOptions


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class WaitSettings(BaseSettings):
    """Application-level defaults for waits.

    ``wait_for_true`` never reads these on its own; callers opt in through
    ``default_options``. ``WAITFORTRUE_*`` environment variables take
    precedence over values passed in (including those read by
    ``load_config``), and ``null`` clears an optional value.
    """

    interval: float = Field(default=DEFAULT_INTERVAL_S, ge=0)
    timeout: float | None = Field(default=None, ge=0)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="WAITFORTRUE_",
        env_nested_delimiter="__",
        env_parse_none_str="null",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment overrides the config file, which arrives as init kwargs.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    def default_options(self, **overrides: object) -> WaitOptions:
        fields: dict[str, object] = {"interval": self.interval, "timeout": self.timeout}
        fields.update(overrides)
        return WaitOptions.model_validate(fields)


def load_config(path: str | Path = "config/waitfortrue.yaml") -> WaitSettings:
    """Read settings from a YAML file, optionally nested under ``waitfortrue:``."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")

    loaded = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(loaded, dict):
        raise ValueError("config file must contain a top-level mapping")

    raw = loaded.get("waitfortrue", loaded)
    if not isinstance(raw, dict):
        raise ValueError("waitfortrue config section must be a mapping")

    return WaitSettings(**raw)


__all__ = [
    "LoggingConfig",
    "WaitSettings",
    "load_config",
]
