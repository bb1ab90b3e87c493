"""Configuration management.

Loads from an optional TOML config file + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
)

from .errors import ConfigError


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class RuleConfig(BaseModel):
    max_high_priority_initiatives: int = Field(default=5, ge=0)
    max_timeframes: int = Field(default=10, ge=1)
    timeframe_order_start: int = 1  # First value after renumbering


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from a TOML config file, overridden by environment variables
    (``ROADMAP_DATA_DIR``, ``ROADMAP_RULES__MAX_TIMEFRAMES``, ...).
    """

    data_dir: str = ".docs"
    storage_file: str = "roadmap.json"

    rules: RuleConfig = Field(default_factory=RuleConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "ROADMAP_", "env_nested_delimiter": "__"}

    def storage_path(self) -> Path:
        """Resolve the JSON document path.

        An absolute ``storage_file`` is used as is.  Otherwise the file
        lives under ``data_dir`` relative to the working directory, except
        when the working directory is the user's home, where the legacy
        ``~/.software-planning-tool`` folder is used instead.
        """
        storage_file = Path(self.storage_file).expanduser()
        if storage_file.is_absolute():
            return storage_file

        cwd = Path(os.getcwd())
        home = Path.home()
        if cwd == home:
            return home / ".software-planning-tool" / storage_file

        data_dir = Path(self.data_dir).expanduser()
        if not data_dir.is_absolute():
            data_dir = cwd / data_dir
        return data_dir / storage_file


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Precedence, highest first: *overrides*, environment variables, the
    TOML file, field defaults.

    Args:
        config_path: Path to TOML config file (optional; ignored if missing).
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Cannot parse config file {path}: {exc}") from exc

    settings_cls = _file_backed(data) if data else Settings
    return settings_cls(**(overrides or {}))


def _file_backed(file_data: dict[str, Any]) -> type[Settings]:
    """Settings class that reads *file_data* below the environment."""

    class FileBackedSettings(Settings):
        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource,
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (
                init_settings,
                env_settings,
                dotenv_settings,
                InitSettingsSource(settings_cls, file_data),
                file_secret_settings,
            )

    return FileBackedSettings
