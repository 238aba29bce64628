"""Configuration management using pydantic-settings."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from seqflow.exceptions import ConfigurationError

_ENV_FILES = (".env", "../.env", "../../.env")


class PipelineSettings(BaseSettings):
    """Executor defaults.

    Read from `PIPELINE_*` env vars and `.env` files only when instantiated
    directly or through `Settings`. A bare `PipelineExecutor(steps)` uses the
    field defaults without touching the environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="PIPELINE_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Default for `PipelineExecutor.run(settle_all=None)`.
    settle_all: bool = False


class LoggingSettings(BaseSettings):
    """Logging configuration.

    `level` applies to the whole `seqflow` package. `step_level` applies only
    to the executor's per-step trace records, so they can be switched on
    without lowering the level of everything else.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    step_level: str | None = None
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    console: bool = True
    file: str | None = None
    file_max_bytes: int = Field(default=5 * 1024 * 1024, ge=0)
    file_backups: int = Field(default=3, ge=0)

    @field_validator("level", "step_level")
    @classmethod
    def _validate_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        name = str(value).strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ConfigurationError(f"Unknown log level: {value!r}")
        return name


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILES, env_file_encoding="utf-8", extra="ignore"
    )

    log_dir: str = "./logs"

    pipeline: PipelineSettings = PipelineSettings()

    # Logging
    logging: LoggingSettings = LoggingSettings()

    @property
    def log_path(self) -> Path | None:
        """Resolved log file path, or None when file logging is disabled."""
        if not self.logging.file:
            return None
        path = Path(str(self.logging.file))
        if not path.is_absolute():
            path = Path(self.log_dir) / path
        return path
