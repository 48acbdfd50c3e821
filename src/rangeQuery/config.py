"""Configuration management for rangeQuery using Pydantic Settings."""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from .operations import Operation

REFERENCE_VALUES = (2, -3, 4, 1, 0, -1, -1, 5, 6)


class TableSettings(BaseModel):
    """Sparse table construction and caching configuration."""

    model_config = ConfigDict(extra="ignore")

    cache_maxsize: int = Field(
        default=128, ge=1, description="Maximum number of built tables kept by the registry."
    )


class DemoSettings(BaseModel):
    """Defaults for the demonstration entry point."""

    model_config = ConfigDict(extra="ignore")

    values: tuple[int, ...] = Field(
        default=REFERENCE_VALUES, min_length=1, description="Array the demo table is built over."
    )
    operation: Operation = Field(default=Operation.MIN, description="Operation for the demo table.")
    left: int = Field(default=2, ge=0, description="Left index of the demo query (inclusive).")
    right: int = Field(default=7, ge=0, description="Right index of the demo query (inclusive).")

    @model_validator(mode="after")
    def _check_range(self) -> DemoSettings:
        if self.left > self.right:
            msg = f"Demo range [{self.left}, {self.right}] is empty."
            raise ValueError(msg)
        if self.right >= len(self.values):
            msg = f"Demo range [{self.left}, {self.right}] exceeds {len(self.values)} values."
            raise ValueError(msg)
        return self


class LoggingSettings(BaseModel):
    """Standard logging configuration exposed via settings."""

    model_config = ConfigDict(extra="ignore")

    level: str = Field(default="INFO", description="Root logger level.")
    fmt: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Logging format string.",
    )
    datefmt: str = Field(default="%Y-%m-%d %H:%M:%S", description="Datetime format used in logs.")
    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory for log files (relative paths resolved at runtime).",
    )
    file_name: str = Field(
        default="range_query.log", description="Filename for the rotating file handler."
    )
    file_enabled: bool = Field(default=True, description="Write logs to a rotating file.")
    max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Maximum size per log file before rotation (bytes)."
    )
    backup_count: int = Field(default=5, description="Number of rotated log files to retain.")
    console_enabled: bool = Field(
        default=True, description="Emit logs to stdout in addition to file output."
    )
    console_level: str | None = Field(
        default=None, description="Optional override for console handler level."
    )
    file_level: str | None = Field(
        default=None, description="Optional override for file handler level."
    )
    propagate: bool = Field(
        default=True, description="Allow package loggers to propagate to root handlers."
    )
    loggers: dict[str, str] = Field(
        default_factory=lambda: {},
        description="Per-logger level overrides (name -> level).",
    )


class AppSettings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="RANGE_QUERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    table: TableSettings = Field(default_factory=TableSettings)
    demo: DemoSettings = Field(default_factory=DemoSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class StdoutStreamHandler(logging.StreamHandler):
    """Stream handler that keeps stdout binding fresh for testing environments."""

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - thin wrapper
        self.stream = sys.stdout
        super().emit(record)


_LOGGING_CONFIGURED = False
_ACTIVE_LOGGING_SETTINGS: LoggingSettings | None = None


def configure_logging(logging_settings: LoggingSettings | None = None) -> LoggingSettings:
    """
    Initialise stdlib logging using values from :class:`LoggingSettings`.

    The function is idempotent: subsequent calls return the already-applied settings without
    reconfiguring handlers. When called with ``None`` (default) it obtains settings from
    :func:`get_settings`, allowing environment variables to drive configuration:

    - File logging uses a rotating file handler rooted at ``logging.log_dir`` /
      ``logging.file_name`` unless ``logging.file_enabled`` is false.
    - Console logging is optional and can be toggled or level-adjusted independently.
    - Package-specific levels are applied for any loggers named in ``logging.loggers``.

    Parameters
    ----------
    logging_settings:
        Optional explicit :class:`LoggingSettings` instance. If omitted, cached application
        settings are used.

    Returns
    -------
    LoggingSettings
        The active logging configuration instance applied to the process.

    """
    global _LOGGING_CONFIGURED
    global _ACTIVE_LOGGING_SETTINGS

    if _LOGGING_CONFIGURED:
        assert _ACTIVE_LOGGING_SETTINGS is not None
        return _ACTIVE_LOGGING_SETTINGS

    if logging_settings is None:
        logging_settings = get_settings().logging

    formatter = logging.Formatter(logging_settings.fmt, logging_settings.datefmt)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging_settings.level.upper())

    if logging_settings.file_enabled:
        log_dir = logging_settings.log_dir
        if not log_dir.is_absolute():
            log_dir = (Path.cwd() / log_dir).resolve()
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / logging_settings.file_name

        file_handler = RotatingFileHandler(
            str(log_file),
            maxBytes=logging_settings.max_bytes,
            backupCount=logging_settings.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel((logging_settings.file_level or logging_settings.level).upper())
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if logging_settings.console_enabled:
        console_handler = StdoutStreamHandler()
        console_handler.setLevel((logging_settings.console_level or logging_settings.level).upper())
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    for name, level in logging_settings.loggers.items():
        package_logger = logging.getLogger(name)
        package_logger.setLevel(level.upper())
        package_logger.propagate = logging_settings.propagate

    _ACTIVE_LOGGING_SETTINGS = logging_settings
    _LOGGING_CONFIGURED = True
    return logging_settings


@lru_cache
def get_settings(**overrides: object) -> AppSettings:
    """Return a cached instance of application settings."""
    return AppSettings(**overrides)


settings = get_settings()
