"""
Configuration management for the JSON monitor.

Handles environment variables and an optional .env file, and provides
validated defaults for the polling, parsing, and logging settings.
"""

import codecs
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from json_monitor.models.exceptions import ConfigurationError


class LogLevel(str, Enum):
    """Logging level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class MonitorConfig(BaseSettings):
    """
    Central configuration class for the JSON monitor.

    Every option can be overridden with a ``JSON_MONITOR_`` prefixed
    environment variable, e.g. ``JSON_MONITOR_POLL_INTERVAL_SECONDS=5``.
    """

    model_config = SettingsConfigDict(
        env_prefix="JSON_MONITOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Polling Configuration ===
    poll_interval_seconds: float = Field(
        default=2.0, gt=0, le=3600, description="Seconds between modification-time checks"
    )
    default_file_path: Path | None = Field(default=None, description="File to monitor when none is given")

    # === Parsing Configuration ===
    file_encoding: str = Field(
        default="utf-8-sig", description="Text encoding of the monitored file (a leading BOM is skipped)"
    )
    allow_comments: bool = Field(default=True, description="Strip // and /* */ comments before parsing")
    allow_trailing_commas: bool = Field(default=True, description="Strip trailing commas before parsing")

    # === Logging Configuration ===
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_file: Path | None = Field(default=None, description="Log file path (stderr if None)")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Log message format"
    )

    @field_validator('file_encoding')
    @classmethod
    def validate_file_encoding(cls, v):
        """Ensure the encoding is known to the codec registry."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ConfigurationError(
                f"Unknown file encoding: {v}",
                config_key="file_encoding",
                expected_type="codec name",
                actual_value=v,
            ) from e
        return v

    @model_validator(mode='after')
    def validate_default_file_path(self):
        """A configured default path must not be a directory."""
        if self.default_file_path is not None and self.default_file_path.is_dir():
            raise ConfigurationError(
                "default_file_path must point to a file, not a directory",
                config_key="default_file_path",
                expected_type="file path",
                actual_value=self.default_file_path,
            )
        return self

    def get_log_config(self) -> dict[str, Any]:
        """Get logging configuration dictionary for ``logging.config.dictConfig``."""
        level = self.log_level.value if isinstance(self.log_level, LogLevel) else str(self.log_level)
        config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"standard": {"format": self.log_format}},
            "handlers": {
                "default": {
                    "level": level,
                    "formatter": "standard",
                    "class": "logging.StreamHandler" if not self.log_file else "logging.FileHandler",
                }
            },
            "loggers": {"json_monitor": {"handlers": ["default"], "level": level, "propagate": False}},
        }

        if self.log_file:
            config["handlers"]["default"]["filename"] = str(self.log_file)

        return config


# Global configuration instance
_config: MonitorConfig | None = None


def get_config() -> MonitorConfig:
    """
    Get the global configuration instance.

    Creates a new instance on first call and reuses it for subsequent calls.
    """
    global _config
    if _config is None:
        _config = MonitorConfig()
    return _config


def reload_config() -> MonitorConfig:
    """Force reload the configuration from environment/files."""
    global _config
    _config = MonitorConfig()
    return _config


def set_config(config: MonitorConfig | None) -> None:
    """
    Set a custom configuration instance.

    Primarily used for testing. Passing None drops the cached instance.
    """
    global _config
    _config = config
