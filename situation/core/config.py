"""
Situation - Application Configuration

This module provides configuration management using Pydantic Settings with
environment variable and ``.env`` support. Settings are built once by
``load_settings`` at startup and passed explicitly to the components that
need them.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings

from ..models.enums import Environment, LogLevel
from .constants import APP_NAME, APP_VERSION, DEFAULT_API_TIMEOUT, LOG_VIEW_HEIGHT, POLL_INTERVAL_MS
from .exceptions import ConfigurationError, format_validation_error


class ServiceSettings(BaseSettings):
    """Remote change-management service settings."""

    api_url: str = Field(validation_alias="SI_API", description="Service base URL")
    jwt_token: SecretStr = Field(validation_alias="JWT_TOKEN", description="Bearer token")
    timeout: int = Field(
        default=DEFAULT_API_TIMEOUT,
        ge=1,
        le=300,
        validation_alias="SI_TIMEOUT",
        description="Request timeout in seconds",
    )

    @field_validator('api_url')
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError('api_url must start with http:// or https://')
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        populate_by_name = True
        extra = "ignore"


class UISettings(BaseSettings):
    """Terminal UI settings."""

    log_height: int = Field(default=LOG_VIEW_HEIGHT, ge=3, le=50, description="Log pane height in lines")
    poll_interval_ms: int = Field(default=POLL_INTERVAL_MS, ge=10, le=5000, description="Input poll timeout")

    class Config:
        env_prefix = "UI_"
        extra = "ignore"


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string"
    )

    # File logging is opt-in so nothing is written over the terminal UI
    file: Optional[Path] = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, ge=1, le=100, description="Max log file size in MB")
    backup_count: int = Field(default=3, ge=1, le=10, description="Number of log file backups")

    class Config:
        env_prefix = "LOG_"
        extra = "ignore"


class Settings(BaseSettings):
    """Main application settings."""

    app_name: str = Field(default=APP_NAME, description="Application name")
    app_version: str = Field(default=APP_VERSION, description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Application environment")

    service: ServiceSettings = Field(default_factory=ServiceSettings)
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Build the settings object for one session.

    Args:
        env_file: Optional dotenv file overriding ``.env``

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If the service URL or credential is missing or invalid
    """
    env_file = env_file or Path(".env")
    try:
        return Settings(
            _env_file=env_file,
            service=ServiceSettings(_env_file=env_file),
            ui=UISettings(_env_file=env_file),
            logging=LoggingSettings(_env_file=env_file),
        )
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {format_validation_error(e.errors())}",
            details={"env_file": str(env_file)},
            cause=e,
        ) from e


def configure_logging(logging_settings: LoggingSettings) -> None:
    """Configure the root logger. Without a log file, records are discarded."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, logging_settings.level.value))
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if logging_settings.file:
        logging_settings.file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            logging_settings.file,
            maxBytes=logging_settings.max_size_mb * 1024 * 1024,
            backupCount=logging_settings.backup_count,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(logging_settings.format))
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)
