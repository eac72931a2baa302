"""
Situation - Configuration Tests

Tests for configuration management, environment variables, and settings validation.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from situation.core.config import (
    LoggingSettings,
    ServiceSettings,
    Settings,
    UISettings,
    configure_logging,
    load_settings,
)
from situation.core.exceptions import ConfigurationError
from situation.models.enums import Environment, LogLevel


class TestServiceSettings:
    """Test remote service settings."""

    def test_service_settings_from_env(self, tmp_path):
        """Test SI_API, JWT_TOKEN and SI_TIMEOUT are read from the environment."""
        with patch.dict(os.environ, {
            'SI_API': 'https://si.example.com/api/',
            'JWT_TOKEN': 'secret-token',
            'SI_TIMEOUT': '45'
        }, clear=True):
            service = ServiceSettings(_env_file=tmp_path / "missing.env")

            assert service.api_url == 'https://si.example.com/api'
            assert service.jwt_token.get_secret_value() == 'secret-token'
            assert service.timeout == 45

    def test_token_hidden_in_repr(self):
        """Test the token is not exposed when settings are printed."""
        service = ServiceSettings(api_url="http://localhost:8080", jwt_token="secret-token")

        assert "secret-token" not in repr(service)

    def test_service_settings_validation(self):
        """Test URL scheme and timeout bounds are validated."""
        with pytest.raises(ValidationError):
            ServiceSettings(api_url="ftp://example.com", jwt_token="t")

        with pytest.raises(ValidationError):
            ServiceSettings(api_url="http://example.com", jwt_token="t", timeout=0)

    def test_service_settings_from_env_file(self, tmp_path):
        """Test values are read from a dotenv file."""
        env_file = tmp_path / "session.env"
        env_file.write_text("SI_API=http://localhost:5156\nJWT_TOKEN=file-token\n")

        with patch.dict(os.environ, {}, clear=True):
            service = ServiceSettings(_env_file=env_file)

        assert service.api_url == "http://localhost:5156"
        assert service.jwt_token.get_secret_value() == "file-token"


class TestUIAndLoggingSettings:
    """Test UI and logging settings."""

    def test_ui_settings_defaults(self):
        """Test UI settings with default values."""
        with patch.dict(os.environ, {}, clear=True):
            ui = UISettings()

        assert ui.log_height == 10
        assert ui.poll_interval_ms == 100

    def test_ui_settings_from_env(self):
        """Test UI settings from environment variables."""
        with patch.dict(os.environ, {'UI_LOG_HEIGHT': '15', 'UI_POLL_INTERVAL_MS': '250'}, clear=True):
            ui = UISettings()

        assert ui.log_height == 15
        assert ui.poll_interval_ms == 250

    def test_logging_settings_defaults(self):
        """Test file logging is off by default."""
        with patch.dict(os.environ, {}, clear=True):
            logging_settings = LoggingSettings()

        assert logging_settings.level == LogLevel.INFO
        assert logging_settings.file is None

    def test_logging_settings_from_env(self, tmp_path):
        """Test logging settings from environment variables."""
        with patch.dict(os.environ, {
            'LOG_LEVEL': 'DEBUG',
            'LOG_FILE': str(tmp_path / "situation.log"),
            'LOG_BACKUP_COUNT': '5'
        }, clear=True):
            logging_settings = LoggingSettings()

        assert logging_settings.level == LogLevel.DEBUG
        assert logging_settings.file == tmp_path / "situation.log"
        assert logging_settings.backup_count == 5


class TestLoadSettings:
    """Test building the settings for a session."""

    def test_load_settings(self, tmp_path):
        """Test a complete configuration loads."""
        with patch.dict(os.environ, {
            'SI_API': 'http://localhost:5156',
            'JWT_TOKEN': 'token',
            'ENVIRONMENT': 'testing'
        }, clear=True):
            settings = load_settings(tmp_path / "missing.env")

        assert isinstance(settings, Settings)
        assert settings.service.api_url == "http://localhost:5156"
        assert settings.environment == Environment.TESTING
        assert settings.is_testing is True

    @pytest.mark.parametrize("missing", ["SI_API", "JWT_TOKEN"])
    def test_missing_credentials(self, tmp_path, missing):
        """Test a missing SI_API or JWT_TOKEN raises ConfigurationError."""
        env = {'SI_API': 'http://localhost:5156', 'JWT_TOKEN': 'token'}
        del env[missing]

        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                load_settings(tmp_path / "missing.env")

        assert missing in exc_info.value.message
        assert isinstance(exc_info.value.cause, ValidationError)

    def test_invalid_url(self, tmp_path):
        """Test an invalid URL raises ConfigurationError."""
        with patch.dict(os.environ, {'SI_API': 'localhost', 'JWT_TOKEN': 'token'}, clear=True):
            with pytest.raises(ConfigurationError):
                load_settings(tmp_path / "missing.env")


class TestConfigureLogging:
    """Test root logger configuration."""

    def test_null_handler_without_file(self, restore_root_logger):
        """Test nothing is written when no log file is configured."""
        configure_logging(LoggingSettings(level=LogLevel.WARNING))

        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0], logging.NullHandler)

    def test_rotating_file_handler(self, restore_root_logger, tmp_path):
        """Test a rotating file handler is attached when a file is configured."""
        log_file = tmp_path / "logs" / "situation.log"

        configure_logging(LoggingSettings(file=log_file, max_size_mb=2, backup_count=4))
        logging.getLogger("situation.test").info("hello")

        handler = restore_root_logger.handlers[0]
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 2 * 1024 * 1024
        assert handler.backupCount == 4
        handler.flush()
        assert "hello" in log_file.read_text()
