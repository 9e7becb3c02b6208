"""Tests for process settings and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from aggregator.core.logging import LoggerMixin, get_logger, setup_logging
from aggregator.core.settings import DEFAULT_CONFIG_PATH, Settings


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run without AGGREGATOR_* variables or a stray .env file."""
    for name in ("AGGREGATOR_ENV", "AGGREGATOR_LOG_LEVEL", "AGGREGATOR_CONFIG_PATH", "AGGREGATOR_LOGGING_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, clean_env):
        s = Settings()
        assert s.env == "local"
        assert s.log_level == "INFO"
        assert s.config_path == DEFAULT_CONFIG_PATH
        assert s.is_local

    def test_env_override(self, clean_env):
        clean_env.setenv("AGGREGATOR_ENV", "cloud")
        clean_env.setenv("AGGREGATOR_LOG_LEVEL", "debug")
        clean_env.setenv("AGGREGATOR_CONFIG_PATH", "/etc/aggregator.toml")

        s = Settings()

        assert s.env == "cloud"
        assert s.log_level == "DEBUG"
        assert s.config_path == "/etc/aggregator.toml"
        assert not s.is_local

    def test_invalid_log_level(self, clean_env):
        clean_env.setenv("AGGREGATOR_LOG_LEVEL", "chatty")

        with pytest.raises(ValidationError):
            Settings()


class TestLogging:
    """Tests for logging helpers."""

    def test_get_logger_prefix(self):
        assert get_logger("http").name == "aggregator.http"
        assert get_logger("aggregator.keys").name == "aggregator.keys"

    def test_logger_mixin(self):
        class Worker(LoggerMixin):
            pass

        assert Worker().logger.name == "aggregator.Worker"

    def test_setup_logging_level_override(self, clean_env):
        setup_logging(Settings(), log_level="debug")

        assert logging.getLogger("aggregator").level == logging.DEBUG

    def test_setup_logging_yaml(self, clean_env, tmp_path):
        path = tmp_path / "logging.yaml"
        path.write_text(
            "version: 1\n"
            "disable_existing_loggers: false\n"
            "handlers:\n"
            "  file:\n"
            "    class: logging.FileHandler\n"
            f"    filename: {tmp_path / 'logs' / 'aggregator.log'}\n"
            "loggers:\n"
            "  aggregator.yamltest:\n"
            "    handlers: [file]\n",
            encoding="utf-8",
        )

        setup_logging(Settings(logging_config=str(path)), log_level="WARNING")

        assert (tmp_path / "logs").is_dir()
        assert logging.getLogger("aggregator").level == logging.WARNING
        handler = logging.getLogger("aggregator.yamltest").handlers[0]
        handler.close()
        logging.getLogger("aggregator.yamltest").handlers.clear()
