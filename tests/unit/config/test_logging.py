"""Tests for logging configuration."""

import logging

import pytest
import structlog

from scriptboard.config import ScriptBoardSettings, configure_logging, get_logger, reset_settings


@pytest.fixture(autouse=True)
def restore_logging():
    """Put the root logger back after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    reset_settings()


class TestConfigureLogging:
    """Test configure_logging."""

    def test_sets_root_level(self):
        """Test the configured level reaches the root logger."""
        configure_logging(ScriptBoardSettings(log_level="DEBUG"))

        assert logging.getLogger().level == logging.DEBUG

    def test_httpx_stays_quiet(self):
        """Test request logging is held at WARNING or above."""
        configure_logging(ScriptBoardSettings(log_level="DEBUG"))

        assert logging.getLogger("httpx").level == logging.WARNING

    def test_invalid_level(self):
        """Test unknown levels raise ValueError."""
        settings = ScriptBoardSettings().model_copy(update={"log_level": "CHATTY"})

        with pytest.raises(ValueError, match="CHATTY"):
            configure_logging(settings)

    @pytest.mark.parametrize("log_format", ["console", "json", "structured"])
    def test_formats(self, log_format):
        """Test every log format configures without error."""
        configure_logging(ScriptBoardSettings(log_format=log_format))

        assert structlog.is_configured()

    def test_log_file(self, tmp_path):
        """Test a log file is created with its parent directory."""
        log_file = tmp_path / "logs" / "board.log"

        configure_logging(ScriptBoardSettings(log_level="INFO", log_file=log_file))
        logging.getLogger("scriptboard.test").info("hello")

        assert log_file.exists()


class TestGetLogger:
    """Test the cached logger accessor."""

    def test_cached(self):
        """Test the same logger is returned for a name."""
        assert get_logger("scriptboard.a") is get_logger("scriptboard.a")

    def test_usable(self):
        """Test loggers accept structured keyword arguments."""
        get_logger("scriptboard.b").info("Scene moved", scene_id="s1", status="shot")
