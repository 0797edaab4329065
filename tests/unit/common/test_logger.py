"""Tests for logging setup."""

import logging

import pytest

from posturepolicy.common.logger import get_logger, setup_logger


class TestSetupLogger:
    """Tests for setup_logger."""

    def test_invalid_level(self):
        """Test unknown levels are rejected."""
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logger("posturepolicy-test-invalid", level="LOUD")

    def test_console_handler(self):
        """Test a console handler is attached once."""
        logger = setup_logger("posturepolicy-test-console", level="debug")
        setup_logger("posturepolicy-test-console", level="debug")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_file_logging(self, tmp_path):
        """Test file logging writes under the log directory."""
        logger = setup_logger(
            "posturepolicy-test-file",
            log_dir=str(tmp_path),
            file_logging=True,
            console_logging=False,
        )
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()

        assert "hello" in (tmp_path / "posturepolicy-test-file.log").read_text()


class TestGetLogger:
    """Tests for get_logger."""

    def test_component_logger_nested(self):
        """Test component loggers sit under the package logger."""
        assert get_logger("policy_handler").name == "posturepolicy.policy_handler"

    def test_qualified_name_kept(self):
        """Test already qualified names are not prefixed twice."""
        assert get_logger("posturepolicy.cache").name == "posturepolicy.cache"
