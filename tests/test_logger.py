"""
Tests for logging infrastructure.

Verifies logger configuration, file creation, and name mapping.
"""

import logging
from unittest.mock import patch

import pytest

import aquavoice.utils.logger as logger_module
from aquavoice import __app_name__
from aquavoice.utils.logger import get_log_dir, get_logger, shutdown_logging


@pytest.fixture
def fresh_logging():
    """Drop existing handlers before and after the test."""
    shutdown_logging()
    yield
    shutdown_logging()


class TestLoggerConfiguration:
    """Tests for logger setup and configuration."""

    def test_get_logger_returns_logger(self):
        assert isinstance(get_logger("test"), logging.Logger)

    def test_get_logger_singleton(self):
        """Root logger is the same instance every time."""
        assert get_logger("aquavoice") is get_logger("aquavoice")

    def test_src_prefixed_names_mapped(self):
        logger = get_logger("src.aquavoice.core.pipeline")
        assert logger.name == "aquavoice.core.pipeline"

    def test_module_loggers_share_root_handlers(self):
        logger = get_logger("aquavoice.app")
        assert logger.parent is logging.getLogger("aquavoice")

    @patch("aquavoice.utils.logger.user_data_path")
    def test_log_directory_creation(self, mock_data_path, tmp_path):
        mock_data_path.return_value = tmp_path

        log_dir = get_log_dir()

        mock_data_path.assert_called_once_with(__app_name__)
        assert log_dir.exists()
        assert log_dir.is_dir()
        assert log_dir.name == "logs"

    @patch("aquavoice.utils.logger.user_data_path")
    def test_logger_writes_to_file(self, mock_data_path, tmp_path, fresh_logging):
        mock_data_path.return_value = tmp_path

        logger = get_logger("aquavoice")
        logger.info("Test message")
        for handler in logger.handlers:
            handler.flush()

        log_file = tmp_path / "logs" / "app.log"
        assert log_file.exists()

        content = log_file.read_text(encoding="utf-8")
        assert "Test message" in content
        assert "INFO" in content

    @patch("aquavoice.utils.logger.user_data_path")
    def test_shutdown_removes_handlers(self, mock_data_path, tmp_path, fresh_logging):
        mock_data_path.return_value = tmp_path
        get_logger("aquavoice")
        assert logging.getLogger("aquavoice").handlers

        shutdown_logging()

        assert logging.getLogger("aquavoice").handlers == []
        assert logger_module._logger_instance is None
