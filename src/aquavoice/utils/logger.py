"""
Centralized logging configuration.

Provides a configured logger instance with a rotating file handler.
Logs are written to the per-user data directory under ``logs/``.

Set LOG_TO_CONSOLE = True in core/settings/config.py to also output logs
to the terminal.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from platformdirs import user_data_path

from .. import __app_name__

LOGGER_NAME = "aquavoice"


def get_log_dir() -> Path:
    log_dir = user_data_path(__app_name__) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


_logger_instance: Optional[logging.Logger] = None


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (defaults to the root "aquavoice" logger).
              Module names like "src.aquavoice.app" are transformed to
              "aquavoice.app" to keep the logger hierarchy intact.

    Returns:
        Logger that writes through the shared "aquavoice" handlers.
    """
    global _logger_instance

    if name.startswith("src.aquavoice."):
        name = name.replace("src.aquavoice.", "aquavoice.", 1)
    elif name == "src.aquavoice":
        name = LOGGER_NAME

    if _logger_instance is None:
        from ..core.settings.config import LOG_TO_CONSOLE, get_log_level

        root_logger = logging.getLogger(LOGGER_NAME)

        if root_logger.handlers:
            _logger_instance = root_logger
        else:
            level = get_log_level()
            root_logger.setLevel(level)

            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )

            log_file = get_log_dir() / "app.log"
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

            if LOG_TO_CONSOLE:
                console_handler = logging.StreamHandler(sys.stderr)
                console_handler.setLevel(level)
                console_handler.setFormatter(formatter)
                root_logger.addHandler(console_handler)

            root_logger.propagate = False

            _logger_instance = root_logger

    if name == LOGGER_NAME:
        return _logger_instance

    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Close all file handlers to release file locks."""
    global _logger_instance
    root_logger = logging.getLogger(LOGGER_NAME)
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
    _logger_instance = None
