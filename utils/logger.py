"""
Logging configuration for the hearing list extractor.
"""

import logging
import sys
from datetime import datetime

from config.settings import settings


def _file_handler() -> logging.FileHandler:
    """Build the daily log file handler (full timestamps, DEBUG and up)."""
    settings.ensure_directories()
    log_file = settings.LOGS_DIR / f"hearing_lists_{datetime.now():%Y%m%d}.log"
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
        logger.addHandler(console_handler)
        logger.addHandler(_file_handler())

        # Prevent propagation to root logger
        logger.propagate = False

    return logger


def setup_root_logger() -> None:
    """Configure the root logger for the application."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
    root_logger.addHandler(console_handler)
    root_logger.addHandler(_file_handler())


def get_script_logger(name: str) -> logging.Logger:
    """Get a logger configured for CLI scripts with clean console output.

    Like get_logger(), but console output has no timestamps for clean
    user-facing display. File output still includes full timestamps.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Configured logger instance with clean console output.
    """
    logger = logging.getLogger(f"{name}.script")

    if not logger.handlers:
        logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter("%(message)s"))  # No timestamp
        logger.addHandler(console_handler)
        logger.addHandler(_file_handler())

        logger.propagate = False

    return logger
