"""
Logging configuration for the notifier.
"""

import logging
from logging.handlers import RotatingFileHandler

from pumpnotifier.monitor.config import LOG_FILE


def setup_logging(log_file: str = LOG_FILE) -> logging.Logger:
    """
    Configure logging with console and file handlers.

    Returns:
        Configured logger instance
    """
    log_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(log_formatter)

    # Feed failures and delivery errors only, rotated at 10 MB
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
    )
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(log_formatter)

    logging.basicConfig(
        level=logging.INFO,
        handlers=[console_handler, file_handler],
    )

    # httpx logs every request at INFO; one per poll is noise
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger("pumpnotifier")
