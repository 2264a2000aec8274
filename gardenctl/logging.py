"""Logging configuration for the gardenctl package."""
import logging
import sys
from typing import Optional

from gardenctl.config import Config

NOISY_LOGGERS = ("kubernetes", "urllib3")


def setup_logger(name: Optional[str] = None, level: Optional[int] = None) -> logging.Logger:
    """
    Set up a logger with the specified name and log level.

    Logs go to stderr so that completion candidates on stdout stay clean.

    Args:
        name: The name of the logger (default: root logger)
        level: The logging level (default: Config.LOG_LEVEL)

    Returns:
        Configured logger instance
    """
    if level is None:
        level = logging.getLevelName(Config.LOG_LEVEL)
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Don't add handlers if they're already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(Config.LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(handler)

    # Disable debug logging for noisy libraries
    if level > logging.DEBUG:
        for noisy in NOISY_LOGGERS:
            logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger
