"""Logging configuration helpers."""

import logging
from pathlib import Path
from typing import Optional, Union

from .constants import APP_NAME, DEFAULT_LOG_LEVEL, LOG_FORMAT

# Level names accepted in service config files
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": logging.CRITICAL,
    "CRITICAL": logging.CRITICAL,
}


def level_from_name(name: Optional[str]) -> int:
    """Map a config log level name to a logging level.

    Args:
        name: Level name, case-insensitive

    Returns:
        logging level, INFO for empty or unknown names
    """
    if not name or not isinstance(name, str):
        name = DEFAULT_LOG_LEVEL
    return LOG_LEVELS.get(name.strip().upper(), logging.INFO)


def setup_logging(level: Union[str, int] = DEFAULT_LOG_LEVEL, log_file: Optional[Path] = None):
    """Set up application logging.

    Args:
        level: Level name from a service config, or a logging level
        log_file: Optional file to log to in addition to stderr
    """
    if isinstance(level, str):
        level = level_from_name(level)

    handlers = [logging.StreamHandler()]
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)


def apply_log_level(name: Optional[str]) -> int:
    """Set the svcctl package logger to a config log level.

    Args:
        name: Level name from a ServiceConfig

    Returns:
        The logging level that was applied
    """
    level = level_from_name(name)
    logging.getLogger(APP_NAME).setLevel(level)
    if name and (not isinstance(name, str) or name.strip().upper() not in LOG_LEVELS):
        logging.getLogger(__name__).warning(f"Unknown log level {name!r}, using INFO")
    return level
