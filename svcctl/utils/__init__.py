"""Utility functions and constants."""

from .constants import *
from .logging_setup import apply_log_level, setup_logging

__all__ = ["APP_NAME", "DEFAULT_LOG_LEVEL", "DEFAULT_TIMEOUT", "PACKAGE_TIMEOUT",
           "apply_log_level", "setup_logging"]
