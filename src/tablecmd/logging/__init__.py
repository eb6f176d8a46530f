"""Logging infrastructure for tablecmd.

This module provides structured logging with JSON output and context
tracking for command execution.
"""

from tablecmd.logging.filters import ContextFilter
from tablecmd.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
]
