"""Utility functions for the check harness."""

from .logging_utils import setup_logging, get_logger, LoggingContext, silence_logger

__all__ = [
    "setup_logging",
    "get_logger",
    "LoggingContext",
    "silence_logger",
]
