"""Core Stockroom utilities.

This module exports core utilities for use throughout the application.
"""

from stockroom.core.config import Settings, get_settings
from stockroom.core.errors import ErrorKind, Failure
from stockroom.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "ErrorKind",
    "Failure",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "bind_correlation_id",
    "clear_context",
]
