"""
Logging system for hurlkit.

This module provides a centralized logging configuration with stderr console
output, optional rotating file handling, and helper decorators.
"""

from hurlkit.logging.config import (
    configure_logging,
    get_logger,
    is_debug_mode,
    set_debug_mode,
)
from hurlkit.logging.helpers import log_entry_exit, log_error

__all__ = [
    # Configuration
    "configure_logging",
    "get_logger",
    "set_debug_mode",
    "is_debug_mode",
    # Helper methods
    "log_entry_exit",
    "log_error",
]
