"""
hurlkit - command-line front ends for Hurl files.

Ships two entry points: ``hurl``, which resolves runner configuration from
flags, environment and variable files, and ``hurlfmt``, which parses, lints
and formats Hurl documents.
"""

from hurlkit.logging import (
    configure_logging,
    get_logger,
    is_debug_mode,
    log_entry_exit,
    log_error,
    set_debug_mode,
)
from hurlkit.version import __version__

__all__ = [
    "__version__",
    "configure_logging",
    "get_logger",
    "is_debug_mode",
    "log_entry_exit",
    "log_error",
    "set_debug_mode",
]
