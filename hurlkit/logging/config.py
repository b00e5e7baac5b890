"""
Logging setup for the hurl and hurlfmt commands.

All records of the ``hurlkit`` logger hierarchy go to stderr, since stdout
carries formatted documents and run summaries. ``--verbose`` switches the
hierarchy to DEBUG; a rotating log file can be added for long sessions.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

_ROOT_LOGGER = "hurlkit"

_DEBUG_MODE = False

_CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"
_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s.%(funcName)s:%(lineno)d | %(message)s"
)

_RESET = "\033[0m"
_LEVEL_COLORS = {
    logging.DEBUG: "\033[94m",
    logging.INFO: "\033[92m",
    logging.WARNING: "\033[93m",
    logging.ERROR: "\033[91m",
    logging.CRITICAL: "\033[91m\033[1m",
}


class ColorFormatter(logging.Formatter):
    """Formatter that colors the level name with ANSI codes."""

    def __init__(self, fmt: Optional[str] = None, use_color: bool = True) -> None:
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno) if self.use_color else None
        if color is None:
            return super().format(record)
        # Format a copy; other handlers must see the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{_RESET}"
        return super().format(colored)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually the caller's ``__name__``)."""
    return logging.getLogger(name)


def set_debug_mode(enabled: bool) -> None:
    """Switch the hurlkit loggers between DEBUG and INFO."""
    global _DEBUG_MODE
    _DEBUG_MODE = enabled
    logging.getLogger(_ROOT_LOGGER).setLevel(logging.DEBUG if enabled else logging.INFO)


def is_debug_mode() -> bool:
    return _DEBUG_MODE


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _file_handler(
    log_dir: Union[str, Path], level: int, max_bytes: int, backup_count: int, fmt: str
) -> logging.Handler:
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filename=directory / "hurlkit.log",
        maxBytes=max_bytes,
        backupCount=backup_count,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    log_dir: Optional[Union[str, Path]] = None,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    color: bool = True,
    config: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Install the stderr console handler, and a file handler when ``log_dir`` is set.

    Calling it again replaces the handlers installed by a previous call.

    Args:
        log_dir: Directory receiving ``hurlkit.log``; no file output when None
        console_level: Minimum level printed on stderr (DEBUG in debug mode)
        file_level: Minimum level written to the log file
        max_file_size_mb: Size at which the log file is rotated
        backup_count: Number of rotated files kept
        color: Color level names on the console
        config: Overrides: ``debug_mode``, ``console_format``, ``file_format``
    """
    config = config or {}
    logger = logging.getLogger(_ROOT_LOGGER)
    _reset_handlers(logger)

    debug_mode = config.get("debug_mode", is_debug_mode())
    set_debug_mode(debug_mode)
    if debug_mode:
        console_level = logging.DEBUG

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(
        ColorFormatter(config.get("console_format", _CONSOLE_FORMAT), use_color=color)
    )
    logger.addHandler(console)

    if log_dir:
        logger.addHandler(
            _file_handler(
                log_dir,
                file_level,
                max_file_size_mb * 1024 * 1024,
                backup_count,
                config.get("file_format", _FILE_FORMAT),
            )
        )

    logger.debug(
        f"Logging configured (console: {logging.getLevelName(console_level)}, "
        f"file: {log_dir or 'disabled'})"
    )
