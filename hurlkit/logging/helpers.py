"""
Logging decorators and helpers.

``log_entry_exit`` traces calls to the resolution and pipeline steps at DEBUG
level, which ``--verbose`` makes visible; ``log_error`` records a failure
before it is turned into a user-facing message.
"""

import functools
import inspect
import logging
import time
import traceback
from typing import Any, Callable, Dict, Optional, TypeVar, Union, cast

from hurlkit.logging.config import get_logger

F = TypeVar("F", bound=Callable[..., Any])

# Longest rendered result kept in an exit message
_MAX_RESULT_LENGTH = 1000


def _render(value: Any) -> str:
    if isinstance(value, (bool, int, float, str)):
        return str(value)
    return repr(value)


def _describe_call(func: Callable[..., Any], args: tuple, kwargs: dict) -> str:
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        parts = [_render(arg) for arg in args]
        parts += [f"{name}={_render(value)}" for name, value in kwargs.items()]
    else:
        parts = [f"{name}={_render(value)}" for name, value in bound.arguments.items()]
    return ", ".join(parts)


def log_entry_exit(
    logger: Optional[logging.Logger] = None,
    log_args: bool = False,
    log_result: bool = False,
    entry_level: int = logging.DEBUG,
    exit_level: int = logging.DEBUG,
    error_level: int = logging.DEBUG,
) -> Callable[[F], F]:
    """
    Decorator logging when a function starts, returns or raises.

    Exceptions are logged at ``error_level`` and re-raised unchanged; they
    are expected outcomes here (invalid flags, unreadable input) and are
    reported to the user by the CLI layer.

    Args:
        logger: Logger to use (default: the logger of the function's module)
        log_args: Include the call arguments in the entry message
        log_result: Include the return value in the exit message
        entry_level: Level of the entry message
        exit_level: Level of the exit message
        error_level: Level of the failure message
    """

    def decorator(func: F) -> F:
        log = logger or get_logger(func.__module__)
        name = func.__qualname__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if log_args and (args or kwargs):
                log.log(entry_level, f"Entering {name} with args: {_describe_call(func, args, kwargs)}")
            else:
                log.log(entry_level, f"Entering {name}")

            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.log(error_level, f"Error in {name} after {time.perf_counter() - started:.3f}s: {e}")
                raise

            message = f"Exiting {name} after {time.perf_counter() - started:.3f}s"
            if log_result:
                rendered = _render(result)
                if len(rendered) > _MAX_RESULT_LENGTH:
                    rendered = rendered[: _MAX_RESULT_LENGTH - 3] + "..."
                message += f" with result: {rendered}"
            log.log(exit_level, message)
            return result

        return cast(F, wrapper)

    return decorator


def log_error(
    exception: Union[Exception, str],
    logger: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
    include_traceback: bool = False,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log an exception (or a plain message) as ``ExceptionType: message``.

    Args:
        exception: The exception, or an error message
        logger: Logger to use (default: the caller's module logger)
        level: Level of the record
        include_traceback: Append the formatted traceback of the exception
        extra: Extra attributes set on the log record
    """
    if logger is None:
        caller = inspect.currentframe()
        caller = caller.f_back if caller else None
        module_name = caller.f_globals.get("__name__", "__main__") if caller else "__main__"
        logger = get_logger(module_name)

    if not isinstance(exception, Exception):
        logger.log(level, str(exception), extra=extra)
        return

    message = f"{type(exception).__name__}: {exception}"
    if include_traceback:
        message += "\n" + "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))
    logger.log(level, message, extra=extra)
