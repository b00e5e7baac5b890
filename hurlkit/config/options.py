"""
Runner configuration resolution.

Turns the raw command-line flag values of the ``hurl`` entry point into one
immutable CliOptions value. Resolution is all-or-nothing: the first invalid
value raises a ConfigurationError and nothing is returned.

The only stateful interactions (environment lookup, terminal detection and
file-system checks) are either injected or limited to explicit path checks,
so that resolution is reproducible in tests.
"""

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Optional

from rich.console import Console

from hurlkit.config.globbing import expand_globs
from hurlkit.config.settings import RunnerSettings, get_runner_settings
from hurlkit.config.variables import Value, merge_variables
from hurlkit.errors import (
    ConflictingFlagsError,
    InvalidDirectoryError,
    InvalidNumberError,
    MissingFileError,
)
from hurlkit.logging import get_logger, log_entry_exit

logger = get_logger(__name__)

# Sentinel accepted by --max-redirs for an unlimited number of redirects
UNLIMITED_REDIRECTS = "-1"


class OutputType(str, Enum):
    """What the runner writes once a file has been executed."""

    RESPONSE_BODY = "response-body"
    JSON = "json"
    NO_OUTPUT = "no-output"


# Pairs of flags that can not be given together, by RawArguments field name
FLAG_CONFLICTS: tuple[tuple[str, str], ...] = (
    ("color", "no_color"),
    ("json", "no_output"),
    ("interactive", "to_entry"),
)

_FLAG_NAMES = {
    "color": "--color",
    "no_color": "--no-color",
    "json": "--json",
    "no_output": "--no-output",
    "interactive": "--interactive",
    "to_entry": "--to-entry",
}


@dataclass(frozen=True)
class RawArguments:
    """Raw flag values of the runner command, before any validation.

    Numeric options are kept as the strings typed by the user. Construction
    enforces the mutually exclusive flag pairs, so conflicting flags are
    rejected before any resolution logic runs.
    """

    inputs: tuple[str, ...] = ()
    cacert: Optional[str] = None
    color: bool = False
    compressed: bool = False
    connect_timeout: Optional[str] = None
    cookie: Optional[str] = None
    cookie_jar: Optional[str] = None
    fail_at_end: bool = False
    file_root: Optional[str] = None
    location: bool = False
    globs: tuple[str, ...] = ()
    include: bool = False
    ignore_asserts: bool = False
    insecure: bool = False
    interactive: bool = False
    json: bool = False
    max_redirs: Optional[str] = None
    max_time: Optional[str] = None
    no_color: bool = False
    no_output: bool = False
    noproxy: Optional[str] = None
    output: Optional[str] = None
    progress: bool = False
    proxy: Optional[str] = None
    report_junit: Optional[str] = None
    report_html: Optional[str] = None
    summary: bool = False
    test: bool = False
    to_entry: Optional[str] = None
    user: Optional[str] = None
    user_agent: Optional[str] = None
    variables: tuple[str, ...] = ()
    variables_file: Optional[str] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        for first, second in FLAG_CONFLICTS:
            if _is_present(getattr(self, first)) and _is_present(getattr(self, second)):
                flags = (_FLAG_NAMES[first], _FLAG_NAMES[second])
                raise ConflictingFlagsError(
                    f"The argument '{flags[0]}' cannot be used with '{flags[1]}'",
                    flags=flags,
                )


def _is_present(value: object) -> bool:
    return value is not None and value is not False


@dataclass(frozen=True)
class CliOptions:
    """Resolved runner configuration; read-only once built."""

    cacert_file: Optional[str] = None
    color: bool = False
    compressed: bool = False
    connect_timeout: timedelta = timedelta(seconds=300)
    cookie_input_file: Optional[str] = None
    cookie_output_file: Optional[str] = None
    fail_fast: bool = True
    file_root: Optional[str] = None
    follow_location: bool = False
    glob_files: list[str] = field(default_factory=list)
    html_dir: Optional[Path] = None
    ignore_asserts: bool = False
    include: bool = False
    insecure: bool = False
    interactive: bool = False
    junit_file: Optional[str] = None
    max_redirect: Optional[int] = 50
    no_proxy: Optional[str] = None
    output: Optional[str] = None
    output_type: OutputType = OutputType.RESPONSE_BODY
    progress: bool = False
    proxy: Optional[str] = None
    summary: bool = False
    timeout: timedelta = timedelta(seconds=300)
    to_entry: Optional[int] = None
    user: Optional[str] = None
    user_agent: Optional[str] = None
    variables: dict[str, Value] = field(default_factory=dict)
    verbose: bool = False


def stdout_is_terminal() -> bool:
    """Whether standard output is attached to an interactive terminal."""
    return Console().is_terminal


def _parse_unsigned(value: str) -> Optional[int]:
    """Parse ASCII digits with an optional leading '+'; None when not a count."""
    digits = value[1:] if value.startswith("+") else value
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(digits)


def resolve_cacert(path: Optional[str]) -> Optional[str]:
    """Check that the CA certificate, when given, is an existing regular file."""
    if path is None:
        return None
    if not Path(path).is_file():
        raise MissingFileError(f"File {path} does not exist", path=path)
    return path


def resolve_color(
    color: bool, no_color: bool, stdout_is_tty: Callable[[], bool]
) -> bool:
    """Explicit --color / --no-color win; otherwise color follows the terminal."""
    if color:
        return True
    if no_color:
        return False
    return stdout_is_tty()


def resolve_timeout(value: Optional[str], option: str, default_seconds: int) -> timedelta:
    """Parse a timeout given as a non-negative number of seconds."""
    if value is None:
        return timedelta(seconds=default_seconds)
    seconds = _parse_unsigned(value)
    if seconds is None:
        raise InvalidNumberError(
            f"{option} option can not be parsed", option=option, value=value
        )
    try:
        return timedelta(seconds=seconds)
    except OverflowError as e:
        # Beyond timedelta.max
        raise InvalidNumberError(
            f"{option} option can not be parsed", option=option, value=value
        ) from e


def resolve_max_redirect(value: Optional[str], default: int = 50) -> Optional[int]:
    """Translate --max-redirs into a redirect limit.

    Returns the default when the flag is absent, None (unlimited) for ``-1``
    and the parsed count otherwise.
    """
    if value is None:
        return default
    if value == UNLIMITED_REDIRECTS:
        return None
    count = _parse_unsigned(value)
    if count is None:
        raise InvalidNumberError(
            "max_redirs option can not be parsed", option="max-redirs", value=value
        )
    return count


def resolve_to_entry(value: Optional[str]) -> Optional[int]:
    """Parse the 1-based --to-entry cutoff.

    Any unsigned count is accepted, ``0`` included; what a zero cutoff means
    is left to the runner.
    """
    if value is None:
        return None
    entry = _parse_unsigned(value)
    if entry is None:
        raise InvalidNumberError(
            "Invalid value for option --to-entry - must be a positive integer!",
            option="to-entry",
            value=value,
        )
    return entry


def resolve_html_dir(value: Optional[str]) -> Optional[Path]:
    """Reuse or create the HTML report directory.

    A missing directory is created with a single ``mkdir`` (no parents); an
    existing path that is not a directory is rejected.
    """
    if value is None:
        return None

    path = Path(value)
    if not path.exists():
        try:
            os.mkdir(path)
        except OSError as e:
            raise InvalidDirectoryError(
                f"Html dir {path} can not be created", path=str(path)
            ) from e
        logger.debug(f"Created html report directory {path}")
        return path

    if path.is_dir():
        return path

    raise InvalidDirectoryError(f"{path} is not a valid directory", path=str(path))


def resolve_output_type(raw: RawArguments) -> OutputType:
    if raw.json:
        return OutputType.JSON
    if raw.no_output or raw.test:
        return OutputType.NO_OUTPUT
    return OutputType.RESPONSE_BODY


@log_entry_exit(logger=logger)
def resolve_options(
    raw: RawArguments,
    environ: Optional[Mapping[str, str]] = None,
    stdout_is_tty: Optional[Callable[[], bool]] = None,
    settings: Optional[RunnerSettings] = None,
) -> CliOptions:
    """
    Resolve raw runner flags into a CliOptions value.

    Args:
        raw: Raw flag values
        environ: Environment used for prefixed variables (default: os.environ)
        stdout_is_tty: Terminal detection used when no color flag is given
        settings: Built-in defaults (default: cached RunnerSettings)

    Returns:
        The resolved, immutable configuration

    Raises:
        ConfigurationError: On the first missing file, unparsable number,
            invalid directory, glob failure or variable parse failure
    """
    environ = os.environ if environ is None else environ
    stdout_is_tty = stdout_is_tty or stdout_is_terminal
    settings = settings or get_runner_settings()

    cacert_file = resolve_cacert(raw.cacert)
    color = resolve_color(raw.color, raw.no_color, stdout_is_tty)
    connect_timeout = resolve_timeout(
        raw.connect_timeout, "connect-timeout", settings.connect_timeout_seconds
    )
    glob_files = expand_globs(raw.globs)
    html_dir = resolve_html_dir(raw.report_html)
    max_redirect = resolve_max_redirect(raw.max_redirs, settings.max_redirect)
    timeout = resolve_timeout(raw.max_time, "max_time", settings.timeout_seconds)
    to_entry = resolve_to_entry(raw.to_entry)
    variables = merge_variables(
        environ,
        raw.variables_file,
        raw.variables,
        prefix=settings.variable_env_prefix,
    )

    return CliOptions(
        cacert_file=cacert_file,
        color=color,
        compressed=raw.compressed,
        connect_timeout=connect_timeout,
        cookie_input_file=raw.cookie,
        cookie_output_file=raw.cookie_jar,
        fail_fast=not raw.fail_at_end,
        file_root=raw.file_root,
        follow_location=raw.location,
        glob_files=glob_files,
        html_dir=html_dir,
        ignore_asserts=raw.ignore_asserts,
        include=raw.include,
        insecure=raw.insecure,
        interactive=raw.interactive,
        junit_file=raw.report_junit,
        max_redirect=max_redirect,
        # Populated from --proxy, not --noproxy
        no_proxy=raw.proxy,
        output=raw.output,
        output_type=resolve_output_type(raw),
        progress=raw.progress or raw.test,
        proxy=raw.proxy,
        summary=raw.summary or raw.test,
        timeout=timeout,
        to_entry=to_entry,
        user=raw.user,
        user_agent=raw.user_agent,
        variables=variables,
        verbose=raw.verbose or raw.interactive,
    )
