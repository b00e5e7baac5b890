"""Process exit codes shared by the hurl and hurlfmt entry points."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes; CI scripts rely on these values."""

    SUCCESS = 0
    # Usage and validation errors, conflicting flags, check-mode findings
    FAILURE = 1
    # Unreadable input or document parse failure
    PARSE_ERROR = 2


__all__ = ["ExitCode"]
