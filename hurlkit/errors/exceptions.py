"""
Exception hierarchy for hurlkit.

Every error raised while resolving the runner configuration or driving the
formatter pipeline derives from HurlkitError, so that the CLI layer can turn
it into a single human-readable message and an exit code. The only exception
outside this hierarchy is OutputWriteError: a failed write happens after all
work is done and aborts the process directly.
"""

from typing import Any, Optional

from hurlkit.errors.error_codes import ErrorCodes


class HurlkitError(Exception):
    """
    Base exception class for all hurlkit errors.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for reference and documentation
        details: Optional dictionary with additional error details
        suggestion: Optional suggestion text for how to fix the error
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestion = suggestion
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize error to a dictionary.

        Returns:
            Dictionary with all error information
        """
        return {
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "suggestion": self.suggestion,
        }


# --- Configuration Errors ---


class ConfigurationError(HurlkitError):
    """
    Base class for errors raised while resolving command-line configuration.

    A configuration error is terminal for the resolution call: no partially
    populated options value is ever returned.

    Examples:
        >>> raise InvalidNumberError(
        ...     message="connect-timeout option can not be parsed",
        ...     error_code=ErrorCodes.CONFIG_INVALID_NUMBER,
        ...     details={"option": "connect-timeout", "value": "abc"},
        ... )
    """

    pass


class MissingFileError(ConfigurationError):
    """Exception raised when a file named on the command line does not exist."""

    def __init__(self, message: str, path: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", ErrorCodes.CONFIG_FILE_NOT_FOUND)
        details = kwargs.pop("details", None) or {}
        details.setdefault("path", path)
        super().__init__(message, details=details, **kwargs)
        self.path = path


class InvalidDirectoryError(ConfigurationError):
    """Exception raised when a report directory can not be used or created."""

    def __init__(self, message: str, path: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", ErrorCodes.CONFIG_INVALID_DIRECTORY)
        details = kwargs.pop("details", None) or {}
        details.setdefault("path", path)
        super().__init__(message, details=details, **kwargs)
        self.path = path


class InvalidNumberError(ConfigurationError):
    """Exception raised when a numeric option value can not be parsed."""

    def __init__(self, message: str, option: str, value: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", ErrorCodes.CONFIG_INVALID_NUMBER)
        super().__init__(
            message, details={"option": option, "value": value}, **kwargs
        )
        self.option = option
        self.value = value


class GlobError(ConfigurationError):
    """Exception raised when a glob pattern is invalid or can not be expanded."""

    def __init__(self, message: str, pattern: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", ErrorCodes.CONFIG_GLOB_FAILED)
        details = kwargs.pop("details", None) or {}
        details.setdefault("pattern", pattern)
        super().__init__(message, details=details, **kwargs)
        self.pattern = pattern


class VariableParseError(ConfigurationError):
    """
    Exception raised when a variable assignment can not be parsed.

    When the assignment comes from a variables file, ``line`` holds the
    1-based line number and ``source`` the file path.
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        source: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("error_code", ErrorCodes.CONFIG_VARIABLE_PARSE_FAILED)
        super().__init__(
            message, details={"line": line, "source": source}, **kwargs
        )
        self.line = line
        self.source = source


class ConflictingFlagsError(ConfigurationError):
    """Exception raised when mutually exclusive flags are given together."""

    def __init__(self, message: str, flags: tuple[str, ...], **kwargs: Any) -> None:
        kwargs.setdefault("error_code", ErrorCodes.CONFIG_CONFLICTING_FLAGS)
        super().__init__(message, details={"flags": list(flags)}, **kwargs)
        self.flags = flags


# --- Input Errors ---


class InputError(HurlkitError):
    """Base class for errors acquiring the formatter input."""

    pass


class InputNotFoundError(InputError):
    """Exception raised when the formatter input file does not exist."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", ErrorCodes.INPUT_NOT_FOUND)
        super().__init__(message, **kwargs)


class UnreadableInputError(InputError):
    """Exception raised when the input exists but can not be read or decoded."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", ErrorCodes.INPUT_UNREADABLE)
        super().__init__(message, **kwargs)


# --- Document Errors ---


class DocumentParseError(HurlkitError):
    """
    Exception raised by the document parser.

    Attributes:
        line: 1-based line of the error
        column: 1-based column of the error
    """

    def __init__(self, message: str, line: int, column: int = 1, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", ErrorCodes.PARSE_FAILED)
        super().__init__(message, details={"line": line, "column": column}, **kwargs)
        self.line = line
        self.column = column


class LintFindingsError(HurlkitError):
    """Exception signalling that check mode ran; carries the number of findings."""

    def __init__(self, message: str, count: int, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", ErrorCodes.LINT_FINDINGS_PRESENT)
        super().__init__(message, details={"count": count}, **kwargs)
        self.count = count


# --- Unrecoverable Errors ---


class OutputWriteError(OSError):
    """
    Exception raised when formatted output can not be written.

    Not a HurlkitError: the pipeline does not translate it into an exit code
    and lets it abort the process.
    """

    def __init__(self, destination: str, cause: OSError) -> None:
        super().__init__(f"Issue writing to {destination}: {cause}")
        self.destination = destination
        self.cause = cause
