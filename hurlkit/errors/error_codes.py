"""
Central registry of error codes for hurlkit.

Error codes follow the pattern: CATEGORY-ErrorName

Categories:
- CONFIG: Command-line configuration resolution errors
- INPUT: Input acquisition errors for the formatter
- PARSE: Document parsing errors
- LINT: Lint findings reported in check mode

Usage:
    from hurlkit.errors.error_codes import ErrorCodes

    raise InvalidNumberError(
        message="max_time option can not be parsed",
        error_code=ErrorCodes.CONFIG_INVALID_NUMBER,
    )
"""


class ErrorCodes:
    """Central registry of error codes for consistent error handling."""

    # Configuration errors
    CONFIG_FILE_NOT_FOUND = "CONFIG-FileNotFound"
    CONFIG_INVALID_DIRECTORY = "CONFIG-InvalidDirectory"
    CONFIG_INVALID_NUMBER = "CONFIG-InvalidNumber"
    CONFIG_GLOB_FAILED = "CONFIG-GlobFailed"
    CONFIG_VARIABLE_PARSE_FAILED = "CONFIG-VariableParseFailed"
    CONFIG_CONFLICTING_FLAGS = "CONFIG-ConflictingFlags"
    CONFIG_INVALID_FORMAT = "CONFIG-InvalidFormat"

    # Input errors
    INPUT_NOT_FOUND = "INPUT-NotFound"
    INPUT_UNREADABLE = "INPUT-Unreadable"

    # Parse errors
    PARSE_FAILED = "PARSE-Failed"

    # Lint errors
    LINT_FINDINGS_PRESENT = "LINT-FindingsPresent"
