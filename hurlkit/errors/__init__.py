"""
Error handling framework for hurlkit.

This module provides the exception hierarchy shared by the configuration
resolver and the formatter pipeline, together with the error code registry.
"""

from hurlkit.errors.error_codes import ErrorCodes
from hurlkit.errors.exceptions import (
    ConfigurationError,
    ConflictingFlagsError,
    DocumentParseError,
    GlobError,
    HurlkitError,
    InputError,
    InputNotFoundError,
    InvalidDirectoryError,
    InvalidNumberError,
    LintFindingsError,
    MissingFileError,
    OutputWriteError,
    UnreadableInputError,
    VariableParseError,
)

__all__ = [
    # Base exception
    "HurlkitError",
    # Configuration errors
    "ConfigurationError",
    "MissingFileError",
    "InvalidDirectoryError",
    "InvalidNumberError",
    "GlobError",
    "VariableParseError",
    "ConflictingFlagsError",
    # Input and document errors
    "InputError",
    "InputNotFoundError",
    "UnreadableInputError",
    "DocumentParseError",
    "LintFindingsError",
    # Unrecoverable
    "OutputWriteError",
    # Codes
    "ErrorCodes",
]
