"""
hurlkit Configuration Package - resolution of runner configuration.

This package turns command-line flags, environment variables and variable
files into the immutable CliOptions value consumed by the runner.
"""

from .globbing import expand_glob, expand_globs
from .options import CliOptions, OutputType, RawArguments, resolve_options
from .settings import (
    LoggingSettings,
    RunnerSettings,
    clear_settings_cache,
    get_logging_settings,
    get_runner_settings,
)
from .variables import Value, merge_variables, parse_variable, parse_variable_value

__all__ = [
    "CliOptions",
    "OutputType",
    "RawArguments",
    "resolve_options",
    "expand_glob",
    "expand_globs",
    "merge_variables",
    "parse_variable",
    "parse_variable_value",
    "Value",
    "RunnerSettings",
    "LoggingSettings",
    "get_runner_settings",
    "get_logging_settings",
    "clear_settings_cache",
]
