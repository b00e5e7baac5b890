"""
Hurl variables: value parsing and merging of variable sources.

Variables come from three sources, applied as ordered overlays (lowest to
highest precedence):

1. Environment variables carrying the variable prefix (``HURL_`` by default),
   with the prefix stripped
2. A variables file (``--variables-file``), in line order
3. Inline ``--variable NAME=VALUE`` assignments, left to right

A later overlay replaces any earlier value with the same name.
"""

import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Optional, Union

from hurlkit.errors import MissingFileError, VariableParseError
from hurlkit.logging import get_logger

logger = get_logger(__name__)

Value = Union[bool, int, float, str, None]

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
_FLOAT_PATTERN = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")

_TYPE_ALIASES = {
    "string": "string",
    "str": "string",
    "int": "int",
    "integer": "int",
    "float": "float",
    "number": "number",
    "bool": "bool",
    "boolean": "bool",
    "null": "null",
}


def parse_variable_value(token: str) -> Value:
    """Infer a typed value from its textual representation.

    ``true``/``false`` become booleans, ``null`` becomes None, integer and
    float literals become numbers, and a double-quoted token becomes the
    string between the quotes. Anything else is kept as a string.

    Raises:
        VariableParseError: If the token opens a double quote without closing it
    """
    if token == "true":
        return True
    if token == "false":
        return False
    if token == "null":
        return None
    if _INTEGER_PATTERN.match(token):
        return int(token)
    if _FLOAT_PATTERN.match(token):
        return float(token)
    if token.startswith('"'):
        if len(token) >= 2 and token.endswith('"'):
            return token[1:-1]
        raise VariableParseError("Value should end with a double quote")
    return token


def _coerce(value: str, type_name: str) -> Value:
    kind = _TYPE_ALIASES.get(type_name.lower())
    if kind is None:
        raise VariableParseError(
            f"Unknown variable type '{type_name}'",
            suggestion="Use one of: " + ", ".join(sorted(set(_TYPE_ALIASES))),
        )

    if kind == "string":
        return value
    if kind == "int" and _INTEGER_PATTERN.match(value):
        return int(value)
    if kind == "float" and _FLOAT_PATTERN.match(value):
        return float(value)
    if kind == "number":
        if _INTEGER_PATTERN.match(value):
            return int(value)
        if _FLOAT_PATTERN.match(value):
            return float(value)
    if kind == "bool" and value in ("true", "false"):
        return value == "true"
    if kind == "null" and value in ("null", ""):
        return None

    raise VariableParseError(f"Value '{value}' is not a valid {type_name}")


def parse_variable(assignment: str) -> tuple[str, Value]:
    """Parse a ``name=value`` or ``name:type=value`` assignment.

    Raises:
        VariableParseError: If the assignment has no ``=``, an empty name, or
            a value that can not be parsed
    """
    name, sep, raw_value = assignment.partition("=")
    if not sep:
        raise VariableParseError(f"Missing value for variable {assignment}!")

    type_name = None
    if ":" in name:
        name, _, type_name = name.rpartition(":")

    if not name:
        raise VariableParseError(f"Missing name for variable {assignment}!")

    if type_name is None:
        return name, parse_variable_value(raw_value)
    return name, _coerce(raw_value, type_name)


def env_variables(environ: Mapping[str, str], prefix: str = "HURL_") -> dict[str, Value]:
    """Collect variables from environment entries that carry ``prefix``."""
    variables: dict[str, Value] = {}
    for env_name, env_value in environ.items():
        if not env_name.startswith(prefix):
            continue
        name = env_name[len(prefix) :]
        try:
            variables[name] = parse_variable_value(env_value)
        except VariableParseError as e:
            raise VariableParseError(
                f"Can not parse environment variable {env_name}: {e.message}",
                source=env_name,
            ) from e
    return variables


def read_variables_file(path: Union[str, Path]) -> list[tuple[str, Value]]:
    """Read ordered assignments from a variables file.

    Lines are trimmed; blank lines and lines starting with ``#`` are skipped.

    Raises:
        MissingFileError: If the file does not exist
        VariableParseError: If the file can not be read, or a line can not be
            decoded or parsed; the error names the 1-based line number and
            the file path
    """
    path = Path(path)
    if not path.exists():
        raise MissingFileError(f"Properties file {path} does not exist", path=str(path))

    try:
        contents = path.read_bytes()
    except OSError as e:
        # Directories and unreadable files fail on their first line
        raise VariableParseError(
            f"Can not parse line 1 of {path}", line=1, source=str(path)
        ) from e

    assignments: list[tuple[str, Value]] = []
    for index, raw_line in enumerate(contents.splitlines(), start=1):
        try:
            line = raw_line.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise VariableParseError(
                f"Can not parse line {index} of {path}",
                line=index,
                source=str(path),
            ) from e

        if not line or line.startswith("#"):
            continue

        try:
            assignments.append(parse_variable(line))
        except VariableParseError as e:
            raise VariableParseError(
                f"Can not parse line {index} of {path}: {e.message}",
                line=index,
                source=str(path),
            ) from e

    logger.debug(f"Read {len(assignments)} variable(s) from {path}")
    return assignments


def merge_variables(
    environ: Mapping[str, str],
    variables_file: Optional[Union[str, Path]] = None,
    inline: Iterable[str] = (),
    prefix: str = "HURL_",
) -> dict[str, Value]:
    """Merge the three variable sources into one mapping.

    Args:
        environ: Environment mapping, scanned for ``prefix`` entries
        variables_file: Optional path to a variables file
        inline: ``NAME=VALUE`` assignments in command-line order
        prefix: Environment variable prefix

    Returns:
        Mapping of variable name to typed value, inline assignments taking
        precedence over the file, and the file over the environment
    """
    variables: dict[str, Value] = {}

    variables.update(env_variables(environ, prefix))

    if variables_file is not None:
        variables.update(read_variables_file(variables_file))

    variables.update(parse_variable(assignment) for assignment in inline)

    logger.debug(f"Resolved {len(variables)} variable(s)")
    return variables
