"""
Glob expansion for the ``--glob`` option.

Patterns are expanded one path component at a time against ``os.scandir``,
so matches come back in filesystem enumeration order. Unlike the standard
``glob`` module, a directory that can not be read aborts the expansion
instead of being silently skipped.

Supported syntax per component: ``*``, ``?`` and ``[...]`` character classes
(``[!...]`` negates). A component made only of ``**`` matches zero or more
directories. Entries starting with a dot are only matched by components that
start with a dot.
"""

import fnmatch
import os
import re
from collections.abc import Iterable, Iterator

from hurlkit.errors import GlobError
from hurlkit.logging import get_logger, log_entry_exit

logger = get_logger(__name__)

_MAGIC_CHECK = re.compile(r"[*?[]")

_GLOB_FAILURE = "Failed to read glob pattern"


def _has_magic(text: str) -> bool:
    return _MAGIC_CHECK.search(text) is not None


def _check_brackets(component: str, pattern: str) -> None:
    i = 0
    while i < len(component):
        if component[i] == "[":
            j = i + 1
            if j < len(component) and component[j] == "!":
                j += 1
            # A leading "]" is a literal member of the class
            if j < len(component) and component[j] == "]":
                j += 1
            close = component.find("]", j)
            if close == -1:
                raise GlobError(
                    f"{_GLOB_FAILURE}: unterminated character class in '{pattern}'",
                    pattern=pattern,
                )
            i = close + 1
        else:
            i += 1


def validate_pattern(pattern: str) -> None:
    """Reject patterns that can not be expanded.

    Raises:
        GlobError: On an empty pattern, an unterminated character class, or a
            ``**`` that is not a whole path component
    """
    if not pattern:
        raise GlobError(f"{_GLOB_FAILURE}: empty pattern", pattern=pattern)

    for component in pattern.split("/"):
        if "**" in component and component != "**":
            raise GlobError(
                f"{_GLOB_FAILURE}: recursive wildcards must form a single path "
                f"component in '{pattern}'",
                pattern=pattern,
            )
        _check_brackets(component, pattern)


def _scan(directory: str, pattern: str) -> list[os.DirEntry]:
    try:
        with os.scandir(directory or os.curdir) as entries:
            return list(entries)
    except OSError as e:
        raise GlobError(
            f"{_GLOB_FAILURE}: can not read directory '{directory or os.curdir}'",
            pattern=pattern,
            details={"pattern": pattern, "directory": directory, "error": str(e)},
        ) from e


def _is_hidden_mismatch(name: str, component: str) -> bool:
    return name.startswith(".") and not component.startswith(".")


def _descendants(directory: str, pattern: str, dirs_only: bool) -> Iterator[str]:
    for entry in _scan(directory, pattern):
        if entry.name.startswith("."):
            continue
        path = os.path.join(directory, entry.name)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            raise GlobError(
                f"{_GLOB_FAILURE}: can not read entry '{path}'", pattern=pattern
            ) from e
        if is_dir or not dirs_only:
            yield path
        if is_dir:
            yield from _descendants(path, pattern, dirs_only)


def _walk(base: str, parts: list[str], pattern: str) -> Iterator[str]:
    if not parts:
        yield base
        return

    head, rest = parts[0], parts[1:]

    if head == "**":
        if not rest:
            yield from _descendants(base, pattern, dirs_only=False)
            return
        yield from _walk(base, rest, pattern)
        for directory in _descendants(base, pattern, dirs_only=True):
            yield from _walk(directory, rest, pattern)
        return

    if not _has_magic(head):
        candidate = os.path.join(base, head)
        if rest:
            if os.path.isdir(candidate):
                yield from _walk(candidate, rest, pattern)
        elif os.path.lexists(candidate):
            yield candidate
        return

    for entry in _scan(base, pattern):
        if _is_hidden_mismatch(entry.name, head):
            continue
        if not fnmatch.fnmatchcase(entry.name, head):
            continue
        path = os.path.join(base, entry.name)
        if not rest:
            yield path
            continue
        try:
            is_dir = entry.is_dir()
        except OSError as e:
            raise GlobError(
                f"{_GLOB_FAILURE}: can not read entry '{path}'", pattern=pattern
            ) from e
        if is_dir:
            yield from _walk(path, rest, pattern)


def expand_glob(pattern: str) -> list[str]:
    """Expand a single pattern into the list of matching paths.

    Raises:
        GlobError: If the pattern is invalid or a directory can not be read
    """
    validate_pattern(pattern)

    base = "/" if pattern.startswith("/") else ""
    parts = [part for part in pattern.split("/") if part]

    return list(_walk(base, parts, pattern))


@log_entry_exit(logger=logger, log_args=True, log_result=True)
def expand_globs(patterns: Iterable[str]) -> list[str]:
    """Expand patterns in order, concatenating their matches.

    The whole expansion fails on the first invalid pattern or unreadable
    directory; no partial list is returned.
    """
    filenames: list[str] = []
    for pattern in patterns:
        matches = expand_glob(pattern)
        logger.debug(f"Glob '{pattern}' matched {len(matches)} path(s)")
        filenames.extend(matches)
    return filenames
