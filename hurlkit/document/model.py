"""Parsed structure of a Hurl document."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLine:
    """One physical line of the source, numbered from 1."""

    number: int
    text: str


@dataclass(frozen=True)
class Request:
    method: str
    url: str
    line: SourceLine


@dataclass(frozen=True)
class Entry:
    """A request line followed by the lines that belong to it."""

    request: Request
    lines: tuple[SourceLine, ...] = ()


@dataclass(frozen=True)
class Document:
    """A Hurl document: leading comment/blank lines, then entries."""

    header: tuple[SourceLine, ...] = ()
    entries: tuple[Entry, ...] = ()

    def source_lines(self) -> list[SourceLine]:
        """All lines in source order."""
        lines = list(self.header)
        for entry in self.entries:
            lines.append(entry.request.line)
            lines.extend(entry.lines)
        return lines


@dataclass(frozen=True)
class LintIssue:
    """A style finding, located by 1-based line and column."""

    line: int
    column: int
    message: str
