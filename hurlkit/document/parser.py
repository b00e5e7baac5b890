"""
Line-oriented parser for Hurl documents.

An entry starts at a request line (``METHOD URL``); every following line up to
the next request line belongs to that entry. Blank lines and ``#`` comments
may appear anywhere. Any other content before the first request is an error.
"""

import re

from hurlkit.document.model import Document, Entry, Request, SourceLine
from hurlkit.errors import DocumentParseError

METHODS = (
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "DELETE",
    "CONNECT",
    "OPTIONS",
    "TRACE",
    "PATCH",
    "LINK",
    "UNLINK",
    "PURGE",
    "LOCK",
    "UNLOCK",
    "PROPFIND",
    "VIEW",
)

REQUEST_LINE = re.compile(
    r"^(?P<indent>\s*)(?P<method>" + "|".join(METHODS) + r")(?P<sep>\s+)(?P<url>\S+)(?P<rest>.*)$"
)

LINE_SPLIT = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split text on LF or CRLF line endings."""
    return LINE_SPLIT.split(text)


def _is_trivia(text: str) -> bool:
    stripped = text.strip()
    return not stripped or stripped.startswith("#")


def parse(text: str) -> Document:
    """
    Parse a Hurl document.

    Args:
        text: Full document contents

    Returns:
        The parsed Document

    Raises:
        DocumentParseError: If content other than comments appears before
            the first request line
    """
    raw_lines = split_lines(text)
    if raw_lines and raw_lines[-1] == "":
        raw_lines.pop()

    header: list[SourceLine] = []
    entries: list[Entry] = []
    request = None
    body: list[SourceLine] = []

    for number, raw in enumerate(raw_lines, start=1):
        line = SourceLine(number, raw)
        match = REQUEST_LINE.match(raw)
        if match:
            if request is not None:
                entries.append(Entry(request, tuple(body)))
            request = Request(match.group("method"), match.group("url"), line)
            body = []
        elif request is not None:
            body.append(line)
        elif _is_trivia(raw):
            header.append(line)
        else:
            column = len(raw) - len(raw.lstrip()) + 1
            raise DocumentParseError(
                "Parsing Method: expecting an HTTP method",
                line=number,
                column=column,
            )

    if request is not None:
        entries.append(Entry(request, tuple(body)))

    return Document(header=tuple(header), entries=tuple(entries))
