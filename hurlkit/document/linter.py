"""Style rules for Hurl documents and their automatic fixes."""

from dataclasses import replace

from hurlkit.document.model import Document, Entry, LintIssue, Request, SourceLine
from hurlkit.document.parser import REQUEST_LINE


def lint(document: Document) -> list[LintIssue]:
    """Return the style findings of a document, in line order."""
    issues: list[LintIssue] = []
    request_lines = {entry.request.line.number for entry in document.entries}

    for line in document.source_lines():
        text = line.text
        if line.number in request_lines:
            match = REQUEST_LINE.match(text)
            if match.group("indent"):
                issues.append(LintIssue(line.number, 1, "Unnecessary space"))
            if match.group("sep") != " ":
                issues.append(
                    LintIssue(line.number, match.end("method") + 1, "One space")
                )
        stripped = text.rstrip()
        if stripped != text:
            issues.append(LintIssue(line.number, len(stripped) + 1, "Unnecessary space"))

    return issues


def _fix_line(line: SourceLine) -> SourceLine:
    return replace(line, text=line.text.rstrip())


def _fix_request(request: Request) -> Request:
    match = REQUEST_LINE.match(request.line.text)
    text = f"{request.method} {request.url}{match.group('rest').rstrip()}"
    return replace(request, line=replace(request.line, text=text))


def fix(document: Document) -> Document:
    """Return a copy of the document with every lint finding corrected."""
    return Document(
        header=tuple(_fix_line(line) for line in document.header),
        entries=tuple(
            Entry(
                _fix_request(entry.request),
                tuple(_fix_line(line) for line in entry.lines),
            )
            for entry in document.entries
        ),
    )
