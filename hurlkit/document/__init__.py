"""
Hurl document collaborators used by the formatter.

The formatter pipeline only depends on the DocumentToolkit protocol; the
line-oriented implementation shipped here is the default.
"""

from typing import Protocol

from hurlkit.document import linter, parser, render
from hurlkit.document.model import Document, Entry, LintIssue, Request, SourceLine


class DocumentToolkit(Protocol):
    """Parsing, linting and rendering operations consumed by the formatter."""

    def parse(self, text: str) -> Document: ...

    def lint(self, document: Document) -> list[LintIssue]: ...

    def fix(self, document: Document) -> Document: ...

    def format_text(self, document: Document, color: bool) -> str: ...

    def format_json(self, document: Document) -> str: ...

    def format_html(self, document: Document, standalone: bool) -> str: ...

    def format_ast(self, document: Document) -> str: ...


class LineToolkit:
    """Default toolkit backed by the line-oriented parser and renderers."""

    def parse(self, text: str) -> Document:
        return parser.parse(text)

    def lint(self, document: Document) -> list[LintIssue]:
        return linter.lint(document)

    def fix(self, document: Document) -> Document:
        return linter.fix(document)

    def format_text(self, document: Document, color: bool) -> str:
        return render.format_text(document, color)

    def format_json(self, document: Document) -> str:
        return render.format_json(document)

    def format_html(self, document: Document, standalone: bool) -> str:
        return render.format_html(document, standalone)

    def format_ast(self, document: Document) -> str:
        return render.format_ast(document)


__all__ = [
    "Document",
    "DocumentToolkit",
    "Entry",
    "LineToolkit",
    "LintIssue",
    "Request",
    "SourceLine",
]
