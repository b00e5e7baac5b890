"""
Source-annotated diagnostics for the formatter.

Parse errors and lint findings are printed to stderr with the offending source
line and a caret under the reported column:

    error: Parsing Method: expecting an HTTP method
      --> api.hurl:3:1
       |
     3 | GEX http://localhost
       | ^
       |
"""

from collections.abc import Sequence
from typing import Optional

from rich.console import Console
from rich.markup import escape

from hurlkit.document.model import LintIssue
from hurlkit.errors import DocumentParseError
from hurlkit.logging import get_logger

logger = get_logger(__name__)


class DiagnosticReporter:
    """Prints diagnostics against the lines of one source."""

    def __init__(
        self,
        lines: Sequence[str],
        color: bool,
        filename: Optional[str] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.lines = lines
        self.color = color
        self.filename = filename
        self.console = console or Console(
            stderr=True,
            force_terminal=color,
            color_system="standard" if color else None,
            highlight=False,
            soft_wrap=True,
        )

    def _render(self, level: str, style: str, message: str, line: int, column: int) -> None:
        gutter = " " * len(str(line))
        location = f"{self.filename}:{line}:{column}" if self.filename else f"{line}:{column}"
        source = self.lines[line - 1] if 0 < line <= len(self.lines) else ""

        self.console.print(f"[{style}]{level}[/{style}][bold]: {escape(message)}[/bold]")
        self.console.print(f"{gutter}[blue]-->[/blue] {escape(location)}")
        self.console.print(f"{gutter} [blue]|[/blue]")
        self.console.print(f"[blue]{line} |[/blue] {escape(source)}")
        self.console.print(
            f"{gutter} [blue]|[/blue] {' ' * (column - 1)}[{style}]^[/{style}]"
        )
        self.console.print(f"{gutter} [blue]|[/blue]")

    def parse_error(self, error: DocumentParseError) -> None:
        """Report a document parse failure."""
        logger.debug(f"Parse error at {error.line}:{error.column}: {error.message}")
        self._render("error", "bold red", error.message, error.line, error.column)

    def lint_warning(self, issue: LintIssue) -> None:
        """Report a single lint finding."""
        logger.debug(f"Lint finding at {issue.line}:{issue.column}: {issue.message}")
        self._render("warning", "bold yellow", issue.message, issue.line, issue.column)
