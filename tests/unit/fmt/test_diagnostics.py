"""Tests for source-annotated diagnostics."""

import io

from rich.console import Console

from hurlkit.document.model import LintIssue
from hurlkit.errors import DocumentParseError
from hurlkit.fmt.diagnostics import DiagnosticReporter

LINES = ["# comment", "GEX http://localhost", "HTTP 200"]


def make_reporter(filename=None):
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, width=200, soft_wrap=True)
    return DiagnosticReporter(LINES, color=False, filename=filename, console=console), buffer


class TestDiagnosticReporter:
    """Tests for rendered diagnostics."""

    def test_parse_error(self):
        reporter, buffer = make_reporter("api.hurl")

        reporter.parse_error(DocumentParseError("Parsing Method: expecting an HTTP method", line=2))

        assert buffer.getvalue().splitlines() == [
            "error: Parsing Method: expecting an HTTP method",
            " --> api.hurl:2:1",
            "  |",
            "2 | GEX http://localhost",
            "  | ^",
            "  |",
        ]

    def test_lint_warning_caret_column(self):
        reporter, buffer = make_reporter()

        reporter.lint_warning(LintIssue(3, 5, "One space"))

        output = buffer.getvalue().splitlines()
        assert output[0] == "warning: One space"
        assert output[1] == " --> 3:5"
        assert output[4] == "  |     ^"

    def test_message_markup_is_escaped(self):
        reporter, buffer = make_reporter()

        reporter.lint_warning(LintIssue(1, 1, "expecting [bold]"))

        assert "expecting [bold]" in buffer.getvalue()

    def test_line_outside_source(self):
        reporter, buffer = make_reporter()

        reporter.parse_error(DocumentParseError("Unexpected end", line=10))

        assert "10 |" in buffer.getvalue()
