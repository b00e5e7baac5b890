"""
Formatter pipeline.

Drives one ``hurlfmt`` invocation through a linear sequence of states and
maps every outcome onto a process exit code:

    ValidateFlags -> AcquireInput -> Parse -> (Check | Format) -> WriteOutput

No state is entered twice and there are no backward transitions. Flag
conflicts are rejected before any input is read. Failures to write the
output are not translated: OutputWriteError propagates to the caller.
"""

import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from hurlkit.cli.output import print_error
from hurlkit.document import Document, DocumentToolkit, LineToolkit
from hurlkit.document.parser import split_lines
from hurlkit.errors import (
    ConfigurationError,
    ConflictingFlagsError,
    DocumentParseError,
    ErrorCodes,
    InputError,
    InputNotFoundError,
    LintFindingsError,
    UnreadableInputError,
)
from hurlkit.exit_codes import ExitCode
from hurlkit.fmt.diagnostics import DiagnosticReporter
from hurlkit.fmt.sink import OutputSink
from hurlkit.logging import get_logger, log_entry_exit

logger = get_logger(__name__)

STDIN = "-"

FORMATS = ("text", "json", "html", "ast")

# Pairs of flags that can not be given together, by FormatFlags field name
FORMAT_FLAG_CONFLICTS: tuple[tuple[str, str], ...] = (
    ("check", "format"),
    ("check", "output"),
    ("color", "no_color"),
    ("color", "in_place"),
    ("in_place", "output"),
)


def _flag(name: str) -> str:
    return "--" + name.replace("_", "-")


@dataclass(frozen=True)
class FormatFlags:
    """Raw flag values of the formatter command.

    Construction enforces the mutually exclusive flag pairs.
    """

    input: Optional[str] = None
    check: bool = False
    color: bool = False
    no_color: bool = False
    format: Optional[str] = None
    in_place: bool = False
    no_format: bool = False
    output: Optional[str] = None
    standalone: bool = False

    def __post_init__(self) -> None:
        for first, second in FORMAT_FLAG_CONFLICTS:
            first_value, second_value = getattr(self, first), getattr(self, second)
            if first_value not in (None, False) and second_value not in (None, False):
                flags = (_flag(first), _flag(second))
                raise ConflictingFlagsError(
                    f"The argument '{flags[0]}' cannot be used with '{flags[1]}'",
                    flags=flags,
                )

    @property
    def filename(self) -> str:
        return self.input if self.input else STDIN

    @property
    def target(self) -> str:
        return self.format if self.format is not None else "text"


@dataclass(frozen=True)
class FormatRequest:
    """The acquired input of one formatter run."""

    filename: str
    contents: str
    lines: tuple[str, ...]
    format: str = "text"
    check: bool = False
    no_format: bool = False
    standalone: bool = False
    in_place: bool = False
    color: bool = False
    output: Optional[str] = None

    @property
    def destination(self) -> Optional[str]:
        """Output path; None means standard output."""
        if self.in_place:
            return self.filename
        return self.output


def validate_flags(flags: FormatFlags) -> None:
    """Reject flag combinations that depend on the input or the format.

    Raises:
        ConflictingFlagsError: If --standalone is used without html output,
            or --in-place with standard input or a non-text format
    """
    if flags.standalone and flags.format != "html":
        raise ConflictingFlagsError(
            "use --standalone option only with html output",
            flags=("--standalone", "--format"),
        )
    if flags.in_place:
        if flags.filename == STDIN:
            raise ConflictingFlagsError(
                "You can not use --in-place with standard input stream!",
                flags=("--in-place",),
            )
        if flags.target != "text":
            raise ConflictingFlagsError(
                "You can use --in-place only text format!",
                flags=("--in-place", "--format"),
            )


def _stdin_is_terminal() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


def _stdout_is_terminal() -> bool:
    return sys.stdout is not None and sys.stdout.isatty()


class FormatPipeline:
    """Runs the formatter states for one set of flags."""

    def __init__(
        self,
        toolkit: Optional[DocumentToolkit] = None,
        stdin: Optional[BinaryIO] = None,
        stdin_is_tty: Optional[Callable[[], bool]] = None,
        stdout_is_tty: Optional[Callable[[], bool]] = None,
        show_usage: Optional[Callable[[], None]] = None,
    ) -> None:
        self.toolkit = toolkit or LineToolkit()
        self._stdin = stdin
        self.stdin_is_tty = stdin_is_tty or _stdin_is_terminal
        self.stdout_is_tty = stdout_is_tty or _stdout_is_terminal
        self.show_usage = show_usage or (
            lambda: sys.stderr.write("Usage: hurlfmt [OPTIONS] [INPUT]\n")
        )

    @property
    def stdin(self) -> BinaryIO:
        return self._stdin or sys.stdin.buffer

    def resolve_color(self, flags: FormatFlags) -> bool:
        if flags.color:
            return True
        if flags.no_color or flags.in_place:
            return False
        return self.stdout_is_tty()

    @log_entry_exit(logger=logger)
    def acquire_input(self, flags: FormatFlags, color: bool) -> FormatRequest:
        """Read the whole input and build the request.

        Raises:
            InputNotFoundError: If the named input file does not exist
            UnreadableInputError: If the input can not be read or decoded
        """
        filename = flags.filename
        try:
            if filename == STDIN:
                data = self.stdin.read()
            else:
                path = Path(filename)
                if not path.exists():
                    raise InputNotFoundError(f"Input file {filename} does not exist!")
                data = path.read_bytes()
            # Bytes on both paths, so line endings reach split_lines untouched
            contents = data.decode("utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise UnreadableInputError(
                f"Input stream can not be read - {e}", details={"input": filename}
            ) from e

        return FormatRequest(
            filename=filename,
            contents=contents,
            lines=tuple(split_lines(contents)),
            format=flags.target,
            check=flags.check,
            no_format=flags.no_format,
            standalone=flags.standalone,
            in_place=flags.in_place,
            color=color,
            output=flags.output,
        )

    def check(self, document: Document, reporter: DiagnosticReporter) -> None:
        """Report every lint finding.

        Always raises LintFindingsError, also when nothing was found: check
        mode signals a non-zero status to automated pipelines.
        """
        issues = self.toolkit.lint(document)
        for issue in issues:
            reporter.lint_warning(issue)
        raise LintFindingsError(f"{len(issues)} lint finding(s)", count=len(issues))

    @log_entry_exit(logger=logger)
    def render(self, request: FormatRequest, document: Document) -> str:
        """Render the document in the requested format.

        Raises:
            ConfigurationError: If the format is not one of text, json, html, ast
        """
        if request.format == "text":
            if not request.no_format:
                document = self.toolkit.fix(document)
            return self.toolkit.format_text(document, request.color)
        if request.format == "json":
            return self.toolkit.format_json(document)
        if request.format == "html":
            return self.toolkit.format_html(document, request.standalone)
        if request.format == "ast":
            return self.toolkit.format_ast(document)
        raise ConfigurationError(
            "Invalid output option - expecting text, html or json",
            error_code=ErrorCodes.CONFIG_INVALID_FORMAT,
            details={"format": request.format, "valid_options": list(FORMATS)},
        )

    def write_output(self, request: FormatRequest, output: str) -> None:
        OutputSink(request.destination).write(output.encode("utf-8"))

    def run(self, flags: FormatFlags) -> ExitCode:
        """Run every state and return the exit code of the invocation."""
        try:
            validate_flags(flags)
        except ConflictingFlagsError as e:
            print_error(e.message)
            return ExitCode.FAILURE

        color = self.resolve_color(flags)

        if flags.filename == STDIN and self.stdin_is_tty():
            self.show_usage()
            return ExitCode.FAILURE

        try:
            request = self.acquire_input(flags, color)
        except InputNotFoundError as e:
            print_error(e.message)
            return ExitCode.FAILURE
        except InputError as e:
            print_error(e.message)
            return ExitCode.PARSE_ERROR

        reporter = DiagnosticReporter(request.lines, color, request.filename)
        try:
            document = self.toolkit.parse(request.contents)
        except DocumentParseError as e:
            reporter.parse_error(e)
            return ExitCode.PARSE_ERROR

        if request.check:
            try:
                self.check(document, reporter)
            except LintFindingsError as e:
                logger.debug(f"Check mode finished: {e.message}")
            return ExitCode.FAILURE

        try:
            output = self.render(request, document)
        except ConfigurationError as e:
            print_error(e.message)
            return ExitCode.FAILURE

        self.write_output(request, output)
        return ExitCode.SUCCESS
