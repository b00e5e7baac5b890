"""``hurlfmt`` entry point.

Formats, lints or converts a Hurl file. Exit codes:
0 on success, 1 for usage errors and check-mode findings, 2 when the input
can not be read or parsed.
"""

from typing import Optional

import typer

from hurlkit.cli.output import print_error
from hurlkit.cli.standalone import run_standalone
from hurlkit.config.settings import get_logging_settings
from hurlkit.errors import ConflictingFlagsError
from hurlkit.exit_codes import ExitCode
from hurlkit.fmt.pipeline import FormatFlags, FormatPipeline
from hurlkit.logging import configure_logging
from hurlkit.version import __version__

app = typer.Typer(
    name="hurlfmt",
    help="Format hurl FILE.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"hurlfmt {__version__}")
        raise typer.Exit()


@app.command()
def fmt(
    ctx: typer.Context,
    input_file: Optional[str] = typer.Argument(
        None, metavar="[INPUT]", help="Sets the input file to use"
    ),
    check: bool = typer.Option(False, "--check", help="Run in 'check' mode"),
    color: bool = typer.Option(False, "--color", help="Colorize Output"),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        metavar="FORMAT",
        help="Specify output format: text (default), json, html or ast",
    ),
    in_place: bool = typer.Option(False, "--in-place", help="Modify file in place"),
    log_dir: Optional[str] = typer.Option(
        None, "--log-dir", metavar="DIR", help="Write a debug log file (hurlkit.log) to DIR"
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Do not colorize output"),
    no_format: bool = typer.Option(False, "--no-format", help="Do not format output"),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", metavar="FILE", help="Write to FILE instead of stdout"
    ),
    standalone: bool = typer.Option(False, "--standalone", help="Standalone Html"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Turn on verbose output"),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Print version and exit",
    ),
) -> None:
    """Format hurl FILE."""
    logging_settings = get_logging_settings()
    configure_logging(
        log_dir=log_dir or logging_settings.directory,
        max_file_size_mb=logging_settings.max_file_size_mb,
        backup_count=logging_settings.backup_count,
        config={"debug_mode": verbose},
    )

    try:
        flags = FormatFlags(
            input=input_file,
            check=check,
            color=color,
            no_color=no_color,
            format=output_format,
            in_place=in_place,
            no_format=no_format,
            output=output,
            standalone=standalone,
        )
    except ConflictingFlagsError as e:
        print_error(e.message)
        raise typer.Exit(ExitCode.FAILURE)

    pipeline = ctx.obj or FormatPipeline(
        show_usage=lambda: typer.echo(ctx.get_help())
    )
    exit_code = pipeline.run(flags)
    if exit_code != ExitCode.SUCCESS:
        raise typer.Exit(exit_code)


def main() -> None:
    """Console script entry point."""
    raise SystemExit(run_standalone(app, "hurlfmt"))
