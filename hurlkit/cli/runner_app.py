"""``hurl`` entry point.

Resolves the runner configuration from flags, environment variables and
variable files. Request execution is delegated to an executor passed as the
Typer context object (``app(obj=executor)``); an executor is any callable
taking the resolved CliOptions and the list of files and returning an exit
code. Without one, the command prints the resolved configuration.
"""

import logging
from collections.abc import Callable
from typing import List, Optional

import typer
from dotenv import find_dotenv, load_dotenv

from hurlkit.cli.output import print_error, print_run_summary
from hurlkit.cli.standalone import run_standalone
from hurlkit.config.options import CliOptions, RawArguments, resolve_options
from hurlkit.config.settings import get_logging_settings
from hurlkit.errors import ConfigurationError
from hurlkit.exit_codes import ExitCode
from hurlkit.logging import configure_logging, get_logger, is_debug_mode, log_error
from hurlkit.version import __version__

logger = get_logger(__name__)

Executor = Callable[[CliOptions, List[str]], int]

app = typer.Typer(
    name="hurl",
    help="Run hurl FILE(s) or standard input.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"hurl {__version__}")
        raise typer.Exit()


@app.command()
def run(
    ctx: typer.Context,
    inputs: Optional[List[str]] = typer.Argument(
        None, metavar="[FILE]...", help="Sets the input file to use"
    ),
    cacert: Optional[str] = typer.Option(
        None, "--cacert", metavar="FILE", help="CA certificate to verify peer against (PEM format)"
    ),
    color: bool = typer.Option(False, "--color", help="Colorize Output"),
    compressed: bool = typer.Option(
        False, "--compressed", help="Request compressed response (using deflate or gzip)"
    ),
    connect_timeout: Optional[str] = typer.Option(
        None, "--connect-timeout", metavar="SECONDS", help="Maximum time allowed for connection"
    ),
    cookie: Optional[str] = typer.Option(
        None, "--cookie", "-b", metavar="FILE", help="Read cookies from FILE"
    ),
    cookie_jar: Optional[str] = typer.Option(
        None,
        "--cookie-jar",
        "-c",
        metavar="FILE",
        help="Write cookies to FILE after running the session (only for one session)",
    ),
    fail_at_end: bool = typer.Option(False, "--fail-at-end", help="Fail at end"),
    file_root: Optional[str] = typer.Option(
        None,
        "--file-root",
        metavar="DIR",
        help="Set root filesystem to import files (default is current directory)",
    ),
    location: bool = typer.Option(False, "--location", "-L", help="Follow redirects"),
    log_dir: Optional[str] = typer.Option(
        None, "--log-dir", metavar="DIR", help="Write a debug log file (hurlkit.log) to DIR"
    ),
    glob: Optional[List[str]] = typer.Option(
        None,
        "--glob",
        metavar="GLOB",
        help="Specify input files that match the given glob. Multiple glob flags may be used.",
    ),
    include: bool = typer.Option(
        False, "--include", "-i", help="Include the HTTP headers in the output"
    ),
    ignore_asserts: bool = typer.Option(
        False, "--ignore-asserts", help="Ignore asserts defined in the Hurl file."
    ),
    insecure: bool = typer.Option(
        False, "--insecure", "-k", help="Allow insecure SSL connections"
    ),
    interactive: bool = typer.Option(False, "--interactive", help="Turn on interactive mode"),
    json_output: bool = typer.Option(
        False, "--json", help="Output each hurl file result to JSON"
    ),
    max_redirs: Optional[str] = typer.Option(
        None, "--max-redirs", metavar="NUM", help="Maximum number of redirects allowed"
    ),
    max_time: Optional[str] = typer.Option(
        None, "--max-time", "-m", metavar="NUM", help="Maximum time allowed for the transfer"
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Do not colorize Output"),
    no_output: bool = typer.Option(
        False,
        "--no-output",
        help="Suppress output. By default, Hurl outputs the body of the last response.",
    ),
    noproxy: Optional[str] = typer.Option(
        None, "--noproxy", metavar="HOST(S)", help="List of hosts which do not use proxy"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", metavar="FILE", help="Write to FILE instead of stdout"
    ),
    progress: bool = typer.Option(
        False, "--progress", help="Print filename and status for each test (stderr)"
    ),
    proxy: Optional[str] = typer.Option(
        None,
        "--proxy",
        "-x",
        metavar="[PROTOCOL://]HOST[:PORT]",
        help="Use proxy on given protocol/host/port",
    ),
    report_junit: Optional[str] = typer.Option(
        None, "--report-junit", metavar="FILE", help="Write a Junit XML report to the given file"
    ),
    report_html: Optional[str] = typer.Option(
        None, "--report-html", metavar="DIR", help="Generate html report to dir"
    ),
    summary: bool = typer.Option(
        False, "--summary", help="Print test metrics at the end of the run (stderr)"
    ),
    test: bool = typer.Option(
        False, "--test", help="Activate test mode; equals --no-output --progress --summary"
    ),
    to_entry: Optional[str] = typer.Option(
        None,
        "--to-entry",
        metavar="ENTRY_NUMBER",
        help="Execute hurl file to ENTRY_NUMBER (starting at 1)",
    ),
    user: Optional[str] = typer.Option(
        None,
        "--user",
        "-u",
        metavar="user:password",
        help="Add basic Authentication header to each request.",
    ),
    user_agent: Optional[str] = typer.Option(
        None,
        "--user-agent",
        "-A",
        metavar="name",
        help="Specify the User-Agent string to send to the HTTP server.",
    ),
    variable: Optional[List[str]] = typer.Option(
        None, "--variable", metavar="NAME=VALUE", help="Define a variable"
    ),
    variables_file: Optional[str] = typer.Option(
        None,
        "--variables-file",
        metavar="FILE",
        help="Define a properties file in which you define your variables",
    ),
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
    """Run hurl FILE(s) or standard input."""
    logging_settings = get_logging_settings()
    configure_logging(
        log_dir=log_dir or logging_settings.directory,
        max_file_size_mb=logging_settings.max_file_size_mb,
        backup_count=logging_settings.backup_count,
        config={"debug_mode": verbose or interactive},
    )

    try:
        raw = RawArguments(
            inputs=tuple(inputs or ()),
            cacert=cacert,
            color=color,
            compressed=compressed,
            connect_timeout=connect_timeout,
            cookie=cookie,
            cookie_jar=cookie_jar,
            fail_at_end=fail_at_end,
            file_root=file_root,
            location=location,
            globs=tuple(glob or ()),
            include=include,
            ignore_asserts=ignore_asserts,
            insecure=insecure,
            interactive=interactive,
            json=json_output,
            max_redirs=max_redirs,
            max_time=max_time,
            no_color=no_color,
            no_output=no_output,
            noproxy=noproxy,
            output=output,
            progress=progress,
            proxy=proxy,
            report_junit=report_junit,
            report_html=report_html,
            summary=summary,
            test=test,
            to_entry=to_entry,
            user=user,
            user_agent=user_agent,
            variables=tuple(variable or ()),
            variables_file=variables_file,
            verbose=verbose,
        )
        options = resolve_options(raw)
    except ConfigurationError as e:
        log_error(
            e,
            logger=logger,
            level=logging.DEBUG,
            include_traceback=is_debug_mode(),
            extra={"error_details": e.to_dict()},
        )
        print_error(e.message, e.suggestion)
        raise typer.Exit(ExitCode.FAILURE)

    filenames = list(raw.inputs) + options.glob_files
    logger.debug(f"Resolved configuration for {len(filenames)} file(s)")

    executor: Optional[Executor] = ctx.obj
    if executor is None:
        print_run_summary(options, filenames)
        return

    exit_code = executor(options, filenames)
    if exit_code:
        raise typer.Exit(exit_code)


def main() -> None:
    """Console script entry point.

    Loads a ``.env`` file from the working directory first, so that its
    ``HURL_`` entries are seen as environment variables. Click usage errors
    exit with code 1.
    """
    load_dotenv(find_dotenv(usecwd=True))
    raise SystemExit(run_standalone(app, "hurl"))


