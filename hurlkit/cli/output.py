"""CLI output helpers.

Errors go to stderr through a Rich console so that stdout only ever carries
command output (formatted documents, run summaries).
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hurlkit.config.options import CliOptions

# Console instances for stdout and stderr
console = Console()
error_console = Console(stderr=True, highlight=False, soft_wrap=True)


def print_error(message: str, suggestion: Optional[str] = None) -> None:
    """Print an error message, and a suggestion when one is available.

    Args:
        message: The error message to display.
        suggestion: Optional hint on how to fix the error.
    """
    error_console.print(f"[red bold]Error:[/red bold] {escape(message)}")
    if suggestion:
        error_console.print(f"[cyan]Suggestion:[/cyan] {escape(suggestion)}")


def _display(value: object) -> str:
    if value is None:
        return "-"
    if isinstance(value, list):
        return ", ".join(str(item) for item in value) or "-"
    return str(value)


def print_run_summary(options: CliOptions, filenames: list[str]) -> None:
    """Print the files to run and the resolved configuration as a table."""
    table = Table(title="Resolved configuration", show_header=True)
    table.add_column("Option", style="cyan")
    table.add_column("Value")

    table.add_row("files", escape(_display(filenames)))
    table.add_row("output type", options.output_type.value)
    table.add_row("fail fast", _display(options.fail_fast))
    table.add_row("connect timeout", f"{int(options.connect_timeout.total_seconds())}s")
    table.add_row("timeout", f"{int(options.timeout.total_seconds())}s")
    table.add_row(
        "max redirects",
        "unlimited" if options.max_redirect is None else str(options.max_redirect),
    )
    table.add_row("to entry", _display(options.to_entry))
    table.add_row("proxy", escape(_display(options.proxy)))
    table.add_row("html report", escape(_display(options.html_dir)))
    table.add_row("junit report", escape(_display(options.junit_file)))
    for name, value in sorted(options.variables.items()):
        table.add_row(f"variable {escape(name)}", escape(repr(value)))

    console.print(table)
