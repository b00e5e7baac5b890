"""Process-level invocation of the Typer apps."""

import click
import typer

from hurlkit.exit_codes import ExitCode


def run_standalone(typer_app: typer.Typer, prog_name: str, **extra: object) -> int:
    """Invoke a Typer app and return its exit code.

    Click reports usage errors (unknown options, missing values) with code 2,
    which hurlfmt reserves for parse failures; they are mapped to 1 here.
    """
    command = typer.main.get_command(typer_app)
    try:
        # Without standalone mode, click returns the code of typer.Exit
        exit_code = command.main(prog_name=prog_name, standalone_mode=False, **extra)
    except click.exceptions.Abort:
        return ExitCode.FAILURE
    except click.ClickException as e:
        e.show()
        return ExitCode.FAILURE
    return exit_code if isinstance(exit_code, int) else ExitCode.SUCCESS
