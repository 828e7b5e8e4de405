"""Typer application and CLI entry point for typegen.

Registers the built-in commands (``generate``, ``inspect``) on the root
app. :func:`main` is the console-script entry point declared in
``pyproject.toml``; errors that escape a command are reported there, and
anything that is not a :class:`~typegen.exceptions.TypegenError` leaves a
crash log under the data directory.

See Also:
    :mod:`typegen.config`: Configuration resolution.
    :mod:`typegen.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from typegen import __version__
from typegen.commands.generate import generate_command
from typegen.commands.inspect import inspect_command
from typegen.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="typegen",
    help="Generate TypeScript declarations from OpenAPI 3.0/3.1 documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("generate")(generate_command)
app.command("inspect")(inspect_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"typegen {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON table output."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text table output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback: install the global OutputManager from the CLI flags."""
    from typegen.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback to ``<data_dir>/logs`` and return its path."""
    from typegen.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(f"{type(exc).__name__}: {exc}\n\n{traceback.format_exc()}")
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``typegen`` console script.

    :class:`~typegen.exceptions.TypegenError` instances exit with the
    error's ``exit_code``. All other exceptions produce a crash log and a
    generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from typegen.exceptions import TypegenError
        from typegen.output import detail, error

        if isinstance(exc, TypegenError):
            error(str(exc))
            for line in exc.diagnostic_lines():
                detail(line)
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
