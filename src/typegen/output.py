"""Diagnostics and data output with a strict stdout/stderr split.

* **stdout** -- generated code and inspection tables only, so output can
  be redirected straight into a ``.ts`` file.
* **stderr** -- every diagnostic: progress, warnings, errors and the
  ``--verbose`` trace of generated components.
* **Colour control** -- Rich markup unless ``NO_COLOR`` is set,
  ``TERM=dumb``, or ``--no-color`` was passed.

:class:`OutputManager` holds the preferences and is installed once by
:func:`~typegen.app.main_callback`. The library modules only ever use the
module-level helpers (:func:`debug`, :func:`info`, ...), which delegate to
the installed manager or to a lazily created default.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.table import Table


class OutputFormat(str, Enum):
    """Format used for tabular data on stdout.

    ``AUTO`` resolves to ``RICH`` on an interactive terminal with colour
    enabled and to ``PLAIN`` otherwise.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes data to stdout and diagnostics to stderr.

    Args:
        format: Format for :meth:`print_table`.
        no_color: Disable colour and Rich markup.
        quiet: Suppress informational messages on stderr.
        verbose: Show debug messages on stderr.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            self._format = (
                OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
            )
        else:
            self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(self._format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # ------------------------------------------------------------------ #
    # Data output (stdout)
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Write *text* to stdout unchanged, adding a trailing newline if missing."""
        sys.stdout.write(text if text.endswith("\n") else text + "\n")
        sys.stdout.flush()

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows in the active format.

        JSON mode emits an array of objects keyed by *headers*; plain mode
        emits tab-separated lines; Rich mode renders a styled table.
        """
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
        elif self._format == OutputFormat.PLAIN:
            self.print_data("\t".join(headers))
            for row in rows:
                self.print_data("\t".join(row))
        else:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for header in headers:
                table.add_column(header)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def _plain(self, message: str) -> None:
        print(message, file=sys.stderr, flush=True)

    def info(self, message: str) -> None:
        """Informational message. Suppressed by ``--quiet``."""
        if self._quiet:
            return
        if self._no_color:
            self._plain(message)
        else:
            self._stderr.print(message, markup=False, highlight=False)

    def success(self, message: str) -> None:
        """Green success message. Suppressed by ``--quiet``."""
        if self._quiet:
            return
        if self._no_color:
            self._plain(message)
        else:
            self._stderr.print(f"[green]{_escape(message)}[/green]")

    def warning(self, message: str) -> None:
        """Yellow warning. Never suppressed."""
        if self._no_color:
            self._plain(f"Warning: {message}")
        else:
            self._stderr.print(f"[yellow]Warning:[/yellow] {_escape(message)}")

    def error(self, message: str) -> None:
        """Bold red error. Never suppressed."""
        if self._no_color:
            self._plain(f"Error: {message}")
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {_escape(message)}")

    def detail(self, message: str) -> None:
        """Dimmed continuation line under an error. Never suppressed."""
        if self._no_color:
            self._plain(message)
        else:
            self._stderr.print(f"[dim]{_escape(message)}[/dim]")

    def debug(self, message: str) -> None:
        """Debug trace, shown only with ``--verbose``."""
        if not self._verbose:
            return
        if self._no_color:
            self._plain(f"[debug] {message}")
        else:
            self._stderr.print(f"[dim]\\[debug] {_escape(message)}[/dim]")


def _escape(message: str) -> str:
    from rich.markup import escape

    return escape(message)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    return os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global output instance (set during app startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Drop the installed manager. Used by the test suite between tests."""
    global _output
    _output = None


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def detail(message: str) -> None:
    get_output().detail(message)


def debug(message: str) -> None:
    get_output().debug(message)
