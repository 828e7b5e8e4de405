"""Built-in CLI commands for typegen.

* :mod:`~typegen.commands.generate` -- write TypeScript declarations.
* :mod:`~typegen.commands.inspect` -- tabulate generated declarations or
  collected operations.

Both are plain callbacks registered directly on the root app.
"""

from __future__ import annotations

import typer

from typegen.exceptions import TypegenError
from typegen.output import detail, error


def report_and_exit(exc: TypegenError) -> typer.Exit:
    """Print *exc* (and its diagnostic lines) to stderr.

    Returns the :class:`typer.Exit` to raise, carrying the error's exit code.
    """
    error(str(exc))
    for line in exc.diagnostic_lines():
        detail(line)
    return typer.Exit(code=exc.exit_code)
