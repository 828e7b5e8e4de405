"""``typegen generate`` -- write TypeScript declarations for a document."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from typegen.commands import report_and_exit
from typegen.config import resolve_config
from typegen.exceptions import TypegenError
from typegen.exit_codes import EXIT_INVALID_USAGE
from typegen.generator import generate_code
from typegen.output import debug, error, print_data, success


def generate_command(
    input_document: Optional[str] = typer.Argument(
        None, metavar="INPUT", help="OpenAPI document: file path, URL, or '-' for stdin."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write to this file instead of stdout."
    ),
    operations: Optional[bool] = typer.Option(
        None,
        "--operations/--no-operations",
        help="Emit Parameter$/RequestBody$/Response$ declarations per operation.",
        show_default=False,
    ),
    banner: Optional[bool] = typer.Option(
        None, "--banner/--no-banner", help="Prefix output with a generated-by banner.", show_default=False
    ),
) -> None:
    """Generate TypeScript declarations from an OpenAPI 3.x document.

    The output file is only written once generation succeeded, so a
    failing run never leaves partial output behind.

    Example::

        typegen generate openapi.yml -o src/api.ts
        cat openapi.json | typegen generate - --no-operations
    """
    try:
        config = resolve_config(
            cli_input=input_document,
            cli_output=output,
            cli_operations=operations,
            cli_banner=banner,
        )
        if config.input is None:
            error("No input document. Pass INPUT, set TYPEGEN_INPUT, or add 'input' to typegen.json.")
            raise typer.Exit(code=EXIT_INVALID_USAGE)

        debug(f"Generating from {config.input}")
        code = generate_code(config.input, config=config)
    except TypegenError as exc:
        raise report_and_exit(exc) from None

    if config.output:
        path = Path(config.output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(code, encoding="utf-8")
        success(f"Wrote {path}")
    else:
        print_data(code)
