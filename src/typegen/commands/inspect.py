"""``typegen inspect`` -- tabulate what a generation run would produce."""

from __future__ import annotations

from typing import Optional

import typer

from typegen.codegen.nodes import NamespaceDeclaration, Statement
from typegen.commands import report_and_exit
from typegen.config import resolve_config
from typegen.exceptions import TypegenError
from typegen.exit_codes import EXIT_INVALID_USAGE
from typegen.generator import generate_declarations
from typegen.models import GenerationResult
from typegen.output import error, get_output, info


def _declaration_rows(statements: list[Statement], prefix: str = "") -> list[list[str]]:
    rows: list[list[str]] = []
    for statement in statements:
        if isinstance(statement, NamespaceDeclaration):
            rows.append([prefix or "-", statement.name, statement.kind])
            qualified = f"{prefix}.{statement.name}" if prefix else statement.name
            rows.extend(_declaration_rows(list(statement.statements), qualified))
        elif statement.kind != "indexSignature":
            rows.append([prefix or "-", statement.name, statement.kind])
    return rows


def _operation_rows(result: GenerationResult) -> list[list[str]]:
    rows: list[list[str]] = []
    for operation_id, state in result.operations.items():
        rows.append([
            state.http_method.upper(),
            state.request_uri,
            operation_id,
            state.parameter_name or "-",
            state.request_body_name or "-",
            ", ".join(state.response_names) or "-",
            "Yes" if state.deprecated else "",
        ])
    return rows


def inspect_command(
    input_document: Optional[str] = typer.Argument(
        None, metavar="INPUT", help="OpenAPI document: file path, URL, or '-' for stdin."
    ),
    operations: bool = typer.Option(
        False, "--operations", help="List collected operations instead of declarations."
    ),
) -> None:
    """List generated declarations (or operations) without writing code.

    Example::

        typegen inspect openapi.yml
        typegen --json inspect openapi.yml --operations
    """
    try:
        config = resolve_config(cli_input=input_document, cli_operations=True if operations else None)
        if config.input is None:
            error("No input document. Pass INPUT, set TYPEGEN_INPUT, or add 'input' to typegen.json.")
            raise typer.Exit(code=EXIT_INVALID_USAGE)
        result = generate_declarations(config.input, config=config)
    except TypegenError as exc:
        raise report_and_exit(exc) from None

    output = get_output()
    if operations:
        rows = _operation_rows(result)
        if not rows:
            info("No operations with an operationId.")
            return
        output.print_table(
            ["Method", "Path", "Operation", "Parameters", "Request Body", "Responses", "Deprecated"],
            rows,
            title=f"Operations ({len(rows)})",
        )
        return

    rows = _declaration_rows([*result.statements, *result.additional_statements])
    if not rows:
        info("No declarations generated.")
        return
    output.print_table(["Namespace", "Name", "Kind"], rows, title=f"Declarations ({len(rows)})")
