"""Generate ``components.responses`` into the ``Responses`` namespace.

A response becomes a namespace holding a ``Header`` interface (one member
per response header) and a ``Content`` interface (one member per media
type)::

    export namespace Responses {
        /** Pet not found */
        export namespace NotFound {
            export interface Header {
                "X-Request-Id"?: Headers.RequestId;
            }
            export interface Content {
                "application/json": Schemas.Error;
            }
        }
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from typegen.codegen.nodes import InterfaceDeclaration, NamespaceDeclaration, PropertySignature
from typegen.converter.components.base import content_type_node, generate_entries, resolve_entry
from typegen.converter.components.headers import header_type
from typegen.models import Reference
from typegen.naming import escape_identifier, namespace_name

if TYPE_CHECKING:
    from typegen.converter.context import GeneratorContext

CATEGORY = "responses"


def namespace_declaration() -> NamespaceDeclaration:
    return NamespaceDeclaration(
        name=namespace_name(CATEGORY),
        comment="@see https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.1.0.md#response-object",
    )


def add_response(
    context: "GeneratorContext",
    current_point: str,
    target_path: str,
    name: str,
    response: Mapping[str, Any],
) -> None:
    context.store.add_statement(
        target_path,
        NamespaceDeclaration(
            name=escape_identifier(name),
            comment=response.get("description"),
        ),
    )
    headers = response.get("headers")
    if headers:
        members = tuple(
            PropertySignature(
                name=header_name,
                type=header_type(context, current_point, header),
                optional=not (isinstance(header, dict) and header.get("required")),
                comment=header.get("description") if isinstance(header, dict) else None,
            )
            for header_name, header in headers.items()
        )
        context.store.add_statement(
            f"{target_path}/Header",
            InterfaceDeclaration(name="Header", members=members),
        )
    content = response.get("content")
    if content:
        context.store.add_statement(
            f"{target_path}/Content",
            InterfaceDeclaration(
                name="Content",
                members=content_type_node(context, current_point, content).members,
            ),
        )


def materialize(context: "GeneratorContext", reference: Reference) -> None:
    resolved = resolve_entry(context, reference, allow_local=False, alias=False)
    if resolved is None:
        return
    reference = resolved
    add_response(context, reference.reference_point, reference.path, reference.name, reference.data)


def generate_namespace(context: "GeneratorContext", responses: Mapping[str, Any]) -> None:
    generate_entries(context, CATEGORY, responses, allow_local=False, alias=False)
