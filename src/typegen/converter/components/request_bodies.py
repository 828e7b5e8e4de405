"""Generate ``components.requestBodies`` into the ``RequestBodies`` namespace.

Each request body becomes an interface with one member per media type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from typegen.codegen.nodes import InterfaceDeclaration, NamespaceDeclaration
from typegen.converter.components.base import content_type_node, generate_entries, resolve_entry
from typegen.models import Reference
from typegen.naming import escape_identifier, namespace_name

if TYPE_CHECKING:
    from typegen.converter.context import GeneratorContext

CATEGORY = "requestBodies"


def namespace_declaration() -> NamespaceDeclaration:
    return NamespaceDeclaration(
        name=namespace_name(CATEGORY),
        comment="@see https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.1.0.md#request-body-object",
    )


def materialize(context: "GeneratorContext", reference: Reference) -> None:
    resolved = resolve_entry(context, reference, allow_local=False, alias=True)
    if resolved is None:
        return
    reference = resolved
    request_body = reference.data
    context.store.add_statement(
        reference.path,
        InterfaceDeclaration(
            name=escape_identifier(reference.name),
            members=content_type_node(
                context, reference.reference_point, request_body.get("content") or {}
            ).members,
            comment=request_body.get("description"),
        ),
    )


def generate_namespace(context: "GeneratorContext", request_bodies: Mapping[str, Any]) -> None:
    generate_entries(context, CATEGORY, request_bodies, allow_local=False, alias=True)
