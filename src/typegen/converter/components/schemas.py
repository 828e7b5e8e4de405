"""Generate ``components.schemas`` into the ``Schemas`` namespace.

Object schemas with declared properties become interfaces; every other
shape (aliases of references, unions, primitives, arrays, free-form
objects, nullable objects) becomes a type alias.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from typegen.codegen.nodes import (
    InterfaceDeclaration,
    NamespaceDeclaration,
    ObjectTypeNode,
    TypeAliasDeclaration,
)
from typegen.converter.components.base import generate_entries
from typegen.converter.type_node import convert
from typegen.models import Reference
from typegen.naming import escape_identifier, namespace_name
from typegen.parser.guard import SchemaKind, classify_schema

if TYPE_CHECKING:
    from typegen.converter.context import GeneratorContext

CATEGORY = "schemas"


def namespace_declaration() -> NamespaceDeclaration:
    return NamespaceDeclaration(
        name=namespace_name(CATEGORY),
        comment="@see https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.1.0.md#schema-object",
    )


def add_schema(
    context: "GeneratorContext",
    current_point: str,
    target_path: str,
    name: str,
    schema: Any,
) -> None:
    """Convert *schema* and store it at *target_path* as *name*."""
    type_node = convert(context.entry_point, current_point, schema, context)
    identifier = escape_identifier(name)
    comment = schema.get("description") if isinstance(schema, dict) else None
    deprecated = bool(schema.get("deprecated")) if isinstance(schema, dict) else False

    if (
        classify_schema(schema) is SchemaKind.OBJECT
        and isinstance(type_node, ObjectTypeNode)
        and type_node.members
    ):
        context.store.add_statement(
            target_path,
            InterfaceDeclaration(
                name=identifier,
                members=type_node.members,
                comment=comment,
                deprecated=deprecated,
            ),
        )
        return
    context.store.add_statement(
        target_path,
        TypeAliasDeclaration(
            name=identifier,
            type=type_node,
            comment=comment,
            deprecated=deprecated,
        ),
    )


def materialize(context: "GeneratorContext", reference: Reference) -> None:
    add_schema(context, reference.reference_point, reference.path, reference.name, reference.data)


def generate_namespace(context: "GeneratorContext", schemas: Mapping[str, Any]) -> None:
    generate_entries(context, CATEGORY, schemas, allow_local=True, alias=True)
