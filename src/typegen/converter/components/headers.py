"""Generate ``components.headers`` into the ``Headers`` namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from typegen.codegen.nodes import NamespaceDeclaration, TypeAliasDeclaration, TypeNode, TypeReferenceNode
from typegen.converter.components.base import generate_entries, media_schema
from typegen.converter.type_node import convert
from typegen.exceptions import UnsupportedConstructError
from typegen.models import Reference, ReferenceKind
from typegen.naming import escape_identifier, namespace_name
from typegen.parser.guard import is_reference

if TYPE_CHECKING:
    from typegen.converter.context import GeneratorContext

CATEGORY = "headers"


def namespace_declaration() -> NamespaceDeclaration:
    return NamespaceDeclaration(
        name=namespace_name(CATEGORY),
        comment="@see https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.1.0.md#header-object",
    )


def header_type(context: "GeneratorContext", current_point: str, header: Any) -> TypeNode:
    """Type of a header object, or of the header a ``$ref`` points to.

    Raises:
        UnsupportedConstructError: If the header has no ``schema`` or
            ``content`` schema.
    """
    if is_reference(header):
        reference = context.resolver.resolve(context.entry_point, current_point, header)
        if reference.kind is not ReferenceKind.EXTERNAL_UNSUPPORTED:
            context.register_reference(reference)
            return TypeReferenceNode(name=context.name_for(current_point, reference.path))
        current_point, header = reference.reference_point, reference.data
    schema = media_schema(header)
    if schema is None:
        raise UnsupportedConstructError(f"Header has no schema: {header!r}")
    return convert(context.entry_point, current_point, schema, context)


def materialize(context: "GeneratorContext", reference: Reference) -> None:
    header = reference.data
    context.store.add_statement(
        reference.path,
        TypeAliasDeclaration(
            name=escape_identifier(reference.name),
            type=header_type(context, reference.reference_point, header),
            comment=header.get("description") if isinstance(header, dict) else None,
            deprecated=bool(header.get("deprecated")) if isinstance(header, dict) else False,
        ),
    )


def generate_namespace(context: "GeneratorContext", headers: Mapping[str, Any]) -> None:
    generate_entries(context, CATEGORY, headers, allow_local=True, alias=True)
