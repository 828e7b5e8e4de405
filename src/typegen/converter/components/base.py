"""Shared entry loop for the component generators.

Every generator walks its ``components.<category>`` mapping through
:func:`generate_entries`, which handles ``$ref`` entries uniformly and then
hands each entry to the context bridge, so generation happens at most once
per canonical path no matter whether an entry is reached from its own
category or from a reference elsewhere.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional

from typegen.codegen.nodes import ObjectTypeNode, PropertySignature, TypeAliasDeclaration, TypeNode, TypeReferenceNode
from typegen.converter.type_node import convert
from typegen.exceptions import UnsupportedConstructError
from typegen.models import Reference, ReferenceKind
from typegen.naming import escape_identifier
from typegen.parser.guard import is_reference
from typegen.parser.pointer import make_point

if TYPE_CHECKING:
    from typegen.converter.context import GeneratorContext


def component_reference(category: str, name: str, point: str, data: Any) -> Reference:
    """Descriptor for the entry *name* of *category* whose content is *data*."""
    return Reference(
        kind=ReferenceKind.LOCAL,
        path=f"components/{category}/{name}",
        name=name,
        reference_point=point,
        data=data,
        component_name=category,
    )


def generate_entries(
    context: "GeneratorContext",
    category: str,
    entries: Mapping[str, Any],
    allow_local: bool,
    alias: bool,
) -> None:
    """Generate every entry of one component category.

    ``$ref`` entries are resolved first:

    * local references raise unless *allow_local*;
    * named targets are registered under their own canonical path. When
      that path differs from the entry's, the entry becomes a type alias of
      the target (*alias*) or a second copy generated from the target's
      content;
    * external-unsupported targets are generated in place from the target's
      content.

    Raises:
        UnsupportedConstructError: For a local reference entry when
            *allow_local* is false.
    """
    entry_point = context.entry_point
    for name, entry in entries.items():
        path = f"components/{category}/{name}"
        point = make_point(entry_point, ("components", category, name))
        if is_reference(entry):
            reference = context.resolver.resolve(entry_point, point, entry)
            if reference.kind is ReferenceKind.LOCAL and not allow_local:
                raise UnsupportedConstructError(
                    f"What is components.{category} local reference? {name}: {entry['$ref']}"
                )
            if reference.kind is not ReferenceKind.EXTERNAL_UNSUPPORTED:
                context.register_reference(reference)
                if reference.path == path or context.is_registered(path):
                    continue
                if alias:
                    context.store.add_statement(
                        path,
                        TypeAliasDeclaration(
                            name=escape_identifier(name),
                            type=TypeReferenceNode(name=context.name_for(point, reference.path)),
                        ),
                    )
                    continue
            point, entry = reference.reference_point, reference.data
        context.register_reference(component_reference(category, name, point, entry))


def resolve_entry(
    context: "GeneratorContext",
    reference: Reference,
    allow_local: bool,
    alias: bool,
) -> Optional[Reference]:
    """Descriptor to build a component entry from, following ``$ref`` entries.

    Used when an entry is first reached through a reference, before its own
    category ran. Returns ``None`` once the entry was written as a type alias
    of its target.

    Raises:
        UnsupportedConstructError: For a local reference entry when
            *allow_local* is false.
    """
    if not is_reference(reference.data):
        return reference
    target = context.resolver.resolve(context.entry_point, reference.reference_point, reference.data)
    if target.kind is ReferenceKind.LOCAL and not allow_local:
        raise UnsupportedConstructError(
            f"What is components.{reference.component_name} local reference? "
            f"{reference.name}: {reference.data['$ref']}"
        )
    if target.kind is not ReferenceKind.EXTERNAL_UNSUPPORTED and target.path != reference.path:
        context.register_reference(target)
        if alias:
            context.store.add_statement(
                reference.path,
                TypeAliasDeclaration(
                    name=escape_identifier(reference.name),
                    type=TypeReferenceNode(name=context.name_for(reference.reference_point, target.path)),
                ),
            )
            return None
    target = context.resolver.follow(context.entry_point, target)
    return reference.model_copy(update={"reference_point": target.reference_point, "data": target.data})


def media_schema(obj: Mapping[str, Any]) -> Optional[Any]:
    """The ``schema`` of a parameter/header, or of its first ``content`` entry."""
    if "schema" in obj:
        return obj["schema"]
    content = obj.get("content")
    if isinstance(content, dict):
        for media_type in content.values():
            if isinstance(media_type, dict) and "schema" in media_type:
                return media_type["schema"]
    return None


def content_type_node(
    context: "GeneratorContext",
    current_point: str,
    content: Mapping[str, Any],
) -> ObjectTypeNode:
    """Object type with one required member per media type of *content*."""
    members = []
    for media_type, media in content.items():
        schema = media.get("schema") if isinstance(media, dict) else None
        type_node: TypeNode = (
            ObjectTypeNode()
            if schema is None
            else convert(context.entry_point, current_point, schema, context)
        )
        members.append(PropertySignature(name=media_type, type=type_node, optional=False))
    return ObjectTypeNode(members=tuple(members))
