"""Convert schema nodes into type nodes.

:func:`convert` walks one schema recursively and returns a
:mod:`~typegen.codegen.nodes` type node. It never inlines a named component:
when it meets a ``$ref`` to a local or external-supported target it asks the
:class:`Context` to register the target (which generates it at most once)
and emits a by-name :class:`~typegen.codegen.nodes.TypeReferenceNode`.
That deferral is what keeps self-referencing schemas finite.

Dispatch order (see :func:`~typegen.parser.guard.classify_schema`):

1. boolean schema -> free-form object ``{}``
2. ``$ref`` -> named reference, or the inlined target for
   external-unsupported pointers
3. ``oneOf`` -> union, 4. ``allOf`` -> intersection, 5. ``anyOf`` -> ``never``
6. no ``type`` -> :class:`~typegen.exceptions.UnsetTypeError`
7. primitives (with literal ``enum`` values), 8. arrays, 9. objects

``nullable: true`` wraps primitives, arrays and declared-property objects in
``T | null``. Objects without ``properties`` and free-form objects
(``additionalProperties: true``) are returned unwrapped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal, Optional, Protocol

from typegen.codegen.nodes import (
    ArrayTypeNode,
    IndexSignature,
    IntersectionTypeNode,
    KeywordTypeNode,
    ObjectTypeNode,
    PrimitiveTypeNode,
    PropertySignature,
    TypeNode,
    TypeReferenceNode,
    UnionTypeNode,
    nullable,
)
from typegen.exceptions import (
    UnknownSchemaShapeError,
    UnsetTypeError,
    UnsupportedConstructError,
)
from typegen.models import Reference, ReferenceKind
from typegen.output import warning
from typegen.parser.guard import SchemaKind, classify_schema, is_number_array, is_string_array
from typegen.parser.reference import ReferenceResolver


class Context(Protocol):
    """What the converter needs from its caller.

    ``resolver`` classifies pointers; ``register_reference`` makes sure the
    target of a named reference is generated; ``name_for`` spells the name
    to emit at the use site.
    """

    @property
    def resolver(self) -> ReferenceResolver: ...

    def register_reference(self, reference: Reference) -> None: ...

    def name_for(self, current_point: str, reference_path: str) -> str: ...


@dataclass(frozen=True)
class ConvertOption:
    """Per-call conversion state.

    Attributes:
        parent: The enclosing schema, reported when a node has no type.
        inlined: Canonical paths of external-unsupported targets currently
            being inlined on this branch.
    """

    parent: Any = None
    inlined: tuple[str, ...] = ()


def _convert_multi(
    entry_point: str,
    current_point: str,
    schemas: list[Any],
    context: Context,
    option: ConvertOption,
    multi_type: Literal["oneOf", "allOf", "anyOf"],
) -> TypeNode:
    member_option = replace(option, parent=None)
    type_nodes = tuple(
        convert(entry_point, current_point, schema, context, member_option) for schema in schemas
    )
    if multi_type == "oneOf":
        return UnionTypeNode(types=type_nodes)
    if multi_type == "allOf":
        return IntersectionTypeNode(types=type_nodes)
    # TODO: compute the real anyOf type once object shapes can be merged
    warning(f"anyOf at {current_point} is emitted as never")
    return KeywordTypeNode(keyword="never")


def _convert_reference(
    entry_point: str,
    current_point: str,
    schema: dict[str, Any],
    context: Context,
    option: ConvertOption,
) -> TypeNode:
    reference = context.resolver.resolve(entry_point, current_point, schema)
    if reference.kind is not ReferenceKind.EXTERNAL_UNSUPPORTED:
        context.register_reference(reference)
        return TypeReferenceNode(name=context.name_for(current_point, reference.path))
    if reference.path in option.inlined:
        raise UnsupportedConstructError(f"Circular inline reference: {reference.path}")
    return convert(
        entry_point,
        reference.reference_point,
        reference.data,
        context,
        ConvertOption(parent=schema, inlined=option.inlined + (reference.path,)),
    )


def _convert_object(
    entry_point: str,
    current_point: str,
    schema: dict[str, Any],
    context: Context,
    option: ConvertOption,
) -> TypeNode:
    properties = schema.get("properties")
    if properties is None:
        return ObjectTypeNode()
    # https://swagger.io/docs/specification/data-models/dictionaries/#free-form
    additional = schema.get("additionalProperties")
    if additional is True:
        return ObjectTypeNode()

    required: list[str] = schema.get("required") or []
    member_option = replace(option, parent=properties)
    members: list[PropertySignature | IndexSignature] = []
    for name, property_schema in properties.items():
        members.append(
            PropertySignature(
                name=name,
                type=convert(entry_point, current_point, property_schema, context, member_option),
                optional=name not in required,
                comment=property_schema.get("description") if isinstance(property_schema, dict) else None,
            )
        )
    if additional is not None and additional is not False:
        members.append(
            IndexSignature(
                name="key",
                type=convert(entry_point, current_point, additional, context, member_option),
            )
        )
    return nullable(ObjectTypeNode(members=tuple(members)), bool(schema.get("nullable")))


def convert(
    entry_point: str,
    current_point: str,
    schema: Any,
    context: Context,
    option: Optional[ConvertOption] = None,
) -> TypeNode:
    """Convert *schema* found at *current_point* into a type node.

    Args:
        entry_point: Path or URL of the entry document.
        current_point: Document point of the declaration being generated;
            reference names are computed relative to it.
        schema: A schema dict, a ``{"$ref": ...}`` dict or a boolean schema.
        context: Resolver plus reference registration callbacks.
        option: Parent schema and inline stack for this branch.

    Raises:
        UnsetTypeError: If a node has neither ``type`` nor ``$ref``.
        UnknownSchemaShapeError: If ``type`` is not a recognised value.
        UnsupportedConstructError: For list or boolean ``items`` and for
            circular inline references.
    """
    option = option or ConvertOption()
    kind = classify_schema(schema)

    if kind is SchemaKind.FREE_FORM:
        return ObjectTypeNode()
    if kind is SchemaKind.REFERENCE:
        return _convert_reference(entry_point, current_point, schema, context, option)
    if kind is SchemaKind.ONE_OF:
        return _convert_multi(entry_point, current_point, schema["oneOf"], context, option, "oneOf")
    if kind is SchemaKind.ALL_OF:
        return _convert_multi(entry_point, current_point, schema["allOf"], context, option, "allOf")
    if kind is SchemaKind.ANY_OF:
        return _convert_multi(entry_point, current_point, schema["anyOf"], context, option, "anyOf")
    if kind is SchemaKind.UNSET:
        raise UnsetTypeError(
            schema,
            parent=option.parent,
            entry_point=entry_point,
            current_point=current_point,
        )

    is_nullable = bool(schema.get("nullable"))
    if kind is SchemaKind.BOOLEAN:
        return nullable(PrimitiveTypeNode(type="boolean"), is_nullable)
    if kind is SchemaKind.NULL:
        return PrimitiveTypeNode(type="null")
    if kind is SchemaKind.INTEGER or kind is SchemaKind.NUMBER:
        items = schema.get("enum")
        if items and is_number_array(items):
            type_node = PrimitiveTypeNode(type=kind.value, enum=tuple(items))
        else:
            type_node = PrimitiveTypeNode(type=kind.value)
        return nullable(type_node, is_nullable)
    if kind is SchemaKind.STRING:
        items = schema.get("enum")
        if items and is_string_array(items):
            type_node = PrimitiveTypeNode(type="string", enum=tuple(items))
        else:
            type_node = PrimitiveTypeNode(type="string")
        return nullable(type_node, is_nullable)
    if kind is SchemaKind.ARRAY:
        items = schema.get("items")
        if isinstance(items, (list, bool)):
            raise UnsupportedConstructError(f"schema.items = {items!r}")
        if items is None:
            element: TypeNode = KeywordTypeNode(keyword="undefined")
        else:
            element = convert(entry_point, current_point, items, context, replace(option, parent=schema))
        return nullable(ArrayTypeNode(element=element), is_nullable)
    if kind is SchemaKind.OBJECT:
        return _convert_object(entry_point, current_point, schema, context, option)
    raise UnknownSchemaShapeError(schema)
