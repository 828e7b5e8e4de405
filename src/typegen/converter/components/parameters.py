"""Generate ``components.parameters`` into the ``Parameters`` namespace.

Each parameter becomes a type alias of its schema. The category accepts a
mapping (``name -> parameter``) or a list of parameter objects keyed by
their ``name``. A parameter entry that is itself a local reference is
rejected: there is nothing for it to declare.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Sequence

from typegen.codegen.nodes import NamespaceDeclaration, TypeAliasDeclaration
from typegen.converter.components.base import (
    component_reference,
    generate_entries,
    media_schema,
    resolve_entry,
)
from typegen.converter.type_node import convert
from typegen.exceptions import UnsupportedConstructError
from typegen.models import Reference, ReferenceKind
from typegen.naming import escape_identifier, namespace_name
from typegen.parser.guard import is_reference
from typegen.parser.pointer import make_point

if TYPE_CHECKING:
    from typegen.converter.context import GeneratorContext

CATEGORY = "parameters"


def namespace_declaration() -> NamespaceDeclaration:
    return NamespaceDeclaration(
        name=namespace_name(CATEGORY),
        comment="@see https://github.com/OAI/OpenAPI-Specification/blob/main/versions/3.1.0.md#parameter-object",
    )


def generate_type_alias(
    context: "GeneratorContext",
    current_point: str,
    name: str,
    parameter: Mapping[str, Any],
) -> TypeAliasDeclaration:
    """Type alias for one parameter object.

    Raises:
        UnsupportedConstructError: If the parameter has neither ``schema``
            nor a ``content`` schema.
    """
    schema = media_schema(parameter)
    if schema is None:
        raise UnsupportedConstructError(f"Parameter '{name}' has no schema")
    return TypeAliasDeclaration(
        name=escape_identifier(name),
        type=convert(context.entry_point, current_point, schema, context),
        comment=parameter.get("description"),
        deprecated=bool(parameter.get("deprecated")),
    )


def materialize(context: "GeneratorContext", reference: Reference) -> None:
    resolved = resolve_entry(context, reference, allow_local=False, alias=True)
    if resolved is None:
        return
    reference = resolved
    context.store.add_statement(
        reference.path,
        generate_type_alias(context, reference.reference_point, reference.name, reference.data),
    )


def generate_namespace(context: "GeneratorContext", parameters: Mapping[str, Any]) -> None:
    generate_entries(context, CATEGORY, parameters, allow_local=False, alias=True)


def generate_namespace_with_list(context: "GeneratorContext", parameters: Sequence[Any]) -> None:
    """Generate parameters given as a list, keyed by each parameter's ``name``."""
    entry_point = context.entry_point
    for index, parameter in enumerate(parameters):
        point = make_point(entry_point, ("components", CATEGORY, str(index)))
        if is_reference(parameter):
            reference = context.resolver.resolve(entry_point, point, parameter)
            if reference.kind is ReferenceKind.LOCAL:
                raise UnsupportedConstructError(
                    f"What is components.parameters local reference? {parameter['$ref']}"
                )
            name, point, parameter = reference.name, reference.reference_point, reference.data
        else:
            name = parameter["name"]
        context.register_reference(component_reference(CATEGORY, name, point, parameter))
