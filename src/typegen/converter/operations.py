"""Walk ``paths`` and collect per-operation declarations.

For every operation that has an ``operationId`` the walker records an
:class:`~typegen.models.OperationState` in the store and adds free-standing
declarations outside the component namespaces:

* ``Parameter$<operationId>`` -- interface of all path- and
  operation-level parameters (operation-level wins on the same
  ``name``/``in`` pair);
* ``RequestBody$<operationId>`` -- the request body type;
* ``Response$<operationId>$Status$<code>`` -- the content of each ``2xx``
  and ``default`` response.

Referenced parameters, bodies and responses are registered through the
context bridge and typed by name (``Parameters.PetId``), so they share the
declarations in the component namespaces.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from typegen.codegen.nodes import (
    InterfaceDeclaration,
    ObjectTypeNode,
    PropertySignature,
    Statement,
    StatementKind,
    TypeAliasDeclaration,
    TypeNode,
    TypeReferenceNode,
)
from typegen.converter.components.base import content_type_node, media_schema
from typegen.converter.context import GeneratorContext
from typegen.converter.type_node import convert
from typegen.exceptions import UnsupportedConstructError
from typegen.models import HTTPMethod, ReferenceKind
from typegen.naming import escape_identifier
from typegen.output import debug
from typegen.parser.guard import is_reference
from typegen.parser.pointer import make_point, split_point


def _child_point(point: str, *segments: str) -> str:
    document, parent = split_point(point)
    return make_point(document, parent + segments)


def _parameter_member(
    context: GeneratorContext,
    point: str,
    parameter: Any,
) -> tuple[tuple[str, str], PropertySignature]:
    type_node: TypeNode
    if is_reference(parameter):
        reference = context.resolver.resolve(context.entry_point, point, parameter)
        if reference.kind is ReferenceKind.EXTERNAL_UNSUPPORTED:
            parameter, point = reference.data, reference.reference_point
            type_node = _inline_parameter_type(context, point, parameter)
        else:
            if reference.kind is ReferenceKind.LOCAL and reference.component_name == "parameters":
                parameter = context.store.get_parameter(reference.path)
            else:
                parameter = reference.data
            if is_reference(parameter):
                parameter = context.resolver.follow(context.entry_point, reference).data
            context.register_reference(reference)
            type_node = TypeReferenceNode(name=context.name_for(point, reference.path))
    else:
        type_node = _inline_parameter_type(context, point, parameter)

    if not isinstance(parameter, dict) or not parameter.get("name"):
        raise UnsupportedConstructError(f"Parameter has no name: {point}")
    location = parameter.get("in", "query")
    member = PropertySignature(
        name=parameter["name"],
        type=type_node,
        optional=not (parameter.get("required") or location == "path"),
        comment=parameter.get("description"),
    )
    return (parameter["name"], location), member


def _inline_parameter_type(context: GeneratorContext, point: str, parameter: Mapping[str, Any]) -> TypeNode:
    schema = media_schema(parameter)
    if schema is None:
        raise UnsupportedConstructError(f"Parameter '{parameter.get('name')}' has no schema")
    return convert(context.entry_point, point, schema, context)


def _parameter_statement(
    context: GeneratorContext,
    path_point: str,
    point: str,
    operation_id: str,
    path_parameters: Sequence[Any],
    operation_parameters: Sequence[Any],
) -> Optional[Statement]:
    members: dict[tuple[str, str], PropertySignature] = {}
    for base, parameters in ((path_point, path_parameters), (point, operation_parameters)):
        for index, parameter in enumerate(parameters):
            key, member = _parameter_member(context, _child_point(base, "parameters", str(index)), parameter)
            members[key] = member
    if not members:
        return None
    return InterfaceDeclaration(
        name=f"Parameter${escape_identifier(operation_id)}",
        members=tuple(members.values()),
    )


def _request_body_statement(
    context: GeneratorContext,
    point: str,
    operation_id: str,
    request_body: Any,
) -> Statement:
    name = f"RequestBody${escape_identifier(operation_id)}"
    if is_reference(request_body):
        reference = context.resolver.resolve(context.entry_point, point, request_body)
        if reference.kind is not ReferenceKind.EXTERNAL_UNSUPPORTED:
            context.register_reference(reference)
            return TypeAliasDeclaration(
                name=name, type=TypeReferenceNode(name=context.name_for(point, reference.path))
            )
        reference = context.resolver.follow(context.entry_point, reference)
        point, request_body = reference.reference_point, reference.data
    return InterfaceDeclaration(
        name=name,
        members=content_type_node(context, point, request_body.get("content") or {}).members,
        comment=request_body.get("description"),
    )


def _response_statement(
    context: GeneratorContext,
    point: str,
    name: str,
    response: Any,
) -> Optional[Statement]:
    if is_reference(response):
        reference = context.resolver.resolve(context.entry_point, point, response)
        if reference.kind is not ReferenceKind.EXTERNAL_UNSUPPORTED:
            context.register_reference(reference)
            if not context.store.has_statement(f"{reference.path}/Content", [StatementKind.INTERFACE]):
                return None
            return TypeAliasDeclaration(
                name=name,
                type=TypeReferenceNode(name=context.name_for(point, f"{reference.path}/Content")),
            )
        reference = context.resolver.follow(context.entry_point, reference)
        point, response = reference.reference_point, reference.data
    content = response.get("content")
    if not content:
        return None
    type_node: ObjectTypeNode = content_type_node(context, point, content)
    return InterfaceDeclaration(name=name, members=type_node.members, comment=response.get("description"))


def generate_operation(
    context: GeneratorContext,
    path_point: str,
    point: str,
    http_method: HTTPMethod,
    request_uri: str,
    operation: Mapping[str, Any],
    path_parameters: Sequence[Any],
) -> None:
    """Record one operation and add its free-standing declarations."""
    operation_id = operation["operationId"]
    store = context.store
    store.update_operation_state(
        http_method.value,
        request_uri,
        operation_id,
        {
            "comment": operation.get("summary") or operation.get("description"),
            "deprecated": bool(operation.get("deprecated")),
        },
    )

    statements: list[Statement] = []
    parameter_statement = _parameter_statement(
        context, path_point, point, operation_id, path_parameters, operation.get("parameters") or []
    )
    if parameter_statement is not None:
        statements.append(parameter_statement)
        store.update_operation_state(
            http_method.value, request_uri, operation_id, {"parameter_name": parameter_statement.name}
        )

    request_body = operation.get("requestBody")
    if request_body is not None:
        body_statement = _request_body_statement(
            context, _child_point(point, "requestBody"), operation_id, request_body
        )
        statements.append(body_statement)
        store.update_operation_state(
            http_method.value, request_uri, operation_id, {"request_body_name": body_statement.name}
        )

    response_names: list[str] = []
    for status, response in (operation.get("responses") or {}).items():
        status = str(status)
        if not (status.startswith("2") or status == "default"):
            continue
        name = f"Response${escape_identifier(operation_id)}$Status${escape_identifier(status).lstrip('$')}"
        response_statement = _response_statement(
            context, _child_point(point, "responses", status), name, response
        )
        if response_statement is not None:
            statements.append(response_statement)
            response_names.append(name)
    if response_names:
        store.update_operation_state(
            http_method.value, request_uri, operation_id, {"response_names": response_names}
        )

    store.add_additional_statements(statements)


def generate_operations(context: GeneratorContext) -> None:
    """Walk every path item of the entry document in document order."""
    entry_point = context.entry_point
    paths = context.store.document.get("paths") or {}
    for request_uri, path_item in paths.items():
        point = make_point(entry_point, ("paths", request_uri))
        if is_reference(path_item):
            reference = context.resolver.resolve(entry_point, point, path_item)
            if reference.kind is ReferenceKind.LOCAL and reference.component_name == "pathItems":
                path_item = context.store.get_path_item(reference.path)
            else:
                path_item = reference.data
            point = reference.reference_point

        path_parameters = path_item.get("parameters") or []
        for http_method in HTTPMethod:
            operation = path_item.get(http_method.value)
            if not isinstance(operation, dict):
                continue
            if not operation.get("operationId"):
                debug(f"Skipping {http_method.value.upper()} {request_uri}: no operationId")
                continue
            generate_operation(
                context,
                point,
                _child_point(point, http_method.value),
                http_method,
                request_uri,
                operation,
                path_parameters,
            )
