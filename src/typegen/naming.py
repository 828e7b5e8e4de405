"""Identifier policy for generated declarations.

Maps canonical reference paths (``components/schemas/Pet``) to the names
written into the output: category namespaces (``Schemas``), escaped
declaration names (``Pet``) and namespace-qualified names
(``Schemas.Pet``). The context bridge decides *which* form a use site gets;
this module only knows how each form is spelled.
"""

from __future__ import annotations

import re

from typegen.exceptions import UnsupportedPathError
from typegen.parser.pointer import split_path

COMPONENT_NAMESPACES: dict[str, str] = {
    "schemas": "Schemas",
    "headers": "Headers",
    "responses": "Responses",
    "parameters": "Parameters",
    "requestBodies": "RequestBodies",
    "securitySchemes": "SecuritySchemes",
    "pathItems": "PathItems",
}

_INVALID_IDENT_RE = re.compile(r"[^A-Za-z0-9_$]")
_IDENT_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def escape_identifier(name: str) -> str:
    """Turn *name* into a valid identifier.

    Example::

        >>> escape_identifier("Pet-Status")
        'Pet$Status'
        >>> escape_identifier("200")
        '$200'
    """
    escaped = _INVALID_IDENT_RE.sub("$", name)
    if not escaped or escaped[0].isdigit():
        escaped = "$" + escaped
    return escaped


def is_identifier(name: str) -> bool:
    return bool(_IDENT_RE.match(name))


def namespace_name(category: str) -> str:
    """Return the namespace identifier for a component category."""
    return COMPONENT_NAMESPACES.get(category, escape_identifier(category))


def _component_segments(reference_path: str) -> tuple[str, ...]:
    segments = split_path(reference_path)
    if len(segments) < 3 or segments[0] != "components":
        raise UnsupportedPathError(f"Not a component path: {reference_path}")
    return segments


def declaration_name(reference_path: str) -> str:
    """Bare name of the declaration at *reference_path*."""
    return escape_identifier(_component_segments(reference_path)[-1])


def qualified_name(reference_path: str) -> str:
    """Namespace-qualified name, e.g. ``Schemas.Pet`` or ``Responses.NotFound.Content``."""
    segments = _component_segments(reference_path)
    names = [namespace_name(segments[1])]
    names.extend(escape_identifier(segment) for segment in segments[2:])
    return ".".join(names)
