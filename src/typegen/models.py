"""Canonical Pydantic models shared across typegen modules.

The models fall into three groups:

**Configuration** -- :class:`GeneratorConfig`, read from ``./typegen.json``
and overridden by environment variables and CLI flags.

**Reference and operation state** -- :class:`ReferenceKind`,
:class:`Reference` (the descriptor produced by the reference resolver) and
:class:`OperationState` (per-operation metadata merged by the store).

**Driver output** -- :class:`GenerationResult`.

The fixed component registry (:data:`COMPONENT_NAMES`) also lives here since
the resolver, the naming module and the store all key off it.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from typegen.codegen.nodes import Statement


COMPONENT_NAMES: tuple[str, ...] = (
    "schemas",
    "headers",
    "responses",
    "parameters",
    "requestBodies",
    "securitySchemes",
    "pathItems",
)
"""Component categories in emission order. Each owns one top-level namespace."""


# --- Configuration ---


class GeneratorConfig(BaseModel):
    """Settings for one generation run.

    Example::

        GeneratorConfig(input="openapi.yml", output="src/api.ts", operations=False)
    """

    input: Optional[str] = Field(
        default=None, description="Entry document: file path, URL, or '-' for stdin"
    )
    output: Optional[str] = Field(
        default=None, description="Output file path (stdout when unset)"
    )
    operations: bool = Field(
        default=True, description="Emit Parameter$/RequestBody$/Response$ declarations"
    )
    banner: bool = Field(default=True, description="Prefix output with a generated-by banner")
    indent: int = Field(default=2, ge=1, le=8, description="Spaces per indentation level")


# --- References ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised on OpenAPI path-item objects."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class ReferenceKind(str, enum.Enum):
    """How a ``$ref`` pointer is turned into a type.

    ``LOCAL`` and ``EXTERNAL_SUPPORTED`` targets become named declarations;
    ``EXTERNAL_UNSUPPORTED`` targets are inlined at the use site.
    """

    LOCAL = "local"
    EXTERNAL_SUPPORTED = "external-supported"
    EXTERNAL_UNSUPPORTED = "external-unsupported"


class Reference(BaseModel):
    """Descriptor for a resolved ``$ref`` pointer.

    Two descriptors with the same :attr:`path` denote the same entity; the
    context bridge deduplicates on it.
    """

    model_config = ConfigDict(frozen=True)

    kind: ReferenceKind
    path: str = Field(
        description="Canonical path, e.g. 'components/schemas/Pet' or a full document point"
    )
    name: str = Field(description="Raw declaration name (last path segment or file stem)")
    reference_point: str = Field(description="Document point of the target")
    data: Any = Field(default=None, description="The target object")
    component_name: Optional[str] = Field(
        default=None, description="Owning component category, when there is one"
    )


# --- Operations ---


class OperationState(BaseModel):
    """Metadata collected for one operation, merged incrementally by the store."""

    http_method: str
    request_uri: str
    comment: Optional[str] = None
    deprecated: bool = False
    parameter_name: Optional[str] = None
    request_body_name: Optional[str] = None
    response_names: list[str] = Field(default_factory=list)


# --- Driver output ---


class GenerationResult(BaseModel):
    """Everything one run produced, in emission order."""

    entry_point: str
    statements: list[Statement] = Field(default_factory=list)
    additional_statements: list[Statement] = Field(default_factory=list)
    operations: dict[str, OperationState] = Field(default_factory=dict)
