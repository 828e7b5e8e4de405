"""Type representation and declaration nodes produced by the converter.

Two families of frozen Pydantic models live here:

**Type nodes** -- the right-hand side of a declaration:
    :class:`PrimitiveTypeNode`, :class:`KeywordTypeNode`,
    :class:`ObjectTypeNode`, :class:`ArrayTypeNode`, :class:`UnionTypeNode`,
    :class:`IntersectionTypeNode` and :class:`TypeReferenceNode`, plus the
    object members :class:`PropertySignature` and :class:`IndexSignature`.

**Declarations** -- the statements held by the namespace store and handed to
the printer:
    :class:`NamespaceDeclaration`, :class:`TypeAliasDeclaration`,
    :class:`InterfaceDeclaration` and :class:`IndexSignatureDeclaration`.

Every model carries a ``kind`` literal used as the discriminator of the
:data:`TypeNode`, :data:`Member` and :data:`Statement` unions, so two nodes
built from the same schema compare equal structurally.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class StatementKind(str, enum.Enum):
    """Kinds of node that can sit in the namespace tree."""

    NAMESPACE = "namespace"
    TYPE_ALIAS = "typeAlias"
    INTERFACE = "interface"
    INDEX_SIGNATURE = "indexSignature"


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Type nodes ---


class PrimitiveTypeNode(_Node):
    """A primitive type, optionally restricted to literal ``enum`` values."""

    kind: Literal["primitive"] = "primitive"
    type: Literal["boolean", "null", "integer", "number", "string"]
    enum: Optional[tuple[Union[str, int, float], ...]] = None


class KeywordTypeNode(_Node):
    """``undefined`` (array without ``items``) or ``never`` (``anyOf``)."""

    kind: Literal["keyword"] = "keyword"
    keyword: Literal["undefined", "never"]


class PropertySignature(_Node):
    kind: Literal["property"] = "property"
    name: str
    type: TypeNode
    optional: bool = False
    comment: Optional[str] = None


class IndexSignature(_Node):
    kind: Literal["index"] = "index"
    name: str = "key"
    type: TypeNode


Member = Annotated[Union[PropertySignature, IndexSignature], Field(discriminator="kind")]


class ObjectTypeNode(_Node):
    """An object literal type. No members means a free-form object."""

    kind: Literal["object"] = "object"
    members: tuple[Member, ...] = ()


class ArrayTypeNode(_Node):
    kind: Literal["array"] = "array"
    element: TypeNode


class UnionTypeNode(_Node):
    kind: Literal["union"] = "union"
    types: tuple[TypeNode, ...]


class IntersectionTypeNode(_Node):
    kind: Literal["intersection"] = "intersection"
    types: tuple[TypeNode, ...]


class TypeReferenceNode(_Node):
    """A by-name reference to another declaration (``Pet``, ``Schemas.Pet``)."""

    kind: Literal["reference"] = "reference"
    name: str


TypeNode = Annotated[
    Union[
        PrimitiveTypeNode,
        KeywordTypeNode,
        ObjectTypeNode,
        ArrayTypeNode,
        UnionTypeNode,
        IntersectionTypeNode,
        TypeReferenceNode,
    ],
    Field(discriminator="kind"),
]


# --- Declarations ---


class TypeAliasDeclaration(_Node):
    kind: Literal["typeAlias"] = "typeAlias"
    name: str
    type: TypeNode
    export: bool = True
    comment: Optional[str] = None
    deprecated: bool = False


class InterfaceDeclaration(_Node):
    kind: Literal["interface"] = "interface"
    name: str
    members: tuple[Member, ...] = ()
    export: bool = True
    comment: Optional[str] = None
    deprecated: bool = False


class IndexSignatureDeclaration(_Node):
    """A keyed map entry stored in the tree for lookups; never emitted on its own."""

    kind: Literal["indexSignature"] = "indexSignature"
    name: str
    type: TypeNode


class NamespaceDeclaration(_Node):
    kind: Literal["namespace"] = "namespace"
    name: str
    statements: tuple[Statement, ...] = ()
    export: bool = True
    comment: Optional[str] = None
    deprecated: bool = False


Statement = Annotated[
    Union[
        NamespaceDeclaration,
        TypeAliasDeclaration,
        InterfaceDeclaration,
        IndexSignatureDeclaration,
    ],
    Field(discriminator="kind"),
]


for _model in (
    PropertySignature,
    IndexSignature,
    ObjectTypeNode,
    ArrayTypeNode,
    UnionTypeNode,
    IntersectionTypeNode,
    TypeAliasDeclaration,
    InterfaceDeclaration,
    IndexSignatureDeclaration,
    NamespaceDeclaration,
):
    _model.model_rebuild()


def nullable(type_node: TypeNode, is_nullable: bool) -> TypeNode:
    """Wrap *type_node* in ``T | null`` when *is_nullable* is true."""
    if is_nullable:
        return UnionTypeNode(types=(type_node, PrimitiveTypeNode(type="null")))
    return type_node
