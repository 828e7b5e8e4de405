"""Path-keyed tree of namespaces and declarations.

Each :class:`NamespaceTree` holds its children keyed by ``(kind, name)``,
so a namespace and a type alias may share a name (``Responses.NotFound``
namespace next to a ``NotFound`` alias) while two declarations of the same
kind at the same path replace one another. Children keep insertion order;
replacing a child keeps its original position.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from typegen.codegen.nodes import (
    IndexSignatureDeclaration,
    InterfaceDeclaration,
    NamespaceDeclaration,
    Statement,
    StatementKind,
    TypeAliasDeclaration,
)

Declaration = Union[TypeAliasDeclaration, InterfaceDeclaration, IndexSignatureDeclaration]
Child = Union["NamespaceTree", Declaration]


def kind_of(node: Child) -> StatementKind:
    if isinstance(node, NamespaceTree):
        return StatementKind.NAMESPACE
    return StatementKind(node.kind)


class NamespaceTree:
    """A namespace node.

    Args:
        name: The path segment this node is stored under.
        params: The namespace declaration supplying the emitted name, doc
            comment and deprecation flag. Intermediate namespaces created
            implicitly by :meth:`set` have none and are emitted under
            :attr:`name`.
    """

    def __init__(self, name: str, params: Optional[NamespaceDeclaration] = None) -> None:
        self.name = name
        self.params = params
        self._children: dict[tuple[StatementKind, str], Child] = {}

    @classmethod
    def from_declaration(cls, name: str, declaration: NamespaceDeclaration) -> "NamespaceTree":
        tree = cls(name, params=declaration)
        for statement in declaration.statements:
            if isinstance(statement, NamespaceDeclaration):
                tree.set((statement.name,), cls.from_declaration(statement.name, statement))
            else:
                tree.set((statement.name,), statement)
        return tree

    def children(self) -> list[Child]:
        return list(self._children.values())

    def set(self, segments: Sequence[str], node: Child) -> None:
        """Store *node* at *segments*, creating intermediate namespaces."""
        parent = self
        for segment in segments[:-1]:
            key = (StatementKind.NAMESPACE, segment)
            child = parent._children.get(key)
            if child is None:
                child = NamespaceTree(segment)
                parent._children[key] = child
            parent = child  # type: ignore[assignment]
        parent._children[(kind_of(node), segments[-1])] = node

    def get(self, segments: Sequence[str], kind: StatementKind) -> Optional[Child]:
        """Return the node of *kind* at *segments*, or ``None``."""
        parent: Child = self
        for segment in segments[:-1]:
            if not isinstance(parent, NamespaceTree):
                return None
            parent = parent._children.get((StatementKind.NAMESPACE, segment))  # type: ignore[assignment]
            if parent is None:
                return None
        if not isinstance(parent, NamespaceTree):
            return None
        return parent._children.get((kind, segments[-1]))

    def to_declaration(self) -> NamespaceDeclaration:
        """Convert this subtree into an exported namespace declaration.

        Children are visited depth-first in insertion order. Index-signature
        nodes are skipped: they are only meaningful inside an interface.
        """
        statements: list[Statement] = []
        for child in self._children.values():
            if isinstance(child, NamespaceTree):
                statements.append(child.to_declaration())
            elif isinstance(child, (TypeAliasDeclaration, InterfaceDeclaration)):
                statements.append(child)
        if self.params is not None:
            return NamespaceDeclaration(
                name=self.params.name,
                statements=tuple(statements),
                comment=self.params.comment,
                deprecated=self.params.deprecated,
            )
        return NamespaceDeclaration(name=self.name, statements=tuple(statements))
