"""Per-run registry of generated declarations.

The :class:`Store` owns three things for one generation run:

* the namespace tree, whose top level holds one namespace per component
  category (``schemas`` -> ``Schemas``) and whose leaves are the generated
  declarations, keyed by the document path they came from
  (``components/schemas/Pet``);
* per-operation metadata merged incrementally by operation id;
* free-standing declarations that live outside the component namespaces.

At the end of the run :meth:`Store.get_root_statements` walks the fixed
component registry and returns the namespaces in emission order. A store is
never shared between runs.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Union

from typegen.codegen.nodes import (
    NamespaceDeclaration,
    Statement,
    StatementKind,
)
from typegen.exceptions import NotFoundError, UnsupportedPathError
from typegen.models import COMPONENT_NAMES, OperationState
from typegen.naming import namespace_name
from typegen.parser.pointer import get_by_segments, split_path
from typegen.walker.structure import Child, Declaration, NamespaceTree

ComponentParams = Union[Declaration, NamespaceDeclaration]


class Store:
    """Mutable, path-keyed registry of declarations.

    Args:
        document: The parsed entry document. Used for direct lookups of
            path items and parameters.

    Example::

        store = Store(document)
        store.add_component("schemas", NamespaceDeclaration(name="Schemas"))
        store.add_statement(
            "components/schemas/Pet",
            TypeAliasDeclaration(name="Pet", type=PrimitiveTypeNode(type="string")),
        )
        store.has_statement("components/schemas/Pet", [StatementKind.TYPE_ALIAS])  # True
    """

    def __init__(self, document: dict[str, Any]) -> None:
        self._document = document
        self._tree = NamespaceTree("components")
        self._operations: dict[str, OperationState] = {}
        self._additional_statements: list[Statement] = []

    @property
    def document(self) -> dict[str, Any]:
        return self._document

    # ------------------------------------------------------------------ #
    # Namespace tree
    # ------------------------------------------------------------------ #

    @staticmethod
    def _tree_segments(path: str) -> tuple[str, ...]:
        segments = split_path(path)
        if segments[0] != "components":
            raise UnsupportedPathError(f"Path does not start with 'components': path={path}")
        if len(segments) < 3:
            raise UnsupportedPathError(f"Path does not name a component entry: path={path}")
        return segments[1:]

    @staticmethod
    def _check_category(category: str) -> None:
        if category not in COMPONENT_NAMES:
            raise UnsupportedPathError(f"Unknown component category: {category}")

    def add_component(self, category: str, statement: NamespaceDeclaration) -> None:
        """Create (or reset) the top-level namespace of *category*."""
        self._check_category(category)
        self._tree.set((category,), NamespaceTree.from_declaration(category, statement))

    def has_component(self, category: str) -> bool:
        return self._tree.get((category,), StatementKind.NAMESPACE) is not None

    def add_statement(self, path: str, statement: ComponentParams) -> None:
        """Insert *statement* at *path* (``components/<category>/<name>[/...]``).

        The category namespace is created on demand when no generator has
        registered it yet.

        Raises:
            UnsupportedPathError: If *path* lies outside ``components`` or
                names an unknown category.
        """
        segments = self._tree_segments(path)
        self._check_category(segments[0])
        if not self.has_component(segments[0]):
            self.add_component(segments[0], NamespaceDeclaration(name=namespace_name(segments[0])))
        node: Child
        if isinstance(statement, NamespaceDeclaration):
            node = NamespaceTree.from_declaration(segments[-1], statement)
        else:
            node = statement
        self._tree.set(segments, node)

    def has_statement(self, path: str, kinds: Iterable[StatementKind]) -> bool:
        """Whether a node of any of *kinds* exists at *path*."""
        segments = self._tree_segments(path)
        return any(self._tree.get(segments, kind) is not None for kind in kinds)

    def get_statement(self, path: str, kind: StatementKind) -> Optional[Child]:
        """Return the node of *kind* at *path*, or ``None``."""
        return self._tree.get(self._tree_segments(path), kind)

    def get_root_statements(self) -> list[Statement]:
        """One namespace declaration per registered category, in registry order."""
        statements: list[Statement] = []
        for category in COMPONENT_NAMES:
            tree = self._tree.get((category,), StatementKind.NAMESPACE)
            if isinstance(tree, NamespaceTree):
                statements.append(tree.to_declaration())
        return statements

    # ------------------------------------------------------------------ #
    # Free-standing statements
    # ------------------------------------------------------------------ #

    def add_additional_statements(self, statements: Iterable[Statement]) -> None:
        self._additional_statements.extend(statements)

    def get_additional_statements(self) -> list[Statement]:
        return list(self._additional_statements)

    # ------------------------------------------------------------------ #
    # Operations
    # ------------------------------------------------------------------ #

    def update_operation_state(
        self,
        http_method: str,
        request_uri: str,
        operation_id: str,
        new_state: dict[str, Any],
    ) -> None:
        """Merge *new_state* into the state of *operation_id*.

        The first update creates the state from *http_method* and
        *request_uri*; later updates only overwrite the given fields.
        """
        current = self._operations.get(operation_id)
        if current is not None:
            self._operations[operation_id] = current.model_copy(update=new_state)
        else:
            self._operations[operation_id] = OperationState(
                http_method=http_method, request_uri=request_uri, **new_state
            )

    def get_operation_state(self, operation_id: str) -> Optional[OperationState]:
        return self._operations.get(operation_id)

    @property
    def operations(self) -> dict[str, OperationState]:
        return dict(self._operations)

    # ------------------------------------------------------------------ #
    # Document lookups
    # ------------------------------------------------------------------ #

    def _lookup(self, local_path: str, prefix: str) -> Any:
        segments = split_path(local_path)
        if segments[:2] != tuple(prefix.split("/")) or len(segments) < 3:
            raise UnsupportedPathError(f"Only use start with '{prefix}': {local_path}")
        result = get_by_segments(self._document, segments, label=local_path)
        if result is None:
            raise NotFoundError(f"Not found {local_path}")
        return result

    def get_path_item(self, local_path: str) -> dict[str, Any]:
        """Return the path item at ``components/pathItems/<name>``.

        Raises:
            NotFoundError: If nothing exists at *local_path*.
        """
        return self._lookup(local_path, "components/pathItems")

    def get_parameter(self, local_path: str) -> dict[str, Any]:
        """Return the parameter at ``components/parameters/<name>``.

        Raises:
            NotFoundError: If nothing exists at *local_path*.
        """
        return self._lookup(local_path, "components/parameters")

