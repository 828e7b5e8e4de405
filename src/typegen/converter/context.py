"""Bridge between the type converter and the namespace store.

:class:`GeneratorContext` is the only object the converter talks to when it
meets a named reference. It offers two operations:

* :meth:`GeneratorContext.register_reference` -- make sure the referenced
  component exists in the store, generating it through the matching
  component generator the first time it is seen. Every component entry,
  whether reached from a ``$ref`` or from a generator iterating its own
  category, goes through this guard, so each canonical path is generated at
  most once.
* :meth:`GeneratorContext.name_for` -- the identifier to emit at a use
  site: the bare name inside the referenced entry's own category namespace,
  the namespace-qualified name everywhere else.

Paths whose generation is in progress are tracked in a pending set; a
reference back to one of them (a cycle) is answered with a name only.
"""

from __future__ import annotations

from typing import Callable

from typegen.codegen.nodes import StatementKind
from typegen.converter import components
from typegen.exceptions import UnsupportedConstructError
from typegen.models import Reference, ReferenceKind
from typegen.naming import declaration_name, qualified_name
from typegen.output import debug
from typegen.parser.pointer import split_path, split_point
from typegen.parser.reference import ReferenceResolver
from typegen.walker.store import Store

_DECLARED_KINDS = (
    StatementKind.INTERFACE,
    StatementKind.TYPE_ALIAS,
    StatementKind.NAMESPACE,
)


class GeneratorContext:
    """Per-run context handed to the converter and component generators.

    Args:
        entry_point: Path or URL of the entry document.
        store: The run's namespace store.
        resolver: The run's reference resolver.
    """

    def __init__(self, entry_point: str, store: Store, resolver: ReferenceResolver) -> None:
        self._entry_point = entry_point
        self._store = store
        self._resolver = resolver
        self._pending: set[str] = set()

    @property
    def entry_point(self) -> str:
        return self._entry_point

    @property
    def store(self) -> Store:
        return self._store

    @property
    def resolver(self) -> ReferenceResolver:
        return self._resolver

    def is_registered(self, path: str) -> bool:
        """Whether *path* is generated or being generated."""
        return path in self._pending or self._store.has_statement(path, _DECLARED_KINDS)

    def register_reference(self, reference: Reference) -> None:
        """Generate the component behind *reference* unless it already exists.

        Raises:
            UnsupportedConstructError: If *reference* has no owning category
                (external-unsupported targets are inlined, never registered)
                or its category has no generator.
        """
        if reference.kind is ReferenceKind.EXTERNAL_UNSUPPORTED or reference.component_name is None:
            raise UnsupportedConstructError(
                f"Only component references can be registered: {reference.path}"
            )
        if self.is_registered(reference.path):
            return
        materialize = self._materializer(reference.component_name)
        debug(f"Generating {reference.path} from {reference.reference_point}")
        self._pending.add(reference.path)
        try:
            materialize(self, reference)
        finally:
            self._pending.discard(reference.path)

    @staticmethod
    def _materializer(category: str) -> Callable[["GeneratorContext", Reference], None]:
        generator = components.COMPONENT_GENERATORS.get(category)
        if generator is None:
            raise UnsupportedConstructError(f"References to components/{category} are not supported")
        return generator.materialize

    def name_for(self, current_point: str, reference_path: str) -> str:
        """Identifier for *reference_path* as seen from *current_point*."""
        _, current_segments = split_point(current_point)
        reference_segments = split_path(reference_path)
        if (
            len(reference_segments) == 3
            and len(current_segments) >= 2
            and current_segments[:2] == reference_segments[:2]
        ):
            return declaration_name(reference_path)
        return qualified_name(reference_path)
