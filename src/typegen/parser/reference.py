"""Classify and canonicalise ``$ref`` pointers.

:class:`ReferenceResolver` turns a raw pointer met at some document point
into a :class:`~typegen.models.Reference` descriptor:

* ``#/components/<category>/<name>`` -- **local**. The canonical path is
  ``components/<category>/<name>``.
* A pointer into another document that lands on a component entry, either
  through its fragment (``common.yml#/components/schemas/Error``) or through
  the file-per-component layout next to the entry document
  (``components/schemas/Error.yml``) -- **external-supported**. The
  canonical path is again ``components/<category>/<name>`` and the
  descriptor names the owning category.
* Anything else, including in-document pointers below a component entry
  (``#/components/schemas/Pet/properties/id``) -- **external-unsupported**.
  The canonical path is the full document point of the target and the
  converter inlines the target schema.

Targets are loaded through the run's
:class:`~typegen.parser.loader.DocumentLoader`; a pointer to a missing
location raises :class:`~typegen.exceptions.NotFoundError`.
"""

from __future__ import annotations

import posixpath
from typing import Any, Union

from typegen.exceptions import UnsupportedConstructError
from typegen.models import COMPONENT_NAMES, Reference, ReferenceKind
from typegen.parser.guard import is_reference
from typegen.parser.loader import DocumentLoader
from typegen.parser.pointer import (
    get_by_segments,
    join_document,
    make_point,
    split_fragment,
    split_point,
)

_COMPONENT_FILE_SUFFIXES = (".json", ".yaml", ".yml")


def _component_category(segments: tuple[str, ...]) -> str | None:
    """Return the category when *segments* address one whole component entry."""
    if len(segments) == 3 and segments[0] == "components" and segments[1] in COMPONENT_NAMES:
        return segments[1]
    return None


def _component_file(entry_point: str, document: str) -> tuple[str, str] | None:
    """Match ``components/<category>/<Name>.<ext>`` relative to the entry directory."""
    if document.startswith(("http://", "https://")):
        base = entry_point.rsplit("/", 1)[0] + "/"
        if not document.startswith(base):
            return None
        relative = document[len(base):]
    else:
        relative = posixpath.relpath(document, posixpath.dirname(entry_point) or ".")
    parts = relative.split("/")
    if len(parts) != 3 or parts[0] != "components" or parts[1] not in COMPONENT_NAMES:
        return None
    stem, suffix = posixpath.splitext(parts[2])
    if suffix.lower() not in _COMPONENT_FILE_SUFFIXES or not stem:
        return None
    return parts[1], stem


class ReferenceResolver:
    """Resolve ``$ref`` pointers against documents from one loader.

    Args:
        loader: The run's document loader. The entry document must be
            loadable through it.
    """

    def __init__(self, loader: DocumentLoader) -> None:
        self._loader = loader

    @property
    def loader(self) -> DocumentLoader:
        return self._loader

    def resolve(
        self,
        entry_point: str,
        current_point: str,
        reference: Union[str, dict[str, Any]],
    ) -> Reference:
        """Produce the descriptor for *reference* met at *current_point*.

        Args:
            entry_point: Path or URL of the entry document.
            current_point: Document point where the pointer was found.
            reference: The raw pointer string or a ``{"$ref": ...}`` dict.

        Raises:
            UnsupportedConstructError: If *reference* carries no pointer.
            UnsupportedPathError: If the fragment is malformed.
            NotFoundError: If the target does not exist.
        """
        ref = reference.get("$ref") if isinstance(reference, dict) else reference
        if not isinstance(ref, str) or not ref:
            raise UnsupportedConstructError(f"Not a reference: {reference!r}")

        current_document, _ = split_point(current_point)
        filename, _, fragment = ref.partition("#")
        segments = split_fragment(fragment)

        if not filename:
            data = get_by_segments(self._loader.load(current_document), segments, label=ref)
            target_point = make_point(current_document, segments)
            category = _component_category(segments)
            if category is not None:
                return Reference(
                    kind=ReferenceKind.LOCAL,
                    path="/".join(segments),
                    name=segments[2],
                    reference_point=target_point,
                    data=data,
                    component_name=category,
                )
            return Reference(
                kind=ReferenceKind.EXTERNAL_UNSUPPORTED,
                path=target_point,
                name=segments[-1] if segments else posixpath.basename(current_document),
                reference_point=target_point,
                data=data,
            )

        target_document = join_document(current_document, filename)
        data = get_by_segments(self._loader.load(target_document), segments, label=ref)
        target_point = make_point(target_document, segments)

        category = _component_category(segments)
        if category is not None:
            return Reference(
                kind=ReferenceKind.EXTERNAL_SUPPORTED,
                path="/".join(segments),
                name=segments[2],
                reference_point=target_point,
                data=data,
                component_name=category,
            )
        if not segments:
            matched = _component_file(entry_point, target_document)
            if matched is not None:
                category, name = matched
                return Reference(
                    kind=ReferenceKind.EXTERNAL_SUPPORTED,
                    path=f"components/{category}/{name}",
                    name=name,
                    reference_point=target_point,
                    data=data,
                    component_name=category,
                )
        return Reference(
            kind=ReferenceKind.EXTERNAL_UNSUPPORTED,
            path=target_point,
            name=segments[-1] if segments else posixpath.splitext(posixpath.basename(target_document))[0],
            reference_point=target_point,
            data=data,
        )

    def follow(self, entry_point: str, reference: Reference) -> Reference:
        """Chase *reference* while its target is itself a ``$ref`` object.

        Returns the descriptor of the first target that is not a reference.

        Raises:
            UnsupportedConstructError: If the chain loops back on itself.
        """
        seen = {reference.reference_point}
        while is_reference(reference.data):
            reference = self.resolve(entry_point, reference.reference_point, reference.data)
            if reference.reference_point in seen:
                raise UnsupportedConstructError(f"Circular reference chain: {reference.reference_point}")
            seen.add(reference.reference_point)
        return reference
