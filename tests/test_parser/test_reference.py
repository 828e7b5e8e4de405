"""Tests for typegen.parser.reference."""

from __future__ import annotations

from typing import Any

import pytest

from typegen.exceptions import NotFoundError, UnsupportedConstructError, UnsupportedPathError
from typegen.models import ReferenceKind
from typegen.parser.loader import DocumentLoader
from typegen.parser.reference import ReferenceResolver

ENTRY = "specs/openapi.yml"

PET = {"type": "object", "properties": {"id": {"type": "integer"}}}


@pytest.fixture
def resolver() -> ReferenceResolver:
    entry: dict[str, Any] = {
        "openapi": "3.0.3",
        "components": {"schemas": {"Pet": PET}},
    }
    common = {"components": {"schemas": {"Error": {"type": "string"}}}, "definitions": {"Id": {"type": "string"}}}
    documents = {
        ENTRY: entry,
        "specs/common.yml": common,
        "specs/components/schemas/Tag.yml": {"type": "string"},
        "specs/shared/Tag.yml": {"type": "string"},
    }
    return ReferenceResolver(DocumentLoader(documents))


POINT = f"{ENTRY}#/components/schemas/Owner"


class TestLocalReferences:
    """In-document pointers."""

    def test_component_pointer_is_local(self, resolver: ReferenceResolver) -> None:
        reference = resolver.resolve(ENTRY, POINT, {"$ref": "#/components/schemas/Pet"})
        assert reference.kind is ReferenceKind.LOCAL
        assert reference.path == "components/schemas/Pet"
        assert reference.name == "Pet"
        assert reference.component_name == "schemas"
        assert reference.reference_point == f"{ENTRY}#/components/schemas/Pet"
        assert reference.data == PET

    def test_nested_pointer_is_inlined(self, resolver: ReferenceResolver) -> None:
        reference = resolver.resolve(ENTRY, POINT, "#/components/schemas/Pet/properties/id")
        assert reference.kind is ReferenceKind.EXTERNAL_UNSUPPORTED
        assert reference.path == f"{ENTRY}#/components/schemas/Pet/properties/id"
        assert reference.data == {"type": "integer"}
        assert reference.component_name is None

    def test_missing_target_raises(self, resolver: ReferenceResolver) -> None:
        with pytest.raises(NotFoundError):
            resolver.resolve(ENTRY, POINT, "#/components/schemas/Nope")

    def test_malformed_pointer_raises(self, resolver: ReferenceResolver) -> None:
        with pytest.raises(UnsupportedPathError):
            resolver.resolve(ENTRY, POINT, "#components/schemas/Pet")

    def test_non_reference_rejected(self, resolver: ReferenceResolver) -> None:
        with pytest.raises(UnsupportedConstructError):
            resolver.resolve(ENTRY, POINT, {"type": "string"})


class TestExternalReferences:
    """Pointers into other documents."""

    def test_component_fragment_is_supported(self, resolver: ReferenceResolver) -> None:
        reference = resolver.resolve(ENTRY, POINT, "common.yml#/components/schemas/Error")
        assert reference.kind is ReferenceKind.EXTERNAL_SUPPORTED
        assert reference.path == "components/schemas/Error"
        assert reference.reference_point == "specs/common.yml#/components/schemas/Error"

    def test_component_file_layout_is_supported(self, resolver: ReferenceResolver) -> None:
        reference = resolver.resolve(ENTRY, POINT, "./components/schemas/Tag.yml")
        assert reference.kind is ReferenceKind.EXTERNAL_SUPPORTED
        assert reference.path == "components/schemas/Tag"
        assert reference.name == "Tag"
        assert reference.component_name == "schemas"
        assert reference.reference_point == "specs/components/schemas/Tag.yml#"

    def test_sibling_component_file(self, resolver: ReferenceResolver) -> None:
        current = "specs/components/schemas/Pet.yml#"
        reference = resolver.resolve(ENTRY, current, "./Tag.yml")
        assert reference.kind is ReferenceKind.EXTERNAL_SUPPORTED
        assert reference.path == "components/schemas/Tag"

    def test_other_file_is_unsupported(self, resolver: ReferenceResolver) -> None:
        reference = resolver.resolve(ENTRY, POINT, "shared/Tag.yml")
        assert reference.kind is ReferenceKind.EXTERNAL_UNSUPPORTED
        assert reference.path == "specs/shared/Tag.yml#"
        assert reference.name == "Tag"

    def test_non_component_fragment_is_unsupported(self, resolver: ReferenceResolver) -> None:
        reference = resolver.resolve(ENTRY, POINT, "common.yml#/definitions/Id")
        assert reference.kind is ReferenceKind.EXTERNAL_UNSUPPORTED
        assert reference.data == {"type": "string"}

    def test_descriptors_for_same_target_are_equal(self, resolver: ReferenceResolver) -> None:
        first = resolver.resolve(ENTRY, POINT, "./components/schemas/Tag.yml")
        second = resolver.resolve(ENTRY, "specs/components/schemas/Pet.yml#", "./Tag.yml")
        assert first.path == second.path


class TestFollow:
    """Chasing targets that are themselves references."""

    def test_chain_ends_at_first_concrete_target(self) -> None:
        entry = {"components": {"parameters": {"PetId": {"$ref": "common.yml#/components/parameters/Id"}}}}
        common = {"components": {"parameters": {"Id": {"name": "id", "in": "path"}}}}
        resolver = ReferenceResolver(DocumentLoader({"openapi.yml": entry, "common.yml": common}))
        reference = resolver.resolve("openapi.yml", "openapi.yml#/paths", {"$ref": "#/components/parameters/PetId"})

        target = resolver.follow("openapi.yml", reference)
        assert target.data == {"name": "id", "in": "path"}
        assert target.reference_point == "common.yml#/components/parameters/Id"

    def test_concrete_target_returned_unchanged(self, resolver: ReferenceResolver) -> None:
        reference = resolver.resolve(ENTRY, POINT, {"$ref": "#/components/schemas/Pet"})
        assert resolver.follow(ENTRY, reference) is reference

    def test_loop_rejected(self) -> None:
        entry = {"a": {"$ref": "#/b"}, "b": {"$ref": "#/a"}}
        resolver = ReferenceResolver(DocumentLoader({"openapi.yml": entry}))
        reference = resolver.resolve("openapi.yml", "openapi.yml#/x", {"$ref": "#/a"})
        with pytest.raises(UnsupportedConstructError, match="Circular reference chain"):
            resolver.follow("openapi.yml", reference)
