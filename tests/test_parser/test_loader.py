"""Tests for typegen.parser.loader."""

from __future__ import annotations

import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from typegen.exceptions import SpecParseError
from typegen.parser.loader import (
    DocumentLoader,
    _load_from_file,
    _load_from_stdin,
    _load_from_url,
    _parse_content,
    load_document,
    validate_openapi_version,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


class TestLoadDocument:
    """load_document routes to the correct loader."""

    def test_loads_yaml_fixture(self) -> None:
        result = load_document(str(FIXTURES_DIR / "petstore.yml"))
        assert result["openapi"] == "3.0.3"
        assert "Pet" in result["components"]["schemas"]

    def test_loads_from_stdin(self) -> None:
        document = json.dumps({"openapi": "3.0.3", "info": {"title": "stdin", "version": "1"}})
        with patch("typegen.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(document)
            result = load_document("-")
        assert result["info"]["title"] == "stdin"

    def test_loads_from_url(self) -> None:
        mock_response = httpx.Response(
            status_code=200,
            json={"openapi": "3.1.0", "paths": {}},
            request=httpx.Request("GET", "https://example.com/openapi.json"),
        )
        with patch("typegen.parser.loader.httpx.get", return_value=mock_response):
            result = load_document("https://example.com/openapi.json")
        assert result["openapi"] == "3.1.0"


class TestLoadFromFile:
    """Local file loading."""

    def test_component_file_without_openapi_key(self, tmp_path: Path) -> None:
        component = tmp_path / "Pet.yml"
        component.write_text("type: object\nproperties:\n  name:\n    type: string\n", encoding="utf-8")
        assert _load_from_file(str(component))["type"] == "object"

    def test_file_not_found_raises(self) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            _load_from_file("/nonexistent/openapi.yml")

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.yml"
        empty.write_text("", encoding="utf-8")
        with pytest.raises(SpecParseError, match="empty"):
            _load_from_file(str(empty))

    def test_invalid_json_file_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{invalid json", encoding="utf-8")
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            _load_from_file(str(bad))


class TestLoadFromStdin:
    """stdin loading."""

    def test_reads_yaml(self) -> None:
        content = textwrap.dedent("""\
            openapi: "3.0.0"
            info:
              title: YAML stdin
              version: "1.0"
        """)
        with patch("typegen.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(content)
            result = _load_from_stdin()
        assert result["info"]["title"] == "YAML stdin"

    def test_empty_stdin_raises(self) -> None:
        with patch("typegen.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("  \n")
            with pytest.raises(SpecParseError, match="No input"):
                _load_from_stdin()


class TestLoadFromUrl:
    """HTTP loading."""

    def test_http_error_raises(self) -> None:
        mock_response = httpx.Response(
            status_code=404,
            request=httpx.Request("GET", "https://example.com/missing.json"),
        )
        with patch("typegen.parser.loader.httpx.get", return_value=mock_response):
            with pytest.raises(SpecParseError, match="HTTP 404"):
                _load_from_url("https://example.com/missing.json")

    def test_connection_error_raises(self) -> None:
        with patch(
            "typegen.parser.loader.httpx.get",
            side_effect=httpx.ConnectError("refused"),
        ):
            with pytest.raises(SpecParseError, match="Failed to fetch"):
                _load_from_url("https://example.com/openapi.json")


class TestParseContent:
    """JSON-then-YAML parsing."""

    def test_non_object_rejected(self) -> None:
        with pytest.raises(SpecParseError, match="must be a JSON/YAML object"):
            _parse_content("- a\n- b\n", hint="yaml")

    def test_json_without_hint(self) -> None:
        assert _parse_content('{"a": 1}') == {"a": 1}


class TestValidateOpenapiVersion:
    """Version checks on the entry document."""

    @pytest.mark.parametrize("version", ["3.0.0", "3.0.3", "3.1.0"])
    def test_accepts_3x(self, version: str) -> None:
        assert validate_openapi_version({"openapi": version}) == version

    def test_rejects_swagger(self) -> None:
        with pytest.raises(SpecParseError, match="Swagger 2.0 is not supported"):
            validate_openapi_version({"swagger": "2.0"})

    def test_rejects_missing_version(self) -> None:
        with pytest.raises(SpecParseError, match="Missing 'openapi'"):
            validate_openapi_version({"info": {}})

    def test_rejects_other_major(self) -> None:
        with pytest.raises(SpecParseError, match="Unsupported OpenAPI version"):
            validate_openapi_version({"openapi": "4.0.0"})


class TestDocumentLoader:
    """Per-run document cache."""

    def test_preloaded_documents_skip_io(self) -> None:
        document = {"openapi": "3.0.3"}
        loader = DocumentLoader({"specs/./openapi.yml": document})
        assert "specs/openapi.yml" in loader
        assert loader.load("specs/openapi.yml") is document

    def test_each_document_loaded_once(self, tmp_path: Path) -> None:
        path = tmp_path / "openapi.json"
        path.write_text('{"openapi": "3.0.3"}', encoding="utf-8")
        loader = DocumentLoader()
        with patch("typegen.parser.loader.load_document", wraps=load_document) as spy:
            first = loader.load(str(path))
            second = loader.load(str(path))
        assert first is second
        assert spy.call_count == 1
