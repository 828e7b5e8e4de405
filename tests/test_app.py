"""CLI tests for typegen.app via typer's CliRunner."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest
from typer.testing import CliRunner

from typegen import __version__
from typegen.app import app
from typegen.exit_codes import (
    EXIT_INVALID_SCHEMA,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_UNSUPPORTED,
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def bad_document(isolated_config: Path) -> Path:
    path = isolated_config / "bad.yml"
    path.write_text(
        textwrap.dedent("""\
            openapi: "3.0.3"
            components:
              schemas:
                Pet:
                  type: object
                  properties:
                    name:
                      description: missing type
        """),
        encoding="utf-8",
    )
    return path


class TestGlobalOptions:
    """Root callback flags."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"typegen {__version__}" in result.output

    def test_no_args_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, [])
        assert "generate" in result.output
        assert "inspect" in result.output


class TestGenerate:
    """typegen generate."""

    def test_writes_to_stdout(self, runner: CliRunner, isolated_config: Path, petstore_path: Path) -> None:
        result = runner.invoke(app, ["--no-color", "generate", str(petstore_path)])
        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("// Generated by typegen")
        assert "export namespace Schemas {" in result.stdout
        assert "export interface Parameter$listPets {" in result.stdout

    def test_writes_to_file(self, runner: CliRunner, isolated_config: Path, petstore_path: Path) -> None:
        target = isolated_config / "out" / "api.ts"
        result = runner.invoke(app, ["--no-color", "generate", str(petstore_path), "-o", str(target)])
        assert result.exit_code == 0, result.output
        assert target.read_text(encoding="utf-8").startswith("// Generated by typegen")
        assert "Wrote" in result.output

    def test_no_operations_and_no_banner(self, runner: CliRunner, isolated_config: Path, petstore_path: Path) -> None:
        result = runner.invoke(
            app, ["--no-color", "generate", str(petstore_path), "--no-operations", "--no-banner"]
        )
        assert result.exit_code == 0, result.output
        assert "Parameter$listPets" not in result.stdout
        assert "Generated by typegen" not in result.stdout

    def test_input_from_environment(
        self, runner: CliRunner, isolated_config: Path, petstore_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TYPEGEN_INPUT", str(petstore_path))
        result = runner.invoke(app, ["--no-color", "generate"])
        assert result.exit_code == 0, result.output
        assert "export namespace RequestBodies {" in result.stdout

    def test_input_from_project_file(self, runner: CliRunner, isolated_config: Path, petstore_path: Path) -> None:
        (isolated_config / "typegen.json").write_text(json.dumps({"input": str(petstore_path), "banner": False}))
        result = runner.invoke(app, ["--no-color", "generate"])
        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("/** @see")

    def test_missing_input(self, runner: CliRunner, isolated_config: Path) -> None:
        result = runner.invoke(app, ["--no-color", "generate"])
        assert result.exit_code == EXIT_INVALID_USAGE
        assert "No input document" in result.output

    def test_missing_file(self, runner: CliRunner, isolated_config: Path) -> None:
        result = runner.invoke(app, ["--no-color", "generate", "missing.yml"])
        assert result.exit_code == EXIT_SPEC_PARSE_ERROR
        assert "Document not found" in result.output

    def test_untyped_schema_reports_location(
        self, runner: CliRunner, isolated_config: Path, bad_document: Path
    ) -> None:
        target = isolated_config / "api.ts"
        result = runner.invoke(app, ["--no-color", "generate", str(bad_document), "-o", str(target)])
        assert result.exit_code == EXIT_INVALID_SCHEMA
        assert "Please set 'type' or '$ref' property" in result.output
        assert "Parent Schema:" in result.output
        assert f"Location: {bad_document}#/components/schemas/Pet" in result.output
        assert not target.exists()

    def test_unsupported_construct(self, runner: CliRunner, isolated_config: Path) -> None:
        path = isolated_config / "tuple.json"
        path.write_text(json.dumps({
            "openapi": "3.1.0",
            "components": {"schemas": {"Pair": {"type": "array", "items": [{"type": "string"}]}}},
        }))
        result = runner.invoke(app, ["--no-color", "generate", str(path)])
        assert result.exit_code == EXIT_UNSUPPORTED
        assert "schema.items" in result.output


class TestInspect:
    """typegen inspect."""

    def test_declarations_plain(self, runner: CliRunner, isolated_config: Path, petstore_path: Path) -> None:
        result = runner.invoke(app, ["--plain", "inspect", str(petstore_path)])
        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert lines[0] == "Namespace\tName\tKind"
        assert "-\tSchemas\tnamespace" in lines
        assert "Schemas\tPet\tinterface" in lines
        assert "Responses.ErrorResponse\tContent\tinterface" in lines
        assert "-\tParameter$listPets\tinterface" in lines

    def test_operations_json(self, runner: CliRunner, isolated_config: Path, petstore_path: Path) -> None:
        result = runner.invoke(app, ["--json", "inspect", str(petstore_path), "--operations"])
        assert result.exit_code == 0, result.output
        records = json.loads(result.stdout)
        assert [r["Operation"] for r in records] == ["listPets", "createPet", "showPetById"]
        assert records[0]["Method"] == "GET"
        assert records[0]["Parameters"] == "Parameter$listPets"
        assert records[2]["Deprecated"] == "Yes"

    def test_error_exit_code(self, runner: CliRunner, isolated_config: Path, bad_document: Path) -> None:
        result = runner.invoke(app, ["--no-color", "inspect", str(bad_document)])
        assert result.exit_code == EXIT_INVALID_SCHEMA
