"""Shared test fixtures for typegen.

Provides fixture documents, an in-memory generation context factory, output
state management and a CLI runner. Discovered automatically by pytest.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from typegen.converter.context import GeneratorContext
from typegen.output import OutputFormat, OutputManager, reset_output, set_output
from typegen.parser.loader import DocumentLoader
from typegen.parser.reference import ReferenceResolver
from typegen.walker.store import Store


FIXTURES_DIR = Path(__file__).parent / "fixtures"
ENTRY = "openapi.yml"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager caches sys.stdout/sys.stderr at creation time. CliRunner
    swaps those streams per invocation, so a manager surviving a test
    would write to a closed file in the next one.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES_DIR / "petstore.yml"


@pytest.fixture
def petstore_raw(petstore_path: Path) -> dict[str, Any]:
    """Load the raw petstore document."""
    with open(petstore_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def split_entry() -> Path:
    """Entry document of the file-per-component layout."""
    return FIXTURES_DIR / "split" / "openapi.yml"


# ---------------------------------------------------------------------------
# In-memory generation context
# ---------------------------------------------------------------------------


@pytest.fixture
def make_context() -> Callable[..., GeneratorContext]:
    """Factory for a context over in-memory documents.

    ``make_context(document)`` registers *document* as ``openapi.yml``;
    extra documents can be passed by path as keyword ``documents``.
    """

    def _make(document: dict[str, Any], documents: dict[str, dict[str, Any]] | None = None) -> GeneratorContext:
        loader = DocumentLoader({ENTRY: document, **(documents or {})})
        return GeneratorContext(ENTRY, Store(document), ReferenceResolver(loader))

    return _make


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN output manager."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def verbose_output() -> OutputManager:
    """Install a verbose, colourless output manager."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty working directory with no TYPEGEN_* variables set."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ("TYPEGEN_INPUT", "TYPEGEN_OUTPUT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
