"""Load input documents from a URL, local file, or stdin.

This module handles all I/O for the generator. It supports both JSON and
YAML with automatic format detection, and validates that the entry document
declares a supported OpenAPI version (3.0.x or 3.1.x).

The public surface is:

* :func:`load_document` -- Load and parse a document from any supported source.
* :func:`validate_openapi_version` -- Check and return the ``openapi`` version
  string, rejecting Swagger 2.x and unsupported versions.
* :class:`DocumentLoader` -- Per-run cache in front of :func:`load_document`
  used by the reference resolver, so every document is read at most once and
  cross-document pointers always see the same in-memory tree.
"""

from __future__ import annotations

import json
import posixpath
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from typegen.exceptions import SpecParseError


def load_document(source: str) -> dict[str, Any]:
    """Load a document from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read a document from stdin, trying JSON then YAML."""
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document over HTTP(S).

    Raises:
        SpecParseError: If the URL cannot be fetched or content cannot be parsed.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        SpecParseError: If the file cannot be read or content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Document not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read document {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Document is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Raises:
        SpecParseError: If the content cannot be parsed as either format.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
            if not isinstance(result, dict):
                raise SpecParseError(
                    "Document must be a JSON/YAML object (got "
                    f"{type(result).__name__})"
                )
            return result
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc

    try:
        result = yaml.safe_load(content)
        if not isinstance(result, dict):
            raise SpecParseError(
                "Document must be a JSON/YAML object (got "
                f"{type(result).__name__ if result is not None else 'empty document'})"
            )
        return result
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = "Failed to parse document as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecParseError(msg)


def validate_openapi_version(document: dict[str, Any]) -> str:
    """Validate and return the OpenAPI version string.

    Raises:
        SpecParseError: If the version is missing, unsupported, or indicates Swagger 2.x.
    """
    if "swagger" in document:
        swagger_ver = str(document["swagger"])
        raise SpecParseError(
            f"Swagger {swagger_ver} is not supported. "
            "Only OpenAPI 3.0.x and 3.1.x are supported."
        )

    openapi_version = document.get("openapi")
    if openapi_version is None:
        raise SpecParseError(
            "Missing 'openapi' field. Is this an OpenAPI 3.x document?"
        )

    version_str = str(openapi_version)
    if version_str.startswith("3."):
        return version_str

    raise SpecParseError(
        f"Unsupported OpenAPI version: {version_str}. "
        "Only OpenAPI 3.0.x and 3.1.x are supported."
    )


def _normalize(source: str) -> str:
    if source == "-" or source.startswith(("http://", "https://")):
        return source
    return posixpath.normpath(source.replace("\\", "/"))


class DocumentLoader:
    """Caching document loader shared by one generation run.

    Args:
        documents: Optional pre-parsed documents keyed by path. Lookups for
            these paths never touch the filesystem, which lets callers (and
            tests) feed in-memory trees.

    Example::

        loader = DocumentLoader()
        root = loader.load("openapi.yml")
        pet = loader.load("components/schemas/Pet.yml")
    """

    def __init__(self, documents: Optional[dict[str, dict[str, Any]]] = None) -> None:
        self._cache: dict[str, dict[str, Any]] = {}
        for source, document in (documents or {}).items():
            self._cache[_normalize(source)] = document

    def load(self, source: str) -> dict[str, Any]:
        """Return the parsed document at *source*, loading it on first use."""
        key = _normalize(source)
        if key not in self._cache:
            self._cache[key] = load_document(source)
        return self._cache[key]

    def __contains__(self, source: str) -> bool:
        return _normalize(source) in self._cache
