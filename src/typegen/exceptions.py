"""Exception hierarchy for typegen.

All exceptions inherit from :class:`TypegenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`typegen.exit_codes`.
Every error is fatal for the generation run that raised it: the driver never
catches these, and :func:`typegen.app.main` turns them into a stderr message
and a process exit code.

Subclass hierarchy::

    TypegenError                   (exit 1)
    +-- UnsupportedConstructError  (exit 8)
    |   +-- UnsupportedPathError   (exit 8)
    +-- UnsetTypeError             (exit 9)
    +-- UnknownSchemaShapeError    (exit 9)
    +-- NotFoundError              (exit 4)
    +-- SpecParseError             (exit 7)
    +-- ConfigError                (exit 1)
"""

from __future__ import annotations

import json
from typing import Any, Optional

from typegen.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_SCHEMA,
    EXIT_NOT_FOUND,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_UNSUPPORTED,
)


class TypegenError(Exception):
    """Base exception for all typegen errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code

    def diagnostic_lines(self) -> list[str]:
        """Extra context lines shown below the error message."""
        return []


class UnsupportedConstructError(TypegenError):
    """Raised for shapes the generator refuses to translate.

    Examples are a ``components/parameters`` entry that is a bare local
    reference, ``items`` given as a list or a boolean, or a circular chain
    of inlined references.
    """

    exit_code = EXIT_UNSUPPORTED


class UnsupportedPathError(UnsupportedConstructError):
    """Raised when a store path or document pointer is malformed or outside ``components``."""


class UnsetTypeError(TypegenError):
    """Raised when a schema node has neither ``type`` nor ``$ref``.

    Keeps the offending node, its enclosing parent (when the converter knew
    it) and the document point so the CLI can show where the node lives.
    """

    exit_code = EXIT_INVALID_SCHEMA

    def __init__(
        self,
        schema: Any,
        parent: Any = None,
        entry_point: Optional[str] = None,
        current_point: Optional[str] = None,
    ):
        super().__init__(
            "Please set 'type' or '$ref' property \n" + json.dumps(schema, default=str)
        )
        self.schema = schema
        self.parent = parent
        self.entry_point = entry_point
        self.current_point = current_point

    def diagnostic_lines(self) -> list[str]:
        lines: list[str] = []
        if self.parent is not None:
            lines.append("Parent Schema:")
            lines.append(json.dumps(self.parent, default=str))
        if self.entry_point:
            lines.append(f"Entry point: {self.entry_point}")
        if self.current_point:
            lines.append(f"Location: {self.current_point}")
        return lines


class UnknownSchemaShapeError(TypegenError):
    """Raised when ``type`` is outside the primitive/array/object set."""

    exit_code = EXIT_INVALID_SCHEMA

    def __init__(self, schema: Any):
        super().__init__("what is this? \n" + json.dumps(schema, indent=2, default=str))
        self.schema = schema


class NotFoundError(TypegenError):
    """Raised when a pointer or component lookup resolves to nothing."""

    exit_code = EXIT_NOT_FOUND


class SpecParseError(TypegenError):
    """Raised when an input document cannot be read or parsed."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ConfigError(TypegenError):
    """Raised for configuration problems (invalid ``typegen.json``, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE
