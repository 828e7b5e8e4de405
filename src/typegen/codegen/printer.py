"""Render declaration nodes as TypeScript source.

The printer is a pure function of its input: the same statements always
produce byte-identical text. Layout rules:

* ``integer`` and ``number`` both print as ``number``; ``enum`` values print
  as a union of literals;
* array element types that are unions or intersections are parenthesised
  (``(string | null)[]``);
* member names that are not identifiers are quoted (``"application/json"``);
* doc comments use ``/** ... */`` and carry ``@deprecated`` when set;
* :class:`~typegen.codegen.nodes.IndexSignatureDeclaration` statements are
  lookup-only and never printed.
"""

from __future__ import annotations

import json
from typing import Iterable, Optional

from typegen.codegen.nodes import (
    ArrayTypeNode,
    IndexSignature,
    IndexSignatureDeclaration,
    InterfaceDeclaration,
    IntersectionTypeNode,
    KeywordTypeNode,
    Member,
    NamespaceDeclaration,
    ObjectTypeNode,
    PrimitiveTypeNode,
    PropertySignature,
    Statement,
    TypeAliasDeclaration,
    TypeNode,
    TypeReferenceNode,
    UnionTypeNode,
)
from typegen.naming import is_identifier

BANNER = "// Generated by typegen. Do not edit."


def _literal(value: object) -> str:
    return json.dumps(value, ensure_ascii=False)


def _member_name(name: str) -> str:
    return name if is_identifier(name) else _literal(name)


def _is_compound(node: TypeNode) -> bool:
    if isinstance(node, (UnionTypeNode, IntersectionTypeNode)):
        return len(node.types) > 1
    return isinstance(node, PrimitiveTypeNode) and node.enum is not None and len(node.enum) > 1


class TypeScriptPrinter:
    """Stateless renderer for one indentation width.

    Args:
        indent: Spaces per nesting level.
    """

    def __init__(self, indent: int = 2) -> None:
        self._unit = " " * indent

    def _pad(self, level: int) -> str:
        return self._unit * level

    # ------------------------------------------------------------------ #
    # Types
    # ------------------------------------------------------------------ #

    def type_text(self, node: TypeNode, level: int = 0) -> str:
        """Render a type node. *level* is the nesting of the enclosing line."""
        if isinstance(node, PrimitiveTypeNode):
            if node.enum is not None:
                if not node.enum:
                    return "never"
                return " | ".join(_literal(value) for value in node.enum)
            return "number" if node.type == "integer" else node.type
        if isinstance(node, KeywordTypeNode):
            return node.keyword
        if isinstance(node, TypeReferenceNode):
            return node.name
        if isinstance(node, ArrayTypeNode):
            element = self.type_text(node.element, level)
            if _is_compound(node.element):
                element = f"({element})"
            return f"{element}[]"
        if isinstance(node, UnionTypeNode):
            if not node.types:
                return "never"
            return " | ".join(self.type_text(member, level) for member in node.types)
        if isinstance(node, IntersectionTypeNode):
            if not node.types:
                return "unknown"
            parts = []
            for member in node.types:
                text = self.type_text(member, level)
                parts.append(f"({text})" if _is_compound(member) else text)
            return " & ".join(parts)
        if isinstance(node, ObjectTypeNode):
            if not node.members:
                return "{}"
            lines = ["{"]
            lines.extend(self._member_lines(node.members, level + 1))
            lines.append(self._pad(level) + "}")
            return "\n".join(lines)
        raise TypeError(f"Unknown type node: {node!r}")

    def _member_lines(self, members: Iterable[Member], level: int) -> list[str]:
        lines: list[str] = []
        pad = self._pad(level)
        for member in members:
            if isinstance(member, PropertySignature):
                lines.extend(self._comment_lines(member.comment, False, level))
                optional = "?" if member.optional else ""
                lines.append(
                    f"{pad}{_member_name(member.name)}{optional}: {self.type_text(member.type, level)};"
                )
            elif isinstance(member, IndexSignature):
                lines.append(f"{pad}[{member.name}: string]: {self.type_text(member.type, level)};")
        return lines

    # ------------------------------------------------------------------ #
    # Statements
    # ------------------------------------------------------------------ #

    def _comment_lines(self, comment: Optional[str], deprecated: bool, level: int) -> list[str]:
        pad = self._pad(level)
        text = (comment or "").strip().replace("*/", "*\\/")
        if not text and not deprecated:
            return []
        body = text.splitlines() if text else []
        if deprecated:
            body.append("@deprecated")
        if len(body) == 1:
            return [f"{pad}/** {body[0]} */"]
        lines = [f"{pad}/**"]
        lines.extend(f"{pad} * {line}".rstrip() for line in body)
        lines.append(f"{pad} */")
        return lines

    def statement_lines(self, statement: Statement, level: int = 0) -> list[str]:
        if isinstance(statement, IndexSignatureDeclaration):
            return []
        pad = self._pad(level)
        export = "export " if statement.export else ""
        lines = self._comment_lines(statement.comment, statement.deprecated, level)
        if isinstance(statement, TypeAliasDeclaration):
            lines.append(f"{pad}{export}type {statement.name} = {self.type_text(statement.type, level)};")
        elif isinstance(statement, InterfaceDeclaration):
            if not statement.members:
                lines.append(f"{pad}{export}interface {statement.name} {{}}")
            else:
                lines.append(f"{pad}{export}interface {statement.name} {{")
                lines.extend(self._member_lines(statement.members, level + 1))
                lines.append(f"{pad}}}")
        elif isinstance(statement, NamespaceDeclaration):
            lines.append(f"{pad}{export}namespace {statement.name} {{")
            for child in statement.statements:
                lines.extend(self.statement_lines(child, level + 1))
            lines.append(f"{pad}}}")
        return lines

    def print_statements(self, statements: Iterable[Statement], banner: bool = True) -> str:
        """Render top-level *statements*, separated by blank lines."""
        blocks = [BANNER] if banner else []
        for statement in statements:
            lines = self.statement_lines(statement)
            if lines:
                blocks.append("\n".join(lines))
        return "\n\n".join(blocks) + "\n"


def print_statements(
    statements: Iterable[Statement],
    indent: int = 2,
    banner: bool = True,
) -> str:
    """Render *statements* as a TypeScript module."""
    return TypeScriptPrinter(indent=indent).print_statements(statements, banner=banner)
