"""Classify raw schema nodes into a closed set of kinds.

:func:`classify_schema` is the single place that inspects the shape of a
schema dict; the converter dispatches on the returned :class:`SchemaKind`
and treats any kind it does not handle as an error.
"""

from __future__ import annotations

import enum
from typing import Any


class SchemaKind(str, enum.Enum):
    FREE_FORM = "free-form"
    REFERENCE = "reference"
    ONE_OF = "oneOf"
    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    UNSET = "unset"
    BOOLEAN = "boolean"
    NULL = "null"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"


_TYPE_KINDS: dict[str, SchemaKind] = {
    "boolean": SchemaKind.BOOLEAN,
    "null": SchemaKind.NULL,
    "integer": SchemaKind.INTEGER,
    "number": SchemaKind.NUMBER,
    "string": SchemaKind.STRING,
    "array": SchemaKind.ARRAY,
    "object": SchemaKind.OBJECT,
}


def is_reference(obj: Any) -> bool:
    return isinstance(obj, dict) and isinstance(obj.get("$ref"), str)


def is_string_array(items: Any) -> bool:
    return isinstance(items, list) and all(isinstance(item, str) for item in items)


def is_number_array(items: Any) -> bool:
    # bool is an int subclass; true/false are not numeric enum members
    return isinstance(items, list) and all(
        isinstance(item, (int, float)) and not isinstance(item, bool) for item in items
    )


def classify_schema(schema: Any) -> SchemaKind:
    """Return the kind of *schema*, checked in converter dispatch order.

    Boolean schemas are free-form markers. ``$ref`` wins over every other
    keyword, then ``oneOf``, ``allOf`` and ``anyOf``. A dict without
    ``type`` is :attr:`SchemaKind.UNSET`; a ``type`` outside the known set
    (including list-valued ``type``) is :attr:`SchemaKind.UNKNOWN`.
    """
    if isinstance(schema, bool):
        return SchemaKind.FREE_FORM
    if not isinstance(schema, dict):
        return SchemaKind.UNKNOWN
    if is_reference(schema):
        return SchemaKind.REFERENCE
    if isinstance(schema.get("oneOf"), list):
        return SchemaKind.ONE_OF
    if isinstance(schema.get("allOf"), list):
        return SchemaKind.ALL_OF
    if isinstance(schema.get("anyOf"), list):
        return SchemaKind.ANY_OF
    schema_type = schema.get("type")
    if not schema_type:
        return SchemaKind.UNSET
    if not isinstance(schema_type, str):
        return SchemaKind.UNKNOWN
    return _TYPE_KINDS.get(schema_type, SchemaKind.UNKNOWN)
