"""Typed navigation over loaded documents by explicit path segments.

A *document point* names a location inside a loaded document::

    api.yml#/components/schemas/Pet
    components/schemas/Pet.yml#
    https://example.com/common.json#/definitions/Error

The part before ``#`` is the document (file path or URL) and the part after
it is an RFC 6901 JSON Pointer. All parsing happens here so that malformed
pointers are rejected at the boundary with
:class:`~typegen.exceptions.UnsupportedPathError` instead of surfacing as a
vague lookup failure deep inside a recursive walk.
"""

from __future__ import annotations

import posixpath
from typing import Any, Iterable
from urllib.parse import urljoin

from typegen.exceptions import NotFoundError, UnsupportedPathError


def _unescape(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def _escape(segment: str) -> str:
    return segment.replace("~", "~0").replace("/", "~1")


def split_fragment(fragment: str) -> tuple[str, ...]:
    """Split a JSON Pointer (``/components/schemas/Pet``) into segments.

    An empty pointer (``""`` or ``"/"``) addresses the whole document.

    Raises:
        UnsupportedPathError: If the pointer does not start with ``/`` or
            contains an empty segment.
    """
    if fragment in ("", "/"):
        return ()
    if not fragment.startswith("/"):
        raise UnsupportedPathError(f"JSON pointer must start with '/': {fragment!r}")
    parts = fragment[1:].split("/")
    if any(part == "" for part in parts):
        raise UnsupportedPathError(f"JSON pointer has an empty segment: {fragment!r}")
    return tuple(_unescape(part) for part in parts)


def split_point(point: str) -> tuple[str, tuple[str, ...]]:
    """Split a document point into ``(document, segments)``."""
    document, _, fragment = point.partition("#")
    return document, split_fragment(fragment)


def make_point(document: str, segments: Iterable[str]) -> str:
    """Build a document point from a document and pointer segments."""
    segments = tuple(segments)
    if not segments:
        return f"{document}#"
    return f"{document}#/" + "/".join(_escape(segment) for segment in segments)


def split_path(path: str) -> tuple[str, ...]:
    """Split a slash-separated store path (``components/schemas/Pet``).

    Raises:
        UnsupportedPathError: If the path is empty, absolute, or contains
            an empty segment.
    """
    if not path or path.startswith("/"):
        raise UnsupportedPathError(f"Invalid path: {path!r}")
    parts = tuple(path.split("/"))
    if any(part == "" for part in parts):
        raise UnsupportedPathError(f"Path has an empty segment: {path!r}")
    return parts


def join_document(current_document: str, relative: str) -> str:
    """Resolve *relative* against the directory of *current_document*."""
    if current_document.startswith(("http://", "https://")):
        return urljoin(current_document, relative)
    if relative.startswith(("http://", "https://")) or posixpath.isabs(relative):
        return relative
    joined = posixpath.join(posixpath.dirname(current_document), relative)
    return posixpath.normpath(joined)


def get_by_segments(document: Any, segments: Iterable[str], label: str = "") -> Any:
    """Return the value at *segments* inside *document*.

    Dict keys are matched exactly; list indices must be decimal integers.

    Raises:
        NotFoundError: If any segment does not exist.
    """
    current = document
    walked: list[str] = []
    for segment in segments:
        walked.append(segment)
        if isinstance(current, dict):
            if segment not in current:
                raise NotFoundError(
                    f"Not found {label or '/'.join(walked)}: "
                    f"key '{segment}' does not exist"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise NotFoundError(
                    f"Not found {label or '/'.join(walked)}: "
                    f"invalid array index '{segment}'"
                ) from exc
        else:
            raise NotFoundError(
                f"Not found {label or '/'.join(walked)}: "
                f"cannot navigate into {type(current).__name__}"
            )
    return current
