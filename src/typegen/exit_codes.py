"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~typegen.exceptions.TypegenError` subclass.
Build scripts can inspect the exit code to tell a broken input document
apart from an unsupported schema shape without parsing stderr.

Example::

    $ typegen generate openapi.yml -o api.ts
    $ echo $?
    9   # EXIT_INVALID_SCHEMA -- a schema node has no usable type
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_NOT_FOUND = 4
"""A pointer or dotted lookup resolved to nothing in the document."""

EXIT_SPEC_PARSE_ERROR = 7
"""The input document could not be loaded or parsed."""

EXIT_UNSUPPORTED = 8
"""The document uses a construct the generator does not support."""

EXIT_INVALID_SCHEMA = 9
"""A schema node has no ``type``/``$ref`` or an unrecognised ``type``."""
