"""typegen -- Generate TypeScript declarations from OpenAPI 3.x documents.

Every component of the input document (schemas, headers, responses,
parameters and request bodies) becomes a declaration inside a per-category
namespace, with ``$ref`` pointers kept as by-name references::

    typegen generate openapi.yml -o src/api.ts

Modules:
    app: Typer application and CLI entry point.
    generator: The generation driver.
    models: Pydantic models shared across the package.
    config: ``typegen.json`` and environment resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric process exit codes.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
