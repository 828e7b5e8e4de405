"""Generation driver: one entry document in, declarations or code out.

:func:`generate_declarations` runs the whole pipeline for one entry point:

1. load the entry document (through a per-run :class:`DocumentLoader`);
2. register the top-level namespace of every component category present,
   in registry order, so no later registration can reset a namespace that
   already received on-demand output;
3. run the component generators in registry order. References met along
   the way are generated on demand through the context bridge, so a
   dependency always lands before the entry that needed it;
4. walk ``paths`` for per-operation declarations (unless disabled).

Each call builds a fresh store and context. Nothing is shared between runs.
"""

from __future__ import annotations

from typing import Optional

from typegen.codegen.printer import print_statements
from typegen.converter.components import COMPONENT_GENERATORS, parameters
from typegen.converter.context import GeneratorContext
from typegen.converter.operations import generate_operations
from typegen.models import COMPONENT_NAMES, GenerationResult, GeneratorConfig
from typegen.output import debug
from typegen.parser.loader import DocumentLoader, validate_openapi_version
from typegen.parser.reference import ReferenceResolver
from typegen.walker.store import Store


def generate_declarations(
    entry_point: str,
    loader: Optional[DocumentLoader] = None,
    config: Optional[GeneratorConfig] = None,
) -> GenerationResult:
    """Generate every declaration reachable from *entry_point*.

    Args:
        entry_point: Path or URL of the entry document (``-`` for stdin).
        loader: Document cache to use. Pass one pre-filled with in-memory
            documents to generate without touching the filesystem.
        config: Run settings; only ``operations`` is read here.

    Returns:
        The component namespaces, the free-standing operation declarations
        and the collected operation metadata.

    Raises:
        TypegenError: Any failure aborts the run; no partial result is
            returned.
    """
    config = config or GeneratorConfig()
    loader = loader or DocumentLoader()
    document = loader.load(entry_point)
    if "openapi" in document or "swagger" in document:
        version = validate_openapi_version(document)
        debug(f"OpenAPI {version}: {entry_point}")

    store = Store(document)
    context = GeneratorContext(entry_point, store, ReferenceResolver(loader))

    components = document.get("components") or {}
    present = [
        category
        for category in COMPONENT_NAMES
        if category in COMPONENT_GENERATORS and components.get(category)
    ]
    for category in present:
        store.add_component(category, COMPONENT_GENERATORS[category].namespace_declaration())

    for category in present:
        entries = components[category]
        debug(f"Generating components/{category} ({len(entries)} entries)")
        if category == parameters.CATEGORY and isinstance(entries, list):
            parameters.generate_namespace_with_list(context, entries)
        else:
            COMPONENT_GENERATORS[category].generate_namespace(context, entries)

    if config.operations:
        generate_operations(context)

    return GenerationResult(
        entry_point=entry_point,
        statements=store.get_root_statements(),
        additional_statements=store.get_additional_statements(),
        operations=store.operations,
    )


def render(result: GenerationResult, config: Optional[GeneratorConfig] = None) -> str:
    """Print *result* as a TypeScript module."""
    config = config or GeneratorConfig()
    return print_statements(
        [*result.statements, *result.additional_statements],
        indent=config.indent,
        banner=config.banner,
    )


def generate_code(
    entry_point: str,
    loader: Optional[DocumentLoader] = None,
    config: Optional[GeneratorConfig] = None,
) -> str:
    """Generate declarations for *entry_point* and print them."""
    return render(generate_declarations(entry_point, loader=loader, config=config), config)
