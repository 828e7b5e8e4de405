"""Document loading, pointer handling, schema classification and ``$ref`` resolution."""

from typegen.parser.loader import DocumentLoader, load_document, validate_openapi_version
from typegen.parser.reference import ReferenceResolver

__all__ = ["DocumentLoader", "ReferenceResolver", "load_document", "validate_openapi_version"]
