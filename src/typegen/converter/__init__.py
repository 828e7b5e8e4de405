"""Schema-to-type conversion, the context bridge and the per-category generators."""

from typegen.converter.type_node import ConvertOption, convert
from typegen.converter.context import GeneratorContext

__all__ = ["ConvertOption", "GeneratorContext", "convert"]
