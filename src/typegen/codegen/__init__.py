"""Declaration nodes and the TypeScript printer."""

from typegen.codegen.printer import TypeScriptPrinter, print_statements

__all__ = ["TypeScriptPrinter", "print_statements"]
