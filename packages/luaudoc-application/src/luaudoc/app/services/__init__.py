from .diagnostics import DiagnosticCollector, report_diagnostics
from .inherit_doc import apply_inherit_docs
from .module_builder import ModuleBuilder
from .resolver import SymbolResolver
from .type_merge import (
    merge_function_types,
    merge_property_types,
    merge_type_alias_types,
    synthesize_display,
)

__all__ = [
    "DiagnosticCollector",
    "ModuleBuilder",
    "SymbolResolver",
    "apply_inherit_docs",
    "report_diagnostics",
    "merge_function_types",
    "merge_property_types",
    "merge_type_alias_types",
    "synthesize_display",
]
