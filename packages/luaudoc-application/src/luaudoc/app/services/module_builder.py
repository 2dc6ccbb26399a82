from typing import List, Optional, Sequence, Tuple

from luaudoc.lang.luau import LuauBindingScanner, extract_doc_blocks
from luaudoc.spec import (
    BindingSourceProtocol,
    Diagnostic,
    Module,
    TypeOracleProtocol,
)

from .diagnostics import DiagnosticCollector
from .inherit_doc import apply_inherit_docs
from .resolver import SymbolResolver


class ModuleBuilder:
    """Runs the per-file pipeline: blocks, bindings, symbols, inherit-doc."""

    def __init__(
        self,
        oracle: Optional[TypeOracleProtocol] = None,
        binding_source: Optional[BindingSourceProtocol] = None,
    ):
        self.resolver = SymbolResolver(oracle)
        self.binding_source = binding_source or LuauBindingScanner()

    def build(
        self,
        module_id: str,
        path: str,
        lines: Sequence[str],
        source_hash: str = "",
    ) -> Tuple[Module, List[Diagnostic]]:
        diagnostics = DiagnosticCollector(path)
        blocks = extract_doc_blocks(lines)
        bindings = self.binding_source.scan(lines)

        symbols = self.resolver.resolve(path, lines, blocks, bindings, diagnostics)
        apply_inherit_docs(symbols)

        module = Module(id=module_id, path=path, source_hash=source_hash, symbols=symbols)
        return module, diagnostics.items
