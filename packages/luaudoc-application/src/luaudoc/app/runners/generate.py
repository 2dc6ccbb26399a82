import os
from pathlib import Path

from luaudoc.common import bus
from luaudoc.needle import L
from luaudoc.spec import CatalogWriterProtocol, GenerationResult
from luaudoc.app.services import report_diagnostics


class GenerateRunner:
    def __init__(self, root_path: Path, writer: CatalogWriterProtocol):
        self.root_path = root_path
        self.writer = writer

    def run(
        self, result: GenerationResult, out_path: Path, fail_on_warning: bool = False
    ) -> bool:
        catalog = result.catalog
        for module in catalog.modules:
            bus.info(
                L.generate.module.success, path=module.path, count=len(module.symbols)
            )

        self.writer.write(catalog, out_path)
        bus.success(
            L.generate.catalog.written,
            format=self.writer.format_name,
            path=Path(os.path.relpath(out_path, self.root_path)).as_posix(),
        )

        report_diagnostics(result.diagnostics)

        symbol_count = sum(len(module.symbols) for module in catalog.modules)
        bus.success(
            L.generate.run.complete,
            modules=len(catalog.modules),
            symbols=symbol_count,
        )

        if fail_on_warning and result.diagnostics:
            return False
        return True
