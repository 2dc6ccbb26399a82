from luaudoc.common import bus
from luaudoc.needle import L
from luaudoc.spec import GenerationResult
from luaudoc.app.services import report_diagnostics


class CheckRunner:
    def run(self, result: GenerationResult) -> bool:
        report_diagnostics(result.diagnostics)

        if result.is_clean:
            bus.success(L.check.run.clean, modules=len(result.catalog.modules))
            return True

        bus.error(
            L.check.run.fail,
            errors=result.error_count,
            warnings=result.warning_count,
        )
        return False
