from typing import List

from luaudoc.common import bus
from luaudoc.needle import L
from luaudoc.spec import Diagnostic, DiagnosticLevel

MISSING_CLASS = "@class missing for this file."
AMBIGUOUS_OWNER = "@within missing for ambiguous class ownership."
READONLY_MISUSE = "@readonly used on non-property symbol."
PARAM_DRIFT = "@param does not match function parameters."


class DiagnosticCollector:
    """Per-module accumulator; resolution never aborts on a diagnostic."""

    def __init__(self, file: str):
        self.file = file
        self.items: List[Diagnostic] = []

    def warning(self, line: int, message: str) -> None:
        self.items.append(Diagnostic(DiagnosticLevel.WARNING, self.file, line, message))

    def error(self, line: int, message: str) -> None:
        self.items.append(Diagnostic(DiagnosticLevel.ERROR, self.file, line, message))

    def __len__(self) -> int:
        return len(self.items)


def report_diagnostics(diagnostics: List[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        emit = bus.error if diagnostic.level == DiagnosticLevel.ERROR else bus.warning
        emit(
            L.diagnostic.report,
            level=diagnostic.level.value.upper(),
            file=diagnostic.file,
            line=diagnostic.line,
            message=diagnostic.message,
        )
