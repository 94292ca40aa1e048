"""Diagnostic sinks receiving construction and validation failures."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .errors import Diagnostic, ErrorKind, Severity
from .logger import LinkerLogger, get_logger


class DiagnosticSink(ABC):
    """Destination of every reported failure."""

    @abstractmethod
    def report(self, diagnostic: Diagnostic) -> None:
        ...


class CollectingSink(DiagnosticSink):
    """Keeps diagnostics in memory, in report order."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def of_kind(self, kind: ErrorKind) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind is kind]

    def clear(self) -> None:
        self.diagnostics.clear()


class LoggingSink(CollectingSink):
    """Collects diagnostics and writes each one to the linker log."""

    def __init__(self, logger: Optional[LinkerLogger] = None):
        super().__init__()
        self.logger = logger or get_logger()

    def report(self, diagnostic: Diagnostic) -> None:
        super().report(diagnostic)
        self.logger.diagnostic(diagnostic)
