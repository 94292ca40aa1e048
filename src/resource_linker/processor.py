"""Build driver: rounds of facts in, validated graph and generated linkers out."""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .config import LinkerConfig
from .diagnostics import DiagnosticSink, LoggingSink
from .emitter import CodeEmitter, PythonSourceEmitter, RecordingEmitter
from .enumerator import PATH, descriptor_requests
from .errors import LinkerError, Severity
from .export import write_dot
from .graph import ResourceGraph
from .logger import get_logger
from .models import ClassName, Mapping, MethodFact
from .parser import MappingParser
from .validator import ResourceGraphValidator
from .workload import ClassWorkLoad


@dataclass
class RoundResult:
    """Outcome of one processed round."""
    index: int
    mappings: List[Mapping] = field(default_factory=list)
    rejected: int = 0
    violations: List[LinkerError] = field(default_factory=list)
    generated: List[ClassName] = field(default_factory=list)

    @property
    def consistent(self) -> bool:
        return not self.violations


class LinkerProcessor:
    """
    Processes rounds of method facts for one build invocation.

    The graph and the workload ledger live as long as the processor. A round
    whose accumulated graph fails validation generates nothing, but its
    mappings stay in the graph so a later round can supply what was missing.
    """

    def __init__(self,
                 config: Optional[LinkerConfig] = None,
                 emitter: Optional[CodeEmitter] = None,
                 sink: Optional[DiagnosticSink] = None):
        """Initialize the processor."""
        self.config = config or LinkerConfig()
        self.logger = get_logger()
        self.sink = sink or LoggingSink(self.logger)
        if emitter is None:
            emitter = (PythonSourceEmitter(self.config.output_dir)
                       if self.config.output_dir else RecordingEmitter())
        self.emitter = emitter
        self.graph = ResourceGraph()
        self.workload = ClassWorkLoad()
        self.parser = MappingParser(self.sink, self.logger)
        self.validator = ResourceGraphValidator()
        self.rounds: List[RoundResult] = []
        self._awaiting_generation: Dict[ClassName, None] = {}
        self._performance_metrics: Dict[str, float] = {}

        self.logger.info("Linker processor initialized")

    def get_performance_metrics(self) -> Dict[str, float]:
        """Get execution time of every processed round."""
        return self._performance_metrics.copy()

    def process_round(self, facts: Iterable[MethodFact], final: bool = False) -> RoundResult:
        """
        Process one batch of facts.

        Args:
            facts: Facts in extractor order
            final: Whether no further round will follow; validation
                violations are reported as errors only for the final round

        Returns:
            RoundResult with the accepted mappings and validation outcome
        """
        start_time = time.time()
        facts = list(facts)
        result = RoundResult(index=len(self.rounds) + 1)
        self.logger.info(f"Starting round {result.index} with {len(facts)} facts")

        result.mappings = self.parser.parse_all(facts, self.workload)
        result.rejected = len(facts) - len(result.mappings)
        self.graph.add_round(result.mappings)
        for mapping in result.mappings:
            self._awaiting_generation.setdefault(mapping.class_name, None)

        result.violations = self.validator.validate(self.graph, self.workload)
        severity = Severity.ERROR if final else Severity.WARNING
        for violation in result.violations:
            self.sink.report(violation.to_diagnostic(severity))

        if result.consistent:
            result.generated = self._generate()
        else:
            self.logger.warning(f"Round {result.index}: {len(result.violations)} violations, "
                                f"generation deferred for {len(self._awaiting_generation)} classes")

        execution_time = time.time() - start_time
        self._performance_metrics[f"round_{result.index}"] = execution_time
        self.rounds.append(result)
        self.logger.info(f"Round {result.index} completed: {len(result.mappings)} mappings, "
                         f"{result.rejected} rejected, {len(result.generated)} classes generated "
                         f"in {execution_time:.3f}s")
        return result

    def _generate(self) -> List[ClassName]:
        generated = []
        for class_name in list(self._awaiting_generation):
            mappings = self.graph.mappings_for(class_name)
            self.emitter.emit_linker(class_name.append(self.config.linker_suffix), mappings)
            for request in descriptor_requests(class_name, mappings,
                                               self.config.path_parameters_suffix,
                                               self.config.query_parameters_suffix):
                if request.kind == PATH:
                    self.emitter.emit_path_parameters(request)
                else:
                    self.emitter.emit_query_parameters(request)
            self.logger.debug(f"Generated linker for {class_name}")
            generated.append(class_name)
        self._awaiting_generation.clear()
        return generated

    @property
    def succeeded(self) -> bool:
        """No rejected fact in any round and a consistent final graph."""
        if any(r.rejected for r in self.rounds):
            return False
        return not self.rounds or self.rounds[-1].consistent

    def finish(self) -> bool:
        """
        Close the build: export the graph when configured and report the outcome.

        Returns:
            Whether the build succeeded
        """
        pending = [c for c in self.workload.pending() if c not in self.graph]
        if pending:
            self.logger.warning(f"Relational targets never declared: {', '.join(map(str, pending))}")

        if self.config.export_graph:
            out_dir = Path(self.config.output_dir or ".")
            path = write_dot(self.graph, out_dir / self.config.graph_file_name)
            self.logger.info(f"Resource graph exported to {path}")

        stats = self.graph.statistics()
        self.logger.info(f"Build finished: {stats['total_classes']} classes, "
                         f"{stats['total_mappings']} mappings, succeeded={self.succeeded}")
        return self.succeeded

    def run(self, rounds: Sequence[Iterable[MethodFact]]) -> bool:
        """Process every round, the last one as final, then finish the build."""
        for index, facts in enumerate(rounds):
            self.process_round(facts, final=index == len(rounds) - 1)
        return self.finish()
