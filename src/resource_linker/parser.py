"""Mapping construction from extracted method facts."""

from typing import Iterable, List, Optional

from .classifier import classify_link
from .diagnostics import DiagnosticSink
from .errors import LinkerError, NoHttpVerb, NoPathFound, NotAMethod, TooManySelf
from .logger import LinkerLogger, get_logger
from .models import ClassName, HttpVerb, Location, Mapping, MethodFact
from .path_template import compile_path
from .workload import ClassWorkLoad


class MappingParser:
    """
    Turns method facts into validated mappings.

    Each fact goes through a fixed sequence of checks; the first failing
    check is reported to the diagnostic sink and the fact is dropped. The
    workload ledger is only touched once every other check has passed, so a
    rejected fact never leaves partial state behind.
    """

    def __init__(self, sink: DiagnosticSink, logger: Optional[LinkerLogger] = None):
        self.sink = sink
        self.logger = logger or get_logger()

    def parse(self, fact: MethodFact, workload: ClassWorkLoad) -> Optional[Mapping]:
        """
        Build the mapping of one fact.

        Args:
            fact: Raw facts of one annotated element
            workload: Ledger of the current build invocation

        Returns:
            The Mapping, or None if a construction error was reported
        """
        try:
            return self._build(fact, workload)
        except LinkerError as e:
            self.logger.debug(f"Rejected {fact.qualified}: {e.kind.value}")
            self.sink.report(e.to_diagnostic())
            return None

    def parse_all(self, facts: Iterable[MethodFact], workload: ClassWorkLoad) -> List[Mapping]:
        """Parse facts in order, skipping the ones that fail."""
        mappings = []
        for fact in facts:
            mapping = self.parse(fact, workload)
            if mapping is not None:
                mappings.append(mapping)
        return mappings

    def _build(self, fact: MethodFact, workload: ClassWorkLoad) -> Mapping:
        subject = fact.qualified
        if fact.element_kind != "method":
            raise NotAMethod(subject)
        try:
            owner = ClassName.value_of(fact.owner_class)
        except ValueError:
            raise NotAMethod(subject) from None

        if fact.raw_path is None:
            raise NoPathFound(subject)

        verb = HttpVerb.parse(fact.http_verb)
        if verb is None:
            raise NoHttpVerb(subject)

        link = classify_link(
            fact.self_marker, fact.relational_marker, fact.relational_target, subject
        )
        compiled = compile_path(fact.raw_path, fact.declared_parameters, subject)
        location = Location(owner, fact.method_name)

        if link.target is None:
            if workload.is_completed(location.class_name):
                workload.flag_too_many_self(location.class_name)
                raise TooManySelf(subject)
            workload.complete(location.class_name)
        else:
            workload.add_pending_if_none(link.target)

        mapping = Mapping(
            location=location,
            http_verb=verb,
            link=link,
            path=compiled.template,
            path_parameters=compiled.path_parameters,
            query_parameters=compiled.query_parameters,
        )
        self.logger.debug(f"Parsed {verb.value} {mapping.path} for {subject}")
        return mapping
