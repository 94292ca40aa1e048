"""Cross-class invariant checks of the resource graph."""

from typing import List, Optional

from .errors import LinkerError, MissingAnnotations, MissingSelf, TooManySelf
from .graph import ResourceGraph
from .workload import ClassWorkLoad


class ResourceGraphValidator:
    """
    Checks self-completeness and reachability of a resource graph.

    Validation never mutates the graph or the ledger; it only lists the
    violations of the current snapshot.
    """

    def validate(self, graph: ResourceGraph,
                 workload: Optional[ClassWorkLoad] = None) -> List[LinkerError]:
        """
        List every violation of the graph.

        Args:
            graph: Accumulated resource graph
            workload: Ledger of the build; classes it flagged with too many
                self mappings were already reported and are skipped here

        Returns:
            TooManySelf violations first, then at most one MissingSelf, then
            one MissingAnnotations per relational mapping with an unreachable target
        """
        violations: List[LinkerError] = []
        missing_self = []

        for class_name in graph.classes():
            if workload is not None and workload.is_flagged(class_name):
                continue
            self_mappings = [m for m in graph.mappings_for(class_name) if m.is_self]
            if not self_mappings:
                missing_self.append(class_name)
            elif len(self_mappings) > 1:
                violations.append(TooManySelf(self_mappings[1].location.qualified))

        if missing_self:
            violations.append(MissingSelf(missing_self))

        for mapping in graph.relational_mappings():
            if mapping.target not in graph:
                violations.append(MissingAnnotations(mapping.location))

        return violations

    def is_consistent(self, graph: ResourceGraph,
                      workload: Optional[ClassWorkLoad] = None) -> bool:
        """Whether all the facts received so far are consistent."""
        return not self.validate(graph, workload)
