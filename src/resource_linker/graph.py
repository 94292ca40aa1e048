"""Resource graph: resource classes and the mappings they own."""

from typing import Any, Dict, Iterable, Iterator, List

import networkx as nx

from .models import ClassName, Mapping


class ResourceGraph:
    """
    Multimap from resource class to its mappings, backed by a networkx graph.

    Every class owning at least one mapping is a node carrying its mappings in
    insertion order. Every relational mapping is an edge from its owner to its
    target, keyed by method name. A target that owns no mapping yet only
    exists as an edge endpoint and is not a key of the graph.
    """

    def __init__(self):
        self.graph = nx.MultiDiGraph()

    def add(self, mapping: Mapping) -> None:
        owner = mapping.class_name
        if not self.graph.has_node(owner) or "mappings" not in self.graph.nodes[owner]:
            self.graph.add_node(owner, type="resource", mappings=[])
        self.graph.nodes[owner]["mappings"].append(mapping)

        if mapping.target is not None:
            if not self.graph.has_node(mapping.target):
                self.graph.add_node(mapping.target, type="reference")
            self.graph.add_edge(
                owner,
                mapping.target,
                key=mapping.location.method_name,
                type="SUB_RESOURCE",
                data=mapping,
            )

    def add_round(self, mappings: Iterable[Mapping]) -> None:
        """Append one batch of mappings, keeping their order."""
        for mapping in mappings:
            self.add(mapping)

    def __contains__(self, class_name: ClassName) -> bool:
        return (self.graph.has_node(class_name)
                and "mappings" in self.graph.nodes[class_name])

    def __len__(self) -> int:
        return len(self.classes())

    def __iter__(self) -> Iterator[ClassName]:
        return iter(self.classes())

    def classes(self) -> List[ClassName]:
        """Keys of the graph, in the order classes were first added."""
        return [node for node, data in self.graph.nodes(data=True) if "mappings" in data]

    def mappings_for(self, class_name: ClassName) -> List[Mapping]:
        if class_name not in self:
            return []
        return list(self.graph.nodes[class_name]["mappings"])

    def mappings(self) -> List[Mapping]:
        return [m for cls in self.classes() for m in self.graph.nodes[cls]["mappings"]]

    def relational_mappings(self) -> List[Mapping]:
        return [m for m in self.mappings() if m.target is not None]

    def referenced_classes(self) -> List[ClassName]:
        """Every relational target, keys or not, in first-seen order."""
        seen: Dict[ClassName, None] = {}
        for mapping in self.relational_mappings():
            seen.setdefault(mapping.target, None)
        return list(seen)

    def snapshot(self) -> Dict[ClassName, List[Mapping]]:
        """Ordered copy of the class -> mappings multimap."""
        return {cls: self.mappings_for(cls) for cls in self.classes()}

    def statistics(self) -> Dict[str, Any]:
        mappings = self.mappings()
        return {
            "total_classes": len(self.classes()),
            "total_mappings": len(mappings),
            "self_mappings": len([m for m in mappings if m.is_self]),
            "relational_mappings": len([m for m in mappings if not m.is_self]),
            "unreachable_targets": len([c for c in self.referenced_classes() if c not in self]),
        }
