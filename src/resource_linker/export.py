"""Graphviz DOT export of the resource graph."""

from pathlib import Path

from .graph import ResourceGraph


def _quote(text) -> str:
    return '"' + str(text).replace("\\", "\\\\").replace('"', '\\"') + '"'


def to_dot(graph: ResourceGraph) -> str:
    """
    Render the graph as a DOT digraph.

    Resource classes are solid nodes labelled with their simple name;
    relational targets that own no mapping are dashed. Each relational
    mapping is an edge labelled with its method name.
    """
    lines = ["digraph resources {"]
    for class_name in graph.classes():
        lines.append(f"  {_quote(class_name)} [label={_quote(class_name.simple_name)}];")
    for class_name in graph.referenced_classes():
        if class_name not in graph:
            lines.append(
                f"  {_quote(class_name)} [label={_quote(class_name.simple_name)}, style=\"dashed\"];"
            )
    for mapping in graph.relational_mappings():
        lines.append(
            f"  {_quote(mapping.class_name)} -> {_quote(mapping.target)} "
            f"[label={_quote(mapping.location.method_name)}];"
        )
    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(graph: ResourceGraph, out_path) -> Path:
    """Persist the graph to a DOT file and return its path."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(to_dot(graph), encoding="utf-8")
    return out_path
