"""Serialize a Graph to DOT text and record the visual id correspondence."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .correspondence import Correspondence
from .model import Graph, Node, Parameterised

logger = logging.getLogger(__name__)

CONNECTORS = {"digraph": "->", "graph": "--"}


@dataclass
class DotDocument:
    """DOT text for one render cycle, plus the ids assigned while writing it."""

    text: str
    correspondence: Correspondence = field(default_factory=Correspondence)
    node_count: int = 0
    edge_count: int = 0

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to draw."""
        return self.edge_count == 0


def serialize(graph: Graph) -> DotDocument:
    """Write the graph as DOT.

    Every node that takes part in an edge gets an explicit `id=nodeN`
    attribute and every edge an `id=edgeN` attribute; Graphviz copies these
    onto the SVG groups it emits. Counters start at 1 on each call.

    Nodes without edges are not written.
    """
    correspondence = Correspondence()
    connector = CONNECTORS[graph.graph_type]

    header = graph.graph_type
    if graph.name:
        header += f" {graph.name}"
    lines = [header + " {"]

    for name, value in graph.params.items():
        lines.append(f"  {name}={value};")
    if graph.node_params.has_params():
        lines.append(f"  node {_attr_list(graph.node_params.params)};")
    if graph.edge_params.has_params():
        lines.append(f"  edge {_attr_list(graph.edge_params.params)};")

    def emit_node(node: Node) -> None:
        if node.id in correspondence.nodes:
            return
        visual_id = f"node{len(correspondence.nodes) + 1}"
        correspondence.nodes.put(visual_id, node.id)
        lines.append(f"  {node.id} {_attr_list(_with_id(node, visual_id))};")

    for source, dest, edge in graph.iter_connections():
        emit_node(source)
        emit_node(dest)
        visual_id = f"edge{len(correspondence.edges) + 1}"
        correspondence.edges.put(visual_id, edge.id)
        lines.append(f"  {source.id} {connector} {dest.id} {_attr_list(_with_id(edge, visual_id))};")

    lines.append("}")

    doc = DotDocument(
        text="\n".join(lines) + "\n",
        correspondence=correspondence,
        node_count=len(correspondence.nodes),
        edge_count=len(correspondence.edges),
    )
    logger.debug(f"Serialized {graph!r}: {doc.node_count} node statements, {doc.edge_count} edge statements")
    return doc


def _with_id(element: Parameterised, visual_id: str) -> dict[str, str]:
    attrs = element.params
    attrs["id"] = visual_id
    return attrs


def _attr_list(attrs: dict[str, str]) -> str:
    return "[" + ",".join(f"{name}={value}" for name, value in attrs.items()) + "]"
