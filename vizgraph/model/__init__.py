"""Graph data model: parameter sets, nodes, edges and graphs."""

from .graph import Edge, EdgeIdAllocator, Graph, GraphNode, GraphType, Node, default_edge_ids
from .params import Parameterised

__all__ = [
    "Edge",
    "EdgeIdAllocator",
    "Graph",
    "GraphNode",
    "GraphType",
    "Node",
    "Parameterised",
    "default_edge_ids",
]
