"""Graph model: nodes, edges and their connectivity."""

from __future__ import annotations

import itertools
import threading
from typing import Iterator, Literal, Union

from .params import Parameterised

GraphType = Literal["digraph", "graph"]

GRAPH_TYPES: tuple[str, ...] = ("digraph", "graph")


class EdgeIdAllocator:
    """Hands out edge ids ("edge0", "edge1", ...). The sequence never restarts."""

    def __init__(self, prefix: str = "edge", start: int = 0):
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            return f"{self.prefix}{next(self._counter)}"


# Shared by every graph that is not given its own allocator, so edge ids stay
# unique across graphs for the lifetime of the process.
default_edge_ids = EdgeIdAllocator()


class Node(Parameterised):
    """A graph node. `id` must be unique among the nodes of a graph."""

    def __init__(self, id: str):
        super().__init__()
        self.id = id

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r})"


class GraphNode(Node):
    """A node wrapping a nested graph.

    Parameters are read from and written to the nested graph itself.
    """

    def __init__(self, id: str, graph: "Graph"):
        super().__init__(id)
        self.graph = graph

    def set_param(self, name: str, value: str) -> None:
        self.graph.set_param(name, value)

    def get_param(self, name: str) -> str | None:
        return self.graph.get_param(name)

    def get_params(self) -> list[str]:
        return self.graph.get_params()

    def remove_param(self, name: str) -> None:
        self.graph.remove_param(name)


class Edge(Parameterised):
    """A graph edge.

    The source is not stored: it is given by the edge's position in the
    graph's adjacency. Ids come from an EdgeIdAllocator.
    """

    def __init__(self, id: str, dest: Node):
        super().__init__()
        self.id = id
        self.dest = dest

    def __repr__(self) -> str:
        return f"Edge({self.id!r}, dest={self.dest.id!r})"


NodeRef = Union[Node, str]


class Graph(Parameterised):
    """A flat graph of nodes connected by edges.

    Nodes and edges are indexed by id, and adjacency is kept as
    source id -> {edge id -> destination id}. Dict ordering makes iteration
    (and therefore serialization) deterministic.

    Re-adding a node id replaces the Node object but keeps the edges already
    attached to that id; remove_node() first to start the node over.
    """

    def __init__(
        self,
        name: str | None = None,
        graph_type: GraphType = "digraph",
        *,
        edge_ids: EdgeIdAllocator | None = None,
    ):
        super().__init__()
        if graph_type not in GRAPH_TYPES:
            raise ValueError(f"graph_type must be one of: {', '.join(GRAPH_TYPES)}")
        self.name = name
        self.graph_type = graph_type
        self.edge_ids = edge_ids or default_edge_ids
        self.node_params = Parameterised()
        self.edge_params = Parameterised()
        self._nodes: dict[str, Node] = {}  # node id -> Node
        self._edges: dict[str, Edge] = {}  # edge id -> Edge
        self._adjacency: dict[str, dict[str, str]] = {}  # source id -> {edge id -> dest id}

    @property
    def directed(self) -> bool:
        return self.graph_type == "digraph"

    # -- nodes -------------------------------------------------------------

    def add_node(self, node: Node) -> None:
        """Add a node. Re-adding an id replaces the Node but keeps its edges."""
        self._nodes[node.id] = node
        self._adjacency.setdefault(node.id, {})

    def get_node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def get_nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def has_node(self, node: NodeRef) -> bool:
        return _node_id(node) in self._nodes

    # -- edges -------------------------------------------------------------

    def add_edge(self, source: Node, dest: Node) -> Edge:
        """Connect source to dest, adding either node if it is missing.

        Returns the new edge so parameters can be set on it.
        """
        for node in (source, dest):
            if node.id not in self._nodes:
                self.add_node(node)

        edge = Edge(self.edge_ids.next_id(), self._nodes[dest.id])
        self._edges[edge.id] = edge
        self._adjacency[source.id][edge.id] = dest.id
        return edge

    def get_edge(self, edge_id: str) -> Edge | None:
        return self._edges.get(edge_id)

    def get_edges(self) -> list[Edge]:
        return list(self._edges.values())

    def edge_between(self, source: NodeRef, dest: NodeRef) -> Edge | None:
        """Return an edge from source to dest, or None.

        With parallel edges only the first in iteration order is returned; use
        get_connections() to see all of them. Edges in the opposite direction
        are never returned.
        """
        dest_id = _node_id(dest)
        for edge_id, target in self._adjacency.get(_node_id(source), {}).items():
            if target == dest_id:
                return self._edges[edge_id]
        return None

    def get_connections(self, node: NodeRef) -> list[tuple[Node, Edge]] | None:
        """Outgoing (destination, edge) pairs; None if the node is not in the graph."""
        targets = self._adjacency.get(_node_id(node))
        if targets is None:
            return None
        return [(self._nodes[dest_id], self._edges[edge_id]) for edge_id, dest_id in targets.items()]

    def iter_connections(self) -> Iterator[tuple[Node, Node, Edge]]:
        """Yield (source, destination, edge) for every edge in adjacency order."""
        for source_id, targets in self._adjacency.items():
            for edge_id, dest_id in targets.items():
                yield self._nodes[source_id], self._nodes[dest_id], self._edges[edge_id]

    def out_degree(self, node: NodeRef) -> int:
        return len(self._adjacency.get(_node_id(node), {}))

    def in_degree(self, node: NodeRef) -> int:
        node_id = _node_id(node)
        return sum(1 for targets in self._adjacency.values() for dest_id in targets.values() if dest_id == node_id)

    # -- removal -----------------------------------------------------------

    def remove_node(self, node: NodeRef) -> None:
        """Remove the node and every edge that starts or ends at it."""
        node_id = _node_id(node)
        if node_id not in self._nodes:
            return

        del self._nodes[node_id]
        for edge_id in self._adjacency.pop(node_id):
            del self._edges[edge_id]

        for targets in self._adjacency.values():
            incoming = [edge_id for edge_id, dest_id in targets.items() if dest_id == node_id]
            for edge_id in incoming:
                del targets[edge_id]
                del self._edges[edge_id]

    def remove_edge(self, edge: Edge | str) -> None:
        """Remove the edge. Nodes stay even if they become unconnected."""
        edge_id = edge if isinstance(edge, str) else edge.id
        if self._edges.pop(edge_id, None) is None:
            return
        for targets in self._adjacency.values():
            if edge_id in targets:
                del targets[edge_id]
                return

    def remove(self, element: Node | Edge) -> None:
        if isinstance(element, Edge):
            self.remove_edge(element)
        else:
            self.remove_node(element)

    # -- default parameters ------------------------------------------------

    def set_node_param(self, name: str, value: str) -> None:
        """Set a parameter that applies to all nodes."""
        self.node_params.set_param(name, value)

    def get_node_param(self, name: str) -> str | None:
        return self.node_params.get_param(name)

    def get_node_params(self) -> list[str]:
        return self.node_params.get_params()

    def set_edge_param(self, name: str, value: str) -> None:
        """Set a parameter that applies to all edges."""
        self.edge_params.set_param(name, value)

    def get_edge_param(self, name: str) -> str | None:
        return self.edge_params.get_param(name)

    def get_edge_params(self) -> list[str]:
        return self.edge_params.get_params()

    def __repr__(self) -> str:
        return f"Graph({self.name!r}, {self.graph_type!r}, nodes={len(self._nodes)}, edges={len(self._edges)})"


def _node_id(node: NodeRef) -> str:
    return node if isinstance(node, str) else node.id
