"""Read graphs from TOML description files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .errors import GraphFileError
from .model import Graph, Node
from .model.graph import GRAPH_TYPES


def _coerce_params(value: Any, *, where: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise GraphFileError(f"{where} must be a table")
    return {str(k): _format_value(v) for k, v in value.items()}


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def load_graph(path: Path) -> Graph:
    """
    Load a graph from a TOML description file.

    Attribute values are passed to DOT as written, so string values that need
    quoting in DOT must carry their own quotes (e.g. label = '"Node A"').
    """
    import tomllib

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise GraphFileError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise GraphFileError(f"{path}: {e}") from e

    return graph_from_dict(data)


def graph_from_dict(data: dict[str, Any]) -> Graph:
    graph_type = str(data.get("type", "digraph")).strip() or "digraph"
    if graph_type not in GRAPH_TYPES:
        raise GraphFileError(f"type must be one of: {', '.join(GRAPH_TYPES)}")

    name = data.get("name")
    graph = Graph(str(name) if name else None, graph_type)

    for k, v in _coerce_params(data.get("params"), where="params").items():
        graph.set_param(k, v)
    for k, v in _coerce_params(data.get("node_defaults"), where="node_defaults").items():
        graph.set_node_param(k, v)
    for k, v in _coerce_params(data.get("edge_defaults"), where="edge_defaults").items():
        graph.set_edge_param(k, v)

    for raw in data.get("nodes", []):
        if not isinstance(raw, dict):
            raise GraphFileError("each [[nodes]] entry must be a table")
        node_id = str(raw.get("id", "")).strip()
        if not node_id:
            raise GraphFileError("node id is required")
        node = graph.get_node(node_id) or Node(node_id)
        for k, v in _coerce_params(raw.get("params"), where=f"nodes.{node_id}.params").items():
            node.set_param(k, v)
        graph.add_node(node)

    for idx, raw in enumerate(data.get("edges", [])):
        if not isinstance(raw, dict):
            raise GraphFileError("each [[edges]] entry must be a table")
        source_id = str(raw.get("source", "")).strip()
        target_id = str(raw.get("target", "")).strip()
        if not source_id or not target_id:
            raise GraphFileError(f"edges[{idx}] needs both source and target")

        source = graph.get_node(source_id) or Node(source_id)
        target = graph.get_node(target_id) or Node(target_id)
        edge = graph.add_edge(source, target)
        for k, v in _coerce_params(raw.get("params"), where=f"edges[{idx}].params").items():
            edge.set_param(k, v)

    return graph
