"""Render and inspect commands - turn a graph file into DOT, SVG or HTML."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..config import RenderConfig
from ..dot import serialize
from ..html import wrap_html
from ..loader import load_graph
from ..model import Graph
from ..render import GraphvizEngine, LayoutEngine
from ..surface import SurfaceState, VizSurface


def run_render(
    graph_path: Path,
    *,
    fmt: str = "svg",
    out: Path | None = None,
    highlight: tuple[str, ...] = (),
    title: str | None = None,
    config: RenderConfig | None = None,
    engine: LayoutEngine | None = None,
) -> int:
    """Render a graph file. Returns a process exit code."""
    console = Console(stderr=True)
    config = config or RenderConfig()

    graph = load_graph(graph_path)
    document = serialize(graph)

    text: str
    if fmt == "dot":
        text = document.text
    elif fmt == "json":
        text = json.dumps(document.correspondence.to_dict(), indent=2, sort_keys=True) + "\n"
    else:
        surface = VizSurface(engine or GraphvizEngine(config.engine), width=config.width, height=config.height)
        state = surface.render(document)

        if state == SurfaceState.ERROR:
            console.print(f"[red]Render failed:[/red] {surface.error}")
            return 1
        if state == SurfaceState.EMPTY:
            console.print("[yellow]Graph has no edges; nothing to draw.[/yellow]")
            return 0

        for node_id in highlight:
            if not surface.apply_node_style(node_id, config.highlight_property, config.highlight_value):
                console.print(f"[yellow]Cannot highlight {node_id!r}: not drawn[/yellow]")

        svg_text = surface.svg_text() or ""
        if fmt == "html":
            page_title = title or config.title or graph.name or graph_path.stem
            text = wrap_html(svg_text, title=page_title, correspondence=surface.correspondence)
        else:
            text = svg_text + "\n"

    if out:
        out.write_text(text, encoding="utf-8")
        console.print(f"Wrote {fmt} output to {out}", style="green")
    else:
        print(text, end="" if text.endswith("\n") else "\n")

    return 0


def run_inspect(graph_path: Path, *, fmt: str = "rich") -> int:
    """Summarize a graph file: nodes with degrees, edges, and nodes that will not be drawn."""
    graph = load_graph(graph_path)
    payload = _summarize_graph(graph, title=str(graph_path))

    if fmt == "json":
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        _print_rich(payload, console=Console())
    return 0


def _summarize_graph(graph: Graph, *, title: str) -> dict:
    nodes = [
        {
            "id": node.id,
            "in_degree": graph.in_degree(node),
            "out_degree": graph.out_degree(node),
            "params": node.params,
        }
        for node in graph.get_nodes()
    ]
    edges = [
        {"id": edge.id, "source": source.id, "target": dest.id, "params": edge.params}
        for source, dest, edge in graph.iter_connections()
    ]
    return {
        "title": title,
        "type": graph.graph_type,
        "node_count": len(nodes),
        "edge_count": len(edges),
        "nodes": nodes,
        "edges": edges,
        "isolated": [n["id"] for n in nodes if n["in_degree"] == 0 and n["out_degree"] == 0],
    }


def _print_rich(payload: dict, *, console: Console) -> None:
    console.print(f"[bold]{payload['title']}[/bold] ({payload['type']})")
    console.print(f"Nodes: {payload['node_count']}  Edges: {payload['edge_count']}")

    nodes = Table(title="Nodes")
    nodes.add_column("Node")
    nodes.add_column("In", justify="right")
    nodes.add_column("Out", justify="right")
    for n in payload["nodes"]:
        nodes.add_row(n["id"], str(n["in_degree"]), str(n["out_degree"]))
    console.print(nodes)

    edges = Table(title="Edges")
    edges.add_column("Edge")
    edges.add_column("Source")
    edges.add_column("Target")
    for e in payload["edges"]:
        edges.add_row(e["id"], e["source"], e["target"])
    console.print(edges)

    if payload["isolated"]:
        console.print(f"[yellow]Not drawn (no edges):[/yellow] {', '.join(payload['isolated'])}")
