"""Pytest configuration and fixtures."""

from __future__ import annotations

import html
import re

import pytest

from vizgraph.errors import RenderError
from vizgraph.model import Graph, Node
from vizgraph.surface import VizSurface

_NODE_RE = re.compile(r"^\s*(\S+) \[(.*)\];$")
_EDGE_RE = re.compile(r"^\s*(\S+) (->|--) (\S+) \[(.*)\];$")
_ATTR_RE = re.compile(r'^[A-Za-z_]\w*=(".*"|\S+)$')


def _attrs(raw: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for item in raw.split(","):
        if not _ATTR_RE.match(item):
            raise RenderError(f"Error: syntax error near '{item}'")
        name, _, value = item.partition("=")
        attrs[name] = value.strip('"')
    return attrs


class FakeEngine:
    """Stands in for Graphviz: reads the DOT we write and emits Graphviz-shaped SVG."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, text: str) -> str:
        self.calls.append(text)
        nodes: list[str] = []
        edges: list[str] = []
        positions: dict[str, tuple[int, int]] = {}

        for line in text.splitlines():
            m = _EDGE_RE.match(line)
            if m:
                src, connector, dst, raw = m.groups()
                attrs = _attrs(raw)
                (x1, y1), (x2, y2) = positions[src], positions[dst]
                label = f"<text x=\"{(x1 + x2) // 2}\" y=\"{(y1 + y2) // 2}\">{html.escape(attrs['label'])}</text>" if "label" in attrs else ""
                edges.append(
                    f'<g id="{attrs["id"]}" class="edge"><title>{html.escape(src + connector + dst)}</title>'
                    f'<path fill="none" stroke="black" d="M{x1},{y1 + 18}C{x1},{y1 + 30} {x2},{y2 - 30} {x2},{y2 - 18}"/>'
                    f'<polygon fill="black" stroke="black" points="{x2 - 3},{y2 - 28} {x2},{y2 - 18} {x2 + 3},{y2 - 28} {x2 - 3},{y2 - 28}"/>'
                    f"{label}</g>"
                )
                continue
            m = _NODE_RE.match(line)
            if m and m.group(1) not in ("node", "edge"):
                node_id, raw = m.groups()
                attrs = _attrs(raw)
                x, y = 40 + 80 * len(positions), -30 - 70 * len(positions)
                positions[node_id] = (x, y)
                if attrs.get("shape") == "box":
                    shape = f'<polygon fill="none" stroke="black" points="{x + 27},{y - 18} {x - 27},{y - 18} {x - 27},{y + 18} {x + 27},{y + 18} {x + 27},{y - 18}"/>'
                else:
                    shape = f'<ellipse fill="none" stroke="black" cx="{x}" cy="{y}" rx="27" ry="18"/>'
                nodes.append(
                    f'<g id="{attrs["id"]}" class="node"><title>{html.escape(node_id)}</title>{shape}'
                    f'<text text-anchor="middle" x="{x}" y="{y + 4}">{html.escape(attrs.get("label", node_id))}</text></g>'
                )
            elif line.strip() and not line.rstrip().endswith(("{", "}", ";")):
                raise RenderError(f"Error: syntax error in line {text.splitlines().index(line) + 1}")

        width = 80 * max(1, len(positions)) + 8
        height = 70 * max(1, len(positions)) + 8
        return (
            '<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n'
            '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
            f'<svg width="{width}pt" height="{height}pt" viewBox="0.00 0.00 {width}.00 {height}.00" '
            'xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink">\n'
            f'<g id="graph0" class="graph" transform="scale(1 1) rotate(0) translate(4 {height - 4})">\n'
            f'<polygon fill="white" stroke="none" points="-4,4 -4,-{height} {width},-{height} {width},4 -4,4"/>\n'
            + "\n".join(nodes + edges)
            + "\n</g>\n</svg>\n"
        )


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def surface(fake_engine: FakeEngine) -> VizSurface:
    return VizSurface(fake_engine)


@pytest.fixture
def ab_graph() -> Graph:
    """Nodes A and B joined by one edge A -> B."""
    graph = Graph("G", "digraph")
    graph.add_edge(Node("A"), Node("B"))
    return graph
