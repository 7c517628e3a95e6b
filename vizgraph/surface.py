"""Display surface: holds the rendered SVG and maps interaction back to the graph.

The surface is in one of three states:

- EMPTY: nothing installed (initial state, or an empty graph was drawn)
- DISPLAYING: an SVG document and its id correspondence are installed
- ERROR: the last render failed; `error` holds the engine's description

Only `render()`/`draw_graph()` change state. Every other operation is a
no-op unless the surface is DISPLAYING, and ids that are not part of the
current correspondence (isolated nodes, elements removed since the last
render) are ignored.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from . import svg
from .correspondence import BiMap, Correspondence
from .dot import DotDocument, serialize
from .model import Graph
from .render import GraphvizEngine, LayoutEngine, render

logger = logging.getLogger(__name__)

ClickHandler = Callable[[str], None]


class SurfaceState(str, Enum):
    EMPTY = "empty"
    DISPLAYING = "displaying"
    ERROR = "error"


@dataclass
class InstalledDocument:
    """An SVG document together with the correspondence it was rendered from."""

    root: ET.Element
    correspondence: Correspondence
    elements: dict[str, ET.Element]  # visual id -> SVG element
    initial_view_box: svg.ViewBox | None
    listeners: dict[str, list[Callable[[], None]]] = field(default_factory=lambda: defaultdict(list))


class VizSurface:
    """Renders graphs and routes clicks/styling between domain ids and SVG elements."""

    def __init__(
        self,
        engine: LayoutEngine | None = None,
        *,
        width: str = "100%",
        height: str = "100%",
    ):
        self.engine = engine or GraphvizEngine()
        self.width = width
        self.height = height
        self.error: str | None = None
        self._installed: InstalledDocument | None = None

    # -- rendering ---------------------------------------------------------

    @property
    def state(self) -> SurfaceState:
        if self._installed is not None:
            return SurfaceState.DISPLAYING
        if self.error is not None:
            return SurfaceState.ERROR
        return SurfaceState.EMPTY

    @property
    def correspondence(self) -> Correspondence | None:
        return self._installed.correspondence if self._installed else None

    def draw_graph(self, graph: Graph) -> SurfaceState:
        """Serialize and render the graph, replacing whatever is displayed."""
        return self.render(serialize(graph))

    def render(self, document: DotDocument) -> SurfaceState:
        """Render a serialized graph.

        The previous document is discarded in every case. On failure the
        surface holds no document and `error` describes what went wrong.
        """
        self._installed = None
        self.error = None

        result = render(document, self.engine)
        if result.error is not None:
            self.error = result.error
            return self.state
        if result.svg is None:
            return self.state

        try:
            root = svg.parse_svg(result.svg)
        except ValueError as e:
            logger.warning(f"Layout engine returned unusable SVG: {e}")
            self.error = str(e)
            return self.state

        ids = svg.index_ids(root)
        correspondence = document.correspondence
        elements = {
            visual_id: ids[visual_id]
            for visual_id in correspondence.nodes.visual_ids() + correspondence.edges.visual_ids()
            if visual_id in ids
        }
        missing = len(correspondence.nodes) + len(correspondence.edges) - len(elements)
        if missing:
            logger.warning(f"{missing} element id(s) not found in rendered SVG")

        installed = InstalledDocument(
            root=root,
            correspondence=correspondence,
            elements=elements,
            initial_view_box=svg.get_view_box(root),
        )
        self._apply_size(installed.root)
        self._installed = installed
        return self.state

    def svg_text(self) -> str | None:
        """The installed SVG document as text, or None."""
        if self._installed is None:
            return None
        return svg.to_string(self._installed.root)

    # -- click routing -----------------------------------------------------

    def add_node_click_listener(self, handler: ClickHandler) -> None:
        """Call `handler(node_id)` when a node is clicked."""
        if self._installed is None:
            return
        self._add_click_listener(self._installed, self._installed.correspondence.nodes, handler)

    def add_edge_click_listener(self, handler: ClickHandler) -> None:
        """Call `handler(edge_id)` when an edge is clicked."""
        if self._installed is None:
            return
        self._add_click_listener(self._installed, self._installed.correspondence.edges, handler)

    @staticmethod
    def _add_click_listener(installed: InstalledDocument, ids: BiMap, handler: ClickHandler) -> None:
        for visual_id in ids.visual_ids():
            if visual_id not in installed.elements:
                continue

            def listener(visual_id: str = visual_id) -> None:
                domain_id = ids.domain_id(visual_id)
                if domain_id is not None:
                    handler(domain_id)

            installed.listeners[visual_id].append(listener)

    def click(self, visual_id: str) -> str | None:
        """Activate the SVG element with this id, as a host UI would on a click.

        Returns the domain node/edge id the element stands for, or None.
        """
        installed = self._installed
        if installed is None or visual_id not in installed.elements:
            return None
        for listener in list(installed.listeners.get(visual_id, [])):
            listener()
        return self.get_node_id(visual_id) or self.get_edge_id(visual_id)

    def get_node_id(self, visual_id: str) -> str | None:
        if self._installed is None:
            return None
        return self._installed.correspondence.nodes.domain_id(visual_id)

    def get_edge_id(self, visual_id: str) -> str | None:
        if self._installed is None:
            return None
        return self._installed.correspondence.edges.domain_id(visual_id)

    # -- styling -----------------------------------------------------------

    def apply_node_style(self, node_id: str, prop: str, value: str) -> bool:
        """Set a CSS property on the node's outline (not its label)."""
        return self._style(self._node_element(node_id), svg.shape_parts, prop, value)

    def remove_node_style(self, node_id: str, prop: str) -> bool:
        return self._style(self._node_element(node_id), svg.shape_parts, prop, None)

    def apply_node_text_style(self, node_id: str, prop: str, value: str) -> bool:
        """Set a CSS property on the node's label text."""
        return self._style(self._node_element(node_id), svg.text_parts, prop, value)

    def remove_node_text_style(self, node_id: str, prop: str) -> bool:
        return self._style(self._node_element(node_id), svg.text_parts, prop, None)

    def apply_edge_style(self, edge_id: str, prop: str, value: str) -> bool:
        """Set a CSS property on the edge's line and arrowheads."""
        return self._style(self._edge_element(edge_id), _edge_shape_parts, prop, value)

    def remove_edge_style(self, edge_id: str, prop: str) -> bool:
        return self._style(self._edge_element(edge_id), _edge_shape_parts, prop, None)

    def apply_edge_text_style(self, edge_id: str, prop: str, value: str) -> bool:
        """Set a CSS property on the edge's label text."""
        return self._style(self._edge_element(edge_id), svg.text_parts, prop, value)

    def remove_edge_text_style(self, edge_id: str, prop: str) -> bool:
        return self._style(self._edge_element(edge_id), svg.text_parts, prop, None)

    def _node_element(self, node_id: str) -> ET.Element | None:
        if self._installed is None:
            return None
        visual_id = self._installed.correspondence.nodes.visual_id(node_id)
        return self._installed.elements.get(visual_id) if visual_id else None

    def _edge_element(self, edge_id: str) -> ET.Element | None:
        if self._installed is None:
            return None
        visual_id = self._installed.correspondence.edges.visual_id(edge_id)
        return self._installed.elements.get(visual_id) if visual_id else None

    @staticmethod
    def _style(
        element: ET.Element | None,
        select: Callable[[ET.Element], list[ET.Element]],
        prop: str,
        value: str | None,
    ) -> bool:
        if element is None:
            return False
        for part in select(element):
            if value is None:
                svg.unset_style(part, prop)
            else:
                svg.set_style(part, prop, value)
        return True

    # -- presentation ------------------------------------------------------

    def resize(self, width: str | None = None, height: str | None = None) -> None:
        """Apply new display dimensions to the installed SVG (no relayout)."""
        if width is not None:
            self.width = width
        if height is not None:
            self.height = height
        if self._installed is not None:
            self._apply_size(self._installed.root)

    def _apply_size(self, root: ET.Element) -> None:
        root.set("width", self.width)
        root.set("height", self.height)

    def fit_graph(self) -> None:
        """Show the whole drawing again."""
        if self._installed is None or self._installed.initial_view_box is None:
            return
        svg.set_view_box(self._installed.root, self._installed.initial_view_box)

    def center_graph(self) -> None:
        """Center the drawing, keeping the current zoom."""
        if self._installed is None or self._installed.initial_view_box is None:
            return
        x, y, w, h = self._installed.initial_view_box
        self._center_on((x + w / 2, y + h / 2))

    def center_to_node(self, node_id: str) -> bool:
        """Center the view on a node, keeping the current zoom."""
        element = self._node_element(node_id)
        if element is None:
            return False
        center = svg.shape_center(element)
        if center is None:
            return False
        return self._center_on(svg.to_document_coords(self._installed.root, center))

    def _center_on(self, point: tuple[float, float]) -> bool:
        root = self._installed.root
        box = svg.get_view_box(root)
        if box is None:
            return False
        _, _, w, h = box
        svg.set_view_box(root, (point[0] - w / 2, point[1] - h / 2, w, h))
        return True


def _edge_shape_parts(element: ET.Element) -> list[ET.Element]:
    return svg.shape_parts(element) + svg.path_parts(element)
