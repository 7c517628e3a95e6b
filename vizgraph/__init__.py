"""vizgraph - interactive Graphviz diagrams with click routing and live styling."""

__version__ = "0.1.0"

from .correspondence import Correspondence
from .dot import DotDocument, serialize
from .errors import ConfigError, GraphFileError, RenderError, VizGraphError
from .model import Edge, EdgeIdAllocator, Graph, GraphNode, Node, Parameterised
from .render import GraphvizEngine, RenderResult, render
from .surface import SurfaceState, VizSurface

__all__ = [
    "__version__",
    "ConfigError",
    "Correspondence",
    "DotDocument",
    "Edge",
    "EdgeIdAllocator",
    "Graph",
    "GraphFileError",
    "GraphNode",
    "GraphvizEngine",
    "Node",
    "Parameterised",
    "RenderError",
    "RenderResult",
    "SurfaceState",
    "VizGraphError",
    "VizSurface",
    "render",
    "serialize",
]
