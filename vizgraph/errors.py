"""Exception types raised by vizgraph."""

from __future__ import annotations


class VizGraphError(Exception):
    """Base class for vizgraph errors."""


class RenderError(VizGraphError):
    """The layout engine rejected the DOT text or failed internally.

    `description` is the engine's own message, suitable for showing in place
    of the graph.
    """

    def __init__(self, description: str):
        super().__init__(description)
        self.description = description


class GraphFileError(VizGraphError, ValueError):
    """A graph description file could not be read."""


class ConfigError(VizGraphError, ValueError):
    """A configuration file could not be read."""
