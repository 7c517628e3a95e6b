"""Run the layout engine on DOT text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import graphviz

from .dot import DotDocument
from .errors import RenderError

logger = logging.getLogger(__name__)

# DOT text in, SVG text out; raises RenderError on failure.
LayoutEngine = Callable[[str], str]


class GraphvizEngine:
    """Lay out DOT text with a Graphviz program through the `graphviz` package."""

    def __init__(self, program: str = "dot"):
        self.program = program

    def __call__(self, text: str) -> str:
        logger.debug(f"Running graphviz {self.program} on {len(text)} chars of DOT")
        try:
            out = graphviz.pipe(self.program, "svg", text.encode("utf-8"), quiet=True)
        except graphviz.ExecutableNotFound as e:
            raise RenderError(f"Graphviz executable not found: {e}") from e
        except graphviz.CalledProcessError as e:
            raise RenderError(_describe_failure(e)) from e
        except ValueError as e:
            # unknown layout program
            raise RenderError(str(e)) from e
        return out.decode("utf-8")

    def __repr__(self) -> str:
        return f"GraphvizEngine({self.program!r})"


@dataclass(frozen=True)
class RenderResult:
    """Outcome of one render: SVG text, a failure description, or neither (nothing to draw)."""

    svg: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def empty(self) -> bool:
        return self.svg is None and self.error is None


def render(document: DotDocument, engine: LayoutEngine) -> RenderResult:
    """Lay out the document.

    An empty document is not sent to the engine. Engine failures are returned
    as `RenderResult.error` rather than raised.
    """
    if document.is_empty:
        return RenderResult()

    try:
        svg = engine(document.text)
    except RenderError as e:
        logger.warning(f"Render failed: {e.description}")
        return RenderResult(error=e.description)
    return RenderResult(svg=svg)


def _describe_failure(error: graphviz.CalledProcessError) -> str:
    stderr = error.stderr
    if isinstance(stderr, bytes):
        stderr = stderr.decode("utf-8", errors="replace")
    message = (stderr or "").strip()
    return message or f"Graphviz exited with status {error.returncode}"
