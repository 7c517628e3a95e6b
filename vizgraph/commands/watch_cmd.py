"""Watch command - re-render a graph file whenever it is saved."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from rich.console import Console

from ..config import RenderConfig
from ..errors import VizGraphError
from ..render import LayoutEngine
from ..watcher import run_watch_loop
from .render_cmd import run_render


def run_watch(
    graph_path: Path,
    *,
    out: Path,
    fmt: str = "html",
    config: RenderConfig | None = None,
    engine: LayoutEngine | None = None,
) -> None:
    """
    Render once, then re-render on every change.

    This is a blocking command that runs until interrupted (Ctrl+C).
    A broken save is reported and the previous output is left in place.
    """
    console = Console(stderr=True)
    render_count = 0

    def rerender(path: Path) -> None:
        nonlocal render_count
        timestamp = datetime.now().strftime("%H:%M:%S")
        try:
            code = run_render(path, fmt=fmt, out=out, config=config, engine=engine)
        except (VizGraphError, OSError) as e:
            console.print(f"[dim]{timestamp}[/dim] [red]{e}[/red]")
            return
        if code == 0:
            render_count += 1

    console.print(f"[bold]Watching[/bold] {graph_path} -> {out}")
    console.print("[dim]Press Ctrl+C to stop watching[/dim]")
    rerender(graph_path)

    try:
        run_watch_loop(graph_path, rerender)
    except KeyboardInterrupt:
        pass
    console.print()
    console.print(f"[bold]Stopped.[/bold] Rendered {render_count} time(s).")
