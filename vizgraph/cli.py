"""CLI entrypoint for vizgraph."""

import logging
import sys
from pathlib import Path

import click
from rich.logging import RichHandler

from . import __version__
from .config import RenderConfig, load_config
from .errors import VizGraphError


def _graph_file_argument(fn):
    return click.argument(
        "graph_file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
    )(fn)


@click.group()
@click.version_option(__version__, prog_name="vizgraph")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="TOML file with a [render] table (engine, width, height, title, highlight_*)",
)
@click.option("--verbose", is_flag=True, help="Log serializer and engine activity to stderr")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """vizgraph - Render graphs with Graphviz and keep their ids clickable.

    Graph files are TOML: name, type, [params], [node_defaults],
    [edge_defaults], [[nodes]] and [[edges]].
    """
    ctx.ensure_object(dict)
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )

    try:
        ctx.obj["config"] = load_config(config_path)
    except VizGraphError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@_graph_file_argument
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["svg", "html", "dot", "json"]),
    default="svg",
    show_default=True,
    help="Output format (json prints the visual id correspondence)",
)
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write output to a file")
@click.option(
    "--highlight",
    multiple=True,
    metavar="NODE_ID",
    help="Highlight a node in svg/html output (repeatable)",
)
@click.option("--title", type=str, default=None, help="Page title for html output")
@click.pass_context
def render(
    ctx: click.Context,
    graph_file: Path,
    fmt: str,
    out: Path | None,
    highlight: tuple[str, ...],
    title: str | None,
) -> None:
    """Render a graph file to SVG, HTML, DOT or an id map."""
    from .commands.render_cmd import run_render

    config: RenderConfig = ctx.obj["config"]
    try:
        exit_code = run_render(graph_file, fmt=fmt, out=out, highlight=highlight, title=title, config=config)
    except VizGraphError as e:
        raise click.ClickException(str(e)) from e
    sys.exit(exit_code)


@cli.command("inspect")
@_graph_file_argument
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json"]),
    default="rich",
    show_default=True,
    help="Output format",
)
def inspect_graph(graph_file: Path, fmt: str) -> None:
    """Show nodes, edges and degrees of a graph file."""
    from .commands.render_cmd import run_inspect

    try:
        exit_code = run_inspect(graph_file, fmt=fmt)
    except VizGraphError as e:
        raise click.ClickException(str(e)) from e
    sys.exit(exit_code)


@cli.command()
@_graph_file_argument
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), required=True, help="File to keep up to date")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["html", "svg", "dot"]),
    default="html",
    show_default=True,
    help="Output format",
)
@click.pass_context
def watch(ctx: click.Context, graph_file: Path, out: Path, fmt: str) -> None:
    """Re-render a graph file every time it is saved."""
    from .commands.watch_cmd import run_watch

    run_watch(graph_file, out=out, fmt=fmt, config=ctx.obj["config"])


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
