import json
import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dagpath._errors import GraphError
from dagpath._graph import shortest_distances
from dagpath._io import (
    build_graph,
    dump_request,
    export_result_to_toml,
    load_request,
    load_request_from_toml,
    result_to_dict,
)
from dagpath._models import PathResult, ShortestPathRequest
from dagpath._solve import solve

from .config import ConfigError, DagpathConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """dagpath CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _fail(error: Exception) -> NoReturn:
    err_console.print(f"[red]✗ {escape(str(error))}[/red]")
    raise typer.Exit(code=1) from error


def _load_config() -> DagpathConfig:
    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    logger.debug(f"Using config from {config.project_root}")
    return config


def _require_file(path: Path) -> None:
    if not path.is_file():
        err_console.print(f"[red]Error: Input file not found: {escape(str(path))}[/red]")
        raise typer.Exit(code=1)


def _resolve_input(input_path: Path | None, config: DagpathConfig) -> Path:
    if input_path is None:
        input_path = config.input
    if input_path is None:
        err_console.print("[red]Error: No input file given and no \\[tool.dagpath].input configured[/red]")
        raise typer.Exit(code=1)
    _require_file(input_path)
    return input_path


def _load(input_path: Path) -> ShortestPathRequest:
    err_console.print(f"[cyan]Loading request from:[/cyan] {input_path}")
    try:
        request = load_request(input_path)
    except GraphError as e:
        _fail(e)
    err_console.print(
        f"[cyan]Request:[/cyan] [bold]{request.source} → {request.destination}[/bold] "
        f"[dim]({request.num_edges} edges)[/dim]",
    )
    return request


def _render_result(result: PathResult) -> Panel:
    if result.path is None:
        body = f"[yellow]No path from {result.source} to {result.destination}[/yellow]"
    else:
        route = " → ".join(str(node) for node in result.path.nodes)
        body = f"[bold]{route}[/bold]\n[cyan]Cost:[/cyan] {result.path.cost}"
    return Panel(body, title="[bold]Shortest Path[/bold]", border_style="cyan")


InputArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to binary request file (defaults to the configured input)"),
]
CapacityOption = Annotated[
    int | None,
    typer.Option("--capacity", min=1, help="Number of graph nodes to allocate (defaults to largest id + 1)"),
]


@app.command(name="solve")
def solve_command(
    input_path: InputArgument = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON to stdout"),
    ] = False,
    capacity: CapacityOption = None,
) -> None:
    """Compute the shortest path described by a binary request."""
    config = _load_config()
    request = _load(_resolve_input(input_path, config))
    err_console.print()

    try:
        result = solve(request, capacity or config.node_capacity)
    except GraphError as e:
        _fail(e)

    err_console.print(_render_result(result))

    if as_json:
        out_console.print_json(json.dumps(result_to_dict(result)))

    output = output or config.output
    if output is not None:
        err_console.print(f"[cyan]Exporting result to:[/cyan] {output}")
        output.parent.mkdir(parents=True, exist_ok=True)
        export_result_to_toml(result, output)

    err_console.print()


@app.command()
def order(
    input_path: InputArgument = None,
    *,
    capacity: CapacityOption = None,
) -> None:
    """Print the topological order of the request's graph."""
    config = _load_config()
    request = _load(_resolve_input(input_path, config))

    try:
        graph = build_graph(request, capacity or config.node_capacity)
        nodes = graph.topological_order()
    except GraphError as e:
        _fail(e)

    out_console.print(" ".join(str(node) for node in nodes))


@app.command()
def info(
    input_path: InputArgument = None,
    *,
    capacity: CapacityOption = None,
) -> None:
    """Show degrees and distances from the source for every node."""
    config = _load_config()
    request = _load(_resolve_input(input_path, config))
    err_console.print()

    try:
        graph = build_graph(request, capacity or config.node_capacity)
        distances = shortest_distances(graph, request.source)
    except GraphError as e:
        _fail(e)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Node", justify="right", style="bold")
    table.add_column("In", justify="right", style="yellow")
    table.add_column("Out", justify="right", style="yellow")
    table.add_column("Distance", justify="right", style="green")

    for node in graph.nodes:
        distance = distances[node]
        table.add_row(
            str(node),
            str(graph.in_degree(node)),
            str(graph.out_degree(node)),
            "[dim]unreached[/dim]" if distance is None else str(distance),
        )

    out_console.print(
        Panel(
            table,
            title=f"[bold]Graph: {request.source} → {request.destination}[/bold]",
            subtitle=f"[dim]{graph.num_nodes} nodes, {graph.num_edges} edges[/dim]",
            border_style="cyan",
        ),
    )


@app.command()
def encode(
    source: Annotated[
        Path,
        typer.Argument(help="Path to TOML file with source, destination and edges"),
    ],
    *,
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Path to output binary request file"),
    ],
) -> None:
    """Encode a TOML request description into the binary request format."""
    _require_file(source)
    err_console.print(f"[cyan]Loading request description from:[/cyan] {source}")
    try:
        request = load_request_from_toml(source)
    except GraphError as e:
        _fail(e)

    err_console.print(f"[cyan]Writing binary request to:[/cyan] {output}")
    output.parent.mkdir(parents=True, exist_ok=True)
    dump_request(request, output)
    err_console.print(f"[green]✓ Encoded {request.num_edges} edges[/green]")


def main() -> None:
    app()
