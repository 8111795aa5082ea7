"""Reference graph command."""

from pathlib import Path

import typer
from rich.table import Table

from ..exceptions import SchemaInsightError
from ..graph import ReferenceGraph, build_reference_graph, detect_circular_references
from ..logging_config import setup_logging
from . import app
from ._common import console, load_project


@app.command()
def graph(
    path: Path = typer.Argument(
        Path("."),
        help="Directory holding the JSON Schema files",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Show the schema reference graph, most central schemas first.
    """
    logger = setup_logging(verbose=verbose)

    try:
        schemas = load_project(path)
        reference_graph = build_reference_graph(schemas)
        cycles = detect_circular_references(schemas)
    except SchemaInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    _output_rich(reference_graph)
    if cycles:
        console.print()
        console.print(f"[bold red]{len(cycles)} circular reference(s)[/bold red]")
        for cycle in cycles:
            console.print(f"  {' -> '.join(cycle.path)}")


def _output_rich(reference_graph: ReferenceGraph) -> None:
    m = reference_graph.metrics
    console.print(
        f"  [bold]{m.node_count}[/bold] schemas, [bold]{m.edge_count}[/bold] references, "
        f"density {m.density:.3f}, average degree {m.average_degree:.2f}, "
        f"{m.connected_components} component(s)"
    )
    console.print()

    table = Table(title="Reference Graph")
    table.add_column("Schema", style="bold")
    table.add_column("In", justify="right")
    table.add_column("Out", justify="right")
    table.add_column("Centrality", justify="right", style="cyan")

    for node in sorted(reference_graph.nodes, key=lambda n: (-n.centrality, n.name)):
        table.add_row(node.name, str(node.in_degree), str(node.out_degree), f"{node.centrality:.3f}")
    console.print(table)
