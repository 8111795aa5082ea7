"""CLI entry point: the typer app and its subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="schema-insight",
    help="Schema Insight - JSON Schema project analytics",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Analyze a directory of JSON Schema files: circular references, duplicates,
    field consistency, complexity and a 0-100 maturity score.
    """
    if version:
        console.print(f"[bold cyan]Schema Insight[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .fields import fields as _fields  # noqa: F401, E402
from .graph import graph as _graph  # noqa: F401, E402
