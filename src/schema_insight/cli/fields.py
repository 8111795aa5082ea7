"""Field consistency command."""

from pathlib import Path

import typer
from rich.table import Table

from ..exceptions import SchemaInsightError
from ..fields import FieldInsights, analyze_fields, propose_field_canonical
from ..logging_config import setup_logging
from . import app
from ._common import console, load_project


@app.command()
def fields(
    path: Path = typer.Argument(
        Path("."),
        help="Directory holding the JSON Schema files",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    conflicts_only: bool = typer.Option(
        False,
        "--conflicts-only",
        help="Only list fields with at least one conflict",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Show how each property name is declared across the project.

    [bold cyan]Examples:[/bold cyan]

      schema-insight fields ./schemas --conflicts-only
    """
    logger = setup_logging(verbose=verbose)

    try:
        schemas = load_project(path)
        insights = analyze_fields(schemas)
        _output_rich(insights, conflicts_only=conflicts_only)
    except SchemaInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _output_rich(insights: FieldInsights, conflicts_only: bool = False) -> None:
    items = insights.conflicting() if conflicts_only else insights.items
    if not items:
        console.print("[green]No conflicting fields.[/green]" if conflicts_only else "No fields found.")
        return

    table = Table(title="Field Insights")
    table.add_column("Field", style="bold")
    table.add_column("Seen", justify="right")
    table.add_column("Types")
    table.add_column("Formats")
    table.add_column("Conflicts", style="red")
    table.add_column("Proposal", style="dim")

    for item in items:
        table.add_row(
            item.name,
            str(item.occurrences),
            ", ".join(item.types) or "-",
            ", ".join(item.formats) or "-",
            ", ".join(item.conflicts.names()) or "-",
            (propose_field_canonical(item) or "") if item.conflicts.any else "",
        )
    console.print(table)

    counts = insights.conflict_counts
    console.print(
        f"  type: [bold]{counts.type_conflicts}[/bold]  format: [bold]{counts.format_conflicts}[/bold]  "
        f"enum: [bold]{counts.enum_conflicts}[/bold]  required: [bold]{counts.required_conflicts}[/bold]  "
        f"description: [bold]{counts.description_conflicts}[/bold]"
    )
