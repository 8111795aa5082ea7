"""Full analysis command: summary, suggestions and maturity score."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table

from ..engine import AnalyticsResult, AnalyticsService
from ..exceptions import SchemaInsightError
from ..logging_config import setup_logging
from ..serializers import result_to_json
from . import app
from ._common import console, load_project, resolve_config, severity_label


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Directory holding the JSON Schema files",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Near-duplicate similarity threshold (0.0-1.0)",
        min=0.0,
        max=1.0,
    ),
    min_overlap: Optional[int] = typer.Option(
        None,
        "--min-overlap",
        help="Minimum shared fields for a near-duplicate pair",
        min=0,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show every suggestion and debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress logging",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
):
    """
    Analyze a schema project and print prioritized suggestions.

    [bold cyan]Examples:[/bold cyan]

      schema-insight analyze ./schemas

      schema-insight analyze ./schemas --json

      schema-insight analyze ./schemas --threshold 0.7 --min-overlap 2
    """
    logger = setup_logging(
        verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None
    )

    try:
        settings = resolve_config(
            config=config,
            threshold=threshold,
            min_overlap=min_overlap,
            verbose=verbose,
            quiet=quiet,
        )
        schemas = load_project(path, quiet=quiet or json_output)
        result = AnalyticsService(settings).analyze(schemas)

        if json_output:
            print(result_to_json(result))
        else:
            _output_rich(result, verbose=verbose)

    except typer.Exit:
        raise
    except SchemaInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        if json_output:
            print(json.dumps({"error": e.to_dict()}, indent=2))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error during analysis")
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


MAX_SUGGESTIONS = 15


def _maturity_style(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


def _output_rich(result: AnalyticsResult, verbose: bool = False) -> None:
    """Human-readable terminal output."""
    metrics = result.project_metrics
    style = _maturity_style(result.maturity_score)

    summary = [
        f"Schemas: [bold]{metrics.total_schemas}[/bold]",
        f"Maturity score: [bold {style}]{result.maturity_score}[/bold {style}]/100",
        f"Circular references: [bold]{len(result.circular_references)}[/bold]",
        f"Duplicate groups: [bold]{len(result.duplicates)}[/bold]"
        f"  Near-duplicate pairs: [bold]{len(result.near_duplicates)}[/bold]",
        f"Average complexity: [bold]{metrics.average_complexity}[/bold]",
    ]
    if metrics.most_complex_schema:
        summary.append(f"Most complex: [bold]{metrics.most_complex_schema}[/bold]")
    if metrics.most_referenced_schema:
        summary.append(f"Most referenced: [bold]{metrics.most_referenced_schema}[/bold]")
    if metrics.orphaned_schemas:
        summary.append(f"Orphaned: {', '.join(metrics.orphaned_schemas)}")

    console.print(Panel("\n".join(summary), title="[bold cyan]Schema Insight[/bold cyan]", expand=False))
    console.print()

    if result.circular_references:
        console.print("[bold red]Circular References[/bold red]")
        for cycle in result.circular_references:
            console.print(
                f"  {' -> '.join(cycle.path)}  ({cycle.type}, {severity_label(cycle.severity)})"
            )
        console.print()

    if not result.suggestions:
        console.print("[green]No suggestions. The project looks consistent.[/green]")
        return

    shown = result.suggestions if verbose else result.suggestions[:MAX_SUGGESTIONS]
    table = Table(title="Suggestions", show_lines=False)
    table.add_column("Impact", justify="right", style="bold")
    table.add_column("Severity")
    table.add_column("Category", style="cyan")
    table.add_column("Suggestion")
    table.add_column("Schemas", style="dim")

    for suggestion in shown:
        affected = suggestion.affected_schemas
        schemas_text = ", ".join(affected[:4]) + (f" +{len(affected) - 4}" if len(affected) > 4 else "")
        table.add_row(
            str(suggestion.impact_score),
            severity_label(suggestion.severity),
            suggestion.category,
            f"{suggestion.title}\n[dim]{suggestion.description}[/dim]" if verbose else suggestion.title,
            schemas_text,
        )
    console.print(table)

    hidden = len(result.suggestions) - len(shown)
    if hidden > 0:
        console.print(f"  [dim]... and {hidden} more (use --verbose to show all)[/dim]")
