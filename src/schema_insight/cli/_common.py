"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config
from ..loader import load_schemas
from ..models import Schema

console = Console()

SEVERITY_STYLES = {"high": "red", "medium": "yellow", "low": "dim"}


def resolve_config(
    config: Optional[Path] = None,
    threshold: Optional[float] = None,
    min_overlap: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if threshold is not None:
        overrides["near_duplicate_threshold"] = threshold
    if min_overlap is not None:
        overrides["near_duplicate_min_overlap"] = min_overlap
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


def load_project(path: Path, quiet: bool = False) -> list[Schema]:
    """Load schemas under *path*, reporting the count unless quiet."""
    schemas = load_schemas(path)
    if not quiet:
        console.print(f"  Loaded [green]{len(schemas)}[/green] schema(s) from [blue]{path}[/blue]")
        console.print()
    return schemas


def severity_label(severity: str) -> str:
    style = SEVERITY_STYLES.get(severity, "white")
    return f"[{style}]{severity}[/{style}]"
