"""Configuration loading and management for Schema Insight.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig / ThresholdConfig)
    2. Global config (~/.schema-insight.toml)
    3. Project config (./schema-insight.toml)
    4. Explicit config file
    5. Environment variables (SCHEMA_INSIGHT_* prefix)
    6. Overrides (passed as kwargs, typically from CLI flags)

Example:
    >>> config = load_config(near_duplicate_threshold=0.9)
    >>> config.thresholds.near_duplicate_threshold
    0.9
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "SCHEMA_INSIGHT_"


@dataclass(frozen=True)
class ThresholdConfig:
    """Tunable parameters of the individual analysis passes.

    None of these are correctness constants. They trade recall against
    noise in the report:
    - Lower similarity thresholds -> more near-duplicate / naming findings
    - Higher centrality threshold -> fewer schemas treated as "central"

    Attributes:
        Near-duplicates:
            near_duplicate_threshold: Minimum Jaccard similarity of field signatures
            near_duplicate_min_overlap: Minimum number of shared field signatures

        Name similarity:
            name_min_average_similarity: Drop groups below this average similarity
            name_min_group_size: Minimum schemas sharing a name token

        Inline duplication / centrality:
            inline_min_parents: Distinct parent schemas before an inline structure is flagged
            centrality_threshold: In-degree at which a schema counts as centrally reused

        Complexity score weights (must be non-negative to keep the score monotonic):
            complexity_property_weight, complexity_depth_weight,
            complexity_reference_weight, complexity_size_weight

        Reporting:
            top_complex_count: Schemas named by the complexity suggestion
    """

    # === Near-duplicates ===
    near_duplicate_threshold: float = 0.8
    near_duplicate_min_overlap: int = 3

    # === Name similarity ===
    name_min_average_similarity: float = 0.0
    name_min_group_size: int = 2

    # === Inline duplication / centrality ===
    inline_min_parents: int = 3
    centrality_threshold: int = 3

    # === Complexity score ===
    complexity_property_weight: float = 0.3
    complexity_depth_weight: float = 5.0
    complexity_reference_weight: float = 2.0
    complexity_size_weight: float = 0.1  # per kilobyte

    # === Reporting ===
    top_complex_count: int = 5

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        for field_name in ("near_duplicate_threshold", "name_min_average_similarity"):
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{field_name} must be between 0.0 and 1.0")

        if self.near_duplicate_min_overlap < 0:
            raise ValueError("near_duplicate_min_overlap must be non-negative")
        if self.name_min_group_size < 2:
            raise ValueError("name_min_group_size must be at least 2")
        if self.inline_min_parents < 2:
            raise ValueError("inline_min_parents must be at least 2")
        if self.centrality_threshold < 1:
            raise ValueError("centrality_threshold must be at least 1")
        if self.top_complex_count < 1:
            raise ValueError("top_complex_count must be at least 1")

        weight_fields = [
            "complexity_property_weight",
            "complexity_depth_weight",
            "complexity_reference_weight",
            "complexity_size_weight",
        ]
        for field_name in weight_fields:
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} must be non-negative")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis execution.

    Attributes:
        thresholds: Pass-level tuning parameters
        cache_enabled: Memoize results per schema-collection fingerprint
        cache_max_entries: Maximum cached results (0 = unbounded)
        verbosity: Logging verbosity level
    """

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    # Caching (in-process only)
    cache_enabled: bool = True
    cache_max_entries: int = 32

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.cache_max_entries < 0:
            raise ValueError("cache_max_entries must be non-negative")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")

    def with_thresholds(self, **changes: Any) -> "AnalysisConfig":
        """Return a copy with selected threshold fields replaced."""
        return replace(self, thresholds=replace(self.thresholds, **changes))


_THRESHOLD_FIELDS = frozenset(f.name for f in fields(ThresholdConfig))
_CONFIG_FIELDS = frozenset(f.name for f in fields(AnalysisConfig)) - {"thresholds"}


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Top-level keys configure AnalysisConfig; threshold fields may be given
    either inside a ``[thresholds]`` table or at the top level (which is
    how CLI overrides and environment variables arrive).

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unreadable
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}
    thresholds: dict[str, Any] = {}

    def _merge(data: dict[str, Any]) -> None:
        data = dict(data)
        table = data.pop("thresholds", None)
        if table is not None:
            if not isinstance(table, dict):
                raise InvalidConfigError("thresholds", table, "expected a table")
            thresholds.update(table)
        for key, value in data.items():
            if key in _THRESHOLD_FIELDS:
                thresholds[key] = value
            else:
                merged[key] = value

    global_config = Path.home() / ".schema-insight.toml"
    if global_config.exists():
        _merge(_load_toml_file(global_config))

    project_config = Path.cwd() / "schema-insight.toml"
    if project_config.exists():
        _merge(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge(_load_toml_file(config_file))

    _merge(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    _merge({k: v for k, v in overrides.items() if v is not None})

    unknown = set(merged) - _CONFIG_FIELDS
    if unknown:
        key = sorted(unknown)[0]
        raise InvalidConfigError(key, merged[key], "unknown configuration key")
    unknown = set(thresholds) - _THRESHOLD_FIELDS
    if unknown:
        key = sorted(unknown)[0]
        raise InvalidConfigError(key, thresholds[key], "unknown threshold key")

    try:
        return AnalysisConfig(thresholds=ThresholdConfig(**thresholds), **merged)
    except (TypeError, ValueError) as e:
        raise InvalidConfigError("config", merged or thresholds, str(e)) from e


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from SCHEMA_INSIGHT_* environment variables.

    Every AnalysisConfig field (except ``thresholds``) and every
    ThresholdConfig field is addressable, e.g.:
        SCHEMA_INSIGHT_CACHE_ENABLED: bool (true/false/1/0)
        SCHEMA_INSIGHT_CACHE_MAX_ENTRIES: int
        SCHEMA_INSIGHT_NEAR_DUPLICATE_THRESHOLD: float
        SCHEMA_INSIGHT_CENTRALITY_THRESHOLD: int

    Returns:
        Dict of field_name -> parsed_value for any SCHEMA_INSIGHT_* vars found.
    """
    type_hints = {
        **get_type_hints(ThresholdConfig),
        **{k: v for k, v in get_type_hints(AnalysisConfig).items() if k != "thresholds"},
    }

    result: dict[str, Any] = {}
    for field_name, type_hint in type_hints.items():
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e), source="environment") from e
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If TOML support is missing or parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}") from e
