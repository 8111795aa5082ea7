"""Analytics service: runs every pass over a schema collection.

Pass order (leaves first):
  Index schemas by id / name
       → Circular references
       → Complexity metrics
       → Reference graph (degrees, centrality, graph metrics)
       → Exact and near duplicates
       → Name-similarity groups
       → Field consistency
       → Project metrics
       → Inline duplication + suggestions
       → Maturity score

Results are memoized per schema-collection fingerprint. Each service
instance owns its cache and its single-flight guard; create separate
instances for independent workloads.
"""

from __future__ import annotations

import asyncio
import json
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Sequence

from .cache import ResultCache, compute_cache_key
from .config import AnalysisConfig
from .exceptions import AnalysisInProgressError
from .fields import FieldInsights, analyze_fields
from .graph import (
    CircularReference,
    ReferenceGraph,
    SchemaIndex,
    build_reference_graph,
    detect_circular_references,
)
from .insights import (
    PerformanceStats,
    ProjectMetrics,
    Suggestion,
    SuggestionContext,
    calculate_maturity_score,
    calculate_project_metrics,
    generate_suggestions,
)
from .logging_config import get_logger
from .models import Schema
from .similarity import (
    DuplicateGroup,
    NameSimilarGroup,
    NearDuplicatePair,
    detect_duplicate_schemas,
    detect_name_similar_groups,
    detect_near_duplicate_schemas,
)
from .structure import ComplexityMetrics, calculate_complexity_metrics, collect_inline_duplication

logger = get_logger(__name__)


@dataclass
class AnalyticsResult:
    """Everything one analysis run produces."""

    circular_references: list[CircularReference] = field(default_factory=list)
    complexity_metrics: dict[str, ComplexityMetrics] = field(default_factory=dict)  # by schema id
    reference_graph: ReferenceGraph = field(default_factory=ReferenceGraph)
    duplicates: list[DuplicateGroup] = field(default_factory=list)
    near_duplicates: list[NearDuplicatePair] = field(default_factory=list)
    field_insights: FieldInsights = field(default_factory=FieldInsights)
    name_similar_groups: list[NameSimilarGroup] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)
    maturity_score: int = 100
    project_metrics: ProjectMetrics = field(default_factory=ProjectMetrics)
    performance: PerformanceStats = field(default_factory=PerformanceStats)


def estimate_memory_usage(schemas: Sequence[Schema]) -> int:
    """Rough byte estimate: serialized length at two bytes per character."""
    return sum(len(json.dumps(schema.to_dict(), default=str)) * 2 for schema in schemas)


class AnalyticsService:
    """Schema analytics with result memoization and a single-flight guard.

    Example:
        >>> service = AnalyticsService()
        >>> result = service.analyze(schemas)
        >>> result.maturity_score
        92
    """

    def __init__(self, config: Optional[AnalysisConfig] = None, cache: Optional[ResultCache] = None):
        self.config = config or AnalysisConfig()
        self.thresholds = self.config.thresholds
        if cache is None:
            cache = ResultCache(
                max_entries=self.config.cache_max_entries, enabled=self.config.cache_enabled
            )
        self.cache = cache
        self._lock = threading.Lock()
        self._is_analyzing = False

    @property
    def is_analyzing(self) -> bool:
        return self._is_analyzing

    def analyze(self, schemas: Sequence[Schema]) -> AnalyticsResult:
        """Run the full analysis, or return the cached result for this collection.

        Raises:
            AnalysisInProgressError: If another analysis on this service is running
        """
        schemas = list(schemas)
        cache_key = compute_cache_key(schemas)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Returning cached analysis for {len(schemas)} schemas")
            return cached

        with self._lock:
            if self._is_analyzing:
                raise AnalysisInProgressError(schema_count=len(schemas))
            self._is_analyzing = True

        try:
            logger.info(f"Starting schema analysis: {len(schemas)} schemas")
            start = time.perf_counter()
            result = self._run(schemas)
            duration_ms = (time.perf_counter() - start) * 1000
            result.performance = PerformanceStats(
                duration_ms=duration_ms,
                memory_usage=estimate_memory_usage(schemas),
                timestamp=datetime.now(timezone.utc),
            )
            self.cache.set(cache_key, result)
            logger.info(
                f"Analysis completed in {duration_ms:.1f}ms: "
                f"{len(result.circular_references)} circular reference(s), "
                f"{len(result.suggestions)} suggestion(s), maturity {result.maturity_score}"
            )
            return result
        except Exception:
            logger.exception("Schema analysis failed")
            raise
        finally:
            with self._lock:
                self._is_analyzing = False

    async def analyze_async(self, schemas: Sequence[Schema]) -> AnalyticsResult:
        """Run :meth:`analyze` in a worker thread."""
        return await asyncio.to_thread(self.analyze, schemas)

    def _run(self, schemas: list[Schema]) -> AnalyticsResult:
        thresholds = self.thresholds
        index = SchemaIndex(schemas)

        circular = detect_circular_references(schemas, index)
        complexity = calculate_complexity_metrics(schemas, thresholds)
        graph = build_reference_graph(schemas, index)
        duplicates = detect_duplicate_schemas(schemas)
        near_duplicates = detect_near_duplicate_schemas(
            schemas,
            threshold=thresholds.near_duplicate_threshold,
            min_overlap=thresholds.near_duplicate_min_overlap,
        )
        name_groups = detect_name_similar_groups(
            schemas,
            min_average_similarity=thresholds.name_min_average_similarity,
            min_group_size=thresholds.name_min_group_size,
        )
        field_insights = analyze_fields(schemas)
        project_metrics = calculate_project_metrics(schemas, complexity, circular, index)

        context = SuggestionContext(
            schemas=schemas,
            duplicates=duplicates,
            near_duplicates=near_duplicates,
            name_similar_groups=name_groups,
            field_insights=field_insights,
            circular_references=circular,
            complexity_metrics=complexity,
            project_metrics=project_metrics,
            reference_graph=graph,
            inline_map=collect_inline_duplication(schemas),
        )
        suggestions = generate_suggestions(context, thresholds)

        return AnalyticsResult(
            circular_references=circular,
            complexity_metrics=complexity,
            reference_graph=graph,
            duplicates=duplicates,
            near_duplicates=near_duplicates,
            field_insights=field_insights,
            name_similar_groups=name_groups,
            suggestions=suggestions,
            maturity_score=calculate_maturity_score(suggestions),
            project_metrics=project_metrics,
        )

    # ── Individual passes ──────────────────────────────────────────

    def detect_circular_references(self, schemas: Sequence[Schema]) -> list[CircularReference]:
        return detect_circular_references(schemas)

    def calculate_complexity_metrics(self, schemas: Sequence[Schema]) -> dict[str, ComplexityMetrics]:
        return calculate_complexity_metrics(schemas, self.thresholds)

    def build_reference_graph(self, schemas: Sequence[Schema]) -> ReferenceGraph:
        return build_reference_graph(schemas)

    def detect_duplicate_schemas(self, schemas: Sequence[Schema]) -> list[DuplicateGroup]:
        return detect_duplicate_schemas(schemas)

    def detect_near_duplicate_schemas(
        self,
        schemas: Sequence[Schema],
        threshold: Optional[float] = None,
        min_overlap: Optional[int] = None,
    ) -> list[NearDuplicatePair]:
        return detect_near_duplicate_schemas(
            schemas,
            threshold=self.thresholds.near_duplicate_threshold if threshold is None else threshold,
            min_overlap=(
                self.thresholds.near_duplicate_min_overlap if min_overlap is None else min_overlap
            ),
        )

    def detect_name_similar_groups(self, schemas: Sequence[Schema]) -> list[NameSimilarGroup]:
        return detect_name_similar_groups(
            schemas,
            min_average_similarity=self.thresholds.name_min_average_similarity,
            min_group_size=self.thresholds.name_min_group_size,
        )

    def analyze_fields(self, schemas: Sequence[Schema]) -> FieldInsights:
        return analyze_fields(schemas)

    def calculate_project_metrics(
        self,
        schemas: Sequence[Schema],
        complexity_metrics: Optional[dict[str, ComplexityMetrics]] = None,
        circular_references: Optional[list[CircularReference]] = None,
    ) -> ProjectMetrics:
        if complexity_metrics is None:
            complexity_metrics = self.calculate_complexity_metrics(schemas)
        if circular_references is None:
            circular_references = self.detect_circular_references(schemas)
        return calculate_project_metrics(schemas, complexity_metrics, circular_references)

    # ── Cache management ───────────────────────────────────────────

    def clear_cache(self) -> None:
        self.cache.clear()

    def get_cache_stats(self) -> dict:
        return {"size": len(self.cache), "keys": self.cache.keys()}
