"""Tests for the AnalyticsService orchestration, caching and guard."""

import asyncio
import threading
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from schema_insight.api import analyze_directory
from schema_insight.cache import ResultCache
from schema_insight.config import AnalysisConfig
from schema_insight.engine import AnalyticsService, estimate_memory_usage
from schema_insight.exceptions import AnalysisInProgressError
from schema_insight.models import SchemaMetadata


def _obj(**properties):
    return {"type": "object", "properties": properties}


class TestEndToEnd:
    def test_order_customer_address(self, order_project):
        result = AnalyticsService().analyze(order_project)

        assert result.circular_references == []
        assert result.reference_graph.metrics.node_count == 3
        assert result.reference_graph.metrics.edge_count == 2
        nodes = {n.name: n for n in result.reference_graph.nodes}
        assert nodes["Address"].in_degree == 1
        assert nodes["Order"].out_degree == 1
        assert result.project_metrics.orphaned_schemas == []
        assert result.project_metrics.total_schemas == 3

    def test_mutual_reference(self, mutual_project):
        result = AnalyticsService().analyze(mutual_project)

        assert len(result.circular_references) == 1
        cycle = result.circular_references[0]
        assert cycle.depth == 1
        assert cycle.type == "direct"
        assert cycle.severity == "low"
        assert cycle.path == ["A", "B", "A"]
        assert "A" in result.project_metrics.circular_schemas
        assert "B" in result.project_metrics.circular_schemas
        assert any(s.id == "refs:circular" for s in result.suggestions)

    def test_empty_collection(self):
        result = AnalyticsService().analyze([])
        assert result.circular_references == []
        assert result.complexity_metrics == {}
        assert result.reference_graph.metrics.node_count == 0
        assert result.suggestions == []
        assert result.maturity_score == 100

    def test_suggestions_sorted_and_maturity_bounded(self, make_schema):
        shared = _obj(id={"type": "string"}, name={"type": "string"}, email={"type": "string"})
        schemas = [
            make_schema("Customer", dict(shared)),
            make_schema("ClientCustomer", dict(shared)),
            make_schema("X", _obj(status={"type": "string"}), refs=["Y"]),
            make_schema("Y", _obj(status={"type": "integer"}), refs=["X"]),
        ]
        result = AnalyticsService().analyze(schemas)
        impacts = [s.impact_score for s in result.suggestions]
        assert impacts == sorted(impacts, reverse=True)
        assert 0 <= result.maturity_score <= 100
        categories = {s.category for s in result.suggestions}
        assert {"reuse", "field-consistency", "references", "complexity"} <= categories

    def test_does_not_mutate_input(self, order_project):
        before = [s.to_dict() for s in order_project]
        AnalyticsService().analyze(order_project)
        assert [s.to_dict() for s in order_project] == before

    def test_malformed_content_does_not_raise(self, make_schema):
        schemas = [
            make_schema("Scalar", 42),
            make_schema("List", [1, 2, 3]),
            make_schema("Broken", {"properties": "nope", "items": 5, "required": {"a": 1}}),
        ]
        result = AnalyticsService().analyze(schemas)
        assert len(result.complexity_metrics) == 3

    def test_performance_recorded(self, order_project):
        result = AnalyticsService().analyze(order_project)
        assert result.performance.duration_ms >= 0
        assert result.performance.memory_usage == estimate_memory_usage(order_project)
        assert result.performance.timestamp.tzinfo is not None


class TestCaching:
    def test_identical_object_on_second_call(self, order_project):
        service = AnalyticsService()
        first = service.analyze(order_project)
        second = service.analyze(order_project)
        assert first is second
        assert service.get_cache_stats()["size"] == 1

    def test_new_timestamp_invalidates(self, order_project):
        service = AnalyticsService()
        first = service.analyze(order_project)
        touched = [
            replace(
                order_project[0],
                metadata=SchemaMetadata(last_modified=datetime(2030, 1, 1, tzinfo=timezone.utc)),
            ),
            *order_project[1:],
        ]
        second = service.analyze(touched)
        assert first is not second
        assert service.get_cache_stats()["size"] == 2

    def test_clear_cache(self, order_project):
        service = AnalyticsService()
        first = service.analyze(order_project)
        service.clear_cache()
        assert service.get_cache_stats() == {"size": 0, "keys": []}
        assert service.analyze(order_project) is not first

    def test_disabled_cache_recomputes(self, order_project):
        service = AnalyticsService(AnalysisConfig(cache_enabled=False))
        assert service.analyze(order_project) is not service.analyze(order_project)

    def test_services_are_isolated(self, order_project):
        a, b = AnalyticsService(), AnalyticsService()
        a.analyze(order_project)
        assert b.get_cache_stats()["size"] == 0

    def test_shared_cache_instance(self, order_project):
        cache = ResultCache()
        first = AnalyticsService(cache=cache).analyze(order_project)
        assert AnalyticsService(cache=cache).analyze(order_project) is first


class TestSingleFlightGuard:
    def test_concurrent_call_rejected(self, make_schema, monkeypatch):
        service = AnalyticsService()
        started = threading.Event()
        release = threading.Event()
        original_run = service._run

        def slow_run(schemas):
            started.set()
            release.wait(timeout=5)
            return original_run(schemas)

        monkeypatch.setattr(service, "_run", slow_run)
        worker = threading.Thread(target=service.analyze, args=([make_schema("A")],))
        worker.start()
        try:
            assert started.wait(timeout=5)
            assert service.is_analyzing
            with pytest.raises(AnalysisInProgressError):
                service.analyze([make_schema("B")])
        finally:
            release.set()
            worker.join(timeout=5)
        assert not service.is_analyzing

    def test_guard_released_after_failure(self, make_schema, monkeypatch):
        service = AnalyticsService()

        def boom(schemas):
            raise RuntimeError("pass failed")

        monkeypatch.setattr(service, "_run", boom)
        with pytest.raises(RuntimeError, match="pass failed"):
            service.analyze([make_schema("A")])
        assert not service.is_analyzing
        assert service.get_cache_stats()["size"] == 0


class TestIndividualPasses:
    def test_pass_methods(self, order_project):
        service = AnalyticsService()
        assert service.detect_circular_references(order_project) == []
        assert len(service.calculate_complexity_metrics(order_project)) == 3
        assert service.build_reference_graph(order_project).metrics.edge_count == 2
        assert service.detect_duplicate_schemas(order_project) == []
        assert service.detect_near_duplicate_schemas(order_project) == []
        assert isinstance(service.detect_name_similar_groups(order_project), list)
        assert {i.name for i in service.analyze_fields(order_project).items} >= {"id", "street"}
        assert service.calculate_project_metrics(order_project).total_schemas == 3

    def test_near_duplicate_threshold_override(self, make_schema):
        a = make_schema("A", _obj(a={}, b={}, c={}, d={}))
        b = make_schema("B", _obj(a={}, b={}, c={}, x={}))
        service = AnalyticsService()
        assert service.detect_near_duplicate_schemas([a, b]) == []
        assert len(service.detect_near_duplicate_schemas([a, b], threshold=0.6)) == 1


class TestAnalyzeAsync:
    def test_runs_in_thread(self, order_project):
        service = AnalyticsService()
        result = asyncio.run(service.analyze_async(order_project))
        assert result.reference_graph.metrics.edge_count == 2
        assert service.analyze(order_project) is result


class TestAnalyzeDirectory:
    def test_loads_and_analyzes(self, schema_dir, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.chdir(tmp_path)
        result = analyze_directory(schema_dir, centrality_threshold=1)
        assert result.project_metrics.total_schemas == 3
        assert result.reference_graph.metrics.edge_count == 2
        assert result.circular_references == []
