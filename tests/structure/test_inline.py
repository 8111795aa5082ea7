"""Unit tests for structure/inline.py."""

from schema_insight.config import ThresholdConfig
from schema_insight.graph.builder import build_reference_graph
from schema_insight.signatures import structural_signature
from schema_insight.structure.inline import collect_inline_duplication, find_inline_candidates


ADDRESS = {
    "type": "object",
    "properties": {"street": {"type": "string"}, "city": {"type": "string"}},
}


def _with_address(extra: str):
    return {
        "type": "object",
        "properties": {extra: {"type": "string"}, "address": dict(ADDRESS)},
    }


class TestCollectInlineDuplication:
    def test_counts_parents_once_per_schema(self, make_schema):
        content = {
            "type": "object",
            "properties": {"home": dict(ADDRESS), "work": dict(ADDRESS)},
        }
        inline = collect_inline_duplication([make_schema("Person", content)])
        assert inline[structural_signature(ADDRESS)] == {"Person"}

    def test_ref_nodes_are_skipped(self, make_schema):
        content = {"$ref": "Address.json", "properties": {"a": {"type": "string"}}}
        assert collect_inline_duplication([make_schema("R", content)]) == {}

    def test_leaf_nodes_are_skipped(self, make_schema):
        assert collect_inline_duplication([make_schema("Leaf", {"type": "string"})]) == {}

    def test_shared_structure_across_schemas(self, make_schema):
        schemas = [make_schema(n, _with_address(n.lower())) for n in ("A", "B", "C")]
        inline = collect_inline_duplication(schemas)
        assert inline[structural_signature(ADDRESS)] == {"A", "B", "C"}


class TestFindInlineCandidates:
    def test_three_parents_flagged(self, make_schema):
        schemas = [make_schema(n, _with_address(n.lower())) for n in ("A", "B", "C")]
        candidates = find_inline_candidates(schemas)
        signatures = [c.signature for c in candidates]
        assert structural_signature(ADDRESS) in signatures
        address = candidates[signatures.index(structural_signature(ADDRESS))]
        assert address.parents == ["A", "B", "C"]

    def test_two_parents_not_flagged(self, make_schema):
        schemas = [make_schema(n, _with_address(n.lower())) for n in ("A", "B")]
        assert find_inline_candidates(schemas) == []

    def test_configurable_parent_threshold(self, make_schema):
        schemas = [make_schema(n, _with_address(n.lower())) for n in ("A", "B")]
        candidates = find_inline_candidates(schemas, thresholds=ThresholdConfig(inline_min_parents=2))
        assert structural_signature(ADDRESS) in [c.signature for c in candidates]

    def test_central_schema_suppresses_candidate(self, make_schema):
        """The structure already exists as a widely referenced schema."""
        schemas = [
            make_schema(n, _with_address(n.lower()), refs=["Address"]) for n in ("A", "B", "C")
        ]
        schemas.append(make_schema("Address", dict(ADDRESS)))
        graph = build_reference_graph(schemas)
        candidates = find_inline_candidates(schemas, graph)
        assert structural_signature(ADDRESS) not in [c.signature for c in candidates]
