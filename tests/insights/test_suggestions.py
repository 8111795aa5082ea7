"""Unit tests for insights/generator.py."""

from schema_insight.config import ThresholdConfig
from schema_insight.fields.models import FieldConflicts, FieldInsightItem, FieldInsights
from schema_insight.graph.builder import build_reference_graph
from schema_insight.graph.models import CircularReference
from schema_insight.insights.generator import (
    SuggestionContext,
    circular_suggestions,
    complexity_suggestions,
    duplicate_suggestions,
    field_suggestions,
    generate_suggestions,
    naming_suggestions,
    near_duplicate_suggestions,
)
from schema_insight.insights.models import ProjectMetrics
from schema_insight.graph.builder import SchemaIndex
from schema_insight.similarity.models import (
    DuplicateGroup,
    NameSimilarGroup,
    NearDuplicatePair,
    SchemaRef,
)
from schema_insight.structure.models import ComplexityMetrics


def _refs(*names):
    return [SchemaRef(id=f"id-{n}", name=n) for n in names]


def _pair(a, b, similarity):
    return NearDuplicatePair(
        a_id=f"id-{a}", b_id=f"id-{b}", a_name=a, b_name=b,
        similarity=similarity, overlap_fields=4, union_fields=5,
    )


# ── naming ────────────────────────────────────────────────────────


class TestNamingSuggestions:
    def test_impact_and_severity(self):
        group = NameSimilarGroup(
            token="address",
            suggested_canonical_name="Address",
            schemas=_refs("Address", "ClientAddress"),
            average_similarity=0.5,
        )
        [suggestion] = naming_suggestions([group])
        assert suggestion.id == "naming:address"
        assert suggestion.category == "naming"
        assert suggestion.severity == "high"
        # 2 * (0.5 * 60 + 20) = 100
        assert suggestion.impact_score == 100
        assert suggestion.affected_schemas == ["Address", "ClientAddress"]

    def test_severity_bands(self):
        def severity(avg):
            group = NameSimilarGroup("t", "T", _refs("A", "B"), avg)
            return naming_suggestions([group])[0].severity

        assert severity(0.25) == "medium"
        assert severity(0.1) == "low"

    def test_impact_capped(self):
        group = NameSimilarGroup("t", "T", _refs(*"ABCDEFG"), 1.0)
        assert naming_suggestions([group])[0].impact_score == 100


# ── reuse ─────────────────────────────────────────────────────────


class TestDuplicateSuggestions:
    def test_exact_duplicates(self):
        group = DuplicateGroup(signature="x" * 40, schemas=_refs("A", "B"))
        [suggestion] = duplicate_suggestions([group])
        assert suggestion.id == "reuse:dup:" + "x" * 16
        assert suggestion.severity == "high"
        assert suggestion.impact_score == 40

    def test_impact_capped(self):
        group = DuplicateGroup(signature="sig", schemas=_refs(*"ABCDEFG"))
        assert duplicate_suggestions([group])[0].impact_score == 100


class TestNearDuplicateSuggestions:
    def test_plain_pair(self):
        [suggestion] = near_duplicate_suggestions([_pair("B", "A", 0.9)], {}, 3)
        assert suggestion.id == "reuse:near:A::B"
        assert suggestion.title == "Normalize A and B (similar structures)"
        assert suggestion.severity == "high"
        assert suggestion.impact_score == 90

    def test_severity_bands(self):
        assert near_duplicate_suggestions([_pair("A", "B", 0.75)], {}, 3)[0].severity == "medium"
        assert near_duplicate_suggestions([_pair("A", "B", 0.6)], {}, 3)[0].severity == "low"

    def test_central_schema_wins(self):
        [suggestion] = near_duplicate_suggestions([_pair("A", "B", 0.9)], {"A": 5, "B": 0}, 3)
        assert suggestion.title == "Align B to central A"

    def test_both_central_is_plain(self):
        [suggestion] = near_duplicate_suggestions([_pair("A", "B", 0.9)], {"A": 5, "B": 4}, 3)
        assert suggestion.title.startswith("Normalize")

    def test_same_names_grouped(self):
        pairs = [_pair("A", "B", 0.8), _pair("B", "A", 1.0)]
        [suggestion] = near_duplicate_suggestions(pairs, {}, 3)
        assert suggestion.impact_score == 90


# ── field consistency ─────────────────────────────────────────────


class TestFieldSuggestions:
    def test_type_conflict_is_high(self):
        item = FieldInsightItem(
            name="status",
            types=["integer", "string"],
            required_in=["X"],
            optional_in=["Y"],
            occurrences=3,
            conflicts=FieldConflicts(type_conflict=True, required_conflict=True),
        )
        [suggestion] = field_suggestions(FieldInsights(items=[item]))
        assert suggestion.id == "field:status"
        assert suggestion.category == "field-consistency"
        assert suggestion.severity == "high"
        assert suggestion.impact_score == 24
        assert suggestion.affected_schemas == ["X", "Y"]
        assert "Conflicts detected: type, required." in suggestion.description
        assert "Proposed: type: string (consider enum)" in suggestion.description

    def test_format_conflict_is_medium(self):
        item = FieldInsightItem(
            name="notes", occurrences=2, conflicts=FieldConflicts(format_conflict=True)
        )
        [suggestion] = field_suggestions(FieldInsights(items=[item]))
        assert suggestion.severity == "medium"
        assert suggestion.impact_score == 10
        assert "Proposed" not in suggestion.description

    def test_description_only_is_low(self):
        item = FieldInsightItem(
            name="x", occurrences=2, conflicts=FieldConflicts(description_divergence=True)
        )
        assert field_suggestions(FieldInsights(items=[item]))[0].severity == "low"

    def test_no_conflict_no_suggestion(self):
        item = FieldInsightItem(name="x", occurrences=10)
        assert field_suggestions(FieldInsights(items=[item])) == []

    def test_impact_capped(self):
        item = FieldInsightItem(
            name="x", occurrences=500, conflicts=FieldConflicts(type_conflict=True)
        )
        assert field_suggestions(FieldInsights(items=[item]))[0].impact_score == 100


# ── references / complexity ───────────────────────────────────────


class TestCircularSuggestions:
    def test_none_without_cycles(self):
        assert circular_suggestions([], ProjectMetrics()) == []

    def test_aggregate(self):
        cycles = [CircularReference(path=["A", "B", "A"], depth=1, type="direct", severity="low")]
        metrics = ProjectMetrics(circular_schemas=["A", "B"])
        [suggestion] = circular_suggestions(cycles, metrics)
        assert suggestion.id == "refs:circular"
        assert suggestion.severity == "high"
        assert suggestion.impact_score == 10
        assert suggestion.affected_schemas == ["A", "B"]


class TestComplexitySuggestions:
    def test_none_without_metrics(self):
        assert complexity_suggestions({}, SchemaIndex([]), 5) == []

    def test_top_schemas(self, make_schema):
        schemas = [make_schema(n) for n in "ABCDEFG"]
        metrics = {s.id: ComplexityMetrics(complexity_score=10 * i) for i, s in enumerate(schemas)}
        [suggestion] = complexity_suggestions(metrics, SchemaIndex(schemas), 5)
        assert suggestion.id == "complexity:top"
        assert suggestion.affected_schemas == ["G", "F", "E", "D", "C"]
        assert suggestion.impact_score == 60
        assert suggestion.severity == "medium"

    def test_severity_bands(self, make_schema):
        schema = make_schema("A")
        index = SchemaIndex([schema])

        def severity(score):
            metrics = {schema.id: ComplexityMetrics(complexity_score=score)}
            return complexity_suggestions(metrics, index, 5)[0].severity

        assert severity(75) == "high"
        assert severity(50) == "medium"
        assert severity(49) == "low"


# ── generate_suggestions ──────────────────────────────────────────


class TestGenerateSuggestions:
    def test_sorted_by_impact(self, make_schema):
        schemas = [make_schema("A"), make_schema("B")]
        context = SuggestionContext(
            schemas=schemas,
            duplicates=[DuplicateGroup(signature="sig", schemas=_refs("A", "B"))],
            near_duplicates=[_pair("A", "B", 0.95)],
            circular_references=[
                CircularReference(path=["A", "B", "A"], depth=1, type="direct", severity="low")
            ],
            complexity_metrics={s.id: ComplexityMetrics(complexity_score=5) for s in schemas},
            project_metrics=ProjectMetrics(circular_schemas=["A", "B"]),
        )
        suggestions = generate_suggestions(context)
        impacts = [s.impact_score for s in suggestions]
        assert impacts == sorted(impacts, reverse=True)
        assert {s.category for s in suggestions} == {"reuse", "references", "complexity"}

    def test_empty_context(self):
        assert generate_suggestions(SuggestionContext(schemas=[])) == []

    def test_inline_duplication_suggested(self, make_schema):
        address = {"type": "object", "properties": {"street": {"type": "string"}}}
        schemas = [
            make_schema(n, {"type": "object", "properties": {n.lower(): dict(address)}})
            for n in ("A", "B", "C")
        ]
        context = SuggestionContext(schemas=schemas, reference_graph=build_reference_graph(schemas))
        inline = [s for s in generate_suggestions(context) if s.id.startswith("reuse:inline:")]
        assert len(inline) == 1
        assert inline[0].impact_score == 45
        assert inline[0].severity == "medium"
        assert inline[0].affected_schemas == ["A", "B", "C"]

    def test_thresholds_are_honored(self, make_schema):
        schemas = [make_schema("A"), make_schema("B")]
        context = SuggestionContext(
            schemas=schemas,
            complexity_metrics={s.id: ComplexityMetrics(complexity_score=5) for s in schemas},
        )
        [suggestion] = generate_suggestions(context, ThresholdConfig(top_complex_count=1))
        assert len(suggestion.affected_schemas) == 1
