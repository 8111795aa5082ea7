"""Project-wide field consistency analysis and naming conventions."""

from .analyzer import analyze_fields, normalize_description
from .conventions import FIELD_CONVENTIONS, FieldConvention, propose_field_canonical
from .models import ConflictCounts, FieldConflicts, FieldInsightItem, FieldInsights

__all__ = [
    "analyze_fields",
    "normalize_description",
    "FIELD_CONVENTIONS",
    "FieldConvention",
    "propose_field_canonical",
    "ConflictCounts",
    "FieldConflicts",
    "FieldInsightItem",
    "FieldInsights",
]
