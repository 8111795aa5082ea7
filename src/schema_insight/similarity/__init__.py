"""Duplicate, near-duplicate and name-similarity detection."""

from .duplicates import detect_duplicate_schemas, detect_near_duplicate_schemas
from .models import DuplicateGroup, NameSimilarGroup, NearDuplicatePair, SchemaRef
from .naming import detect_name_similar_groups, tokenize_schema_name

__all__ = [
    "detect_duplicate_schemas",
    "detect_near_duplicate_schemas",
    "detect_name_similar_groups",
    "tokenize_schema_name",
    "DuplicateGroup",
    "NameSimilarGroup",
    "NearDuplicatePair",
    "SchemaRef",
]
