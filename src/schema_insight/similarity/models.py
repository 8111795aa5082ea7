"""Data models for duplicate, near-duplicate and name-similarity results."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SchemaRef:
    """Lightweight (id, name) handle of a schema inside a result."""

    id: str
    name: str


@dataclass
class DuplicateGroup:
    """Schemas sharing one structural signature (always 2 or more)."""

    signature: str
    schemas: list[SchemaRef] = field(default_factory=list)


@dataclass
class NearDuplicatePair:
    """Two schemas whose field signatures overlap above the threshold."""

    a_id: str
    b_id: str
    a_name: str
    b_name: str
    similarity: float  # Jaccard in [0, 1], rounded to 3 decimals
    overlap_fields: int
    union_fields: int


@dataclass
class NameSimilarGroup:
    """Schemas sharing a name token, e.g. Address / ClientAddress / billing_address."""

    token: str
    suggested_canonical_name: str
    schemas: list[SchemaRef] = field(default_factory=list)
    average_similarity: float = 0.0  # mean pairwise field Jaccard, 3 decimals
