"""Name-similarity clustering.

Schema names are split into lowercase tokens (camelCase, snake_case and
kebab-case boundaries). Qualifier prefixes/suffixes such as ``client`` or
``customer`` are stripped to add extra tokens, so ``ClientAddress`` and
``customeraddress`` both yield ``address``. Generic words that would glue
unrelated schemas together (``model``, ``response``, ``status``...) are
dropped. Schemas sharing a token form a group, scored by the mean
pairwise Jaccard similarity of their field signatures.
"""

from __future__ import annotations

import re
from collections import defaultdict
from typing import Sequence

from ..models import Schema
from ..scoring import round_half_up_to
from ..signatures import field_signatures
from .duplicates import sort_by_name
from .matrix import pairwise_overlap
from .models import NameSimilarGroup, SchemaRef

NAME_QUALIFIERS = ("client", "customer", "user", "internal", "external", "api")

NAME_STOPWORDS = frozenset(
    {
        "library",
        "libraries",
        "enum",
        "enums",
        "line",
        "lines",
        "detail",
        "details",
        "model",
        "models",
        "category",
        "categories",
        "request",
        "response",
        "history",
        "options",
        "option",
        "ids",
        "id",
        "type",
        "types",
        "status",
        "statuses",
        "code",
        "codes",
    }
)

MIN_TOKEN_LENGTH = 3

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_SEPARATORS = re.compile(r"[_-]+")
_NUMERIC = re.compile(r"[0-9]+")


def tokenize_schema_name(name: str) -> list[str]:
    """Meaningful lowercase tokens of a schema name, in first-seen order."""
    base = _SEPARATORS.sub(" ", _CAMEL_BOUNDARY.sub(r"\1 \2", name)).lower()
    parts = base.split()

    tokens = dict.fromkeys(parts)
    for part in parts:
        for qualifier in NAME_QUALIFIERS:
            if part.startswith(qualifier) and len(part) > len(qualifier):
                tokens.setdefault(part[len(qualifier):])
            if part.endswith(qualifier) and len(part) > len(qualifier):
                tokens.setdefault(part[: -len(qualifier)])

    return [
        token
        for token in tokens
        if len(token) >= MIN_TOKEN_LENGTH
        and token not in NAME_STOPWORDS
        and not _NUMERIC.fullmatch(token)
    ]


def to_pascal_case(token: str) -> str:
    words = [w for w in re.split(r"[^a-z0-9]+", token) if w]
    return "".join(w[0].upper() + w[1:] for w in words)


def detect_name_similar_groups(
    schemas: Sequence[Schema],
    min_average_similarity: float = 0.0,
    min_group_size: int = 2,
) -> list[NameSimilarGroup]:
    """Group schemas sharing a name token; largest and most similar groups first.

    A schema can belong to several groups (one per token).
    """
    schemas = list(schemas)
    field_sets = [field_signatures(schema.content) for schema in schemas]
    overlap, union = pairwise_overlap(field_sets)

    members_by_token: dict[str, list[int]] = defaultdict(list)
    for position, schema in enumerate(schemas):
        for token in tokenize_schema_name(schema.name):
            members_by_token[token].append(position)

    groups: list[NameSimilarGroup] = []
    for token, members in members_by_token.items():
        if len(members) < max(2, min_group_size):
            continue

        total = 0.0
        pair_count = 0
        for x, i in enumerate(members):
            for j in members[x + 1 :]:
                if not field_sets[i] and not field_sets[j]:
                    continue
                pair_union = int(union[i, j])
                total += int(overlap[i, j]) / pair_union if pair_union > 0 else 0.0
                pair_count += 1
        average = round_half_up_to(total / pair_count, 3) if pair_count > 0 else 0.0
        if average < min_average_similarity:
            continue

        groups.append(
            NameSimilarGroup(
                token=token,
                suggested_canonical_name=to_pascal_case(token),
                schemas=sort_by_name(
                    [SchemaRef(id=schemas[i].id, name=schemas[i].name) for i in members]
                ),
                average_similarity=average,
            )
        )

    groups.sort(key=lambda g: (-len(g.schemas), -g.average_similarity))
    return groups
