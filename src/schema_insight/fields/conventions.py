"""Canonical field conventions keyed on field-name patterns.

An ordered table of (predicate, proposal) pairs. The first convention
whose predicate matches a field name supplies the proposal. Proposals are
advisory text for the field-consistency suggestions and are never
enforced.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .models import FieldInsightItem

Proposal = Union[str, Callable[[FieldInsightItem], str]]

_FLAG_PREFIX = re.compile(r"^(is|has|can|should)([A-Z0-9_]|$)")


@dataclass(frozen=True)
class FieldConvention:
    name: str
    matches: Callable[[str], bool]  # receives the raw field name
    proposal: Proposal

    def propose(self, item: FieldInsightItem) -> str:
        if callable(self.proposal):
            return self.proposal(item)
        return self.proposal


def _is_identifier(name: str) -> bool:
    lower = name.lower()
    return (
        lower in ("id", "uuid", "guid", "externalid")
        or lower.endswith("_id")
        or name.endswith("Id")
        or name.endswith("ID")
    )


def _is_date(name: str) -> bool:
    lower = name.lower()
    return lower.endswith("date") and "time" not in lower


def _is_datetime(name: str) -> bool:
    lower = name.lower()
    return (
        name.endswith("At")
        or lower.endswith("_at")
        or "timestamp" in lower
        or lower.endswith("datetime")
        or lower.endswith("time")
    )


def _is_phone(name: str) -> bool:
    lower = name.lower()
    return "phone" in lower or lower in ("tel", "telephone", "mobile")


def _is_amount(name: str) -> bool:
    lower = name.lower()
    return lower.endswith("amount") or "price" in lower or lower.endswith("value")


def _is_country_code(name: str) -> bool:
    lower = name.lower()
    return "country" in lower and lower.endswith("code")


def _is_person_name(name: str) -> bool:
    lower = name.lower()
    return lower.endswith("name") or lower in ("firstname", "lastname")


def _is_counter(name: str) -> bool:
    lower = name.lower()
    return lower.endswith("count") or lower.endswith("quantity") or lower.endswith("index")


def _is_classifier(name: str) -> bool:
    lower = name.lower()
    return lower.endswith("status") or lower.endswith("type") or lower.endswith("category")


def _classifier_proposal(item: FieldInsightItem) -> str:
    if item.enum_values:
        return f"enum: {len(item.enum_values)} values (prefer UPPER_SNAKE_CASE)"
    return "type: string (consider enum)"


def _contains(*fragments: str) -> Callable[[str], bool]:
    return lambda name: any(fragment in name.lower() for fragment in fragments)


def _ends_with(suffix: str) -> Callable[[str], bool]:
    return lambda name: name.lower().endswith(suffix)


FIELD_CONVENTIONS: tuple[FieldConvention, ...] = (
    FieldConvention("identifier", _is_identifier, "type: string, format: uuid"),
    FieldConvention("date", _is_date, "type: string, format: date"),
    FieldConvention("date-time", _is_datetime, "type: string, format: date-time"),
    FieldConvention("email", _contains("email"), "type: string, format: email"),
    FieldConvention("uri", _contains("url", "uri"), "type: string, format: uri"),
    FieldConvention("phone", _is_phone, "type: string, pattern: phone (E.164)"),
    FieldConvention("amount", _is_amount, "type: number"),
    FieldConvention("currency", _contains("currency"), "type: string, pattern: ^[A-Z]{3}$"),
    FieldConvention("country-code", _is_country_code, "type: string, pattern: ^[A-Z]{2}$"),
    FieldConvention("country", _ends_with("country"), "type: string"),
    FieldConvention(
        "locale", _contains("language", "locale"), "type: string, pattern: ^[a-z]{2}(-[A-Z]{2})?$"
    ),
    FieldConvention("postal-code", _contains("postal", "zip"), "type: string"),
    FieldConvention("name", _is_person_name, "type: string"),
    FieldConvention("flag", lambda name: bool(_FLAG_PREFIX.match(name)), "type: boolean"),
    FieldConvention("counter", _is_counter, "type: integer"),
    FieldConvention("code", _ends_with("code"), "type: string"),
    FieldConvention("classifier", _is_classifier, _classifier_proposal),
)


def match_convention(name: str) -> Optional[FieldConvention]:
    for convention in FIELD_CONVENTIONS:
        if convention.matches(name):
            return convention
    return None


def propose_field_canonical(item: FieldInsightItem) -> Optional[str]:
    """Best-effort canonical definition for a field, or None when no pattern applies."""
    convention = match_convention(item.name)
    return convention.propose(item) if convention else None
