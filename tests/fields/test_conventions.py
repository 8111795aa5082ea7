"""Unit tests for fields/conventions.py."""

import pytest

from schema_insight.fields.conventions import (
    FIELD_CONVENTIONS,
    match_convention,
    propose_field_canonical,
)
from schema_insight.fields.models import FieldInsightItem


class TestMatchConvention:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("id", "identifier"),
            ("customerId", "identifier"),
            ("order_id", "identifier"),
            ("birthDate", "date"),
            ("createdAt", "date-time"),
            ("updated_at", "date-time"),
            ("timestamp", "date-time"),
            ("email", "email"),
            ("homepageUrl", "uri"),
            ("phoneNumber", "phone"),
            ("totalAmount", "amount"),
            ("unitPrice", "amount"),
            ("currency", "currency"),
            ("countryCode", "country-code"),
            ("country", "country"),
            ("language", "locale"),
            ("zipCode", "postal-code"),
            ("firstName", "name"),
            ("isActive", "flag"),
            ("hasChildren", "flag"),
            ("itemCount", "counter"),
            ("promoCode", "code"),
            ("status", "classifier"),
        ],
    )
    def test_first_match(self, name, expected):
        convention = match_convention(name)
        assert convention is not None
        assert convention.name == expected

    @pytest.mark.parametrize("name", ["paid", "format", "issue", "notes"])
    def test_no_false_positives(self, name):
        assert match_convention(name) is None

    def test_table_is_ordered(self):
        names = [c.name for c in FIELD_CONVENTIONS]
        assert names.index("identifier") < names.index("date")
        assert names.index("country-code") < names.index("country")


class TestProposeFieldCanonical:
    def test_static_proposal(self):
        assert propose_field_canonical(FieldInsightItem(name="email")) == "type: string, format: email"

    def test_classifier_with_enum(self):
        item = FieldInsightItem(name="status", enum_values=["active", "closed"])
        assert propose_field_canonical(item) == "enum: 2 values (prefer UPPER_SNAKE_CASE)"

    def test_classifier_without_enum(self):
        assert propose_field_canonical(FieldInsightItem(name="orderType")) == (
            "type: string (consider enum)"
        )

    def test_unknown_field(self):
        assert propose_field_canonical(FieldInsightItem(name="notes")) is None
