"""Tests for the shared rounding and clamping helpers."""

import pytest

from schema_insight.scoring import capped_score, clamp, round_half_up, round_half_up_to


class TestRounding:
    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(2.4999) == 2

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.0625, 0.063),
            (0.125, 0.125),
            (0.6666666, 0.667),
            (1 / 3, 0.333),
            (0.0, 0.0),
            (1.0, 1.0),
        ],
    )
    def test_round_half_up_to_three_decimals(self, value, expected):
        assert round_half_up_to(value, 3) == expected

    def test_exact_tie_differs_from_round(self):
        assert round(0.0625, 3) == 0.062
        assert round_half_up_to(0.0625, 3) == 0.063


class TestBounds:
    def test_clamp(self):
        assert clamp(-5) == 0.0
        assert clamp(150) == 100.0
        assert clamp(0.5, 0.0, 1.0) == 0.5

    def test_capped_score(self):
        assert capped_score(99.5) == 100
        assert capped_score(250) == 100
        assert capped_score(12.4) == 12
