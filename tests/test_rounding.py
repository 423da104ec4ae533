"""
Unit tests for co2_calculator/rounding.py

Half-way cases are chosen so that Python's round() (banker's rounding on a
binary float) and round-half-up disagree.
"""
import math
from decimal import Decimal

import pytest

from co2_calculator.exceptions import InvalidInputError
from co2_calculator.rounding import round_decimal, round_half_up, to_decimal


class TestRoundHalfUp:

    @pytest.mark.parametrize(
        "value, expected",
        [
            (2.675, 2.68),
            (1.005, 1.01),
            (0.125, 0.13),
            (1.245, 1.25),
            (51.6, 51.6),
            (74.1666, 74.17),
            (0, 0.0),
        ],
    )
    def test_two_decimals(self, value, expected):
        assert round_half_up(value, 2) == expected

    def test_four_decimals(self):
        assert round_half_up(0.12345, 4) == 0.1235

    def test_negative_half_moves_away_from_zero(self):
        assert round_half_up(-0.005, 2) == -0.01
        assert round_half_up(-2.675, 2) == -2.68

    def test_negative_zero_is_normalised(self):
        result = round_half_up(-0.004, 2)
        assert result == 0.0
        assert math.copysign(1.0, result) == 1.0

    @pytest.mark.parametrize("value", [0.1, 2.675, 51.6, 123456.789, -361.2])
    def test_idempotent(self, value):
        once = round_half_up(value, 2)
        assert round_half_up(once, 2) == once

    def test_very_large_values(self):
        assert round_half_up(1e30, 2) == 1e30

    def test_accepts_decimal(self):
        assert round_half_up(Decimal("0.0075"), 2) == 0.01

    @pytest.mark.parametrize("bad", [math.nan, math.inf, "1.0", None, True])
    def test_rejects_non_numbers(self, bad):
        with pytest.raises(InvalidInputError):
            round_half_up(bad, 2)


class TestToDecimal:

    def test_uses_shortest_repr(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_int_passthrough(self):
        assert to_decimal(430) == Decimal(430)

    def test_round_decimal_keeps_exponent(self):
        assert str(round_decimal(51.6, 2)) == "51.60"
