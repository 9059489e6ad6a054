"""Tests for the default math functions and constants."""

from __future__ import annotations

import math

import pytest

from dimcalc.core.conversions import ConversionOutput
from dimcalc.core.errors import IncompatibleUnitsError, SemanticError
from dimcalc.core.functions import (
    DEFAULT_MATH_CONSTANTS,
    DEFAULT_MATH_FUNCTIONS,
    is_unit_aware,
    round_half_up,
    unit_aware,
    unit_pow,
)
from dimcalc.core.units import UnitValue


class TestRoundHalfUp:
    """Rounding towards positive infinity on halves."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.5, 3.0), (3.5, 4.0), (-2.5, -2.0), (3.4, 3.0), (-3.6, -4.0)],
    )
    def test_round(self, value: float, expected: float) -> None:
        assert round_half_up(value) == expected


class TestUnitAware:
    """Marker decorator."""

    def test_marks_function(self) -> None:
        @unit_aware
        def fn(*values):
            return values[0]

        assert is_unit_aware(fn)

    def test_plain_function(self) -> None:
        assert not is_unit_aware(math.sin)
        assert not is_unit_aware(lambda x: x)

    def test_pow_is_unit_aware(self) -> None:
        assert is_unit_aware(DEFAULT_MATH_FUNCTIONS["pow"])


class TestUnitPow:
    """pow keeps the base unit."""

    def test_base_unit_kept(self) -> None:
        assert unit_pow(UnitValue(2, "px"), UnitValue(3)) == ConversionOutput(8.0, "px")

    def test_unitless(self) -> None:
        result = unit_pow(UnitValue(2), UnitValue(0.5))
        assert result.magnitude == pytest.approx(math.sqrt(2))
        assert result.unit is None

    def test_exponent_with_unit(self) -> None:
        with pytest.raises(IncompatibleUnitsError):
            unit_pow(UnitValue(2), UnitValue(3, "px"))

    def test_argument_count(self) -> None:
        with pytest.raises(SemanticError, match="exactly 2 arguments"):
            unit_pow(UnitValue(2))


class TestDefaults:
    """Shipped functions and constants."""

    def test_function_names(self) -> None:
        assert set(DEFAULT_MATH_FUNCTIONS) == {
            "abs",
            "sin",
            "cos",
            "tan",
            "sqrt",
            "floor",
            "ceil",
            "round",
            "log",
            "exp",
            "pow",
            "max",
            "min",
        }

    def test_constants(self) -> None:
        assert DEFAULT_MATH_CONSTANTS["PI"] == math.pi
        assert DEFAULT_MATH_CONSTANTS["E"] == math.e
        assert DEFAULT_MATH_CONSTANTS["SQRT2"] == pytest.approx(1.4142135623730951)
        assert DEFAULT_MATH_CONSTANTS["LN10"] == pytest.approx(2.302585092994046)
        assert DEFAULT_MATH_CONSTANTS["LOG2E"] == pytest.approx(1.4426950408889634)
