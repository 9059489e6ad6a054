"""Tests for UnitValue arithmetic."""

from __future__ import annotations

import dataclasses
import re

import pytest

from dimcalc.core.conversions import ConversionOutput, ConversionRegistry
from dimcalc.core.errors import IncompatibleUnitsError, SemanticError
from dimcalc.core.units import UnitValue, format_magnitude


@pytest.fixture
def rem_registry() -> ConversionRegistry:
    return ConversionRegistry(
        [(("+", "rem", "px"), lambda l, r: (l.magnitude * 16 + r.magnitude, "px"))]
    )


class TestFormatting:
    """String rendering."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.0, "2"), (-2.0, "-2"), (2.5, "2.5"), (0.1, "0.1"), (1 / 3, "0.3333333333333333")],
    )
    def test_format_magnitude(self, value: float, expected: str) -> None:
        assert format_magnitude(value) == expected

    def test_format_infinity(self) -> None:
        assert format_magnitude(float("inf")) == "inf"

    def test_str_with_unit(self) -> None:
        assert str(UnitValue(3, "px")) == "3px"
        assert str(UnitValue(1.5, "rem")) == "1.5rem"

    def test_str_unitless(self) -> None:
        assert str(UnitValue(-2)) == "-2"


class TestArithmetic:
    """Same-unit and unitless rules."""

    def test_add_same_unit(self) -> None:
        assert UnitValue(1, "px").add(UnitValue(2, "px")) == UnitValue(3, "px")

    def test_subtract_same_unit(self) -> None:
        assert UnitValue(1, "px").subtract(UnitValue(3, "px")) == UnitValue(-2, "px")

    def test_multiply_same_unit_keeps_unit(self) -> None:
        assert UnitValue(5, "px").multiply(UnitValue(2, "px")) == UnitValue(10, "px")

    def test_multiply_unitless_passes_unit(self) -> None:
        assert UnitValue(2).multiply(UnitValue(3, "px")) == UnitValue(6, "px")
        assert UnitValue(3, "px").multiply(UnitValue(2)) == UnitValue(6, "px")

    def test_divide_by_unitless(self) -> None:
        assert UnitValue(6, "px").divide(UnitValue(2)) == UnitValue(3, "px")

    def test_divide_same_unit_is_flagged(self) -> None:
        result = UnitValue(6, "px").divide(UnitValue(2, "px"))
        assert result == UnitValue(3, None, from_same_unit_division=True)
        assert result.is_unitless()

    def test_divide_unitless_not_flagged(self) -> None:
        assert not UnitValue(6).divide(UnitValue(2)).from_same_unit_division

    def test_divide_by_zero(self) -> None:
        with pytest.raises(SemanticError, match="Division by zero"):
            UnitValue(1, "px").divide(UnitValue(0))

    def test_add_flagged_value_clears_flag(self) -> None:
        flagged = UnitValue(3, None, from_same_unit_division=True)
        assert flagged.add(UnitValue(1)) == UnitValue(4)

    def test_negate(self) -> None:
        assert UnitValue(2, "em").negate() == UnitValue(-2, "em")
        flagged = UnitValue(3, None, from_same_unit_division=True)
        assert flagged.negate().from_same_unit_division

    def test_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            UnitValue(1, "px").unit = "em"  # type: ignore[misc]


class TestConversions:
    """Registry-driven mixed-unit operations."""

    def test_incompatible_message(self) -> None:
        expected = "Evaluation Error: Units px & rem are incompatible in expression 1px + 1rem."
        with pytest.raises(IncompatibleUnitsError, match=re.escape(expected)) as exc_info:
            UnitValue(1, "px").add(UnitValue(1, "rem"))
        assert exc_info.value.operation == "+"
        assert exc_info.value.left == UnitValue(1, "px")
        assert exc_info.value.right == UnitValue(1, "rem")
        assert exc_info.value.values == [UnitValue(1, "px"), UnitValue(1, "rem")]

    def test_unitless_side_named(self) -> None:
        with pytest.raises(IncompatibleUnitsError, match="Units px & unitless"):
            UnitValue(1, "px").add(UnitValue(1))

    @pytest.mark.parametrize("method", ["multiply", "divide"])
    def test_mixed_units_rejected(self, method: str) -> None:
        with pytest.raises(IncompatibleUnitsError):
            getattr(UnitValue(1, "px"), method)(UnitValue(1, "rem"))

    def test_registry_rule(self, rem_registry: ConversionRegistry) -> None:
        result = UnitValue(1, "rem").add(UnitValue(16, "px"), rem_registry)
        assert result == UnitValue(32, "px")

    def test_rule_is_directional(self, rem_registry: ConversionRegistry) -> None:
        with pytest.raises(IncompatibleUnitsError):
            UnitValue(16, "px").add(UnitValue(1, "rem"), rem_registry)


class TestHelpers:
    """coerce, compatibility and unit checks."""

    def test_coerce_number(self) -> None:
        assert UnitValue.coerce(5, "px") == UnitValue(5.0, "px")

    def test_coerce_pair(self) -> None:
        assert UnitValue.coerce((2, "em")) == UnitValue(2.0, "em")

    def test_coerce_output(self) -> None:
        assert UnitValue.coerce(ConversionOutput(1.5)) == UnitValue(1.5)

    def test_coerce_unit_value(self) -> None:
        value = UnitValue(1, "px")
        assert UnitValue.coerce(value) is value

    @pytest.mark.parametrize("bad", ["x", True, None, (1, 2, 3)])
    def test_coerce_rejects(self, bad: object) -> None:
        with pytest.raises(SemanticError, match="numeric result"):
            UnitValue.coerce(bad)

    def test_is_compatible_with(self, rem_registry: ConversionRegistry) -> None:
        assert UnitValue(1, "px").is_compatible_with(UnitValue(2, "px"))
        assert not UnitValue(1, "rem").is_compatible_with(UnitValue(2, "px"))
        assert UnitValue(1, "rem").is_compatible_with(UnitValue(2, "px"), rem_registry)

    def test_all_same_unit(self) -> None:
        assert UnitValue.all_same_unit([])
        assert UnitValue.all_same_unit([UnitValue(1, "px"), UnitValue(2, "px")])
        assert not UnitValue.all_same_unit([UnitValue(1, "px"), UnitValue(2)])
