"""
Runtime value type for dimensional arithmetic.

A UnitValue is a magnitude with an optional unit tag. Values are immutable;
every operation returns a new UnitValue. Operations resolve mixed units
through a ConversionRegistry:

1. Same unit on both sides: operate on magnitudes, keep the unit. Dividing
   two equal units gives a unitless value flagged ``from_same_unit_division``.
2. Multiply/divide with a unitless operand: the other unit passes through.
3. Otherwise the most specific registered rule is applied.
4. No rule: IncompatibleUnitsError.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from dimcalc.core.conversions import (
    ConversionOutput,
    ConversionRegistry,
    Operator,
    default_unit_conversions,
)
from dimcalc.core.errors import IncompatibleUnitsError, SemanticError

_DEFAULT_REGISTRY = default_unit_conversions()


def format_magnitude(value: float) -> str:
    """Render a magnitude without a trailing ``.0`` for integral values."""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True)
class UnitValue:
    """A magnitude tagged with an optional unit."""

    magnitude: float
    unit: str | None = None
    from_same_unit_division: bool = False

    @classmethod
    def coerce(cls, result: Any, unit: str | None = None) -> UnitValue:
        """Wrap a conversion or function result as a UnitValue.

        Accepts a UnitValue, a ConversionOutput, a ``(magnitude, unit)``
        pair, or a bare number (which takes ``unit``).
        """
        if isinstance(result, UnitValue):
            return result
        if isinstance(result, ConversionOutput):
            return cls(float(result.magnitude), result.unit)
        if isinstance(result, tuple) and len(result) == 2:
            magnitude, result_unit = result
            return cls(float(magnitude), result_unit)
        if isinstance(result, (int, float)) and not isinstance(result, bool):
            return cls(float(result), unit)
        raise SemanticError(f"Cannot use {result!r} as a numeric result")

    @staticmethod
    def all_same_unit(values: list[UnitValue]) -> bool:
        """True when every value carries the same unit (vacuously for [])."""
        return len({v.unit for v in values}) <= 1

    def is_unitless(self) -> bool:
        return self.unit is None

    def is_compatible_with(
        self, other: UnitValue, registry: ConversionRegistry | None = None
    ) -> bool:
        """True when the two values can be added."""
        if self.unit == other.unit:
            return True
        registry = registry if registry is not None else _DEFAULT_REGISTRY
        return registry.resolve(Operator.ADD, self.unit, other.unit) is not None

    def __str__(self) -> str:
        text = format_magnitude(self.magnitude)
        return text if self.unit is None else f"{text}{self.unit}"

    # -- Arithmetic --

    def add(self, other: UnitValue, registry: ConversionRegistry | None = None) -> UnitValue:
        if self.unit == other.unit:
            return UnitValue(self.magnitude + other.magnitude, self.unit)
        return self._convert(Operator.ADD, other, registry)

    def subtract(
        self, other: UnitValue, registry: ConversionRegistry | None = None
    ) -> UnitValue:
        if self.unit == other.unit:
            return UnitValue(self.magnitude - other.magnitude, self.unit)
        return self._convert(Operator.SUB, other, registry)

    def multiply(
        self, other: UnitValue, registry: ConversionRegistry | None = None
    ) -> UnitValue:
        if self.unit == other.unit:
            return UnitValue(self.magnitude * other.magnitude, self.unit)
        if self.is_unitless():
            return UnitValue(self.magnitude * other.magnitude, other.unit)
        if other.is_unitless():
            return UnitValue(self.magnitude * other.magnitude, self.unit)
        return self._convert(Operator.MUL, other, registry)

    def divide(self, other: UnitValue, registry: ConversionRegistry | None = None) -> UnitValue:
        if other.magnitude == 0:
            raise SemanticError(f"Division by zero in expression {self} / {other}")
        if self.unit == other.unit:
            return UnitValue(
                self.magnitude / other.magnitude,
                None,
                from_same_unit_division=self.unit is not None,
            )
        if self.is_unitless():
            return UnitValue(self.magnitude / other.magnitude, other.unit)
        if other.is_unitless():
            return UnitValue(self.magnitude / other.magnitude, self.unit)
        return self._convert(Operator.DIV, other, registry)

    def negate(self) -> UnitValue:
        return UnitValue(-self.magnitude, self.unit, self.from_same_unit_division)

    def _convert(
        self,
        operator: Operator,
        other: UnitValue,
        registry: ConversionRegistry | None,
    ) -> UnitValue:
        registry = registry if registry is not None else _DEFAULT_REGISTRY
        conversion = registry.resolve(operator, self.unit, other.unit)
        if conversion is None:
            raise IncompatibleUnitsError(operator.value, self, other)
        return UnitValue.coerce(conversion(self, other))
