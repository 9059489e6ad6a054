"""
Default math functions and constants.

Plain callables receive raw magnitudes and return a number; the evaluator
re-attaches the unit of the first unit-bearing argument. Functions marked
with :func:`unit_aware` receive UnitValues and decide the result unit
themselves.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any, TypeVar

from dimcalc.core.conversions import ConversionOutput
from dimcalc.core.errors import IncompatibleUnitsError, SemanticError
from dimcalc.core.units import UnitValue

F = TypeVar("F", bound=Callable[..., Any])

_UNIT_AWARE_ATTR = "__dimcalc_unit_aware__"


def unit_aware(fn: F) -> F:
    """Mark a function as taking UnitValue arguments instead of magnitudes."""
    setattr(fn, _UNIT_AWARE_ATTR, True)
    return fn


def is_unit_aware(fn: Callable[..., Any]) -> bool:
    return bool(getattr(fn, _UNIT_AWARE_ATTR, False))


def round_half_up(value: float) -> float:
    """Round halves towards positive infinity (``round(2.5) == 3``)."""
    return float(math.floor(value + 0.5))


@unit_aware
def unit_pow(*values: UnitValue) -> ConversionOutput:
    """pow(base, exponent): keeps the base unit; the exponent must be unitless."""
    if len(values) != 2:
        raise SemanticError("pow function requires exactly 2 arguments")
    base, exponent = values
    if not exponent.is_unitless():
        raise IncompatibleUnitsError("pow", base, exponent)
    return ConversionOutput(math.pow(base.magnitude, exponent.magnitude), base.unit)


DEFAULT_MATH_FUNCTIONS: dict[str, Callable[..., Any]] = {
    "abs": abs,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "sqrt": math.sqrt,
    "floor": math.floor,
    "ceil": math.ceil,
    "round": round_half_up,
    "log": math.log,
    "exp": math.exp,
    "pow": unit_pow,
    "max": max,
    "min": min,
}

DEFAULT_MATH_CONSTANTS: dict[str, float] = {
    "PI": math.pi,
    "E": math.e,
    "LN2": math.log(2),
    "LN10": math.log(10),
    "LOG2E": math.log2(math.e),
    "LOG10E": math.log10(math.e),
    "SQRT1_2": math.sqrt(0.5),
    "SQRT2": math.sqrt(2),
}
