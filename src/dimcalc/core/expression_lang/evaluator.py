"""
Expression evaluator for dimcalc ASTs.

Walks a parsed statement and produces a UnitValue, or the raw text of a
StringLiteral. Pure evaluation: the config is only read. Does NOT use
Python's eval().
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

from dimcalc.core.config import CalcConfig, FunctionUnitPolicy
from dimcalc.core.conversions import Operator
from dimcalc.core.errors import CalcError, IncompatibleUnitsError, SemanticError
from dimcalc.core.functions import is_unit_aware
from dimcalc.core.nodes import (
    BinaryOp,
    Expr,
    FunctionCall,
    Identifier,
    NumberLiteral,
    StringLiteral,
    UnaryNegate,
)
from dimcalc.core.units import UnitValue


def evaluate(expr: Expr, config: CalcConfig) -> UnitValue | str:
    """Evaluate a statement AST against a config.

    Args:
        expr: Parsed statement AST.
        config: Config supplying the conversion registry and function policy.

    Returns:
        A UnitValue, or the text of a top-level string literal.

    Raises:
        SemanticError: If evaluation fails.
        IncompatibleUnitsError: If two units cannot be combined.
    """
    if isinstance(expr, StringLiteral):
        return expr.text
    return _interpret(expr, config)


def _interpret(expr: Expr, config: CalcConfig) -> UnitValue:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, NumberLiteral):
        return UnitValue(expr.value, expr.unit)

    if isinstance(expr, Identifier):
        return _interpret_identifier(expr)

    if isinstance(expr, BinaryOp):
        return _interpret_binary(expr, config)

    if isinstance(expr, UnaryNegate):
        return _interpret(expr.operand, config).negate()

    if isinstance(expr, FunctionCall):
        return _interpret_call(expr, config)

    if isinstance(expr, StringLiteral):
        raise SemanticError(f"Cannot use string {expr.text!r} in arithmetic")

    raise SemanticError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_identifier(expr: Identifier) -> UnitValue:
    if expr.is_callable:
        raise SemanticError(f"Function {expr.name} must be called with arguments")
    return UnitValue(float(expr.ref))  # type: ignore[arg-type]


def _interpret_binary(expr: BinaryOp, config: CalcConfig) -> UnitValue:
    """Evaluate a binary expression."""
    left = _interpret(expr.left, config)
    right = _interpret(expr.right, config)
    registry = config.unit_conversions

    if expr.op == Operator.POW:
        if not left.is_unitless() or not right.is_unitless():
            raise SemanticError("Power operations can only be performed on unitless values")
        return UnitValue(_checked(math.pow, "^", left.magnitude, right.magnitude))
    if expr.op == Operator.ADD:
        return left.add(right, registry)
    if expr.op == Operator.SUB:
        return left.subtract(right, registry)
    if expr.op == Operator.MUL:
        return left.multiply(right, registry)
    if expr.op == Operator.DIV:
        return left.divide(right, registry)

    raise SemanticError(f"Unknown binary op: {expr.op}")


def _interpret_call(expr: FunctionCall, config: CalcConfig) -> UnitValue:
    """Evaluate a function call against the configured callables."""
    args = [_interpret(arg, config) for arg in expr.args]
    name = expr.target.name
    ref = expr.target.ref

    if not callable(ref):
        return UnitValue(float(ref))

    if is_unit_aware(ref):
        return UnitValue.coerce(_checked(ref, name, *args))

    args = _unify_units(name, args, config)
    unit = next((a.unit for a in args if a.unit is not None), None)
    result = _checked(ref, name, *(a.magnitude for a in args))
    return UnitValue.coerce(result, unit)


def _unify_units(name: str, args: list[UnitValue], config: CalcConfig) -> list[UnitValue]:
    """Apply the function unit policy to the evaluated arguments."""
    bearing = [a for a in args if a.unit is not None]
    if UnitValue.all_same_unit(bearing):
        return args

    if config.function_unit_policy == FunctionUnitPolicy.CONVERT:
        converted = _convert_to_common_unit(args, config)
        if converted is not None:
            return converted

    offending = next(a for a in bearing if a.unit != bearing[0].unit)
    raise IncompatibleUnitsError(
        name,
        bearing[0],
        offending,
        message=f"Cannot mix incompatible units in {name}({', '.join(str(a) for a in args)})",
    )


def _convert_to_common_unit(
    args: list[UnitValue], config: CalcConfig
) -> list[UnitValue] | None:
    """Rewrite unit-bearing arguments into one unit via the "+" rules.

    Adding a zero of the target unit to a value yields that value expressed
    in whatever unit the "+" rule produces. Returns None when no common unit
    can be reached.
    """
    registry = config.unit_conversions
    bearing = [a for a in args if a.unit is not None]
    target = bearing[0].unit
    try:
        for value in bearing[1:]:
            if value.unit != target:
                target = UnitValue(0.0, target).add(value, registry).unit
        result = []
        for value in args:
            if value.unit is None or value.unit == target:
                result.append(value)
                continue
            moved = UnitValue(0.0, target).add(value, registry)
            if moved.unit != target:
                return None
            result.append(moved)
    except IncompatibleUnitsError:
        return None
    return result


def _checked(fn: Callable[..., Any], name: str, *args: Any) -> Any:
    """Call a math routine, turning Python math failures into SemanticError."""
    try:
        return fn(*args)
    except CalcError:
        raise
    except (ArithmeticError, ValueError) as e:
        raise SemanticError(f"{name}() failed: {e}") from e
    except TypeError as e:
        raise SemanticError(f"Invalid arguments for {name}(): {e}") from e
