"""
Conversion registry for unit arithmetic.

Maps ``(operator, left_unit, right_unit)`` keys to conversion functions.
A unit slot is a unit name, ``"*"`` (matches any unit, including no unit),
or ``""`` (explicitly unitless). Lookup walks four keys from most to least
specific and the first hit wins:

    (op, left, right) -> (op, left, "*") -> (op, "*", right) -> (op, "*", "*")
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from enum import StrEnum
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from dimcalc.core.units import UnitValue

logger = logging.getLogger(__name__)

WILDCARD = "*"
UNITLESS = ""


class Operator(StrEnum):
    """Arithmetic operators understood by the evaluator."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


class ConversionOutput(NamedTuple):
    """Result of a conversion function: a magnitude and its unit."""

    magnitude: float
    unit: str | None = None


ConversionFunction = Callable[["UnitValue", "UnitValue"], Any]


def _unit_slot(unit: str | None) -> str:
    return UNITLESS if unit is None else unit


class ConversionKey(NamedTuple):
    """Composite registry key. Unit slots hold a unit, ``*`` or ``""``."""

    operator: Operator
    left: str
    right: str

    @classmethod
    def of(cls, operator: str, left: str | None, right: str | None) -> ConversionKey:
        """Build a key, mapping ``None`` unit slots to the unitless slot."""
        return cls(Operator(operator), _unit_slot(left), _unit_slot(right))


ConversionEntry = tuple[tuple[str, str | None, str | None], ConversionFunction]


class ConversionRegistry:
    """Lookup table from ConversionKey to conversion function."""

    def __init__(self, entries: Iterable[ConversionEntry] = ()) -> None:
        self._rules: dict[ConversionKey, ConversionFunction] = {}
        self.update(entries)

    def register(
        self,
        operator: str,
        left: str | None,
        right: str | None,
        fn: ConversionFunction,
    ) -> None:
        """Insert a rule, replacing any rule already stored under the key."""
        self._rules[ConversionKey.of(operator, left, right)] = fn

    def update(self, entries: Iterable[ConversionEntry]) -> int:
        """Register ``((operator, left, right), fn)`` pairs. Returns the count."""
        count = 0
        for (operator, left, right), fn in entries:
            self.register(operator, left, right, fn)
            count += 1
        if count:
            logger.debug("Registered %d unit conversion(s)", count)
        return count

    def resolve(
        self, operator: str, left: str | None, right: str | None
    ) -> ConversionFunction | None:
        """Find the most specific rule for the operator and operand units."""
        op = Operator(operator)
        left_slot = _unit_slot(left)
        right_slot = _unit_slot(right)
        for key in (
            ConversionKey(op, left_slot, right_slot),
            ConversionKey(op, left_slot, WILDCARD),
            ConversionKey(op, WILDCARD, right_slot),
            ConversionKey(op, WILDCARD, WILDCARD),
        ):
            fn = self._rules.get(key)
            if fn is not None:
                return fn
        return None

    def copy(self) -> ConversionRegistry:
        clone = ConversionRegistry()
        clone._rules = dict(self._rules)
        return clone

    def __contains__(self, key: object) -> bool:
        return key in self._rules

    def __getitem__(self, key: ConversionKey) -> ConversionFunction:
        return self._rules[key]

    def __iter__(self) -> Iterator[ConversionKey]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"ConversionRegistry({len(self._rules)} rules)"


# ---------------------------------------------------------------------------
# Default rules: a unitless operand scales the other operand's unit
# ---------------------------------------------------------------------------


def _scale_right_unit(left: UnitValue, right: UnitValue) -> ConversionOutput:
    return ConversionOutput(left.magnitude * right.magnitude, right.unit)


def _scale_left_unit(left: UnitValue, right: UnitValue) -> ConversionOutput:
    return ConversionOutput(left.magnitude * right.magnitude, left.unit)


def _divide_keep_left_unit(left: UnitValue, right: UnitValue) -> ConversionOutput:
    return ConversionOutput(left.magnitude / right.magnitude, left.unit)


def _divide_keep_right_unit(left: UnitValue, right: UnitValue) -> ConversionOutput:
    return ConversionOutput(left.magnitude / right.magnitude, right.unit)


DEFAULT_CONVERSIONS: list[ConversionEntry] = [
    (("*", None, "*"), _scale_right_unit),
    (("*", "*", None), _scale_left_unit),
    (("/", "*", None), _divide_keep_left_unit),
    (("/", None, "*"), _divide_keep_right_unit),
]


def default_unit_conversions() -> ConversionRegistry:
    """Return a fresh registry holding the default unitless rules."""
    return ConversionRegistry(DEFAULT_CONVERSIONS)
