"""
Error types for dimcalc tokenizing, parsing, and evaluation.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from dimcalc.core.units import UnitValue


def stringify_unit(unit: str | None) -> str:
    """Render a unit for messages, with ``None`` shown as ``unitless``."""
    return unit or "unitless"


def _evaluation_error(message: str) -> str:
    return f"Evaluation Error: {message}"


class CalcError(Exception):
    """Base exception for all dimcalc errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class LexicalError(CalcError):
    """
    Raised when source text cannot be tokenized.

    Examples:
    - Invalid characters
    - Strings while strings are disabled
    - Illegal consecutive operators
    """


class CalcSyntaxError(CalcError):
    """
    Raised when a token stream does not form a valid expression.

    Examples:
    - Unmatched parentheses
    - Commas outside function calls
    - Trailing tokens
    - Function calls with no arguments
    """


class SemanticError(CalcError):
    """
    Raised when a well-formed expression cannot be evaluated.

    Examples:
    - Invoking a constant as a function
    - Power with unit-bearing operands
    - Division by zero
    """


class IncompatibleUnitsError(CalcError):
    """Raised when no arithmetic or conversion rule combines two units."""

    def __init__(
        self,
        operation: str,
        left: UnitValue,
        right: UnitValue,
        message: str | None = None,
    ):
        self.operation = operation
        self.left = left
        self.right = right
        self.values = [left, right]
        if message is None:
            message = (
                f"Units {stringify_unit(left.unit)} & {stringify_unit(right.unit)} "
                f"are incompatible in expression {left} {operation} {right}."
            )
        super().__init__(_evaluation_error(message))


class UnsupportedUnitError(LexicalError):
    """Raised when a number carries a unit outside the allowed set."""

    def __init__(
        self,
        unit: str,
        allowed_units: Iterable[str],
        context: Optional["ErrorContext"] = None,
    ):
        self.unit = unit
        self.allowed_units = list(allowed_units)
        allowed = ", ".join(stringify_unit(u) for u in self.allowed_units)
        super().__init__(
            _evaluation_error(
                f'Invalid unit: "{stringify_unit(unit)}". Allowed units are: {allowed}'
            ),
            context,
        )


@dataclass
class ErrorContext:
    """
    Location of an error inside the evaluated source text.

    Attributes:
        source: The full text passed to ``calc``
        position: Offset (0-indexed) of the offending token
    """

    source: str
    position: int

    def format(self) -> str:
        """
        Format the context as the source line with a caret marker.

        Returns:
            Formatted string like: "at position 4\\n  1 + # 2\\n      ^"
        """
        marker = " " * (self.position + 2) + "^"
        return f"at position {self.position}\n  {self.source}\n{marker}"
