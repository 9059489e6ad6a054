"""
AST node types for dimcalc expressions.

Nodes are produced once per sub-expression by the parser and never mutated.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dimcalc.core.conversions import Operator
from dimcalc.core.units import format_magnitude


class NumberLiteral(BaseModel):
    """A number with an optional unit: 4, 1.5rem, -3px."""

    value: float
    unit: str | None = None

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{format_magnitude(self.value)}{self.unit or ''}"


class StringLiteral(BaseModel):
    """Free text passed through unevaluated: solid, 'hello'."""

    text: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.text


class Identifier(BaseModel):
    """
    A function or constant name resolved against the config at parse time.

    ``ref`` is the constant's value or the callable itself.
    """

    name: str
    ref: float | Callable[..., Any] = Field(description="Constant value or callable")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def is_callable(self) -> bool:
        return callable(self.ref)

    def __str__(self) -> str:
        return self.name


class BinaryOp(BaseModel):
    """Binary operation: left op right."""

    op: Operator
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


class UnaryNegate(BaseModel):
    """Unary minus applied to a sub-expression."""

    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"-{self.operand}"


class FunctionCall(BaseModel):
    """Function call: name(arg1, arg2, ...). At least one argument."""

    target: Identifier
    args: list[Expr] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.args)
        return f"{self.target}({args_str})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = NumberLiteral | StringLiteral | Identifier | BinaryOp | UnaryNegate | FunctionCall

# Rebuild models for recursive forward references
BinaryOp.model_rebuild()
UnaryNegate.model_rebuild()
FunctionCall.model_rebuild()
