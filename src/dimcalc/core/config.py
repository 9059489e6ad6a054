"""
Evaluation configuration.

A CalcConfig is a frozen snapshot of everything the pipeline consults:
allowed units, math functions and constants, the conversion registry, and
the string / multi-expression switches. Build one with :func:`create_config`
and register extra rules with :func:`add_unit_conversions` before evaluating.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dimcalc.core.conversions import (
    ConversionEntry,
    ConversionRegistry,
    default_unit_conversions,
)
from dimcalc.core.functions import DEFAULT_MATH_CONSTANTS, DEFAULT_MATH_FUNCTIONS

logger = logging.getLogger(__name__)

CSS_UNITS: tuple[str, ...] = (
    "px",
    "em",
    "rem",
    "%",
    "vh",
    "vw",
    "vmin",
    "vmax",
    "cm",
    "mm",
    "in",
    "pt",
    "pc",
)


class FunctionUnitPolicy(StrEnum):
    """How plain math functions treat arguments carrying different units."""

    STRICT = "strict"  # every unit-bearing argument must share one unit
    CONVERT = "convert"  # convert to a common unit through the "+" rules


class CalcConfig(BaseModel):
    """Read-only evaluation settings shared by every pipeline stage."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    allowed_units: tuple[str, ...] = Field(
        default=CSS_UNITS, description="Units accepted after a number"
    )
    math_functions: dict[str, Callable[..., Any]] = Field(
        default_factory=lambda: dict(DEFAULT_MATH_FUNCTIONS),
        description="Callable identifiers",
    )
    math_constants: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_MATH_CONSTANTS),
        description="Constant identifiers",
    )
    unit_conversions: ConversionRegistry = Field(
        default_factory=default_unit_conversions,
        description="Rules for combining different units",
    )
    allow_strings: bool = True
    allow_multiple_expressions: bool = True
    function_unit_policy: FunctionUnitPolicy = FunctionUnitPolicy.STRICT

    @field_validator("allowed_units", mode="before")
    @classmethod
    def _dedupe_units(cls, value: Iterable[str]) -> tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        return tuple(dict.fromkeys(value))

    def is_unit_allowed(self, unit: str) -> bool:
        return unit in self.allowed_units


def _as_registry(value: Any) -> ConversionRegistry:
    """Copy a registry, or build one from a mapping or entry list."""
    if isinstance(value, ConversionRegistry):
        return value.copy()
    registry = ConversionRegistry()
    if isinstance(value, Mapping):
        for (operator, left, right), fn in value.items():
            registry.register(operator, left, right, fn)
        return registry
    registry.update(value)
    return registry


def create_config(base: CalcConfig | None = None, **overrides: Any) -> CalcConfig:
    """
    Create a new CalcConfig.

    Args:
        base: Config to start from. Defaults are used when omitted.
        **overrides: Field values to replace; ``None`` values are ignored.
            ``unit_conversions`` may be a ConversionRegistry, a mapping of
            ``(operator, left, right)`` to function, or a list of entries.

    Returns:
        A fresh config whose conversion registry is not shared with ``base``.
    """
    values: dict[str, Any] = {}
    if base is not None:
        values = {name: getattr(base, name) for name in CalcConfig.model_fields}
    values.update({key: value for key, value in overrides.items() if value is not None})

    if "unit_conversions" in values:
        values["unit_conversions"] = _as_registry(values["unit_conversions"])
    return CalcConfig(**values)


def add_unit_conversions(
    config: CalcConfig, conversions: Iterable[ConversionEntry]
) -> CalcConfig:
    """
    Register conversion rules on a config in place.

    Args:
        config: Config whose registry receives the rules
        conversions: ``((operator, left_unit, right_unit), fn)`` pairs, where
            a ``None`` unit means unitless and ``"*"`` matches any unit

    Returns:
        The same config, for chaining.
    """
    config.unit_conversions.update(conversions)
    return config


def resolve_config(config: CalcConfig | Mapping[str, Any] | None) -> CalcConfig:
    """Accept a CalcConfig, a mapping of partial overrides, or None."""
    if config is None:
        return create_config()
    if isinstance(config, CalcConfig):
        return config
    return create_config(**dict(config))
