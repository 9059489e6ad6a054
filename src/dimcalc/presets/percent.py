"""
Percent preset.

Lets ``%`` combine with any other unit: ``100px + 10%`` is ``110px``,
``100px - 10%`` is ``90px``, ``100px * 10%`` is ``10px``.
"""

from __future__ import annotations

import logging

from dimcalc.core.config import CalcConfig, add_unit_conversions, create_config
from dimcalc.core.conversions import ConversionEntry, ConversionOutput
from dimcalc.core.units import UnitValue

logger = logging.getLogger(__name__)


def percent_of(percent: UnitValue, value: UnitValue) -> float:
    """The ``percent`` share of ``value``'s magnitude."""
    return value.magnitude / 100 * percent.magnitude


def add_percent(percent: UnitValue, value: UnitValue) -> ConversionOutput:
    return ConversionOutput(value.magnitude + percent_of(percent, value), value.unit)


PERCENT_CONVERSIONS: list[ConversionEntry] = [
    (("+", "%", "*"), lambda left, right: add_percent(left, right)),
    (("+", "*", "%"), lambda left, right: add_percent(right, left)),
    (
        ("-", "*", "%"),
        lambda left, right: ConversionOutput(
            left.magnitude - percent_of(right, left), left.unit
        ),
    ),
    (
        ("-", "%", "*"),
        lambda left, right: ConversionOutput(
            percent_of(left, right) - right.magnitude, right.unit
        ),
    ),
    (
        ("*", "*", "%"),
        lambda left, right: ConversionOutput(percent_of(right, left), left.unit),
    ),
    (
        ("*", "%", "*"),
        lambda left, right: ConversionOutput(percent_of(left, right), right.unit),
    ),
    (
        ("/", "*", "%"),
        lambda left, right: ConversionOutput(
            left.magnitude * 100 / right.magnitude, left.unit
        ),
    ),
    (
        ("/", "%", "*"),
        lambda left, right: ConversionOutput(left.magnitude / right.magnitude, "%"),
    ),
]


def create_percent_config(config: CalcConfig | None = None) -> CalcConfig:
    """Register the percent rules on ``config`` (a fresh default config if omitted)."""
    if config is None:
        config = create_config()
    logger.debug("Adding percent conversions")
    return add_unit_conversions(config, PERCENT_CONVERSIONS)
