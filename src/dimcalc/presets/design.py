"""
Design-tool preset.

Restricts units to ``px``, ``rem`` and ``%``, converts between px and rem
with a configurable base size, and rejects strings and multiple expressions.
"""

from __future__ import annotations

import logging

from dimcalc.core.config import CalcConfig, add_unit_conversions, create_config
from dimcalc.core.conversions import ConversionEntry, ConversionOutput
from dimcalc.presets.percent import create_percent_config

logger = logging.getLogger(__name__)

DEFAULT_BASE_SIZE = 16.0
DESIGN_UNITS = ("px", "rem", "%")


def px_rem_conversions(base_size: float = DEFAULT_BASE_SIZE) -> list[ConversionEntry]:
    """Rules converting rem to px (``1rem == base_size px``), resolving to px."""
    return [
        (
            ("+", "px", "rem"),
            lambda left, right: ConversionOutput(left.magnitude + right.magnitude * base_size, "px"),
        ),
        (
            ("+", "rem", "px"),
            lambda left, right: ConversionOutput(left.magnitude * base_size + right.magnitude, "px"),
        ),
        (
            ("-", "px", "rem"),
            lambda left, right: ConversionOutput(left.magnitude - right.magnitude * base_size, "px"),
        ),
        (
            ("-", "rem", "px"),
            lambda left, right: ConversionOutput(left.magnitude * base_size - right.magnitude, "px"),
        ),
        (
            ("+", "px", None),
            lambda left, right: ConversionOutput(left.magnitude + right.magnitude, "px"),
        ),
        (
            ("+", None, "px"),
            lambda left, right: ConversionOutput(left.magnitude + right.magnitude, "px"),
        ),
    ]


def create_design_config(
    base_size: float = DEFAULT_BASE_SIZE, config: CalcConfig | None = None
) -> CalcConfig:
    """
    Build the design-tool config.

    Args:
        base_size: Pixels per rem
        config: Config to register on. Defaults to px/rem/% only, with
            strings and multiple expressions disallowed.
    """
    if config is None:
        config = create_config(
            allowed_units=DESIGN_UNITS,
            allow_strings=False,
            allow_multiple_expressions=False,
        )
    logger.debug("Adding px/rem conversions with base size %s", base_size)
    add_unit_conversions(config, px_rem_conversions(base_size))
    return create_percent_config(config)
