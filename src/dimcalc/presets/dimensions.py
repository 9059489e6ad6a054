"""
Dimension preset: linear conversion tables for length, time and weight.

A table maps ``table[source][target]`` to how many ``target`` units make
one ``source`` unit, e.g. ``LENGTH_TABLE["km"]["m"] == 1000``. Mixed-unit
addition and subtraction resolve to the smaller of the two units.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from dimcalc.core.config import CSS_UNITS, CalcConfig, add_unit_conversions, create_config
from dimcalc.core.conversions import ConversionEntry, ConversionFunction, ConversionOutput

logger = logging.getLogger(__name__)

DimensionTable = dict[str, dict[str, float]]


def build_dimension_table(units: Sequence[str], factors: Sequence[float]) -> DimensionTable:
    """
    Build a complete conversion table from adjacent-unit factors.

    Args:
        units: Units ordered from largest to smallest, e.g. ``["km", "m"]``
        factors: How many of the next unit make one of the current unit;
            one fewer than ``units``

    Raises:
        ValueError: If the factor count does not match the unit count.
    """
    if len(units) - 1 != len(factors):
        raise ValueError("Number of conversion factors must be one less than number of units")

    # scale[i]: how many units[i] make one units[0]
    scale = [math.prod(factors[:i]) for i in range(len(units))]
    return {
        source: {target: scale[j] / scale[i] for j, target in enumerate(units) if j != i}
        for i, source in enumerate(units)
    }


LENGTH_UNITS = ("km", "m", "cm", "mm")
LENGTH_TABLE = build_dimension_table(LENGTH_UNITS, [1000, 100, 10])

TIME_UNITS = ("h", "min", "s", "ms")
TIME_TABLE = build_dimension_table(TIME_UNITS, [60, 60, 1000])

WEIGHT_UNITS = ("kg", "g", "mg")
WEIGHT_TABLE = build_dimension_table(WEIGHT_UNITS, [1000, 1000])


def _table_rule(operator: str, source: str, target: str, table: DimensionTable) -> ConversionFunction:
    sign = 1.0 if operator == "+" else -1.0

    if table[source][target] > 1:
        # target is the smaller unit: express the left operand in it
        factor = table[source][target]

        def into_target(left, right):
            return ConversionOutput(left.magnitude * factor + sign * right.magnitude, target)

        return into_target

    factor = table[target][source]

    def into_source(left, right):
        return ConversionOutput(left.magnitude + sign * right.magnitude * factor, source)

    return into_source


def conversions_from_table(table: DimensionTable, operator: str) -> list[ConversionEntry]:
    """
    Generate ``+`` or ``-`` rules for every ordered pair of units in a table.

    Raises:
        ValueError: For operators other than ``+`` and ``-``.
    """
    if operator not in ("+", "-"):
        raise ValueError(f"Table conversions are defined for + and - only, not {operator!r}")
    return [
        ((operator, source, target), _table_rule(operator, source, target, table))
        for source in table
        for target in table[source]
    ]


def create_dimension_config(config: CalcConfig | None = None) -> CalcConfig:
    """CSS units plus length, time and weight units with mixed-unit + and -."""
    tables = (LENGTH_TABLE, TIME_TABLE, WEIGHT_TABLE)
    if config is None:
        dimension_units = [unit for table in tables for unit in table]
        config = create_config(allowed_units=[*CSS_UNITS, *dimension_units])
    for table in tables:
        for operator in ("+", "-"):
            add_unit_conversions(config, conversions_from_table(table, operator))
    logger.debug("Dimension config holds %d conversion rule(s)", len(config.unit_conversions))
    return config
