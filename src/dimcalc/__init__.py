"""
dimcalc: arithmetic over dimensional values.

Evaluates CSS calc()-like expressions where numbers carry units, with
pluggable rules for combining different units.

Usage:
    from dimcalc import add_unit_conversions, calc, create_config

    calc("1 + 2 * 3")                  # [7.0]
    calc("10px solid red")             # ["10px", "solid", "red"]

    config = create_config()
    add_unit_conversions(config, [
        (("+", "rem", "px"), lambda l, r: (l.magnitude * 16 + r.magnitude, "px")),
    ])
    calc("1rem + 16px", config)        # ["32px"]
"""

from dimcalc import presets
from dimcalc._version import __version__
from dimcalc.core import errors
from dimcalc.core.calc import calc, format_result
from dimcalc.core.config import (
    CSS_UNITS,
    CalcConfig,
    FunctionUnitPolicy,
    add_unit_conversions,
    create_config,
)
from dimcalc.core.conversions import ConversionKey, ConversionOutput, ConversionRegistry, Operator
from dimcalc.core.errors import (
    CalcError,
    CalcSyntaxError,
    IncompatibleUnitsError,
    LexicalError,
    SemanticError,
    UnsupportedUnitError,
)
from dimcalc.core.functions import unit_aware
from dimcalc.core.units import UnitValue

__all__ = [
    "CSS_UNITS",
    "CalcConfig",
    "CalcError",
    "CalcSyntaxError",
    "ConversionKey",
    "ConversionOutput",
    "ConversionRegistry",
    "FunctionUnitPolicy",
    "IncompatibleUnitsError",
    "LexicalError",
    "Operator",
    "SemanticError",
    "UnitValue",
    "UnsupportedUnitError",
    "__version__",
    "add_unit_conversions",
    "calc",
    "create_config",
    "errors",
    "format_result",
    "presets",
    "unit_aware",
]
