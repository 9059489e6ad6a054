"""
Ready-made configurations.

Each factory returns a new CalcConfig and can be called without arguments.
"""

from collections.abc import Callable

from dimcalc.core.config import CalcConfig
from dimcalc.presets.design import create_design_config
from dimcalc.presets.dimensions import create_dimension_config
from dimcalc.presets.percent import create_percent_config

PRESETS: dict[str, Callable[[], CalcConfig]] = {
    "percent": create_percent_config,
    "design": create_design_config,
    "dimensions": create_dimension_config,
}

__all__ = [
    "PRESETS",
    "create_design_config",
    "create_dimension_config",
    "create_percent_config",
]
