"""
File-based settings.

Parses the [dimcalc] section of a TOML file and builds a CalcConfig from it:

    [dimcalc]
    preset = "design"
    base_size = 10
    allow_strings = false
    function_unit_policy = "convert"
"""

from __future__ import annotations

import logging
import tomllib
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dimcalc.core.config import CalcConfig, FunctionUnitPolicy, create_config
from dimcalc.presets.design import DEFAULT_BASE_SIZE, create_design_config
from dimcalc.presets.dimensions import create_dimension_config
from dimcalc.presets.percent import create_percent_config

logger = logging.getLogger(__name__)

SETTINGS_TABLE = "dimcalc"


class PresetName(StrEnum):
    """Named configurations a settings file can start from."""

    PERCENT = "percent"
    DESIGN = "design"
    DIMENSIONS = "dimensions"


class CalcSettings(BaseModel):
    """Settings read from a TOML file. Unset fields keep the preset's value."""

    model_config = ConfigDict(extra="forbid")

    preset: PresetName | None = None
    base_size: float = Field(default=DEFAULT_BASE_SIZE, gt=0)
    allowed_units: list[str] | None = None
    allow_strings: bool | None = None
    allow_multiple_expressions: bool | None = None
    function_unit_policy: FunctionUnitPolicy | None = None

    def _overrides(self) -> dict[str, Any]:
        return {
            "allowed_units": self.allowed_units,
            "allow_strings": self.allow_strings,
            "allow_multiple_expressions": self.allow_multiple_expressions,
            "function_unit_policy": self.function_unit_policy,
        }

    def build_config(self) -> CalcConfig:
        """Create the preset (if any), then apply the explicit overrides."""
        if self.preset == PresetName.DESIGN:
            base = create_design_config(base_size=self.base_size)
        elif self.preset == PresetName.PERCENT:
            base = create_percent_config()
        elif self.preset == PresetName.DIMENSIONS:
            base = create_dimension_config()
        else:
            base = None
        return create_config(base, **self._overrides())


def load_settings(toml_path: Path) -> CalcSettings:
    """
    Load settings from a TOML file.

    Args:
        toml_path: Path to the TOML file

    Returns:
        CalcSettings with parsed values, or defaults when the file or the
        [dimcalc] table is missing.
    """
    if not toml_path.exists():
        logger.debug("No settings file at %s, using defaults", toml_path)
        return CalcSettings()

    with open(toml_path, "rb") as f:
        data = tomllib.load(f)

    return CalcSettings(**data.get(SETTINGS_TABLE, {}))
