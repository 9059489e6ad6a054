"""Shared pytest fixtures for dimcalc tests."""

import pytest
from typer.testing import CliRunner

from dimcalc.core.config import CalcConfig, add_unit_conversions, create_config
from dimcalc.core.conversions import ConversionOutput

REM_IN_PX = 16


@pytest.fixture
def config() -> CalcConfig:
    """Return a default config."""
    return create_config()


@pytest.fixture
def px_rem_config() -> CalcConfig:
    """Return a config that converts rem to px (1rem == 16px) for + and -."""
    cfg = create_config()
    return add_unit_conversions(
        cfg,
        [
            (
                ("+", "px", "rem"),
                lambda l, r: ConversionOutput(l.magnitude + r.magnitude * REM_IN_PX, "px"),
            ),
            (
                ("+", "rem", "px"),
                lambda l, r: ConversionOutput(l.magnitude * REM_IN_PX + r.magnitude, "px"),
            ),
            (
                ("-", "px", "rem"),
                lambda l, r: ConversionOutput(l.magnitude - r.magnitude * REM_IN_PX, "px"),
            ),
            (
                ("-", "rem", "px"),
                lambda l, r: ConversionOutput(l.magnitude * REM_IN_PX - r.magnitude, "px"),
            ),
        ],
    )


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()
