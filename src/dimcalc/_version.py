"""Package version lookup."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DIST_NAME = "dimcalc"
UNKNOWN_VERSION = "0.0.0"

# src/dimcalc/_version.py -> repository root
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _checkout_version(pyproject: Path = _PYPROJECT) -> str:
    """Read [project].version from a source checkout's pyproject.toml."""
    if not pyproject.exists():
        return UNKNOWN_VERSION
    with open(pyproject, "rb") as f:
        project = tomllib.load(f).get("project", {})
    return str(project.get("version", UNKNOWN_VERSION))


def get_version() -> str:
    """Installed distribution version, falling back to the checkout's pyproject.toml."""
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return _checkout_version()


__version__ = get_version()
