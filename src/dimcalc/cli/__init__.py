"""
dimcalc command line.

- eval: evaluate the joined arguments once
- repl: interactive loop
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.text import Text

from dimcalc._version import get_version
from dimcalc.cli.repl import render_results, start_repl
from dimcalc.core.calc import calc
from dimcalc.core.config import CalcConfig
from dimcalc.core.errors import CalcError
from dimcalc.settings import CalcSettings, PresetName, load_settings

app = typer.Typer(
    help="Evaluate arithmetic with dimensional values (px, rem, %, km, ...)",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dimcalc {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Dimensional value calculator."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


def build_config(
    preset: PresetName | None,
    config_path: Path | None,
    no_strings: bool,
    single: bool,
) -> CalcConfig:
    """Combine a settings file with command-line overrides."""
    settings = load_settings(config_path) if config_path else CalcSettings()
    update: dict[str, object] = {}
    if preset is not None:
        update["preset"] = preset
    if no_strings:
        update["allow_strings"] = False
    if single:
        update["allow_multiple_expressions"] = False
    return settings.model_copy(update=update).build_config()


_PRESET_OPTION = typer.Option(None, "--preset", "-p", help="Start from a named preset")
_CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="TOML file with a [dimcalc] table", dir_okay=False
)
_NO_STRINGS_OPTION = typer.Option(False, "--no-strings", help="Reject free text")
_SINGLE_OPTION = typer.Option(False, "--single", help="Reject multiple expressions")


@app.command(name="eval")
def eval_command(
    expression: list[str] = typer.Argument(..., help="Expression (arguments are joined)"),
    preset: PresetName | None = _PRESET_OPTION,
    config_path: Path | None = _CONFIG_OPTION,
    no_strings: bool = _NO_STRINGS_OPTION,
    single: bool = _SINGLE_OPTION,
) -> None:
    """Evaluate an expression and print the results."""
    config = build_config(preset, config_path, no_strings, single)
    try:
        results = calc(" ".join(expression), config)
    except CalcError as e:
        console.print(Text(e.message, style="red"))
        raise typer.Exit(1)
    typer.echo(render_results(results))


@app.command(name="repl")
def repl_command(
    preset: PresetName | None = _PRESET_OPTION,
    config_path: Path | None = _CONFIG_OPTION,
    no_strings: bool = _NO_STRINGS_OPTION,
    single: bool = _SINGLE_OPTION,
) -> None:
    """Start an interactive session."""
    config = build_config(preset, config_path, no_strings, single)
    start_repl(config, console)


def main() -> None:
    app()


__all__ = ["app", "main"]
