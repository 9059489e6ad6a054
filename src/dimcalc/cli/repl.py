"""
Interactive read-eval-print loop.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from dimcalc.core.calc import CalcResult, calc
from dimcalc.core.config import CalcConfig
from dimcalc.core.errors import CalcError
from dimcalc.core.units import format_magnitude

PROMPT = "> "


def render_results(results: list[CalcResult]) -> str:
    """Render a result list as ``[2, '6em']``."""
    parts = [repr(r) if isinstance(r, str) else format_magnitude(r) for r in results]
    return f"[{', '.join(parts)}]"


def start_repl(config: CalcConfig, console: Console) -> int:
    """
    Read lines until EOF, printing each result list or error message.

    Returns:
        Number of lines that failed to evaluate.
    """
    console.print("[bold cyan]Dimensional Value Calculator REPL[/bold cyan]")
    console.print(f"Supported units: {', '.join(config.allowed_units)}", highlight=False)

    failures = 0
    while True:
        try:
            line = console.input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            console.print()
            return failures

        if not line.strip():
            continue
        try:
            console.print(render_results(calc(line, config)), highlight=False, markup=False)
        except CalcError as e:
            failures += 1
            console.print(Text(e.message, style="red"))
