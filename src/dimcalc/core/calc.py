"""
Entry point tying the pipeline together.

    source -> tokenize -> split_statements -> (parse -> evaluate) per statement
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from dimcalc.core.config import CalcConfig, resolve_config
from dimcalc.core.expression_lang.evaluator import evaluate
from dimcalc.core.expression_lang.parser import parse_tokens
from dimcalc.core.expression_lang.splitter import split_statements
from dimcalc.core.expression_lang.tokenizer import tokenize
from dimcalc.core.units import UnitValue, format_magnitude

logger = logging.getLogger(__name__)

CalcResult = float | str


def format_result(value: UnitValue | str) -> CalcResult:
    """
    Convert an evaluated statement into its public form.

    Unitless values become floats, except the result of dividing two equal
    units, which is rendered as the magnitude string (``6px / 2px`` -> ``"3"``).
    Unit-bearing values become ``<magnitude><unit>`` strings.
    """
    if isinstance(value, str):
        return value
    if value.is_unitless():
        if value.from_same_unit_division:
            return format_magnitude(value.magnitude)
        return value.magnitude
    return str(value)


def evaluate_source(
    source: str, config: CalcConfig | Mapping[str, Any] | None = None
) -> list[UnitValue | str]:
    """Run the pipeline and return the raw evaluated statements."""
    cfg = resolve_config(config)
    tokens = tokenize(source, cfg)
    statements = split_statements(tokens, source, cfg.allow_multiple_expressions)
    logger.debug("Evaluating %d statement(s) from %r", len(statements), source)
    return [evaluate(parse_tokens(statement, cfg, source), cfg) for statement in statements]


def calc(
    source: str, config: CalcConfig | Mapping[str, Any] | None = None
) -> list[CalcResult]:
    """
    Evaluate every statement in ``source``.

    Args:
        source: Expression text, e.g. ``"1rem + 8px 10px solid"``
        config: A CalcConfig, a mapping of ``create_config`` overrides, or None

    Returns:
        One result per statement, in source order.

    Raises:
        CalcError: Any failure aborts the whole call.
    """
    return [format_result(value) for value in evaluate_source(source, config)]
