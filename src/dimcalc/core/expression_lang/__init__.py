"""
dimcalc expression language.

Tokenizer, statement splitter, Pratt parser, and evaluator.

Usage:
    from dimcalc.core.config import create_config
    from dimcalc.core.expression_lang import evaluate, parse_expressions

    config = create_config()
    [expr] = parse_expressions("2px * 3", config)
    result = evaluate(expr, config)
    # str(result) == "6px"
"""

from dimcalc.core.expression_lang.evaluator import evaluate
from dimcalc.core.expression_lang.parser import parse_expressions
from dimcalc.core.expression_lang.splitter import split_statements
from dimcalc.core.expression_lang.tokenizer import tokenize

__all__ = ["evaluate", "parse_expressions", "split_statements", "tokenize"]
