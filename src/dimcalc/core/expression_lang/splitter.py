"""
Statement splitter.

Partitions a token list into independent sub-expressions. At paren depth 0
a boundary falls between a token that can end an expression and a token
that can start one, so ``10px solid red`` or ``1+1 2+2`` become separate
statements.
"""

from __future__ import annotations

import logging

from dimcalc.core.errors import CalcSyntaxError, ErrorContext
from dimcalc.core.expression_lang.tokenizer import Token, TokenKind

logger = logging.getLogger(__name__)

_GROUP_END = frozenset(
    {
        TokenKind.NUMBER,
        TokenKind.NUMBER_WITH_UNIT,
        TokenKind.CONSTANT_ID,
        TokenKind.STRING,
        TokenKind.RPAREN,
    }
)

_GROUP_START = frozenset(
    {
        TokenKind.NUMBER,
        TokenKind.NUMBER_WITH_UNIT,
        TokenKind.STRING,
        TokenKind.LPAREN,
        TokenKind.FUNCTION_ID,
        TokenKind.CONSTANT_ID,
    }
)


def is_group_split(left: Token, right: Token) -> bool:
    """True when ``right`` starts a new statement after ``left``."""
    return left.kind in _GROUP_END and right.kind in _GROUP_START


def split_statements(
    tokens: list[Token],
    source: str = "",
    allow_multiple: bool = True,
) -> list[list[Token]]:
    """
    Split a token list into one token list per statement.

    Each returned list ends with its own EOF token.

    Args:
        tokens: Output of ``tokenize`` (a trailing EOF token is ignored)
        source: Original text, used for error context
        allow_multiple: When False, more than one statement is an error

    Raises:
        CalcSyntaxError: On a top-level comma, unbalanced parentheses, or
            multiple statements while they are disallowed.
    """
    body = [t for t in tokens if t.kind != TokenKind.EOF]
    end_pos = tokens[-1].pos if tokens else len(source)

    statements: list[list[Token]] = []
    current: list[Token] = []
    depth = 0

    for index, token in enumerate(body):
        if token.kind == TokenKind.LPAREN:
            depth += 1
        elif token.kind == TokenKind.RPAREN:
            depth -= 1
            if depth < 0:
                raise CalcSyntaxError(
                    "Unmatched closing parenthesis", ErrorContext(source, token.pos)
                )
        elif token.kind == TokenKind.COMMA and depth == 0:
            raise CalcSyntaxError(
                "Commas are only allowed inside function calls",
                ErrorContext(source, token.pos),
            )

        current.append(token)

        following = body[index + 1] if index + 1 < len(body) else None
        if depth == 0 and following is not None and is_group_split(token, following):
            current.append(Token(TokenKind.EOF, "", following.pos))
            statements.append(current)
            current = []

    if depth > 0:
        raise CalcSyntaxError("Unmatched opening parenthesis", ErrorContext(source, end_pos))

    if current:
        current.append(Token(TokenKind.EOF, "", end_pos))
        statements.append(current)

    if len(statements) > 1 and not allow_multiple:
        raise CalcSyntaxError("Multiple expressions are not allowed")

    logger.debug("Split %d token(s) into %d statement(s)", len(body), len(statements))
    return statements
