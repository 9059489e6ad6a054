"""
Tokenizer for dimcalc expressions.

Converts an expression string into a flat list of typed tokens. Unit
suffixes are checked against the config's allowed units, and identifiers
are classified as functions or constants by config lookup.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

from dimcalc.core.config import CalcConfig
from dimcalc.core.errors import ErrorContext, LexicalError, UnsupportedUnitError


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Values
    NUMBER = auto()
    NUMBER_WITH_UNIT = auto()
    FUNCTION_ID = auto()
    CONSTANT_ID = auto()
    STRING = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    CARET = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()

    # End of input
    EOF = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos", "unit")

    def __init__(self, kind: TokenKind, value: str, pos: int, unit: str | None = None) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos
        self.unit = unit

    @property
    def magnitude(self) -> float:
        """Numeric part of a NUMBER / NUMBER_WITH_UNIT token."""
        digits = self.value[: len(self.value) - len(self.unit)] if self.unit else self.value
        return float(digits)

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


OPERATOR_KINDS = frozenset(
    {TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH, TokenKind.CARET}
)

# A "-" directly after one of these is subtraction, not a sign
_VALUE_KINDS = frozenset(
    {
        TokenKind.NUMBER,
        TokenKind.NUMBER_WITH_UNIT,
        TokenKind.FUNCTION_ID,
        TokenKind.CONSTANT_ID,
        TokenKind.RPAREN,
    }
)

_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "^": TokenKind.CARET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}

_NUMBER_RE = re.compile(r"(?P<sign>-)?(?P<number>\d+(?:\.\d*)?|\.\d+)(?P<suffix>[a-zA-Z0-9%]+)?")
_IDENT_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")


def tokenize(source: str, config: CalcConfig) -> list[Token]:
    """Tokenize an expression string. The list always ends with an EOF token."""
    tokens: list[Token] = []
    # Kind of the previous raw token; None after whitespace or at the start
    prev: TokenKind | None = None
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c.isspace():
            i += 1
            prev = None
            continue

        # Numbers, with an optional sign and unit suffix
        m = _NUMBER_RE.match(source, i)
        if m and not (m.group("sign") and prev in _VALUE_KINDS):
            suffix = m.group("suffix")
            if suffix and not config.is_unit_allowed(suffix):
                raise UnsupportedUnitError(
                    suffix, config.allowed_units, ErrorContext(source, i)
                )
            kind = TokenKind.NUMBER_WITH_UNIT if suffix else TokenKind.NUMBER
            tokens.append(Token(kind, m.group(0), i, suffix))
            prev = kind
            i = m.end()
            continue

        # Function and constant names
        m = _IDENT_RE.match(source, i)
        if m:
            word = m.group(0)
            kind_for_word = None
            if word in config.math_functions:
                kind_for_word = TokenKind.FUNCTION_ID
            elif word in config.math_constants:
                kind_for_word = TokenKind.CONSTANT_ID
            if kind_for_word is not None:
                tokens.append(Token(kind_for_word, word, i))
                prev = kind_for_word
                i = m.end()
                continue

        if c in _SINGLE_CHAR:
            kind = _SINGLE_CHAR[c]
            tokens.append(Token(kind, c, i))
            prev = kind
            i += 1
            continue

        # Anything else is free text up to the next whitespace
        if config.allow_strings:
            word = source[i:].split(None, 1)[0]
            tokens.append(Token(TokenKind.STRING, word, i))
            prev = TokenKind.STRING
            i += len(word)
            continue

        if c.isalpha() or c in "_'\"":
            raise LexicalError("Strings in expressions are not allowed", ErrorContext(source, i))
        raise LexicalError(f"Unexpected character in input: {c!r}", ErrorContext(source, i))

    _check_operator_runs(tokens, source)
    tokens.append(Token(TokenKind.EOF, "", n))
    return tokens


def _check_operator_runs(tokens: list[Token], source: str) -> None:
    """Reject touching operators, except a single unary minus after another operator.

    Operators separated by whitespace are left to the parser: `1 - -(2)` is
    a subtraction of a negated group.
    """
    for current, following in zip(tokens, tokens[1:]):
        if current.pos + len(current.value) != following.pos:
            continue
        if current.kind == TokenKind.MINUS and following.kind == TokenKind.MINUS:
            raise LexicalError(
                "Consecutive minus operators not allowed", ErrorContext(source, following.pos)
            )
        if (
            current.kind in OPERATOR_KINDS
            and following.kind in OPERATOR_KINDS
            and following.kind != TokenKind.MINUS
        ):
            raise LexicalError(
                f"Consecutive operators not allowed: {current.value}{following.value}",
                ErrorContext(source, following.pos),
            )
