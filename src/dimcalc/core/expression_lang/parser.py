"""
Pratt (top-down operator precedence) parser for dimcalc expressions.

Binding powers, higher binds tighter:

    (  call / grouping   50
    ^  power             40   right-associative
    *  /                 30
    +  -                 20
    everything else       0

``parse(rbp)`` reads a token, applies its prefix handler (nud), then keeps
applying infix handlers (led) while the next token binds tighter than rbp.
"""

from __future__ import annotations

from dimcalc.core.config import CalcConfig
from dimcalc.core.conversions import Operator
from dimcalc.core.errors import CalcSyntaxError, ErrorContext, SemanticError
from dimcalc.core.expression_lang.splitter import split_statements
from dimcalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from dimcalc.core.nodes import (
    BinaryOp,
    Expr,
    FunctionCall,
    Identifier,
    NumberLiteral,
    StringLiteral,
    UnaryNegate,
)

BINDING_POWER: dict[TokenKind, int] = {
    TokenKind.PLUS: 20,
    TokenKind.MINUS: 20,
    TokenKind.STAR: 30,
    TokenKind.SLASH: 30,
    TokenKind.CARET: 40,
    TokenKind.LPAREN: 50,
}

_BINARY_OPS: dict[TokenKind, Operator] = {
    TokenKind.PLUS: Operator.ADD,
    TokenKind.MINUS: Operator.SUB,
    TokenKind.STAR: Operator.MUL,
    TokenKind.SLASH: Operator.DIV,
    TokenKind.CARET: Operator.POW,
}


def binding_power(token: Token) -> int:
    return BINDING_POWER.get(token.kind, 0)


def _describe(token: Token) -> str:
    return "end of input" if token.kind == TokenKind.EOF else repr(token.value)


class _Parser:
    """Pratt parser over the tokens of a single statement."""

    def __init__(self, tokens: list[Token], config: CalcConfig, source: str = "") -> None:
        self.tokens = tokens
        self.config = config
        self.source = source
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        tok = self.current
        if tok.kind != kind:
            raise self._error(f"Unexpected token: {_describe(tok)}", tok)
        return self.advance()

    def _error(self, message: str, token: Token) -> CalcSyntaxError:
        return CalcSyntaxError(message, ErrorContext(self.source, token.pos))

    # -- Core loop --

    def parse(self, rbp: int = 0) -> Expr:
        left = self.nud(self.advance())
        while binding_power(self.current) > rbp:
            left = self.led(left, self.advance())
        return left

    def parse_statement(self) -> Expr:
        expr = self.parse()
        if self.current.kind != TokenKind.EOF:
            raise self._error(
                f"Unexpected token after expression: {_describe(self.current)}", self.current
            )
        return expr

    # -- Prefix handlers --

    def nud(self, token: Token) -> Expr:
        match token.kind:
            case TokenKind.NUMBER | TokenKind.NUMBER_WITH_UNIT:
                return NumberLiteral(value=token.magnitude, unit=token.unit)
            case TokenKind.FUNCTION_ID | TokenKind.CONSTANT_ID:
                return self._identifier(token)
            case TokenKind.STRING:
                return StringLiteral(text=token.value)
            case TokenKind.PLUS:
                return self.parse(binding_power(token))
            case TokenKind.MINUS:
                return UnaryNegate(operand=self.parse(binding_power(token)))
            case TokenKind.LPAREN:
                inner = self.parse()
                self.expect(TokenKind.RPAREN)
                return inner
            case TokenKind.EOF:
                raise self._error("Unexpected end of expression", token)
            case _:
                raise self._error(f"Unexpected token: {_describe(token)}", token)

    def _identifier(self, token: Token) -> Identifier:
        name = token.value
        if name in self.config.math_functions:
            return Identifier(name=name, ref=self.config.math_functions[name])
        if name in self.config.math_constants:
            return Identifier(name=name, ref=self.config.math_constants[name])
        raise SemanticError(
            f"Unknown expression: {name!r}. Only configured functions and constants are supported.",
            ErrorContext(self.source, token.pos),
        )

    # -- Infix handlers --

    def led(self, left: Expr, token: Token) -> Expr:
        match token.kind:
            case TokenKind.PLUS | TokenKind.MINUS | TokenKind.STAR | TokenKind.SLASH:
                right = self.parse(binding_power(token))
                return BinaryOp(op=_BINARY_OPS[token.kind], left=left, right=right)
            case TokenKind.CARET:
                right = self.parse(binding_power(token) - 1)
                return BinaryOp(op=Operator.POW, left=left, right=right)
            case TokenKind.LPAREN:
                return self._call(left, token)
            case _:
                raise self._error(f"Unexpected token: {_describe(token)}", token)

    def _call(self, left: Expr, paren: Token) -> FunctionCall:
        """IDENT '(' expr (',' expr)* ')'"""
        context = ErrorContext(self.source, paren.pos)
        if not isinstance(left, Identifier):
            raise SemanticError("Cannot invoke expression as if it was a function", context)
        if not left.is_callable:
            raise SemanticError(f"Cannot invoke constant {left.name} as a function", context)
        if self.current.kind == TokenKind.RPAREN:
            raise CalcSyntaxError(f"Function {left.name} called with no arguments", context)

        args: list[Expr] = [self.parse()]
        while self.current.kind == TokenKind.COMMA:
            self.advance()
            args.append(self.parse())
        self.expect(TokenKind.RPAREN)
        return FunctionCall(target=left, args=args)


def parse_tokens(tokens: list[Token], config: CalcConfig, source: str = "") -> Expr:
    """Parse the tokens of one statement (ending with EOF) into an AST."""
    return _Parser(tokens, config, source).parse_statement()


def parse_expressions(source: str, config: CalcConfig) -> list[Expr]:
    """
    Parse source text into one AST per statement.

    Raises:
        LexicalError: If tokenization fails.
        CalcSyntaxError: If the token stream is malformed.
        SemanticError: If a non-function is invoked.
    """
    tokens = tokenize(source, config)
    statements = split_statements(tokens, source, config.allow_multiple_expressions)
    return [parse_tokens(statement, config, source) for statement in statements]
