"""
Recursive descent parser that evaluates arithmetic while it parses.

Grammar (precedence low to high):
    expr    → term (("+" | "-") term)*
    term    → factor (("*" | "/") factor)*
    factor  → unary ("^" factor)?
    unary   → ("+" | "-")* primary
    primary → NUMBER | "(" expr ")"

"^" is right-associative and binds to the signed operand, so -3^2 is (-3)^2.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from calculator.tokenizer import Token, TokenType, is_empty, tokenize, untokenize

logger = logging.getLogger(__name__)


@dataclass
class ParserError(Exception):
    errmsg: str
    tokens: list[Token]
    error_token_idx: int

    def __str__(self) -> str:
        parsed_code = untokenize(self.tokens[: self.error_token_idx])
        filler_whitespace = " " * (len(parsed_code) + 1 if parsed_code else 0)
        return "\n".join([f"Parser error: {self.errmsg}", untokenize(self.tokens), filler_whitespace + "^"])


class MalformedNumberError(ParserError):
    pass


class UnexpectedTokenError(ParserError):
    pass


class UnclosedGroupError(ParserError):
    pass


def _describe(token: Token) -> str:
    if token.type is TokenType.EXPR_END:
        return "end of input"
    return repr(token.lexeme)


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and x % 2 == 1


def _divide(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # math.pow raises where IEEE pow returns a pole or NaN
        if base == 0:
            return math.copysign(math.inf, base) if _is_odd_integer(exponent) else math.inf
        return math.nan


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def parse(self) -> float:
        value = self.expr()
        if self.current.type is not TokenType.EXPR_END:
            raise UnexpectedTokenError(
                f"Unexpected {_describe(self.current)} after expression",
                tokens=self.tokens,
                error_token_idx=self.pos,
            )
        return value

    def expr(self) -> float:
        left = self.term()
        while self.current.type in (TokenType.PLUS, TokenType.MINUS):
            operator = self.advance().type
            right = self.term()
            if operator is TokenType.PLUS:
                left = left + right
            else:
                left = left - right
        return left

    def term(self) -> float:
        left = self.factor()
        while self.current.type in (TokenType.STAR, TokenType.SLASH):
            operator = self.advance().type
            right = self.factor()
            if operator is TokenType.STAR:
                left = left * right
            else:
                left = _divide(left, right)
        return left

    def factor(self) -> float:
        left = self.unary()
        if self.current.type is TokenType.CARET:
            self.advance()
            right = self.factor()
            return _power(left, right)
        return left

    def unary(self) -> float:
        sign = 1.0
        while self.current.type in (TokenType.PLUS, TokenType.MINUS):
            if self.advance().type is TokenType.MINUS:
                sign = -sign
        return sign * self.primary()

    def primary(self) -> float:
        tok = self.current
        if tok.type is TokenType.NUMBER:
            try:
                value = tok.value
            except ValueError:
                raise MalformedNumberError(
                    f"Malformed number {tok.lexeme!r}", tokens=self.tokens, error_token_idx=self.pos
                ) from None
            self.advance()
            return value
        elif tok.type is TokenType.BRACKET_OPEN:
            open_bracket_idx = self.pos
            self.advance()
            value = self.expr()
            if self.current.type is TokenType.BRACKET_CLOSE:
                self.advance()
                return value
            elif self.current.type is TokenType.EXPR_END:
                raise UnclosedGroupError("Unclosed bracket", tokens=self.tokens, error_token_idx=open_bracket_idx)
            else:
                raise UnexpectedTokenError(
                    f"')' expected, found {_describe(self.current)}", tokens=self.tokens, error_token_idx=self.pos
                )
        else:
            raise UnexpectedTokenError(
                f"Operand expected, found {_describe(tok)}", tokens=self.tokens, error_token_idx=self.pos
            )


def parse(tokens: list[Token]) -> float:
    """Evaluate a token list produced by tokenize(); raises ParserError on malformed input"""
    if not tokens or tokens[-1].type is not TokenType.EXPR_END:
        raise ParserError("Internal error, token list is not terminated", tokens=tokens, error_token_idx=len(tokens))
    parser = _Parser(tokens)
    try:
        return parser.parse()
    except RecursionError:
        raise ParserError("Expression is nested too deeply", tokens=tokens, error_token_idx=parser.pos) from None


def evaluate(code: str) -> Optional[float]:
    """Tokenize and evaluate one line; None when there is nothing to evaluate"""
    tokens = tokenize(code)
    logger.debug("Tokens: %s", " ".join(str(t) for t in tokens))
    if is_empty(tokens):
        return None
    result = parse(tokens)
    logger.debug("Result: %r", result)
    return result
