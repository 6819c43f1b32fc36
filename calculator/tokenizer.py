import enum
import logging
import string
from dataclasses import dataclass

from calculator.utils import PrintableEnum

logger = logging.getLogger(__name__)


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    CARET = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    EXPR_END = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str

    @property
    def value(self) -> float:
        """Float value of a NUMBER token; raises ValueError for malformed literals like '1..2'"""
        if self.type is not TokenType.NUMBER:
            raise TypeError(f"{self.type} token has no numeric value")
        return float(self.lexeme)

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


def _is_valid_in_number(s: str) -> bool:
    return s in string.digits or s == "."


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}

OPERAND_END_TOKENS = {TokenType.NUMBER, TokenType.BRACKET_CLOSE}


def _starts_operand(s: str) -> bool:
    return s == "(" or _is_valid_in_number(s)


def tokenize(code: str) -> list[Token]:
    """Split a line into tokens. Never fails: unknown characters are skipped.

    Adjacent operands get an explicit multiplication between them, so
    "2(3+4)", "2 3" and "(1)(2)" all read as products.
    """
    i = 0
    tokens: list[Token] = []
    while i < len(code):
        if tokens and tokens[-1].type in OPERAND_END_TOKENS and _starts_operand(code[i]):
            tokens.append(Token(type=TokenType.STAR, lexeme="*"))

        if _is_valid_in_number(code[i]):
            number_end_idx = i + 1
            while number_end_idx < len(code) and _is_valid_in_number(code[number_end_idx]):
                number_end_idx += 1
            tokens.append(Token(type=TokenType.NUMBER, lexeme=code[i:number_end_idx]))
            i = number_end_idx - 1  # to account for += 1 later
        elif code[i] in SINGLE_CHAR_TOKENS:
            tokens.append(Token(type=SINGLE_CHAR_TOKENS[code[i]], lexeme=code[i]))
        elif code[i].isspace():
            pass
        else:
            logger.debug("Skipping unrecognized character %r at %d", code[i], i)
        i += 1

    tokens.append(Token(type=TokenType.EXPR_END, lexeme=""))
    return tokens


def is_empty(tokens: list[Token]) -> bool:
    return len(tokens) == 1 and tokens[0].type is TokenType.EXPR_END


def untokenize(tokens: list[Token]) -> str:
    # 2(3+4) => 2 * ( 3 + 4 )
    return " ".join(t.lexeme for t in tokens if t.lexeme)
