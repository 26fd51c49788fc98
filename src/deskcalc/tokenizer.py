"""Split a flat calculator expression into number and operator tokens."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from deskcalc.exceptions import InvalidExpressionError
from deskcalc.operations import OPERATORS

# Longest leading prefix a lenient float parse would accept
_NUMERIC_PREFIX = re.compile(r"-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")
_LITERAL_CHARS = frozenset("0123456789.")


class TokenKind(str, Enum):
    """Kinds of expression tokens."""

    NUMBER = "number"
    OPERATOR = "operator"


@dataclass(frozen=True)
class Token:
    """A number or one of the operator glyphs ``+ − × ÷``."""

    kind: TokenKind
    value: float | str

    @classmethod
    def number(cls, value: float) -> Token:
        return cls(TokenKind.NUMBER, float(value))

    @classmethod
    def operator(cls, glyph: str) -> Token:
        return cls(TokenKind.OPERATOR, glyph)

    @property
    def is_number(self) -> bool:
        return self.kind is TokenKind.NUMBER

    @property
    def is_operator(self) -> bool:
        return self.kind is TokenKind.OPERATOR


def parse_literal(text: str) -> float:
    """
    Parse a numeric literal leniently, using its longest numeric prefix.

    ``"1.2.3"`` parses as ``1.2``; ``"5."`` as ``5``.

    Raises:
        InvalidExpressionError: If no numeric prefix exists
    """
    match = _NUMERIC_PREFIX.match(text)
    if match is None:
        raise InvalidExpressionError(text, "Malformed number")
    return float(match.group())


def tokenize(expression: str) -> list[Token]:
    """
    Tokenize a flat infix expression.

    An ASCII ``-`` is a sign when it opens the expression or directly
    follows an operator; anywhere else it is subtraction. Spaces and any
    other characters, parentheses included, are dropped.

    Example:
        >>> [t.value for t in tokenize("2 + -3 × 4")]
        [2.0, '+', -3.0, '×', 4.0]
    """
    tokens: list[Token] = []
    buffer = ""

    def flush() -> None:
        nonlocal buffer
        if buffer:
            tokens.append(Token.number(parse_literal(buffer)))
            buffer = ""

    for char in expression:
        if char in OPERATORS:
            flush()
            tokens.append(Token.operator(char))
        elif char == "-":
            if not buffer and (not tokens or tokens[-1].is_operator):
                buffer = char
            else:
                flush()
                tokens.append(Token.operator("−"))
        elif char in _LITERAL_CHARS:
            buffer += char

    flush()
    return tokens
