"""Binary arithmetic for the four calculator operators, with overflow protection."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from deskcalc.exceptions import DivisionByZeroError, InvalidExpressionError, NumericOverflowError
from deskcalc.validators import validate_number

if TYPE_CHECKING:
    from collections.abc import Callable

# Threshold for overflow detection
OVERFLOW_THRESHOLD = 1e307

ADD = "+"
SUBTRACT = "−"
MULTIPLY = "×"
DIVIDE = "÷"


def add(a: float, b: float) -> float:
    """
    Add two numbers with overflow protection.

    Raises:
        InvalidInputError: If inputs are invalid
        NumericOverflowError: If result would overflow
    """
    validate_number(a)
    validate_number(b)

    result = a + b

    if math.isinf(result):
        raise NumericOverflowError("addition", a, b)

    return result


def subtract(a: float, b: float) -> float:
    """
    Subtract b from a with overflow protection.

    Raises:
        InvalidInputError: If inputs are invalid
        NumericOverflowError: If result would overflow
    """
    validate_number(a)
    validate_number(b)

    result = a - b

    if math.isinf(result):
        raise NumericOverflowError("subtraction", a, b)

    return result


def multiply(a: float, b: float) -> float:
    """
    Multiply two numbers with overflow protection.

    Raises:
        InvalidInputError: If inputs are invalid
        NumericOverflowError: If result would overflow
    """
    validate_number(a)
    validate_number(b)

    # Check for potential overflow before computing
    if a != 0 and b != 0 and abs(a) > OVERFLOW_THRESHOLD / abs(b):
        raise NumericOverflowError("multiplication", a, b)

    result = a * b

    if math.isinf(result):
        raise NumericOverflowError("multiplication", a, b)

    return result


def divide(a: float, b: float) -> float:
    """
    Divide a by b with zero and overflow protection.

    Raises:
        InvalidInputError: If inputs are invalid
        DivisionByZeroError: If b is zero
        NumericOverflowError: If result would overflow
    """
    validate_number(a)
    validate_number(b)

    if b == 0:
        raise DivisionByZeroError(a)

    result = a / b

    if math.isinf(result):
        raise NumericOverflowError("division", a, b)

    return result


def reciprocal(value: float) -> float:
    """Return ``1 / value``; zero raises DivisionByZeroError."""
    return divide(1.0, value)


# Glyph -> implementation, in keypad order
OPERATORS: dict[str, Callable[[float, float], float]] = {
    ADD: add,
    SUBTRACT: subtract,
    MULTIPLY: multiply,
    DIVIDE: divide,
}

# Both tiers are left-associative
PRECEDENCE = {
    ADD: 1,
    SUBTRACT: 1,
    MULTIPLY: 2,
    DIVIDE: 2,
}


def apply_operator(glyph: str, a: float, b: float) -> float:
    """
    Compute ``a <glyph> b``.

    Raises:
        InvalidExpressionError: If glyph is not an operator
    """
    try:
        operation = OPERATORS[glyph]
    except KeyError:
        raise InvalidExpressionError(glyph, "Unknown operator") from None
    return operation(a, b)
