"""Evaluate flat infix expressions: tokenize, reorder to RPN, run a value stack."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from deskcalc.exceptions import InvalidExpressionError
from deskcalc.operations import apply_operator
from deskcalc.precision import RESULT_DIGITS, round_to_significant_digits
from deskcalc.shunting_yard import to_postfix
from deskcalc.tokenizer import tokenize

if TYPE_CHECKING:
    from collections.abc import Iterable

    from deskcalc.tokenizer import Token

logger = logging.getLogger(__name__)


def evaluate_rpn(tokens: Iterable[Token]) -> float:
    """
    Evaluate postfix tokens with an explicit value stack.

    Raises:
        DivisionByZeroError: On division by zero
        NumericOverflowError: If an intermediate result is not finite
        InvalidExpressionError: If an operator lacks operands or more than
            one value is left over
    """
    stack: list[float] = []

    for token in tokens:
        if token.is_number:
            stack.append(token.value)
            continue
        if len(stack) < 2:
            raise InvalidExpressionError(token.value, "Operator is missing an operand")
        b = stack.pop()
        a = stack.pop()
        stack.append(apply_operator(token.value, a, b))

    if len(stack) != 1:
        raise InvalidExpressionError(stack, "Invalid expression")

    return stack[0]


def evaluate(expression: str, digits: int = RESULT_DIGITS) -> float:
    """
    Evaluate a flat expression with ``×``/``÷`` binding tighter than ``+``/``−``.

    The result is rounded to ``digits`` significant digits. An empty
    expression evaluates to ``0``.

    Example:
        >>> evaluate("2 + 3 × 4")
        14.0
        >>> evaluate("0.1 + 0.2")
        0.3
    """
    tokens = tokenize(expression)

    if not tokens:
        return 0.0

    if len(tokens) == 1 and tokens[0].is_number:
        return round_to_significant_digits(tokens[0].value, digits)

    result = evaluate_rpn(to_postfix(tokens))
    logger.debug("Evaluated %r = %r", expression, result)
    return round_to_significant_digits(result, digits)
