"""Contextual percent: ``50 + 10%`` means ten percent of 50."""

from __future__ import annotations

import re

from deskcalc.exceptions import InvalidExpressionError
from deskcalc.operations import DIVIDE, MULTIPLY, OPERATORS
from deskcalc.tokenizer import parse_literal

_OPERATOR_SPLIT = re.compile("[" + "".join(OPERATORS) + "]")


def _lenient_float(text: str) -> float:
    """Lenient parse; text without a numeric prefix reads as 0."""
    try:
        return parse_literal(text.strip())
    except InvalidExpressionError:
        return 0.0


def calculate_percent(expression: str, current_entry: str) -> float:
    """
    Resolve the percent key against the pending expression.

    - No pending operator: ``entry / 100``.
    - Pending ``×`` or ``÷``: ``entry / 100``, a plain percentage factor.
    - Pending ``+`` or ``−``: ``previous * entry / 100``, where previous is
      the operand just before that operator.

    Example:
        >>> calculate_percent("50 +", "10")
        5.0
        >>> calculate_percent("200 ×", "10")
        0.1
    """
    entry = _lenient_float(current_entry)
    fraction = entry / 100

    if not expression or not expression.strip():
        return fraction

    position = max(expression.rfind(glyph) for glyph in OPERATORS)
    if position < 0:
        return fraction

    operator = expression[position]
    if operator in (MULTIPLY, DIVIDE):
        return fraction

    previous = _lenient_float(_OPERATOR_SPLIT.split(expression[:position])[-1])
    return previous * fraction
