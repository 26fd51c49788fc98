"""Infix to postfix conversion (shunting-yard)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from deskcalc.operations import PRECEDENCE

if TYPE_CHECKING:
    from collections.abc import Iterable

    from deskcalc.tokenizer import Token


def to_postfix(tokens: Iterable[Token]) -> list[Token]:
    """
    Reorder infix tokens into RPN.

    There are no grouping tokens, so only precedence and left
    associativity decide the order: ``2 + 3 × 4`` becomes ``2 3 4 × +``.
    """
    output: list[Token] = []
    operators: list[Token] = []

    for token in tokens:
        if token.is_number:
            output.append(token)
            continue
        while operators and PRECEDENCE[operators[-1].value] >= PRECEDENCE[token.value]:
            output.append(operators.pop())
        operators.append(token)

    output.extend(reversed(operators))
    return output
