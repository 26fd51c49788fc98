"""
Desk calculator engine.

- Flat expression evaluation: tokenizer, shunting-yard precedence resolver,
  RPN evaluator and contextual percent
- Floating-point correction and display formatting
- A pure key-press state machine with history and memory, and a small
  stateful ``Calculator`` wrapper around it
"""

import logging

from deskcalc import actions
from deskcalc.actions import Action, ActionType
from deskcalc.config import DEFAULT_CONFIG, CalculatorConfig
from deskcalc.core import Calculator
from deskcalc.evaluator import evaluate, evaluate_rpn
from deskcalc.exceptions import (
    CalculatorError,
    DivisionByZeroError,
    InvalidExpressionError,
    InvalidInputError,
    NumericOverflowError,
    OutOfRangeError,
)
from deskcalc.log import configure_logging
from deskcalc.machine import reduce
from deskcalc.percent import calculate_percent
from deskcalc.precision import (
    format_for_display,
    format_number,
    format_number_for_unary_op,
    is_close_to,
    precise_sqrt,
    precise_square,
    round_to_significant_digits,
    snap_to_expected,
    snap_to_integer,
    strip_trailing_zeros,
)
from deskcalc.shunting_yard import to_postfix
from deskcalc.state import (
    INITIAL_STATE,
    CalculatorState,
    HistoryEntry,
    MemoryEntry,
    UnaryChain,
    UnaryOp,
)
from deskcalc.tokenizer import Token, TokenKind, tokenize

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_CONFIG",
    "INITIAL_STATE",
    "Action",
    "ActionType",
    "Calculator",
    "CalculatorConfig",
    "CalculatorError",
    "CalculatorState",
    "DivisionByZeroError",
    "HistoryEntry",
    "InvalidExpressionError",
    "InvalidInputError",
    "MemoryEntry",
    "NumericOverflowError",
    "OutOfRangeError",
    "Token",
    "TokenKind",
    "UnaryChain",
    "UnaryOp",
    "actions",
    "calculate_percent",
    "configure_logging",
    "evaluate",
    "evaluate_rpn",
    "format_for_display",
    "format_number",
    "format_number_for_unary_op",
    "is_close_to",
    "precise_sqrt",
    "precise_square",
    "reduce",
    "round_to_significant_digits",
    "snap_to_expected",
    "snap_to_integer",
    "strip_trailing_zeros",
    "to_postfix",
    "tokenize",
]

__version__ = "0.1.0"
