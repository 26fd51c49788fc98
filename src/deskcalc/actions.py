"""Key-press actions understood by the state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from deskcalc.exceptions import InvalidInputError
from deskcalc.validators import validate_digit, validate_number, validate_operator


class ActionType(str, Enum):
    """Action vocabulary."""

    INPUT_DIGIT = "INPUT_DIGIT"
    INPUT_DOT = "INPUT_DOT"
    OPERATOR = "OPERATOR"
    EQUALS = "EQUALS"
    CLEAR_ALL = "CLEAR_ALL"
    CLEAR_ENTRY = "CLEAR_ENTRY"
    BACKSPACE = "BACKSPACE"
    NEGATE = "NEGATE"
    SQRT = "SQRT"
    SQUARE = "SQUARE"
    RECIPROCAL = "RECIPROCAL"
    PERCENT = "PERCENT"
    LOAD_FROM_HISTORY = "LOAD_FROM_HISTORY"
    CLEAR_HISTORY = "CLEAR_HISTORY"
    MEMORY_ADD = "MEMORY_ADD"
    MEMORY_SUBTRACT = "MEMORY_SUBTRACT"
    MEMORY_STORE = "MEMORY_STORE"
    MEMORY_RECALL = "MEMORY_RECALL"
    MEMORY_CLEAR = "MEMORY_CLEAR"
    MEMORY_ITEM_CLEAR = "MEMORY_ITEM_CLEAR"
    LOAD_FROM_MEMORY = "LOAD_FROM_MEMORY"


@dataclass(frozen=True)
class Action:
    """An action and its optional payload."""

    type: ActionType
    payload: Any = None

    def __str__(self) -> str:
        if self.payload is None:
            return self.type.value
        return f"{self.type.value}({self.payload!r})"


def input_digit(digit: str) -> Action:
    return Action(ActionType.INPUT_DIGIT, validate_digit(digit))


def input_dot() -> Action:
    return Action(ActionType.INPUT_DOT)


def operator(op: str) -> Action:
    """Binary operator key; ASCII ``-``, ``*`` and ``/`` are normalized to glyphs."""
    return Action(ActionType.OPERATOR, validate_operator(op))


def equals() -> Action:
    return Action(ActionType.EQUALS)


def clear_all() -> Action:
    return Action(ActionType.CLEAR_ALL)


def clear_entry() -> Action:
    return Action(ActionType.CLEAR_ENTRY)


def backspace() -> Action:
    return Action(ActionType.BACKSPACE)


def negate() -> Action:
    return Action(ActionType.NEGATE)


def sqrt() -> Action:
    return Action(ActionType.SQRT)


def square() -> Action:
    return Action(ActionType.SQUARE)


def reciprocal() -> Action:
    return Action(ActionType.RECIPROCAL)


def percent() -> Action:
    return Action(ActionType.PERCENT)


def load_from_history(value: float) -> Action:
    return Action(ActionType.LOAD_FROM_HISTORY, float(validate_number(value)))


def clear_history() -> Action:
    return Action(ActionType.CLEAR_HISTORY)


def memory_add() -> Action:
    return Action(ActionType.MEMORY_ADD)


def memory_subtract() -> Action:
    return Action(ActionType.MEMORY_SUBTRACT)


def memory_store() -> Action:
    return Action(ActionType.MEMORY_STORE)


def memory_recall() -> Action:
    return Action(ActionType.MEMORY_RECALL)


def memory_clear() -> Action:
    return Action(ActionType.MEMORY_CLEAR)


def memory_item_clear(entry_id: int) -> Action:
    return Action(ActionType.MEMORY_ITEM_CLEAR, entry_id)


def load_from_memory(value: float) -> Action:
    return Action(ActionType.LOAD_FROM_MEMORY, float(validate_number(value)))


# Keypad labels accepted by Calculator.press()
KEYS = {
    ".": input_dot,
    "=": equals,
    "C": clear_all,
    "CE": clear_entry,
    "⌫": backspace,
    "±": negate,
    "√": sqrt,
    "x²": square,
    "1/x": reciprocal,
    "%": percent,
    "MS": memory_store,
    "MR": memory_recall,
    "M+": memory_add,
    "M-": memory_subtract,
    "MC": memory_clear,
}


def from_key(key: str) -> Action:
    """
    Map a keypad label to its action.

    Raises:
        InvalidInputError: If the label is not a calculator key
    """
    if key in KEYS:
        return KEYS[key]()
    if len(key) == 1 and key.isascii() and key.isdigit():
        return input_digit(key)
    try:
        return operator(key)
    except InvalidInputError:
        raise InvalidInputError(key, "Unknown key") from None
