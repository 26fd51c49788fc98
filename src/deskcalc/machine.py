"""
Calculator state machine.

``reduce(state, action)`` is a pure transition function: it never mutates
``state``, it returns a new ``CalculatorState`` (or the same object when the
action changes nothing). Engine errors are caught here and latched into the
``error`` field; nothing raised by the expression engine escapes.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from deskcalc.actions import ActionType
from deskcalc.config import DEFAULT_CONFIG, CalculatorConfig
from deskcalc.evaluator import evaluate
from deskcalc.exceptions import CalculatorError, DivisionByZeroError
from deskcalc.operations import add, reciprocal, subtract
from deskcalc.percent import calculate_percent
from deskcalc.precision import (
    format_number,
    format_number_for_unary_op,
    precise_sqrt,
    precise_square,
    round_to_significant_digits,
)
from deskcalc.state import CalculatorState, HistoryEntry, MemoryEntry, UnaryChain, UnaryOp
from deskcalc.tokenizer import parse_literal

if TYPE_CHECKING:
    from collections.abc import Callable

    from deskcalc.actions import Action

    Clock = Callable[[], datetime]
    Handler = Callable[[CalculatorState, Action, CalculatorConfig, Clock], CalculatorState]

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Error"

_HANDLERS: dict[ActionType, Handler] = {}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _handles(*action_types: ActionType) -> Callable[[Handler], Handler]:
    def register(handler: Handler) -> Handler:
        for action_type in action_types:
            _HANDLERS[action_type] = handler
        return handler

    return register


def reduce(
    state: CalculatorState,
    action: Action,
    *,
    clock: Clock | None = None,
    config: CalculatorConfig | None = None,
) -> CalculatorState:
    """
    Apply one action to a state.

    Args:
        state: Current state
        action: Action to apply
        clock: Timestamp source for new history and memory entries
        config: Numeric limits (default ``DEFAULT_CONFIG``)

    Returns:
        The next state
    """
    # Latched errors only yield to clear-all or a fresh digit
    if state.error is not None and action.type not in (ActionType.CLEAR_ALL, ActionType.INPUT_DIGIT):
        return state

    handler = _HANDLERS.get(action.type)
    if handler is None:
        logger.debug("Ignoring unknown action %s", action)
        return state
    return handler(state, action, config or DEFAULT_CONFIG, clock or utcnow)


# -- helpers -----------------------------------------------------------------


def _fail(state: CalculatorState, message: str) -> CalculatorState:
    return replace(
        state,
        error=message,
        current_input="0",
        expression="",
        last_result=None,
        chain=None,
    )


def _exceeds_length(candidate: str, config: CalculatorConfig) -> bool:
    unsigned = candidate[1:] if candidate.startswith("-") else candidate
    limit = config.max_input_length
    # No integer digits before the point: the leading zero is free
    if unsigned.startswith("0."):
        limit += 1
    return len(unsigned) > limit


def _start_fresh(state: CalculatorState, entry: str) -> CalculatorState:
    """Drop a showing result or unary chain and begin a new entry."""
    return replace(
        state,
        current_input=entry,
        expression=state.pending_prefix,
        last_result=None,
        chain=None,
    )


def _operands(state: CalculatorState) -> tuple[str, str]:
    """
    Text to evaluate and text to record for the pending calculation.

    While a unary chain is active its value is already the entry, so only
    the chain's prefix is combined with it; the trace is kept for display.
    """
    prefix = state.pending_prefix
    evaluable = f"{prefix} {state.current_input}" if prefix else state.current_input
    shown = state.chain.expression if state.chain is not None else evaluable
    return evaluable, shown


def _entry_value(state: CalculatorState) -> float:
    return parse_literal(state.current_input)


# -- entry -------------------------------------------------------------------


@_handles(ActionType.INPUT_DIGIT)
def _input_digit(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    """Append a digit, replacing a lone zero and honoring the length cap."""
    digit = action.payload

    if state.error is not None:
        return replace(
            state,
            error=None,
            current_input=digit,
            expression="",
            last_result=None,
            chain=None,
        )

    if state.has_result or state.chain is not None:
        return _start_fresh(state, digit)

    current = state.current_input
    sign = "-" if current.startswith("-") else ""
    if current.lstrip("-") == "0":
        if digit == "0":
            return state
        candidate = sign + digit
    else:
        candidate = current + digit

    if _exceeds_length(candidate, config):
        logger.debug("Entry %r is full, dropping %r", current, digit)
        return state
    return replace(state, current_input=candidate)


@_handles(ActionType.INPUT_DOT)
def _input_dot(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    if state.has_result or state.chain is not None:
        return _start_fresh(state, "0.")

    if "." in state.current_input:
        return state

    candidate = state.current_input + "."
    if _exceeds_length(candidate, config):
        return state
    return replace(state, current_input=candidate)


@_handles(ActionType.BACKSPACE)
def _backspace(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    trimmed = state.current_input[:-1]
    if trimmed in ("", "-"):
        trimmed = "0"

    if state.chain is None and not state.has_result and trimmed == state.current_input:
        return state

    # Editing a result or chain value turns it back into typed input
    return replace(
        state,
        current_input=trimmed,
        expression=state.pending_prefix,
        last_result=None if state.has_result or state.chain is not None else state.last_result,
        chain=None,
    )


@_handles(ActionType.NEGATE)
def _negate(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    current = state.current_input
    if current == "0":
        return state

    negated = current[1:] if current.startswith("-") else "-" + current
    if state.chain is not None:
        # The chain ends and its value becomes editable entry
        return replace(
            state,
            current_input=negated,
            expression=state.pending_prefix,
            last_result=None,
            chain=None,
        )
    if state.has_result:
        return replace(state, current_input=negated, last_result=parse_literal(negated))
    return replace(state, current_input=negated)


@_handles(ActionType.CLEAR_ENTRY)
def _clear_entry(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    return replace(
        state,
        current_input="0",
        error=None,
        expression=state.pending_prefix,
        last_result=None if state.has_result else state.last_result,
        chain=None,
    )


@_handles(ActionType.CLEAR_ALL)
def _clear_all(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    return CalculatorState(
        history=state.history,
        memory=state.memory,
        next_memory_id=state.next_memory_id,
    )


# -- binary operators ----------------------------------------------------------


@_handles(ActionType.OPERATOR)
def _operator(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    """Commit the entry with a binary operator, evaluating any pending one first."""
    op = action.payload
    prefix = state.pending_prefix

    if prefix and (state.current_input != "0" or state.chain is not None):
        evaluable, _ = _operands(state)
        try:
            result = evaluate(evaluable, config.result_digits)
        except CalculatorError as e:
            logger.debug("Cannot evaluate %r: %s", evaluable, e)
            return _fail(state, GENERIC_ERROR)
        return replace(
            state,
            current_input="0",
            expression=f"{format_number(result)} {op}",
            last_result=result,
            error=None,
            chain=None,
        )

    if prefix:
        # No operand typed yet: the new operator replaces the pending one
        return replace(state, expression=f"{prefix[:-1]}{op}")

    base = format_number(state.last_result) if state.has_result else state.current_input
    return replace(
        state,
        expression=f"{base} {op}",
        current_input="0",
        last_result=None,
        chain=None,
    )


@_handles(ActionType.EQUALS)
def _equals(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    """Evaluate the pending expression and record it in history."""
    if not state.expression:
        return state

    evaluable, shown = _operands(state)
    try:
        result = evaluate(evaluable, config.result_digits)
    except CalculatorError as e:
        logger.debug("Cannot evaluate %r: %s", evaluable, e)
        message = e.user_message if isinstance(e, DivisionByZeroError) else GENERIC_ERROR
        return _fail(state, message)

    entry = HistoryEntry(expression=shown, result=result, timestamp=clock())
    return replace(
        state,
        current_input=format_number(result),
        expression="",
        last_result=result,
        history=(*state.history, entry),
        error=None,
        chain=None,
    )


# -- unary functions -----------------------------------------------------------

_UNARY_FUNCTIONS: dict[UnaryOp, Callable[[float, CalculatorConfig], float]] = {
    UnaryOp.SQRT: lambda value, config: precise_sqrt(value, config.snap_tolerance),
    UnaryOp.SQUARE: lambda value, config: precise_square(value, config.snap_tolerance),
    UnaryOp.RECIPROCAL: lambda value, config: reciprocal(value),
}

_UNARY_ACTIONS = {
    ActionType.SQRT: UnaryOp.SQRT,
    ActionType.SQUARE: UnaryOp.SQUARE,
    ActionType.RECIPROCAL: UnaryOp.RECIPROCAL,
}


@_handles(*_UNARY_ACTIONS)
def _unary(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    """Apply a square, square root or reciprocal, extending the unary chain."""
    op = _UNARY_ACTIONS[action.type]
    value = _entry_value(state)

    try:
        result = _UNARY_FUNCTIONS[op](value, config)
    except CalculatorError as e:
        logger.debug("Cannot apply %s to %r: %s", op.value, value, e)
        return _fail(state, e.user_message)

    text = format_number_for_unary_op(result, config)
    if state.chain is None:
        chain = UnaryChain(original_value=value, ops=(op,), prefix=state.expression)
    else:
        chain = state.chain.then(op)

    return replace(
        state,
        current_input=text,
        expression=chain.expression,
        last_result=parse_literal(text),
        chain=chain,
    )


@_handles(ActionType.PERCENT)
def _percent(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    """Replace the entry with its percent value relative to the pending expression."""
    prefix = state.pending_prefix
    try:
        value = round_to_significant_digits(
            calculate_percent(prefix, state.current_input), config.result_digits
        )
    except CalculatorError as e:
        logger.debug("Cannot resolve percent of %r: %s", state.current_input, e)
        return _fail(state, GENERIC_ERROR)

    if state.chain is None and not state.has_result:
        return replace(state, current_input=format_number(value))

    return replace(
        state,
        current_input=format_number(value),
        expression=prefix,
        last_result=value,
        chain=None,
    )


# -- history and memory ----------------------------------------------------------


@_handles(ActionType.LOAD_FROM_HISTORY, ActionType.LOAD_FROM_MEMORY)
def _load_value(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    value = action.payload
    return replace(
        state,
        current_input=format_number(value),
        expression="",
        last_result=value,
        error=None,
        chain=None,
    )


@_handles(ActionType.CLEAR_HISTORY)
def _clear_history(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    return replace(state, history=())


def _new_memory_entry(state: CalculatorState, value: float, clock: Clock) -> CalculatorState:
    entry = MemoryEntry(id=state.next_memory_id, value=value, timestamp=clock())
    return replace(state, memory=(entry, *state.memory), next_memory_id=state.next_memory_id + 1)


@_handles(ActionType.MEMORY_STORE)
def _memory_store(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    return _new_memory_entry(state, _entry_value(state), clock)


@_handles(ActionType.MEMORY_RECALL)
def _memory_recall(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    if not state.memory:
        return state
    value = state.memory[0].value
    return replace(
        state,
        current_input=format_number(round_to_significant_digits(value, config.result_digits)),
        expression="",
        last_result=value,
        error=None,
        chain=None,
    )


@_handles(ActionType.MEMORY_ADD, ActionType.MEMORY_SUBTRACT)
def _memory_adjust(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    """Add the entry to, or subtract it from, the most recent memory slot."""
    value = _entry_value(state)
    adding = action.type is ActionType.MEMORY_ADD

    if not state.memory:
        if adding:
            return _new_memory_entry(state, value, clock)
        return state

    top = state.memory[0]
    try:
        updated = (add if adding else subtract)(top.value, value)
    except CalculatorError as e:
        logger.debug("Cannot update memory %r with %r: %s", top.value, value, e)
        return _fail(state, GENERIC_ERROR)

    top = replace(
        top,
        value=round_to_significant_digits(updated, config.result_digits),
        timestamp=clock(),
    )
    return replace(state, memory=(top, *state.memory[1:]))


@_handles(ActionType.MEMORY_CLEAR)
def _memory_clear(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    return replace(state, memory=())


@_handles(ActionType.MEMORY_ITEM_CLEAR)
def _memory_item_clear(
    state: CalculatorState, action: Action, config: CalculatorConfig, clock: Clock
) -> CalculatorState:
    return replace(state, memory=tuple(entry for entry in state.memory if entry.id != action.payload))
