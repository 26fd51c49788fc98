"""Immutable calculator state records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from deskcalc.precision import format_number


class UnaryOp(str, Enum):
    """Single-operand functions that can be chained."""

    SQRT = "sqrt"
    SQUARE = "square"
    RECIPROCAL = "reciprocal"

    def wrap(self, operand: str) -> str:
        """Trace text for this function applied to ``operand``."""
        return _UNARY_LABELS[self].format(operand)


_UNARY_LABELS = {
    UnaryOp.SQRT: "√({})",
    UnaryOp.SQUARE: "sqr({})",
    UnaryOp.RECIPROCAL: "1/({})",
}


@dataclass(frozen=True)
class HistoryEntry:
    """A completed calculation, recorded on a successful equals."""

    expression: str
    result: float
    timestamp: datetime


@dataclass(frozen=True)
class MemoryEntry:
    """A memory slot; index 0 of the memory list is the most recent."""

    id: int
    value: float
    timestamp: datetime


@dataclass(frozen=True)
class UnaryChain:
    """
    Nested square / square-root / reciprocal applications.

    The trace always re-wraps ``original_value``, so ``sqr`` pressed twice on
    9 reads ``sqr(sqr(9))`` rather than ``sqr(81)``. ``prefix`` is the
    pending binary expression the trace follows, or ``""``.
    """

    original_value: float
    ops: tuple[UnaryOp, ...]
    prefix: str = ""

    def then(self, op: UnaryOp) -> UnaryChain:
        return UnaryChain(self.original_value, (*self.ops, op), self.prefix)

    @property
    def trace(self) -> str:
        text = format_number(self.original_value)
        for op in self.ops:
            text = op.wrap(text)
        return text

    @property
    def expression(self) -> str:
        """Secondary-line text: the pending prefix followed by the trace."""
        if self.prefix:
            return f"{self.prefix} {self.trace}"
        return self.trace


@dataclass(frozen=True)
class CalculatorState:
    """
    Snapshot of the calculator.

    ``current_input`` is the entry being typed (``"0"`` when empty);
    ``expression`` is the committed prefix, empty or ending in a pending
    operator (or in a unary trace while ``chain`` is set). ``history`` and
    ``memory`` survive a clear-all, nothing else does.
    """

    current_input: str = "0"
    expression: str = ""
    error: str | None = None
    history: tuple[HistoryEntry, ...] = ()
    memory: tuple[MemoryEntry, ...] = ()
    last_result: float | None = None
    chain: UnaryChain | None = None
    next_memory_id: int = 1

    @property
    def pending_prefix(self) -> str:
        """The binary expression awaiting an operand, without any unary trace."""
        if self.chain is not None:
            return self.chain.prefix
        return self.expression

    @property
    def has_result(self) -> bool:
        """Whether the entry shows a computed result rather than typed input."""
        return self.last_result is not None and not self.expression


INITIAL_STATE = CalculatorState()
