"""Calculator class holding the current state and dispatching actions to the reducer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from deskcalc.actions import from_key
from deskcalc.config import DEFAULT_CONFIG, CalculatorConfig
from deskcalc.machine import reduce
from deskcalc.precision import format_for_display
from deskcalc.state import INITIAL_STATE, CalculatorState

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from deskcalc.actions import Action
    from deskcalc.state import HistoryEntry, MemoryEntry

logger = logging.getLogger(__name__)


class Calculator:
    """
    A desk calculator driven by key-press actions.

    The state itself is immutable; every dispatch replaces it with the
    reducer's output. History and memory are kept in memory only.

    Example:
        >>> calc = Calculator()
        >>> calc.press("0", ".", "1", "+", "0", ".", "2", "=").display
        '0.3'
        >>> calc.history[-1].expression
        '0.1 + 0.2'
    """

    def __init__(
        self,
        config: CalculatorConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        state: CalculatorState = INITIAL_STATE,
    ) -> None:
        """
        Initialize calculator.

        Args:
            config: Numeric limits (default ``DEFAULT_CONFIG``)
            clock: Timestamp source for history and memory entries
            state: Starting state (default the initial state)
        """
        self._config = config or DEFAULT_CONFIG
        self._clock = clock
        self._state = state

    @property
    def state(self) -> CalculatorState:
        """Current state snapshot."""
        return self._state

    @property
    def display(self) -> str:
        """Primary readout: the latched error, or the formatted entry."""
        if self._state.error is not None:
            return self._state.error
        return format_for_display(self._state.current_input, self._config)

    @property
    def expression(self) -> str:
        """Secondary readout: the pending expression."""
        return self._state.expression

    @property
    def history(self) -> list[HistoryEntry]:
        """Completed calculations, oldest first."""
        return list(self._state.history)

    @property
    def memory(self) -> list[MemoryEntry]:
        """Memory slots, most recently stored first."""
        return list(self._state.memory)

    def dispatch(self, action: Action) -> Calculator:
        """Apply an action and return self for chaining."""
        logger.debug("Dispatching %s", action)
        self._state = reduce(self._state, action, clock=self._clock, config=self._config)
        return self

    def press(self, *keys: str) -> Calculator:
        """
        Dispatch keypad labels in order.

        Digits, ``.``, the operators (``+ − × ÷`` or ``- * /``), ``=``,
        ``C``, ``CE``, ``⌫``, ``±``, ``√``, ``x²``, ``1/x``, ``%`` and the
        memory keys ``MS MR M+ M- MC``.

        Raises:
            InvalidInputError: If a label is not a calculator key
        """
        for key in keys:
            self.dispatch(from_key(key))
        return self

    def history_newest_first(self) -> list[HistoryEntry]:
        """History sorted by timestamp, newest first."""
        return sorted(reversed(self._state.history), key=lambda entry: entry.timestamp, reverse=True)

    def memory_newest_first(self) -> list[MemoryEntry]:
        """Memory sorted by timestamp, most recently touched first."""
        return sorted(self._state.memory, key=lambda entry: entry.timestamp, reverse=True)

    def copy(self) -> Calculator:
        """Create an independent copy of this calculator."""
        return Calculator(self._config, self._clock, self._state)

    def __repr__(self) -> str:
        return (
            f"Calculator(display={self.display!r}, expression={self.expression!r}, "
            f"history_len={len(self._state.history)}, memory_len={len(self._state.memory)})"
        )
