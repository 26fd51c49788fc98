"""Custom exceptions for the calculator engine."""

from typing import Any


class CalculatorError(Exception):
    """Base exception for all calculator errors."""

    #: Text shown on the calculator readout when this error latches.
    user_message = "Error"

    def __init__(self, message: str, value: Any = None) -> None:
        self.message = message
        self.value = value
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.message}: {self.value}"
        return self.message


class DivisionByZeroError(CalculatorError):
    """Raised when dividing by zero, including the reciprocal of zero."""

    user_message = "Cannot divide by zero"

    def __init__(self, numerator: float) -> None:
        super().__init__("Division by zero", numerator)
        self.numerator = numerator


class NumericOverflowError(CalculatorError):
    """Raised when a calculation leaves the finite float range."""

    def __init__(self, operation: str, *operands: float) -> None:
        super().__init__(f"Overflow in {operation}", operands)
        self.operation = operation
        self.operands = operands


class InvalidInputError(CalculatorError):
    """Raised when an operand or payload is invalid (NaN, Inf, wrong type, sqrt of a negative)."""

    user_message = "Invalid input"

    def __init__(self, value: Any, reason: str = "invalid input") -> None:
        super().__init__(reason, value)
        self.reason = reason


class InvalidExpressionError(CalculatorError):
    """Raised when an expression cannot be reduced to a single value."""

    def __init__(self, expression: Any, reason: str = "Invalid expression") -> None:
        super().__init__(reason, expression)
        self.expression = expression
        self.reason = reason


class OutOfRangeError(CalculatorError):
    """Raised when a configuration value is outside its acceptable range."""

    def __init__(
        self, value: float, min_val: float | None = None, max_val: float | None = None
    ) -> None:
        range_str = f"[{min_val}, {max_val}]"
        super().__init__(f"Value out of range {range_str}", value)
        self.min_val = min_val
        self.max_val = max_val
