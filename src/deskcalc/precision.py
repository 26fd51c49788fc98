"""
Floating-point correction and number formatting.

IEEE doubles leave visible artifacts (``0.1 + 0.2 == 0.30000000000000004``).
Values are normalized at two boundaries: after every evaluation (12
significant digits) and when formatting for display (15 significant digits,
exponent form for very large or very small magnitudes). Square, square root
and reciprocal results additionally snap to a nearby integer.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal

from deskcalc.config import DEFAULT_CONFIG, CalculatorConfig
from deskcalc.exceptions import InvalidInputError, NumericOverflowError
from deskcalc.validators import validate_number

RESULT_DIGITS = DEFAULT_CONFIG.result_digits
DISPLAY_DIGITS = DEFAULT_CONFIG.display_digits
SNAP_TOLERANCE = DEFAULT_CONFIG.snap_tolerance

_EXPONENT_PADDING = re.compile(r"e([+-])0+(\d)")


def round_to_significant_digits(value: float, digits: int = RESULT_DIGITS) -> float:
    """
    Round to ``digits`` significant digits, whatever the magnitude.

    Zero and non-finite values are returned unchanged. Ties round away
    from zero.

    Example:
        >>> round_to_significant_digits(0.1 + 0.2)
        0.3
        >>> round_to_significant_digits(1.000000000000001)
        1.0
    """
    if value == 0 or not math.isfinite(value):
        return value

    magnitude = math.floor(math.log10(abs(value))) + 1
    # Decimal keeps the scaling exact at the ends of the float range
    quantum = Decimal(1).scaleb(magnitude - digits)
    rounded = Decimal(abs(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return math.copysign(float(rounded), value)


def is_close_to(a: float, b: float, tolerance: float = SNAP_TOLERANCE) -> bool:
    """Whether ``a`` and ``b`` differ by less than ``tolerance``."""
    return abs(a - b) < tolerance


def snap_to_expected(value: float, expected: float, tolerance: float = SNAP_TOLERANCE) -> float:
    """Return ``expected`` when ``value`` is within ``tolerance`` of it, else ``value``."""
    if is_close_to(value, expected, tolerance):
        return expected
    return value


def snap_to_integer(value: float, tolerance: float = SNAP_TOLERANCE) -> float:
    """Snap to the nearest integer when within ``tolerance`` (``8.9999999999991 -> 9``)."""
    if not math.isfinite(value):
        return value
    return snap_to_expected(value, float(round(value)), tolerance)


def strip_trailing_zeros(text: str) -> str:
    """Drop zero padding after the decimal point, and the point itself if nothing remains."""
    if "." not in text or "e" in text.lower():
        return text
    return text.rstrip("0").rstrip(".") or "0"


def format_number(value: float) -> str:
    """
    Canonical positional string for a value kept in calculator state.

    Never uses exponent notation, so the result can be fed back to the
    tokenizer.

    Example:
        >>> format_number(5.0)
        '5'
        >>> format_number(1e-7)
        '0.0000001'
    """
    if not math.isfinite(value):
        return str(value)
    text = strip_trailing_zeros(format(Decimal(repr(float(value))), "f"))
    if text == "-0":
        return "0"
    return text


def precise_sqrt(value: float, tolerance: float = SNAP_TOLERANCE) -> float:
    """
    Square root snapped to a nearby integer.

    Raises:
        InvalidInputError: If value is negative
    """
    validate_number(value)
    if value < 0:
        raise InvalidInputError(value, "Cannot take the square root of a negative number")
    return snap_to_integer(math.sqrt(value), tolerance)


def precise_square(value: float, tolerance: float = SNAP_TOLERANCE) -> float:
    """
    Square snapped to a nearby integer.

    Raises:
        NumericOverflowError: If the square is not finite
    """
    validate_number(value)
    result = value * value
    if math.isinf(result):
        raise NumericOverflowError("square", value)
    return snap_to_integer(result, tolerance)


def format_number_for_unary_op(value: float, config: CalculatorConfig = DEFAULT_CONFIG) -> str:
    """String form of a square, square-root or reciprocal result."""
    rounded = round_to_significant_digits(value, config.display_digits)
    return format_number(snap_to_integer(rounded, config.snap_tolerance))


def _group_thousands(integer_text: str) -> str:
    sign = "-" if integer_text.startswith("-") else ""
    digits = integer_text.lstrip("-") or "0"
    return f"{sign}{int(digits):,}"


def _to_exponential(value: float, fraction_digits: int) -> str:
    return _EXPONENT_PADDING.sub(r"e\1\2", f"{value:.{fraction_digits}e}")


def _fit_to_width(text: str, max_length: int) -> str:
    sign = "-" if text.startswith("-") else ""
    integer_part, _, fraction = text.lstrip("-").partition(".")

    # An entry without integer digits ("0.xxx") gets one extra character
    budget = max_length + 1 if integer_part == "0" else max_length
    if fraction and len(integer_part) + 1 + len(fraction) > budget:
        fraction = fraction[: max(budget - len(integer_part) - 1, 0)].rstrip("0")

    grouped = _group_thousands(sign + integer_part)
    if fraction:
        return f"{grouped}.{fraction}"
    return grouped


def format_for_display(value: str | float | None, config: CalculatorConfig = DEFAULT_CONFIG) -> str:
    """
    Format an entry or a value for the primary readout.

    - An in-progress trailing point is kept (``"12."`` stays ``"12."``).
    - Magnitudes from ``1e15`` up, or below ``1e-6``, use exponent form
      with 11 fraction digits.
    - Everything else is rounded to 15 significant digits, grouped with
      thousands separators and cut to the display width.

    Example:
        >>> format_for_display("1234567.5")
        '1,234,567.5'
        >>> format_for_display(1e15)
        '1.00000000000e+15'
    """
    if value is None or value == "":
        return "0"

    text = value if isinstance(value, str) else format_number(value)
    if text == "-0":
        return "0"

    if text.endswith("."):
        return _group_thousands(text[:-1]) + "."

    try:
        number = float(text)
    except ValueError:
        return text
    if not math.isfinite(number):
        return text

    magnitude = abs(number)
    if magnitude >= config.exponent_upper or (number != 0 and magnitude < config.exponent_lower):
        return _to_exponential(number, config.exponent_fraction_digits)

    rounded = round_to_significant_digits(number, config.display_digits)
    return _fit_to_width(format_number(rounded), config.max_input_length)
