"""Unit tests for floating-point correction and formatting."""

import math

import pytest

from deskcalc import (
    CalculatorConfig,
    InvalidInputError,
    NumericOverflowError,
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


class TestRoundToSignificantDigits:
    """Tests for round_to_significant_digits."""

    def test_fixes_addition_artifact(self):
        assert round_to_significant_digits(0.1 + 0.2) == 0.3

    def test_small_numbers(self):
        assert round_to_significant_digits(0.000000000000001) == 1e-15

    def test_drops_noise_beyond_twelve_digits(self):
        assert round_to_significant_digits(1.000000000000001) == 1

    def test_keeps_meaningful_digits(self):
        assert round_to_significant_digits(1.23456789) == 1.23456789

    def test_negative_values(self):
        assert round_to_significant_digits(-0.1 - 0.2) == -0.3

    def test_custom_digits(self):
        assert round_to_significant_digits(123456, 2) == 120000
        assert round_to_significant_digits(0.012345, 3) == 0.0123

    def test_ties_round_away_from_zero(self):
        assert round_to_significant_digits(2.5, 1) == 3
        assert round_to_significant_digits(-2.5, 1) == -3

    @pytest.mark.parametrize("value", [0.0, math.inf, -math.inf])
    def test_zero_and_infinite_unchanged(self, value):
        assert round_to_significant_digits(value) == value

    def test_nan_unchanged(self):
        assert math.isnan(round_to_significant_digits(math.nan))

    def test_extreme_magnitudes(self):
        assert round_to_significant_digits(1e-300) == 1e-300
        assert round_to_significant_digits(1.5e300) == 1.5e300


class TestSnapping:
    """Tests for is_close_to, snap_to_expected and snap_to_integer."""

    def test_is_close_to(self):
        assert is_close_to(9, 8.9999999999991)
        assert is_close_to(3, 3.0000000000000004)
        assert not is_close_to(5, 5.1)

    def test_snap_to_expected(self):
        assert snap_to_expected(8.9999999999991, 9) == 9
        assert snap_to_expected(2.9999999999999996, 3) == 3
        assert snap_to_expected(5.1, 5) == 5.1

    def test_snap_to_integer(self):
        assert snap_to_integer(8.9999999999991) == 9
        assert snap_to_integer(0.5) == 0.5
        assert snap_to_integer(-4.00000000000001) == -4

    def test_snap_to_integer_leaves_infinity(self):
        assert snap_to_integer(math.inf) == math.inf


class TestPreciseRoots:
    """Tests for precise_sqrt and precise_square."""

    @pytest.mark.parametrize("square, root", [(9, 3), (16, 4), (25, 5), (0, 0), (1, 1)])
    def test_perfect_squares(self, square, root):
        assert precise_sqrt(square) == root
        assert precise_square(root) == square

    def test_sqrt_of_negative_raises(self):
        with pytest.raises(InvalidInputError):
            precise_sqrt(-4)

    def test_square_overflow_raises(self):
        with pytest.raises(NumericOverflowError):
            precise_square(1e200)

    def test_repeated_sqrt_then_square(self):
        value = 9.0
        for _ in range(8):
            value = precise_sqrt(value)
        for _ in range(8):
            value = precise_square(value)
        assert is_close_to(value, 9)
        assert format_number_for_unary_op(value) == "9"

    @pytest.mark.parametrize("n", range(1, 11))
    def test_repeated_square_then_sqrt(self, n):
        value = float(n)
        for _ in range(8):
            value = precise_square(value)
        for _ in range(8):
            value = precise_sqrt(value)
        assert is_close_to(value, n)
        assert format_number_for_unary_op(value) == str(n)


class TestFormatNumber:
    """Tests for strip_trailing_zeros, format_number and format_number_for_unary_op."""

    @pytest.mark.parametrize(
        "text, expected",
        [("1.500", "1.5"), ("2.000", "2"), ("10", "10"), (".000", "0"), ("1.5e-07", "1.5e-07")],
    )
    def test_strip_trailing_zeros(self, text, expected):
        assert strip_trailing_zeros(text) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            (5.0, "5"),
            (0.25, "0.25"),
            (-0.0, "0"),
            (-12.5, "-12.5"),
            (1e-7, "0.0000001"),
            (1e21, "1000000000000000000000"),
        ],
    )
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            (8.9999999999991, "9"),
            (2.9999999999999996, "3"),
            (3.0000000000000004, "3"),
            (0.25, "0.25"),
            (1 / 3, "0.333333333333333"),
        ],
    )
    def test_format_number_for_unary_op(self, value, expected):
        assert format_number_for_unary_op(value) == expected


class TestFormatForDisplay:
    """Tests for format_for_display."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (123, "123"),
            (123.45, "123.45"),
            (0.001, "0.001"),
            (1000000, "1,000,000"),
            ("-1234.5", "-1,234.5"),
        ],
    )
    def test_plain_values(self, value, expected):
        assert format_for_display(value) == expected

    def test_empty_values(self):
        assert format_for_display("") == "0"
        assert format_for_display(None) == "0"
        assert format_for_display("-0") == "0"

    def test_trailing_point_preserved(self):
        assert format_for_display("12.") == "12."
        assert format_for_display("1234.") == "1,234."
        assert format_for_display("0.") == "0."

    def test_large_numbers_use_exponent(self):
        assert format_for_display(1e15) == "1.00000000000e+15"

    def test_small_numbers_use_exponent(self):
        assert format_for_display(1e-10) == "1.00000000000e-10"
        assert format_for_display(1e-7) == "1.00000000000e-7"

    def test_rounds_to_fifteen_digits(self):
        assert format_for_display("0.30000000000000004") == "0.3"

    def test_truncates_long_fraction(self):
        assert format_for_display("123456789.123456789") == "123,456,789.123457"

    def test_fraction_without_integer_digits_gets_extra_character(self):
        assert format_for_display("0.1234567890123456") == "0.123456789012346"

    def test_non_numeric_text_is_returned(self):
        assert format_for_display("Error") == "Error"

    def test_custom_config(self):
        config = CalculatorConfig(exponent_upper=1e6)
        assert format_for_display(2e6, config) == "2.00000000000e+6"
