"""Unit tests for the tokenizer."""

import pytest

from deskcalc import InvalidExpressionError, Token, TokenKind, tokenize
from deskcalc.tokenizer import parse_literal


def values(expression):
    return [token.value for token in tokenize(expression)]


class TestTokenize:
    """Tests for tokenize."""

    def test_single_number(self):
        assert tokenize("123") == [Token.number(123)]

    def test_decimal_number(self):
        assert tokenize("12.34") == [Token(TokenKind.NUMBER, 12.34)]

    @pytest.mark.parametrize("glyph", ["+", "−", "×", "÷"])
    def test_operator_glyphs(self, glyph):
        assert tokenize(glyph) == [Token.operator(glyph)]

    def test_expression_with_spaces(self):
        assert values("2 + 3 × 4") == [2.0, "+", 3.0, "×", 4.0]

    def test_spaces_are_ignored(self):
        assert values("2+3") == values("2 + 3")

    def test_leading_minus_is_sign(self):
        assert tokenize("-5") == [Token.number(-5)]

    def test_minus_after_operator_is_sign(self):
        assert values("5 × -2") == [5.0, "×", -2.0]

    def test_hyphen_after_number_is_subtraction(self):
        assert values("5 -3") == [5.0, "−", 3.0]

    def test_parentheses_are_dropped(self):
        assert values("(2 + 3)") == [2.0, "+", 3.0]

    def test_parenthesized_negative_operand(self):
        assert values("5 + (-3)") == [5.0, "+", -3.0]

    def test_unknown_characters_are_dropped(self):
        assert values("sqr(9)") == [9.0]

    def test_trailing_point_is_flushed(self):
        assert values("5 + 0.") == [5.0, "+", 0.0]

    def test_malformed_literal_uses_numeric_prefix(self):
        assert values("1.2.3") == [1.2]

    def test_empty_expression(self):
        assert tokenize("") == []

    def test_lone_sign_is_invalid(self):
        with pytest.raises(InvalidExpressionError):
            tokenize("5 × -")

    def test_token_kind_helpers(self):
        number, operator = tokenize("1 +")
        assert number.is_number and not number.is_operator
        assert operator.is_operator and not operator.is_number


class TestParseLiteral:
    """Tests for parse_literal."""

    def test_plain(self):
        assert parse_literal("42") == 42.0

    def test_negative(self):
        assert parse_literal("-0.5") == -0.5

    def test_leading_point(self):
        assert parse_literal(".5") == 0.5

    def test_trailing_point(self):
        assert parse_literal("7.") == 7.0

    @pytest.mark.parametrize("text", ["", "-", ".", "abc"])
    def test_rejects_non_numeric(self, text):
        with pytest.raises(InvalidExpressionError):
            parse_literal(text)
