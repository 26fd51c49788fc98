"""Unit tests for action constructors and keypad mapping."""

import pytest

from deskcalc import Action, ActionType, InvalidInputError, actions


class TestConstructors:
    """Tests for the action constructors."""

    def test_input_digit(self):
        assert actions.input_digit("7") == Action(ActionType.INPUT_DIGIT, "7")

    def test_input_digit_validates(self):
        with pytest.raises(InvalidInputError):
            actions.input_digit("x")

    def test_operator_normalizes_aliases(self):
        assert actions.operator("*").payload == "×"
        assert actions.operator("-").payload == "−"

    def test_load_values_must_be_finite(self):
        with pytest.raises(InvalidInputError):
            actions.load_from_history(float("nan"))
        with pytest.raises(InvalidInputError):
            actions.load_from_memory(float("inf"))

    def test_load_values_become_floats(self):
        assert actions.load_from_memory(42).payload == 42.0

    def test_memory_item_clear_carries_id(self):
        assert actions.memory_item_clear(3) == Action(ActionType.MEMORY_ITEM_CLEAR, 3)

    def test_str(self):
        assert str(actions.equals()) == "EQUALS"
        assert str(actions.input_digit("4")) == "INPUT_DIGIT('4')"


class TestFromKey:
    """Tests for from_key."""

    @pytest.mark.parametrize(
        "key, action_type",
        [
            ("=", ActionType.EQUALS),
            ("C", ActionType.CLEAR_ALL),
            ("CE", ActionType.CLEAR_ENTRY),
            ("⌫", ActionType.BACKSPACE),
            ("±", ActionType.NEGATE),
            ("√", ActionType.SQRT),
            ("x²", ActionType.SQUARE),
            ("1/x", ActionType.RECIPROCAL),
            ("%", ActionType.PERCENT),
            ("MS", ActionType.MEMORY_STORE),
            ("MR", ActionType.MEMORY_RECALL),
            ("M+", ActionType.MEMORY_ADD),
            ("M-", ActionType.MEMORY_SUBTRACT),
            ("MC", ActionType.MEMORY_CLEAR),
            (".", ActionType.INPUT_DOT),
        ],
    )
    def test_named_keys(self, key, action_type):
        assert actions.from_key(key).type is action_type

    def test_digit_keys(self):
        assert actions.from_key("5") == actions.input_digit("5")

    def test_operator_keys(self):
        assert actions.from_key("÷") == actions.operator("÷")
        assert actions.from_key("/") == actions.operator("÷")

    def test_unknown_key(self):
        with pytest.raises(InvalidInputError) as exc_info:
            actions.from_key("sin")
        assert exc_info.value.reason == "Unknown key"
