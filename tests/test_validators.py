import pytest

from shflags.flag import FlagType, normalize_value
from shflags.validators import to_boolean, valid_boolean, valid_integer


class TestValidBoolean:
    @pytest.mark.parametrize("value", ["true", "t", "0", "false", "f", "1", True, False])
    def test_accepts_boolean_literals(self, value):
        assert valid_boolean(value)

    @pytest.mark.parametrize("value", ["True", "TRUE", "F", "yes", "no", "", "2", None, 0])
    def test_rejects_other_values(self, value):
        """Matching is case-sensitive and only strings or bools qualify."""
        assert not valid_boolean(value)

    def test_to_boolean_uses_shell_numeric_convention(self):
        assert to_boolean("0") is True
        assert to_boolean("1") is False
        assert to_boolean("t") is True
        assert to_boolean("false") is False

    def test_to_boolean_rejects_invalid(self):
        with pytest.raises(ValueError) as exc:
            to_boolean("yes")
        assert "Invalid boolean value" in str(exc.value)


class TestValidInteger:
    @pytest.mark.parametrize("value", ["0", "7", "123456", "-5", "-0", 42, -3])
    def test_accepts_integers(self, value):
        assert valid_integer(value)

    @pytest.mark.parametrize(
        "value", ["", "-", "--1", "+3", "1.5", "abc", "12a", " 1", "1 ", "²", True, None]
    )
    def test_rejects_non_integers(self, value):
        assert not valid_integer(value)


class TestNormalizeValue:
    def test_integer_strings_become_ints(self):
        assert normalize_value(FlagType.INTEGER, "-12") == -12

    def test_string_accepts_numbers(self):
        assert normalize_value(FlagType.STRING, 3) == "3"

    def test_string_rejects_bool(self):
        with pytest.raises(ValueError):
            normalize_value(FlagType.STRING, True)

    def test_invalid_integer_message(self):
        with pytest.raises(ValueError) as exc:
            normalize_value(FlagType.INTEGER, "abc")
        assert str(exc.value) == "invalid integer value (abc)"
