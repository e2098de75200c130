"""Predicates for boolean and integer flag values."""

from typing import Any

TRUE_VALUES = ("true", "t", "0")
FALSE_VALUES = ("false", "f", "1")


def valid_boolean(value: Any) -> bool:
    """
    Check whether ``value`` is a legal boolean literal.

    Accepts Python bools and the case-sensitive tokens ``true``, ``t``, ``0``
    (true) and ``false``, ``f``, ``1`` (false). The numeric forms follow the
    shell exit-status convention where 0 means success.
    """
    if isinstance(value, bool):
        return True
    return isinstance(value, str) and value in TRUE_VALUES + FALSE_VALUES


def to_boolean(value: Any) -> bool:
    """
    Normalize a boolean literal to a Python bool.

    Raises:
        ValueError: If ``value`` is not a valid boolean literal.
    """
    if isinstance(value, bool):
        return value
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(
        f"Invalid boolean value: {value!r}. Must be one of: "
        f"{', '.join(TRUE_VALUES + FALSE_VALUES)}"
    )


def valid_integer(value: Any) -> bool:
    """Check whether ``value`` is an optionally negative decimal integer."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if not isinstance(value, str):
        return False
    digits = value[1:] if value.startswith("-") else value
    # str.isdigit() also accepts non-ASCII digits such as '²'
    return bool(digits) and all(c in "0123456789" for c in digits)
