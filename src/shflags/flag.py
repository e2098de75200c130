"""Flag types, definitions and value normalization."""

import enum
from dataclasses import dataclass
from typing import Any, Optional, Union

from .validators import to_boolean, valid_boolean, valid_integer

FlagValue = Union[bool, int, str]


class FlagType(enum.Enum):
    BOOLEAN = "boolean"
    INTEGER = "integer"
    STRING = "string"


def underscore_name(name: str) -> str:
    """Return the canonical key for a flag name (dashes become underscores)."""
    return name.replace("-", "_")


def normalize_value(flag_type: FlagType, value: Any) -> FlagValue:
    """
    Validate ``value`` against ``flag_type`` and convert it to its Python form.

    Args:
        flag_type: The type the value must satisfy.
        value: A raw value, either a command-line/config literal or a Python object.

    Returns:
        FlagValue: ``bool`` for booleans, ``int`` for integers, ``str`` for strings.

    Raises:
        ValueError: If the value is not legal for the type.
    """
    if flag_type is FlagType.BOOLEAN:
        if not valid_boolean(value):
            raise ValueError(f"invalid boolean value ({value})")
        return to_boolean(value)
    if flag_type is FlagType.INTEGER:
        if not valid_integer(value):
            raise ValueError(f"invalid integer value ({value})")
        return int(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"invalid string value ({value!r})")


@dataclass(frozen=True)
class FlagDefinition:
    """
    Metadata for a single declared flag.

    Attributes:
        name: The long name exactly as declared (``--name`` on the command line).
        flag_type: The value type of the flag.
        default: The normalized default value.
        help: Free-form help text.
        short: Single-character short name, or None.
    """

    name: str
    flag_type: FlagType
    default: FlagValue
    help: str
    short: Optional[str] = None

    @property
    def key(self) -> str:
        return underscore_name(self.name)

    @property
    def negation(self) -> Optional[str]:
        """The implicit ``no<name>`` alias of a boolean flag."""
        if self.flag_type is FlagType.BOOLEAN:
            return f"no{self.name}"
        return None

    @property
    def takes_value(self) -> bool:
        return self.flag_type is not FlagType.BOOLEAN
