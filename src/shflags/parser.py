"""
Parsing of a normalized token stream into flag values and positionals.

The stream comes from a tokenizer: options (each followed by its value when
it takes one), a ``--`` separator, then positional arguments.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Sequence

from .errors import HelpRequested, ParseError
from .flag import FlagDefinition, FlagType, FlagValue, underscore_name
from .help import print_help
from .validators import valid_integer

if TYPE_CHECKING:
    from .registry import FlagRegistry

logger = logging.getLogger(__name__)

# names that attribute access on ParseResult resolves before flag values
RESULT_ATTRIBUTES = frozenset(("values", "positional", "get"))


@dataclass
class ParseResult:
    """
    Values of every defined flag after parsing, plus the positional arguments.

    Values can be read as ``result["dry-run"]``, ``result["dry_run"]`` or
    ``result.dry_run``.
    """

    values: dict[str, FlagValue] = field(default_factory=dict)
    positional: list[str] = field(default_factory=list)

    def __getitem__(self, name: str) -> FlagValue:
        return self.values[underscore_name(name)]

    def __getattr__(self, name: str) -> Any:
        values = self.__dict__.get("values", {})
        try:
            return values[underscore_name(name)]
        except KeyError:
            raise AttributeError(name) from None

    def __contains__(self, name: str) -> bool:
        return underscore_name(name) in self.values

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(underscore_name(name), default)


def _resolve(
    registry: "FlagRegistry", token: str
) -> tuple[FlagDefinition, bool, bool]:
    """
    Map an option token to its flag.

    Returns:
        tuple: ``(definition, is_long_form, negated)``.

    Raises:
        ParseError: If the token names no registered flag.
    """
    definition: Optional[FlagDefinition] = None
    negated = False
    long_form = token.startswith("--")

    if long_form:
        name = token[2:]
        if name in registry.long_names:
            definition = registry.get_definition(name)
        elif name.startswith("no") and name in registry.boolean_names:
            definition = registry.get_definition(name[2:])
            negated = True
    elif token.startswith("-"):
        definition = registry.short_table.get(token[1:]) if len(token) == 2 else None

    if definition is None:
        raise ParseError(f"unrecognized option ({token})")
    return definition, long_form, negated


def parse_tokens(registry: "FlagRegistry", tokens: Sequence[str]) -> ParseResult:
    """
    Walk a tokenizer stream and assign flag values in ``registry``.

    Values are written to ``registry.values`` as they are resolved. On error
    the values assigned so far stay in place and the remaining tokens are not
    processed.

    Args:
        registry: The registry holding flag definitions and output values.
        tokens: A normalized token stream.

    Returns:
        ParseResult: A snapshot of all flag values and the positional arguments.

    Raises:
        ParseError: On an unrecognized option, a missing value or an invalid integer.
        HelpRequested: If the help flag was set; usage has been printed to stderr.
    """
    positional: list[str] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        i += 1
        if token == "--":
            positional.extend(tokens[i:])
            break

        definition, long_form, negated = _resolve(registry, token)

        value: FlagValue
        if definition.flag_type is FlagType.BOOLEAN:
            if long_form:
                value = not negated
            else:
                # short booleans toggle the declared default, not the current value
                value = not definition.default
        else:
            if i >= len(tokens):
                raise ParseError(f"option requires an argument ({token})")
            arg = tokens[i]
            i += 1
            if definition.flag_type is FlagType.INTEGER:
                if not valid_integer(arg):
                    raise ParseError(f"invalid integer value ({arg})")
                value = int(arg)
            else:
                value = arg

        logger.debug("flag %s = %r", definition.key, value)
        registry.values[definition.key] = value

        if definition.key == "help" and value is True:
            print_help(registry)
            raise HelpRequested()

    registry.positional = positional
    return ParseResult(values=dict(registry.values), positional=list(positional))
