"""
The flag registry: definitions, name indexes, current values and parsing.

Example:
    registry = FlagRegistry()
    registry.define_string("name", "world", "name to say hello to", "n")
    registry.define_boolean("update", False, "update the cache", "x")

    result = registry.parse(["--name", "Kate", "-x", "file.txt"])
    result.name        # 'Kate'
    result.update      # True
    result.positional  # ['file.txt']
"""

import logging
import os
import sys
from typing import Any, Iterator, Mapping, Optional, Sequence, Union

from result import Err, Ok, Result

from .config import apply_config, load_config_file
from .errors import (
    FLAGS_FALSE,
    FLAGS_TRUE,
    DefinitionError,
    DuplicateDefinitionError,
    DuplicateShortNameError,
    FlagsError,
)
from .flag import FlagDefinition, FlagType, FlagValue, normalize_value, underscore_name
from .optstring import build_option_spec
from .parser import RESULT_ATTRIBUTES, ParseResult, parse_tokens
from .tokenizer import GnuTokenizer, Tokenizer

logger = logging.getLogger(__name__)

RESERVED_NAMES = frozenset(
    (
        "argc",
        "argv",
        "error",
        "false",
        "getopt_cmd",
        "help",
        "parent",
        "true",
        "version",
    )
)

HELP_FLAG = "help"
HELP_SHORT = "h"
HELP_TEXT = "show this help"


class FlagRegistry:
    """
    Holds flag definitions and the values produced by parsing.

    Definitions are kept in declaration order, which is also the order used
    for help output and option-string generation.

    Attributes:
        prog: Program name shown in the default usage line.
        usage: Custom usage line replacing ``USAGE: <prog> [flags] args``.
        tokenizer: The tokenizer used to normalize argument vectors.
        values: Current value of every flag, keyed by underscored name.
        positional: Positional arguments left over from the last parse.
    """

    def __init__(
        self,
        prog: Optional[str] = None,
        usage: Optional[str] = None,
        tokenizer: Optional[Tokenizer] = None,
    ) -> None:
        self.prog: str = prog or os.path.basename(sys.argv[0] or "script")
        self.usage: Optional[str] = usage
        self.tokenizer: Tokenizer = tokenizer or GnuTokenizer()
        self._definitions: dict[str, FlagDefinition] = {}
        self.short_table: dict[str, FlagDefinition] = {}
        self.long_names: list[str] = []
        self.boolean_names: list[str] = []
        self._defined_names: set[str] = set()
        self.values: dict[str, FlagValue] = {}
        self.positional: list[str] = []

    # -- lookups ------------------------------------------------------------

    def __iter__(self) -> Iterator[FlagDefinition]:
        return iter(list(self._definitions.values()))

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, name: str) -> bool:
        return underscore_name(name) in self._definitions

    @property
    def short_names(self) -> list[str]:
        return list(self.short_table)

    def get_definition(self, name: str) -> Optional[FlagDefinition]:
        """Return the definition for a long name (dashed or underscored)."""
        return self._definitions.get(underscore_name(name))

    def value(self, name: str) -> FlagValue:
        """
        Return the current value of a flag.

        Raises:
            KeyError: If no such flag is defined.
        """
        return self.values[underscore_name(name)]

    # -- definition ---------------------------------------------------------

    def define(
        self,
        flag_type: Union[FlagType, str, None] = None,
        name: Optional[str] = None,
        default: Any = None,
        help: Optional[str] = None,
        short: Optional[str] = None,
    ) -> Result[FlagDefinition, FlagsError]:
        """
        Define a flag.

        Args:
            flag_type: A FlagType or its name (``"boolean"``, ``"integer"``, ``"string"``).
            name: Long name; dashes are allowed and map to underscores in value keys.
            default: Default value, validated against ``flag_type``.
            help: Help text.
            short: Optional single-character short name.

        Returns:
            Result[FlagDefinition, FlagsError]:
                - Ok with the new definition,
                - Err with DuplicateDefinitionError or DuplicateShortNameError
                  (logged as a warning; the earlier definition stays in force).

        Raises:
            DefinitionError: If arguments are missing or malformed, the name is
                reserved, or the default is invalid for the type.
        """
        return self._define(flag_type, name, default, help, short, allow_reserved=False)

    def define_boolean(
        self, name: str, default: Any, help: str, short: Optional[str] = None
    ) -> Result[FlagDefinition, FlagsError]:
        return self.define(FlagType.BOOLEAN, name, default, help, short)

    def define_integer(
        self, name: str, default: Any, help: str, short: Optional[str] = None
    ) -> Result[FlagDefinition, FlagsError]:
        return self.define(FlagType.INTEGER, name, default, help, short)

    def define_string(
        self, name: str, default: Any, help: str, short: Optional[str] = None
    ) -> Result[FlagDefinition, FlagsError]:
        return self.define(FlagType.STRING, name, default, help, short)

    def _define(
        self,
        flag_type: Union[FlagType, str, None],
        name: Optional[str],
        default: Any,
        help: Optional[str],
        short: Optional[str],
        allow_reserved: bool,
    ) -> Result[FlagDefinition, FlagsError]:
        if flag_type is None or name is None or default is None or help is None:
            raise DefinitionError(
                "flag definition requires a type, name, default and help text"
            )
        if isinstance(flag_type, str):
            try:
                flag_type = FlagType(flag_type.lower())
            except ValueError:
                raise DefinitionError(f"unknown flag type ({flag_type})") from None
        if not name or name.startswith("-") or any(c.isspace() or c in ",:=" for c in name):
            raise DefinitionError(f"invalid flag name ({name!r})")
        if short is not None and (
            len(short) != 1 or short in ":-?+" or short.isspace()
        ):
            raise DefinitionError(f"invalid short flag name ({short!r})")

        key = underscore_name(name)
        if not allow_reserved and (
            key.lower() in RESERVED_NAMES or key.lower() == f"no{HELP_FLAG}"
        ):
            raise DefinitionError(f"flag name ({name}) is reserved")
        if key in RESULT_ATTRIBUTES:
            raise DefinitionError(
                f"flag name ({name}) clashes with a ParseResult attribute"
            )

        negation = f"no{name}" if flag_type is FlagType.BOOLEAN else None
        taken = {name, key} | ({negation} if negation else set())
        if key in self._definitions or taken & self._defined_names:
            error = DuplicateDefinitionError(f"flag name ({name}) already defined")
            logger.warning(error.message)
            return Err(error)

        if short is not None and short in self.short_table:
            error = DuplicateShortNameError(
                f"flag short name ({short}) already defined by "
                f"--{self.short_table[short].name}"
            )
            logger.warning(error.message)
            return Err(error)

        try:
            normalized = normalize_value(flag_type, default)
        except ValueError as e:
            raise DefinitionError(f"flag '{name}': {e}") from e

        definition = FlagDefinition(
            name=name,
            flag_type=flag_type,
            default=normalized,
            help=help,
            short=short,
        )
        self._definitions[key] = definition
        self.long_names.append(name)
        self._defined_names.update((name, key))
        if short is not None:
            self.short_table[short] = definition
        if negation is not None:
            self.boolean_names.extend((name, negation))
            self._defined_names.add(negation)
        self.values[key] = normalized
        logger.debug("defined %s flag --%s", flag_type.value, name)
        return Ok(definition)

    def undefine(self, name: str) -> int:
        """
        Remove a flag and its value.

        Returns:
            int: FLAGS_TRUE if the flag was removed, FLAGS_FALSE if it was not defined.
        """
        definition = self._definitions.pop(underscore_name(name), None)
        if definition is None:
            return FLAGS_FALSE
        self.long_names.remove(definition.name)
        self._defined_names.difference_update((definition.name, definition.key))
        if definition.short is not None:
            del self.short_table[definition.short]
        if definition.negation is not None:
            self.boolean_names.remove(definition.name)
            self.boolean_names.remove(definition.negation)
            self._defined_names.discard(definition.negation)
        self.values.pop(definition.key, None)
        return FLAGS_TRUE

    def reset(self) -> None:
        """Forget every definition, value and positional argument."""
        self._definitions.clear()
        self.short_table.clear()
        self.long_names.clear()
        self.boolean_names.clear()
        self._defined_names.clear()
        self.values.clear()
        self.positional = []

    # -- parsing ------------------------------------------------------------

    def _ensure_help_flag(self) -> None:
        if HELP_FLAG in self._definitions:
            return
        short = HELP_SHORT if HELP_SHORT not in self.short_table else None
        result = self._define(
            FlagType.BOOLEAN, HELP_FLAG, False, HELP_TEXT, short, allow_reserved=True
        )
        if isinstance(result, Err):
            raise DefinitionError(
                f"unable to define the help flag: {result.unwrap_err().message}"
            )

    def load_config(self, config: Union[str, Mapping[str, Any]]) -> dict[str, FlagValue]:
        """
        Apply values from a YAML/JSON file path or an already-loaded mapping.

        Raises:
            ConfigError: If the file cannot be read or holds invalid values.
        """
        data = load_config_file(config) if isinstance(config, str) else config
        return apply_config(self, data)

    def parse(
        self,
        argv: Optional[Sequence[str]] = None,
        config: Union[str, Mapping[str, Any], None] = None,
    ) -> ParseResult:
        """
        Parse an argument vector.

        Args:
            argv: Arguments to parse, without the program name. Defaults to ``sys.argv[1:]``.
            config: Optional config file path or mapping applied before the command line.

        Returns:
            ParseResult: Values of all flags and the positional arguments.

        Raises:
            ParseError: If the arguments cannot be parsed.
            HelpRequested: If help was requested; usage has been written to stderr.
            ConfigError: If the configuration is invalid.
        """
        argv = list(sys.argv[1:] if argv is None else argv)
        self._ensure_help_flag()
        if config is not None:
            self.load_config(config)

        if argv:
            tokens = self.tokenizer.tokenize(argv, build_option_spec(self))
        else:
            tokens = ["--"]
        logger.debug("token stream: %s", tokens)
        return parse_tokens(self, tokens)

    def safe_parse(
        self,
        argv: Optional[Sequence[str]] = None,
        config: Union[str, Mapping[str, Any], None] = None,
    ) -> Result[ParseResult, FlagsError]:
        """
        Parse without raising.

        Returns:
            Result[ParseResult, FlagsError]:
                - Ok with the parse result,
                - Err with the error (its ``status`` says how serious it is).
        """
        try:
            return Ok(self.parse(argv, config))
        except FlagsError as e:
            return Err(e)
