"""
shflags - Typed command-line flags for Python scripts.

Scripts declare boolean, integer and string flags with long and short names,
defaults and help text, then parse their argument vector into flag values and
a list of positional arguments. Boolean flags accept ``--name``, ``--noname``
and a short form that toggles the declared default.

Example:
    import shflags

    shflags.define_string("name", "world", "name to say hello to", "n")
    flags = shflags.FLAGS()
    print(f"Hello, {flags.name}!")
"""

import logging
import sys
from typing import Any, Mapping, Optional, Sequence, Union

from result import Result

from .errors import (
    FLAGS_ERROR,
    FLAGS_FALSE,
    FLAGS_TRUE,
    ConfigError,
    DefinitionError,
    DuplicateDefinitionError,
    DuplicateShortNameError,
    FlagsError,
    HelpRequested,
    ParseError,
)
from .flag import FlagDefinition, FlagType, FlagValue
from .help import print_help, render_help
from .log import configure_logging
from .parser import ParseResult
from .registry import RESERVED_NAMES, FlagRegistry
from .tokenizer import GetoptCommandTokenizer, GnuTokenizer, PosixTokenizer, Tokenizer
from .validators import valid_boolean, valid_integer

__version__ = "1.0.0"
__all__ = [
    "DEFAULT_REGISTRY",
    "FLAGS",
    "FLAGS_ERROR",
    "FLAGS_FALSE",
    "FLAGS_TRUE",
    "RESERVED_NAMES",
    "ConfigError",
    "DefinitionError",
    "DuplicateDefinitionError",
    "DuplicateShortNameError",
    "FlagDefinition",
    "FlagRegistry",
    "FlagType",
    "FlagValue",
    "FlagsError",
    "GetoptCommandTokenizer",
    "GnuTokenizer",
    "HelpRequested",
    "ParseError",
    "ParseResult",
    "PosixTokenizer",
    "Tokenizer",
    "configure_logging",
    "flags",
    "define_boolean",
    "define_integer",
    "define_string",
    "help_text",
    "parse",
    "print_help",
    "render_help",
    "reset",
    "safe_parse",
    "valid_boolean",
    "valid_integer",
]

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY = FlagRegistry()


def define_boolean(
    name: str, default: Any, help: str, short: Optional[str] = None
) -> Result[FlagDefinition, FlagsError]:
    return DEFAULT_REGISTRY.define_boolean(name, default, help, short)


def define_integer(
    name: str, default: Any, help: str, short: Optional[str] = None
) -> Result[FlagDefinition, FlagsError]:
    return DEFAULT_REGISTRY.define_integer(name, default, help, short)


def define_string(
    name: str, default: Any, help: str, short: Optional[str] = None
) -> Result[FlagDefinition, FlagsError]:
    return DEFAULT_REGISTRY.define_string(name, default, help, short)


def parse(
    argv: Optional[Sequence[str]] = None,
    config: Union[str, Mapping[str, Any], None] = None,
) -> ParseResult:
    return DEFAULT_REGISTRY.parse(argv, config)


def safe_parse(
    argv: Optional[Sequence[str]] = None,
    config: Union[str, Mapping[str, Any], None] = None,
) -> Result[ParseResult, FlagsError]:
    return DEFAULT_REGISTRY.safe_parse(argv, config)


def reset() -> None:
    DEFAULT_REGISTRY.reset()


def help_text() -> str:
    return render_help(DEFAULT_REGISTRY)


def FLAGS(
    argv: Optional[Sequence[str]] = None,
    config: Union[str, Mapping[str, Any], None] = None,
    registry: Optional[FlagRegistry] = None,
) -> ParseResult:
    """
    Parse arguments the way a script's ``main`` expects to.

    Errors are logged at critical level and terminate the process with
    ``FLAGS_ERROR``. A help request terminates it with ``FLAGS_FALSE`` after
    printing usage. If no handler receives ``shflags`` records yet, the
    severity-prefixed stderr handler from :func:`configure_logging` is
    installed first; warnings logged before this call (e.g. duplicate
    definitions) need an explicit ``configure_logging()`` to get the prefix.

    Args:
        argv: Arguments to parse; defaults to ``sys.argv[1:]``.
        config: Optional config file path or mapping.
        registry: Registry to use; defaults to DEFAULT_REGISTRY.

    Returns:
        ParseResult: Values of all flags and the positional arguments.
    """
    registry = registry if registry is not None else DEFAULT_REGISTRY
    if not logger.hasHandlers():
        configure_logging()
    try:
        return registry.parse(argv, config)
    except HelpRequested as e:
        sys.exit(e.status)
    except FlagsError as e:
        logger.critical(e.message)
        sys.exit(e.status)


flags = FLAGS
