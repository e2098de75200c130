"""
Status codes and exceptions used throughout shflags.

The library follows a three-tier status model inherited from shell
conventions: ``FLAGS_TRUE`` (0) for success, ``FLAGS_FALSE`` (1) for a
recoverable negative outcome, and ``FLAGS_ERROR`` (2) for fatal problems.
Every exception raised or returned by the library carries one of these codes
in its ``status`` attribute so callers can exit with it directly.
"""

from typing import Optional

FLAGS_TRUE = 0
FLAGS_FALSE = 1
FLAGS_ERROR = 2


class FlagsError(Exception):
    """Base class for all shflags errors."""

    status: int = FLAGS_ERROR

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class DefinitionError(FlagsError):
    """A flag definition call was malformed or its default is invalid."""


class DuplicateDefinitionError(FlagsError):
    """The long name (or its boolean negation alias) is already defined."""

    status = FLAGS_FALSE


class DuplicateShortNameError(FlagsError):
    """The short name is already registered to another flag."""

    status = FLAGS_FALSE


class ParseError(FlagsError):
    """The argument vector could not be parsed."""


class HelpRequested(FlagsError):
    """The help flag was given; usage has already been printed."""

    status = FLAGS_FALSE

    def __init__(self, message: str = "help requested") -> None:
        super().__init__(message)


class ConfigError(FlagsError, ValueError):
    """A configuration file could not be loaded or holds invalid values."""
