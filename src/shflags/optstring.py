"""
Generation of getopt-style option specification strings.

The short spec follows ``getopt(3)`` (``"xc:n:"``), the long spec follows the
``-l`` argument of the enhanced ``getopt(1)`` (``"update,count:,name:"``).
In both, a trailing colon marks an option that requires a value.
"""

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from .registry import FlagRegistry


class OptionSpec(NamedTuple):
    """The option strings handed to a tokenizer."""

    short: str
    long: str
    booleans: str

    def long_names(self) -> list[str]:
        """
        Return every long option (value flags plus boolean names and aliases)
        once, in order, still carrying the trailing colon where a value is required.
        """
        names: list[str] = []
        for part in f"{self.long},{self.booleans}".split(","):
            if part and part not in names:
                names.append(part)
        return names

    def value_options(self) -> set[str]:
        """Return the option strings (``-c``, ``--count``) that take a value."""
        options = set()
        for i, char in enumerate(self.short):
            if char == ":":
                continue
            if self.short[i + 1 : i + 2] == ":":
                options.add(f"-{char}")
        for name in self.long.split(","):
            if name.endswith(":"):
                options.add(f"--{name[:-1]}")
        return options


def short_options(registry: "FlagRegistry") -> str:
    opts = ""
    for definition in registry:
        if definition.short is None:
            continue
        opts += definition.short
        if definition.takes_value:
            opts += ":"
    return opts


def long_options(registry: "FlagRegistry") -> str:
    opts = []
    for definition in registry:
        opts.append(f"{definition.name}:" if definition.takes_value else definition.name)
    return ",".join(opts)


def boolean_options(registry: "FlagRegistry") -> str:
    """Comma-separated boolean long names including their ``no`` aliases."""
    return ",".join(registry.boolean_names)


def build_option_spec(registry: "FlagRegistry") -> OptionSpec:
    return OptionSpec(
        short=short_options(registry),
        long=long_options(registry),
        booleans=boolean_options(registry),
    )
