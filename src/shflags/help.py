"""
Usage text rendering.

Each flag renders as ``  -s,--[no]name:  help text (default: value)``. When
a line would not fit the terminal width, the ``(default: ...)`` part moves to
a second line aligned under the help text.
"""

import shutil
import sys
from typing import TYPE_CHECKING, Optional, TextIO

from .flag import FlagDefinition, FlagType

if TYPE_CHECKING:
    from .registry import FlagRegistry


def format_default(definition: FlagDefinition) -> str:
    if definition.flag_type is FlagType.BOOLEAN:
        return "true" if definition.default else "false"
    if definition.flag_type is FlagType.INTEGER:
        return str(definition.default)
    return f"'{definition.default}'"


def _flag_string(definition: FlagDefinition, long_options: bool) -> str:
    flag_str = f"-{definition.short}" if definition.short is not None else ""
    if long_options:
        if flag_str:
            flag_str += ","
        bool_str = (
            "[no]"
            if definition.flag_type is FlagType.BOOLEAN and definition.key != "help"
            else ""
        )
        flag_str += f"--{bool_str}{definition.name}:"
    return flag_str


def render_flags_help(
    registry: "FlagRegistry", columns: Optional[int] = None
) -> list[str]:
    """
    Render one entry per flag, in definition order.

    Args:
        registry: The registry whose flags are rendered.
        columns: Available width; defaults to the terminal width.

    Returns:
        list[str]: Output lines, without trailing newlines.
    """
    if columns is None:
        columns = shutil.get_terminal_size().columns
    long_options = registry.tokenizer.supports_long_options

    lines = []
    for definition in registry:
        flag_str = _flag_string(definition, long_options)
        default_str = f"(default: {format_default(definition)})"
        help_part = f"{definition.help} " if definition.help else ""
        line = f"  {flag_str}  {help_part}{default_str}"
        if len(line) < columns:
            lines.append(line)
        else:
            lines.append(f"  {flag_str}  {definition.help}")
            lines.append(f"  {' ' * len(flag_str)}  {default_str}")
    return lines


def render_help(
    registry: "FlagRegistry", include_usage: bool = True, columns: Optional[int] = None
) -> str:
    lines = []
    if include_usage:
        lines.append(registry.usage or f"USAGE: {registry.prog} [flags] args")
    flag_lines = render_flags_help(registry, columns)
    if flag_lines:
        lines.append("flags:")
        lines.extend(flag_lines)
    return "\n".join(lines) + "\n"


def print_help(
    registry: "FlagRegistry",
    stream: Optional[TextIO] = None,
    include_usage: bool = True,
) -> None:
    """Write the usage text to ``stream`` (stderr by default)."""
    stream = stream if stream is not None else sys.stderr
    stream.write(render_help(registry, include_usage=include_usage))
