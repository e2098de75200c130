"""
Tokenizers normalize a raw argument vector into ``options -- positionals`` form.

Every tokenizer produces the same stream layout the enhanced ``getopt(1)``
prints: each recognized option (``--count``, ``-x``) followed by its value
when it takes one, then a ``--`` separator, then the positional arguments in
their original order.
"""

import abc
import getopt
import logging
import os
import shlex
import subprocess
from typing import Optional, Sequence

from .errors import ParseError
from .optstring import OptionSpec

logger = logging.getLogger(__name__)

DEFAULT_GETOPT_CMD = "getopt"
GETOPT_CMD_ENV = "FLAGS_GETOPT_CMD"


class Tokenizer(abc.ABC):
    """Interface for argument reordering."""

    #: Whether ``--long`` options are understood (controls help rendering).
    supports_long_options: bool = True

    @abc.abstractmethod
    def tokenize(self, argv: Sequence[str], spec: OptionSpec) -> list[str]:
        """
        Reorder ``argv`` according to ``spec``.

        Raises:
            ParseError: On unrecognized options or missing option values.
        """


def _stream_from_pairs(
    opts: list[tuple[str, str]], args: list[str], spec: OptionSpec
) -> list[str]:
    value_options = spec.value_options()
    tokens = []
    for opt, value in opts:
        tokens.append(opt)
        if opt in value_options:
            tokens.append(value)
    tokens.append("--")
    tokens.extend(args)
    return tokens


class GnuTokenizer(Tokenizer):
    """
    Pure-Python GNU-style tokenizer.

    Options and positionals may be interleaved; options are moved to the front.
    Long options may be abbreviated to any unique prefix and may carry their
    value either as ``--name=value`` or as the following argument.
    """

    def tokenize(self, argv: Sequence[str], spec: OptionSpec) -> list[str]:
        long_opts = [
            f"{name[:-1]}=" if name.endswith(":") else name
            for name in spec.long_names()
        ]
        try:
            opts, args = getopt.gnu_getopt(list(argv), spec.short, long_opts)
        except getopt.GetoptError as e:
            raise ParseError(str(e)) from e
        return _stream_from_pairs(opts, args, spec)


class PosixTokenizer(Tokenizer):
    """
    Standard getopt behaviour: short options only, scanning stops at the
    first positional argument.
    """

    supports_long_options = False

    def tokenize(self, argv: Sequence[str], spec: OptionSpec) -> list[str]:
        try:
            opts, args = getopt.getopt(list(argv), spec.short)
        except getopt.GetoptError as e:
            raise ParseError(str(e)) from e
        return _stream_from_pairs(opts, args, spec)


class GetoptCommandTokenizer(Tokenizer):
    """
    Tokenizer backed by an external enhanced ``getopt(1)`` command.

    The command defaults to ``$FLAGS_GETOPT_CMD`` and then to ``getopt``.
    """

    def __init__(self, command: Optional[str] = None) -> None:
        self.command = command or os.environ.get(GETOPT_CMD_ENV, DEFAULT_GETOPT_CMD)

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                [self.command, *args], capture_output=True, text=True, check=False
            )
        except OSError as e:
            raise ParseError(f"unable to run getopt command ({self.command}): {e}") from e

    def is_enhanced(self) -> bool:
        """Return True if the command is the util-linux enhanced getopt."""
        try:
            return self._run(["-T"]).returncode == 4
        except ParseError:
            return False

    def tokenize(self, argv: Sequence[str], spec: OptionSpec) -> list[str]:
        args = ["-o", spec.short]
        long_opts = ",".join(spec.long_names())
        if long_opts:
            args += ["-l", long_opts]
        args += ["--", *argv]

        logger.debug("running %s %s", self.command, shlex.join(args))
        proc = self._run(args)
        if proc.returncode != 0:
            diagnostic = proc.stderr.strip() or f"{self.command} exited with {proc.returncode}"
            raise ParseError(diagnostic)
        return shlex.split(proc.stdout)
