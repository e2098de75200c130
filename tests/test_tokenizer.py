#!/usr/bin/env python3
"""
Tests for option-string generation and the tokenizer implementations.

The external getopt command is never executed; ``subprocess.run`` is stubbed.
"""

import subprocess
from unittest.mock import patch

import pytest

from shflags import FlagRegistry, ParseError
from shflags.optstring import (
    OptionSpec,
    boolean_options,
    build_option_spec,
    long_options,
    short_options,
)
from shflags.tokenizer import GetoptCommandTokenizer, GnuTokenizer, PosixTokenizer


@pytest.fixture(autouse=True)
def gnu_ordering(monkeypatch):
    monkeypatch.delenv("POSIXLY_CORRECT", raising=False)


@pytest.fixture
def registry():
    registry = FlagRegistry(prog="test")
    registry.define_boolean("update", False, "update the cache", "x")
    registry.define_integer("count", 5, "number of items", "c")
    registry.define_string("name", "world", "name to greet", "n")
    registry.define_string("output-dir", "/tmp", "where to write")
    return registry


@pytest.fixture
def spec(registry):
    return build_option_spec(registry)


def completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(
        args=["getopt"], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestOptionStrings:
    def test_short_options(self, registry):
        assert short_options(registry) == "xc:n:"

    def test_long_options(self, registry):
        assert long_options(registry) == "update,count:,name:,output-dir:"

    def test_boolean_options(self, registry):
        assert boolean_options(registry) == "update,noupdate"

    def test_option_spec(self, spec):
        assert spec == OptionSpec("xc:n:", "update,count:,name:,output-dir:", "update,noupdate")

    def test_long_names_deduplicated(self, spec):
        assert spec.long_names() == ["update", "count:", "name:", "output-dir:", "noupdate"]

    def test_value_options(self, spec):
        assert spec.value_options() == {"-c", "-n", "--count", "--name", "--output-dir"}

    def test_empty_registry(self):
        spec = build_option_spec(FlagRegistry())
        assert spec == OptionSpec("", "", "")
        assert spec.long_names() == []


class TestGnuTokenizer:
    def test_reorders_options_before_positionals(self, spec):
        tokens = GnuTokenizer().tokenize(["a", "--count", "3", "-x", "b"], spec)
        assert tokens == ["--count", "3", "-x", "--", "a", "b"]

    def test_equals_form_split(self, spec):
        tokens = GnuTokenizer().tokenize(["--output-dir=/var/out"], spec)
        assert tokens == ["--output-dir", "/var/out", "--"]

    def test_negation_alias_recognized(self, spec):
        assert GnuTokenizer().tokenize(["--noupdate"], spec) == ["--noupdate", "--"]

    def test_unknown_option(self, spec):
        with pytest.raises(ParseError) as exc:
            GnuTokenizer().tokenize(["--bogus"], spec)
        assert "bogus" in str(exc.value)

    def test_missing_value(self, spec):
        with pytest.raises(ParseError):
            GnuTokenizer().tokenize(["-c"], spec)


class TestPosixTokenizer:
    def test_stops_at_first_positional(self, spec):
        tokens = PosixTokenizer().tokenize(["-x", "file", "-c", "3"], spec)
        assert tokens == ["-x", "--", "file", "-c", "3"]

    def test_does_not_support_long_options(self, spec):
        assert PosixTokenizer.supports_long_options is False
        with pytest.raises(ParseError):
            PosixTokenizer().tokenize(["--update"], spec)


class TestGetoptCommandTokenizer:
    def test_command_from_environment(self, monkeypatch):
        monkeypatch.setenv("FLAGS_GETOPT_CMD", "/usr/local/bin/getopt")
        assert GetoptCommandTokenizer().command == "/usr/local/bin/getopt"

    def test_default_command(self, monkeypatch):
        monkeypatch.delenv("FLAGS_GETOPT_CMD", raising=False)
        assert GetoptCommandTokenizer().command == "getopt"

    def test_explicit_command_wins(self, monkeypatch):
        monkeypatch.setenv("FLAGS_GETOPT_CMD", "/usr/local/bin/getopt")
        assert GetoptCommandTokenizer("ggetopt").command == "ggetopt"

    def test_invocation_and_output_splitting(self, spec):
        tokenizer = GetoptCommandTokenizer("getopt")
        with patch(
            "shflags.tokenizer.subprocess.run",
            return_value=completed(" --count '3' -x -- 'a' 'b c'\n"),
        ) as mock_run:
            tokens = tokenizer.tokenize(["a", "--count", "3", "-x", "b c"], spec)

        assert tokens == ["--count", "3", "-x", "--", "a", "b c"]
        cmd = mock_run.call_args[0][0]
        assert cmd == [
            "getopt",
            "-o",
            "xc:n:",
            "-l",
            "update,count:,name:,output-dir:,noupdate",
            "--",
            "a",
            "--count",
            "3",
            "-x",
            "b c",
        ]

    def test_failure_raises_parse_error_with_diagnostic(self, spec):
        tokenizer = GetoptCommandTokenizer("getopt")
        with patch(
            "shflags.tokenizer.subprocess.run",
            return_value=completed(
                " --", "getopt: unrecognized option '--bogus'\n", returncode=1
            ),
        ):
            with pytest.raises(ParseError) as exc:
                tokenizer.tokenize(["--bogus"], spec)

        assert str(exc.value) == "getopt: unrecognized option '--bogus'"

    def test_missing_command(self, spec):
        tokenizer = GetoptCommandTokenizer("/nonexistent/shflags-getopt")
        with pytest.raises(ParseError) as exc:
            tokenizer.tokenize(["-x"], spec)
        assert "unable to run getopt command" in str(exc.value)

    @pytest.mark.parametrize("returncode, expected", [(4, True), (0, False)])
    def test_is_enhanced(self, returncode, expected):
        with patch(
            "shflags.tokenizer.subprocess.run",
            return_value=completed(" --\n", returncode=returncode),
        ) as mock_run:
            assert GetoptCommandTokenizer("getopt").is_enhanced() is expected
        assert mock_run.call_args[0][0] == ["getopt", "-T"]

    def test_is_enhanced_missing_command(self):
        assert GetoptCommandTokenizer("/nonexistent/shflags-getopt").is_enhanced() is False

    def test_registry_parse_through_command(self, registry):
        registry.tokenizer = GetoptCommandTokenizer("getopt")
        with patch(
            "shflags.tokenizer.subprocess.run",
            return_value=completed(" -x --name 'Kate' -- 'file'\n"),
        ):
            result = registry.parse(["file", "-x", "--name", "Kate"])

        assert result.update is True
        assert result.name == "Kate"
        assert result.positional == ["file"]

    def test_empty_argv_skips_command(self, registry):
        registry.tokenizer = GetoptCommandTokenizer("getopt")
        with patch("shflags.tokenizer.subprocess.run") as mock_run:
            result = registry.parse([])

        mock_run.assert_not_called()
        assert result.positional == []
