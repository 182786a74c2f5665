"""Tests for the demo command line."""

import logging
import pytest
import sys
from pathlib import Path

# Add parent directory to path to import argflags
sys.path.insert(0, str(Path(__file__).parent.parent))

from argflags.cli import build_registry, main
from argflags.version import __version_display__


@pytest.fixture
def root_logging(monkeypatch):
    """Make basicConfig only set the root level, and restore it afterwards."""
    root = logging.getLogger()
    old_level = root.level
    levels = []

    def basic_config(level=None, **kwargs):
        levels.append(level)
        root.setLevel(level)

    monkeypatch.setattr(logging, "basicConfig", basic_config)
    yield levels
    root.setLevel(old_level)


def test_defaults_are_printed(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "bool = false",
        "long = 0",
        "ulong = 0",
        "float = 0",
        "double = 0",
        'string = ""',
    ]


def test_parsed_values_are_printed(capsys):
    argv = ["--bool", "-long", "-5", "u", "7", "--float", "0.1",
            "--double", "2.5", "--string", '"a b"', "--log", "error"]
    assert main(argv) == 0
    assert capsys.readouterr().out.splitlines() == [
        "bool = true",
        "long = -5",
        "ulong = 7",
        "float = 0.1",
        "double = 2.5",
        'string = "a b"',
    ]


def test_bad_value_returns_error(capsys):
    assert main(["--ulong", "-1"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error: flag 'ulong' expects a ulong value" in captured.err


def test_missing_value_returns_error(capsys):
    assert main(["--double"]) == 1
    assert "none was given" in capsys.readouterr().err


def test_registry_layout():
    registry, demo_flags, options = build_registry()
    assert [flag.name() for flag in demo_flags] == [
        "bool", "long", "ulong", "float", "double", "string",
    ]
    assert options["loglevel"].short_alias() == "log"
    assert options["version"].short_alias() == "V"
    assert len(registry) == 8


def test_loglevel_applies_to_parsing(root_logging, caplog, capsys):
    assert main(["--log", "debug", "--long", "3", "--nope"]) == 0
    assert root_logging == ["DEBUG"]

    messages = [r.getMessage() for r in caplog.records
                if r.name == "argflags.registry" and r.levelno == logging.DEBUG]
    assert "long = 3" in messages
    assert "Skipping unknown flag token '--nope'" in messages
    assert "long = 3" in capsys.readouterr().out


def test_default_loglevel_hides_debug(root_logging, caplog):
    assert main(["--long", "3"]) == 0
    assert root_logging == ["WARNING"]
    assert not [r for r in caplog.records if r.levelno == logging.DEBUG]


def test_loglevel_value_is_not_a_flag(root_logging, capsys):
    # "log" as another flag's value must not be read as the loglevel alias
    assert main(["--string", "log", "--long", "2"]) == 0
    assert root_logging == ["WARNING"]
    out = capsys.readouterr().out
    assert 'string = "log"' in out
    assert "long = 2" in out


def test_version_flag(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == f"argflags {__version_display__}"
