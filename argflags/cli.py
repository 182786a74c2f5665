#!/usr/bin/env python3
"""Demo command line: declares one flag of each kind and prints the parsed values."""

import logging
import sys

from argflags.errors import FlagError
from argflags.registry import FlagHandle, FlagRegistry
from argflags.version import __version_display__


def build_registry() -> tuple[FlagRegistry, list[FlagHandle], dict[str, FlagHandle]]:
    registry = FlagRegistry()
    demo_flags = [
        registry.declare_bool("bool", False),
        registry.declare_long("long", 0),
        registry.declare_ulong("ulong", 0),
        registry.declare_float("float", 0.0),
        registry.declare_double("double", 0.0),
        registry.declare_string("string", ""),
    ]
    options = {
        "loglevel": registry.declare_string_short("loglevel", "log", "warning"),
        "version": registry.declare_bool_short("version", "V", False),
    }
    return registry, demo_flags, options


def parse_demo(argv) -> tuple[FlagRegistry, list[FlagHandle], dict[str, FlagHandle]]:
    registry, demo_flags, options = build_registry()
    registry.parse(argv)
    return registry, demo_flags, options


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        # The first pass only reads loglevel; the second one runs with logging set up
        _, _, options = parse_demo(argv)
        logging.basicConfig(level=options["loglevel"].value().value.upper())
        _, demo_flags, options = parse_demo(argv)
    except (FlagError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if options["version"].value().value:
        print(f"argflags {__version_display__}")
        return 0

    for flag in demo_flags:
        print(f"{flag.name()} = {flag.value()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
