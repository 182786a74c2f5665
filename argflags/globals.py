"""Process-wide flag registry and module-level declaration functions.

There is intentionally one ambient registry per process. It is created on
first use and every access to it goes through the registry's own lock.
Code that needs isolation (tests, libraries) should build its own
``FlagRegistry`` instead.

Usage:
    from argflags import flag_bool, flag_long, parse_args

    verbose = flag_bool('verbose', False)
    count = flag_long('count', 0)
    parse_args()
    print(count.name(), '=', count.value())
"""

import logging
import sys
import threading
from typing import Optional, Sequence

from .errors import FlagError
from .registry import FlagHandle, FlagRegistry

log = logging.getLogger(__name__)

_lock = threading.Lock()
_registry: Optional[FlagRegistry] = None


def default_registry() -> FlagRegistry:
    """Get the process-wide registry, creating it on first use."""
    global _registry
    with _lock:
        if _registry is None:
            _registry = FlagRegistry()
        return _registry


def reset_default_registry() -> None:
    """Drop the process-wide registry. Previously issued handles keep the old one."""
    global _registry
    with _lock:
        _registry = None


def parse_args(argv: Optional[Sequence[str]] = None) -> None:
    """Parse the process command line into the process-wide registry.

    Args:
        argv: Tokens to parse; defaults to sys.argv without the program path

    Any flag error is fatal: it is logged and the process exits with status 1.
    """
    if argv is None:
        argv = sys.argv[1:]
    try:
        default_registry().parse(argv)
    except FlagError as exc:
        log.error(str(exc))
        sys.exit(1)


def set_ignore_mode(enabled: bool) -> None:
    default_registry().set_ignore_mode(enabled)


def disable_flag_ignore() -> None:
    """Let ``--/name`` apply like ``--name``. The marker is still dropped from the name."""
    set_ignore_mode(False)


def flag_bool(name: str, default_value: bool) -> FlagHandle:
    """Create a new boolean flag. It works like a toggle: value = not value."""
    return default_registry().declare_bool(name, default_value)


def flag_long(name: str, default_value: int) -> FlagHandle:
    return default_registry().declare_long(name, default_value)


def flag_ulong(name: str, default_value: int) -> FlagHandle:
    return default_registry().declare_ulong(name, default_value)


def flag_float(name: str, default_value: float) -> FlagHandle:
    return default_registry().declare_float(name, default_value)


def flag_double(name: str, default_value: float) -> FlagHandle:
    return default_registry().declare_double(name, default_value)


def flag_string(name: str, default_value: str) -> FlagHandle:
    """Create a new string flag. Accepts ``content`` or ``"content"``."""
    return default_registry().declare_string(name, default_value)


def flag_bool_short(name: str, short_alias: str, default_value: bool) -> FlagHandle:
    return default_registry().declare_bool_short(name, short_alias, default_value)


def flag_long_short(name: str, short_alias: str, default_value: int) -> FlagHandle:
    return default_registry().declare_long_short(name, short_alias, default_value)


def flag_ulong_short(name: str, short_alias: str, default_value: int) -> FlagHandle:
    return default_registry().declare_ulong_short(name, short_alias, default_value)


def flag_float_short(name: str, short_alias: str, default_value: float) -> FlagHandle:
    return default_registry().declare_float_short(name, short_alias, default_value)


def flag_double_short(name: str, short_alias: str, default_value: float) -> FlagHandle:
    return default_registry().declare_double_short(name, short_alias, default_value)


def flag_string_short(name: str, short_alias: str, default_value: str) -> FlagHandle:
    return default_registry().declare_string_short(name, short_alias, default_value)
