"""
Typed command-line flags backed by a registry that parses argv in place.

Key features:
- Boolean, signed/unsigned 64-bit integer, float, double and string flags
- Canonical names with a short alias (first character by default)
- Leading dashes are optional; unknown tokens are skipped
- ``--/name`` consumes an occurrence (and its value) without applying it
- Handles read the live value at any time after parsing
"""

from .errors import CapacityExceeded, FlagError, ParseFailure, StarvedValue
from .globals import (
    default_registry,
    disable_flag_ignore,
    flag_bool,
    flag_bool_short,
    flag_double,
    flag_double_short,
    flag_float,
    flag_float_short,
    flag_long,
    flag_long_short,
    flag_string,
    flag_string_short,
    flag_ulong,
    flag_ulong_short,
    parse_args,
    reset_default_registry,
    set_ignore_mode,
)
from .kinds import FlagKind
from .registry import FLAG_CAPACITY, FlagHandle, FlagRecord, FlagRegistry, ParseResult
from .values import (
    BoolValue,
    DoubleValue,
    FloatValue,
    FlagValue,
    LongValue,
    StringValue,
    ULongValue,
)
from .version import __version__

__all__ = [
    'CapacityExceeded',
    'FlagError',
    'ParseFailure',
    'StarvedValue',
    'FlagKind',
    'FLAG_CAPACITY',
    'FlagHandle',
    'FlagRecord',
    'FlagRegistry',
    'ParseResult',
    'FlagValue',
    'BoolValue',
    'LongValue',
    'ULongValue',
    'FloatValue',
    'DoubleValue',
    'StringValue',
    'default_registry',
    'reset_default_registry',
    'parse_args',
    'set_ignore_mode',
    'disable_flag_ignore',
    'flag_bool',
    'flag_long',
    'flag_ulong',
    'flag_float',
    'flag_double',
    'flag_string',
    'flag_bool_short',
    'flag_long_short',
    'flag_ulong_short',
    'flag_float_short',
    'flag_double_short',
    'flag_string_short',
    '__version__',
]
