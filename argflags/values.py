"""Typed flag values that parse command-line tokens into themselves."""

import math
import re
import struct
from decimal import Decimal
from typing import Any, Dict, Type

from .kinds import FlagKind

QUOTE = '"'

LONG_MIN = -(2 ** 63)
LONG_MAX = 2 ** 63 - 1
ULONG_MAX = 2 ** 64 - 1

_LONG_LITERAL = re.compile(r'[+-]?[0-9]+')
_ULONG_LITERAL = re.compile(r'\+?[0-9]+')
_FLOAT_LITERAL = re.compile(
    r'[+-]?(?:inf|infinity|nan|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:e[+-]?[0-9]+)?)',
    re.IGNORECASE,
)


def _to_single(value: float) -> float:
    """Round a double to the nearest single precision value."""
    try:
        return struct.unpack('<f', struct.pack('<f', value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _render_special(value: float):
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    return None


def _positional(text: str) -> str:
    # 1e+20 -> 100000000000000000000, 1.0 -> 1
    return format(Decimal(text).normalize(), 'f')


class FlagValue:
    """Base class for a live, mutable flag value of one fixed kind.

    Subclasses pin ``kind`` and implement ``validate`` (checks a Python
    default), ``parse`` (replaces the payload from a command-line token)
    and ``render`` (textual form of the payload).
    """

    kind: FlagKind

    def __init__(self, default: Any):
        self.value = self.validate(default)

    def validate(self, value: Any) -> Any:
        """Validate and convert value if needed. Returns validated value."""
        raise NotImplementedError

    def parse(self, token: str) -> None:
        """Replace the payload with the value the token spells.

        Raises:
            ValueError: If the token is not a valid literal for the kind
        """
        raise NotImplementedError

    def render(self) -> str:
        raise NotImplementedError

    def copy(self) -> 'FlagValue':
        return type(self)(self.value)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlagValue):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    __hash__ = None


class BoolValue(FlagValue):
    """A boolean value. Booleans are toggled by the parser, never parsed."""

    kind = FlagKind.BOOL

    def validate(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise TypeError(f"bool flag expects boolean, got {type(value).__name__}")
        return value

    def toggle(self) -> None:
        self.value = not self.value

    def parse(self, token: str) -> None:
        raise TypeError("bool flags are toggled, not parsed")

    def render(self) -> str:
        return 'true' if self.value else 'false'


class _IntegerValue(FlagValue):
    """Shared range checking for the integer kinds."""

    min_value: int
    max_value: int
    literal: 're.Pattern[str]'

    def validate(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"{self.kind.display_name} flag expects integer, got {type(value).__name__}"
            )
        if value < self.min_value or value > self.max_value:
            raise ValueError(
                f"{self.kind.display_name} value {value} outside "
                f"[{self.min_value}, {self.max_value}]"
            )
        return value

    def parse(self, token: str) -> None:
        if not self.literal.fullmatch(token):
            raise ValueError(f"invalid {self.kind.display_name} literal {token!r}")
        self.value = self.validate(int(token))

    def render(self) -> str:
        return str(self.value)


class LongValue(_IntegerValue):
    """A signed 64-bit integer."""

    kind = FlagKind.LONG
    min_value = LONG_MIN
    max_value = LONG_MAX
    literal = _LONG_LITERAL


class ULongValue(_IntegerValue):
    """An unsigned 64-bit integer. A leading minus sign is never accepted."""

    kind = FlagKind.ULONG
    min_value = 0
    max_value = ULONG_MAX
    literal = _ULONG_LITERAL


class _FloatingValue(FlagValue):
    """Shared literal grammar and rendering for the floating kinds."""

    def validate(self, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(
                f"{self.kind.display_name} flag expects number, got {type(value).__name__}"
            )
        return self._round(float(value))

    def _round(self, value: float) -> float:
        return value

    def _shortest(self) -> str:
        return repr(self.value)

    def parse(self, token: str) -> None:
        if not _FLOAT_LITERAL.fullmatch(token):
            raise ValueError(f"invalid {self.kind.display_name} literal {token!r}")
        self.value = self.validate(float(token))

    def render(self) -> str:
        special = _render_special(self.value)
        if special is not None:
            return special
        return _positional(self._shortest())


class DoubleValue(_FloatingValue):
    """A double precision float."""

    kind = FlagKind.DOUBLE


class FloatValue(_FloatingValue):
    """A single precision float, stored as the nearest single value.

    Literals beyond single precision range become a signed infinity.
    """

    kind = FlagKind.FLOAT

    def _round(self, value: float) -> float:
        return _to_single(value)

    def _shortest(self) -> str:
        # Shortest digits that survive a round trip through single precision
        for digits in range(1, 10):
            text = f'{self.value:.{digits}g}'
            if _to_single(float(text)) == self.value:
                return text
        return repr(self.value)


class StringValue(FlagValue):
    """A text value.

    Accepted input tokens:
    - content
    - "content"

    A token starting with a quote loses its first and last character
    whether or not the last one is a quote.
    """

    kind = FlagKind.STRING

    def validate(self, value: Any) -> str:
        if not isinstance(value, str):
            raise TypeError(f"string flag expects str, got {type(value).__name__}")
        return value

    def parse(self, token: str) -> None:
        if token.startswith(QUOTE):
            if len(token) < 2:
                raise ValueError(f"unterminated quoted string {token!r}")
            self.value = token[1:-1]
        else:
            self.value = token

    def render(self) -> str:
        return f'{QUOTE}{self.value}{QUOTE}'


VALUE_TYPES: Dict[FlagKind, Type[FlagValue]] = {
    FlagKind.BOOL: BoolValue,
    FlagKind.LONG: LongValue,
    FlagKind.ULONG: ULongValue,
    FlagKind.FLOAT: FloatValue,
    FlagKind.DOUBLE: DoubleValue,
    FlagKind.STRING: StringValue,
}


def value_for_kind(kind: FlagKind, default: Any) -> FlagValue:
    """Build the value object for a kind, validating the default."""
    return VALUE_TYPES[FlagKind(kind)](default)
