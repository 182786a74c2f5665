"""Flag registry and the command-line parser that runs against it."""

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .errors import CapacityExceeded, FlagError, ParseFailure, StarvedValue
from .kinds import FlagKind
from .values import FlagValue, value_for_kind

log = logging.getLogger(__name__)

FLAG_CAPACITY = 256
DASH = '-'
IGNORE_MARKER = '/'


@dataclass
class FlagRecord:
    """A declared flag. Name and alias are fixed; the value mutates."""
    name: str
    short_alias: str
    value: FlagValue

    def matches(self, name: str) -> bool:
        return self.name == name or self.short_alias == name

    def snapshot(self) -> 'FlagRecord':
        return FlagRecord(self.name, self.short_alias, self.value.copy())


class FlagHandle:
    """Caller-held reference to one record in a registry.

    Handles are indices into the registry's record list, so they stay
    valid for as long as the registry does.
    """

    def __init__(self, registry: 'FlagRegistry', index: int):
        self._registry = registry
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    @property
    def kind(self) -> FlagKind:
        return self._registry._read(self._index, lambda record: record.value.kind)

    def name(self) -> str:
        return self._registry._read(self._index, lambda record: record.name)

    def short_alias(self) -> str:
        return self._registry._read(self._index, lambda record: record.short_alias)

    def value(self) -> FlagValue:
        """Get a copy of the flag's current value."""
        return self._registry._read(self._index, lambda record: record.value.copy())

    def __repr__(self) -> str:
        return f"FlagHandle({self.name()!r}, {self.value()!r})"


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a recoverable parse: ``error`` is None on success."""
    error: Optional[FlagError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FlagRegistry:
    """Ordered, capacity-bounded collection of declared flags.

    The registry owns every flag's value. ``parse`` walks a token list and
    mutates the matching records in place; callers observe the results
    through the handles returned at declaration time.

    A single re-entrant lock guards declaration, parsing and handle reads.

    Usage:
        registry = FlagRegistry()
        verbose = registry.declare_bool('verbose', False)
        count = registry.declare_long('count', 0)
        registry.parse(['--verbose', '-count', '5'])
        count.value().value  # 5
    """

    def __init__(self, capacity: int = FLAG_CAPACITY, ignore_prefix_enabled: bool = True):
        if capacity < 0:
            raise ValueError("capacity cannot be negative")
        self._capacity = capacity
        self._ignore_prefix_enabled = ignore_prefix_enabled
        self._records: List[FlagRecord] = []
        self._lock = threading.RLock()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def ignore_prefix_enabled(self) -> bool:
        with self._lock:
            return self._ignore_prefix_enabled

    def set_ignore_mode(self, enabled: bool) -> None:
        """Turn the ``/`` ignore marker on or off for subsequent parses."""
        with self._lock:
            self._ignore_prefix_enabled = enabled

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[FlagRecord]:
        return iter(self.records())

    def records(self) -> List[FlagRecord]:
        """Get copies of all records in declaration order."""
        with self._lock:
            return [record.snapshot() for record in self._records]

    def find(self, name: str) -> Optional[FlagHandle]:
        """Get a handle to the first flag whose name or alias is ``name``."""
        with self._lock:
            for index, record in enumerate(self._records):
                if record.matches(name):
                    return FlagHandle(self, index)
        return None

    def _read(self, index: int, getter):
        with self._lock:
            return getter(self._records[index])

    def _match(self, name: str) -> Optional[FlagRecord]:
        for record in self._records:
            if record.matches(name):
                return record
        return None

    # Declaration

    def declare(
        self,
        name: str,
        kind: FlagKind,
        default,
        short_alias: Optional[str] = None
    ) -> FlagHandle:
        """Declare a flag and get a handle to it.

        Args:
            name: Canonical name, matched after leading dashes are stripped
            kind: Value kind of the flag
            default: Initial value, checked against the kind
            short_alias: Alternative name; defaults to the first character of name

        Raises:
            CapacityExceeded: If the registry is full
            TypeError: If default has the wrong type for the kind
            ValueError: If name is empty or default is out of range
        """
        if not name:
            raise ValueError("Flag name cannot be empty")
        if short_alias is None:
            short_alias = name[0]
        value = value_for_kind(kind, default)

        with self._lock:
            if len(self._records) >= self._capacity:
                raise CapacityExceeded(self._capacity)

            for label in dict.fromkeys((name, short_alias)):
                earlier = self._match(label)
                if earlier is not None:
                    log.warning(
                        f"Flag '{name}': '{label}' already matches earlier flag "
                        f"'{earlier.name}', which takes precedence"
                    )

            self._records.append(FlagRecord(name, short_alias, value))
            index = len(self._records) - 1

        log.debug(f"Declared {value.kind.display_name} flag '{name}' "
                  f"(alias '{short_alias}', default {value.render()})")
        return FlagHandle(self, index)

    def declare_bool(self, name: str, default_value: bool) -> FlagHandle:
        """Declare a boolean flag. Each occurrence toggles it: value = not value."""
        return self.declare(name, FlagKind.BOOL, default_value)

    def declare_long(self, name: str, default_value: int) -> FlagHandle:
        return self.declare(name, FlagKind.LONG, default_value)

    def declare_ulong(self, name: str, default_value: int) -> FlagHandle:
        return self.declare(name, FlagKind.ULONG, default_value)

    def declare_float(self, name: str, default_value: float) -> FlagHandle:
        return self.declare(name, FlagKind.FLOAT, default_value)

    def declare_double(self, name: str, default_value: float) -> FlagHandle:
        return self.declare(name, FlagKind.DOUBLE, default_value)

    def declare_string(self, name: str, default_value: str) -> FlagHandle:
        """Declare a string flag. Accepts ``content`` or ``"content"``."""
        return self.declare(name, FlagKind.STRING, default_value)

    def declare_bool_short(self, name: str, short_alias: str, default_value: bool) -> FlagHandle:
        return self.declare(name, FlagKind.BOOL, default_value, short_alias)

    def declare_long_short(self, name: str, short_alias: str, default_value: int) -> FlagHandle:
        return self.declare(name, FlagKind.LONG, default_value, short_alias)

    def declare_ulong_short(self, name: str, short_alias: str, default_value: int) -> FlagHandle:
        return self.declare(name, FlagKind.ULONG, default_value, short_alias)

    def declare_float_short(self, name: str, short_alias: str, default_value: float) -> FlagHandle:
        return self.declare(name, FlagKind.FLOAT, default_value, short_alias)

    def declare_double_short(self, name: str, short_alias: str, default_value: float) -> FlagHandle:
        return self.declare(name, FlagKind.DOUBLE, default_value, short_alias)

    def declare_string_short(self, name: str, short_alias: str, default_value: str) -> FlagHandle:
        return self.declare(name, FlagKind.STRING, default_value, short_alias)

    # Parsing

    def parse(self, tokens: Iterable[str]) -> None:
        """Apply a command line (without the program path) to the registry.

        Each token loses its leading dashes; a following ``/`` marks the
        occurrence as ignored when ignore mode is on. The rest is matched
        against names and aliases in declaration order and the first match
        wins. Unknown tokens are skipped. Boolean flags toggle; every other
        kind consumes the next token as its value, even when ignored.

        Raises:
            StarvedValue: If a flag that takes a value is the last token
            ParseFailure: If a value token is invalid for the flag's kind
        """
        stream = iter(tokens)
        with self._lock:
            for token in stream:
                name = token.lstrip(DASH)
                if not name:
                    continue

                marked = name.startswith(IGNORE_MARKER)
                if marked:
                    name = name[len(IGNORE_MARKER):]
                ignore = self._ignore_prefix_enabled and marked

                record = self._match(name)
                if record is None:
                    log.debug(f"Skipping unknown flag token {token!r}")
                    continue

                self._apply(record, ignore, stream)

    def try_parse(self, tokens: Iterable[str]) -> ParseResult:
        """Like ``parse`` but returns the error instead of raising it."""
        try:
            self.parse(tokens)
        except FlagError as exc:
            return ParseResult(exc)
        return ParseResult()

    def _apply(self, record: FlagRecord, ignore: bool, stream: Iterator[str]) -> None:
        kind = record.value.kind
        if not kind.takes_value:
            if ignore:
                log.debug(f"Ignoring flag '{record.name}'")
            else:
                record.value.toggle()
                log.debug(f"{record.name} = {record.value.render()}")
            return

        token = next(stream, None)
        if token is None:
            raise StarvedValue(record.name, kind)

        if ignore:
            log.debug(f"Ignoring flag '{record.name}' and its value {token!r}")
            return

        try:
            record.value.parse(token)
        except ValueError as exc:
            raise ParseFailure(record.name, token, kind) from exc
        log.debug(f"{record.name} = {record.value.render()}")
