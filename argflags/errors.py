"""Errors raised while declaring flags or parsing a command line."""

from .kinds import FlagKind


class FlagError(Exception):
    """Base class for every error the flag registry reports."""


class CapacityExceeded(FlagError):
    """Declaring another flag would go past the registry capacity."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"exceeded flag capacity of {capacity}")


class ParseFailure(FlagError):
    """A value token could not be converted to the matched flag's kind."""

    def __init__(self, flag_name: str, token: str, kind: FlagKind):
        self.flag_name = flag_name
        self.token = token
        self.kind = kind
        super().__init__(
            f"flag '{flag_name}' expects a {kind.display_name} value, got {token!r}"
        )


class StarvedValue(FlagError):
    """A flag that takes a value was the last token on the command line."""

    def __init__(self, flag_name: str, kind: FlagKind):
        self.flag_name = flag_name
        self.kind = kind
        super().__init__(
            f"flag '{flag_name}' expects a {kind.display_name} value, but none was given"
        )
