"""Value kinds a flag can be declared with."""

from enum import IntEnum


class FlagKind(IntEnum):
    """The closed set of flag value kinds."""
    BOOL = 1
    LONG = 2
    ULONG = 3
    FLOAT = 4
    DOUBLE = 5
    STRING = 6

    @property
    def display_name(self) -> str:
        """Get a short human-readable name for the kind."""
        names = {
            FlagKind.BOOL: "bool",
            FlagKind.LONG: "long",
            FlagKind.ULONG: "ulong",
            FlagKind.FLOAT: "float",
            FlagKind.DOUBLE: "double",
            FlagKind.STRING: "string",
        }
        return names.get(self, "unknown")

    @property
    def takes_value(self) -> bool:
        """Whether a matched occurrence consumes the following token."""
        # BOOL flags toggle in place and never consume a value token
        return self != FlagKind.BOOL
