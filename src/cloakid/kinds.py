"""Integer kinds supported by the identifier codec.

Python integers have no fixed width, so every cloaked value is tagged with a
NumericKind that selects the underlying string codec and bounds the values it
accepts.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from .exceptions import UnsupportedKindError


class NumericKind(enum.Enum):
    """Closed set of integer widths an identifier may have.

    Example:
        >>> NumericKind.INT32.max_value
        2147483647
        >>> NumericKind.parse("ulong")
        <NumericKind.UINT64: 'uint64'>
    """

    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"

    @property
    def bits(self) -> int:
        return int(self.value[-2:])

    @property
    def signed(self) -> bool:
        return not self.value.startswith("u")

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    @property
    def optional(self) -> OptionalKind:
        """This kind wrapped so that null values are allowed."""
        return OptionalKind(self)

    def contains(self, value: int) -> bool:
        """Return True if value fits this kind's full signed/unsigned range."""
        return self.min_value <= value <= self.max_value

    @classmethod
    def parse(cls, name: str) -> NumericKind:
        """Look up a kind by name.

        Accepts the canonical names (``int32``) as well as the C-style aliases
        (``short``, ``ushort``, ``int``, ``uint``, ``long``, ``ulong``).

        Raises:
            UnsupportedKindError: If the name is unknown
        """
        key = name.strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError as e:
            raise UnsupportedKindError(f"Unsupported numeric kind {name!r}") from e

    def __str__(self) -> str:
        return self.value


_ALIASES = {
    "short": "int16",
    "ushort": "uint16",
    "int": "int32",
    "uint": "uint32",
    "long": "int64",
    "ulong": "uint64",
}


@dataclass(frozen=True)
class OptionalKind:
    """A NumericKind whose values may be null.

    Null input short-circuits to "no value" and never reaches the codec.
    """

    kind: NumericKind

    @property
    def optional(self) -> OptionalKind:
        return self

    def __str__(self) -> str:
        return f"{self.kind}?"


KindLike = Union[NumericKind, OptionalKind]


def unwrap_kind(kind: object) -> tuple[NumericKind, bool]:
    """Split a kind into its NumericKind and whether it is optional.

    Raises:
        UnsupportedKindError: If kind is neither a NumericKind nor an OptionalKind
    """
    if isinstance(kind, NumericKind):
        return kind, False
    if isinstance(kind, OptionalKind) and isinstance(kind.kind, NumericKind):
        return kind.kind, True
    raise UnsupportedKindError(f"Type {kind!r} is not a supported numeric kind")
