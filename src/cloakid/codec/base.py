"""Abstract interface for string codecs.

A string codec maps a single non-negative integer to a short string and back.
It is the replaceable primitive underneath TypedCodec:

- SqidsStringCodec: default implementation backed by the sqids library
- Custom codecs: any deterministic, injective mapping (e.g. test doubles)

The primitive does not need to guarantee that each value has a single string
form; TypedCodec enforces that by re-encoding every decoded value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class StringCodec(ABC):
    """Abstract interface for a single-width integer string codec.

    Examples:
        ```python
        class HexCodec(StringCodec):
            def encode(self, value: int) -> str:
                return format(value, "x")

            def decode(self, text: str) -> Optional[int]:
                try:
                    return int(text, 16)
                except ValueError:
                    return None
        ```
    """

    @abstractmethod
    def encode(self, value: int) -> str:
        """Encode a non-negative integer.

        Args:
            value: Integer already checked against the kind's range

        Returns:
            Encoded string
        """
        ...

    @abstractmethod
    def decode(self, text: str) -> Optional[int]:
        """Decode a string produced by encode().

        Args:
            text: Non-empty input string

        Returns:
            Decoded integer, or None if the text holds no decodable value
        """
        ...
