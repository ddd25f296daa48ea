"""Sqids-backed string codec.

Sqids (https://sqids.org) generates short, URL-safe IDs from non-negative
integers and supports a custom alphabet and minimum length.
"""

from __future__ import annotations

import sys
from typing import Any, Optional

from sqids import Sqids

from ..exceptions import OptionsError
from ..kinds import NumericKind
from ..options import CodecOptions
from .base import StringCodec

# Largest integer the sqids library accepts as a single number
SQIDS_MAX_VALUE = sys.maxsize

_WORD_BITS = 32
_WORD_MASK = (1 << _WORD_BITS) - 1


class SqidsStringCodec(StringCodec):
    """String codec for one NumericKind, backed by a Sqids instance.

    Kinds whose maximum exceeds what sqids encodes as one number (UInt64) are
    written as two 32-bit words ``[high, low]`` once a value passes
    SQIDS_MAX_VALUE. Smaller values always use the one-number form.

    Example:
        >>> codec = SqidsStringCodec(NumericKind.INT32, CodecOptions(min_length=6))
        >>> text = codec.encode(123456)
        >>> codec.decode(text)
        123456
    """

    def __init__(self, kind: NumericKind, options: Optional[CodecOptions] = None) -> None:
        """Initialize the codec.

        Args:
            kind: Integer kind handled by this codec
            options: Minimum length and alphabet (default: CodecOptions())

        Raises:
            OptionsError: If the sqids library rejects the options
        """
        self.kind = kind
        self.options = options or CodecOptions()

        kwargs: dict[str, Any] = {"min_length": self.options.min_length}
        if self.options.alphabet is not None:
            kwargs["alphabet"] = self.options.alphabet

        try:
            self._sqids = Sqids(**kwargs)
        except (TypeError, ValueError) as e:
            raise OptionsError(f"Invalid codec options for {kind}: {e}") from e

        self._split_words = kind.max_value > SQIDS_MAX_VALUE

    def encode(self, value: int) -> str:
        if value > SQIDS_MAX_VALUE and self._split_words:
            return self._sqids.encode([value >> _WORD_BITS, value & _WORD_MASK])
        return self._sqids.encode([value])

    def decode(self, text: str) -> Optional[int]:
        numbers = self._sqids.decode(text)

        if len(numbers) == 1:
            return numbers[0]

        if len(numbers) == 2 and self._split_words:
            high, low = numbers
            if high > _WORD_MASK or low > _WORD_MASK:
                return None
            return (high << _WORD_BITS) | low

        return None

    def __repr__(self) -> str:
        return f"SqidsStringCodec(kind={self.kind}, options={self.options!r})"
