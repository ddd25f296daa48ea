"""Multi-width identifier codec.

This module provides TypedCodec, which owns one StringCodec per NumericKind,
dispatches encode/decode calls by kind, and rejects every input string that is
not the canonical encoding of the value it decodes to.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Union

from ..exceptions import (
    CloakIdError,
    EncodeError,
    InvalidInputError,
    NonCanonicalInputError,
    OptionsError,
    UnsupportedKindError,
)
from ..kinds import KindLike, NumericKind, unwrap_kind
from ..metrics import record_non_canonical
from ..options import CodecOptions
from .base import StringCodec
from .sqids_codec import SqidsStringCodec

logger = logging.getLogger(__name__)

# Longest prefix of rejected input written to logs
_LOG_PREVIEW_CHARS = 32


def _preview(text: str) -> str:
    if len(text) <= _LOG_PREVIEW_CHARS:
        return repr(text)
    return repr(text[:_LOG_PREVIEW_CHARS]) + "..."


class TypedCodec:
    """Encodes and decodes integers of any supported kind.

    Every call is independent; the codec table is read-only after
    construction, so one instance can be shared by any number of threads.

    Example:
        >>> codec = TypedCodec.from_options(CodecOptions(min_length=6))
        >>> text = codec.encode(123456, NumericKind.INT32)
        >>> codec.decode(text, NumericKind.INT32)
        123456
        >>> codec.decode(None, NumericKind.INT32.optional) is None
        True
    """

    def __init__(
        self,
        codecs: Mapping[NumericKind, StringCodec],
        options: Optional[CodecOptions] = None,
    ) -> None:
        """Initialize from one string codec per kind.

        Args:
            codecs: Mapping covering every NumericKind
            options: Options the codecs were built with, if known

        Raises:
            OptionsError: If a kind has no codec
        """
        missing = [kind.value for kind in NumericKind if kind not in codecs]
        if missing:
            raise OptionsError(f"No string codec configured for kinds: {', '.join(missing)}")

        self._codecs: Mapping[NumericKind, StringCodec] = MappingProxyType(
            {kind: codecs[kind] for kind in NumericKind}
        )
        self.options = options

    @classmethod
    def from_options(cls, options: Optional[CodecOptions] = None) -> TypedCodec:
        """Build a codec set of SqidsStringCodec instances sharing the same options."""
        options = options or CodecOptions()
        return cls({kind: SqidsStringCodec(kind, options) for kind in NumericKind}, options)

    def encode(self, value: Any, kind: KindLike) -> Optional[str]:
        """Encode an integer as an opaque string.

        Args:
            value: Integer to encode, or None for an optional kind
            kind: NumericKind or OptionalKind selecting the string codec

        Returns:
            Encoded string, or None when value is None and kind is optional

        Raises:
            UnsupportedKindError: If kind is not a supported kind or value is not an int
            EncodeError: If value is None for a required kind or out of range
        """
        base_kind, optional = unwrap_kind(kind)

        if value is None:
            if optional:
                return None
            raise EncodeError(f"Cannot encode null as required kind {base_kind}")

        if isinstance(value, bool) or not isinstance(value, int):
            raise UnsupportedKindError(
                f"Type {type(value).__name__!r} is not supported for encoding as {base_kind}"
            )

        if value < 0:
            raise EncodeError(f"Cannot encode negative value {value} as {base_kind}")
        if value > base_kind.max_value:
            raise EncodeError(
                f"Value {value} exceeds maximum {base_kind.max_value} for {base_kind}"
            )

        return self._codecs[base_kind].encode(value)

    def decode(self, text: Optional[str], kind: KindLike) -> Optional[int]:
        """Decode a canonical encoded string back to its integer.

        Args:
            text: Encoded string, or None for an optional kind
            kind: NumericKind or OptionalKind selecting the string codec

        Returns:
            Decoded integer, or None when text is None and kind is optional

        Raises:
            UnsupportedKindError: If kind is not a supported kind
            InvalidInputError: If text is empty, malformed, or out of the kind's range
            NonCanonicalInputError: If text decodes but is not the canonical encoding
        """
        base_kind, optional = unwrap_kind(kind)

        if text is None:
            if optional:
                return None
            raise InvalidInputError(f"Cannot decode null as required kind {base_kind}")

        if not isinstance(text, str):
            raise InvalidInputError(
                f"Expected encoded string for {base_kind}, got {type(text).__name__}"
            )

        if not text:
            raise InvalidInputError(f"Cannot decode empty string as {base_kind}")

        codec = self._codecs[base_kind]

        try:
            value = codec.decode(text)
        except CloakIdError:
            raise
        except Exception as e:
            logger.debug("Malformed %s identifier %s: %s", base_kind, _preview(text), e)
            raise InvalidInputError(f"Unable to decode {text!r} to {base_kind}") from e

        if value is None:
            logger.debug("Malformed %s identifier %s", base_kind, _preview(text))
            raise InvalidInputError(f"Unable to decode {text!r} - invalid format")

        # Out-of-range values are rejected, never truncated
        if not 0 <= value <= base_kind.max_value:
            logger.debug("Out-of-range %s identifier %s", base_kind, _preview(text))
            raise InvalidInputError(f"Decoded value of {text!r} is out of range for {base_kind}")

        try:
            canonical = codec.encode(value)
        except CloakIdError:
            raise
        except Exception as e:
            raise InvalidInputError(f"Unable to re-encode {text!r} as {base_kind}") from e

        if canonical != text:
            logger.warning(
                "Rejected non-canonical %s identifier %s", base_kind, _preview(text)
            )
            record_non_canonical(base_kind)
            raise NonCanonicalInputError(text, base_kind, canonical)

        return value

    def __repr__(self) -> str:
        return f"TypedCodec({dict(self._codecs)!r})"


class CodecRegistry:
    """Hands out one TypedCodec per distinct set of codec options.

    Fields may override the default minimum length or alphabet; each distinct
    effective CodecOptions gets its own codec set, built once and reused.

    Example:
        >>> registry = CodecRegistry(CodecOptions(min_length=4))
        >>> registry.default is registry.codec_for(None)
        True
        >>> wide = registry.codec_for(CodecOptions(min_length=12))
    """

    def __init__(
        self,
        default_options: Optional[CodecOptions] = None,
        factory: Callable[[CodecOptions], TypedCodec] = TypedCodec.from_options,
        default_codec: Optional[TypedCodec] = None,
    ) -> None:
        """Initialize the registry.

        Args:
            default_options: Options for fields without overrides
            factory: Builds a codec set for a given CodecOptions
            default_codec: Prebuilt codec set to use for default_options
        """
        self.default_options = default_options or CodecOptions()
        self._factory = factory
        self._lock = threading.Lock()
        self._codecs: Dict[CodecOptions, TypedCodec] = {
            self.default_options: default_codec or factory(self.default_options)
        }

    @classmethod
    def of(cls, codecs: Union[TypedCodec, CodecRegistry]) -> CodecRegistry:
        """Return codecs as a registry, wrapping a bare TypedCodec as its default."""
        if isinstance(codecs, CodecRegistry):
            return codecs
        return cls(codecs.options, default_codec=codecs)

    @property
    def default(self) -> TypedCodec:
        return self._codecs[self.default_options]

    def codec_for(self, options: Optional[CodecOptions]) -> TypedCodec:
        """Return the codec set for options, building it on first use."""
        if options is None:
            return self.default

        codec = self._codecs.get(options)
        if codec is not None:
            return codec

        with self._lock:
            codec = self._codecs.get(options)
            if codec is None:
                codec = self._factory(options)
                self._codecs[options] = codec
        return codec


def create_codec(options: Optional[CodecOptions] = None) -> TypedCodec:
    """Create the default Sqids-backed codec set.

    Args:
        options: Minimum length and alphabet (default: CodecOptions())

    Returns:
        TypedCodec ready for use

    Raises:
        OptionsError: If the options are rejected by the underlying codec
    """
    return TypedCodec.from_options(options)
