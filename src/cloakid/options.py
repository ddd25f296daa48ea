"""Configuration for identifier codecs and parameter binding.

This module provides the immutable configuration dataclasses consumed at
startup. Validation happens at construction, before any encode or decode call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Optional

from .exceptions import OptionsError

if TYPE_CHECKING:
    from .binding.policy import FieldBindingPolicy

ENV_MIN_LENGTH = "CLOAKID_MIN_LENGTH"
ENV_ALPHABET = "CLOAKID_ALPHABET"
ENV_ALLOW_NUMERIC_FALLBACK = "CLOAKID_ALLOW_NUMERIC_FALLBACK"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class CodecOptions:
    """Options shared by every string codec in a codec set.

    Attributes:
        min_length: Minimum length of generated encoded IDs (default 0, no minimum).
        alphabet: Custom character set for encoded IDs. If None, the default
            alphabet of the underlying codec is used. A custom alphabet must
            have at least 3 unique, printable, non-whitespace characters.

    Examples:
        ```python
        from cloakid import CodecOptions, create_codec

        options = CodecOptions(min_length=8)
        codec = create_codec(options)

        # Restricted alphabet without look-alike characters
        options = CodecOptions(alphabet="abcdefghjkmnpqrstuvwxyz23456789")
        ```
    """

    min_length: int = 0
    alphabet: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if isinstance(self.min_length, bool) or not isinstance(self.min_length, int):
            raise OptionsError(f"min_length must be an integer, got {self.min_length!r}")
        if self.min_length < 0:
            raise OptionsError(f"min_length must be 0 or greater, got {self.min_length}")

        if self.alphabet is not None:
            validate_alphabet(self.alphabet)

    def merged(
        self, min_length: Optional[int] = None, alphabet: Optional[str] = None
    ) -> CodecOptions:
        """Return options with any given overrides applied."""
        return CodecOptions(
            min_length=self.min_length if min_length is None else min_length,
            alphabet=self.alphabet if alphabet is None else alphabet,
        )


def validate_alphabet(alphabet: str) -> None:
    """Check that an alphabet is usable for identifier encoding.

    Raises:
        OptionsError: If the alphabet is empty, too short, has duplicates,
            whitespace, or non-printable characters
    """
    if not isinstance(alphabet, str):
        raise OptionsError(f"Alphabet must be a string, got {type(alphabet).__name__}")
    if not alphabet or alphabet.isspace():
        raise OptionsError("Alphabet cannot be empty or whitespace")
    if len(alphabet) < 3:
        raise OptionsError(
            f"Alphabet must contain at least 3 characters, got {len(alphabet)}"
        )

    seen: set[str] = set()
    for char in alphabet:
        if char.isspace():
            raise OptionsError(f"Alphabet contains whitespace character {char!r}")
        if not char.isprintable():
            raise OptionsError(f"Alphabet contains non-printable character {char!r}")
        if char in seen:
            raise OptionsError(f"Alphabet contains duplicate character {char!r}")
        seen.add(char)


@dataclass(frozen=True)
class BindingOptions:
    """Options for inbound parameter binding.

    Attributes:
        allow_numeric_fallback: Accept plain base-10 numbers when decoding fails
            (default False). Leaving this off rejects any non-encoded value.
            Turning it on keeps older clients that send raw numeric IDs working,
            but lets a caller probe identifiers systematically.
    """

    allow_numeric_fallback: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.allow_numeric_fallback, bool):
            raise OptionsError(
                f"allow_numeric_fallback must be a bool, got {self.allow_numeric_fallback!r}"
            )


@dataclass(frozen=True)
class CloakIdConfig:
    """Complete configuration surface of the identifier core.

    Examples:
        ```python
        from cloakid import CloakIdConfig, BindingAdapter, create_codec

        config = CloakIdConfig.from_env()
        codec = create_codec(config.codec_options())
        binder = BindingAdapter(codec, config.binding_policy())
        ```
    """

    min_length: int = 0
    alphabet: Optional[str] = None
    allow_numeric_fallback: bool = False

    def __post_init__(self) -> None:
        # Fail fast on the whole surface, not on first use
        self.codec_options()
        self.binding_options()

    def codec_options(self) -> CodecOptions:
        return CodecOptions(min_length=self.min_length, alphabet=self.alphabet)

    def binding_options(self) -> BindingOptions:
        return BindingOptions(allow_numeric_fallback=self.allow_numeric_fallback)

    def binding_policy(self) -> FieldBindingPolicy:
        """Build the FieldBindingPolicy described by this configuration."""
        # Import here to avoid circular dependency
        from .binding.policy import FieldBindingPolicy

        return FieldBindingPolicy(self.binding_options())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> CloakIdConfig:
        """Read configuration from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            CloakIdConfig instance

        Raises:
            OptionsError: If a variable holds a malformed value
        """
        env = os.environ if environ is None else environ

        raw_min_length = env.get(ENV_MIN_LENGTH, "").strip()
        try:
            min_length = int(raw_min_length) if raw_min_length else 0
        except ValueError as e:
            raise OptionsError(
                f"{ENV_MIN_LENGTH} must be an integer, got {raw_min_length!r}"
            ) from e

        alphabet = env.get(ENV_ALPHABET) or None

        raw_fallback = env.get(ENV_ALLOW_NUMERIC_FALLBACK, "").strip().lower()
        if raw_fallback in _TRUE_VALUES:
            allow_numeric_fallback = True
        elif raw_fallback in _FALSE_VALUES:
            allow_numeric_fallback = False
        else:
            raise OptionsError(
                f"{ENV_ALLOW_NUMERIC_FALLBACK} must be a boolean, got {raw_fallback!r}"
            )

        return cls(
            min_length=min_length,
            alphabet=alphabet,
            allow_numeric_fallback=allow_numeric_fallback,
        )
