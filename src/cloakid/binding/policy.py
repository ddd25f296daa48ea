"""Decode-failure policy for inbound parameter binding.

A binding attempt produces exactly one BindingOutcome and is never retried:

- Success: the text was a canonical encoding of a value
- Rejected: decoding failed and numeric fallback is off
- DeferToFallback: decoding failed and the caller may try plain base-10 parsing

Outgoing serialization never consults this policy; it always fails hard.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

from ..exceptions import DecodeError, InvalidInputError, NonCanonicalInputError
from ..options import BindingOptions


class DecodeFailure(enum.Enum):
    """Why an encoded parameter could not be decoded."""

    INVALID_INPUT = "invalid_input"
    NON_CANONICAL_INPUT = "non_canonical_input"

    @classmethod
    def from_error(cls, error: DecodeError) -> DecodeFailure:
        if isinstance(error, NonCanonicalInputError):
            return cls.NON_CANONICAL_INPUT
        if isinstance(error, InvalidInputError):
            return cls.INVALID_INPUT
        raise TypeError(f"{type(error).__name__} is not a binding decode failure")


@dataclass(frozen=True)
class Success:
    """The parameter decoded to value (None only for an absent optional)."""

    value: Optional[int]


@dataclass(frozen=True)
class Rejected:
    """The parameter must be reported to the client as a binding failure."""

    failure: DecodeFailure
    message: str

    @property
    def reason(self) -> str:
        if self.failure is DecodeFailure.NON_CANONICAL_INPUT:
            return "value is not a canonical encoded identifier"
        return "value is not a valid encoded identifier"


@dataclass(frozen=True)
class DeferToFallback:
    """The caller should try ordinary base-10 parsing of the original text."""

    failure: DecodeFailure


BindingOutcome = Union[Success, Rejected, DeferToFallback]


class FieldBindingPolicy:
    """Maps a decode failure to a BindingOutcome.

    Example:
        >>> policy = FieldBindingPolicy()
        >>> policy.allow_numeric_fallback
        False
        >>> lenient = FieldBindingPolicy(BindingOptions(allow_numeric_fallback=True))
    """

    def __init__(self, options: Optional[BindingOptions] = None) -> None:
        self.options = options or BindingOptions()

    @property
    def allow_numeric_fallback(self) -> bool:
        return self.options.allow_numeric_fallback

    def on_failure(self, error: DecodeError) -> BindingOutcome:
        """Decide what a failed decode means for the binding attempt.

        Args:
            error: InvalidInputError or NonCanonicalInputError from TypedCodec.decode

        Returns:
            DeferToFallback when numeric fallback is allowed, otherwise Rejected

        Raises:
            TypeError: If error is not one of the two decode failures
        """
        failure = DecodeFailure.from_error(error)
        if self.allow_numeric_fallback:
            return DeferToFallback(failure)
        return Rejected(failure, str(error))

    def __repr__(self) -> str:
        return f"FieldBindingPolicy(allow_numeric_fallback={self.allow_numeric_fallback})"
