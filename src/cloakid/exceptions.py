"""Exception hierarchy for cloakid.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from CloakIdError for easy catching of any cloakid-specific error.
"""

from __future__ import annotations

from typing import Any


class CloakIdError(Exception):
    """Base exception for all cloakid errors."""

    pass


class OptionsError(CloakIdError, ValueError):
    """Raised when codec or binding configuration is invalid.

    Examples:
        - Negative minimum length
        - Alphabet shorter than 3 characters
        - Alphabet with duplicate or whitespace characters
        - Malformed environment variable
    """

    pass


class UnsupportedKindError(CloakIdError, TypeError):
    """Raised when a codec call names a kind outside the six integer kinds.

    This is a programming or configuration error. It is never handled by the
    numeric fallback policy.
    """

    pass


class SchemaError(CloakIdError):
    """Raised when a cloaked model field is declared incorrectly.

    Examples:
        - Cloak marker attached to a non-integer field
        - Complex Union annotation on a cloaked field
    """

    pass


class EncodeError(CloakIdError):
    """Raised when a value cannot be encoded.

    Examples:
        - Value is not an integer
        - Negative value
        - Value above the kind's maximum
    """

    pass


class DecodeError(CloakIdError):
    """Base class for failures while decoding an encoded identifier."""

    pass


class InvalidInputError(DecodeError):
    """Raised when input text is empty, malformed, or not decodable.

    Examples:
        - Empty or null text
        - Characters outside the alphabet
        - Decoded value outside the requested kind's range
    """

    pass


class NonCanonicalInputError(DecodeError):
    """Raised when input decodes but is not the canonical encoding of its value.

    Two distinct strings must never denote the same identifier. This failure is
    kept apart from InvalidInputError so it can be logged and alerted on
    separately.

    Attributes:
        text: The rejected input
        kind: Kind the input was decoded against
        canonical: The canonical encoding of the decoded value
    """

    def __init__(self, text: str, kind: Any, canonical: str) -> None:
        super().__init__(
            f"Invalid non-canonical encoding {text!r} for {kind}. "
            f"The canonical encoding for this value is {canonical!r}."
        )
        self.text = text
        self.kind = kind
        self.canonical = canonical


class MissingRequiredValueError(DecodeError):
    """Raised when null is read for a field that is not optional."""

    pass


class MalformedPayloadError(DecodeError):
    """Raised when a structured payload cannot be deserialized.

    The specific failure is chained as ``__cause__``.
    """

    pass


class ParameterBindingError(CloakIdError):
    """Raised when an inbound request parameter fails validation.

    Attributes:
        name: Parameter name
        reason: Short description of the failure
    """

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Parameter {name!r}: {reason}")
        self.name = name
        self.reason = reason


class MissingParameterError(ParameterBindingError):
    """Raised when a required request parameter is absent."""

    def __init__(self, name: str) -> None:
        super().__init__(name, "required parameter is missing")
