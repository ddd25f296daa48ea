"""cloakid: Reversible Identifier Obfuscation

A Python library that exposes numeric surrogate keys as short, opaque strings
so that sequential database IDs never reach clients. Built on Sqids
(https://sqids.org) with a strict canonical-form check on every decode.

Key Features:
- Six integer kinds (16/32/64-bit, signed/unsigned) with range checks
- Canonical-form validation: each value has exactly one accepted string
- Pydantic-based field tagging with per-field length/alphabet overrides
- Request-parameter binding with an explicit numeric fallback policy

Quick Start:
    >>> from typing import Annotated
    >>> from pydantic import BaseModel
    >>> from cloakid import Cloak, NumericKind, SerializationAdapter, create_codec
    >>>
    >>> class User(BaseModel):
    ...     id: Annotated[int, Cloak(NumericKind.INT64)]
    ...     name: str
    >>>
    >>> codec = create_codec()
    >>> adapter = SerializationAdapter(codec)
    >>> payload = adapter.dumps(User(id=42, name="Ada"))
    >>> user = adapter.loads(User, payload)
"""

from __future__ import annotations

from .binding import (
    BindingAdapter,
    BindingOutcome,
    DecodeFailure,
    DeferToFallback,
    FieldBindingPolicy,
    Rejected,
    Success,
    parse_numeric_fallback,
)
from .codec import CodecRegistry, SqidsStringCodec, StringCodec, TypedCodec, create_codec
from .exceptions import (
    CloakIdError,
    DecodeError,
    EncodeError,
    InvalidInputError,
    MalformedPayloadError,
    MissingParameterError,
    MissingRequiredValueError,
    NonCanonicalInputError,
    OptionsError,
    ParameterBindingError,
    SchemaError,
    UnsupportedKindError,
)
from .fields import Cloak
from .kinds import NumericKind, OptionalKind
from .options import BindingOptions, CloakIdConfig, CodecOptions
from .schema import CloakedField, CloakSchema
from .serialization import SerializationAdapter

__version__ = "0.1.0"

__all__ = [
    # Core API
    "NumericKind",
    "OptionalKind",
    "TypedCodec",
    "create_codec",
    "CodecRegistry",
    "StringCodec",
    "SqidsStringCodec",
    # Configuration
    "CodecOptions",
    "BindingOptions",
    "CloakIdConfig",
    # Field metadata
    "Cloak",
    "CloakedField",
    "CloakSchema",
    # Adapters
    "SerializationAdapter",
    "BindingAdapter",
    "FieldBindingPolicy",
    "BindingOutcome",
    "DecodeFailure",
    "Success",
    "Rejected",
    "DeferToFallback",
    "parse_numeric_fallback",
    # Exceptions
    "CloakIdError",
    "OptionsError",
    "UnsupportedKindError",
    "SchemaError",
    "EncodeError",
    "DecodeError",
    "InvalidInputError",
    "NonCanonicalInputError",
    "MissingRequiredValueError",
    "MalformedPayloadError",
    "ParameterBindingError",
    "MissingParameterError",
    # Version
    "__version__",
]
