"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Dict, Optional

import pytest

from cloakid import (
    BindingAdapter,
    BindingOptions,
    CodecOptions,
    FieldBindingPolicy,
    NumericKind,
    SerializationAdapter,
    StringCodec,
    TypedCodec,
    create_codec,
)

DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


class AliasingCodec(StringCodec):
    """String codec where two distinct strings decode to the same value.

    "A" is the canonical encoding of 7; "B" also decodes to 7. Every other
    value v is encoded as "n<v>".
    """

    ALIASES: Dict[str, int] = {"A": 7, "B": 7}

    def encode(self, value: int) -> str:
        if value == 7:
            return "A"
        return f"n{value}"

    def decode(self, text: str) -> Optional[int]:
        if text in self.ALIASES:
            return self.ALIASES[text]
        if text.startswith("n") and text[1:].isdigit():
            return int(text[1:])
        return None


class ExplodingCodec(StringCodec):
    """String codec that fails on any call, for asserting no codec invocation."""

    def encode(self, value: int) -> str:
        raise AssertionError("encode must not be called")

    def decode(self, text: str) -> Optional[int]:
        raise AssertionError("decode must not be called")


@pytest.fixture
def codec() -> TypedCodec:
    """Default Sqids codec set (no minimum length)."""
    return create_codec()


@pytest.fixture
def padded_codec() -> TypedCodec:
    """Sqids codec set whose outputs are at least 10 characters."""
    return create_codec(CodecOptions(min_length=10))


@pytest.fixture
def aliasing_codec() -> TypedCodec:
    """Codec set built from AliasingCodec for every kind."""
    return TypedCodec({kind: AliasingCodec() for kind in NumericKind})


@pytest.fixture
def exploding_codec() -> TypedCodec:
    """Codec set that fails if the string codec is ever reached."""
    return TypedCodec({kind: ExplodingCodec() for kind in NumericKind})


@pytest.fixture
def strict_binder(padded_codec: TypedCodec) -> BindingAdapter:
    """Binding adapter that rejects undecodable parameters."""
    return BindingAdapter(padded_codec)


@pytest.fixture
def lenient_binder(padded_codec: TypedCodec) -> BindingAdapter:
    """Binding adapter that defers undecodable parameters to numeric parsing."""
    policy = FieldBindingPolicy(BindingOptions(allow_numeric_fallback=True))
    return BindingAdapter(padded_codec, policy)


@pytest.fixture
def serializer(codec: TypedCodec) -> SerializationAdapter:
    """Serialization adapter over the default codec set."""
    return SerializationAdapter(codec)
