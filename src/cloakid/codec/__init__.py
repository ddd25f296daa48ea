"""Identifier codecs for cloakid.

This module provides the string codec primitive and the multi-width TypedCodec
that enforces canonical encodings.
"""

from __future__ import annotations

from .base import StringCodec
from .sqids_codec import SqidsStringCodec
from .typed import CodecRegistry, TypedCodec, create_codec

__all__ = [
    "StringCodec",
    "SqidsStringCodec",
    "TypedCodec",
    "CodecRegistry",
    "create_codec",
]
