"""Structured-data serialization of cloaked fields."""

from __future__ import annotations

from .adapter import SerializationAdapter

__all__ = ["SerializationAdapter"]
