"""Inbound parameter binding for cloaked identifiers."""

from __future__ import annotations

from .adapter import BindingAdapter, parse_numeric_fallback
from .policy import (
    BindingOutcome,
    DecodeFailure,
    DeferToFallback,
    FieldBindingPolicy,
    Rejected,
    Success,
)

__all__ = [
    "BindingAdapter",
    "parse_numeric_fallback",
    "FieldBindingPolicy",
    "BindingOutcome",
    "DecodeFailure",
    "Success",
    "Rejected",
    "DeferToFallback",
]
