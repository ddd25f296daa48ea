"""Prometheus metrics for identifier decoding and parameter binding.

Counters are labelled by kind (``int32``, ``uint64``...). Non-canonical input
has its own counter so it can be alerted on apart from malformed input; it is
counted on every decode path, serialization included.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

from .kinds import NumericKind

BINDING_DECODE_SUCCESS_TOTAL = Counter(
    "cloakid_binding_decode_success_total",
    "Total number of parameters decoded from their encoded form during binding.",
    ["kind"],
)
BINDING_DECODE_FAILURE_TOTAL = Counter(
    "cloakid_binding_decode_failure_total",
    "Total number of parameters that failed to decode during binding.",
    ["kind", "failure"],
)
BINDING_NUMERIC_FALLBACK_TOTAL = Counter(
    "cloakid_binding_numeric_fallback_total",
    "Total number of parameters bound through plain base-10 parsing.",
    ["kind"],
)
BINDING_REJECTED_TOTAL = Counter(
    "cloakid_binding_rejected_total",
    "Total number of parameters rejected because numeric fallback is disabled.",
    ["kind"],
)
NON_CANONICAL_INPUT_TOTAL = Counter(
    "cloakid_non_canonical_input_total",
    "Total number of inputs that decoded but were not the canonical encoding.",
    ["kind"],
)
BINDING_DECODE_DURATION_SECONDS = Histogram(
    "cloakid_binding_decode_duration_seconds",
    "Duration of parameter decode attempts during binding.",
    ["kind"],
)


def record_decode_success(kind: NumericKind, duration: float) -> None:
    BINDING_DECODE_SUCCESS_TOTAL.labels(kind=kind.value).inc()
    BINDING_DECODE_DURATION_SECONDS.labels(kind=kind.value).observe(duration)


def record_decode_failure(kind: NumericKind, failure: str, duration: float) -> None:
    BINDING_DECODE_FAILURE_TOTAL.labels(kind=kind.value, failure=failure).inc()
    BINDING_DECODE_DURATION_SECONDS.labels(kind=kind.value).observe(duration)


def record_rejected(kind: NumericKind) -> None:
    BINDING_REJECTED_TOTAL.labels(kind=kind.value).inc()


def record_numeric_fallback(kind: NumericKind) -> None:
    BINDING_NUMERIC_FALLBACK_TOTAL.labels(kind=kind.value).inc()


def record_non_canonical(kind: NumericKind) -> None:
    """Count a non-canonical input on any decode path."""
    NON_CANONICAL_INPUT_TOTAL.labels(kind=kind.value).inc()


__all__ = [
    "BINDING_DECODE_SUCCESS_TOTAL",
    "BINDING_DECODE_FAILURE_TOTAL",
    "BINDING_NUMERIC_FALLBACK_TOTAL",
    "BINDING_REJECTED_TOTAL",
    "NON_CANONICAL_INPUT_TOTAL",
    "BINDING_DECODE_DURATION_SECONDS",
    "record_decode_success",
    "record_decode_failure",
    "record_rejected",
    "record_numeric_fallback",
    "record_non_canonical",
]
