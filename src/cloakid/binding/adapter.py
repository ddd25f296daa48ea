"""Inbound request-parameter binding for cloaked identifiers.

The request layer calls bind_parameter() once per tagged parameter per request
and treats the outcome as final. Every value is tried as an encoded identifier
first, even when it looks like a plain number; base-10 parsing is only a last
resort allowed by the policy.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from .. import metrics
from ..codec.typed import CodecRegistry, TypedCodec
from ..exceptions import (
    InvalidInputError,
    MissingParameterError,
    NonCanonicalInputError,
    ParameterBindingError,
)
from ..kinds import KindLike, unwrap_kind
from ..schema import CloakedField
from .policy import (
    BindingOutcome,
    DeferToFallback,
    FieldBindingPolicy,
    Rejected,
    Success,
)

logger = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"^\s*([+-]?)([0-9]+)\s*$")


def parse_numeric_fallback(text: Optional[str], kind: KindLike) -> Optional[int]:
    """Parse text as a plain base-10 integer of the given kind.

    Args:
        text: Raw parameter text
        kind: Kind bounding the accepted range

    Returns:
        Parsed integer, or None if text is not a decimal number within range
    """
    base_kind, _ = unwrap_kind(kind)
    if text is None:
        return None
    match = _DECIMAL_RE.match(text)
    if match is None:
        return None

    sign, digits = match.group(1), match.group(2).lstrip("0") or "0"
    # Longer inputs are out of range; never hand them to int()
    if len(digits) > len(str(max(-base_kind.min_value, base_kind.max_value))):
        return None

    value = int(sign + digits)
    return value if base_kind.contains(value) else None


class BindingAdapter:
    """Binds raw request parameters to cloaked integer values.

    Examples:
        ```python
        from cloakid import BindingAdapter, CloakedField, NumericKind, create_codec

        codec = create_codec()
        binder = BindingAdapter(codec)
        user_id = codec.encode(42, NumericKind.INT32)
        outcome = binder.bind_parameter(user_id, NumericKind.INT32)

        params = binder.bind_parameters(
            {"user_id": user_id, "page": "2"},
            [CloakedField("user_id", NumericKind.INT32)],
        )
        # params["page"] is passed through untouched
        ```
    """

    def __init__(
        self,
        codecs: Union[TypedCodec, CodecRegistry],
        policy: Optional[FieldBindingPolicy] = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            codecs: Codec set, or a registry for fields with option overrides
            policy: Decode-failure policy (default: reject, no numeric fallback)
        """
        self.registry = CodecRegistry.of(codecs)
        self.policy = policy or FieldBindingPolicy()

    def bind_parameter(
        self,
        raw_text: Optional[str],
        kind: KindLike,
        policy: Optional[FieldBindingPolicy] = None,
        codec: Optional[TypedCodec] = None,
        name: str = "value",
    ) -> BindingOutcome:
        """Attempt to decode one raw parameter.

        Null or empty text is an absent parameter. It binds to Success(None)
        for an optional kind and never reaches the codec or the policy.

        Args:
            raw_text: Parameter text as received
            kind: Kind of the bound parameter
            policy: Overrides the adapter's policy for this call
            codec: Overrides the default codec set for this call
            name: Parameter name used in error messages

        Returns:
            Success, Rejected or DeferToFallback

        Raises:
            UnsupportedKindError: If kind is not supported (never subject to policy)
            MissingParameterError: If raw_text is absent and kind is not optional
        """
        base_kind, optional = unwrap_kind(kind)
        if not raw_text:
            if optional:
                return Success(None)
            raise MissingParameterError(name)

        policy = policy or self.policy
        codec = codec or self.registry.default

        started = time.perf_counter()
        try:
            value = codec.decode(raw_text, base_kind)
        except (InvalidInputError, NonCanonicalInputError) as e:
            outcome = policy.on_failure(e)
            metrics.record_decode_failure(
                base_kind, outcome.failure.value, time.perf_counter() - started
            )
        else:
            metrics.record_decode_success(base_kind, time.perf_counter() - started)
            return Success(value)

        if isinstance(outcome, Rejected):
            metrics.record_rejected(base_kind)
            logger.info("Rejected %s parameter %r: %s", base_kind, name, outcome.failure.value)
        return outcome

    def bind_field(
        self,
        raw_text: Optional[str],
        field: CloakedField,
        policy: Optional[FieldBindingPolicy] = None,
    ) -> BindingOutcome:
        """Attempt to decode one raw parameter described by field metadata."""
        options = field.codec_options(self.registry.default_options)
        return self.bind_parameter(
            raw_text,
            field.kind_spec,
            policy,
            codec=self.registry.codec_for(options),
            name=field.name,
        )

    def resolve(
        self,
        outcome: BindingOutcome,
        raw_text: Optional[str],
        kind: KindLike,
        name: str = "value",
    ) -> Optional[int]:
        """Turn a binding outcome into the final parameter value.

        Args:
            outcome: Result of bind_parameter()
            raw_text: The same raw text passed to bind_parameter()
            kind: The same kind passed to bind_parameter()
            name: Parameter name used in error messages

        Returns:
            Bound value, or None when the parameter stays unbound

        Raises:
            ParameterBindingError: If the outcome is Rejected
        """
        if isinstance(outcome, Success):
            return outcome.value

        if isinstance(outcome, Rejected):
            raise ParameterBindingError(name, outcome.reason)

        if isinstance(outcome, DeferToFallback):
            base_kind, _ = unwrap_kind(kind)
            value = parse_numeric_fallback(raw_text, base_kind)
            if value is not None:
                metrics.record_numeric_fallback(base_kind)
                logger.info("Numeric fallback used for %s parameter %r", kind, name)
            return value

        raise TypeError(f"Unknown binding outcome {outcome!r}")

    def bind_parameters(
        self,
        raw: Mapping[str, Optional[str]],
        fields: Iterable[CloakedField],
        policy: Optional[FieldBindingPolicy] = None,
    ) -> Dict[str, Any]:
        """Bind every tagged parameter of a request.

        Parameters without a CloakedField entry are copied through unchanged.
        Empty text counts as absent, and so does a value the numeric fallback
        could not parse.

        Args:
            raw: Raw parameter values keyed by name
            fields: Cloaked parameter table (e.g. a CloakSchema)
            policy: Overrides the adapter's policy for this call

        Returns:
            Parameter values with cloaked parameters decoded

        Raises:
            ParameterBindingError: If a tagged parameter is rejected
            MissingParameterError: If a required tagged parameter is absent
        """
        bound: Dict[str, Any] = dict(raw)

        for field in fields:
            raw_text = raw.get(field.name)
            value: Optional[int] = None

            if raw_text:
                outcome = self.bind_field(raw_text, field, policy)
                value = self.resolve(outcome, raw_text, field.kind_spec, field.name)

            if value is None and not field.optional:
                raise MissingParameterError(field.name)

            bound[field.name] = value

        return bound
