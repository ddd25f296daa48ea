#!/usr/bin/env python3
"""Request parameter binding example for cloakid.

A route such as ``GET /orders/{order_id}?customer_id=...`` receives its
identifiers as text. This example shows how tagged parameters are decoded,
how failures are turned into per-parameter errors, and how the numeric
fallback lets legacy clients keep sending plain numbers during a migration.
"""

from __future__ import annotations

import logging

from cloakid import (
    BindingAdapter,
    CloakedField,
    CloakIdConfig,
    CodecRegistry,
    MissingParameterError,
    NumericKind,
    ParameterBindingError,
)

ROUTE_PARAMETERS = [
    CloakedField("order_id", NumericKind.INT64),
    CloakedField("customer_id", NumericKind.INT32, optional=True),
    CloakedField("invoice_number", NumericKind.UINT32, optional=True, min_length=12),
]


def bind(binder: BindingAdapter, raw: dict) -> None:
    try:
        print(f"   {raw} -> {binder.bind_parameters(raw, ROUTE_PARAMETERS)}")
    except MissingParameterError as e:
        print(f"   {raw} -> 400 missing: {e.name}")
    except ParameterBindingError as e:
        print(f"   {raw} -> 400 invalid: {e.name} ({e.reason})")


def main() -> None:
    """Run the request binding example."""
    logging.basicConfig(level=logging.INFO, format="   [%(levelname)s] %(name)s: %(message)s")

    print("=" * 60)
    print("cloakid Request Binding Example")
    print("=" * 60)
    print()

    config = CloakIdConfig(min_length=8)
    registry = CodecRegistry(config.codec_options())
    codec = registry.default
    order_id = codec.encode(1001, NumericKind.INT64)

    print("1. Strict binding (numeric fallback off)...")
    strict = BindingAdapter(registry, config.binding_policy())
    bind(strict, {"order_id": order_id, "page": "2"})
    bind(strict, {"order_id": "1001"})
    bind(strict, {"order_id": order_id[:-1]})
    bind(strict, {"page": "2"})
    print()

    print("2. Lenient binding (numeric fallback on)...")
    legacy_config = CloakIdConfig(min_length=8, allow_numeric_fallback=True)
    lenient = BindingAdapter(registry, legacy_config.binding_policy())
    bind(lenient, {"order_id": "1001", "customer_id": "42"})
    bind(lenient, {"order_id": order_id, "customer_id": "not-a-number"})
    print()

    print("=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
