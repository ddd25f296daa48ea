#!/usr/bin/env python3
"""Basic usage example for cloakid.

This example demonstrates:
1. Encoding and decoding integers of a given kind
2. Tagging pydantic model fields with Cloak
3. Serializing a model to JSON with opaque identifiers
4. Rejecting tampered and non-canonical identifiers
"""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel

from cloakid import (
    Cloak,
    CodecOptions,
    DecodeError,
    MalformedPayloadError,
    NumericKind,
    SerializationAdapter,
    create_codec,
)


class Customer(BaseModel):
    """Customer record exposed to clients."""

    id: Annotated[int, Cloak(NumericKind.INT32)]
    name: str


class Order(BaseModel):
    """Order record with a required, an optional and a long-form identifier."""

    id: Annotated[int, Cloak(NumericKind.INT64)]
    customer_id: Annotated[int, Cloak(NumericKind.INT32)]
    parent_order_id: Annotated[Optional[int], Cloak(NumericKind.INT64)] = None
    invoice_number: Annotated[int, Cloak(NumericKind.UINT32, min_length=12)]
    total_cents: int


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("cloakid Basic Usage Example")
    print("=" * 60)
    print()

    codec = create_codec(CodecOptions(min_length=6))

    print("1. Encoding integers...")
    for kind, value in [
        (NumericKind.INT32, 123456),
        (NumericKind.INT64, 9_007_199_254_740_993),
        (NumericKind.UINT64, 2**64 - 1),
    ]:
        text = codec.encode(value, kind)
        print(f"   {kind}: {value} -> {text} -> {codec.decode(text, kind)}")
    print()

    print("2. Serializing a model...")
    adapter = SerializationAdapter(codec)
    order = Order(id=1001, customer_id=42, invoice_number=7, total_cents=2599)
    payload = adapter.dumps(order, indent=2)
    print(payload)
    print()

    print("3. Deserializing it back...")
    restored = adapter.loads(Order, payload)
    print(f"   Match: {restored == order}")
    print()

    print("4. Rejecting bad identifiers...")
    text = codec.encode(123456, NumericKind.INT32)
    assert text is not None
    tampered = text[:-1] + ("a" if text[-1] != "a" else "b")
    for candidate in (tampered, "12345", "not-an-id!"):
        try:
            codec.decode(candidate, NumericKind.INT32)
            print(f"   {candidate!r}: accepted")
        except DecodeError as e:
            print(f"   {candidate!r}: {type(e).__name__}")

    try:
        adapter.load(Customer, {"id": 42, "name": "Ada"})
    except MalformedPayloadError as e:
        print(f"   numeric id in payload: {e} ({type(e.__cause__).__name__})")
    print()

    print("=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
