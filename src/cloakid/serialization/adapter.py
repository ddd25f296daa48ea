"""Structured-data (de)serialization of cloaked fields.

Only fields tagged with a Cloak marker pass through this adapter. They are
written as strings, never as numbers; null values are written as the format's
null marker without touching the codec. Reading never applies the numeric
fallback policy: a payload must round-trip exactly or fail as a whole.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError
from pydantic_core import from_json, to_json

from ..codec.typed import CodecRegistry, TypedCodec
from ..exceptions import (
    DecodeError,
    InvalidInputError,
    MalformedPayloadError,
    MissingRequiredValueError,
)
from ..kinds import KindLike, unwrap_kind
from ..schema import CloakedField, CloakSchema

T = TypeVar("T", bound=BaseModel)


class SerializationAdapter:
    """Encodes and decodes cloaked fields of structured payloads.

    Examples:
        ```python
        from typing import Annotated
        from pydantic import BaseModel
        from cloakid import Cloak, NumericKind, SerializationAdapter, create_codec

        class User(BaseModel):
            id: Annotated[int, Cloak(NumericKind.INT64)]
            name: str

        adapter = SerializationAdapter(create_codec())
        payload = adapter.dumps(User(id=42, name="Ada"))
        # '{"id":"<encoded>","name":"Ada"}'
        user = adapter.loads(User, payload)
        ```
    """

    def __init__(self, codecs: Union[TypedCodec, CodecRegistry]) -> None:
        """Initialize the adapter.

        Args:
            codecs: Codec set, or a registry for fields with option overrides
        """
        self.registry = CodecRegistry.of(codecs)
        self._schemas: Dict[Type[BaseModel], CloakSchema] = {}
        self._lock = threading.Lock()

    def write_field(
        self, value: Optional[int], kind: KindLike, codec: Optional[TypedCodec] = None
    ) -> Optional[str]:
        """Encode one field value.

        Args:
            value: Integer value, or None
            kind: Kind of the field
            codec: Overrides the default codec set for this call

        Returns:
            Encoded string, or None (the null marker) when value is None

        Raises:
            UnsupportedKindError: If kind or value type is not supported
            EncodeError: If value is out of range for kind
        """
        base_kind, _ = unwrap_kind(kind)
        if value is None:
            return None
        return (codec or self.registry.default).encode(value, base_kind)

    def read_field(
        self, raw: Any, kind: KindLike, codec: Optional[TypedCodec] = None
    ) -> Optional[int]:
        """Decode one field value.

        Args:
            raw: Raw field value from the payload (a string, or None for null)
            kind: Kind of the field; only an OptionalKind accepts null
            codec: Overrides the default codec set for this call

        Returns:
            Decoded integer, or None for null on an optional field

        Raises:
            MissingRequiredValueError: If raw is None and kind is not optional
            InvalidInputError: If raw is not a string or not decodable
            NonCanonicalInputError: If raw is not the canonical encoding
        """
        base_kind, optional = unwrap_kind(kind)

        if raw is None:
            if optional:
                return None
            raise MissingRequiredValueError(f"Cannot convert null to required kind {base_kind}")

        if not isinstance(raw, str):
            raise InvalidInputError(
                f"Expected string token for cloaked {base_kind} field, got {type(raw).__name__}"
            )

        return (codec or self.registry.default).decode(raw, base_kind)

    def schema(self, model_class: Type[BaseModel]) -> CloakSchema:
        """Return the cloaked field table of a model, built once per class."""
        schema = self._schemas.get(model_class)
        if schema is None:
            with self._lock:
                schema = self._schemas.get(model_class)
                if schema is None:
                    schema = CloakSchema.from_model(model_class)
                    self._schemas[model_class] = schema
        return schema

    def _codec_for(self, field: CloakedField) -> TypedCodec:
        return self.registry.codec_for(field.codec_options(self.registry.default_options))

    def dump(self, model: BaseModel) -> Dict[str, Any]:
        """Serialize a model to JSON-compatible data with cloaked fields encoded.

        Raises:
            EncodeError: If a cloaked value cannot be encoded
        """
        schema = self.schema(type(model))
        data = model.model_dump(mode="json")

        for field in schema:
            if field.name in data:
                data[field.name] = self.write_field(
                    getattr(model, field.name), field.kind_spec, self._codec_for(field)
                )

        for name, (_, is_list) in schema.nested.items():
            value = getattr(model, name, None)
            if value is None or name not in data:
                continue
            if is_list:
                data[name] = [self.dump(item) for item in value]
            else:
                data[name] = self.dump(value)

        return data

    def dumps(self, model: BaseModel, indent: Optional[int] = None) -> str:
        """Serialize a model to a JSON string."""
        return to_json(self.dump(model), indent=indent).decode()

    def _decode_payload(self, model_class: Type[BaseModel], data: Mapping[str, Any]) -> Dict[str, Any]:
        schema = self.schema(model_class)
        values = dict(data)

        for field in schema:
            if field.name in values:
                values[field.name] = self.read_field(
                    values[field.name], field.kind_spec, self._codec_for(field)
                )

        for name, (nested_class, is_list) in schema.nested.items():
            value = values.get(name)
            if is_list and isinstance(value, list):
                values[name] = [
                    self._decode_payload(nested_class, item) if isinstance(item, Mapping) else item
                    for item in value
                ]
            elif not is_list and isinstance(value, Mapping):
                values[name] = self._decode_payload(nested_class, value)

        return values

    def load(self, model_class: Type[T], data: Any) -> T:
        """Deserialize JSON-compatible data into a model, decoding cloaked fields.

        Raises:
            MalformedPayloadError: If any field fails to decode or validate
        """
        if not isinstance(data, Mapping):
            raise MalformedPayloadError(
                f"Malformed {model_class.__name__} payload: expected an object, "
                f"got {type(data).__name__}"
            )

        try:
            values = self._decode_payload(model_class, data)
            return model_class.model_validate(values)
        except (DecodeError, ValidationError) as e:
            raise MalformedPayloadError(f"Malformed {model_class.__name__} payload") from e

    def loads(self, model_class: Type[T], text: Union[str, bytes]) -> T:
        """Deserialize a JSON string into a model.

        Raises:
            MalformedPayloadError: If the text is not valid JSON or any field fails
        """
        try:
            data = from_json(text)
        except ValueError as e:
            raise MalformedPayloadError(f"Malformed {model_class.__name__} payload") from e
        return self.load(model_class, data)
