"""Static table of cloaked fields.

This module introspects pydantic models once and extracts the fields tagged
with a Cloak marker. The resulting table is all the adapters look at; untagged
fields are never listed and pass through untouched.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Dict,
    Iterator,
    List,
    Optional,
    Tuple,
    Type,
    Union,
    get_args,
    get_origin,
)

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from .exceptions import SchemaError
from .fields import Cloak
from .kinds import KindLike, NumericKind
from .options import CodecOptions

_UNION_TYPES: Tuple[Any, ...] = (Union,)
if hasattr(types, "UnionType"):
    _UNION_TYPES += (types.UnionType,)


@dataclass(frozen=True)
class CloakedField:
    """Schema information for a single cloaked field or request parameter.

    Attributes:
        name: Field or parameter name
        kind: Integer kind of the value
        optional: Whether null/absent is allowed
        min_length: Per-field minimum length override
        alphabet: Per-field alphabet override
    """

    name: str
    kind: NumericKind
    optional: bool = False
    min_length: Optional[int] = None
    alphabet: Optional[str] = None

    @property
    def kind_spec(self) -> KindLike:
        """The kind as passed to TypedCodec (wrapped when optional)."""
        return self.kind.optional if self.optional else self.kind

    def codec_options(self, default: CodecOptions) -> Optional[CodecOptions]:
        """Effective codec options for this field, or None to use the default."""
        if self.min_length is None and self.alphabet is None:
            return None
        return default.merged(min_length=self.min_length, alphabet=self.alphabet)

    @classmethod
    def from_cloak(cls, name: str, cloak: Cloak, optional: bool = False) -> CloakedField:
        return cls(
            name=name,
            kind=cloak.kind,  # type: ignore[arg-type]
            optional=optional,
            min_length=cloak.min_length,
            alphabet=cloak.alphabet,
        )


class CloakSchema:
    """Cloaked fields of a pydantic model.

    Example:
        >>> schema = CloakSchema.from_model(Order)
        >>> for field in schema:
        ...     print(f"{field.name}: {field.kind_spec}")
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize schema from a pydantic model.

        Args:
            model_class: Pydantic model class to introspect

        Raises:
            SchemaError: If a cloaked field is declared on a non-integer type
        """
        self.model_class = model_class
        self.fields: List[CloakedField] = []
        # Untagged fields holding models (or lists of models) that may carry cloaked fields
        self.nested: Dict[str, Tuple[Type[BaseModel], bool]] = {}
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> CloakSchema:
        return cls(model_class)

    def _introspect(self) -> None:
        for field_name, field_info in self.model_class.model_fields.items():
            field = self._extract_cloaked_field(field_name, field_info)
            if field is not None:
                self.fields.append(field)
                continue

            nested = _nested_model(field_info.annotation)
            if nested is not None:
                self.nested[field_name] = nested

    def _extract_cloaked_field(
        self, name: str, field_info: FieldInfo
    ) -> Optional[CloakedField]:
        annotation = field_info.annotation
        cloak = _find_cloak(field_info.metadata)

        # Optional[Annotated[int, Cloak(...)]] keeps the marker inside the Union
        is_optional = False
        if get_origin(annotation) in _UNION_TYPES:
            non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
            is_optional = len(non_none_args) != len(get_args(annotation))
            if len(non_none_args) != 1:
                if cloak is not None:
                    raise SchemaError(f"Field {name}: complex Union types cannot be cloaked")
                return None
            annotation = non_none_args[0]

        if get_origin(annotation) is Annotated:
            inner, *extras = get_args(annotation)
            cloak = cloak or _find_cloak(extras)
            annotation = inner

        if cloak is None:
            return None

        if annotation is not int:
            raise SchemaError(
                f"Field {name}: only int fields can be cloaked, got {annotation!r}"
            )

        return CloakedField.from_cloak(name, cloak, optional=is_optional)

    def get(self, name: str) -> Optional[CloakedField]:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def __iter__(self) -> Iterator[CloakedField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: object) -> bool:
        return any(field.name == name for field in self.fields)


def _find_cloak(metadata: Any) -> Optional[Cloak]:
    for item in metadata:
        if isinstance(item, Cloak):
            return item
    return None


def _nested_model(annotation: Any) -> Optional[Tuple[Type[BaseModel], bool]]:
    """Return (model class, is_list) if annotation holds a model or a list of models."""
    if get_origin(annotation) in _UNION_TYPES:
        non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(non_none_args) != 1:
            return None
        annotation = non_none_args[0]

    if get_origin(annotation) in (list, List):
        args = get_args(annotation)
        if len(args) == 1 and _is_model(args[0]):
            return args[0], True
        return None

    if _is_model(annotation):
        return annotation, False
    return None


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)
