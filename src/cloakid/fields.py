"""Field markers for cloaked identifiers.

This module provides the Cloak marker used to tag integer fields of pydantic
models (and request parameters) for obfuscation. Untagged fields are never
touched by cloakid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .exceptions import OptionsError
from .kinds import NumericKind
from .options import validate_alphabet


@dataclass(frozen=True)
class Cloak:
    """Marks an integer field as a cloaked identifier.

    Attributes:
        kind: Integer kind of the field (NumericKind or its name, e.g. "int64")
        min_length: Override of the default minimum encoded length
        alphabet: Override of the default alphabet

    Example:
        >>> from typing import Annotated, Optional
        >>> from pydantic import BaseModel
        >>> class Order(BaseModel):
        ...     id: Annotated[int, Cloak(NumericKind.INT64)]
        ...     customer_id: Annotated[int, Cloak("int32", min_length=10)]
        ...     parent_id: Annotated[Optional[int], Cloak("int64")] = None
        ...     quantity: int
    """

    kind: Union[NumericKind, str] = NumericKind.INT32
    min_length: Optional[int] = None
    alphabet: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, NumericKind):
            object.__setattr__(self, "kind", NumericKind.parse(str(self.kind)))
        if self.min_length is not None and (
            isinstance(self.min_length, bool)
            or not isinstance(self.min_length, int)
            or self.min_length < 0
        ):
            raise OptionsError(f"min_length must be 0 or greater, got {self.min_length!r}")
        if self.alphabet is not None:
            validate_alphabet(self.alphabet)

