"""
Field validation primitives.

Pure checks with no I/O.  Each validator inspects one field of an input
mapping and returns a list of FieldError (empty when the field is valid),
so a record-level validator can report every problem at once before
raising a single ValidationError.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, TypeVar

from citrus_kernel.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_positive_int(data: Mapping[str, Any], name: str) -> list[FieldError]:
    value = data.get(name)
    if not _is_int(value):
        return [FieldError(name, f"{name} must be an integer")]
    if value <= 0:
        return [FieldError(name, f"{name} must be positive, got {value}")]
    return []


def validate_non_negative_int(data: Mapping[str, Any], name: str) -> list[FieldError]:
    value = data.get(name)
    if not _is_int(value):
        return [FieldError(name, f"{name} must be an integer")]
    if value < 0:
        return [FieldError(name, f"{name} must be non-negative, got {value}")]
    return []


def validate_non_empty_str(data: Mapping[str, Any], name: str) -> list[FieldError]:
    value = data.get(name)
    if not isinstance(value, str) or not value:
        return [FieldError(name, f"{name} must be a non-empty string")]
    return []


def validate_optional_str(data: Mapping[str, Any], name: str) -> list[FieldError]:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        return [FieldError(name, f"{name} must be a string")]
    return []


def validate_enum(
    data: Mapping[str, Any], name: str, enum_type: type[E]
) -> list[FieldError]:
    value = data.get(name)
    try:
        enum_type(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_type)
        return [FieldError(name, f"{name} must be one of: {allowed}")]
    return []


def validate_str_list(data: Mapping[str, Any], name: str) -> list[FieldError]:
    value = data.get(name)
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        return [FieldError(name, f"{name} must be a list of strings")]
    if not all(isinstance(v, str) for v in value):
        return [FieldError(name, f"{name} must contain only strings")]
    return []


def raise_if_errors(entity_type: str, errors: list[FieldError]) -> None:
    """Raise ValidationError carrying every collected field error."""
    if errors:
        raise ValidationError(entity_type, [e.to_dict() for e in errors])
