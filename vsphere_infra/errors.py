"""Field-level validation errors and their aggregation into one invalid-object error."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .constants import GroupKind


class FieldErrorType(Enum):
    """The kind of problem found with a field."""

    NOT_FOUND = "FieldValueNotFound"
    REQUIRED = "FieldValueRequired"
    DUPLICATE = "FieldValueDuplicate"
    INVALID = "FieldValueInvalid"
    NOT_SUPPORTED = "FieldValueNotSupported"
    FORBIDDEN = "FieldValueForbidden"
    TOO_LONG = "FieldValueTooLong"
    TOO_MANY = "FieldValueTooMany"
    INTERNAL = "InternalError"

    def __str__(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    FieldErrorType.NOT_FOUND: "Not found",
    FieldErrorType.REQUIRED: "Required value",
    FieldErrorType.DUPLICATE: "Duplicate value",
    FieldErrorType.INVALID: "Invalid value",
    FieldErrorType.NOT_SUPPORTED: "Unsupported value",
    FieldErrorType.FORBIDDEN: "Forbidden",
    FieldErrorType.TOO_LONG: "Too long",
    FieldErrorType.TOO_MANY: "Too many",
    FieldErrorType.INTERNAL: "Internal error",
}

_VALUELESS_TYPES = {
    FieldErrorType.REQUIRED,
    FieldErrorType.FORBIDDEN,
    FieldErrorType.TOO_LONG,
    FieldErrorType.INTERNAL,
}


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, (int, float)):
        return str(value)
    return repr(value)


def _join_path(path: str | Sequence[str]) -> str:
    if isinstance(path, str):
        return path
    return ".".join(path)


@dataclass(eq=False)
class FieldError(Exception):
    """A problem with a single field of an object."""

    type: FieldErrorType
    field: str
    bad_value: Any = None
    detail: str = ""

    def __post_init__(self) -> None:
        super().__init__(self.field, self.detail)

    def __str__(self) -> str:
        if self.type in _VALUELESS_TYPES:
            body = str(self.type)
        else:
            body = f"{self.type}: {_format_value(self.bad_value)}"
        if self.detail:
            body += f": {self.detail}"
        return f"{self.field}: {body}"


def invalid(path: str | Sequence[str], value: Any, detail: str) -> FieldError:
    """Return an error for a field that holds an invalid value."""
    return FieldError(FieldErrorType.INVALID, _join_path(path), value, detail)


def forbidden(path: str | Sequence[str], detail: str) -> FieldError:
    """Return an error for a field that may not be set or changed."""
    return FieldError(FieldErrorType.FORBIDDEN, _join_path(path), None, detail)


def _aggregate_message(errors: Sequence[Exception]) -> str:
    if len(errors) == 1:
        return str(errors[0])
    seen: list[str] = []
    for error in errors:
        message = str(error)
        if message not in seen:
            seen.append(message)
    if len(seen) == 1:
        return seen[0]
    return "[" + ", ".join(seen) + "]"


class InvalidError(Exception):
    """An object of a given kind and name failed validation."""

    def __init__(
        self, group_kind: GroupKind, name: str, errors: Iterable[FieldError]
    ) -> None:
        self.group_kind = group_kind
        self.name = name
        self.errors = list(errors)
        super().__init__(str(self))

    def __str__(self) -> str:
        return (
            f"{self.group_kind} {_quote(self.name)} is invalid: "
            f"{_aggregate_message(self.errors)}"
        )


def aggregate_errors(
    group_kind: GroupKind, name: str, errors: Iterable[FieldError]
) -> None:
    """Raise an InvalidError carrying ``errors`` unless there are none."""
    collected = list(errors)
    if collected:
        raise InvalidError(group_kind, name, collected)