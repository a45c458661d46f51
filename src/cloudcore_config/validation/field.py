"""
Field paths and field errors for configuration validation.

A FieldPath points at one configuration field (``modules.cloudHub.websocket.port``);
a FieldError ties that path to the offending value and a human-readable detail.
Validators return an ErrorList and never raise for invalid input.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field


class FieldPath:
    """Immutable pointer to a configuration field. Renders as ``a.b[0][key]``."""

    __slots__ = ("_parts",)

    def __init__(self, *names: str) -> None:
        self._parts: tuple[str, ...] = ()
        for name in names:
            self._parts = self._append(self._parts, name)

    @staticmethod
    def _append(parts: tuple[str, ...], name: str) -> tuple[str, ...]:
        if not parts or name.startswith("["):
            return parts + (name,)
        return parts + ("." + name,)

    @classmethod
    def _from_parts(cls, parts: tuple[str, ...]) -> "FieldPath":
        path = cls()
        path._parts = parts
        return path

    def child(self, *names: str) -> "FieldPath":
        """Return a path one or more levels below this one."""
        parts = self._parts
        for name in names:
            parts = self._append(parts, name)
        return self._from_parts(parts)

    def index(self, i: int) -> "FieldPath":
        return self._from_parts(self._append(self._parts, f"[{i}]"))

    def key(self, k: str) -> "FieldPath":
        return self._from_parts(self._append(self._parts, f"[{k}]"))

    def __str__(self) -> str:
        return "".join(self._parts)

    def __repr__(self) -> str:
        return f"FieldPath({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldPath):
            return str(self) == str(other)
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))


class ErrorType(str, Enum):
    """Kind of validation failure."""

    INVALID = "FieldValueInvalid"
    REQUIRED = "FieldValueRequired"
    NOT_FOUND = "FieldValueNotFound"

    def describe(self) -> str:
        return {
            ErrorType.INVALID: "Invalid value",
            ErrorType.REQUIRED: "Required value",
            ErrorType.NOT_FOUND: "Not found",
        }[self]


class FieldError(BaseModel):
    """A single validation problem: which field, what value, and why."""

    type: ErrorType = Field(..., description="Kind of failure")
    field: str = Field(..., description="Rendered field path, e.g. modules.cloudHub.websocket.port")
    bad_value: Any = Field(default=None, description="The rejected value")
    detail: str = Field(default="", description="Human-readable explanation")

    def error_body(self) -> str:
        """Message without the field path."""
        body = self.type.describe()
        if self.type == ErrorType.INVALID or self.type == ErrorType.NOT_FOUND:
            body += f": {self.bad_value!r}"
        if self.detail:
            body += f": {self.detail}"
        return body

    def __str__(self) -> str:
        return f"{self.field}: {self.error_body()}"


def invalid(path: FieldPath, value: Any, detail: str) -> FieldError:
    return FieldError(type=ErrorType.INVALID, field=str(path), bad_value=value, detail=detail)


def required(path: FieldPath, detail: str = "") -> FieldError:
    return FieldError(type=ErrorType.REQUIRED, field=str(path), detail=detail)


def not_found(path: FieldPath, value: Any) -> FieldError:
    return FieldError(type=ErrorType.NOT_FOUND, field=str(path), bad_value=value)


class ConfigValidationError(Exception):
    """Raised by callers that refuse to start on an invalid configuration."""

    def __init__(self, errors: Iterable[FieldError], message: str = "") -> None:
        self.errors = list(errors)
        self._message = message or "invalid configuration: " + "; ".join(str(e) for e in self.errors)
        super().__init__(self._message)

    def __str__(self) -> str:
        return self._message


class ErrorList(list):
    """Ordered list of FieldError; empty means valid."""

    def filter_by_field(self, path: FieldPath | str) -> "ErrorList":
        """Errors whose field equals ``path``."""
        target = str(path)
        return ErrorList(e for e in self if e.field == target)

    def to_aggregate(self) -> Optional[ConfigValidationError]:
        """Collapse into one exception, or None when there is nothing to report."""
        if not self:
            return None
        return ConfigValidationError(self)
