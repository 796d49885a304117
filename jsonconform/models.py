# -*- coding: utf-8 -*-
"""
JSONConform Data Models

Pydantic v2 data models and enumerations shared by the schema tree, the
compiler and the validator facade.

Enumerations:
    - JsonValueKind: Kind discriminator for in-memory JSON values
    - SimpleType: The six primitive schema types

SDK Models:
    - ErrorMessage: A (location, message) validation failure
    - ValidationReport: Result of one facade validation call
    - ValidatorStatistics: Aggregate facade counters

JSON values are the plain Python objects produced by ``json.loads``:
``None``, ``bool``, ``int``, ``float``/``Decimal``, ``str``, ``list`` and
``dict``. ``bool`` is never treated as a number.

Author: JSONConform Team
Status: Production Ready
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, List

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _utcnow() -> datetime:
    """Return current UTC datetime with microseconds zeroed."""
    return datetime.now(timezone.utc).replace(microsecond=0)


# =============================================================================
# Enumerations
# =============================================================================


class JsonValueKind(str, Enum):
    """Kind of an in-memory JSON value."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    DECIMAL = "decimal"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def json_kind(value: Any) -> JsonValueKind:
    """Classify a JSON value.

    Args:
        value: Value as produced by ``json.loads`` (or an equivalent tree).

    Returns:
        The JsonValueKind of ``value``.

    Raises:
        TypeError: If ``value`` is not representable as JSON.
    """
    if value is None:
        return JsonValueKind.NULL
    # bool subclasses int, so it must be tested first
    if isinstance(value, bool):
        return JsonValueKind.BOOLEAN
    if isinstance(value, int):
        return JsonValueKind.INTEGER
    if isinstance(value, (float, Decimal)):
        return JsonValueKind.DECIMAL
    if isinstance(value, str):
        return JsonValueKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonValueKind.ARRAY
    if isinstance(value, Mapping):
        return JsonValueKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


class SimpleType(str, Enum):
    """Primitive schema types.

    ANY accepts every kind, NUMBER accepts integral and decimal numbers,
    INTEGER accepts integral numbers only. The remaining types accept only
    their own kind.
    """

    NULL = "null"
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    ANY = "any"

    def is_acceptable_type(self, value: Any) -> bool:
        """Return True if ``value``'s kind is acceptable for this type."""
        if self is SimpleType.ANY:
            return True
        kind = json_kind(value)
        if self is SimpleType.NUMBER:
            return kind in (JsonValueKind.INTEGER, JsonValueKind.DECIMAL)
        return kind.value == self.value

    @property
    def description(self) -> str:
        """Lowercase canonical type name used in mismatch messages."""
        return self.value

    @property
    def is_numeric(self) -> bool:
        return self in (SimpleType.NUMBER, SimpleType.INTEGER)


# =============================================================================
# SDK Data Models
# =============================================================================


class ErrorMessage(BaseModel):
    """A single validation failure.

    ``location`` is built from ``[index]`` and ``.name`` segments, root to
    failing node; the root itself is ``""``. Containers nest a child's error
    under their own segment with :meth:`nested`, which never alters the
    message text.

    Attributes:
        location: Path of the failing node relative to the validated root.
        message: Human-readable description of the failure.
    """

    location: str = Field(default="", description="Path of the failing node")
    message: str = Field(..., description="Human-readable failure message")

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def single_error(
        cls,
        location: str,
        message_format: str,
        *args: Any,
    ) -> List["ErrorMessage"]:
        """Build a one-element error list, %-formatting the message.

        Args:
            location: Location of the error.
            message_format: %-style format string.
            *args: Format arguments.

        Returns:
            List holding exactly one ErrorMessage.
        """
        message = message_format % args if args else message_format
        return [cls(location=location, message=message)]

    def nested(self, path_prefix: str) -> "ErrorMessage":
        """Return this error re-rooted under a parent path segment.

        Args:
            path_prefix: Parent segment, ``[index]`` or ``.name``.

        Returns:
            New ErrorMessage whose location is ``path_prefix`` followed
            verbatim by this error's location.
        """
        return ErrorMessage(
            location=f"{path_prefix}{self.location}",
            message=self.message,
        )

    def __str__(self) -> str:
        where = self.location or "<root>"
        return f"{where}: {self.message}"


class ValidationReport(BaseModel):
    """Outcome of validating one document through the SchemaValidator.

    Attributes:
        valid: True when no errors were found.
        error_count: Number of errors.
        errors: Errors in depth-first, left-to-right order.
        duration_ms: Wall-clock validation time in milliseconds.
        validated_at: Timestamp of the validation.
    """

    valid: bool = Field(..., description="True when the document conforms")
    error_count: int = Field(default=0, ge=0, description="Number of errors")
    errors: List[ErrorMessage] = Field(
        default_factory=list, description="Ordered validation errors",
    )
    duration_ms: float = Field(
        default=0.0, ge=0.0, description="Validation time in milliseconds",
    )
    validated_at: datetime = Field(
        default_factory=_utcnow, description="Validation timestamp",
    )

    model_config = {"extra": "forbid"}


class ValidatorStatistics(BaseModel):
    """Aggregate counters kept by a SchemaValidator instance."""

    documents_validated: int = Field(default=0, ge=0)
    documents_valid: int = Field(default=0, ge=0)
    documents_invalid: int = Field(default=0, ge=0)
    total_errors: int = Field(default=0, ge=0)
    timestamp: datetime = Field(default_factory=_utcnow)

    model_config = {"extra": "forbid"}


__all__ = [
    "JsonValueKind",
    "json_kind",
    "SimpleType",
    "ErrorMessage",
    "ValidationReport",
    "ValidatorStatistics",
]
