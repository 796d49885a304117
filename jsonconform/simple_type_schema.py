# -*- coding: utf-8 -*-
"""
SimpleTypeSchema - leaf validator for primitive JSON values

Validates one value against a primitive type, an optional regular
expression, an optional format, optional length/range bounds and an
optional enumeration. Checks run in a fixed order and the first failure
wins, so ``validate`` returns at most one error:

    1. type
    2. enumeration
    3. pattern, maxLength, minLength          (STRING)
    4. minimum, maximum with exclusive flags  (NUMBER, INTEGER)
    5. format

Constraint/type compatibility is enforced by every setter, whichever order
the fields are assigned in:

    pattern, minLength, maxLength       STRING only
    minimum, maximum, exclusive*        NUMBER or INTEGER only
    format                              per the format registry
    enumeration                         values of the declared type; never
                                        NULL or ANY

A rejected assignment raises SchemaConfigurationError and leaves the schema
unchanged.

Example:
    >>> schema = SimpleTypeSchema(type=SimpleType.INTEGER, minimum=11,
    ...                           exclusive_minimum=True)
    >>> [e.message for e in schema.validate(11)]
    ['Value 11 must be greater than minimum 11 (exclusiveMinimum)']
"""

from __future__ import annotations

import json
import re
from decimal import Decimal
from numbers import Number
from typing import Any, Iterable, List, Optional, Tuple, Union

from jsonconform.exceptions import SchemaConfigurationError
from jsonconform.formats import FormatRegistry, get_default_registry
from jsonconform.models import ErrorMessage, SimpleType
from jsonconform.schema import JsonSchema

__all__ = ["SimpleTypeSchema"]


def _render(value: Any) -> str:
    """Render a JSON value for inclusion in a message."""
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool) or value is None:
        return json.dumps(value)
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    return json.dumps(value, default=str)


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


class SimpleTypeSchema(JsonSchema):
    """Leaf schema for a single primitive value.

    Every field is a validating property; the constructor applies keyword
    arguments through those properties with ``type`` first.

    Attributes:
        type: SimpleType of accepted values (default ANY).
        pattern: Compiled regular expression strings must contain a match for.
        format: Format name refining STRING or NUMBER/INTEGER values.
        min_length: Minimum string length.
        max_length: Maximum string length.
        minimum: Lower numeric bound.
        maximum: Upper numeric bound.
        exclusive_minimum: Whether ``minimum`` itself is excluded.
        exclusive_maximum: Whether ``maximum`` itself is excluded.
        enumeration: Ordered tuple of allowed values.
    """

    def __init__(
        self,
        type: Union[SimpleType, str] = SimpleType.ANY,
        *,
        pattern: Union[str, "re.Pattern[str]", None] = None,
        format: Optional[str] = None,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        minimum: Optional[Number] = None,
        maximum: Optional[Number] = None,
        exclusive_minimum: bool = False,
        exclusive_maximum: bool = False,
        enumeration: Optional[Iterable[Any]] = None,
        format_registry: Optional[FormatRegistry] = None,
    ) -> None:
        self._formats = format_registry or get_default_registry()
        self._type = SimpleType.ANY
        self._pattern: Optional[re.Pattern[str]] = None
        self._format: Optional[str] = None
        self._min_length: Optional[int] = None
        self._max_length: Optional[int] = None
        self._minimum: Optional[Number] = None
        self._maximum: Optional[Number] = None
        self._exclusive_minimum = False
        self._exclusive_maximum = False
        self._enumeration: Optional[Tuple[Any, ...]] = None

        self.type = type
        if pattern is not None:
            self.pattern = pattern
        if format is not None:
            self.format = format
        if min_length is not None:
            self.min_length = min_length
        if max_length is not None:
            self.max_length = max_length
        if minimum is not None:
            self.minimum = minimum
        if maximum is not None:
            self.maximum = maximum
        if exclusive_minimum:
            self.exclusive_minimum = exclusive_minimum
        if exclusive_maximum:
            self.exclusive_maximum = exclusive_maximum
        if enumeration is not None:
            self.enumeration = enumeration

    # ------------------------------------------------------------------
    # JsonSchema
    # ------------------------------------------------------------------

    @property
    def kind(self) -> str:
        return "simple"

    def validate(self, document: Any) -> List[ErrorMessage]:
        if not self._type.is_acceptable_type(document):
            return ErrorMessage.single_error(
                "", "Invalid type: must be a %s", self._type.description,
            )
        for check in (
            self._check_enumeration,
            self._check_string,
            self._check_number,
            self._check_format,
        ):
            errors = check(document)
            if errors:
                return errors
        return []

    def is_acceptable_type(self, document: Any) -> bool:
        return self._type.is_acceptable_type(document)

    @property
    def description(self) -> str:
        return self._type.description

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _check_enumeration(self, document: Any) -> List[ErrorMessage]:
        if self._enumeration is None or document in self._enumeration:
            return []
        allowed = ", ".join(_render(v) for v in self._enumeration)
        return ErrorMessage.single_error(
            "", "Value %s must be one of: [%s]", _render(document), allowed,
        )

    def _check_string(self, document: Any) -> List[ErrorMessage]:
        if self._type is not SimpleType.STRING:
            return []
        if self._pattern is not None and self._pattern.search(document) is None:
            return ErrorMessage.single_error(
                "", "String %s does not match regex pattern '%s'",
                _render(document), self._pattern.pattern,
            )
        length = len(document)
        if self._max_length is not None and length > self._max_length:
            return ErrorMessage.single_error(
                "", "String %s has length %d, which is greater than maxLength %d",
                _render(document), length, self._max_length,
            )
        if self._min_length is not None and length < self._min_length:
            return ErrorMessage.single_error(
                "", "String %s has length %d, which is less than minLength %d",
                _render(document), length, self._min_length,
            )
        return []

    def _check_number(self, document: Any) -> List[ErrorMessage]:
        if not self._type.is_numeric:
            return []
        if self._minimum is not None:
            if self._exclusive_minimum and document <= self._minimum:
                return ErrorMessage.single_error(
                    "", "Value %s must be greater than minimum %s (exclusiveMinimum)",
                    _render(document), _render(self._minimum),
                )
            if document < self._minimum:
                return ErrorMessage.single_error(
                    "", "Value %s is less than minimum %s",
                    _render(document), _render(self._minimum),
                )
        if self._maximum is not None:
            if self._exclusive_maximum and document >= self._maximum:
                return ErrorMessage.single_error(
                    "", "Value %s must be less than maximum %s (exclusiveMaximum)",
                    _render(document), _render(self._maximum),
                )
            if document > self._maximum:
                return ErrorMessage.single_error(
                    "", "Value %s is greater than maximum %s",
                    _render(document), _render(self._maximum),
                )
        return []

    def _check_format(self, document: Any) -> List[ErrorMessage]:
        if self._format is None or self._formats.check(self._format, document):
            return []
        return ErrorMessage.single_error(
            "", "Value %s is not a valid %s", _render(document), self._format,
        )

    # ------------------------------------------------------------------
    # Validating properties
    # ------------------------------------------------------------------

    @property
    def type(self) -> SimpleType:
        return self._type

    @type.setter
    def type(self, value: Union[SimpleType, str]) -> None:
        try:
            new_type = SimpleType(value)
        except ValueError as exc:
            raise SchemaConfigurationError(
                f"Unknown simple type: {value!r}", keyword="type",
            ) from exc

        if self._pattern is not None and new_type is not SimpleType.STRING:
            self._reject("type", new_type, "a pattern is set")
        if (self._min_length is not None or self._max_length is not None) \
                and new_type is not SimpleType.STRING:
            self._reject("type", new_type, "a length bound is set")
        if self._has_numeric_bounds() and not new_type.is_numeric:
            self._reject("type", new_type, "a numeric bound is set")
        if self._format is not None and not self._formats.is_compatible(self._format, new_type):
            self._reject("type", new_type, f"format '{self._format}' is set")
        if self._enumeration is not None:
            self._check_enumeration_values(new_type, self._enumeration, keyword="type")
        self._type = new_type

    @property
    def pattern(self) -> Optional["re.Pattern[str]"]:
        return self._pattern

    @pattern.setter
    def pattern(self, value: Union[str, "re.Pattern[str]", None]) -> None:
        if value is None:
            self._pattern = None
            return
        self._require_string_type("pattern")
        if isinstance(value, str):
            try:
                value = re.compile(value)
            except re.error as exc:
                raise SchemaConfigurationError(
                    f"Invalid regular expression for pattern: {value!r} ({exc})",
                    keyword="pattern",
                ) from exc
        self._pattern = value

    @property
    def format(self) -> Optional[str]:
        return self._format

    @format.setter
    def format(self, value: Optional[str]) -> None:
        if value is None:
            self._format = None
            return
        if not self._formats.is_compatible(value, self._type):
            allowed = sorted(t.value for t in self._formats.applicable_types(value))
            raise SchemaConfigurationError(
                f"Format '{value}' is not allowed for type {self._type.description}; "
                f"it requires one of {allowed}",
                keyword="format",
                context={"type": self._type.value},
            )
        self._format = value

    @property
    def min_length(self) -> Optional[int]:
        return self._min_length

    @min_length.setter
    def min_length(self, value: Optional[int]) -> None:
        if value is not None:
            self._require_string_type("minLength")
            self._require_non_negative_int("minLength", value)
        self._min_length = value

    @property
    def max_length(self) -> Optional[int]:
        return self._max_length

    @max_length.setter
    def max_length(self, value: Optional[int]) -> None:
        if value is not None:
            self._require_string_type("maxLength")
            self._require_non_negative_int("maxLength", value)
        self._max_length = value

    @property
    def minimum(self) -> Optional[Number]:
        return self._minimum

    @minimum.setter
    def minimum(self, value: Optional[Number]) -> None:
        if value is not None:
            self._require_numeric_type("minimum")
            self._require_number("minimum", value)
        self._minimum = value

    @property
    def maximum(self) -> Optional[Number]:
        return self._maximum

    @maximum.setter
    def maximum(self, value: Optional[Number]) -> None:
        if value is not None:
            self._require_numeric_type("maximum")
            self._require_number("maximum", value)
        self._maximum = value

    @property
    def exclusive_minimum(self) -> bool:
        return self._exclusive_minimum

    @exclusive_minimum.setter
    def exclusive_minimum(self, value: bool) -> None:
        self._require_numeric_type("exclusiveMinimum")
        self._exclusive_minimum = bool(value)

    @property
    def exclusive_maximum(self) -> bool:
        return self._exclusive_maximum

    @exclusive_maximum.setter
    def exclusive_maximum(self, value: bool) -> None:
        self._require_numeric_type("exclusiveMaximum")
        self._exclusive_maximum = bool(value)

    @property
    def enumeration(self) -> Optional[Tuple[Any, ...]]:
        return self._enumeration

    @enumeration.setter
    def enumeration(self, values: Optional[Iterable[Any]]) -> None:
        if values is None:
            self._enumeration = None
            return
        members = tuple(values)
        if not members:
            raise SchemaConfigurationError(
                "enum must contain at least one value", keyword="enum",
            )
        self._check_enumeration_values(self._type, members, keyword="enum")
        self._enumeration = members

    # ------------------------------------------------------------------
    # Invariant helpers
    # ------------------------------------------------------------------

    def _has_numeric_bounds(self) -> bool:
        return (
            self._minimum is not None
            or self._maximum is not None
            or self._exclusive_minimum
            or self._exclusive_maximum
        )

    def _require_string_type(self, keyword: str) -> None:
        if self._type is not SimpleType.STRING:
            raise SchemaConfigurationError(
                f"{keyword} is only allowed for type string, "
                f"not {self._type.description}",
                keyword=keyword,
            )

    def _require_numeric_type(self, keyword: str) -> None:
        if not self._type.is_numeric:
            raise SchemaConfigurationError(
                f"{keyword} is only allowed for type number or integer, "
                f"not {self._type.description}",
                keyword=keyword,
            )

    @staticmethod
    def _require_non_negative_int(keyword: str, value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise SchemaConfigurationError(
                f"{keyword} must be a non-negative integer, got {value!r}",
                keyword=keyword,
            )

    @staticmethod
    def _require_number(keyword: str, value: Any) -> None:
        if not _is_number(value):
            raise SchemaConfigurationError(
                f"{keyword} must be a number, got {value!r}", keyword=keyword,
            )

    @staticmethod
    def _check_enumeration_values(
        simple_type: SimpleType,
        members: Tuple[Any, ...],
        keyword: str,
    ) -> None:
        if simple_type in (SimpleType.NULL, SimpleType.ANY):
            raise SchemaConfigurationError(
                f"enum is not allowed for type {simple_type.description}",
                keyword=keyword,
            )
        for member in members:
            try:
                acceptable = simple_type.is_acceptable_type(member)
            except TypeError:
                acceptable = False
            if not acceptable:
                raise SchemaConfigurationError(
                    f"enum value {member!r} is not of type {simple_type.description}",
                    keyword=keyword,
                )

    def _reject(self, keyword: str, new_type: SimpleType, reason: str) -> None:
        raise SchemaConfigurationError(
            f"Cannot change type to {new_type.description} because {reason}",
            keyword=keyword,
            context={"current_type": self._type.value},
        )

    def __repr__(self) -> str:
        fields = [f"type={self._type.value!r}"]
        for name in (
            "pattern", "format", "min_length", "max_length", "minimum",
            "maximum", "exclusive_minimum", "exclusive_maximum", "enumeration",
        ):
            value = getattr(self, f"_{name}")
            if name == "pattern" and value is not None:
                value = value.pattern
            if value is not None and value is not False:
                fields.append(f"{name}={value!r}")
        return f"SimpleTypeSchema({', '.join(fields)})"
