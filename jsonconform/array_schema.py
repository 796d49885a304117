# -*- coding: utf-8 -*-
"""
ArraySchema - container validator for JSON arrays

Checks the array size bounds, then validates every element against the
``items`` schema and re-roots each element's errors under ``[index]``.
Elements are never short-circuited: an invalid element at index 0 does not
stop index 1 from being validated.
"""

from __future__ import annotations

from typing import Any, List, Optional

from jsonconform.exceptions import SchemaConfigurationError
from jsonconform.models import ErrorMessage, JsonValueKind, SimpleType, json_kind
from jsonconform.schema import JsonSchema, index_segment, nest_errors
from jsonconform.simple_type_schema import SimpleTypeSchema

__all__ = ["ArraySchema"]


class ArraySchema(JsonSchema):
    """Array node: an items schema plus min/max size bounds.

    A bound of ``0`` means "no bound". ``items`` defaults to an ANY-typed
    SimpleTypeSchema, which accepts every element.

    Example:
        >>> schema = ArraySchema(items=SimpleTypeSchema(SimpleType.STRING))
        >>> [(e.location, e.message) for e in schema.validate(["a", 1, "c"])]
        [('[1]', 'Invalid type: must be a string')]
    """

    def __init__(
        self,
        items: Optional[JsonSchema] = None,
        *,
        min_items: int = 0,
        max_items: int = 0,
    ) -> None:
        self._items: JsonSchema = SimpleTypeSchema(SimpleType.ANY)
        self._min_items = 0
        self._max_items = 0
        if items is not None:
            self.items = items
        self.min_items = min_items
        self.max_items = max_items

    @property
    def kind(self) -> str:
        return "array"

    def validate(self, document: Any) -> List[ErrorMessage]:
        if json_kind(document) is not JsonValueKind.ARRAY:
            return ErrorMessage.single_error("", "Invalid type: must be an array")

        size = len(document)
        if self._max_items != 0 and size > self._max_items:
            return ErrorMessage.single_error(
                "",
                "Current array size of %d is greater than allowed maximum array size of %d",
                size, self._max_items,
            )
        if self._min_items != 0 and size < self._min_items:
            return ErrorMessage.single_error(
                "",
                "Current array size of %d is less than allowed minimum array size of %d",
                size, self._min_items,
            )

        results: List[ErrorMessage] = []
        for index, item in enumerate(document):
            results.extend(
                nest_errors(index_segment(index), self._items.validate(item))
            )
        return results

    # ------------------------------------------------------------------
    # Validating properties
    # ------------------------------------------------------------------

    @property
    def items(self) -> JsonSchema:
        return self._items

    @items.setter
    def items(self, schema: JsonSchema) -> None:
        if not isinstance(schema, JsonSchema):
            raise SchemaConfigurationError(
                f"items must be a schema, got {type(schema).__name__}",
                keyword="items",
            )
        self._items = schema

    @property
    def min_items(self) -> int:
        return self._min_items

    @min_items.setter
    def min_items(self, value: int) -> None:
        self._min_items = self._require_size("minItems", value)

    @property
    def max_items(self) -> int:
        return self._max_items

    @max_items.setter
    def max_items(self, value: int) -> None:
        self._max_items = self._require_size("maxItems", value)

    @staticmethod
    def _require_size(keyword: str, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise SchemaConfigurationError(
                f"{keyword} must be a non-negative integer, got {value!r}",
                keyword=keyword,
            )
        return value

    def __repr__(self) -> str:
        return (
            f"ArraySchema(items={self._items!r}, "
            f"min_items={self._min_items}, max_items={self._max_items})"
        )
