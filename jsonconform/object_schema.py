# -*- coding: utf-8 -*-
"""
ObjectSchema - container validator for JSON objects

Validation order (deterministic, part of the contract):

    1. declared properties, in declaration order: a missing required one
       yields ``Missing required property``, a present one is validated
    2. required names without a declared schema, in declaration order
    3. document properties, in document order: those matching a
       ``patternProperties`` regex are validated against every matching
       schema; those neither declared nor matched fall to the
       additional-properties policy

Every child error is re-rooted under ``.name``.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from jsonconform.exceptions import SchemaConfigurationError
from jsonconform.models import ErrorMessage, JsonValueKind, json_kind
from jsonconform.schema import JsonSchema, nest_errors, property_segment

__all__ = [
    "AdditionalProperties",
    "ObjectSchema",
]


class AdditionalProperties(str, Enum):
    """Policy for document properties that no declaration covers."""

    ALLOW = "allow"
    DENY = "deny"
    VALIDATE = "validate"


class ObjectSchema(JsonSchema):
    """Object node: named property schemas, required names, pattern
    properties and an additional-properties policy (ALLOW by default).

    Example:
        >>> schema = ObjectSchema()
        >>> schema.add_property("id", SimpleTypeSchema("integer"), required=True)
        >>> [(e.location, e.message) for e in schema.validate({})]
        [('.id', "Missing required property 'id'")]
    """

    def __init__(
        self,
        properties: Optional[Dict[str, JsonSchema]] = None,
        *,
        required: Iterable[str] = (),
        pattern_properties: Optional[Dict[str, JsonSchema]] = None,
        additional_properties: Union[bool, AdditionalProperties, JsonSchema] = True,
    ) -> None:
        self._properties: Dict[str, JsonSchema] = {}
        self._required: List[str] = []
        self._pattern_properties: List[Tuple[re.Pattern[str], JsonSchema]] = []
        self._additional_policy = AdditionalProperties.ALLOW
        self._additional_schema: Optional[JsonSchema] = None

        for name, schema in (properties or {}).items():
            self.add_property(name, schema)
        self.required = required
        for pattern, schema in (pattern_properties or {}).items():
            self.add_pattern_property(pattern, schema)
        self.additional_properties = additional_properties

    @property
    def kind(self) -> str:
        return "object"

    def validate(self, document: Any) -> List[ErrorMessage]:
        if json_kind(document) is not JsonValueKind.OBJECT:
            return ErrorMessage.single_error("", "Invalid type: must be an object")

        results: List[ErrorMessage] = []
        for name, schema in self._properties.items():
            if name in document:
                results.extend(
                    nest_errors(property_segment(name), schema.validate(document[name]))
                )
            elif name in self._required:
                results.append(self._missing(name))

        for name in self._required:
            if name not in self._properties and name not in document:
                results.append(self._missing(name))

        for name, value in document.items():
            matched = False
            for pattern, schema in self._pattern_properties:
                if pattern.search(name) is not None:
                    matched = True
                    results.extend(
                        nest_errors(property_segment(name), schema.validate(value))
                    )
            if matched or name in self._properties:
                continue
            results.extend(self._validate_additional(name, value))
        return results

    def _validate_additional(self, name: str, value: Any) -> List[ErrorMessage]:
        if self._additional_policy is AdditionalProperties.ALLOW:
            return []
        if self._additional_policy is AdditionalProperties.DENY:
            return ErrorMessage.single_error(
                property_segment(name), "Unexpected property '%s'", name,
            )
        return nest_errors(property_segment(name), self._additional_schema.validate(value))

    @staticmethod
    def _missing(name: str) -> ErrorMessage:
        return ErrorMessage(
            location=property_segment(name),
            message=f"Missing required property '{name}'",
        )

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def add_property(self, name: str, schema: JsonSchema, required: bool = False) -> None:
        """Declare a property schema, optionally marking it required.

        Raises:
            SchemaConfigurationError: If the name is empty, already declared,
                or ``schema`` is not a schema node.
        """
        if not isinstance(name, str) or not name:
            raise SchemaConfigurationError(
                f"Property name must be a non-empty string, got {name!r}",
                keyword="properties",
            )
        if name in self._properties:
            raise SchemaConfigurationError(
                f"Property '{name}' is already declared", keyword="properties",
            )
        self._require_schema("properties", schema)
        self._properties[name] = schema
        if required and name not in self._required:
            self._required.append(name)

    def add_pattern_property(
        self,
        pattern: Union[str, "re.Pattern[str]"],
        schema: JsonSchema,
    ) -> None:
        """Validate every property whose name matches ``pattern`` against ``schema``."""
        if isinstance(pattern, str):
            try:
                pattern = re.compile(pattern)
            except re.error as exc:
                raise SchemaConfigurationError(
                    f"Invalid patternProperties regex {pattern!r} ({exc})",
                    keyword="patternProperties",
                ) from exc
        self._require_schema("patternProperties", schema)
        self._pattern_properties.append((pattern, schema))

    @property
    def properties(self) -> Dict[str, JsonSchema]:
        return dict(self._properties)

    @property
    def pattern_properties(self) -> List[Tuple["re.Pattern[str]", JsonSchema]]:
        return list(self._pattern_properties)

    @property
    def required(self) -> Tuple[str, ...]:
        return tuple(self._required)

    @required.setter
    def required(self, names: Iterable[str]) -> None:
        if isinstance(names, str):
            raise SchemaConfigurationError(
                "required must be a collection of property names, not a string",
                keyword="required",
            )
        ordered: List[str] = []
        for name in names:
            if not isinstance(name, str) or not name:
                raise SchemaConfigurationError(
                    f"Required property name must be a non-empty string, got {name!r}",
                    keyword="required",
                )
            if name not in ordered:
                ordered.append(name)
        self._required = ordered

    @property
    def additional_properties(self) -> Union[AdditionalProperties, JsonSchema]:
        if self._additional_policy is AdditionalProperties.VALIDATE:
            return self._additional_schema
        return self._additional_policy

    @additional_properties.setter
    def additional_properties(
        self,
        value: Union[bool, AdditionalProperties, JsonSchema],
    ) -> None:
        if isinstance(value, JsonSchema):
            self._additional_policy = AdditionalProperties.VALIDATE
            self._additional_schema = value
            return
        if isinstance(value, bool):
            value = AdditionalProperties.ALLOW if value else AdditionalProperties.DENY
        if value not in (AdditionalProperties.ALLOW, AdditionalProperties.DENY):
            raise SchemaConfigurationError(
                "additionalProperties must be a boolean, ALLOW, DENY or a schema; "
                f"got {value!r}",
                keyword="additionalProperties",
            )
        self._additional_policy = AdditionalProperties(value)
        self._additional_schema = None

    @staticmethod
    def _require_schema(keyword: str, schema: Any) -> None:
        if not isinstance(schema, JsonSchema):
            raise SchemaConfigurationError(
                f"{keyword} entries must be schemas, got {type(schema).__name__}",
                keyword=keyword,
            )

    def __repr__(self) -> str:
        return (
            f"ObjectSchema(properties={list(self._properties)}, "
            f"required={self._required}, "
            f"additional_properties={self._additional_policy.value})"
        )
