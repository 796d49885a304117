# -*- coding: utf-8 -*-
"""
Schema Compiler - builds a schema tree from a parsed schema definition

Takes a JSON Schema definition that has already been parsed into Python
mappings (draft-03 vocabulary) and assembles the corresponding tree of
SimpleTypeSchema, ArraySchema and ObjectSchema nodes. Every keyword is
applied through the nodes' validating setters, so an illegal combination
(e.g. ``pattern`` on a number) fails here, before any document is
validated.

Supported keywords:
    type (null, boolean, string, number, integer, any, array, object)
    pattern, format, minLength, maxLength, minimum, maximum,
    exclusiveMinimum, exclusiveMaximum, enum
    items, minItems, maxItems
    properties, required (list, or draft-03 per-property boolean),
    patternProperties, additionalProperties

Annotation keywords (title, description, default, ...) are ignored.
``$ref`` is rejected: reference resolution happens outside this package.

Example:
    >>> from jsonconform.compiler import SchemaCompiler
    >>> schema = SchemaCompiler().compile({
    ...     "type": "object",
    ...     "properties": {"tags": {"type": "array", "items": {"type": "string"}}},
    ... })
    >>> [(e.location, e.message) for e in schema.validate({"tags": ["a", 2]})]
    [('.tags[1]', 'Invalid type: must be a string')]
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Dict, List, Optional

from jsonconform.array_schema import ArraySchema
from jsonconform.config import JsonConformConfig, get_config
from jsonconform.exceptions import SchemaCompilationError, SchemaConfigurationError
from jsonconform.formats import FormatRegistry, get_default_registry
from jsonconform.metrics import record_schema_compiled
from jsonconform.models import SimpleType
from jsonconform.object_schema import ObjectSchema
from jsonconform.schema import JsonSchema
from jsonconform.simple_type_schema import SimpleTypeSchema

logger = logging.getLogger(__name__)

__all__ = ["SchemaCompiler"]

_LEAF_KEYWORDS = (
    "pattern", "format", "minLength", "maxLength", "minimum", "maximum",
    "exclusiveMinimum", "exclusiveMaximum", "enum",
)
_ARRAY_KEYWORDS = ("items", "minItems", "maxItems")
_OBJECT_KEYWORDS = ("properties", "patternProperties", "additionalProperties")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


class SchemaCompiler:
    """Compile parsed schema definitions into validator trees.

    Attributes:
        _config: Active configuration (``strict_formats``, ``enable_metrics``).
        _formats: Format registry handed to every leaf node.
    """

    def __init__(
        self,
        config: Optional[JsonConformConfig] = None,
        format_registry: Optional[FormatRegistry] = None,
    ) -> None:
        self._config = config or get_config()
        self._formats = format_registry or get_default_registry()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compile(self, definition: Mapping) -> JsonSchema:
        """Compile a schema definition.

        Args:
            definition: Parsed schema definition mapping.

        Returns:
            Root node of the compiled schema tree.

        Raises:
            SchemaCompilationError: If the definition is malformed or
                combines constraints illegally.
        """
        schema = self._compile(definition, "#")
        if self._config.enable_metrics:
            record_schema_compiled(schema.kind)
        logger.info("Compiled schema definition: root_kind=%s", schema.kind)
        return schema

    # ------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------

    def _compile(self, definition: Any, path: str) -> JsonSchema:
        if not isinstance(definition, Mapping):
            raise SchemaCompilationError(
                f"Schema must be an object, got {type(definition).__name__}",
                schema_path=path,
            )
        if "$ref" in definition:
            raise SchemaCompilationError(
                "$ref is not supported; resolve references before compiling",
                keyword="$ref",
                schema_path=path,
            )

        type_name = definition.get("type", SimpleType.ANY.value)
        if not isinstance(type_name, str):
            raise SchemaCompilationError(
                f"type must be a string, got {type_name!r}",
                keyword="type",
                schema_path=path,
            )

        try:
            if type_name == "array":
                self._reject_keywords(definition, _LEAF_KEYWORDS + _OBJECT_KEYWORDS, type_name, path)
                schema = self._compile_array(definition, path)
            elif type_name == "object":
                self._reject_keywords(definition, _LEAF_KEYWORDS + _ARRAY_KEYWORDS, type_name, path)
                schema = self._compile_object(definition, path)
            else:
                self._reject_keywords(definition, _ARRAY_KEYWORDS + _OBJECT_KEYWORDS, type_name, path)
                if isinstance(definition.get("required"), list):
                    self._reject_keywords(definition, ("required",), type_name, path)
                schema = self._compile_simple(definition, type_name, path)
        except SchemaCompilationError:
            raise
        except SchemaConfigurationError as exc:
            raise SchemaCompilationError(
                exc.message,
                keyword=exc.keyword,
                schema_path=path,
                context=dict(exc.context),
            ) from exc

        logger.debug("Compiled %s node at %s", schema.kind, path)
        return schema

    def _compile_simple(self, definition: Mapping, type_name: str, path: str) -> SimpleTypeSchema:
        schema = SimpleTypeSchema(type_name, format_registry=self._formats)

        if "pattern" in definition:
            schema.pattern = self._expect(definition, "pattern", str, path)
        if "format" in definition:
            format_name = self._expect(definition, "format", str, path)
            if self._config.strict_formats and not self._formats.is_registered(format_name):
                raise SchemaCompilationError(
                    f"Unknown format '{format_name}'",
                    keyword="format",
                    schema_path=path,
                )
            schema.format = format_name
        if "minLength" in definition:
            schema.min_length = self._expect_int(definition, "minLength", path)
        if "maxLength" in definition:
            schema.max_length = self._expect_int(definition, "maxLength", path)
        if "minimum" in definition:
            schema.minimum = self._expect_number(definition, "minimum", path)
        if "maximum" in definition:
            schema.maximum = self._expect_number(definition, "maximum", path)
        if definition.get("exclusiveMinimum") is not None:
            if self._expect(definition, "exclusiveMinimum", bool, path):
                schema.exclusive_minimum = True
        if definition.get("exclusiveMaximum") is not None:
            if self._expect(definition, "exclusiveMaximum", bool, path):
                schema.exclusive_maximum = True
        if "enum" in definition:
            schema.enumeration = self._expect(definition, "enum", list, path)
        return schema

    def _compile_array(self, definition: Mapping, path: str) -> ArraySchema:
        schema = ArraySchema()
        if "items" in definition:
            items = definition["items"]
            if isinstance(items, list):
                raise SchemaCompilationError(
                    "Tuple typing (items as a list) is not supported",
                    keyword="items",
                    schema_path=path,
                )
            schema.items = self._compile(items, f"{path}/items")
        if "minItems" in definition:
            schema.min_items = self._expect_int(definition, "minItems", path)
        if "maxItems" in definition:
            schema.max_items = self._expect_int(definition, "maxItems", path)
        return schema

    def _compile_object(self, definition: Mapping, path: str) -> ObjectSchema:
        schema = ObjectSchema()
        required: List[str] = []

        properties: Dict[str, Any] = self._expect(
            definition, "properties", Mapping, path, default={},
        )
        for name, child in properties.items():
            child_path = f"{path}/properties/{name}"
            schema.add_property(name, self._compile(child, child_path))
            if isinstance(child, Mapping) and child.get("required") is True:
                required.append(name)

        required_list = definition.get("required")
        if isinstance(required_list, list):
            required.extend(required_list)
        elif required_list is not None and not isinstance(required_list, bool):
            raise SchemaCompilationError(
                f"required must be a list of names or a boolean, got {required_list!r}",
                keyword="required",
                schema_path=path,
            )
        schema.required = required

        patterns: Dict[str, Any] = self._expect(
            definition, "patternProperties", Mapping, path, default={},
        )
        for pattern, child in patterns.items():
            schema.add_pattern_property(
                pattern, self._compile(child, f"{path}/patternProperties/{pattern}"),
            )

        additional = definition.get("additionalProperties", True)
        if isinstance(additional, bool):
            schema.additional_properties = additional
        elif isinstance(additional, Mapping):
            schema.additional_properties = self._compile(
                additional, f"{path}/additionalProperties",
            )
        else:
            raise SchemaCompilationError(
                f"additionalProperties must be a boolean or a schema, got {additional!r}",
                keyword="additionalProperties",
                schema_path=path,
            )
        return schema

    @staticmethod
    def _reject_keywords(
        definition: Mapping,
        keywords: tuple,
        type_name: str,
        path: str,
    ) -> None:
        for keyword in keywords:
            if keyword in definition:
                raise SchemaCompilationError(
                    f"{keyword} is not allowed for type {type_name}",
                    keyword=keyword,
                    schema_path=path,
                )

    @staticmethod
    def _expect(
        definition: Mapping,
        keyword: str,
        expected: Any,
        path: str,
        default: Any = None,
    ) -> Any:
        if keyword not in definition:
            return default
        value = definition[keyword]
        if not isinstance(value, expected):
            raise SchemaCompilationError(
                f"{keyword} has the wrong type: {value!r}",
                keyword=keyword,
                schema_path=path,
            )
        return value

    @staticmethod
    def _expect_int(definition: Mapping, keyword: str, path: str) -> int:
        value = definition[keyword]
        if not _is_int(value):
            raise SchemaCompilationError(
                f"{keyword} must be an integer, got {value!r}",
                keyword=keyword,
                schema_path=path,
            )
        return value

    @staticmethod
    def _expect_number(definition: Mapping, keyword: str, path: str) -> Any:
        value = definition[keyword]
        if not _is_number(value):
            raise SchemaCompilationError(
                f"{keyword} must be a number, got {value!r}",
                keyword=keyword,
                schema_path=path,
            )
        return value
