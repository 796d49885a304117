# -*- coding: utf-8 -*-
"""JSONConform Exception Hierarchy.

Configuration errors are raised synchronously when a schema is assembled
with constraints that are illegal for its type. Validation errors are never
raised: they are returned as ``ErrorMessage`` data from ``validate``.

Exception Hierarchy:
    JsonConformException (base)
    └── SchemaConfigurationError (also a ValueError)
        └── SchemaCompilationError

All exceptions include rich context:
- error_code: Unique error identifier
- context: Dictionary with error-specific details
- timestamp: When the error occurred

Example:
    >>> from jsonconform.exceptions import SchemaConfigurationError
    >>> raise SchemaConfigurationError(
    ...     message="pattern is only allowed for type string",
    ...     keyword="pattern",
    ...     context={"type": "number"},
    ... )

Author: JSONConform Team
Status: Production Ready
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any, Dict, Optional


# ==============================================================================
# Base Exception
# ==============================================================================

class JsonConformException(Exception):
    """Base exception for all jsonconform errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error identifier (e.g., "JSONCONFORM_SCHEMA_CONFIGURATION_ERROR")
        context: Dictionary with error-specific details
        timestamp: When the error occurred
    """

    ERROR_PREFIX = "JSONCONFORM"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with rich context.

        Args:
            message: Human-readable error message
            error_code: Unique error identifier (auto-generated if not provided)
            context: Dictionary with error-specific details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._generate_error_code()
        self.context = dict(context or {})
        self.timestamp = datetime.now()

    def _generate_error_code(self) -> str:
        """Generate error code based on exception class.

        Returns:
            Error code like "JSONCONFORM_SCHEMA_CONFIGURATION_ERROR"
        """
        class_name = self.__class__.__name__
        # Convert CamelCase to SCREAMING_SNAKE_CASE
        error_type = re.sub(r'(?<!^)(?=[A-Z])', '_', class_name).upper()
        return f"{self.ERROR_PREFIX}_{error_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization.

        Returns:
            Dictionary with all error details
        """
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Convert exception to JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def __str__(self) -> str:
        return f"[{self.error_code}] - {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}')"
        )


# ==============================================================================
# Schema Configuration Exceptions
# ==============================================================================

class SchemaConfigurationError(JsonConformException, ValueError):
    """A schema node was assembled with an illegal constraint.

    Raised by schema mutators the moment an invariant is violated, e.g. a
    ``pattern`` on a NUMBER schema, or switching ``type`` away from STRING
    after ``maxLength`` was set. Construction must abort; the node is left
    unchanged.

    Example:
        >>> raise SchemaConfigurationError(
        ...     message="maxLength is only allowed for type string",
        ...     keyword="maxLength",
        ... )
    """

    def __init__(
        self,
        message: str,
        keyword: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize configuration error.

        Args:
            message: Error message
            keyword: Schema keyword that was rejected
            context: Error context
        """
        if keyword:
            context = dict(context or {})
            context["keyword"] = keyword
        super().__init__(message, context=context)
        self.keyword = keyword


class SchemaCompilationError(SchemaConfigurationError):
    """A schema definition mapping cannot be compiled into a schema tree.

    Raised for keyword values of the wrong JSON type, unknown type names,
    invalid regular expressions and unsupported ``$ref`` usage.
    """

    def __init__(
        self,
        message: str,
        keyword: Optional[str] = None,
        schema_path: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize compilation error.

        Args:
            message: Error message
            keyword: Schema keyword that could not be compiled
            schema_path: Location of the offending node inside the definition
            context: Error context
        """
        context = dict(context or {})
        context["schema_path"] = schema_path
        super().__init__(message, keyword=keyword, context=context)
        self.schema_path = schema_path


__all__ = [
    "JsonConformException",
    "SchemaConfigurationError",
    "SchemaCompilationError",
]
