# -*- coding: utf-8 -*-
"""
JSONConform: JSON Schema validation engine
===========================================

This package validates in-memory JSON documents against a tree of schema
nodes and reports every violation as a (location, message) pair. It
supports:

- Primitive type checks (null, boolean, string, number, integer, any)
- String pattern, length and format constraints
- Numeric range constraints with exclusive bounds
- Enumerations
- Arrays with item schemas and size bounds
- Objects with declared, required, pattern and additional properties
- Construction-time enforcement of constraint/type compatibility
- Compilation of parsed draft-03 schema definitions
- 4 Prometheus metrics for observability
- Thread-safe configuration with JSONCONFORM_ env prefix

Key Components:
    - config: JsonConformConfig with JSONCONFORM_ env prefix
    - exceptions: Configuration and compilation errors
    - models: Pydantic v2 models and enumerations
    - formats: Format checker registry
    - schema: JsonSchema base node and path helpers
    - simple_type_schema: Leaf validator
    - array_schema: Array validator
    - object_schema: Object validator
    - compiler: Schema definition compiler
    - validator: SchemaValidator facade
    - metrics: 4 Prometheus metrics

Example:
    >>> from jsonconform import SchemaCompiler, SchemaValidator
    >>> schema = SchemaCompiler().compile({"type": "integer", "minimum": 0})
    >>> SchemaValidator().validate(-1, schema).errors[0].message
    'Value -1 is less than minimum 0'
"""

__version__ = "1.0.0"

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
from jsonconform.config import (
    JsonConformConfig,
    get_config,
    set_config,
    reset_config,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------
from jsonconform.exceptions import (
    JsonConformException,
    SchemaConfigurationError,
    SchemaCompilationError,
)

# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
from jsonconform.models import (
    JsonValueKind,
    json_kind,
    SimpleType,
    ErrorMessage,
    ValidationReport,
    ValidatorStatistics,
)

# ---------------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------------
from jsonconform.formats import (
    FormatChecker,
    FormatRegistry,
    get_default_registry,
)

# ---------------------------------------------------------------------------
# Schema tree
# ---------------------------------------------------------------------------
from jsonconform.schema import JsonSchema
from jsonconform.simple_type_schema import SimpleTypeSchema
from jsonconform.array_schema import ArraySchema
from jsonconform.object_schema import AdditionalProperties, ObjectSchema

# ---------------------------------------------------------------------------
# Compiler and facade
# ---------------------------------------------------------------------------
from jsonconform.compiler import SchemaCompiler
from jsonconform.validator import SchemaValidator

# ---------------------------------------------------------------------------
# Metrics flag
# ---------------------------------------------------------------------------
from jsonconform.metrics import PROMETHEUS_AVAILABLE

__all__ = [
    "__version__",
    # Configuration
    "JsonConformConfig",
    "get_config",
    "set_config",
    "reset_config",
    # Exceptions
    "JsonConformException",
    "SchemaConfigurationError",
    "SchemaCompilationError",
    # Models
    "JsonValueKind",
    "json_kind",
    "SimpleType",
    "ErrorMessage",
    "ValidationReport",
    "ValidatorStatistics",
    # Formats
    "FormatChecker",
    "FormatRegistry",
    "get_default_registry",
    # Schema tree
    "JsonSchema",
    "SimpleTypeSchema",
    "ArraySchema",
    "AdditionalProperties",
    "ObjectSchema",
    # Compiler and facade
    "SchemaCompiler",
    "SchemaValidator",
    # Metrics
    "PROMETHEUS_AVAILABLE",
]
