# -*- coding: utf-8 -*-
"""
Schema Validator - service facade over the schema tree

Wraps ``JsonSchema.validate`` with timing, logging, Prometheus metrics and
thread-safe statistics, and packages the outcome as a ValidationReport. The
error list is passed through untouched: same errors, same order.

Example:
    >>> from jsonconform.validator import SchemaValidator
    >>> validator = SchemaValidator()
    >>> report = validator.validate(
    ...     {"name": 7},
    ...     {"type": "object", "properties": {"name": {"type": "string"}}},
    ... )
    >>> report.valid, [str(e) for e in report.errors]
    (False, ['.name: Invalid type: must be a string'])

Author: JSONConform Team
Status: Production Ready
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from jsonconform.compiler import SchemaCompiler
from jsonconform.config import JsonConformConfig, get_config
from jsonconform.metrics import record_validation
from jsonconform.models import ValidationReport, ValidatorStatistics
from jsonconform.schema import JsonSchema

logger = logging.getLogger(__name__)

__all__ = ["SchemaValidator"]


class SchemaValidator:
    """Validate JSON documents against compiled schema trees.

    Schemas may be passed as compiled ``JsonSchema`` nodes or as schema
    definition mappings, which are compiled on each call.

    Attributes:
        _config: Active configuration.
        _compiler: Compiler used for definition mappings.
        _lock: Threading lock for statistics.
        _stats: Validation statistics.
    """

    def __init__(self, config: Optional[JsonConformConfig] = None) -> None:
        """Initialise SchemaValidator.

        Args:
            config: Optional configuration; the process-wide singleton is
                used when omitted.
        """
        self._config = config or get_config()
        self._config.apply_log_level()
        self._compiler = SchemaCompiler(config=self._config)
        self._lock = threading.Lock()
        self._stats: Dict[str, int] = self._empty_stats()
        logger.info(
            "SchemaValidator initialised: metrics=%s, slow_validation_ms=%.1f",
            self._config.enable_metrics, self._config.slow_validation_ms,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(
        self,
        document: Any,
        schema: Union[JsonSchema, Mapping],
    ) -> ValidationReport:
        """Validate one document.

        Args:
            document: JSON value to validate.
            schema: Compiled schema node or schema definition mapping.

        Returns:
            ValidationReport with the errors in the order the schema tree
            produced them.

        Raises:
            SchemaCompilationError: If ``schema`` is a definition that
                cannot be compiled.
            TypeError: If ``schema`` is neither a node nor a mapping.
        """
        root = self._resolve(schema)

        start = time.monotonic()
        errors = root.validate(document)
        elapsed = time.monotonic() - start
        elapsed_ms = elapsed * 1000
        valid = not errors

        with self._lock:
            self._stats["documents_validated"] += 1
            self._stats["documents_valid" if valid else "documents_invalid"] += 1
            self._stats["total_errors"] += len(errors)

        if self._config.enable_metrics:
            record_validation(valid, len(errors), elapsed)

        if valid:
            logger.debug(
                "Validated %s document: valid (%.1f ms)", root.kind, elapsed_ms,
            )
        else:
            logger.info(
                "Validated %s document: %d errors, first at '%s' (%.1f ms)",
                root.kind, len(errors), errors[0].location, elapsed_ms,
            )
        if elapsed_ms > self._config.slow_validation_ms:
            logger.warning(
                "Slow validation: %.1f ms exceeds threshold of %.1f ms",
                elapsed_ms, self._config.slow_validation_ms,
            )

        return ValidationReport(
            valid=valid,
            error_count=len(errors),
            errors=errors,
            duration_ms=elapsed_ms,
        )

    def is_valid(self, document: Any, schema: Union[JsonSchema, Mapping]) -> bool:
        """Return True if ``document`` conforms to ``schema``."""
        return self.validate(document, schema).valid

    def get_statistics(self) -> ValidatorStatistics:
        """Return validation statistics.

        Returns:
            Snapshot of the counters.
        """
        with self._lock:
            return ValidatorStatistics(**self._stats)

    def reset_statistics(self) -> None:
        """Zero every counter."""
        with self._lock:
            self._stats = self._empty_stats()
        logger.debug("SchemaValidator statistics reset")

    # ------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------

    def _resolve(self, schema: Union[JsonSchema, Mapping]) -> JsonSchema:
        if isinstance(schema, JsonSchema):
            return schema
        if isinstance(schema, Mapping):
            return self._compiler.compile(schema)
        raise TypeError(
            f"schema must be a JsonSchema or a definition mapping, "
            f"got {type(schema).__name__}"
        )

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            "documents_validated": 0,
            "documents_valid": 0,
            "documents_invalid": 0,
            "total_errors": 0,
        }
