# -*- coding: utf-8 -*-
"""
Prometheus Metrics - jsonconform

4 Prometheus metrics for validation monitoring with graceful fallback when
prometheus_client is not installed.

Metrics:
    1. jsonconform_validations_total (Counter, labels: result)
    2. jsonconform_validation_errors_total (Counter)
    3. jsonconform_validation_duration_seconds (Histogram, 10 buckets)
    4. jsonconform_schemas_compiled_total (Counter, labels: root_kind)

Author: JSONConform Team
Status: Production Ready
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Graceful prometheus_client import
# ---------------------------------------------------------------------------

try:
    from prometheus_client import Counter, Histogram
    PROMETHEUS_AVAILABLE = True
except ImportError:
    PROMETHEUS_AVAILABLE = False
    logger.info(
        "prometheus_client not installed; jsonconform metrics disabled"
    )


# ---------------------------------------------------------------------------
# Metric definitions
# ---------------------------------------------------------------------------

if PROMETHEUS_AVAILABLE:
    # 1. Documents validated, by outcome
    validations_total = Counter(
        "jsonconform_validations_total",
        "Total documents validated",
        labelnames=["result"],
    )

    # 2. Validation errors reported across all documents
    validation_errors_total = Counter(
        "jsonconform_validation_errors_total",
        "Total validation errors reported",
    )

    # 3. Validation duration (sub-millisecond to multi-second documents)
    validation_duration_seconds = Histogram(
        "jsonconform_validation_duration_seconds",
        "Document validation duration in seconds",
        buckets=(
            0.0001, 0.0005, 0.001, 0.005, 0.01,
            0.05, 0.1, 0.5, 1.0, 5.0,
        ),
    )

    # 4. Schema trees compiled, by root node kind
    schemas_compiled_total = Counter(
        "jsonconform_schemas_compiled_total",
        "Total schema definitions compiled",
        labelnames=["root_kind"],
    )

else:
    # No-op placeholders
    validations_total = None  # type: ignore[assignment]
    validation_errors_total = None  # type: ignore[assignment]
    validation_duration_seconds = None  # type: ignore[assignment]
    schemas_compiled_total = None  # type: ignore[assignment]


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------


def record_validation(valid: bool, error_count: int, duration_seconds: float) -> None:
    """Record one document validation.

    Args:
        valid: Whether the document conformed.
        error_count: Number of errors reported.
        duration_seconds: Validation wall-clock time in seconds.
    """
    if not PROMETHEUS_AVAILABLE:
        return
    validations_total.labels(result="valid" if valid else "invalid").inc()
    if error_count:
        validation_errors_total.inc(error_count)
    validation_duration_seconds.observe(duration_seconds)


def record_schema_compiled(root_kind: str) -> None:
    """Record one compiled schema definition.

    Args:
        root_kind: Kind of the root node (simple, array, object).
    """
    if not PROMETHEUS_AVAILABLE:
        return
    schemas_compiled_total.labels(root_kind=root_kind).inc()


__all__ = [
    "PROMETHEUS_AVAILABLE",
    "validations_total",
    "validation_errors_total",
    "validation_duration_seconds",
    "schemas_compiled_total",
    "record_validation",
    "record_schema_compiled",
]
