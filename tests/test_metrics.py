# -*- coding: utf-8 -*-
"""Tests for the Prometheus metric helpers."""

import pytest

from jsonconform import metrics
from jsonconform.compiler import SchemaCompiler
from jsonconform.config import JsonConformConfig

pytestmark = pytest.mark.skipif(
    not metrics.PROMETHEUS_AVAILABLE, reason="prometheus_client not installed",
)


def _sample(collector, **labels):
    name = collector._name
    for metric in collector.collect():
        for sample in metric.samples:
            if sample.name == f"{name}_total" and sample.labels == labels:
                return sample.value
    return 0.0


class TestMetricHelpers:
    """Tests for record_validation and record_schema_compiled."""

    def test_record_validation(self):
        before_invalid = _sample(metrics.validations_total, result="invalid")
        before_errors = _sample(metrics.validation_errors_total)

        metrics.record_validation(False, 3, 0.002)

        assert _sample(metrics.validations_total, result="invalid") == before_invalid + 1
        assert _sample(metrics.validation_errors_total) == before_errors + 3

    def test_record_valid_adds_no_errors(self):
        before_errors = _sample(metrics.validation_errors_total)
        metrics.record_validation(True, 0, 0.001)
        assert _sample(metrics.validation_errors_total) == before_errors

    def test_compiler_records_root_kind(self):
        before = _sample(metrics.schemas_compiled_total, root_kind="array")
        SchemaCompiler(config=JsonConformConfig(enable_metrics=True)).compile(
            {"type": "array", "items": {"type": "object"}},
        )
        assert _sample(metrics.schemas_compiled_total, root_kind="array") == before + 1
