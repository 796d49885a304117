# -*- coding: utf-8 -*-
"""Pytest configuration and shared fixtures."""

import pytest

from jsonconform.config import JsonConformConfig, reset_config, set_config
from jsonconform.formats import FormatRegistry


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Give every test a fresh configuration singleton free of env overrides."""
    for name in (
        "JSONCONFORM_ENABLE_METRICS",
        "JSONCONFORM_STRICT_FORMATS",
        "JSONCONFORM_SLOW_VALIDATION_MS",
        "JSONCONFORM_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config():
    """Install and return a default configuration."""
    cfg = JsonConformConfig()
    set_config(cfg)
    return cfg


@pytest.fixture
def registry():
    """A private format registry pre-populated with the built-in formats."""
    return FormatRegistry.with_defaults()
