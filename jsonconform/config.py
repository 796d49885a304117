# -*- coding: utf-8 -*-
"""
JSONConform Configuration

Centralized configuration for the validator facade and schema compiler:
- Metrics recording toggle
- Strict handling of unregistered format names at compile time
- Slow-validation warning threshold
- Logging level

All settings can be overridden via environment variables with the
``JSONCONFORM_`` prefix (e.g. ``JSONCONFORM_STRICT_FORMATS``).

Example:
    >>> from jsonconform.config import get_config
    >>> cfg = get_config()
    >>> print(cfg.strict_formats, cfg.slow_validation_ms)

Author: JSONConform Team
Status: Production Ready
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Environment variable prefix
# ---------------------------------------------------------------------------

_ENV_PREFIX = "JSONCONFORM_"


# ---------------------------------------------------------------------------
# JsonConformConfig
# ---------------------------------------------------------------------------


@dataclass
class JsonConformConfig:
    """Complete configuration for jsonconform.

    All attributes can be overridden via environment variables using the
    ``JSONCONFORM_`` prefix.

    Attributes:
        enable_metrics: Whether the validator facade records Prometheus metrics.
        strict_formats: Whether the compiler rejects unregistered format names
            instead of treating them as advisory.
        slow_validation_ms: Validation calls slower than this are logged as
            warnings.
        log_level: Logging level for the jsonconform logger hierarchy.
    """

    # -- Observability -------------------------------------------------------
    enable_metrics: bool = True
    slow_validation_ms: float = 250.0

    # -- Compilation ---------------------------------------------------------
    strict_formats: bool = False

    # -- Logging -------------------------------------------------------------
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Factory helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> JsonConformConfig:
        """Build a JsonConformConfig from environment variables.

        Every field can be overridden via ``JSONCONFORM_<FIELD_UPPER>``.
        Boolean values accept ``true/1/yes`` (case-insensitive).
        Float values are parsed via ``float()``; an unparsable value logs a
        warning and keeps the default.

        Returns:
            Populated JsonConformConfig instance.
        """
        prefix = _ENV_PREFIX

        def _env(name: str, default: Any = None) -> Optional[str]:
            return os.environ.get(f"{prefix}{name}", default)

        def _bool(name: str, default: bool) -> bool:
            val = _env(name)
            if val is None:
                return default
            return val.lower() in ("true", "1", "yes")

        def _float(name: str, default: float) -> float:
            val = _env(name)
            if val is None:
                return default
            try:
                return float(val)
            except ValueError:
                logger.warning(
                    "Invalid float for %s%s=%s, using default %f",
                    prefix, name, val, default,
                )
                return default

        def _str(name: str, default: str) -> str:
            val = _env(name)
            if val is None:
                return default
            return val

        config = cls(
            enable_metrics=_bool("ENABLE_METRICS", cls.enable_metrics),
            slow_validation_ms=_float(
                "SLOW_VALIDATION_MS", cls.slow_validation_ms,
            ),
            strict_formats=_bool("STRICT_FORMATS", cls.strict_formats),
            log_level=_str("LOG_LEVEL", cls.log_level),
        )

        logger.info(
            "JsonConformConfig loaded: enable_metrics=%s, strict_formats=%s, "
            "slow_validation_ms=%.1f, log_level=%s",
            config.enable_metrics,
            config.strict_formats,
            config.slow_validation_ms,
            config.log_level,
        )
        return config

    def apply_log_level(self) -> None:
        """Set the ``jsonconform`` logger level from ``log_level``."""
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            logger.warning("Unknown log level %r, leaving logger unchanged", self.log_level)
            return
        logging.getLogger("jsonconform").setLevel(level)


# ---------------------------------------------------------------------------
# Thread-safe singleton accessor
# ---------------------------------------------------------------------------

_config_instance: Optional[JsonConformConfig] = None
_config_lock = threading.Lock()


def get_config() -> JsonConformConfig:
    """Return the singleton JsonConformConfig, creating from env if needed.

    Returns:
        JsonConformConfig singleton instance.
    """
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = JsonConformConfig.from_env()
    return _config_instance


def set_config(config: JsonConformConfig) -> None:
    """Replace the singleton JsonConformConfig (useful for testing).

    Args:
        config: New configuration to install.
    """
    global _config_instance
    with _config_lock:
        _config_instance = config
    logger.info("JsonConformConfig replaced programmatically")


def reset_config() -> None:
    """Reset the singleton (primarily for test teardown)."""
    global _config_instance
    with _config_lock:
        _config_instance = None


__all__ = [
    "JsonConformConfig",
    "get_config",
    "set_config",
    "reset_config",
]
