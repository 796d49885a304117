# -*- coding: utf-8 -*-
"""
JsonSchema - the capability shared by every schema node

The schema tree is a closed set of node kinds: ``SimpleTypeSchema`` (leaf),
``ArraySchema`` and ``ObjectSchema`` (containers). Each node validates a JSON
value and returns its errors with locations relative to itself; a container
re-roots its children's errors under its own path segment.

Ordering contract: errors are returned depth-first, left to right (array
index order, then declared property order), so repeated validation of the
same value yields identical lists.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, List

from jsonconform.models import ErrorMessage

__all__ = [
    "JsonSchema",
    "nest_errors",
    "index_segment",
    "property_segment",
]


class JsonSchema(ABC):
    """Base class of all schema nodes.

    Nodes are assembled once (single-threaded), then treated as immutable;
    ``validate`` is then pure and safe to call concurrently.
    """

    @abstractmethod
    def validate(self, document: Any) -> List[ErrorMessage]:
        """Validate a JSON value.

        Args:
            document: Read-only JSON value.

        Returns:
            Ordered list of errors; empty when the value conforms.
        """

    @property
    @abstractmethod
    def kind(self) -> str:
        """Node kind: ``simple``, ``array`` or ``object``."""


def index_segment(index: int) -> str:
    return f"[{index}]"


def property_segment(name: str) -> str:
    return f".{name}"


def nest_errors(path_prefix: str, errors: Iterable[ErrorMessage]) -> List[ErrorMessage]:
    """Re-root child errors under ``path_prefix``, preserving their order."""
    return [error.nested(path_prefix) for error in errors]
