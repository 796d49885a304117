# -*- coding: utf-8 -*-
"""
Format Checkers - secondary refinements of STRING and NUMBER/INTEGER values

A registry mapping a ``format`` name to a checker function and to the set of
schema types the format may be declared on. Unknown format names are
advisory: they are compatible with every type and never fail.

Built-in formats:
    date-time     STRING            complete RFC 3339 date-time (ASCII digits)
    date          STRING            YYYY-MM-DD
    time          STRING            HH:MM:SS
    regex         STRING            compiles as a regular expression
    uri           STRING            syntactically valid URI reference
    utc-millisec  NUMBER, INTEGER   no check beyond the type check

Example:
    >>> from jsonconform.formats import get_default_registry
    >>> registry = get_default_registry()
    >>> registry.check("date", "2011-05-10")
    True
    >>> registry.check("no-such-format", 42)
    True
"""

from __future__ import annotations

import calendar
import logging
import re
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional
from urllib.parse import urlsplit

from jsonconform.models import SimpleType

logger = logging.getLogger(__name__)

__all__ = [
    "FORMAT_DATE_TIME",
    "FORMAT_DATE",
    "FORMAT_TIME",
    "FORMAT_REGEX",
    "FORMAT_URI",
    "FORMAT_UTC_MILLISEC",
    "FormatCheck",
    "FormatChecker",
    "FormatRegistry",
    "get_default_registry",
]

FormatCheck = Callable[[Any], bool]

FORMAT_DATE_TIME = "date-time"
FORMAT_DATE = "date"
FORMAT_TIME = "time"
FORMAT_REGEX = "regex"
FORMAT_URI = "uri"
FORMAT_UTC_MILLISEC = "utc-millisec"

_STRING_ONLY: FrozenSet[SimpleType] = frozenset({SimpleType.STRING})
_NUMERIC_ONLY: FrozenSet[SimpleType] = frozenset(
    {SimpleType.NUMBER, SimpleType.INTEGER}
)


# ---------------------------------------------------------------------------
# Format Regex Patterns
# ---------------------------------------------------------------------------

_RE_DATE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")
_RE_TIME = re.compile(r"^([0-9]{2}):([0-9]{2}):([0-9]{2})$")
_RE_DATE_TIME = re.compile(
    r"^([0-9]{4})-([0-9]{2})-([0-9]{2})"
    r"[Tt]([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.[0-9]+)?"
    r"(?:[Zz]|[+\-]([0-9]{2}):([0-9]{2}))$"
)
_RE_URI_CHARS = re.compile(
    r"^(?:[A-Za-z0-9\-._~!$&'()*+,;=:@/?#\[\]]|%[0-9A-Fa-f]{2})*$"
)
_RE_URI_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_RE_URI_IP_LITERAL_AUTHORITY = re.compile(
    r"^(?:[^@\[\]]*@)?"
    r"\[(?:[0-9A-Fa-f:.]+|[Vv][0-9A-Fa-f]+\.[A-Za-z0-9\-._~!$&'()*+,;=:]+)\]"
    r"(?::[0-9]*)?$"
)


# ---------------------------------------------------------------------------
# Built-in checkers
# ---------------------------------------------------------------------------


def _valid_date(year: int, month: int, day: int) -> bool:
    if not 1 <= month <= 12:
        return False
    return 1 <= day <= calendar.monthrange(year, month)[1]


def _valid_clock(hour: int, minute: int, second: int) -> bool:
    return 0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59


def is_date_time(value: Any) -> bool:
    """Check for a complete RFC 3339 date-time, e.g. ``2011-05-10T11:11:17Z``."""
    if not isinstance(value, str):
        return False
    match = _RE_DATE_TIME.fullmatch(value)
    if match is None:
        return False
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    if not (_valid_date(year, month, day) and _valid_clock(hour, minute, second)):
        return False
    offset_hour, offset_minute = match.group(7), match.group(8)
    if offset_hour is not None:
        return int(offset_hour) <= 23 and int(offset_minute) <= 59
    return True


def is_date(value: Any) -> bool:
    """Check for a full date in ``YYYY-MM-DD`` form."""
    if not isinstance(value, str):
        return False
    match = _RE_DATE.fullmatch(value)
    if match is None:
        return False
    year, month, day = (int(g) for g in match.groups())
    return _valid_date(year, month, day)


def is_time(value: Any) -> bool:
    """Check for a time of day in ``HH:MM:SS`` form."""
    if not isinstance(value, str):
        return False
    match = _RE_TIME.fullmatch(value)
    if match is None:
        return False
    hour, minute, second = (int(g) for g in match.groups())
    return _valid_clock(hour, minute, second)


def is_regex(value: Any) -> bool:
    """Check that the value compiles as a regular expression."""
    if not isinstance(value, str):
        return False
    try:
        re.compile(value)
    except re.error:
        return False
    return True


def is_uri(value: Any) -> bool:
    """Check that the value is a syntactically valid URI reference (RFC 3986).

    A reference either starts with a scheme followed by ``:`` or is
    relative, in which case its first path segment may not contain ``:``.
    Square brackets may only enclose an IP-literal host, and the fragment
    may not contain a second ``#``.
    """
    if not isinstance(value, str):
        return False
    if _RE_URI_CHARS.fullmatch(value) is None:
        return False
    head = re.split(r"[/?#]", value, maxsplit=1)[0]
    if ":" in head:
        scheme = head.split(":", 1)[0]
        if _RE_URI_SCHEME.fullmatch(scheme) is None:
            return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if "#" in parts.fragment:
        return False
    for component in (parts.path, parts.query, parts.fragment):
        if "[" in component or "]" in component:
            return False
    if "[" in parts.netloc or "]" in parts.netloc:
        return _RE_URI_IP_LITERAL_AUTHORITY.fullmatch(parts.netloc) is not None
    return True


def _always_valid(value: Any) -> bool:
    return True


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FormatChecker:
    """A registered format.

    Attributes:
        name: Format name as it appears in a schema.
        applicable_types: Schema types the format may be declared on.
        check: Predicate returning True when a value conforms.
    """

    name: str
    applicable_types: FrozenSet[SimpleType]
    check: FormatCheck


class FormatRegistry:
    """Registry from format name to FormatChecker.

    Lookups of unregistered names fall back to "always valid, compatible
    with every type". Registration is guarded by a lock; lookups are plain
    dict reads.

    Example:
        >>> registry = FormatRegistry.with_defaults()
        >>> registry.register("even", lambda v: v % 2 == 0, [SimpleType.INTEGER])
        >>> registry.check("even", 3)
        False
    """

    def __init__(self, checkers: Optional[Iterable[FormatChecker]] = None) -> None:
        self._checkers: Dict[str, FormatChecker] = {}
        self._lock = threading.Lock()
        for checker in checkers or ():
            self._checkers[checker.name] = checker

    @classmethod
    def with_defaults(cls) -> "FormatRegistry":
        """Create a registry pre-populated with the built-in formats."""
        return cls(_BUILTIN_CHECKERS)

    def register(
        self,
        name: str,
        check: FormatCheck,
        applicable_types: Iterable[SimpleType],
    ) -> None:
        """Register or replace a format.

        Args:
            name: Format name.
            check: Predicate returning True when a value conforms.
            applicable_types: Schema types the format may be declared on.

        Raises:
            ValueError: If ``name`` is empty or no types are given.
        """
        types = frozenset(applicable_types)
        if not name:
            raise ValueError("Format name must not be empty")
        if not types:
            raise ValueError(f"Format '{name}' must apply to at least one type")
        with self._lock:
            replaced = name in self._checkers
            self._checkers[name] = FormatChecker(name, types, check)
        logger.debug(
            "%s format '%s' for types %s",
            "Replaced" if replaced else "Registered",
            name, sorted(t.value for t in types),
        )

    def get(self, name: str) -> Optional[FormatChecker]:
        return self._checkers.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self._checkers

    def is_compatible(self, name: str, simple_type: SimpleType) -> bool:
        """Return True if ``name`` may be declared on ``simple_type``."""
        checker = self._checkers.get(name)
        if checker is None:
            return True
        return simple_type in checker.applicable_types

    def applicable_types(self, name: str) -> FrozenSet[SimpleType]:
        checker = self._checkers.get(name)
        if checker is None:
            return frozenset(SimpleType)
        return checker.applicable_types

    def check(self, name: str, value: Any) -> bool:
        """Return True if ``value`` conforms to format ``name``."""
        checker = self._checkers.get(name)
        if checker is None:
            return True
        return checker.check(value)

    def names(self) -> List[str]:
        return sorted(self._checkers)


_BUILTIN_CHECKERS = (
    FormatChecker(FORMAT_DATE_TIME, _STRING_ONLY, is_date_time),
    FormatChecker(FORMAT_DATE, _STRING_ONLY, is_date),
    FormatChecker(FORMAT_TIME, _STRING_ONLY, is_time),
    FormatChecker(FORMAT_REGEX, _STRING_ONLY, is_regex),
    FormatChecker(FORMAT_URI, _STRING_ONLY, is_uri),
    FormatChecker(FORMAT_UTC_MILLISEC, _NUMERIC_ONLY, _always_valid),
)


# ---------------------------------------------------------------------------
# Thread-safe default registry accessor
# ---------------------------------------------------------------------------

_default_registry: Optional[FormatRegistry] = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> FormatRegistry:
    """Return the process-wide registry, creating it with built-ins if needed."""
    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = FormatRegistry.with_defaults()
    return _default_registry
