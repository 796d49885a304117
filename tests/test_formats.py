# -*- coding: utf-8 -*-
"""Tests for the format checkers and the format registry."""

import pytest

from jsonconform.formats import (
    FORMAT_DATE,
    FORMAT_DATE_TIME,
    FORMAT_REGEX,
    FORMAT_TIME,
    FORMAT_URI,
    FORMAT_UTC_MILLISEC,
    FormatRegistry,
    get_default_registry,
    is_date,
    is_date_time,
    is_regex,
    is_time,
    is_uri,
)
from jsonconform.models import SimpleType


class TestDateTime:
    """Tests for the date-time format."""

    @pytest.mark.parametrize("value", [
        "2011-05-10T11:11:17Z",
        "2011-05-10T11:11:17.123Z",
        "2011-05-10T11:11:17+02:00",
        "2012-02-29T00:00:00-05:30",
        "2011-05-10t11:11:17z",
        "2011-05-10T11:11:17.5z",
    ])
    def test_accepts(self, value):
        assert is_date_time(value)

    @pytest.mark.parametrize("value", [
        "2011-05-44T11:11:17Z",
        "2011-May-10T165:11:17z",
        "2011-05-10",
        "2011-05-10T11:11Z",
        "2011-05-10T11:11:17",
        "2011-05-10T25:11:17Z",
        "2011-02-29T11:11:17Z",
        "2011-05-10T11:11:17+24:00",
        "\uff12\uff10\uff11\uff11-05-10T11:11:17Z",
        "2011-05-10T\u0661\u0661:11:17Z",
    ])
    def test_rejects(self, value):
        assert not is_date_time(value)

    def test_rejects_non_string(self):
        assert not is_date_time(20110510)


class TestDate:
    """Tests for the date format."""

    def test_accepts(self):
        assert is_date("2011-05-10")

    @pytest.mark.parametrize("value", [
        "2011-05-44",
        "2011-May-10",
        "1995-5-22",
        "2011-05-10T11:47:16Z",
        "11-05-10",
        "2011-13-01",
        "\u0662\u0660\u0661\u0661-\u0660\u0665-\u0661\u0660",
        "\uff12\uff10\uff11\uff11-05-10",
    ])
    def test_rejects(self, value):
        assert not is_date(value)


class TestTime:
    """Tests for the time format."""

    def test_accepts(self):
        assert is_time("13:15:47")

    @pytest.mark.parametrize("value", [
        "2011-05-10",
        "13:75:47",
        "11:47:16-blah",
        "1:15:47",
        "24:00:00",
        "\uff11\uff13:15:47",
        "13:15:\u0664\u0667",
    ])
    def test_rejects(self, value):
        assert not is_time(value)


class TestRegexAndUri:
    """Tests for the regex and uri formats."""

    def test_regex(self):
        assert is_regex(".*")
        assert is_regex("^[a-z]+$")
        assert not is_regex("+")
        assert not is_regex("(unclosed")

    @pytest.mark.parametrize("value", [
        "http://www.example.com",
        "https://example.com/a/b?q=1#frag",
        "urn:isbn:0451450523",
        "relative/path",
        "mailto:someone@example.com",
        "http://example.com/%20space",
        "http://[::1]:8080/status",
        "http://user@[2001:db8::7]/x",
    ])
    def test_uri_accepts(self, value):
        assert is_uri(value)

    @pytest.mark.parametrize("value", [
        ":this-isn't-a-valid-uri",
        "http://exa mple.com",
        "1http://example.com",
        "http://example.com/%zz",
        "http://example.com/#a#b",
        "http://example.com/a[1]",
        "http://example.com/?q=[x]",
        "http://ex[am]ple.com/",
        "http://[::1/",
    ])
    def test_uri_rejects(self, value):
        assert not is_uri(value)


class TestFormatRegistry:
    """Tests for registry lookups, compatibility and registration."""

    def test_builtin_names(self, registry):
        assert registry.names() == sorted([
            FORMAT_DATE_TIME, FORMAT_DATE, FORMAT_TIME,
            FORMAT_REGEX, FORMAT_URI, FORMAT_UTC_MILLISEC,
        ])

    @pytest.mark.parametrize("name", [
        FORMAT_DATE_TIME, FORMAT_DATE, FORMAT_TIME, FORMAT_REGEX, FORMAT_URI,
    ])
    def test_string_formats_require_string(self, registry, name):
        assert registry.is_compatible(name, SimpleType.STRING)
        for simple_type in SimpleType:
            if simple_type is not SimpleType.STRING:
                assert not registry.is_compatible(name, simple_type)

    def test_utc_millisec_requires_numeric(self, registry):
        assert registry.is_compatible(FORMAT_UTC_MILLISEC, SimpleType.NUMBER)
        assert registry.is_compatible(FORMAT_UTC_MILLISEC, SimpleType.INTEGER)
        assert not registry.is_compatible(FORMAT_UTC_MILLISEC, SimpleType.STRING)

    def test_utc_millisec_never_fails(self, registry):
        assert registry.check(FORMAT_UTC_MILLISEC, 1305025877000)
        assert registry.check(FORMAT_UTC_MILLISEC, -1.5)

    def test_unknown_format_is_advisory(self, registry):
        assert not registry.is_registered("color")
        assert registry.check("color", "not a color")
        assert registry.check("color", 42)
        assert registry.applicable_types("color") == frozenset(SimpleType)
        for simple_type in SimpleType:
            assert registry.is_compatible("color", simple_type)

    def test_register_custom_format(self, registry):
        registry.register("even", lambda v: v % 2 == 0, [SimpleType.INTEGER])

        assert registry.is_registered("even")
        assert registry.check("even", 4)
        assert not registry.check("even", 3)
        assert registry.get("even").applicable_types == frozenset({SimpleType.INTEGER})

    def test_register_replaces_existing(self, registry):
        registry.register(FORMAT_DATE, lambda v: True, [SimpleType.STRING])
        assert registry.check(FORMAT_DATE, "whenever")

    def test_register_rejects_empty_name(self, registry):
        with pytest.raises(ValueError, match="must not be empty"):
            registry.register("", lambda v: True, [SimpleType.STRING])

    def test_register_rejects_no_types(self, registry):
        with pytest.raises(ValueError, match="at least one type"):
            registry.register("x", lambda v: True, [])

    def test_empty_registry_knows_nothing(self):
        assert FormatRegistry().check(FORMAT_DATE, "garbage")

    def test_default_registry_is_singleton(self):
        assert get_default_registry() is get_default_registry()
        assert get_default_registry().is_registered(FORMAT_DATE_TIME)
