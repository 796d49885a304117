# -*- coding: utf-8 -*-
"""Tests for ObjectSchema: properties, required names, pattern properties
and the additional-properties policy."""

import re

import pytest

from jsonconform.array_schema import ArraySchema
from jsonconform.exceptions import SchemaConfigurationError
from jsonconform.models import SimpleType
from jsonconform.object_schema import AdditionalProperties, ObjectSchema
from jsonconform.simple_type_schema import SimpleTypeSchema


def _pairs(errors):
    return [(e.location, e.message) for e in errors]


@pytest.fixture
def person():
    """Object with a required name, an optional bounded age and tags."""
    schema = ObjectSchema()
    schema.add_property("name", SimpleTypeSchema(SimpleType.STRING), required=True)
    schema.add_property("age", SimpleTypeSchema(SimpleType.INTEGER, minimum=0))
    schema.add_property("tags", ArraySchema(SimpleTypeSchema(SimpleType.STRING)))
    return schema


class TestObjectType:
    """Tests for the object kind check."""

    @pytest.mark.parametrize("value", [[], "x", 1, None])
    def test_non_object(self, value):
        assert _pairs(ObjectSchema().validate(value)) == [
            ("", "Invalid type: must be an object"),
        ]

    def test_empty_schema_accepts_any_object(self):
        assert ObjectSchema().validate({"a": 1, "b": [None]}) == []


class TestProperties:
    """Tests for declared and required properties."""

    def test_valid_document(self, person):
        assert person.validate({"name": "Ada", "age": 36, "tags": ["math"]}) == []

    def test_optional_property_may_be_absent(self, person):
        assert person.validate({"name": "Ada"}) == []

    def test_missing_required(self, person):
        assert _pairs(person.validate({"age": 3})) == [
            (".name", "Missing required property 'name'"),
        ]

    def test_child_errors_prefixed(self, person):
        errors = person.validate({"name": 1, "age": -1, "tags": ["ok", 2]})

        assert _pairs(errors) == [
            (".name", "Invalid type: must be a string"),
            (".age", "Value -1 is less than minimum 0"),
            (".tags[1]", "Invalid type: must be a string"),
        ]

    def test_declaration_order_not_document_order(self, person):
        errors = person.validate({"tags": [1], "age": "x", "name": 2})
        assert [e.location for e in errors] == [".name", ".age", ".tags[0]"]

    def test_required_without_declared_schema(self):
        schema = ObjectSchema(required=["id", "kind"])
        assert _pairs(schema.validate({"kind": "a"})) == [
            (".id", "Missing required property 'id'"),
        ]

    def test_required_setter_dedupes_in_order(self):
        schema = ObjectSchema()
        schema.required = ["b", "a", "b"]
        assert schema.required == ("b", "a")

    def test_required_rejects_bare_string(self):
        with pytest.raises(SchemaConfigurationError, match="not a string"):
            ObjectSchema(required="name")

    def test_required_rejects_empty_name(self):
        with pytest.raises(SchemaConfigurationError):
            ObjectSchema(required=[""])

    def test_constructor_properties(self):
        schema = ObjectSchema(
            {"a": SimpleTypeSchema(SimpleType.BOOLEAN)}, required=["a"],
        )
        assert list(schema.properties) == ["a"]
        assert _pairs(schema.validate({"a": "yes"})) == [
            (".a", "Invalid type: must be a boolean"),
        ]

    def test_duplicate_property(self, person):
        with pytest.raises(SchemaConfigurationError, match="already declared"):
            person.add_property("name", SimpleTypeSchema())

    def test_property_must_be_schema(self):
        with pytest.raises(SchemaConfigurationError, match="must be schemas"):
            ObjectSchema().add_property("a", "string")

    def test_property_name_must_not_be_empty(self):
        with pytest.raises(SchemaConfigurationError, match="non-empty string"):
            ObjectSchema().add_property("", SimpleTypeSchema())

    def test_nested_objects(self):
        inner = ObjectSchema({"zip": SimpleTypeSchema(SimpleType.STRING, pattern=r"^\d{5}$")})
        outer = ObjectSchema({"address": inner}, required=["address"])

        assert _pairs(outer.validate({"address": {"zip": "1234"}})) == [
            (".address.zip", "String \"1234\" does not match regex pattern '^\\d{5}$'"),
        ]


class TestPatternProperties:
    """Tests for regex-matched property names."""

    @pytest.fixture
    def schema(self):
        schema = ObjectSchema(additional_properties=False)
        schema.add_property("id", SimpleTypeSchema(SimpleType.INTEGER))
        schema.add_pattern_property("^x-", SimpleTypeSchema(SimpleType.STRING))
        return schema

    def test_matching_name_validated(self, schema):
        assert _pairs(schema.validate({"x-trace": 5})) == [
            (".x-trace", "Invalid type: must be a string"),
        ]

    def test_matching_name_not_additional(self, schema):
        assert schema.validate({"x-trace": "abc"}) == []

    def test_declared_name_also_checked_against_patterns(self):
        schema = ObjectSchema({"x-id": SimpleTypeSchema(SimpleType.ANY)})
        schema.add_pattern_property("^x-", SimpleTypeSchema(SimpleType.STRING))

        assert _pairs(schema.validate({"x-id": 1})) == [
            (".x-id", "Invalid type: must be a string"),
        ]

    def test_every_matching_pattern_applies(self):
        schema = ObjectSchema()
        schema.add_pattern_property("a", SimpleTypeSchema(SimpleType.STRING, min_length=3))
        schema.add_pattern_property("b", SimpleTypeSchema(SimpleType.STRING, max_length=1))

        errors = schema.validate({"ab": "xy"})
        assert [e.location for e in errors] == [".ab", ".ab"]

    def test_compiled_pattern(self):
        schema = ObjectSchema()
        schema.add_pattern_property(re.compile(r"^\d+$"), SimpleTypeSchema(SimpleType.NUMBER))
        assert len(schema.validate({"42": "no"})) == 1
        assert len(schema.pattern_properties) == 1

    def test_invalid_pattern(self):
        with pytest.raises(SchemaConfigurationError, match="patternProperties"):
            ObjectSchema().add_pattern_property("(", SimpleTypeSchema())


class TestAdditionalProperties:
    """Tests for the additional-properties policy."""

    def test_allow_by_default(self, person):
        assert person.additional_properties is AdditionalProperties.ALLOW
        assert person.validate({"name": "Ada", "extra": [1, 2]}) == []

    def test_deny(self, person):
        person.additional_properties = False
        errors = person.validate({"name": "Ada", "b": 1, "a": 2})

        assert _pairs(errors) == [
            (".b", "Unexpected property 'b'"),
            (".a", "Unexpected property 'a'"),
        ]

    def test_deny_enum_value(self, person):
        person.additional_properties = AdditionalProperties.DENY
        assert person.additional_properties is AdditionalProperties.DENY

    def test_schema_policy(self, person):
        person.additional_properties = SimpleTypeSchema(SimpleType.NUMBER)
        errors = person.validate({"name": "Ada", "score": 9.5, "note": "hi"})

        assert _pairs(errors) == [(".note", "Invalid type: must be a number")]
        assert isinstance(person.additional_properties, SimpleTypeSchema)

    def test_back_to_allow(self, person):
        person.additional_properties = SimpleTypeSchema(SimpleType.NUMBER)
        person.additional_properties = True
        assert person.validate({"name": "Ada", "note": "hi"}) == []

    def test_invalid_policy(self):
        with pytest.raises(SchemaConfigurationError, match="additionalProperties"):
            ObjectSchema(additional_properties="sometimes")

    def test_validate_member_needs_a_schema(self):
        with pytest.raises(SchemaConfigurationError):
            ObjectSchema(additional_properties=AdditionalProperties.VALIDATE)


class TestOrdering:
    """Error order is fixed: declared, required-only, then document order."""

    def test_full_order(self):
        schema = ObjectSchema(
            {"a": SimpleTypeSchema(SimpleType.STRING)},
            required=["a", "z"],
            additional_properties=False,
        )
        errors = schema.validate({"q": 1})

        assert _pairs(errors) == [
            (".a", "Missing required property 'a'"),
            (".z", "Missing required property 'z'"),
            (".q", "Unexpected property 'q'"),
        ]

    def test_idempotent(self, person):
        document = {"name": 1, "tags": [1, 2]}
        first = person.validate(document)

        assert person.validate(document) == first
        assert document == {"name": 1, "tags": [1, 2]}
