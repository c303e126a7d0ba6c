"""
Tests for the JSON Schema visitor and its helpers.
"""

from __future__ import annotations

import pytest
from jsonschema import Draft4Validator, Draft7Validator, Draft201909Validator, Draft202012Validator
from jsonschema.exceptions import SchemaError

from json_schema_to_concerto.pipeline.analyzer import (
    BooleanProperty,
    ConceptDeclaration,
    DateTimeProperty,
    DoubleDomainValidator,
    DoubleProperty,
    EnumDeclaration,
    IntegerDomainValidator,
    IntegerProperty,
    JsonSchemaVisitor,
    ObjectProperty,
    ReferenceResolver,
    StringProperty,
    StringRegexValidator,
    StringScalar,
    UnsupportedTypeError,
    VisitorParameters,
    check_schema,
    infer_models,
    locate_definitions,
    select_validator,
)
from json_schema_to_concerto.pipeline.analyzer.primitives import infer_property_class, infer_validator
from json_schema_to_concerto.pipeline.analyzer.visitor import (
    TypeName,
    as_schema,
    deduplicate_declarations,
    flatten,
    is_fixed_elements_array,
    is_object_freeform,
)
from json_schema_to_concerto.pipeline.schema_ast import Definition, LocalReference, Property, SchemaFragment

NAMESPACE = "com.test@1.0.0"


class TestHelpers:
    def test_as_schema(self):
        assert as_schema({"type": "string"}) == {"type": "string"}
        assert as_schema(True) == {}
        assert as_schema(False) == {"not": {}}

    def test_flatten(self):
        assert flatten([1, [2, [3, None]], None, [[]], 4]) == [1, 2, 3, 4]

    @pytest.mark.parametrize(
        "body, expected",
        [
            ({}, True),
            ({"type": "object"}, True),
            ({"type": "object", "properties": {}, "additionalProperties": True}, True),
            ({"type": "object", "additionalProperties": {}}, True),
            ({"type": "object", "properties": {}}, False),
            ({"type": "object", "properties": {}, "additionalProperties": False}, False),
            ({"type": "string"}, False),
        ],
    )
    def test_is_object_freeform(self, body, expected):
        assert is_object_freeform(body) is expected

    @pytest.mark.parametrize(
        "body, expected",
        [
            ({"type": "array", "items": [{}, {}], "minItems": 2, "maxItems": 2}, True),
            ({"type": "array", "items": [{}, {}], "minItems": 1, "maxItems": 2}, True),
            ({"type": "array", "items": [{}, {}], "minItems": 2, "maxItems": 3}, False),
            ({"type": "array", "items": [{}, {}], "minItems": 2}, False),
            ({"type": "array", "items": {}, "minItems": 1, "maxItems": 1}, False),
        ],
    )
    def test_is_fixed_elements_array(self, body, expected):
        assert is_fixed_elements_array(body) is expected

    def test_deduplicate_keeps_first(self):
        first = ConceptDeclaration(name="Foo", properties=[StringProperty(name="a")])
        second = ConceptDeclaration(name="Foo")
        other = EnumDeclaration(name="Bar")

        assert deduplicate_declarations([first, other, second]) == [first, other]


class TestDefinitionsLocation:
    def test_explicit_path_wins(self):
        assert locate_definitions({"definitions": {}}, ("types",)) == ("types",)

    @pytest.mark.parametrize(
        "schema, expected",
        [
            ({"definitions": {}}, ("definitions",)),
            ({"$defs": {}}, ("$defs",)),
            ({"schema": {"components": {"schemas": {}}}}, ("schema", "components", "schemas")),
            ({"definitions": {}, "$defs": {}}, ("definitions",)),
            ({"type": "object"}, ()),
        ],
    )
    def test_detection(self, schema, expected):
        assert locate_definitions(schema) == expected


class TestReferenceResolver:
    SCHEMA = {"definitions": {"Foo": {"type": "object"}}, "$defs": {"Bar": {"type": "object"}}}

    def test_root(self):
        resolved = ReferenceResolver(self.SCHEMA).resolve("#")
        assert resolved.is_root
        assert resolved.type_name == "Root"

    def test_definition(self):
        resolved = ReferenceResolver(self.SCHEMA).resolve("#/definitions/Foo")
        assert resolved.is_definition
        assert resolved.definition == {"type": "object"}
        assert resolved.pointer == ("definitions", "Foo")

    def test_other_container(self):
        resolved = ReferenceResolver(self.SCHEMA, ("$defs",)).resolve("#/$defs/Bar")
        assert resolved.is_definition

    def test_missing_definition(self):
        resolved = ReferenceResolver(self.SCHEMA).resolve("#/definitions/Missing")
        assert not resolved.is_definition
        assert resolved.type_name == "definitions$_Missing"

    def test_outside_definitions(self):
        resolved = ReferenceResolver(self.SCHEMA).resolve("#/$defs/Bar")
        assert not resolved.is_definition
        assert resolved.type_name == "$defs$_Bar"


class TestSchemaValidation:
    @pytest.mark.parametrize(
        "schema, expected",
        [
            ({"$schema": "https://json-schema.org/draft/2020-12/schema"}, Draft202012Validator),
            ({"$schema": "https://json-schema.org/draft/2020-12/schema#"}, Draft202012Validator),
            ({"$schema": "http://json-schema.org/draft-07/schema#"}, Draft7Validator),
            ({"$schema": "http://json-schema.org/draft-04/schema#"}, Draft4Validator),
            ({}, Draft201909Validator),
        ],
    )
    def test_select_validator(self, schema, expected):
        assert select_validator(schema) is expected

    def test_invalid_schema(self):
        with pytest.raises(SchemaError):
            check_schema({"type": "bar"})

    def test_valid_schema(self):
        check_schema({"type": "object", "properties": {"a": {"type": "string"}}})


class TestVisitor:
    def test_warnings_go_to_sink(self):
        warnings = []
        schema = {
            "title": "Foo",
            "type": "object",
            "properties": {"email": {"type": "string", "format": "email"}},
        }

        infer_models(schema, NAMESPACE, warn=warnings.append)

        assert warnings == ["Format 'email' in 'email' is not supported. It has been ignored."]

    def test_warnings_are_logged_by_default(self, caplog):
        schema = {
            "title": "Foo",
            "type": "object",
            "properties": {"bar": {"type": ["string", "integer"]}},
        }

        with caplog.at_level("WARNING"):
            infer_models(schema, NAMESPACE)

        assert '"bar" is union type property.' in caplog.text

    def test_circular_definitions(self):
        schema = {
            "definitions": {
                "A": {"type": "object", "properties": {"b": {"$ref": "#/definitions/B"}}},
                "B": {"type": "object", "properties": {"a": {"$ref": "#/definitions/A"}}},
            }
        }

        model = infer_models(schema, NAMESPACE).models[0]

        assert [d.name for d in model.declarations] == ["A", "B"]
        a = model.get_declaration("A")
        b = model.get_declaration("B")
        assert a.properties[0].type == "B"
        assert b.properties[0].type == "A"

    def test_sibling_properties_do_not_share_overrides(self):
        schema = {
            "title": "Foo",
            "type": "object",
            "properties": {
                "tags": {"type": "array", "items": {"type": "string"}},
                "label": {"type": "string"},
            },
        }

        concept = infer_models(schema, NAMESPACE).models[0].get_declaration("Foo")

        assert [(p.name, p.is_array) for p in concept.properties] == [("tags", True), ("label", False)]

    def test_array_definition_returns_unvisited_property(self):
        visitor = JsonSchemaVisitor()
        body = {"type": "array", "items": {"type": "string"}}

        result = Definition(body, ("definitions", "Tags")).accept(visitor, VisitorParameters(namespace=NAMESPACE))

        assert result == Property(body, ("definitions", "Tags"))

    def test_traversed_reference_returns_type_name(self):
        visitor = JsonSchemaVisitor()
        schema = {"definitions": {"Foo": {"type": "object", "properties": {}}}}
        parameters = VisitorParameters(
            namespace=NAMESPACE,
            json_schema_model=schema,
            traversed_references=frozenset({"#/definitions/Foo"}),
        )

        result = LocalReference("#/definitions/Foo", ("Bar", "properties", "foo")).accept(visitor, parameters)

        assert result == TypeName("definitions$_Foo")

    def test_declaration_kinds(self):
        schema = {
            "definitions": {
                "Concept": {"type": "object", "properties": {"a": {"type": "string"}}},
                "Choice": {"enum": ["a", "b"]},
                "Blob": {},
            }
        }

        model = infer_models(schema, NAMESPACE).models[0]

        assert isinstance(model.get_declaration("Concept"), ConceptDeclaration)
        assert isinstance(model.get_declaration("Choice"), EnumDeclaration)
        assert isinstance(model.get_declaration("Blob"), StringScalar)

    def test_enum_property_spawns_declaration(self):
        schema = {"title": "Foo", "type": "object", "properties": {"size": {"enum": ["S", "M"]}}}

        model = infer_models(schema, NAMESPACE).models[0]

        size = model.get_declaration("Foo").properties[0]
        assert isinstance(size, ObjectProperty)
        assert size.type == "Foo$_properties$_size"
        assert [v.name for v in model.get_declaration("Foo$_properties$_size").values] == ["S", "M"]

    def test_unknown_fragment(self):
        with pytest.raises(TypeError):
            JsonSchemaVisitor().visit(SchemaFragment(), VisitorParameters())

    def test_models_metadata(self):
        models = infer_models({"title": "Foo"}, NAMESPACE, meta_model_namespace="concerto.metamodel@0.4.0")

        assert models.meta_model_namespace == "concerto.metamodel@0.4.0"
        assert len(models.models) == 1
        assert models.models[0].namespace == NAMESPACE
        assert models.models[0].declarations == []


class TestPrimitives:
    @pytest.mark.parametrize(
        "body, expected",
        [
            ({"type": "string"}, StringProperty),
            ({"type": "string", "format": "date"}, DateTimeProperty),
            ({"type": "boolean"}, BooleanProperty),
            ({"type": "number"}, DoubleProperty),
            ({"type": "integer"}, IntegerProperty),
        ],
    )
    def test_primitive_mapping(self, body, expected):
        assert infer_property_class(body, "x", print) is expected

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedTypeError, match="Type keyword 'object' in 'x' is not supported."):
            infer_property_class({"type": "object"}, "x", print)

    @pytest.mark.parametrize(
        "body, expected",
        [
            ({"type": "number", "minimum": 0, "exclusiveMaximum": 10}, DoubleDomainValidator(lower=None, upper=10)),
            ({"type": "integer", "minimum": 1}, IntegerDomainValidator(lower=1, upper=None)),
            ({"type": "number", "minimum": 0}, None),
            ({"type": "number", "maximum": 5}, None),
            ({"type": "number", "maximum": 5, "exclusiveMaximum": True}, None),
            ({"type": "string", "pattern": "^a"}, StringRegexValidator(pattern="^a", flags="")),
            ({"type": "string", "format": "date-time", "pattern": "^a"}, None),
        ],
    )
    def test_infer_validator(self, body, expected):
        assert infer_validator(body) == expected


if __name__ == "__main__":
    pytest.main([__file__])
