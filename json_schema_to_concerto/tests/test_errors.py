from unittest import TestCase

import pytest

from json_schema_to_concerto import (
    CodeGeneratorConfig,
    PipelineGenerator,
    SchemaConversionError,
    UnsupportedTypeError,
    infer_models,
)


class TestErrors(TestCase):
    def test_unsupported_type_is_a_conversion_error(self):
        self.assertTrue(issubclass(UnsupportedTypeError, SchemaConversionError))

    def test_namespace_is_required(self):
        generator = PipelineGenerator({"title": "Foo"}, CodeGeneratorConfig(), "cto")

        with self.assertRaises(SchemaConversionError):
            generator.generate()

    def test_unknown_output_format(self):
        with self.assertRaises(ValueError):
            PipelineGenerator({}, CodeGeneratorConfig(namespace="com.test@1.0.0"), "xml")

    def test_unknown_type_in_property(self):
        schema = {"title": "Foo", "type": "object", "properties": {"bar": {"type": "null"}}}

        with self.assertRaises(UnsupportedTypeError) as context:
            infer_models(schema, "com.test@1.0.0")

        self.assertEqual(str(context.exception), "Type keyword 'null' in 'bar' is not supported.")

    def test_root_is_not_type_checked(self):
        models = infer_models({"type": "string"}, "com.test@1.0.0")

        self.assertEqual(models.models[0].declarations, [])

    def test_type_less_any_of_definition_is_accepted(self):
        schema = {"definitions": {"Foo": {"anyOf": [{"type": "object", "properties": {"a": {"type": "string"}}}]}}}
        warnings = []

        models = infer_models(schema, "com.test@1.0.0", warn=warnings.append)

        self.assertEqual([d.name for d in models.models[0].declarations], ["Foo"])
        self.assertEqual(len(warnings), 1)


if __name__ == "__main__":
    pytest.main([__file__])
