"""
Tests for the json_schema_to_concerto command.
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from json_schema_to_concerto import __version__
from json_schema_to_concerto.json_schema_to_concerto import json_schema_to_concerto

SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "definitions": {
        "Foo": {
            "type": "object",
            "properties": {"name": {"type": "string"}},
            "required": ["name"],
        }
    },
}


@pytest.fixture
def schema_path(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(SCHEMA), encoding="utf-8")
    return path


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def invoke(*args):
    return CliRunner().invoke(json_schema_to_concerto, [str(arg) for arg in args])


def test_cto_output(schema_path, tmp_path):
    output_path = tmp_path / "model.cto"

    result = invoke("--namespace", "com.test@1.0.0", schema_path, output_path)

    assert result.exit_code == 0, result.output
    lines = output_path.read_text(encoding="utf-8").split("\n")
    assert lines[0].startswith(
        f"// Generated by json_schema_to_concerto v{__version__} : json_schema_to_concerto schema.json"
    )
    assert "--namespace com.test@1.0.0" in lines[0]
    assert lines[1:] == ["namespace com.test@1.0.0", "", "concept Foo {", "  o String name", "}", ""]


def test_config_file(schema_path, tmp_path):
    config_path = write_json(tmp_path / "config.json", {"namespace": "com.config@1.0.0", "add_generation_comment": False})
    output_path = tmp_path / "model.cto"

    result = invoke("--config", config_path, schema_path, output_path)

    assert result.exit_code == 0, result.output
    assert output_path.read_text(encoding="utf-8") == "namespace com.config@1.0.0\n\nconcept Foo {\n  o String name\n}\n"


def test_options_override_config_file(schema_path, tmp_path):
    config_path = write_json(tmp_path / "config.json", {"namespace": "com.config@1.0.0", "add_generation_comment": False})
    output_path = tmp_path / "model.cto"

    result = invoke("-c", config_path, "-n", "com.cli@2.0.0", schema_path, output_path)

    assert result.exit_code == 0, result.output
    assert output_path.read_text(encoding="utf-8").startswith("namespace com.cli@2.0.0\n")


def test_json_format(schema_path, tmp_path):
    output_path = tmp_path / "model.json"

    result = invoke("-n", "com.test@1.0.0", "--format", "json", schema_path, output_path)

    assert result.exit_code == 0, result.output
    metamodel = json.loads(output_path.read_text(encoding="utf-8"))
    assert metamodel["models"][0]["declarations"][0]["name"] == "Foo"


def test_typescript_format(schema_path, tmp_path):
    output_path = tmp_path / "model.ts"

    result = invoke("-n", "com.test@1.0.0", "-f", "ts", schema_path, output_path)

    assert result.exit_code == 0, result.output
    assert "export interface IFoo {" in output_path.read_text(encoding="utf-8")


def test_definitions_path(tmp_path):
    schema = {"types": {"Item": {"type": "object", "properties": {"sku": {"type": "string"}}}}}
    input_path = write_json(tmp_path / "types.json", schema)
    output_path = tmp_path / "model.cto"

    result = invoke("-n", "com.test@1.0.0", "--definitions-path", "types", input_path, output_path)

    assert result.exit_code == 0, result.output
    assert "concept Item {\n  o String sku optional\n}" in output_path.read_text(encoding="utf-8")


def test_missing_namespace(schema_path, tmp_path):
    result = invoke(schema_path, tmp_path / "model.cto")

    assert result.exit_code == 2
    assert "A namespace is required" in result.output


def test_invalid_schema(tmp_path):
    input_path = write_json(tmp_path / "invalid.json", {"type": "object", "properties": {"Foo": {"type": "bar"}}})

    result = invoke("-n", "com.test@1.0.0", input_path, tmp_path / "model.cto")

    assert result.exit_code == 1
    assert "Invalid JSON Schema" in result.output
    assert not (tmp_path / "model.cto").exists()


def test_unsupported_type(tmp_path):
    input_path = write_json(tmp_path / "null.json", {"definitions": {"Foo": {"type": "null"}}})

    result = invoke("-n", "com.test@1.0.0", input_path, tmp_path / "model.cto")

    assert result.exit_code == 1
    assert "Type keyword 'null' in definition 'Foo' is not supported." in result.output


def test_unknown_format(schema_path, tmp_path):
    result = invoke("-n", "com.test@1.0.0", "-f", "xml", schema_path, tmp_path / "model.xml")

    assert result.exit_code == 2


if __name__ == "__main__":
    pytest.main([__file__])
