"""
TypeScript backend.

Generates TypeScript interfaces and enums from Concerto models. Scalars are
unboxed to their base type.
"""

from __future__ import annotations

from typing import Any

from ..analyzer.ir_nodes import ConceptDeclaration, EnumDeclaration, Model, PropertyDef, StringScalar
from .base import CodeBackend


class TypeScriptBackend(CodeBackend):
    """TypeScript backend."""

    TEMPLATE_LANG = "typescript"
    FILE_EXTENSION = "ts"

    TYPE_MAP = {
        "DateTime": "Date",
        "Boolean": "boolean",
        "String": "string",
        "Double": "number",
        "Long": "number",
        "Integer": "number",
    }

    def generate_model(self, model: Model) -> str:
        """Generate TypeScript code for a model."""
        context = self._prepare_model_context(model)
        context["DECLARATIONS"] = [
            self._prepare_declaration_context(declaration, model)
            for declaration in model.declarations
            if not isinstance(declaration, StringScalar)
        ]
        return self.model_template.render(context)

    def interface_name(self, name: str) -> str:
        return f"{self.config.typescript_interface_prefix}{name}"

    def translate_type(self, prop: PropertyDef, model: Model) -> str:
        ts_type = self._translate_type_name(prop.type_name, model)
        return f"{ts_type}[]" if prop.is_array else ts_type

    def _translate_type_name(self, type_name: str, model: Model) -> str:
        if type_name in self.TYPE_MAP:
            return self.TYPE_MAP[type_name]

        match model.get_declaration(type_name):
            case StringScalar() as scalar:
                return self.TYPE_MAP[scalar.BASE_TYPE]
            case EnumDeclaration():
                return type_name
            case _:
                return self.interface_name(type_name)

    def _prepare_declaration_context(self, declaration: ConceptDeclaration | EnumDeclaration, model: Model) -> dict[str, Any]:
        if isinstance(declaration, EnumDeclaration):
            return {
                "KIND": "enum",
                "NAME": declaration.name,
                "VALUES": [value.name for value in declaration.values],
            }
        return {
            "KIND": "concept",
            "NAME": self.interface_name(declaration.name),
            "PROPERTIES": [
                {
                    "NAME": prop.name,
                    "OPTIONAL": "?" if prop.is_optional else "",
                    "TYPE": self.translate_type(prop, model),
                }
                for prop in declaration.properties
            ],
        }
