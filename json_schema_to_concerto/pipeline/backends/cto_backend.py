"""
Concerto CTO backend.

Prints models in the Concerto modeling language.
"""

from __future__ import annotations

import json
from typing import Any

from ..analyzer.ir_nodes import (
    ConceptDeclaration,
    Declaration,
    Decorator,
    EnumDeclaration,
    Model,
    NumericDomainValidator,
    PropertyDef,
    StringRegexValidator,
    StringScalar,
)
from .base import CodeBackend


class CtoBackend(CodeBackend):
    """Concerto CTO backend."""

    TEMPLATE_LANG = "cto"
    FILE_EXTENSION = "cto"

    def generate_model(self, model: Model) -> str:
        """Generate CTO source for a model."""
        context = self._prepare_model_context(model)
        context["DECLARATIONS"] = [self._prepare_declaration_context(d, model) for d in model.declarations]
        # Declarations are separated by a blank line, with none after the last one
        return self.model_template.render(context).rstrip("\n")

    def translate_type(self, prop: PropertyDef, model: Model) -> str:
        return f"{prop.type_name}[]" if prop.is_array else prop.type_name

    def format_decorator(self, decorator: Decorator) -> str:
        if not decorator.arguments:
            return f"@{decorator.name}"
        arguments = ",".join(json.dumps(argument) for argument in decorator.arguments)
        return f"@{decorator.name}({arguments})"

    def format_default_value(self, value: Any) -> str:
        """Format a default value as a CTO literal."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return json.dumps(value)
        return self.format_number(value)

    def format_modifiers(self, prop: PropertyDef) -> str:
        """
        Format the trailing modifiers of a property line.

        Examples:
            default="home" regex=/[\\w\\s]+/ optional
            range=[-11034,] optional
        """
        modifiers = []
        if prop.default_value is not None:
            modifiers.append(f"default={self.format_default_value(prop.default_value)}")

        validator = prop.validator
        if isinstance(validator, StringRegexValidator):
            modifiers.append(f"regex=/{validator.pattern}/{validator.flags}")
        elif isinstance(validator, NumericDomainValidator):
            lower = "" if validator.lower is None else self.format_number(validator.lower)
            upper = "" if validator.upper is None else self.format_number(validator.upper)
            modifiers.append(f"range=[{lower},{upper}]")

        if prop.is_optional:
            modifiers.append("optional")

        return "".join(f" {modifier}" for modifier in modifiers)

    def _prepare_declaration_context(self, declaration: Declaration, model: Model) -> dict[str, Any]:
        context: dict[str, Any] = {
            "KIND": self.declaration_kind(declaration),
            "NAME": declaration.name,
            "DECORATORS": [],
        }
        match declaration:
            case ConceptDeclaration():
                context["PROPERTIES"] = [
                    {
                        "DECORATORS": [self.format_decorator(d) for d in prop.decorators],
                        "TYPE": self.translate_type(prop, model),
                        "NAME": prop.name,
                        "MODIFIERS": self.format_modifiers(prop),
                    }
                    for prop in declaration.properties
                ]
            case EnumDeclaration():
                context["VALUES"] = [value.name for value in declaration.values]
            case StringScalar():
                context["DECORATORS"] = [self.format_decorator(d) for d in declaration.decorators]
                context["BASE_TYPE"] = declaration.BASE_TYPE
        return context
