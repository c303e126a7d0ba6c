"""
Markdown backend.

Generates Markdown documentation of Concerto models: an overview of the
namespace followed by one section per declaration.
"""

from __future__ import annotations

from typing import Any

from ..analyzer.ir_nodes import (
    ConceptDeclaration,
    Declaration,
    Decorator,
    EnumDeclaration,
    Model,
    PropertyDef,
    StringScalar,
)
from .base import CodeBackend

REQUIRED_MARK = "✔️"


class MarkdownBackend(CodeBackend):
    """Markdown documentation backend."""

    TEMPLATE_LANG = "markdown"
    FILE_EXTENSION = "md"

    def format_comment(self, text: str) -> str:
        return f"<!-- {text} -->"

    def generate_model(self, model: Model) -> str:
        """Generate Markdown documentation for a model."""
        context = self._prepare_model_context(model)
        context.update(
            {
                "CONCEPT_COUNT": len(model.concepts),
                "ENUM_COUNT": len(model.enums),
                "SCALAR_COUNT": len(model.scalars),
                "DECLARATIONS": [self._prepare_declaration_context(d, model) for d in model.declarations],
            }
        )
        return self.model_template.render(context)

    def translate_type(self, prop: PropertyDef, model: Model) -> str:
        # Declarations of the model are shown fully qualified
        type_name = prop.type_name if prop.is_primitive else f"{model.namespace}.{prop.type_name}"
        return f"{type_name}[]" if prop.is_array else type_name

    def describe_decorators(self, decorators: list[Decorator]) -> str:
        descriptions = []
        for decorator in decorators:
            match decorator.name:
                case "StringifiedJson":
                    descriptions.append("Stringified JSON value")
                case "StringifiedUnionType":
                    descriptions.append(f"Union of {', '.join(decorator.arguments)} stored as a string")
        return "<br>".join(descriptions)

    def _prepare_declaration_context(self, declaration: Declaration, model: Model) -> dict[str, Any]:
        context: dict[str, Any] = {
            "KIND": self.declaration_kind(declaration),
            "NAME": declaration.name,
        }
        match declaration:
            case ConceptDeclaration():
                context["PROPERTIES"] = [
                    {
                        "NAME": prop.name,
                        "TYPE": self.translate_type(prop, model),
                        "REQUIRED": "" if prop.is_optional else REQUIRED_MARK,
                        "DESCRIPTION": self.describe_decorators(prop.decorators),
                        "CONSTRAINTS": "<br>".join(self.describe_constraints(prop)),
                    }
                    for prop in declaration.properties
                ]
            case EnumDeclaration():
                context["VALUES"] = [value.name for value in declaration.values]
            case StringScalar():
                context["BASE_TYPE"] = declaration.BASE_TYPE
                context["DESCRIPTION"] = self.describe_decorators(declaration.decorators)
        return context
