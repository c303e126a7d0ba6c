"""
Base class for output backends.

Defines the interface that all format-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ... import __version__
from ...cli_utils import reconstruct_command_line
from ..analyzer.ir_nodes import (
    ConceptDeclaration,
    Declaration,
    EnumDeclaration,
    Model,
    Models,
    NumericDomainValidator,
    PropertyDef,
    StringRegexValidator,
    StringScalar,
)
from ..config import CodeGeneratorConfig


class CodeBackend(ABC):
    """Abstract base class for output backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Line comment syntax
    COMMENT_PREFIX: str = "//"

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.model_template = self.jinja_env.get_template(f"model.{self.FILE_EXTENSION}.jinja2")

    def generate(self, models: Models) -> str:
        """
        Generate output for every model.

        Args:
            models: The inferred models

        Returns:
            Generated text, one block per model
        """
        return "\n\n".join(self.generate_model(model) for model in models.models)

    @abstractmethod
    def generate_model(self, model: Model) -> str:
        """
        Generate output for a single model.

        Args:
            model: The model

        Returns:
            Generated text
        """

    @abstractmethod
    def translate_type(self, prop: PropertyDef, model: Model) -> str:
        """
        Translate a property type to a format-specific type string.

        Args:
            prop: The property
            model: The model the property belongs to

        Returns:
            Format-specific type string
        """

    def format_comment(self, text: str) -> str:
        return f"{self.COMMENT_PREFIX} {text}"

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the generated file"""
        if not self.config.add_generation_comment:
            return ""

        try:
            from ...json_schema_to_concerto import json_schema_to_concerto as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "json_schema_to_concerto"

        return self.format_comment(f"Generated by json_schema_to_concerto v{__version__} : {command_line}")

    @staticmethod
    def declaration_kind(declaration: Declaration) -> str:
        match declaration:
            case ConceptDeclaration():
                return "concept"
            case EnumDeclaration():
                return "enum"
            case StringScalar():
                return "scalar"
        return ""

    @staticmethod
    def format_number(value: int | float) -> str:
        """Format a number without a trailing ".0" for integral floats."""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    def describe_constraints(self, prop: PropertyDef) -> list[str]:
        """Human-readable constraints of a property's validator."""
        constraints = []
        validator = prop.validator
        if isinstance(validator, StringRegexValidator):
            constraints.append(f"Matches Regular Expression: `{validator.pattern}`")
        elif isinstance(validator, NumericDomainValidator):
            if validator.lower is not None:
                constraints.append(f"Minimum Value: {self.format_number(validator.lower)}")
            if validator.upper is not None:
                constraints.append(f"Maximum Value: {self.format_number(validator.upper)}")
        return constraints

    def _prepare_model_context(self, model: Model) -> dict[str, Any]:
        """
        Prepare the template context shared by every backend.

        Args:
            model: The model

        Returns:
            Dictionary of template variables
        """
        return {
            "GENERATION_COMMENT": self._generate_command_comment(),
            "NAMESPACE": model.namespace,
            "IMPORTS": model.imports,
        }
