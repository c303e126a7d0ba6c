"""
Configuration for the conversion pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .analyzer.ir_nodes import DEFAULT_META_MODEL_NAMESPACE


class OutputFormat(str, Enum):
    """Output formats supported by the generator."""

    CTO = "cto"  # Concerto source text
    JSON = "json"  # Concerto JSON metamodel
    TYPESCRIPT = "ts"  # TypeScript interfaces
    MARKDOWN = "md"  # Markdown documentation


@dataclass
class CodeGeneratorConfig:
    """Configuration options for conversion and generation."""

    # Namespace of the generated model, e.g. "com.example@1.0.0"
    namespace: str = ""

    # Namespace qualifying the metamodel $class tags
    meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE

    # Location of the definitions container (empty = detect)
    path_to_definitions: list[str] = field(default_factory=list)

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Indentation of the JSON metamodel output
    json_indent: int = 4

    # Prefix of generated TypeScript interfaces
    typescript_interface_prefix: str = "I"

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "namespace": self.namespace,
            "meta_model_namespace": self.meta_model_namespace,
            "path_to_definitions": self.path_to_definitions,
            "add_generation_comment": self.add_generation_comment,
            "json_indent": self.json_indent,
            "typescript_interface_prefix": self.typescript_interface_prefix,
        }
