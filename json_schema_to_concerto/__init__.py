"""JSON Schema to Concerto Converter

A Python package for converting JSON Schema documents to Concerto models.
Infers concepts, enumerations and scalars from schema definitions and
renders them as Concerto CTO, metamodel JSON, TypeScript or Markdown.
"""

__version__ = "1.0.0"
__author__ = "François Lagunas"

from .pipeline import (
    CodeGeneratorConfig,
    OutputFormat,
    PipelineGenerator,
    SchemaConversionError,
    UnsupportedTypeError,
    convert,
    infer_models,
)

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "OutputFormat",
    "SchemaConversionError",
    "UnsupportedTypeError",
    "convert",
    "infer_models",
]
