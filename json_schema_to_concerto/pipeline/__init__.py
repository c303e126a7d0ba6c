"""
Pipeline - JSON Schema to Concerto converter.

This module provides a multi-phase architecture for converting JSON Schema
documents to Concerto models:

1. Phase 1 (Schema AST): Wrap schema fragments with their location
2. Phase 2 (Analyzer): Validate the document, resolve references and infer
   the Concerto metamodel IR
3. Phase 3 (Backend): Render the IR as CTO, TypeScript, Markdown or JSON
"""

from __future__ import annotations

from .analyzer import SchemaConversionError, UnsupportedTypeError, convert, infer_models
from .config import CodeGeneratorConfig, OutputFormat
from .generator import PipelineGenerator

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "OutputFormat",
    "SchemaConversionError",
    "UnsupportedTypeError",
    "convert",
    "infer_models",
]
