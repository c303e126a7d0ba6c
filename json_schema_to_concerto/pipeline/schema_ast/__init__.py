"""
Schema AST module.

Contains the fragment nodes wrapping pieces of a JSON Schema document.
"""

from __future__ import annotations

from .nodes import (
    ArrayProperty,
    Definition,
    Definitions,
    EnumDefinition,
    FixedElementsArrayProperty,
    JsonSchemaModel,
    LocalReference,
    NonEnumDefinition,
    Properties,
    Property,
    Reference,
    SchemaFragment,
)

__all__ = [
    "SchemaFragment",
    "Property",
    "Properties",
    "ArrayProperty",
    "FixedElementsArrayProperty",
    "Reference",
    "LocalReference",
    "Definition",
    "Definitions",
    "EnumDefinition",
    "NonEnumDefinition",
    "JsonSchemaModel",
]
