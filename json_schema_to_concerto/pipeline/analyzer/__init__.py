"""
Analyzer module.

Contains reference resolution, primitive inference and the visitor that
builds the Concerto metamodel IR.
"""

from __future__ import annotations

from .errors import SchemaConversionError, UnsupportedTypeError
from .ir_nodes import (
    DEFAULT_META_MODEL_NAMESPACE,
    BooleanProperty,
    ConceptDeclaration,
    DateTimeProperty,
    Declaration,
    Decorator,
    DoubleDomainValidator,
    DoubleProperty,
    EnumDeclaration,
    EnumValue,
    IntegerDomainValidator,
    IntegerProperty,
    Model,
    Models,
    ObjectProperty,
    PropertyDef,
    StringProperty,
    StringRegexValidator,
    StringScalar,
)
from .parameters import PropertyOverrides, VisitorParameters
from .reference_resolver import ReferenceResolver, ResolvedRef, locate_definitions
from .schema_validation import check_schema, select_validator
from .visitor import JsonSchemaVisitor, TypeName, convert, infer_models

__all__ = [
    "DEFAULT_META_MODEL_NAMESPACE",
    "BooleanProperty",
    "ConceptDeclaration",
    "DateTimeProperty",
    "Declaration",
    "Decorator",
    "DoubleDomainValidator",
    "DoubleProperty",
    "EnumDeclaration",
    "EnumValue",
    "IntegerDomainValidator",
    "IntegerProperty",
    "Model",
    "Models",
    "ObjectProperty",
    "PropertyDef",
    "StringProperty",
    "StringRegexValidator",
    "StringScalar",
    "PropertyOverrides",
    "VisitorParameters",
    "ReferenceResolver",
    "ResolvedRef",
    "locate_definitions",
    "check_schema",
    "select_validator",
    "JsonSchemaVisitor",
    "TypeName",
    "convert",
    "infer_models",
    "SchemaConversionError",
    "UnsupportedTypeError",
]
