"""
IR (Intermediate Representation) node definitions.

These nodes mirror the Concerto metamodel: a set of models, each holding
concept, enum and scalar declarations whose properties are typed, optionally
validated and decorated. They are produced by the visitor and consumed by the
backends, and serialize to the Concerto JSON metamodel with `to_dict`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

DEFAULT_META_MODEL_NAMESPACE = "concerto.metamodel@1.0.0"


def _class_tag(meta_model_namespace: str, class_name: str) -> str:
    return f"{meta_model_namespace}.{class_name}"


@dataclass
class Decorator:
    """A decorator attached to a property or a declaration."""

    name: str = ""
    arguments: list[str] = field(default_factory=list)

    def to_dict(self, meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE) -> dict[str, Any]:
        result: dict[str, Any] = {
            "$class": _class_tag(meta_model_namespace, "Decorator"),
            "name": self.name,
        }
        if self.arguments:
            result["arguments"] = [
                {"$class": _class_tag(meta_model_namespace, "DecoratorString"), "value": argument}
                for argument in self.arguments
            ]
        return result


@dataclass
class NumericDomainValidator:
    """A numeric range. Concerto has no exclusive lower or inclusive upper bound."""

    CLASS_NAME: ClassVar[str] = ""

    lower: int | float | None = None
    upper: int | float | None = None

    def to_dict(self, meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE) -> dict[str, Any]:
        result: dict[str, Any] = {"$class": _class_tag(meta_model_namespace, self.CLASS_NAME)}
        if self.lower is not None:
            result["lower"] = self.lower
        if self.upper is not None:
            result["upper"] = self.upper
        return result


@dataclass
class DoubleDomainValidator(NumericDomainValidator):
    CLASS_NAME: ClassVar[str] = "DoubleDomainValidator"


@dataclass
class IntegerDomainValidator(NumericDomainValidator):
    CLASS_NAME: ClassVar[str] = "IntegerDomainValidator"


@dataclass
class StringRegexValidator:
    """A regular expression a string property must match."""

    CLASS_NAME: ClassVar[str] = "StringRegexValidator"

    pattern: str = ""
    flags: str = ""

    def to_dict(self, meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE) -> dict[str, Any]:
        return {
            "$class": _class_tag(meta_model_namespace, self.CLASS_NAME),
            "pattern": self.pattern,
            "flags": self.flags,
        }


Validator = NumericDomainValidator | StringRegexValidator


@dataclass
class PropertyDef:
    """A property of a concept."""

    CLASS_NAME: ClassVar[str] = ""

    # Concerto type name for primitive properties
    PRIMITIVE_TYPE: ClassVar[str] = ""

    name: str = ""
    is_array: bool = False
    is_optional: bool = False
    decorators: list[Decorator] = field(default_factory=list)

    # Only bool, number and string defaults are carried over
    default_value: bool | int | float | str | None = None

    validator: Validator | None = None

    @property
    def type_name(self) -> str:
        return self.PRIMITIVE_TYPE

    @property
    def is_primitive(self) -> bool:
        return bool(self.PRIMITIVE_TYPE)

    def to_dict(self, meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE) -> dict[str, Any]:
        result: dict[str, Any] = {
            "$class": _class_tag(meta_model_namespace, self.CLASS_NAME),
            "name": self.name,
            "isArray": self.is_array,
            "isOptional": self.is_optional,
        }
        if self.decorators:
            result["decorators"] = [decorator.to_dict(meta_model_namespace) for decorator in self.decorators]
        if self.default_value is not None:
            result["defaultValue"] = self.default_value
        if self.validator is not None:
            result["validator"] = self.validator.to_dict(meta_model_namespace)
        return result


@dataclass
class StringProperty(PropertyDef):
    CLASS_NAME: ClassVar[str] = "StringProperty"
    PRIMITIVE_TYPE: ClassVar[str] = "String"


@dataclass
class BooleanProperty(PropertyDef):
    CLASS_NAME: ClassVar[str] = "BooleanProperty"
    PRIMITIVE_TYPE: ClassVar[str] = "Boolean"


@dataclass
class DoubleProperty(PropertyDef):
    CLASS_NAME: ClassVar[str] = "DoubleProperty"
    PRIMITIVE_TYPE: ClassVar[str] = "Double"


@dataclass
class IntegerProperty(PropertyDef):
    CLASS_NAME: ClassVar[str] = "IntegerProperty"
    PRIMITIVE_TYPE: ClassVar[str] = "Integer"


@dataclass
class DateTimeProperty(PropertyDef):
    CLASS_NAME: ClassVar[str] = "DateTimeProperty"
    PRIMITIVE_TYPE: ClassVar[str] = "DateTime"


@dataclass
class ObjectProperty(PropertyDef):
    """A property typed by another declaration of the model."""

    CLASS_NAME: ClassVar[str] = "ObjectProperty"

    type: str = ""

    @property
    def type_name(self) -> str:
        return self.type

    def to_dict(self, meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE) -> dict[str, Any]:
        result = super().to_dict(meta_model_namespace)
        result["type"] = {
            "$class": _class_tag(meta_model_namespace, "TypeIdentifier"),
            "name": self.type,
        }
        return result


@dataclass
class Declaration:
    """A named top-level declaration of a model."""

    CLASS_NAME: ClassVar[str] = ""

    name: str = ""

    def to_dict(self, meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE) -> dict[str, Any]:
        return {
            "$class": _class_tag(meta_model_namespace, self.CLASS_NAME),
            "name": self.name,
        }


@dataclass
class ConceptDeclaration(Declaration):
    CLASS_NAME: ClassVar[str] = "ConceptDeclaration"

    is_abstract: bool = False
    properties: list[PropertyDef] = field(default_factory=list)

    def to_dict(self, meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE) -> dict[str, Any]:
        result = super().to_dict(meta_model_namespace)
        result["isAbstract"] = self.is_abstract
        result["properties"] = [prop.to_dict(meta_model_namespace) for prop in self.properties]
        return result


@dataclass
class EnumValue:
    name: str = ""

    def to_dict(self, meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE) -> dict[str, Any]:
        return {"$class": _class_tag(meta_model_namespace, "EnumProperty"), "name": self.name}


@dataclass
class EnumDeclaration(Declaration):
    CLASS_NAME: ClassVar[str] = "EnumDeclaration"

    values: list[EnumValue] = field(default_factory=list)

    def to_dict(self, meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE) -> dict[str, Any]:
        result = super().to_dict(meta_model_namespace)
        result["properties"] = [value.to_dict(meta_model_namespace) for value in self.values]
        return result


@dataclass
class StringScalar(Declaration):
    """A scalar backed by a string, used for freeform JSON definitions."""

    CLASS_NAME: ClassVar[str] = "StringScalar"
    BASE_TYPE: ClassVar[str] = "String"

    decorators: list[Decorator] = field(default_factory=list)

    def to_dict(self, meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE) -> dict[str, Any]:
        result = super().to_dict(meta_model_namespace)
        result["decorators"] = [decorator.to_dict(meta_model_namespace) for decorator in self.decorators]
        return result


@dataclass
class Model:
    """A single Concerto namespace and its declarations."""

    namespace: str = ""
    declarations: list[Declaration] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    decorators: list[Decorator] = field(default_factory=list)

    @property
    def concepts(self) -> list[ConceptDeclaration]:
        return [d for d in self.declarations if isinstance(d, ConceptDeclaration)]

    @property
    def enums(self) -> list[EnumDeclaration]:
        return [d for d in self.declarations if isinstance(d, EnumDeclaration)]

    @property
    def scalars(self) -> list[StringScalar]:
        return [d for d in self.declarations if isinstance(d, StringScalar)]

    def get_declaration(self, name: str) -> Declaration | None:
        return next((d for d in self.declarations if d.name == name), None)

    def to_dict(self, meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE) -> dict[str, Any]:
        return {
            "$class": _class_tag(meta_model_namespace, "Model"),
            "decorators": [decorator.to_dict(meta_model_namespace) for decorator in self.decorators],
            "namespace": self.namespace,
            "imports": list(self.imports),
            "declarations": [declaration.to_dict(meta_model_namespace) for declaration in self.declarations],
        }


@dataclass
class Models:
    """The complete Intermediate Representation."""

    models: list[Model] = field(default_factory=list)
    meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE

    def to_dict(self) -> dict[str, Any]:
        return {
            "$class": _class_tag(self.meta_model_namespace, "Models"),
            "models": [model.to_dict(self.meta_model_namespace) for model in self.models],
        }
