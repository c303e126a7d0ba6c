"""
Primitive type and validator inference.

Maps JSON Schema primitive types to Concerto primitive properties and
derives default values and validators from the schema keywords.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ...utils import is_truthy
from .errors import UnsupportedTypeError
from .ir_nodes import (
    BooleanProperty,
    DateTimeProperty,
    DoubleDomainValidator,
    DoubleProperty,
    IntegerDomainValidator,
    IntegerProperty,
    PropertyDef,
    StringProperty,
    StringRegexValidator,
    Validator,
)

PRIMITIVE_PROPERTY_CLASSES: dict[str, type[PropertyDef]] = {
    "string": StringProperty,
    "boolean": BooleanProperty,
    "number": DoubleProperty,
    "integer": IntegerProperty,
}

DATE_TIME_FORMATS = ("date-time", "date")


def is_date_time(body: dict[str, Any]) -> bool:
    return body.get("format") in DATE_TIME_FORMATS


def infer_property_class(body: dict[str, Any], name: str, warn: Callable[[str], None]) -> type[PropertyDef]:
    """
    Infer the Concerto property class for a primitive schema.

    Args:
        body: The property schema
        name: The property name, for messages
        warn: Warning sink

    Returns:
        The property class to instantiate

    Raises:
        UnsupportedTypeError: If the type is missing or not a primitive
    """
    schema_type = body.get("type")
    if isinstance(schema_type, str) and schema_type in PRIMITIVE_PROPERTY_CLASSES:
        if schema_type == "string":
            if is_date_time(body):
                return DateTimeProperty
            if is_truthy(body.get("format")):
                warn(f"Format '{body['format']}' in '{name}' is not supported. It has been ignored.")
        return PRIMITIVE_PROPERTY_CLASSES[schema_type]

    raise UnsupportedTypeError(f"Type keyword '{schema_type}' in '{name}' is not supported.")


def _bound(value: Any) -> int | float | None:
    # Zero and draft-04 boolean flags are not bounds
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value != 0:
        return value
    return None


def infer_validator(body: dict[str, Any]) -> Validator | None:
    """
    Infer a validator for a primitive schema.

    Only `minimum` and `exclusiveMaximum` map to a Concerto range; a zero
    bound is treated as absent.
    """
    schema_type = body.get("type")
    lower = _bound(body.get("minimum"))
    upper = _bound(body.get("exclusiveMaximum"))

    if schema_type in ("integer", "number") and (lower is not None or upper is not None):
        validator_class = DoubleDomainValidator if schema_type == "number" else IntegerDomainValidator
        return validator_class(lower=lower, upper=upper)

    if schema_type == "string" and not is_date_time(body) and is_truthy(body.get("pattern")):
        return StringRegexValidator(pattern=body["pattern"], flags="")

    return None


def infer_default_value(body: dict[str, Any]) -> bool | int | float | str | None:
    default = body.get("default")
    if isinstance(default, (bool, int, float, str)):
        return default
    return None


def build_primitive_property(
    body: dict[str, Any],
    name: str,
    fields: dict[str, Any],
    warn: Callable[[str], None],
) -> PropertyDef:
    """
    Build a primitive property from its schema.

    Args:
        body: The property schema
        name: The property name, for messages
        fields: Base property fields (name, is_array, is_optional, decorators)
        warn: Warning sink

    Returns:
        The primitive property
    """
    property_class = infer_property_class(body, name, warn)
    return property_class(
        **fields,
        default_value=infer_default_value(body),
        validator=infer_validator(body),
    )
