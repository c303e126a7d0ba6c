"""
Errors raised while converting a JSON Schema document.
"""

from __future__ import annotations


class SchemaConversionError(Exception):
    """Raised when a schema cannot be converted to a Concerto model."""

    pass


class UnsupportedTypeError(SchemaConversionError):
    """Raised when a `type` keyword has no Concerto counterpart.

    This can happen when:
    - A property has no type, a `null` type or an unknown type
    - A named definition is neither an object nor a type-less alternation
    """

    pass
