"""
Fragment node definitions for JSON Schema.

A fragment pairs a piece of the raw schema document with its location in
the document. The node class records how the fragment is to be interpreted
(a property, a definition, a reference...) and the visitor dispatches on it.
Fragments are immutable and built fresh at each traversal step.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..analyzer.parameters import VisitorParameters
    from ..analyzer.visitor import JsonSchemaVisitor


@dataclass(frozen=True)
class SchemaFragment:
    """Base class for all fragment nodes."""

    # Raw schema content (a dict, or a string for references)
    body: Any = None

    # Segments from the document root to this fragment
    path: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        """Last segment of the path."""
        return self.path[-1] if self.path else ""

    def accept(self, visitor: JsonSchemaVisitor, parameters: VisitorParameters) -> Any:
        return visitor.visit(self, parameters)


@dataclass(frozen=True)
class Property(SchemaFragment):
    """A single property schema."""


@dataclass(frozen=True)
class Properties(SchemaFragment):
    """A `properties` map."""


@dataclass(frozen=True)
class ArrayProperty(SchemaFragment):
    """A property schema of type array."""


@dataclass(frozen=True)
class FixedElementsArrayProperty(SchemaFragment):
    """An array property whose elements are all described by tuple items."""


@dataclass(frozen=True)
class Reference(SchemaFragment):
    """A `$ref` string, local or remote."""


@dataclass(frozen=True)
class LocalReference(SchemaFragment):
    """A `$ref` string starting with "#"."""


@dataclass(frozen=True)
class Definition(SchemaFragment):
    """A schema that produces declarations."""


@dataclass(frozen=True)
class Definitions(SchemaFragment):
    """The map of named definitions."""


@dataclass(frozen=True)
class EnumDefinition(SchemaFragment):
    """A definition holding an `enum` list."""


@dataclass(frozen=True)
class NonEnumDefinition(SchemaFragment):
    """Any other definition."""


@dataclass(frozen=True)
class JsonSchemaModel(SchemaFragment):
    """The whole schema document."""
