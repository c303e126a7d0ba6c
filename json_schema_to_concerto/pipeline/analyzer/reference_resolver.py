"""
Reference resolver for $ref resolution.

Locates the definitions container of a document and resolves local
`$ref` pointers to the definitions they name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...utils import get_value, inline_object_name, parse_local_reference

# Containers searched, in order, when no explicit location is configured
DEFINITIONS_CONTAINERS: tuple[tuple[str, ...], ...] = (
    ("definitions",),
    ("$defs",),
    ("schema", "components", "schemas"),
)

DEFAULT_DEFINITIONS_PATH: tuple[str, ...] = ("definitions",)

ROOT_TYPE_NAME = "Root"


def is_local_reference(reference: Any) -> bool:
    return isinstance(reference, str) and reference.startswith("#")


def locate_definitions(schema: Any, path_to_definitions: tuple[str, ...] | None = None) -> tuple[str, ...]:
    """
    Find where the named definitions of a document live.

    Args:
        schema: The schema document
        path_to_definitions: Explicit location, used as is when given

    Returns:
        Path of the definitions container, or () when the document has none
    """
    if path_to_definitions:
        return tuple(path_to_definitions)
    for container in DEFINITIONS_CONTAINERS:
        if isinstance(get_value(schema, container), dict):
            return container
    return ()


@dataclass
class ResolvedRef:
    """A resolved local $ref."""

    pointer: tuple[str, ...] = ()  # Decoded path segments of the reference
    is_root: bool = False  # Whether the reference targets the document root
    definition: Any = None  # The named definition, when the pointer names one
    is_definition: bool = False

    @property
    def type_name(self) -> str:
        """Declaration name used when the target is not visited."""
        return ROOT_TYPE_NAME if self.is_root else inline_object_name(self.pointer)


class ReferenceResolver:
    """Resolves local $ref pointers against a document."""

    def __init__(self, schema: Any, path_to_definitions: tuple[str, ...] | None = None):
        """
        Initialize the resolver.

        Args:
            schema: The schema document
            path_to_definitions: Location of the definitions container, or
                None to use "definitions"
        """
        self.schema = schema
        self.path_to_definitions = tuple(path_to_definitions or DEFAULT_DEFINITIONS_PATH)

    def resolve(self, reference: str) -> ResolvedRef:
        """
        Resolve a local $ref string.

        Args:
            reference: Reference string starting with "#"

        Returns:
            ResolvedRef with target information
        """
        pointer = parse_local_reference(reference)
        if not pointer:
            return ResolvedRef(pointer=pointer, is_root=True)

        if pointer[:-1] == self.path_to_definitions:
            definitions = get_value(self.schema, self.path_to_definitions)
            if isinstance(definitions, dict) and pointer[-1] in definitions:
                return ResolvedRef(pointer=pointer, definition=definitions[pointer[-1]], is_definition=True)

        return ResolvedRef(pointer=pointer)
