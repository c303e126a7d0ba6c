"""
Parameters threaded through the visitor.

Both classes are immutable: every descent derives a new value with
`dataclasses.replace`, so sibling branches never observe each other's
overrides or visited references.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .ir_nodes import DEFAULT_META_MODEL_NAMESPACE, Decorator


@dataclass(frozen=True)
class PropertyOverrides:
    """Fields forced onto the next property built by the visitor."""

    name: str | None = None
    is_array: bool | None = None
    decorators: tuple[Decorator, ...] | None = None

    def merge(self, **changes: Any) -> PropertyOverrides:
        return replace(self, **changes)


NO_OVERRIDES = PropertyOverrides()


@dataclass(frozen=True)
class VisitorParameters:
    """Settings and traversal state for one visit."""

    meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE

    # Namespace of the generated model
    namespace: str = ""

    # Location of the definitions container (None = detect)
    path_to_definitions: tuple[str, ...] | None = None

    # The whole document, for resolving local references
    json_schema_model: Any = None

    # References already followed on the current descent
    traversed_references: frozenset[str] = frozenset()

    # Pending overrides for the next property
    overrides: PropertyOverrides = NO_OVERRIDES

    # `required` list of the enclosing definition
    required: tuple[str, ...] | None = None

    def with_changes(self, **changes: Any) -> VisitorParameters:
        return replace(self, **changes)

    def with_overrides(self, overrides: PropertyOverrides) -> VisitorParameters:
        return replace(self, overrides=overrides)

    def without_overrides(self) -> VisitorParameters:
        return replace(self, overrides=NO_OVERRIDES)

    def with_traversed(self, reference: str) -> VisitorParameters:
        return replace(self, traversed_references=self.traversed_references | {reference})
