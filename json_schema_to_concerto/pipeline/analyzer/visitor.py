"""
JSON Schema to Concerto metamodel visitor.

Walks a JSON Schema document fragment by fragment and infers the Concerto
declarations it describes. Each handler returns one of:

- a property, or a list mixing properties and the declarations spawned by
  inline structures (flattened by the caller)
- a declaration, or a list of declarations
- an unvisited `Property` fragment, for array-typed definitions
- a `TypeName`, when a reference is not followed
- None, when the construct is dropped

Unsupported constructs degrade with a warning where a Concerto approximation
exists, and raise `UnsupportedTypeError` where none does.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from ...utils import (
    get_value,
    inline_object_name,
    is_truthy,
    normalize_identifier,
    normalize_name,
    parse_id_uri,
    to_json_string,
)
from ..schema_ast.nodes import (
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
from .errors import UnsupportedTypeError
from .ir_nodes import (
    DEFAULT_META_MODEL_NAMESPACE,
    ConceptDeclaration,
    Declaration,
    Decorator,
    EnumDeclaration,
    EnumValue,
    Model,
    Models,
    ObjectProperty,
    PropertyDef,
    StringProperty,
    StringScalar,
)
from .parameters import PropertyOverrides, VisitorParameters
from .primitives import build_primitive_property
from .reference_resolver import ROOT_TYPE_NAME, ReferenceResolver, is_local_reference, locate_definitions
from .schema_validation import check_schema

logger = logging.getLogger(__name__)

# Concerto system properties, never generated from a schema
RESERVED_PROPERTY_NAMES = ("$identifier", "$class", "$timestamp")

ALTERNATION_KEYWORDS = ("anyOf", "oneOf")

STRINGIFIED_JSON = "StringifiedJson"
STRINGIFIED_UNION_TYPE = "StringifiedUnionType"


@dataclass
class TypeName:
    """Name of a declaration that is referenced but not visited again."""

    name: str = ""


def as_schema(body: Any) -> dict[str, Any]:
    """Coerce a schema body to a dict.

    `true` accepts anything and reads as an empty schema. Any other
    non-object body carries no usable type.
    """
    if isinstance(body, dict):
        return body
    if body is True:
        return {}
    return {"not": {}}


def flatten(results: Iterable[Any]) -> list[Any]:
    """Flatten nested result lists, dropping None."""
    flat: list[Any] = []
    for result in results:
        if isinstance(result, list):
            flat.extend(flatten(result))
        elif result is not None:
            flat.append(result)
    return flat


def is_object_freeform(body: dict[str, Any]) -> bool:
    """An object is freeform when it can hold data of any shape."""
    if body == {}:
        return True
    additional_properties = body.get("additionalProperties")
    return body.get("type") == "object" and (
        isinstance(additional_properties, dict)
        or additional_properties is True
        or not isinstance(body.get("properties"), dict)
    )


def contains_alternation(body: dict[str, Any]) -> bool:
    return any(is_truthy(body.get(keyword)) for keyword in ALTERNATION_KEYWORDS)


def is_reference(body: dict[str, Any]) -> bool:
    return isinstance(body.get("$ref"), str)


def is_array_property(body: dict[str, Any]) -> bool:
    return body.get("type") == "array" and isinstance(body.get("items"), (dict, list))


def _is_count(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_fixed_elements_array(body: dict[str, Any]) -> bool:
    """A tuple array whose min and max item counts fit in the declared items."""
    items = body.get("items")
    min_items = body.get("minItems")
    max_items = body.get("maxItems")
    return (
        is_array_property(body)
        and isinstance(items, list)
        and _is_count(min_items)
        and _is_count(max_items)
        and min_items <= len(items)
        and max_items <= len(items)
    )


def deduplicate_declarations(declarations: list[Declaration]) -> list[Declaration]:
    """Keep the first declaration of each name."""
    unique: dict[str, Declaration] = {}
    for declaration in declarations:
        unique.setdefault(declaration.name, declaration)
    return list(unique.values())


class JsonSchemaVisitor:
    """Infers Concerto declarations from JSON Schema fragments."""

    def __init__(self, warn: Callable[[str], None] | None = None):
        """
        Initialize the visitor.

        Args:
            warn: Sink for conversion warnings (defaults to the module logger)
        """
        self.warn = warn or logger.warning

    def visit(self, fragment: SchemaFragment, parameters: VisitorParameters) -> Any:
        match fragment:
            case JsonSchemaModel():
                return self.visit_json_schema_model(fragment, parameters)
            case Definitions():
                return self.visit_definitions(fragment, parameters)
            case Definition():
                return self.visit_definition(fragment, parameters)
            case EnumDefinition():
                return self.visit_enum_definition(fragment, parameters)
            case NonEnumDefinition():
                return self.visit_non_enum_definition(fragment, parameters)
            case Properties():
                return self.visit_properties(fragment, parameters)
            case Property():
                return self.visit_property(fragment, parameters)
            case ArrayProperty():
                return self.visit_array_property(fragment, parameters)
            case FixedElementsArrayProperty():
                return self.visit_fixed_elements_array_property(fragment, parameters)
            case Reference():
                return self.visit_reference(fragment, parameters)
            case LocalReference():
                return self.visit_local_reference(fragment, parameters)
            case _:
                raise TypeError(f"Cannot visit {type(fragment).__name__}")

    # ------------------------------------------------------------------
    # Alternations
    # ------------------------------------------------------------------

    def first_alternative(self, body: dict[str, Any], name: str) -> Any:
        """Pick the first branch of an anyOf/oneOf, warning that the rest are dropped."""
        keyword = "anyOf" if is_truthy(body.get("anyOf")) else "oneOf"
        self.warn(
            f"Keyword '{keyword}' in definition '{name}' is not fully supported. "
            "Defaulting to first alternative."
        )
        alternatives = body[keyword]
        if isinstance(alternatives, list) and alternatives:
            return alternatives[0]
        return {}

    def flatten_alternation(self, body: dict[str, Any], name: str) -> dict[str, Any]:
        """Merge the first alternative over the rest of the schema."""
        alternative = as_schema(self.first_alternative(body, name))
        without_alternations = {k: v for k, v in body.items() if k not in ALTERNATION_KEYWORDS}
        return {**without_alternations, **alternative}

    # ------------------------------------------------------------------
    # References
    # ------------------------------------------------------------------

    def visit_reference(self, reference: Reference, parameters: VisitorParameters) -> Any:
        if is_local_reference(reference.body):
            return LocalReference(reference.body, reference.path).accept(self, parameters)
        logger.debug("Skipping remote reference %s", reference.body)
        return None

    def visit_local_reference(self, reference: LocalReference, parameters: VisitorParameters) -> Any:
        resolver = ReferenceResolver(parameters.json_schema_model, parameters.path_to_definitions)
        resolved = resolver.resolve(reference.body)

        # Break out of circular references
        if reference.body in parameters.traversed_references:
            return TypeName(inline_object_name(resolved.pointer))

        if resolved.is_root:
            return TypeName(ROOT_TYPE_NAME)

        if resolved.is_definition:
            return Definition(resolved.definition, resolved.pointer).accept(
                self, parameters.with_traversed(reference.body)
            )

        return TypeName(resolved.type_name)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def visit_properties(self, properties: Properties, parameters: VisitorParameters) -> list[Any]:
        return flatten(
            Property(body, (*properties.path, name)).accept(self, parameters)
            for name, body in properties.body.items()
        )

    def visit_array_property(self, array_property: ArrayProperty, parameters: VisitorParameters) -> Any:
        body = array_property.body
        name = array_property.name

        if isinstance(body["items"], list):
            if is_fixed_elements_array(body):
                self.warn(
                    f'"{name}" is an array containing a set of fixed elements. '
                    "Converting to a Concerto concept containing the fixed array elements as fields."
                )
                return FixedElementsArrayProperty(body, array_property.path).accept(self, parameters)

            # Concerto cannot describe fixed elements followed by unknown ones
            self.warn(
                f'"{name}" is an array containing a mix of predefined and unknown elements. '
                "Converting to a stringified JSON string."
            )
            return Property({"type": "object"}, array_property.path).accept(self, parameters)

        overrides = parameters.overrides.merge(is_array=True)
        return Property(body["items"], array_property.path).accept(self, parameters.with_overrides(overrides))

    def visit_fixed_elements_array_property(
        self, array_property: FixedElementsArrayProperty, parameters: VisitorParameters
    ) -> Any:
        body = array_property.body
        items = body["items"]

        # Each element becomes a field named after its index
        derived_object = {
            "type": "object",
            "properties": {str(index): item for index, item in enumerate(items[: int(body["maxItems"])])},
            "required": [str(index) for index in range(len(items[: int(body["minItems"])]))],
        }
        return Property(derived_object, array_property.path).accept(self, parameters)

    def _property_fields(
        self, name: str, overrides: PropertyOverrides, required: tuple[str, ...] | None
    ) -> dict[str, Any]:
        return {
            "name": overrides.name if overrides.name is not None else name,
            "is_array": bool(overrides.is_array),
            "is_optional": required is None or name not in required,
            "decorators": list(overrides.decorators or ()),
        }

    def _referenced_type_name(self, referenced: Any) -> str | None:
        if isinstance(referenced, list):
            referenced = referenced[0]
        return normalize_name(referenced.name)

    def visit_property(self, prop: Property, parameters: VisitorParameters) -> Any:
        """
        Infer the Concerto property, and any spawned declarations, of a property schema.

        The first matching rule wins: reserved names, enums, alternations,
        references, arrays, union types, freeform objects, inline objects
        and finally primitives.

        Args:
            prop: The property fragment
            parameters: Visitor parameters, whose overrides are consumed here

        Returns:
            A property, a list of properties and declarations, or None
        """
        body = as_schema(prop.body)
        name = prop.name
        overrides = parameters.overrides
        parameters = parameters.without_overrides()
        fields = self._property_fields(name, overrides, parameters.required)

        if name in RESERVED_PROPERTY_NAMES:
            return None

        if isinstance(body.get("enum"), list):
            enum_name = normalize_name(inline_object_name(prop.path))
            enum_declaration = EnumDeclaration(
                name=enum_name,
                values=[EnumValue(normalize_identifier(to_json_string(value))) for value in body["enum"] if is_truthy(value)],
            )
            return [ObjectProperty(**fields, type=enum_name), enum_declaration]

        if contains_alternation(body):
            flattened = self.flatten_alternation(body, name)
            return Property(flattened, prop.path).accept(self, parameters.with_overrides(overrides))

        if is_reference(body):
            referenced = Reference(body["$ref"], prop.path).accept(self, parameters)
            if referenced is None:
                return None

            # Array definitions keep the name of the referencing property
            if isinstance(referenced, Property):
                return referenced.accept(self, parameters.with_overrides(PropertyOverrides(name=name)))

            return [ObjectProperty(**fields, type=self._referenced_type_name(referenced))]

        if is_array_property(body):
            return ArrayProperty(body, prop.path).accept(self, parameters.with_overrides(overrides))

        if isinstance(body.get("type"), list):
            self.warn(
                f'"{name}" is union type property. This feature is not supported by Concerto. '
                'Defaulting to a "string" type.'
            )
            union = f"[{','.join(to_json_string(t) for t in body['type'])}]"
            union_overrides = overrides.merge(decorators=(Decorator(STRINGIFIED_UNION_TYPE, [union]),))
            return Property({**body, "type": "string"}, prop.path).accept(
                self, parameters.with_overrides(union_overrides)
            )

        if is_object_freeform(body):
            return StringProperty(**{**fields, "decorators": [Decorator(STRINGIFIED_JSON)]})

        if body.get("type") == "object" and isinstance(body.get("properties"), dict):
            concept_name = inline_object_name(prop.path)
            derived = Definition(body, (concept_name,)).accept(self, parameters)
            return [ObjectProperty(**fields, type=normalize_name(concept_name)), derived]

        return build_primitive_property(body, name, fields, self.warn)

    # ------------------------------------------------------------------
    # Definitions
    # ------------------------------------------------------------------

    def visit_definitions(self, definitions: Definitions, parameters: VisitorParameters) -> list[Any]:
        return flatten(
            Definition(body, (*definitions.path, name)).accept(self, parameters)
            for name, body in definitions.body.items()
        )

    def visit_definition(self, definition: Definition, parameters: VisitorParameters) -> Any:
        if isinstance(definition.body, dict) and isinstance(definition.body.get("enum"), list):
            return EnumDefinition(definition.body, definition.path).accept(self, parameters)
        return NonEnumDefinition(definition.body, definition.path).accept(self, parameters)

    def visit_enum_definition(self, definition: EnumDefinition, parameters: VisitorParameters) -> EnumDeclaration:
        return EnumDeclaration(
            name=normalize_name(definition.name),
            values=[
                EnumValue(normalize_identifier(to_json_string(value)))
                for value in definition.body["enum"]
                if is_truthy(value)
            ],
        )

    def visit_non_enum_definition(self, definition: NonEnumDefinition, parameters: VisitorParameters) -> Any:
        """
        Infer the declarations of a named, root or inline definition.

        Args:
            definition: The definition fragment
            parameters: Visitor parameters

        Returns:
            A declaration, a concept followed by its spawned declarations,
            an unvisited Property for array definitions, or None

        Raises:
            UnsupportedTypeError: If a named definition is not an object
        """
        body = as_schema(definition.body)
        name = normalize_name(definition.name)

        if is_object_freeform(body):
            return StringScalar(name=name, decorators=[Decorator(STRINGIFIED_JSON)])

        if body.get("type") == "array":
            return Property(body, definition.path)

        if contains_alternation(body):
            alternative = self.first_alternative(body, definition.name)
            return Definition(alternative, definition.path).accept(self, parameters)

        if is_reference(body):
            return Reference(body["$ref"], definition.path).accept(self, parameters)

        schema_type = body.get("type")
        is_type_less_alternation = schema_type is None and isinstance(body.get("anyOf"), (dict, list))
        if (
            len(definition.path) != 1
            and definition.path[0] != ROOT_TYPE_NAME
            and schema_type != "object"
            and not is_type_less_alternation
        ):
            raise UnsupportedTypeError(f"Type keyword '{schema_type}' in definition '{name}' is not supported.")

        if body.get("properties") is None:
            return None

        required = body.get("required")
        children = Properties(body["properties"], (*definition.path, "properties")).accept(
            self,
            parameters.with_changes(required=tuple(required) if isinstance(required, list) else None),
        )

        spawned = [child for child in children if isinstance(child, (ConceptDeclaration, EnumDeclaration))]
        properties = [child for child in children if isinstance(child, PropertyDef)]
        concept = ConceptDeclaration(name=name, is_abstract=False, properties=properties)

        if spawned:
            return [concept, *spawned]
        return concept

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    def visit_json_schema_model(self, model: JsonSchemaModel, parameters: VisitorParameters) -> Models:
        """
        Convert a whole schema document.

        The document is validated against its meta-schema, then the root
        schema and every named definition are visited. Declarations are
        deduplicated by name, the first one winning.

        Args:
            model: The document fragment
            parameters: Visitor parameters carrying the namespaces

        Returns:
            The inferred models

        Raises:
            jsonschema.exceptions.SchemaError: If the document is not a valid schema
            UnsupportedTypeError: If a type has no Concerto counterpart
        """
        schema = model.body
        check_schema(schema)

        document = as_schema(schema)
        id_uri = parse_id_uri(document.get("$id"))
        root_name = (id_uri.type if id_uri else None) or document.get("title") or ROOT_TYPE_NAME

        path_to_definitions = locate_definitions(document, parameters.path_to_definitions)
        definitions = get_value(document, path_to_definitions) if path_to_definitions else None
        logger.debug("Root '%s', definitions at %s", root_name, "/".join(path_to_definitions) or "<none>")

        parameters = parameters.with_changes(
            json_schema_model=document,
            path_to_definitions=path_to_definitions or None,
        )

        results = [Definition(schema, (root_name,)).accept(self, parameters)]
        if isinstance(definitions, dict):
            results.append(Definitions(definitions, path_to_definitions).accept(self, parameters))

        declarations = [result for result in flatten(results) if isinstance(result, Declaration)]
        declarations = deduplicate_declarations(declarations)
        logger.debug("Inferred %d declarations", len(declarations))

        return Models(
            models=[Model(namespace=parameters.namespace, declarations=declarations)],
            meta_model_namespace=parameters.meta_model_namespace,
        )


def infer_models(
    schema: Any,
    namespace: str,
    meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE,
    path_to_definitions: tuple[str, ...] | list[str] | None = None,
    warn: Callable[[str], None] | None = None,
) -> Models:
    """
    Infer Concerto models from a JSON Schema document.

    Args:
        schema: The parsed JSON Schema document
        namespace: Namespace of the generated model (e.g. "com.example@1.0.0")
        meta_model_namespace: Namespace qualifying every `$class` tag
        path_to_definitions: Location of the definitions, detected when None
        warn: Sink for conversion warnings

    Returns:
        The inferred models
    """
    parameters = VisitorParameters(
        meta_model_namespace=meta_model_namespace,
        namespace=namespace,
        path_to_definitions=tuple(path_to_definitions) if path_to_definitions else None,
    )
    return JsonSchemaModel(schema).accept(JsonSchemaVisitor(warn), parameters)


def convert(
    schema: Any,
    namespace: str,
    meta_model_namespace: str = DEFAULT_META_MODEL_NAMESPACE,
    path_to_definitions: tuple[str, ...] | list[str] | None = None,
    warn: Callable[[str], None] | None = None,
) -> dict[str, Any]:
    """Convert a JSON Schema document to the Concerto JSON metamodel."""
    return infer_models(schema, namespace, meta_model_namespace, path_to_definitions, warn).to_dict()
