"""
Type model builder that transforms discovered schemas into type IR.

Phase 3 of the pipeline: every root schema of the registry that declares a
type (struct, string enumeration, oneOf union) becomes a declaration, and
every anonymous schema nested inside it is materialized under a name built
from its parent's name and its own position (`<parent>::<field>`).
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TypeVar

from ..diagnostics import DiagnosticKind, Diagnostics
from ..document.nodes import (
    AllOf,
    AnyOf,
    ArrayType,
    BooleanType,
    IntegerType,
    NumberType,
    ObjectType,
    OneOf,
    OpenAPI,
    Reference,
    ReferenceOrSchema,
    Schema,
    StringType,
    schema_kind_name,
)
from ..errors import CyclicReferenceError
from .ir_nodes import (
    BOOLEAN,
    INTEGER,
    NUMBER,
    STRING,
    ContainerAttributes,
    FieldAttributes,
    FieldDef,
    FieldName,
    PlainEnumDef,
    PlainEnumVariant,
    StructDef,
    TypeIdent,
    TypeRef,
    TypeRegistry,
    UnionEnumDef,
    UnionVariant,
    VariantAttributes,
)
from .name_resolver import NameResolver
from .reference_resolver import ReferenceResolver, schema_name_from_pointer
from .schema_collector import SchemaRecord, SchemaRegistry

logger = logging.getLogger(__name__)

NAME_SEPARATOR = "::"
ADDITIONAL_PROPERTIES_NAME = "Additional"

N = TypeVar("N", FieldName, TypeIdent)


def declares_type(schema: Schema) -> bool:
    """Whether a schema is materialized as a named declaration rather than inlined."""
    kind = schema.schema_kind
    if isinstance(kind, ObjectType):
        return bool(kind.properties) or kind.additional_properties is None or kind.additional_properties is False
    if isinstance(kind, StringType):
        return bool(kind.enumeration)
    return isinstance(kind, OneOf)


def unwrap_arrays(schema: Schema) -> tuple[Schema, int]:
    """Innermost inline item schema of nested arrays, and the number of arrays around it."""
    depth = 0
    while isinstance(schema.schema_kind, ArrayType) and isinstance(schema.schema_kind.items, Schema):
        schema = schema.schema_kind.items
        depth += 1
    return schema, depth


class TypeModelBuilder:
    """Builds the type registry from the schema registry."""

    def __init__(
        self,
        registry: SchemaRegistry,
        document: OpenAPI,
        diagnostics: Diagnostics | None = None,
        name_resolver: NameResolver | None = None,
    ):
        """
        Initialize the builder.

        Args:
            registry: Complete output of schema discovery
            document: The parsed API document, used to follow references
            diagnostics: Sink for non-fatal problems (a fresh one if omitted)
            name_resolver: Identifier sanitizer (Rust rules by default)
        """
        self.registry = registry
        self.document = document
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.name_resolver = name_resolver or NameResolver()
        self.resolver = ReferenceResolver(document)
        self.types = TypeRegistry(self.diagnostics)

        # Pointers currently being inlined, to reject cycles
        self._inlining: list[str] = []

    def build(self) -> TypeRegistry:
        """
        Synthesize declarations for every root schema of the registry.

        Returns:
            TypeRegistry with all declarations, nested ones included
        """
        self.types = TypeRegistry(self.diagnostics)
        self._inlining = []

        for record in self.registry.records():
            # Nested schemas are reached through their root
            if not record.nested:
                self._build_root(record)

        logger.info("Synthesized %d types", len(self.types))
        return self.types

    def _build_root(self, record: SchemaRecord) -> None:
        raw_name = NAME_SEPARATOR.join(record.id.path)
        # Inline array items share the array's identifier, so they take its name
        schema, _ = unwrap_arrays(record.data)

        kind = schema.schema_kind
        if isinstance(kind, ObjectType) and declares_type(schema):
            self.build_struct(raw_name, kind, schema.description)
        elif isinstance(kind, StringType) and kind.enumeration:
            self.build_string_enum(raw_name, kind.enumeration, schema.description)
        elif isinstance(kind, OneOf):
            self.build_union(raw_name, kind, schema.description)
        elif isinstance(kind, (AllOf, AnyOf)):
            self.diagnostics.report(
                DiagnosticKind.UNSUPPORTED_SCHEMA,
                f"schema type {schema_kind_name(schema)} is unimplemented, no declaration generated",
                location=raw_name,
            )
        else:
            logger.debug("Top level schema %s of type %s is not a declaration, skipping", record.id, schema_kind_name(schema))

    def build_struct(self, raw_name: str, obj: ObjectType, description: str | None = None) -> TypeRef:
        """
        Build a struct from an object schema.

        Every property becomes a field; a field is optional unless its
        property is listed in `required`.

        Returns:
            Reference to the struct
        """
        name = self.name_resolver.type_ident(raw_name)

        fields = []
        used: set[str] = set()
        for prop_name, prop in obj.properties.items():
            optional = prop_name not in obj.required
            field_def = self._struct_field(raw_name, prop_name, prop, optional)
            field_def.name = self._unique_name(field_def.name, used, "_", raw_name)
            fields.append(field_def)

        struct = StructDef(
            name=name,
            fields=fields,
            attributes=ContainerAttributes(rename=raw_name),
            description=description,
        )
        return TypeRef.named(self.types.insert(struct))

    def build_nested(self, parent_name: str, schema_name: str, schema: Schema) -> TypeRef:
        """
        Get the type of a schema found at `<parent_name>::<schema_name>`.

        Primitives map to primitive types; enumerations, objects and oneOf
        unions are synthesized as new declarations named after their position.

        Returns:
            Reference to the resulting type
        """
        name = f"{parent_name}{NAME_SEPARATOR}{schema_name}"
        kind = schema.schema_kind

        if isinstance(kind, StringType):
            if not kind.enumeration:
                return STRING
            return self.build_string_enum(name, kind.enumeration, schema.description)

        if isinstance(kind, NumberType):
            return NUMBER

        if isinstance(kind, IntegerType):
            return INTEGER

        if isinstance(kind, BooleanType):
            return BOOLEAN

        if isinstance(kind, ObjectType):
            if not kind.properties:
                additional = kind.additional_properties
                if additional is True:
                    return TypeRef.map_of(TypeRef.any_value())
                if isinstance(additional, (Reference, Schema)):
                    return TypeRef.map_of(self._member_type(name, ADDITIONAL_PROPERTIES_NAME, additional))
            return self.build_struct(name, kind, schema.description)

        if isinstance(kind, ArrayType):
            if kind.items is None:
                logger.debug("Array at %s has no items schema", name)
                return TypeRef.array_of(TypeRef.any_value())
            # Items take the array's own position
            return TypeRef.array_of(self._member_type(parent_name, schema_name, kind.items))

        if isinstance(kind, OneOf):
            return self.build_union(name, kind, schema.description)

        # Fallback: allOf, anyOf and free-form schemas
        self.diagnostics.report(
            DiagnosticKind.UNSUPPORTED_SCHEMA,
            f"schema type {schema_kind_name(schema)} is unimplemented, using an opaque JSON value",
            location=name,
        )
        return TypeRef.any_value()

    def build_string_enum(self, raw_name: str, literals: list[str], description: str | None = None) -> TypeRef:
        """Build a plain enum with one unit variant per literal."""
        variants = []
        used: set[str] = set()
        for literal in literals:
            variants.append(
                PlainEnumVariant(
                    name=self._unique_name(self.name_resolver.type_ident(literal), used, "", raw_name),
                    attributes=VariantAttributes(rename=literal),
                )
            )
        enum = PlainEnumDef(
            name=self.name_resolver.type_ident(raw_name),
            variants=variants,
            description=description,
        )
        return TypeRef.named(self.types.insert(enum))

    def build_union(self, raw_name: str, one_of: OneOf, description: str | None = None) -> TypeRef:
        """Build an untagged union with one positional variant per member."""
        name = self.name_resolver.type_ident(raw_name)

        variants = []
        for i, member in enumerate(one_of.one_of):
            variant_name = f"Variant{i}"
            variants.append(
                UnionVariant(
                    name=self.name_resolver.type_ident(variant_name),
                    type_ref=self._member_type(raw_name, variant_name, member),
                )
            )

        union = UnionEnumDef(
            name=name,
            variants=variants,
            attributes=ContainerAttributes(untagged=True),
            description=description,
        )
        return TypeRef.named(self.types.insert(union))

    def _struct_field(self, parent_name: str, prop_name: str, prop: ReferenceOrSchema, optional: bool) -> FieldDef:
        return FieldDef(
            name=self.name_resolver.field_name(prop_name),
            type_ref=self._member_type(parent_name, prop_name, prop),
            optional=optional,
            attributes=FieldAttributes(rename=prop_name),
            description=prop.description if isinstance(prop, Schema) else None,
        )

    def _unique_name(self, name: N, used: set[str], separator: str, location: str) -> N:
        """
        Suffix an identifier already taken inside the same declaration.

        The raw name is left untouched, so the serde rename still matches the
        document: `fooBar` and `foo_bar` become `foo_bar` and `foo_bar_2`.
        """
        ident = name.ident
        if ident in used:
            base = ident.removeprefix("r#")
            count = 2
            while f"{base}{separator}{count}" in used:
                count += 1
            ident = f"{base}{separator}{count}"
            self.diagnostics.report(
                DiagnosticKind.DUPLICATE_MEMBER_NAME,
                f"`{name.raw}` sanitizes to `{name.ident}` which is already used, renamed to `{ident}`",
                location=location,
            )
            name = replace(name, ident=ident)
        used.add(ident)
        return name

    def _member_type(self, parent_name: str, schema_name: str, item: ReferenceOrSchema) -> TypeRef:
        """Type of a property, item, member or map value: reference first, inline second."""
        if isinstance(item, Reference):
            return self._reference_type(parent_name, schema_name, item)
        return self.build_nested(parent_name, schema_name, item)

    def _reference_type(self, parent_name: str, schema_name: str, reference: Reference) -> TypeRef:
        """
        Type of a referenced schema.

        Declarations are referred to by the name of the components entry
        they live in; anything else is inlined at the referencing position.
        """
        resolved = self.resolver.resolve_target(reference)

        # An array of inline declarations is declared under the array's name
        item, depth = unwrap_arrays(resolved.schema)
        if declares_type(item):
            target = schema_name_from_pointer(resolved.pointer)
            type_ref = TypeRef.named(self.name_resolver.type_ident(target).ident)
            for _ in range(depth):
                type_ref = TypeRef.array_of(type_ref)
            return type_ref

        key = str(resolved.pointer)
        if key in self._inlining:
            raise CyclicReferenceError(resolved.pointer, self._inlining)

        self._inlining.append(key)
        try:
            return self.build_nested(parent_name, schema_name, resolved.schema)
        finally:
            self._inlining.pop()


def build_types(
    registry: SchemaRegistry,
    document: OpenAPI,
    diagnostics: Diagnostics | None = None,
) -> TypeRegistry:
    """Synthesize the type registry for a discovered schema registry."""
    return TypeModelBuilder(registry, document, diagnostics).build()
