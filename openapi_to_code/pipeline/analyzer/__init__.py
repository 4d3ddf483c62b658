"""
Analyzer module.

Contains pointer parsing, reference resolution, schema discovery, name
resolution, and type IR building.
"""

from __future__ import annotations

from .ir_nodes import (
    FieldDef,
    PlainEnumDef,
    StructDef,
    TypeDef,
    TypeKind,
    TypeRef,
    TypeRegistry,
    UnionEnumDef,
)
from .json_pointer import Pointer, parse_pointer
from .name_resolver import NameResolver
from .reference_resolver import ReferenceResolver, ResolvedReference
from .schema_collector import Identifier, SchemaCollector, SchemaRecord, SchemaRegistry, collect_schemas
from .type_builder import TypeModelBuilder, build_types

__all__ = [
    "Pointer",
    "parse_pointer",
    "ReferenceResolver",
    "ResolvedReference",
    "Identifier",
    "SchemaRecord",
    "SchemaRegistry",
    "SchemaCollector",
    "collect_schemas",
    "NameResolver",
    "FieldDef",
    "StructDef",
    "PlainEnumDef",
    "UnionEnumDef",
    "TypeDef",
    "TypeKind",
    "TypeRef",
    "TypeRegistry",
    "TypeModelBuilder",
    "build_types",
]
