"""
IR (Intermediate Representation) node definitions.

These nodes represent the synthesized type declarations, ready for
rendering. All references are resolved and every identifier is sanitized;
the original names are kept next to the identifiers for rename metadata.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ..diagnostics import DiagnosticKind, Diagnostics

logger = logging.getLogger(__name__)


class TypeKind(Enum):
    """Kind of type in the IR."""

    PRIMITIVE = "primitive"  # string, number, integer, boolean
    NAMED = "named"  # A synthesized declaration
    ARRAY = "array"  # Sequence of T
    MAP = "map"  # String-keyed map of T
    ANY = "any"  # Any JSON value


@dataclass(frozen=True)
class TypeRef:
    """A resolved type reference."""

    kind: TypeKind = TypeKind.PRIMITIVE
    name: str = ""  # Primitive name or declaration identifier

    # For container types
    type_args: tuple[TypeRef, ...] = ()

    @staticmethod
    def primitive(name: str) -> TypeRef:
        return TypeRef(kind=TypeKind.PRIMITIVE, name=name)

    @staticmethod
    def named(name: str) -> TypeRef:
        return TypeRef(kind=TypeKind.NAMED, name=name)

    @staticmethod
    def array_of(item: TypeRef) -> TypeRef:
        return TypeRef(kind=TypeKind.ARRAY, type_args=(item,))

    @staticmethod
    def map_of(value: TypeRef) -> TypeRef:
        return TypeRef(kind=TypeKind.MAP, type_args=(value,))

    @staticmethod
    def any_value() -> TypeRef:
        return TypeRef(kind=TypeKind.ANY)


STRING = TypeRef.primitive("string")
NUMBER = TypeRef.primitive("number")
INTEGER = TypeRef.primitive("integer")
BOOLEAN = TypeRef.primitive("boolean")


@dataclass(frozen=True)
class TypeIdent:
    """A type-like identifier (PascalCase) and the raw name it came from."""

    raw: str = ""
    ident: str = ""

    def __str__(self) -> str:
        return self.ident


@dataclass(frozen=True)
class FieldName:
    """A field-like identifier (snake_case) and the raw name it came from."""

    raw: str = ""
    ident: str = ""

    def __str__(self) -> str:
        return self.ident


@dataclass
class ContainerAttributes:
    rename: str | None = None
    untagged: bool = False


@dataclass
class VariantAttributes:
    rename: str | None = None


@dataclass
class FieldAttributes:
    rename: str | None = None


@dataclass
class FieldDef:
    """A field definition in a struct."""

    name: FieldName = field(default_factory=FieldName)
    type_ref: TypeRef = field(default_factory=TypeRef)
    optional: bool = False
    attributes: FieldAttributes = field(default_factory=FieldAttributes)
    description: str | None = None


@dataclass
class PlainEnumVariant:
    """A unit variant."""

    name: TypeIdent = field(default_factory=TypeIdent)
    attributes: VariantAttributes = field(default_factory=VariantAttributes)


@dataclass
class UnionVariant:
    """A variant wrapping exactly one type."""

    name: TypeIdent = field(default_factory=TypeIdent)
    type_ref: TypeRef = field(default_factory=TypeRef)
    attributes: VariantAttributes = field(default_factory=VariantAttributes)


@dataclass
class StructDef:
    """A struct declaration."""

    name: TypeIdent = field(default_factory=TypeIdent)
    fields: list[FieldDef] = field(default_factory=list)
    attributes: ContainerAttributes = field(default_factory=ContainerAttributes)
    description: str | None = None


@dataclass
class PlainEnumDef:
    """An enumeration of string literals."""

    name: TypeIdent = field(default_factory=TypeIdent)
    variants: list[PlainEnumVariant] = field(default_factory=list)
    attributes: ContainerAttributes = field(default_factory=ContainerAttributes)
    description: str | None = None


@dataclass
class UnionEnumDef:
    """A oneOf-style enumeration; untagged unless attributes say otherwise."""

    name: TypeIdent = field(default_factory=TypeIdent)
    variants: list[UnionVariant] = field(default_factory=list)
    attributes: ContainerAttributes = field(default_factory=ContainerAttributes)
    description: str | None = None


TypeDef = Union[StructDef, PlainEnumDef, UnionEnumDef]


class TypeRegistry:
    """Type name -> declaration. Iterates in type-name order."""

    def __init__(self, diagnostics: Diagnostics | None = None):
        self.data: dict[str, TypeDef] = {}
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def insert(self, type_def: TypeDef) -> str:
        """
        Add a declaration, keeping the first one on name collisions.

        A structurally different redefinition is reported as a diagnostic;
        an identical one is dropped silently.

        Returns:
            The declaration's type name
        """
        name = type_def.name.ident
        existing = self.data.get(name)
        if existing is None:
            self.data[name] = type_def
        elif existing != type_def:
            self.diagnostics.report(
                DiagnosticKind.DUPLICATE_TYPE_NAME,
                f"duplicate type name. Previous definition:\n{existing!r}\nNew definition:\n{type_def!r}",
                location=name,
            )
        else:
            logger.debug("Deduplicated identical definition of %s", name)
        return name

    def names(self) -> list[str]:
        return sorted(self.data)

    def get(self, name: str) -> TypeDef | None:
        return self.data.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.data

    def __getitem__(self, name: str) -> TypeDef:
        return self.data[name]

    def __iter__(self) -> Iterator[TypeDef]:
        return (self.data[name] for name in self.names())

    def __len__(self) -> int:
        return len(self.data)
