"""
Node definitions for the parsed API document.

These nodes mirror the subset of OpenAPI 3 the generator walks: paths,
operations, responses, media types and schemas. Schemas carry exactly one
kind from a closed set, so consumers can dispatch on the kind and keep an
explicit fallback arm.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Reference:
    """A `$ref` to another node of the same document."""

    reference: str = ""


# Schema kinds


@dataclass
class StringType:
    """A string schema; `enumeration` holds the allowed literals, if any."""

    enumeration: list[str] = field(default_factory=list)
    format: str | None = None


@dataclass
class NumberType:
    format: str | None = None


@dataclass
class IntegerType:
    format: str | None = None


@dataclass
class BooleanType:
    pass


@dataclass
class ObjectType:
    """An object schema.

    `additional_properties` is None when absent, a bool for `true`/`false`,
    or the value schema (inline or referenced).
    """

    properties: dict[str, ReferenceOrSchema] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    additional_properties: bool | ReferenceOrSchema | None = None


@dataclass
class ArrayType:
    items: ReferenceOrSchema | None = None


@dataclass
class OneOf:
    one_of: list[ReferenceOrSchema] = field(default_factory=list)


@dataclass
class AllOf:
    all_of: list[ReferenceOrSchema] = field(default_factory=list)


@dataclass
class AnyOf:
    any_of: list[ReferenceOrSchema] = field(default_factory=list)


@dataclass
class AnySchema:
    """Any schema shape outside the supported kinds; keeps the raw mapping."""

    raw: dict[str, Any] = field(default_factory=dict)


SchemaKind = Union[
    StringType,
    NumberType,
    IntegerType,
    BooleanType,
    ObjectType,
    ArrayType,
    OneOf,
    AllOf,
    AnyOf,
    AnySchema,
]


@dataclass
class Schema:
    """A schema node."""

    schema_kind: SchemaKind = field(default_factory=AnySchema)
    description: str | None = None
    title: str | None = None


ReferenceOrSchema = Union[Reference, Schema]


# Document structure


@dataclass
class MediaType:
    schema: ReferenceOrSchema | None = None


@dataclass
class Response:
    description: str = ""
    content: dict[str, MediaType] = field(default_factory=dict)


@dataclass
class Responses:
    default: Response | Reference | None = None
    responses: dict[str, Response | Reference] = field(default_factory=dict)


@dataclass
class Operation:
    operation_id: str | None = None
    responses: Responses = field(default_factory=Responses)


@dataclass
class PathItem:
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None


@dataclass
class Components:
    schemas: dict[str, ReferenceOrSchema] = field(default_factory=dict)


@dataclass
class OpenAPI:
    """Root of the parsed API document."""

    openapi: str = ""
    info: dict[str, Any] = field(default_factory=dict)
    paths: dict[str, PathItem | Reference] = field(default_factory=dict)
    components: Components | None = None

    # Raw document for reference
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


def schema_kind_name(schema: Schema) -> str:
    """Short human-readable name of a schema's kind, used in logs and listings."""
    kind = schema.schema_kind
    if isinstance(kind, StringType):
        return "string enum" if kind.enumeration else "string"
    if isinstance(kind, NumberType):
        return "number"
    if isinstance(kind, IntegerType):
        return "integer"
    if isinstance(kind, BooleanType):
        return "boolean"
    if isinstance(kind, ObjectType):
        return "object"
    if isinstance(kind, ArrayType):
        return "array"
    if isinstance(kind, OneOf):
        return "oneOf"
    if isinstance(kind, AllOf):
        return "allOf"
    if isinstance(kind, AnyOf):
        return "anyOf"
    return "any"
