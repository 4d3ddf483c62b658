"""
Document module.

Contains the API document model, its parser and the file loader.
"""

from __future__ import annotations

from .loader import load_document
from .nodes import (
    AllOf,
    AnyOf,
    AnySchema,
    ArrayType,
    BooleanType,
    Components,
    IntegerType,
    MediaType,
    NumberType,
    ObjectType,
    OneOf,
    OpenAPI,
    Operation,
    PathItem,
    Reference,
    Response,
    Responses,
    Schema,
    StringType,
    schema_kind_name,
)
from .parser import DocumentParser, parse_document

__all__ = [
    "AllOf",
    "AnyOf",
    "AnySchema",
    "ArrayType",
    "BooleanType",
    "Components",
    "DocumentParser",
    "IntegerType",
    "MediaType",
    "NumberType",
    "ObjectType",
    "OneOf",
    "OpenAPI",
    "Operation",
    "PathItem",
    "Reference",
    "Response",
    "Responses",
    "Schema",
    "StringType",
    "load_document",
    "parse_document",
    "schema_kind_name",
]
