"""
API document parser.

Builds the typed document model from an already-deserialized mapping
(the output of a YAML or JSON loader). No reference is resolved here.
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import DocumentError
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
    ReferenceOrSchema,
    Response,
    Responses,
    Schema,
    StringType,
)

logger = logging.getLogger(__name__)


class DocumentParser:
    """Parses a raw OpenAPI mapping into document nodes."""

    HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

    COMPOSITION_KEYS = ("oneOf", "allOf", "anyOf")

    def parse(self, raw: dict[str, Any]) -> OpenAPI:
        """
        Parse an API document.

        Args:
            raw: The deserialized document

        Returns:
            OpenAPI root node
        """
        raw = self._expect_mapping(raw, "#")

        paths = {}
        for path, item in self._expect_mapping(raw.get("paths") or {}, "#/paths").items():
            paths[str(path)] = self._parse_path_item(item, f"#/paths/{path}")

        components = None
        if raw.get("components") is not None:
            components = self._parse_components(raw["components"], "#/components")

        return OpenAPI(
            openapi=str(raw.get("openapi", "")),
            info=dict(raw.get("info") or {}),
            paths=paths,
            components=components,
            raw=raw,
        )

    def parse_schema(self, raw: Any, path: str = "#") -> ReferenceOrSchema:
        """
        Parse a schema or a `$ref` to one.

        Args:
            raw: The schema mapping
            path: Location in the document (for error messages)

        Returns:
            Reference or Schema
        """
        raw = self._expect_mapping(raw, path)

        if "$ref" in raw:
            return Reference(reference=str(raw["$ref"]))

        return Schema(
            schema_kind=self._parse_schema_kind(raw, path),
            description=raw.get("description"),
            title=raw.get("title"),
        )

    def _parse_schema_kind(self, raw: dict[str, Any], path: str):
        """Pick the schema kind. Composition keywords take priority over `type`."""
        if "oneOf" in raw:
            return OneOf(one_of=self._parse_schema_list(raw["oneOf"], f"{path}/oneOf"))
        if "allOf" in raw:
            return AllOf(all_of=self._parse_schema_list(raw["allOf"], f"{path}/allOf"))
        if "anyOf" in raw:
            return AnyOf(any_of=self._parse_schema_list(raw["anyOf"], f"{path}/anyOf"))

        if "not" in raw:
            return AnySchema(raw=raw)

        type_name = raw.get("type")
        if type_name is None:
            # Untyped objects and arrays are common in hand-written documents
            if "properties" in raw or "additionalProperties" in raw:
                return self._parse_object(raw, path)
            if "items" in raw:
                return self._parse_array(raw, path)
            return AnySchema(raw=raw)

        if type_name == "string":
            enumeration = [str(value) for value in raw.get("enum") or [] if value is not None]
            return StringType(enumeration=enumeration, format=raw.get("format"))
        if type_name == "number":
            return NumberType(format=raw.get("format"))
        if type_name == "integer":
            return IntegerType(format=raw.get("format"))
        if type_name == "boolean":
            return BooleanType()
        if type_name == "object":
            return self._parse_object(raw, path)
        if type_name == "array":
            return self._parse_array(raw, path)

        # Type lists (["string", "null"]) and unknown type names
        logger.debug("Schema at %s has unsupported type %r", path, type_name)
        return AnySchema(raw=raw)

    def _parse_object(self, raw: dict[str, Any], path: str) -> ObjectType:
        properties = {}
        for name, prop in self._expect_mapping(raw.get("properties") or {}, f"{path}/properties").items():
            properties[str(name)] = self.parse_schema(prop, f"{path}/properties/{name}")

        required = raw.get("required") or []
        if not isinstance(required, list):
            raise DocumentError("`required` must be a list", f"{path}/required")

        additional = raw.get("additionalProperties")
        if isinstance(additional, dict):
            additional = self.parse_schema(additional, f"{path}/additionalProperties")
        elif additional is not None and not isinstance(additional, bool):
            raise DocumentError("`additionalProperties` must be a boolean or a schema", f"{path}/additionalProperties")

        return ObjectType(
            properties=properties,
            required=[str(name) for name in required],
            additional_properties=additional,
        )

    def _parse_array(self, raw: dict[str, Any], path: str) -> ArrayType:
        items = raw.get("items")
        if items is None:
            return ArrayType(items=None)
        return ArrayType(items=self.parse_schema(items, f"{path}/items"))

    def _parse_schema_list(self, raw: Any, path: str) -> list[ReferenceOrSchema]:
        if not isinstance(raw, list):
            raise DocumentError("expected a list of schemas", path)
        return [self.parse_schema(item, f"{path}/{i}") for i, item in enumerate(raw)]

    def _parse_path_item(self, raw: Any, path: str) -> PathItem | Reference:
        raw = self._expect_mapping(raw, path)
        if "$ref" in raw:
            return Reference(reference=str(raw["$ref"]))

        operations = {}
        for method in self.HTTP_METHODS:
            if raw.get(method) is not None:
                operations[method] = self._parse_operation(raw[method], f"{path}/{method}")
        return PathItem(**operations)

    def _parse_operation(self, raw: Any, path: str) -> Operation:
        raw = self._expect_mapping(raw, path)
        operation_id = raw.get("operationId")
        return Operation(
            operation_id=str(operation_id) if operation_id is not None else None,
            responses=self._parse_responses(raw.get("responses") or {}, f"{path}/responses"),
        )

    def _parse_responses(self, raw: Any, path: str) -> Responses:
        raw = self._expect_mapping(raw, path)
        responses = Responses()
        for status, response in raw.items():
            # YAML loads bare status codes as integers
            status = str(status)
            parsed = self._parse_response(response, f"{path}/{status}")
            if status == "default":
                responses.default = parsed
            else:
                responses.responses[status] = parsed
        return responses

    def _parse_response(self, raw: Any, path: str) -> Response | Reference:
        raw = self._expect_mapping(raw, path)
        if "$ref" in raw:
            return Reference(reference=str(raw["$ref"]))

        content = {}
        for content_type, media in self._expect_mapping(raw.get("content") or {}, f"{path}/content").items():
            media = self._expect_mapping(media or {}, f"{path}/content/{content_type}")
            schema = None
            if media.get("schema") is not None:
                schema = self.parse_schema(media["schema"], f"{path}/content/{content_type}/schema")
            content[str(content_type)] = MediaType(schema=schema)

        return Response(description=str(raw.get("description", "")), content=content)

    def _parse_components(self, raw: Any, path: str) -> Components:
        raw = self._expect_mapping(raw, path)
        schemas = {}
        for name, schema in self._expect_mapping(raw.get("schemas") or {}, f"{path}/schemas").items():
            schemas[str(name)] = self.parse_schema(schema, f"{path}/schemas/{name}")
        return Components(schemas=schemas)

    def _expect_mapping(self, value: Any, path: str) -> dict[str, Any]:
        if not isinstance(value, dict):
            raise DocumentError(f"expected a mapping, got {type(value).__name__}", path)
        return value


def parse_document(raw: dict[str, Any]) -> OpenAPI:
    """Convenience wrapper around DocumentParser.parse."""
    return DocumentParser().parse(raw)
