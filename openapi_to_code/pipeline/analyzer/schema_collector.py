"""
Schema discovery.

Walks the whole API document depth-first and registers every schema it
finds under a namespaced identifier. The resulting SchemaRegistry is the
only input the type builder needs besides the document itself.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from ..diagnostics import DiagnosticKind, Diagnostics
from ..document.nodes import (
    AllOf,
    AnyOf,
    ArrayType,
    MediaType,
    ObjectType,
    OneOf,
    OpenAPI,
    PathItem,
    Reference,
    ReferenceOrSchema,
    Response,
    Responses,
    Schema,
)
from ..errors import CannotInferNameError
from .reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identifier:
    """Namespace plus leaf name of a discovered schema."""

    namespace: tuple[str, ...] = ()
    name: str = ""

    def __str__(self) -> str:
        return ".".join([*self.namespace, self.name])

    @property
    def path(self) -> tuple[str, ...]:
        return (*self.namespace, self.name)


@dataclass(frozen=True)
class SchemaRecord:
    """A discovered schema and the identifier it was registered under."""

    id: Identifier
    data: Schema
    # True when reached by recursion into a parent schema
    nested: bool = False


class SchemaRegistry:
    """Identifier -> SchemaRecord, in discovery order. First-seen entry wins."""

    def __init__(self) -> None:
        self.data: dict[Identifier, SchemaRecord] = {}

    def keys(self) -> Iterator[str]:
        """Fully-qualified string keys of all discovered schemas."""
        return (str(identifier) for identifier in self.data)

    def records(self) -> Iterator[SchemaRecord]:
        return iter(self.data.values())

    def get(self, identifier: Identifier) -> SchemaRecord | None:
        return self.data.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.data

    def __getitem__(self, identifier: Identifier) -> SchemaRecord:
        return self.data[identifier]

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class VisitorContext:
    """Naming context threaded through the walk."""

    namespace: tuple[str, ...] = ()

    def sub_namespace(self, path: str) -> VisitorContext:
        return VisitorContext(namespace=(*self.namespace, path))

    def maybe_replace_namespace(self, path: str | None) -> VisitorContext:
        if path is not None:
            return VisitorContext(namespace=(path,))
        return self


class SchemaCollector:
    """Walks an API document and collects every schema it contains."""

    # Fixed traversal order; other methods are not visited
    METHOD_ORDER = ("get", "put", "post", "delete")

    def __init__(self, document: OpenAPI, diagnostics: Diagnostics | None = None):
        """
        Initialize the collector.

        Args:
            document: The parsed API document
            diagnostics: Sink for non-fatal problems (a fresh one if omitted)
        """
        self.document = document
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.resolver = ReferenceResolver(document)
        self.registry = SchemaRegistry()

    def collect(self) -> SchemaRegistry:
        """
        Walk the document and build the registry.

        Returns:
            SchemaRegistry with every discovered schema
        """
        self.registry = SchemaRegistry()
        context = VisitorContext()

        for path, item in self.document.paths.items():
            self._visit_path_item(item, context.sub_namespace(path))

        if self.document.components is not None:
            self._visit_components(context)

        logger.info("Discovered %d schemas", len(self.registry))
        return self.registry

    def collect_schema(
        self,
        schema: Schema,
        context: VisitorContext,
        nested: bool = False,
        shares_parent_name: bool = False,
    ) -> None:
        """
        Register a schema under the current namespace, then walk its children.

        The leaf name is the last namespace segment; the rest of the
        namespace becomes the identifier's namespace.

        Args:
            schema: The schema to register
            context: Current naming context
            nested: Whether the schema was reached from a parent schema
            shares_parent_name: Whether the schema is a composition member or
                array item, registered under its parent's identifier

        Raises:
            CannotInferNameError: If the namespace is empty
        """
        if not context.namespace:
            raise CannotInferNameError(context.namespace)

        identifier = Identifier(namespace=context.namespace[:-1], name=context.namespace[-1])
        self._register(SchemaRecord(id=identifier, data=schema, nested=nested), shares_parent_name)
        self._visit_children(schema, context)

    def _visit_path_item(self, item: PathItem | Reference, context: VisitorContext) -> None:
        if isinstance(item, Reference):
            logger.debug("Skipping path item reference %s at %s", item.reference, context.namespace)
            return

        for method in self.METHOD_ORDER:
            operation = getattr(item, method)
            if operation is None:
                continue
            self._visit_responses(operation.responses, context.maybe_replace_namespace(operation.operation_id))

    def _visit_responses(self, responses: Responses, context: VisitorContext) -> None:
        if responses.default is not None:
            self._visit_response(responses.default, context)

        for status, response in responses.responses.items():
            self._visit_response(response, context.sub_namespace(status))

    def _visit_response(self, response: Response | Reference, context: VisitorContext) -> None:
        if isinstance(response, Reference):
            logger.debug("Skipping response reference %s at %s", response.reference, context.namespace)
            return

        for content_type, media_type in response.content.items():
            self._visit_media_type(media_type, context.sub_namespace(content_type))

    def _visit_media_type(self, media_type: MediaType, context: VisitorContext) -> None:
        # Top-level references are registered once, at their components location
        if isinstance(media_type.schema, Schema):
            self.collect_schema(media_type.schema, context)

    def _visit_components(self, context: VisitorContext) -> None:
        for name, schema in self.document.components.schemas.items():
            if isinstance(schema, Reference):
                self.diagnostics.report(
                    DiagnosticKind.REFERENCE_ENTRY_SKIPPED,
                    f"reference entry ({schema.reference}) is not collected",
                    location=name,
                )
                continue
            self.collect_schema(schema, context.sub_namespace(name))

    def _visit_children(self, schema: Schema, context: VisitorContext) -> None:
        kind = schema.schema_kind

        if isinstance(kind, OneOf):
            members = kind.one_of
        elif isinstance(kind, AllOf):
            members = kind.all_of
        elif isinstance(kind, AnyOf):
            members = kind.any_of
        elif isinstance(kind, ArrayType):
            members = [kind.items] if kind.items is not None else []
        else:
            members = []

        # Members share their parent's naming context
        for member in members:
            self._visit_member(member, context, shares_parent_name=True)

        if isinstance(kind, ObjectType):
            for name, prop in kind.properties.items():
                self._visit_member(prop, context.sub_namespace(name))
            if isinstance(kind.additional_properties, (Schema, Reference)):
                self._visit_member(kind.additional_properties, context.sub_namespace("Additional"))

    def _visit_member(self, item: ReferenceOrSchema, context: VisitorContext, shares_parent_name: bool = False) -> None:
        if isinstance(item, Reference):
            # Resolve so broken references abort the run; the target itself is
            # collected at its own components.schemas location.
            self.resolver.resolve(item)
            logger.debug("Not collecting referenced schema %s at %s", item.reference, context.namespace)
            return

        self.collect_schema(item, context, nested=True, shares_parent_name=shares_parent_name)

    def _register(self, record: SchemaRecord, shares_parent_name: bool = False) -> None:
        existing = self.registry.get(record.id)
        if existing is None:
            self.registry.data[record.id] = record
            return

        if existing.data == record.data:
            return

        if shares_parent_name:
            logger.debug("Keeping parent schema for %s over one of its members", record.id)
            return

        self.diagnostics.report(
            DiagnosticKind.DUPLICATE_SCHEMA,
            "a different schema was already collected under this identifier; keeping the first one",
            location=str(record.id),
        )


def collect_schemas(document: OpenAPI, diagnostics: Diagnostics | None = None) -> SchemaRegistry:
    """Discover every schema in a document."""
    return SchemaCollector(document, diagnostics).collect()
