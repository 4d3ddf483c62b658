"""
Reference resolver for $ref resolution.

Resolves $ref pointers to the schemas they denote in the same document.
Only `#/components/schemas/<name>` locations are supported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..document.nodes import OpenAPI, Reference, ReferenceOrSchema, Schema
from ..errors import (
    CyclicReferenceError,
    NoComponentsDefinedError,
    ReferenceNotFoundError,
    UnsupportedReferenceError,
)
from .json_pointer import Pointer, parse_pointer

logger = logging.getLogger(__name__)

SCHEMAS_LOCATION = ("components", "schemas")


@dataclass(frozen=True)
class ResolvedReference:
    """A resolved $ref."""

    schema: Schema  # The concrete schema
    pointer: Pointer | None = None  # Last pointer followed (None for inline schemas)

    @property
    def target_name(self) -> str | None:
        """Name of the components.schemas entry holding the schema."""
        return self.pointer.components[-1] if self.pointer else None


def schema_name_from_pointer(pointer: Pointer) -> str:
    """
    Get the component name a pointer targets.

    Raises:
        UnsupportedReferenceError: If the pointer is not `#/components/schemas/<name>`
    """
    components = pointer.components
    if len(components) == 3 and components[:2] == SCHEMAS_LOCATION:
        return components[2]
    raise UnsupportedReferenceError(pointer)


class ReferenceResolver:
    """Resolves $ref to the schemas defined in `components.schemas`."""

    def __init__(self, document: OpenAPI):
        """
        Initialize the resolver.

        Args:
            document: The parsed API document (never modified)
        """
        self.document = document

    def resolve(self, item: ReferenceOrSchema) -> Schema:
        """
        Return the concrete schema an inline schema or a reference denotes.

        Args:
            item: Inline schema or Reference

        Returns:
            The schema, following reference chains transitively
        """
        return self.resolve_target(item).schema

    def resolve_target(self, item: ReferenceOrSchema) -> ResolvedReference:
        """
        Resolve and report the last pointer followed.

        Args:
            item: Inline schema or Reference

        Returns:
            ResolvedReference with the concrete schema
        """
        if not isinstance(item, Reference):
            return ResolvedReference(schema=item)
        return self._follow(item, [])

    def _follow(self, reference: Reference, chain: list[str]) -> ResolvedReference:
        pointer = parse_pointer(reference.reference)
        if str(pointer) in chain:
            raise CyclicReferenceError(pointer, chain)

        target = self._lookup(pointer)
        if isinstance(target, Reference):
            logger.debug("Following reference chain %s -> %s", pointer, target.reference)
            return self._follow(target, [*chain, str(pointer)])
        return ResolvedReference(schema=target, pointer=pointer)

    def _lookup(self, pointer: Pointer) -> ReferenceOrSchema:
        name = schema_name_from_pointer(pointer)

        components = self.document.components
        if components is None:
            raise NoComponentsDefinedError(pointer)

        if name not in components.schemas:
            raise ReferenceNotFoundError(pointer)

        logger.debug("Resolved %s", pointer)
        return components.schemas[name]
