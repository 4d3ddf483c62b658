"""
Diagnostics stream for non-fatal problems.

Unsupported schema shapes, skipped reference entries and duplicate names do
not stop a run. They are collected here (and logged) so callers can inspect
them, or promote them to a failure in strict mode.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from .errors import StrictModeError

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    """Kind of degradation recorded during a run."""

    UNSUPPORTED_SCHEMA = "unsupported_schema"  # Replaced by an opaque JSON value
    REFERENCE_ENTRY_SKIPPED = "reference_entry_skipped"  # $ref entry at components.schemas level
    DUPLICATE_SCHEMA = "duplicate_schema"  # Different schemas under one identifier
    DUPLICATE_TYPE_NAME = "duplicate_type_name"  # Different declarations under one type name
    DUPLICATE_MEMBER_NAME = "duplicate_member_name"  # Fields or variants sanitized to one identifier


@dataclass(frozen=True)
class Diagnostic:
    """A single recorded degradation."""

    kind: DiagnosticKind
    message: str
    location: str = ""

    def __str__(self) -> str:
        if self.location:
            return f"[{self.kind.value}] {self.location}: {self.message}"
        return f"[{self.kind.value}] {self.message}"


class Diagnostics:
    """Ordered collection of diagnostics for one run."""

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def report(self, kind: DiagnosticKind, message: str, location: str = "") -> Diagnostic:
        """Record a diagnostic and log it as a warning."""
        diagnostic = Diagnostic(kind=kind, message=message, location=location)
        self._items.append(diagnostic)
        logger.warning("%s", diagnostic)
        return diagnostic

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self._items if d.kind == kind]

    def raise_if_any(self) -> None:
        """Promote the recorded diagnostics to a failure."""
        if self._items:
            raise StrictModeError(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
