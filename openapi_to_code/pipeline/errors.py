"""
Error taxonomy for the generator pipeline.

Every error raised here is structural: it aborts the run and no partial
output is produced. Recoverable problems go through the diagnostics
stream instead (see diagnostics.py).
"""

from __future__ import annotations

from typing import Any


class OpenApiToCodeError(Exception):
    """Base class for all pipeline errors."""

    pass


class DocumentError(OpenApiToCodeError):
    """Raised when the API document does not have the expected structure."""

    def __init__(self, message: str, location: str = ""):
        self.location = location
        super().__init__(f"{location}: {message}" if location else message)


class InvalidPointerError(OpenApiToCodeError):
    """Raised when a reference is not a same-document fragment (`#/...`)."""

    def __init__(self, original: str):
        self.original = original
        super().__init__(f"Only relative pointers are supported, but `{original}` doesn't start with `#/`")


class ReferenceResolutionError(OpenApiToCodeError):
    """Raised when a `$ref` cannot be followed."""

    def __init__(self, message: str, reference: Any = None):
        self.reference = reference
        super().__init__(message)


class UnsupportedReferenceError(ReferenceResolutionError):
    """Raised for pointers that do not target `#/components/schemas/<name>`."""

    def __init__(self, reference: Any):
        super().__init__(f"Reference location `{reference}` currently not supported", reference)


class NoComponentsDefinedError(ReferenceResolutionError):
    """Raised when a reference is followed in a document without `components`."""

    def __init__(self, reference: Any):
        super().__init__(f"Referenced item `{reference}` could not be found: no components defined in document", reference)


class ReferenceNotFoundError(ReferenceResolutionError):
    """Raised when the referenced schema name is absent from `components.schemas`."""

    def __init__(self, reference: Any):
        super().__init__(f"Referenced item `{reference}` could not be found", reference)


class CyclicReferenceError(ReferenceResolutionError):
    """Raised when following references leads back to a pointer already being followed."""

    def __init__(self, reference: Any, chain: list[str] | None = None):
        self.chain = list(chain or [])
        trail = " -> ".join([*self.chain, str(reference)])
        super().__init__(f"Cyclic reference detected: {trail}", reference)


class CannotInferNameError(OpenApiToCodeError):
    """Raised when a schema is registered while the namespace is empty."""

    def __init__(self, namespace: tuple[str, ...] = ()):
        self.namespace = namespace
        super().__init__(f"Cannot infer name from namespace {list(namespace)!r}")


class InvalidIdentifierError(OpenApiToCodeError):
    """Raised when a name cannot be turned into a valid target-language identifier."""

    def __init__(self, token: str, sanitized: str, reason: str):
        self.token = token
        self.sanitized = sanitized
        super().__init__(f"Cannot build an identifier from `{token}` (sanitized to `{sanitized}`): {reason}")


class RenderError(OpenApiToCodeError):
    """Raised when rendering, formatting or validating the generated source fails."""

    pass


class StrictModeError(OpenApiToCodeError):
    """Raised in strict mode when the run produced diagnostics."""

    def __init__(self, diagnostics: list[Any]):
        self.diagnostics = list(diagnostics)
        lines = "\n".join(f"  - {d}" for d in self.diagnostics)
        super().__init__(f"{len(self.diagnostics)} diagnostic(s) reported in strict mode:\n{lines}")
