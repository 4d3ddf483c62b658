"""OpenAPI to Code Generator

A Python package for generating Rust (serde) type declarations from the
schemas of an OpenAPI 3 document: schema discovery, type synthesis,
template rendering and atomic output.
"""

__version__ = "0.1.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    Diagnostic,
    DiagnosticKind,
    Diagnostics,
    FormatterConfig,
    OpenApiToCodeError,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)
from .pipeline.analyzer import build_types, collect_schemas
from .pipeline.document import DocumentParser, load_document

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    "OpenApiToCodeError",
    "AtomicWriter",
    "DocumentParser",
    "load_document",
    "collect_schemas",
    "build_types",
]
