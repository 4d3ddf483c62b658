"""
Pipeline - OpenAPI document to Rust type declarations.

This module provides a multi-phase architecture for generating code from
the schemas embedded in an OpenAPI 3 document:

1. Phase 1 (Parser): Parse the raw document into the document model
2. Phase 2 (Collector): Discover every schema into a SchemaRegistry
3. Phase 3 (Builder): Synthesize named declarations into a TypeRegistry
4. Phase 4 (Backend): Render declarations through jinja2 templates
5. Phase 5 (Formatter): Optional post-processing with rustfmt
6. Phase 6 (Writer): Atomic write of the output file
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, FormatterConfig, OutputConfig, OutputMode
from .diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from .errors import OpenApiToCodeError
from .generator import PipelineGenerator
from .output import AtomicWriter

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
]
