"""
Pipeline generator: API document in, Rust source out.

Runs the phases in order:

1. Parse: raw mapping -> document model
2. Collect: document -> schema registry
3. Build: schema registry -> type registry
4. Render: type registry -> source (jinja2 templates)
5. Format: optional rustfmt pass
6. Write: atomic write of the output file
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .analyzer.ir_nodes import TypeRegistry
from .analyzer.schema_collector import SchemaCollector, SchemaRegistry
from .analyzer.type_builder import TypeModelBuilder
from .backends.rust_backend import RustBackend
from .config import CodeGeneratorConfig, OutputMode
from .diagnostics import Diagnostics
from .document import DocumentParser, OpenAPI
from .formatters.rustfmt_formatter import RustfmtFormatter
from .output.atomic_writer import AtomicWriter

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates Rust type declarations from an OpenAPI document."""

    def __init__(self, document: dict[str, Any] | OpenAPI, config: CodeGeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            document: Raw document mapping, or an already parsed document
            config: Code generation configuration
        """
        self.document = document
        self.config = config or CodeGeneratorConfig()
        self.diagnostics = Diagnostics()

        self.openapi: OpenAPI | None = document if isinstance(document, OpenAPI) else None
        self.schemas: SchemaRegistry | None = None
        self.types: TypeRegistry | None = None

        self.backend = RustBackend(self.config)
        self.formatter = RustfmtFormatter()
        self.writer = AtomicWriter()

    def parse(self) -> OpenAPI:
        """Phase 1: build the document model."""
        if self.openapi is None:
            self.openapi = DocumentParser().parse(self.document)
        return self.openapi

    def collect(self) -> SchemaRegistry:
        """Phase 2: discover every schema of the document."""
        if self.schemas is None:
            self.schemas = SchemaCollector(self.parse(), self.diagnostics).collect()
        return self.schemas

    def build(self) -> TypeRegistry:
        """
        Phase 3: synthesize the type declarations.

        Raises:
            StrictModeError: In strict mode, if any diagnostic was reported
        """
        if self.types is None:
            self.types = TypeModelBuilder(self.collect(), self.parse(), self.diagnostics).build()

        if self.config.strict:
            self.diagnostics.raise_if_any()
        return self.types

    def render(self) -> str:
        """Phase 4: render the declarations to source."""
        return self.backend.generate(self.build(), self._generation_comment())

    def generate(self) -> str:
        """
        Run all phases up to (optional) formatting.

        Returns:
            Generated Rust source
        """
        code = self.render()
        if self.config.formatter.enabled:
            code = self.formatter.format(code, self.config.formatter)
        return code

    def write(self, path: str | Path) -> str:
        """
        Generate and write the output file according to the output config.

        Args:
            path: Output file path

        Returns:
            The generated code

        Raises:
            FileExistsError: If the file exists and the mode is ERROR_IF_EXISTS
        """
        path = Path(path)
        code = self.generate()
        output = self.config.output

        if output.atomic_write:
            if output.mode == OutputMode.ERROR_IF_EXISTS:
                self.writer.write_if_not_exists(path, code, validate=output.validate_before_write)
            else:
                self.writer.write(path, code, validate=output.validate_before_write)
        else:
            if output.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
                raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")
            if output.validate_before_write:
                self.writer.validate(code)
            path.write_text(code, encoding="utf-8")
            logger.info("Wrote %s", path)
        return code

    def _generation_comment(self) -> str:
        """Generate a command line comment for the generated file."""
        if not self.config.add_generation_comment:
            return ""

        from .. import __version__
        from ..cli_utils import reconstruct_command_line

        return f"Generated by openapi_to_code v{__version__} : {reconstruct_command_line()}"
