"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ..analyzer.ir_nodes import PlainEnumDef, StructDef, TypeDef, TypeRef, TypeRegistry, UnionEnumDef
from ..config import CodeGeneratorConfig
from ..errors import RenderError


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Type mapping from IR primitive names to language types
    TYPE_MAP: dict[str, str] = {}

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self._register_filters(self.jinja_env)

        ext = self.FILE_EXTENSION
        self.prefix_template = self.jinja_env.get_template(f"prefix.{ext}.jinja2")
        self.struct_template = self.jinja_env.get_template(f"struct.{ext}.jinja2")
        self.plain_enum_template = self.jinja_env.get_template(f"plain_enum.{ext}.jinja2")
        self.union_enum_template = self.jinja_env.get_template(f"union_enum.{ext}.jinja2")

    def _register_filters(self, env: jinja2.Environment) -> None:
        """Add language-specific filters to the template environment."""

    def generate(self, types: TypeRegistry, generation_comment: str = "") -> str:
        """
        Generate code for every declaration of the registry.

        Declarations are emitted in type-name order; names listed in
        `config.ignore_types` are left out.

        Args:
            types: The synthesized declarations
            generation_comment: Optional header comment (without comment markers)

        Returns:
            Generated code as a string

        Raises:
            RenderError: If a template fails to render
        """
        ignored = set(self.config.ignore_types)
        try:
            blocks = [self.render_declaration(type_def) for type_def in types if type_def.name.ident not in ignored]
            prefix = self.prefix_template.render(generation_comment=generation_comment)
        except jinja2.TemplateError as e:
            raise RenderError(f"Template rendering failed: {e}") from e

        return "\n\n".join([prefix, *blocks]) + "\n"

    def render_declaration(self, type_def: TypeDef) -> str:
        """Render a single declaration with the template matching its kind."""
        if isinstance(type_def, StructDef):
            return self.struct_template.render(self.prepare_struct_context(type_def))
        if isinstance(type_def, PlainEnumDef):
            return self.plain_enum_template.render(self.prepare_plain_enum_context(type_def))
        if isinstance(type_def, UnionEnumDef):
            return self.union_enum_template.render(self.prepare_union_context(type_def))
        raise RenderError(f"Unknown declaration kind: {type(type_def).__name__}")

    @abstractmethod
    def translate_type(self, type_ref: TypeRef) -> str:
        """
        Translate an IR type to a language-specific type string.

        Args:
            type_ref: The type reference

        Returns:
            Language-specific type string
        """

    @abstractmethod
    def prepare_struct_context(self, struct: StructDef) -> dict[str, Any]:
        """Template variables for a struct."""

    @abstractmethod
    def prepare_plain_enum_context(self, enum: PlainEnumDef) -> dict[str, Any]:
        """Template variables for a plain enumeration."""

    @abstractmethod
    def prepare_union_context(self, union: UnionEnumDef) -> dict[str, Any]:
        """Template variables for a union enumeration."""
