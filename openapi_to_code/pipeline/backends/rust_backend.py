"""
Rust code generation backend.

Generates serde-annotated Rust structs and enums from the type IR.
"""

from __future__ import annotations

from typing import Any

import jinja2

from ..analyzer.ir_nodes import PlainEnumDef, StructDef, TypeKind, TypeRef, UnionEnumDef
from ..analyzer.type_builder import NAME_SEPARATOR
from ..errors import RenderError
from .base import CodeBackend


def rust_string(text: str) -> str:
    """Escape text for use inside a Rust string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def doc_comment(description: str | None) -> list[str]:
    """Turn a description into `///` doc comment lines."""
    if not description:
        return []
    lines = description.strip().splitlines()
    return [f"/// {line.rstrip()}" if line.strip() else "///" for line in lines]


class RustBackend(CodeBackend):
    """Rust code generation backend."""

    TEMPLATE_LANG = "rust"
    FILE_EXTENSION = "rs"

    TYPE_MAP = {
        "string": "String",
        "number": "f64",
        "integer": "u64",
        "boolean": "bool",
    }

    ANY_TYPE = "serde_json::Value"
    ARRAY_TYPE = "Vec"
    MAP_TYPE = "std::collections::BTreeMap"

    DERIVES = ["Clone", "Debug", "PartialEq", "Serialize", "Deserialize"]
    # Unit-only enums can also be copied and hashed
    PLAIN_ENUM_DERIVES = ["Clone", "Copy", "Debug", "PartialEq", "Eq", "Hash", "Serialize", "Deserialize"]

    def _register_filters(self, env: jinja2.Environment) -> None:
        env.filters["rust_string"] = rust_string

    def translate_type(self, type_ref: TypeRef) -> str:
        """Translate IR type to Rust type string."""
        if type_ref.kind == TypeKind.PRIMITIVE:
            if type_ref.name not in self.TYPE_MAP:
                raise RenderError(f"No Rust type for primitive `{type_ref.name}`")
            return self.TYPE_MAP[type_ref.name]

        if type_ref.kind == TypeKind.NAMED:
            return type_ref.name

        if type_ref.kind == TypeKind.ARRAY:
            return f"{self.ARRAY_TYPE}<{self.translate_type(type_ref.type_args[0])}>"

        if type_ref.kind == TypeKind.MAP:
            return f"{self.MAP_TYPE}<String, {self.translate_type(type_ref.type_args[0])}>"

        return self.ANY_TYPE

    def prepare_struct_context(self, struct: StructDef) -> dict[str, Any]:
        fields = []
        for field_def in struct.fields:
            fields.append(
                {
                    "name": field_def.name.ident,
                    "type": self.translate_type(field_def.type_ref),
                    "rename": field_def.attributes.rename or field_def.name.raw,
                    "optional": field_def.optional,
                    "doc": doc_comment(field_def.description),
                }
            )

        return {
            "name": struct.name.ident,
            "derives": self._derives(self.DERIVES),
            "rename": self._container_rename(struct),
            "doc": doc_comment(struct.description),
            "fields": fields,
        }

    def prepare_plain_enum_context(self, enum: PlainEnumDef) -> dict[str, Any]:
        variants = [
            {
                "name": variant.name.ident,
                "rename": variant.attributes.rename or variant.name.raw,
            }
            for variant in enum.variants
        ]
        return {
            "name": enum.name.ident,
            "derives": self._derives(self.PLAIN_ENUM_DERIVES),
            "doc": doc_comment(enum.description),
            "variants": variants,
        }

    def prepare_union_context(self, union: UnionEnumDef) -> dict[str, Any]:
        variants = [
            {
                "name": variant.name.ident,
                "type": self.translate_type(variant.type_ref),
                "rename": variant.attributes.rename,
            }
            for variant in union.variants
        ]
        return {
            "name": union.name.ident,
            "derives": self._derives(self.DERIVES),
            "untagged": union.attributes.untagged,
            "doc": doc_comment(union.description),
            "variants": variants,
        }

    def _derives(self, base: list[str]) -> list[str]:
        derives = list(base)
        for extra in self.config.extra_derives:
            if extra not in derives:
                derives.append(extra)
        return derives

    def _container_rename(self, struct: StructDef) -> str | None:
        # Synthesized positional names are not names from the document
        raw = struct.attributes.rename
        if not raw or raw == struct.name.ident or NAME_SEPARATOR in raw:
            return None
        return raw
