"""
Name resolver for turning document names into Rust identifiers.

Replaces characters that cannot appear in identifiers, converts to the
casing convention of the identifier's role (PascalCase for types and
variants, snake_case for fields) and keeps the raw name alongside.
"""

from __future__ import annotations

import re

from ...utils import snake_to_pascal_case, to_snake_case
from ..errors import InvalidIdentifierError
from .ir_nodes import FieldName, TypeIdent

# Rust strict and reserved keywords (2018+ editions)
RUST_RESERVED_KEYWORDS = {
    "abstract",
    "as",
    "async",
    "await",
    "become",
    "box",
    "break",
    "const",
    "continue",
    "crate",
    "do",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "final",
    "fn",
    "for",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "macro",
    "match",
    "mod",
    "move",
    "mut",
    "override",
    "priv",
    "pub",
    "ref",
    "return",
    "self",
    "Self",
    "static",
    "struct",
    "super",
    "trait",
    "true",
    "try",
    "type",
    "typeof",
    "unsafe",
    "unsized",
    "use",
    "virtual",
    "where",
    "while",
    "yield",
}

# Keywords that cannot be written as raw identifiers (r#...)
RAW_IDENTIFIER_FORBIDDEN = {"crate", "self", "super", "Self", "_"}

_IDENT_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Characters replaced before case conversion
_REPLACEMENTS = (("@", "at_"), ("/", "_"))


class NameResolver:
    """Builds sanitized identifiers for type names, variants and fields."""

    def type_ident(self, raw: str) -> TypeIdent:
        """
        Build a type-like identifier (also used for enum variants).

        Raises:
            InvalidIdentifierError: If no valid identifier can be built
        """
        sanitized = snake_to_pascal_case(self._replace_illegal(raw))
        self._check_identifier(raw, sanitized)
        if sanitized in RUST_RESERVED_KEYWORDS:
            raise InvalidIdentifierError(raw, sanitized, "reserved keyword")
        return TypeIdent(raw=raw, ident=sanitized)

    def field_name(self, raw: str) -> FieldName:
        """
        Build a field-like identifier. Keywords become raw identifiers (r#type).

        Raises:
            InvalidIdentifierError: If no valid identifier can be built
        """
        sanitized = to_snake_case(self._replace_illegal(raw))
        self._check_identifier(raw, sanitized)
        if sanitized in RUST_RESERVED_KEYWORDS:
            if sanitized in RAW_IDENTIFIER_FORBIDDEN:
                raise InvalidIdentifierError(raw, sanitized, "keyword cannot be a raw identifier")
            sanitized = f"r#{sanitized}"
        return FieldName(raw=raw, ident=sanitized)

    def _replace_illegal(self, raw: str) -> str:
        for old, new in _REPLACEMENTS:
            raw = raw.replace(old, new)
        return raw

    def _check_identifier(self, raw: str, sanitized: str) -> None:
        if not _IDENT_PATTERN.match(sanitized):
            raise InvalidIdentifierError(raw, sanitized, "not a valid identifier")
        if sanitized == "_":
            raise InvalidIdentifierError(raw, sanitized, "`_` is not an identifier")
