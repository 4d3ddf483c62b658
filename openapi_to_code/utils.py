"""
Utility functions for the OpenAPI to code generator.
"""

import re

# Regex pattern to split text into words, handling camelCase and acronym boundaries.
# Digits stay attached to the word they follow ("address2", "HTTP2").
_WORD_PATTERN = re.compile(r"[A-Z]+[0-9]*(?![a-z])|[A-Z]?[a-z]+[0-9]*|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them together."""
    return "".join(word.capitalize() for word in words if word)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Any character that is not an ASCII letter or digit acts as a word separator.

    Examples:
        "first_name" -> "FirstName"
        "FIRST_NAME" -> "FirstName"
        "actionTemplate" -> "ActionTemplate"
        "first 3 rows" -> "First3Rows"
        "Foo::bar" -> "FooBar"
        "application/json" -> "ApplicationJson"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return _capitalize_and_join(words)


def to_snake_case(text: str) -> str:
    """Convert camelCase, PascalCase, kebab-case or space-separated text to snake_case.

    Examples:
        "firstName" -> "first_name"
        "HTTPServer" -> "http_server"
        "at_type" -> "at_type"
        "address2" -> "address2"
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return "_".join(word.lower() for word in words if word)
