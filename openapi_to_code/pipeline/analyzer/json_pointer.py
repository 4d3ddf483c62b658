"""
Same-document JSON pointers (`#/a/b/c`).
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidPointerError

FRAGMENT_MARKER = "#/"


@dataclass(frozen=True)
class Pointer:
    """A parsed fragment reference."""

    components: tuple[str, ...] = ()

    def __str__(self) -> str:
        escaped = (c.replace("~", "~0").replace("/", "~1") for c in self.components)
        return FRAGMENT_MARKER + "/".join(escaped)


def parse_pointer(text: str) -> Pointer:
    """
    Parse a fragment reference into a Pointer.

    Args:
        text: The reference, e.g. "#/components/schemas/Pet"

    Returns:
        Pointer with decoded components

    Raises:
        InvalidPointerError: If the text does not start with "#/"
    """
    if not text.startswith(FRAGMENT_MARKER):
        raise InvalidPointerError(text)

    # ~1 must be decoded before ~0 (RFC 6901)
    components = tuple(part.replace("~1", "/").replace("~0", "~") for part in text[len(FRAGMENT_MARKER) :].split("/"))
    return Pointer(components=components)
