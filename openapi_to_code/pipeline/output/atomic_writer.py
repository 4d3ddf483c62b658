"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import logging
import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import RenderError

logger = logging.getLogger(__name__)

SERDE_IMPORT = "use serde::"

_STRING_LITERAL = re.compile(r'"(?:\\.|[^"\\])*"')


def validate_rust(content: str) -> None:
    """Basic structural checks on generated Rust (no full parsing).

    Args:
        content: Rust code to validate

    Raises:
        RenderError: If validation fails
    """
    if SERDE_IMPORT not in content:
        raise RenderError("Generated Rust code is missing the serde import")

    # Delimiters inside comments and string literals do not count
    code = "\n".join(line for line in content.splitlines() if not line.lstrip().startswith("//"))
    code = _STRING_LITERAL.sub('""', code)

    # Check for balanced delimiters (simple heuristic)
    for opening, closing in (("{", "}"), ("(", ")"), ("<", ">")):
        open_count = code.count(opening)
        close_count = code.count(closing)
        if open_count != close_count:
            raise RenderError(f"Generated Rust code has unbalanced `{opening}{closing}`: {open_count} open, {close_count} close")


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(self, validate: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate: Optional validation function (Rust heuristics by default)
        """
        self._validate = validate or validate_rust

    def validate(self, content: str) -> None:
        """Run the configured validation on content."""
        self._validate(content)

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            RenderError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self.validate(content)

            temp_path.replace(path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

        logger.info("Wrote %s", path)

    def write_if_not_exists(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content only if the file doesn't exist.

        Raises:
            FileExistsError: If the file already exists
            RenderError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        self.write(path, content, validate)
