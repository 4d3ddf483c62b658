"""
Load an API document from disk.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ..errors import DocumentError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def load_document(path: str | Path) -> dict[str, Any]:
    """
    Read a YAML or JSON document into a mapping.

    The format is picked from the file suffix; anything that is not
    `.yaml`/`.yml` is read as JSON.

    Args:
        path: Path to the document

    Returns:
        The deserialized document
    """
    path = Path(path)
    logger.info("Loading API document from %s", path)

    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            try:
                document = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise DocumentError(f"invalid YAML: {e}", str(path)) from e
        else:
            try:
                document = json.load(f)
            except json.JSONDecodeError as e:
                raise DocumentError(f"invalid JSON: {e}", str(path)) from e

    if not isinstance(document, dict):
        raise DocumentError("document root must be a mapping", str(path))
    return document
