"""Front matter extraction for Folio.

Source files begin with a YAML block between two ``---`` lines. This module
splits that block from the body and parses it into a plain mapping.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from .errors import MalformedDocumentError

FRONTMATTER_RE = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def extract_frontmatter(text: str, path: Path) -> tuple[dict[str, Any], str]:
    """Split YAML front matter from content.

    Args:
        text: Raw file content.
        path: Source file, used for error context.

    Returns:
        Tuple of (front matter dict, remaining body).

    Raises:
        MalformedDocumentError: No delimited block, invalid YAML, or a block
            that is not a mapping.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        raise MalformedDocumentError(path, "no front matter block delimited by '---' lines")
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise MalformedDocumentError(path, f"invalid YAML in front matter: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedDocumentError(
            path, f"front matter must be a mapping, got {type(data).__name__}"
        )
    # Non-string keys (e.g. `2015: x`) are not addressable by field name
    return {str(k): v for k, v in data.items()}, text[match.end() :]
