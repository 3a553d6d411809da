"""Extension to grammar mapping: the single source of truth for languages.

Adding a language:
  1. Install its tree-sitter grammar and register it in treesitter_parser.
  2. Map its extensions here and list its node types in metrics.nodes.
"""

from pathlib import PurePath
from typing import Optional

GRAMMAR_BY_EXTENSION: dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}


def get_supported_extensions() -> list[str]:
    """Extensions that have a grammar, sorted."""
    return sorted(GRAMMAR_BY_EXTENSION)


def detect_language(path: "str | PurePath") -> Optional[str]:
    """Return the grammar name for a path, or None if it has no grammar."""
    return GRAMMAR_BY_EXTENSION.get(PurePath(path).suffix.lower())
