"""Tree-sitter parser wrapper.

Provides one interface for parsing TypeScript, TSX and JavaScript source.
``tree_sitter.Language`` objects are immutable and shared; ``Parser``
objects are not thread-safe, so each thread gets its own set.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes, "typescript")
    root = tree.root_node
"""

from __future__ import annotations

import threading

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

_LANGUAGES: dict[str, tree_sitter.Language] = {
    "typescript": tree_sitter.Language(tree_sitter_typescript.language_typescript()),
    "tsx": tree_sitter.Language(tree_sitter_typescript.language_tsx()),
    "javascript": tree_sitter.Language(tree_sitter_javascript.language()),
}


def get_supported_languages() -> list[str]:
    """Get the grammar names that can be parsed."""
    return sorted(_LANGUAGES)


class TreeSitterParser:
    """Thread-aware wrapper around tree-sitter parsers."""

    def __init__(self) -> None:
        self._local = threading.local()

    def _parsers(self) -> dict[str, tree_sitter.Parser]:
        parsers = getattr(self._local, "parsers", None)
        if parsers is None:
            parsers = {}
            self._local.parsers = parsers
        return parsers

    def parse(self, code: bytes, language: str) -> tree_sitter.Tree:
        """Parse code and return its syntax tree.

        Tree-sitter recovers from syntax errors, so a tree is always
        produced; check ``tree.root_node.has_error`` for damage.

        Raises:
            ValueError: If ``language`` has no registered grammar
        """
        lang = _LANGUAGES.get(language)
        if lang is None:
            raise ValueError(f"Unsupported language: {language}")

        parsers = self._parsers()
        parser = parsers.get(language)
        if parser is None:
            parser = tree_sitter.Parser(lang)
            parsers[language] = parser
        return parser.parse(code)

    def is_language_supported(self, language: str) -> bool:
        return language in _LANGUAGES

