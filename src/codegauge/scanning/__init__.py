"""File discovery, reading and parsing."""

from .discovery import FileDiscovery, discover_files
from .languages import GRAMMAR_BY_EXTENSION, detect_language, get_supported_extensions
from .reader import read_source_file
from .treesitter_parser import TreeSitterParser, get_supported_languages

__all__ = [
    "FileDiscovery",
    "discover_files",
    "GRAMMAR_BY_EXTENSION",
    "detect_language",
    "get_supported_extensions",
    "read_source_file",
    "TreeSitterParser",
    "get_supported_languages",
]
