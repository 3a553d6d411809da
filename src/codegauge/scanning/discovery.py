"""File discovery: walk a project root and yield analyzable source files.

Dot-directories and excluded directory names are pruned from the walk, so
their contents are never visited. Unreadable subdirectories are logged and
skipped.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator

from ..exceptions import EmptyProjectError, NotFoundError
from ..logging_config import get_logger

logger = get_logger(__name__)


class FileDiscovery:
    """Enumerates source files under a root directory.

    Args:
        root_dir: Project root
        extensions: Recognized extensions (lower-case, with leading dot)
        exclude_dirs: Directory names pruned besides dot-directories
        follow_symlinks: Descend into symlinked directories
    """

    def __init__(
        self,
        root_dir: "str | Path",
        extensions: Iterable[str],
        exclude_dirs: Iterable[str] = (),
        follow_symlinks: bool = False,
    ):
        self.root_dir = Path(root_dir)
        self.extensions = frozenset(ext.lower() for ext in extensions)
        self.exclude_dirs = frozenset(exclude_dirs)
        self.follow_symlinks = follow_symlinks

    def validate_root(self) -> Path:
        """Resolve the root, raising NotFoundError if it is not a directory."""
        if not self.root_dir.exists():
            raise NotFoundError(self.root_dir)
        if not self.root_dir.is_dir():
            raise NotFoundError(self.root_dir, "Path is not a directory")
        return self.root_dir.resolve()

    def iter_source_files(self) -> Iterator[str]:
        """Yield root-relative POSIX paths as the walk finds them.

        Directory entries are visited in sorted order, but files of a
        directory come before its subdirectories, so the stream is not
        globally sorted; use ``discover()`` for the canonical order.
        """
        root = self.validate_root()

        def _on_error(err: OSError) -> None:
            if Path(err.filename or "").resolve() == root:
                raise NotFoundError(self.root_dir, f"Cannot list directory: {err.strerror}")
            logger.warning(f"Skipping unreadable directory {err.filename}: {err.strerror}")

        for dirpath, dirnames, filenames in os.walk(
            root, onerror=_on_error, followlinks=self.follow_symlinks
        ):
            kept = []
            for name in sorted(dirnames):
                if self._should_prune(name):
                    logger.debug(f"Pruning directory {Path(dirpath, name)}")
                    continue
                kept.append(name)
            dirnames[:] = kept

            rel_dir = Path(dirpath).relative_to(root)
            for name in sorted(filenames):
                if Path(name).suffix.lower() not in self.extensions:
                    continue
                full = Path(dirpath, name)
                if not full.is_file():
                    continue
                yield (rel_dir / name).as_posix()

    def discover(self) -> list[str]:
        """Return all eligible files sorted by relative path.

        Raises:
            NotFoundError: If the root does not exist
            EmptyProjectError: If no eligible file is found
        """
        files = sorted(self.iter_source_files())
        if not files:
            raise EmptyProjectError(self.root_dir, sorted(self.extensions))
        logger.debug(f"Discovered {len(files)} files under {self.root_dir}")
        return files

    def _should_prune(self, name: str) -> bool:
        return name.startswith(".") or name in self.exclude_dirs


def discover_files(
    root_dir: "str | Path",
    extensions: Iterable[str],
    exclude_dirs: Iterable[str] = (),
    follow_symlinks: bool = False,
) -> list[str]:
    """Convenience wrapper around ``FileDiscovery.discover``."""
    return FileDiscovery(root_dir, extensions, exclude_dirs, follow_symlinks).discover()
