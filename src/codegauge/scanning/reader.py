"""Read one discovered file into a SourceFile."""

from __future__ import annotations

from pathlib import Path

from ..exceptions import DecodeError, UnreadableFileWarning
from ..models import SourceFile


def read_source_file(root_dir: Path, rel_path: str, max_size_bytes: int) -> SourceFile:
    """Read and decode ``rel_path`` under ``root_dir``.

    Raises:
        UnreadableFileWarning: The file cannot be read or exceeds the size limit
        DecodeError: The content is not valid UTF-8
    """
    filepath = root_dir / rel_path
    try:
        size = filepath.stat().st_size
        if size > max_size_bytes:
            raise UnreadableFileWarning(
                rel_path, f"file size {size} bytes exceeds limit of {max_size_bytes} bytes"
            )
        raw = filepath.read_bytes()
    except OSError as e:
        raise UnreadableFileWarning(rel_path, e.strerror or str(e))

    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DecodeError(rel_path, f"invalid UTF-8 at byte {e.start}")

    return SourceFile.from_text(rel_path, text)
