"""Analysis-related exceptions: project roots, file access, run control."""

from pathlib import Path
from typing import Optional

from .base import CodeGaugeError


class AnalysisError(CodeGaugeError):
    """Base class for analysis-related errors."""

    pass


class NotFoundError(AnalysisError):
    """Raised when the project root does not exist or is not a directory."""

    def __init__(self, path: Path, reason: str = "Path does not exist"):
        super().__init__(
            f"Project root not found: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class EmptyProjectError(AnalysisError):
    """Raised when discovery finds nothing to analyze."""

    def __init__(self, path: Path, extensions: Optional[list] = None):
        details = {"path": str(path)}
        if extensions:
            details["extensions"] = ", ".join(extensions)
        super().__init__(f"{path}: no analyzable files found", details=details)
        self.path = path
        self.extensions = list(extensions or [])


class UnreadableFileWarning(AnalysisError):
    """A single file could not be read.

    Non-fatal: the engine logs it, excludes the file from every aggregate
    and lists it under ``overview.skippedFiles``.
    """

    def __init__(self, filepath: str, reason: str, message: Optional[str] = None):
        super().__init__(
            message or f"Cannot read file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class DecodeError(UnreadableFileWarning):
    """File content is not valid UTF-8 text."""

    def __init__(self, filepath: str, reason: str):
        super().__init__(filepath, reason, message=f"Cannot decode file as text: {filepath}")


class AnalysisTimeoutError(AnalysisError, TimeoutError):
    """Raised when a run exceeds its deadline. No partial result is produced."""

    def __init__(self, timeout_seconds: float, pending: int = 0):
        super().__init__(
            f"Analysis exceeded {timeout_seconds}s timeout",
            details={"timeout_seconds": str(timeout_seconds), "pending_files": str(pending)},
        )
        self.timeout_seconds = timeout_seconds
        self.pending = pending


class AnalysisCancelledError(AnalysisError):
    """Raised inside the engine when its caller cancelled the run."""

    def __init__(self, root: Path):
        super().__init__(f"Analysis of {root} was cancelled", details={"path": str(root)})
        self.root = root
