"""Data models for codegauge.

Everything here is created fresh for a single analysis run and frozen once
built. ``AnalysisResult.to_dict()`` is the wire encoding consumed by callers
that persist or serve results.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class SourceFile:
    """One readable source file, keyed by its root-relative POSIX path."""

    path: str
    text: str
    line_count: int

    @classmethod
    def from_text(cls, path: str, text: str) -> "SourceFile":
        return cls(path=path, text=text, line_count=len(text.splitlines()))


@dataclass(frozen=True)
class FunctionSpan:
    """A function-like node: display name and its line span."""

    name: str
    start_line: int
    end_line: int

    @property
    def lines(self) -> int:
        return self.end_line - self.start_line + 1


@dataclass(frozen=True)
class FileMetric:
    """Structural metrics for one file.

    ``complexity`` and ``maintainability`` are exact values in [0, 100];
    the wire encoding rounds them.
    """

    file: str
    complexity: float
    maintainability: float
    line_count: int
    branch_count: int = 0
    comment_count: int = 0
    function_count: int = 0
    max_nesting: int = 0
    issues: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Fragment:
    """A normalized candidate fragment (a function body) in one file."""

    file: str
    start_byte: int
    end_byte: int
    start_line: int
    text: str

    @property
    def lines(self) -> int:
        return self.text.count("\n") + 1 if self.text else 0

    def encloses(self, other: "Fragment") -> bool:
        return (
            self.file == other.file
            and self.start_byte <= other.start_byte
            and other.end_byte <= self.end_byte
        )


@dataclass(frozen=True)
class FileExtraction:
    """Everything derived from one file; the file text itself is not kept."""

    metric: FileMetric
    fragments: Tuple[Fragment, ...] = ()


@dataclass(frozen=True)
class DuplicationInstance:
    """A fragment that occurs in two or more distinct files."""

    files: Tuple[str, ...]
    lines: int
    fragment: str
    occurrences: int = 2

    def to_dict(self) -> Dict[str, Any]:
        return {"files": list(self.files), "lines": self.lines, "fragment": self.fragment}


@dataclass(frozen=True)
class DuplicationSummary:
    percentage: float = 0.0
    duplicated_lines: int = 0
    instances: Tuple[DuplicationInstance, ...] = ()


@dataclass(frozen=True)
class Overview:
    total_files: int
    total_lines: int
    technical_debt_ratio: float
    skipped_files: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalysisResult:
    """The sole externally visible artifact of a run."""

    complexity_score: int
    maintainability_score: int
    details: Tuple[FileMetric, ...]
    duplication: DuplicationSummary
    overview: Overview
    overall_score: int
    health: str
    recommendations: Tuple[str, ...] = field(default=())

    def metric_for(self, path: str) -> FileMetric | None:
        return next((m for m in self.details if m.file == path), None)

    @property
    def critical_issues(self) -> int:
        """Number of analyzed files with at least one issue."""
        return sum(1 for m in self.details if m.issues)

    def summary(self) -> Dict[str, Any]:
        """Headline figures, formatted for display.

        Scores are fixed to two decimals and duplication carries a percent
        sign; ``totalFiles`` counts analyzed files only.
        """
        return {
            "totalFiles": len(self.details),
            "averageComplexity": f"{self.complexity_score:.2f}",
            "maintainabilityIndex": f"{self.maintainability_score:.2f}",
            "codeduplication": f"{self.duplication.percentage:.2f}%",
            "criticalIssues": self.critical_issues,
            "healthStatus": self.health,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Encode using the documented camelCase wire shape."""
        return {
            "complexity": {
                "score": self.complexity_score,
                "details": [
                    {
                        "file": m.file,
                        "complexity": round_half_up(m.complexity),
                        "maintainability": round_half_up(m.maintainability),
                    }
                    for m in self.details
                ],
            },
            "duplication": {
                "percentage": self.duplication.percentage,
                "instances": [inst.to_dict() for inst in self.duplication.instances],
            },
            "maintainability": {
                "score": self.maintainability_score,
                "details": [
                    {"file": m.file, "score": round_half_up(m.maintainability), "issues": list(m.issues)}
                    for m in self.details
                ],
            },
            "overview": {
                "totalFiles": self.overview.total_files,
                "totalLines": self.overview.total_lines,
                "technicalDebtRatio": self.overview.technical_debt_ratio,
                "skippedFiles": list(self.overview.skipped_files),
            },
        }

    def to_report(self) -> Dict[str, Any]:
        """Wire shape plus overall score, health label, summary and recommendations."""
        report = self.to_dict()
        report["overallScore"] = self.overall_score
        report["health"] = self.health
        report["summary"] = self.summary()
        report["recommendations"] = list(self.recommendations)
        return report
