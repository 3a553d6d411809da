"""Reduce per-file metrics and duplication findings into project scores."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from ..config import DEFAULT_WEIGHTS, ScoreWeights
from ..models import AnalysisResult, DuplicationSummary, FileMetric, Overview, round_half_up

HEALTH_BANDS = (
    (80, "Excellent"),
    (70, "Good"),
    (50, "Fair"),
)
LOWEST_HEALTH = "Needs Improvement"


def mean_score(values: Sequence[float]) -> int:
    """Arithmetic mean rounded half up, 0 for no values."""
    if len(values) == 0:
        return 0
    return round_half_up(float(np.mean(np.asarray(values, dtype=float))))


def overall_score(
    complexity: float,
    maintainability: float,
    duplication_percentage: float,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> int:
    """Weighted combination of the three sub-scores, clamped to [0, 100].

    Duplication enters inverted: less duplication scores higher. Halves
    round up.
    """
    score = (
        complexity * weights.complexity
        + maintainability * weights.maintainability
        + (100 - duplication_percentage) * weights.duplication
    )
    return int(np.clip(round_half_up(score), 0, 100))


def health_label(score: float) -> str:
    """Map an overall score to its band; each band includes its lower bound."""
    for lower, label in HEALTH_BANDS:
        if score >= lower:
            return label
    return LOWEST_HEALTH


def aggregate(
    metrics: Sequence[FileMetric],
    duplication: DuplicationSummary,
    total_files: int,
    skipped_files: Sequence[str] = (),
    weights: Optional[ScoreWeights] = None,
) -> AnalysisResult:
    """Build the AnalysisResult for a run.

    Args:
        metrics: One FileMetric per analyzed file, in discovery order
        duplication: Output of the duplication detector
        total_files: Discovered files, including skipped ones
        skipped_files: Paths that could not be read or decoded
        weights: Overall score weights (defaults to 0.3 / 0.4 / 0.3)
    """
    weights = weights or DEFAULT_WEIGHTS

    complexity = mean_score([m.complexity for m in metrics])
    maintainability = mean_score([m.maintainability for m in metrics])
    total_lines = int(sum(m.line_count for m in metrics))

    debt_ratio = 0.0
    if total_lines > 0:
        debt_ratio = round(min(1.0, duplication.duplicated_lines / total_lines), 4)

    score = overall_score(complexity, maintainability, duplication.percentage, weights)

    return AnalysisResult(
        complexity_score=complexity,
        maintainability_score=maintainability,
        details=tuple(metrics),
        duplication=duplication,
        overview=Overview(
            total_files=total_files,
            total_lines=total_lines,
            technical_debt_ratio=debt_ratio,
            skipped_files=tuple(skipped_files),
        ),
        overall_score=score,
        health=health_label(score),
    )
