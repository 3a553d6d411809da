"""Rule-based recommendations derived from an AnalysisResult."""

from __future__ import annotations

from typing import List, Optional

from ..config import DEFAULT_THRESHOLDS, RecommendationThresholds
from ..models import AnalysisResult, FileMetric

DECOMPOSE = (
    "Break down complex functions into smaller, focused units; "
    "project complexity is {score} (threshold {limit})."
)
DOCUMENT = (
    "Improve documentation and simplify hard-to-follow code; "
    "project maintainability is {score} (threshold {limit})."
)
EXTRACT_SHARED = (
    "Extract duplicated code into shared utilities; "
    "{percentage:.1f}% of lines are duplicated (threshold {limit})."
)
FILE_SPECIFIC = "Improve maintainability in {file}: {issue}"


def files_needing_attention(result: AnalysisResult, limit: int) -> List[FileMetric]:
    """The first ``limit`` files with at least one issue, in discovery order."""
    return [m for m in result.details if m.issues][:limit]


def generate_recommendations(
    result: AnalysisResult, thresholds: Optional[RecommendationThresholds] = None
) -> List[str]:
    """Evaluate every rule in fixed order and return all that match."""
    limits = thresholds or DEFAULT_THRESHOLDS
    recommendations = []

    if result.complexity_score > limits.complexity_score:
        recommendations.append(
            DECOMPOSE.format(score=result.complexity_score, limit=limits.complexity_score)
        )
    if result.maintainability_score < limits.maintainability_score:
        recommendations.append(
            DOCUMENT.format(score=result.maintainability_score, limit=limits.maintainability_score)
        )
    if result.duplication.percentage > limits.duplication_percentage:
        recommendations.append(
            EXTRACT_SHARED.format(
                percentage=result.duplication.percentage, limit=limits.duplication_percentage
            )
        )

    for metric in files_needing_attention(result, limits.max_file_recommendations):
        recommendations.append(FILE_SPECIFIC.format(file=metric.file, issue=metric.issues[0]))

    return recommendations
