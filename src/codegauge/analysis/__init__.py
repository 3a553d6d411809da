"""Analysis orchestration, aggregation and recommendations."""

from .aggregator import aggregate, health_label, mean_score, overall_score
from .engine import AnalysisEngine, run_analysis
from .recommendations import files_needing_attention, generate_recommendations

__all__ = [
    "AnalysisEngine",
    "run_analysis",
    "aggregate",
    "health_label",
    "mean_score",
    "overall_score",
    "files_needing_attention",
    "generate_recommendations",
]
