"""
codegauge - code-quality analysis for TypeScript and JavaScript projects

Walks a project tree, measures branching and documentation density per
file with tree-sitter, finds function bodies duplicated across files and
rolls everything into project scores, a health label and recommendations.
"""

__version__ = "0.1.0"

from .analysis.recommendations import generate_recommendations
from .api import analyze, analyze_async
from .config import AnalysisConfig, RecommendationThresholds, ScoreWeights, load_config
from .models import AnalysisResult, DuplicationInstance, FileMetric

__all__ = [
    "analyze",
    "analyze_async",
    "generate_recommendations",
    "load_config",
    "AnalysisConfig",
    "ScoreWeights",
    "RecommendationThresholds",
    "AnalysisResult",
    "FileMetric",
    "DuplicationInstance",
]
