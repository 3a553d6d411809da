"""Per-file structural metrics."""

from .extractor import IssueRules, MetricExtractor, density_score

__all__ = ["IssueRules", "MetricExtractor", "density_score"]
