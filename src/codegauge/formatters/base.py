"""Base formatter interface for codegauge output rendering."""

from abc import ABC, abstractmethod

from ..models import AnalysisResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: AnalysisResult) -> None:
        """Render the result to stdout."""

    @abstractmethod
    def format(self, result: AnalysisResult) -> str:
        """Return formatted string representation of the result."""
