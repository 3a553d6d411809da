"""JSON formatter for codegauge."""

import json

from ..models import AnalysisResult
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the wire shape plus overall score, health and recommendations."""

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result))

    def format(self, result: AnalysisResult) -> str:
        return json.dumps(result.to_report(), indent=2)
