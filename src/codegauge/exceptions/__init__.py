"""Exception hierarchy for codegauge."""

from .analysis import (
    AnalysisCancelledError,
    AnalysisError,
    AnalysisTimeoutError,
    DecodeError,
    EmptyProjectError,
    NotFoundError,
    UnreadableFileWarning,
)
from .base import CodeGaugeError
from .config import (
    ConfigFileError,
    ConfigurationError,
    InvalidConfigError,
)

__all__ = [
    "CodeGaugeError",
    "AnalysisError",
    "NotFoundError",
    "EmptyProjectError",
    "UnreadableFileWarning",
    "DecodeError",
    "AnalysisTimeoutError",
    "AnalysisCancelledError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
]
