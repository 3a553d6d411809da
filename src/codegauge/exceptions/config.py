"""Configuration exceptions: config files, environment, values."""

from pathlib import Path
from typing import Any, Optional

from .base import CodeGaugeError


class ConfigurationError(CodeGaugeError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class ConfigFileError(ConfigurationError):
    """Raised when a config file is missing or cannot be parsed."""

    def __init__(self, path: Path, reason: Optional[str] = None):
        details = {"path": str(path)}
        if reason:
            details["reason"] = reason
        super().__init__(f"Invalid config file: {path}", details=details)
        self.path = path
        self.reason = reason
