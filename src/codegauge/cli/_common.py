"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    timeout: Optional[float] = None,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if workers is not None:
        overrides["workers"] = workers
    if timeout is not None:
        overrides["timeout_seconds"] = timeout
    return load_config(config_file=config, **overrides)
