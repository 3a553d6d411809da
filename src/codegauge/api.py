"""Public API for codegauge.

Example:
    >>> from codegauge import analyze
    >>>
    >>> result = analyze("/tmp/checkout")
    >>> result.overall_score, result.health
    (74, 'Good')
    >>> result.to_dict()["overview"]["totalFiles"]
    12

    >>> # Awaitable and cancellable
    >>> result = await analyze_async("/tmp/checkout", timeout_seconds=30)
"""

from __future__ import annotations

import asyncio
import threading
from pathlib import Path
from typing import Any, Optional

from .analysis.engine import AnalysisEngine
from .config import AnalysisConfig, load_config
from .logging_config import get_logger, setup_logging
from .models import AnalysisResult

logger = get_logger(__name__)


def _resolve_config(
    config: Optional[AnalysisConfig], config_file: Optional[Path], overrides: dict[str, Any]
) -> AnalysisConfig:
    verbose = overrides.pop("verbose", None)
    quiet = overrides.pop("quiet", None)
    if verbose or quiet:
        setup_logging(verbose=bool(verbose), quiet=bool(quiet))

    if config is not None:
        if overrides or config_file is not None:
            raise TypeError("Pass either an AnalysisConfig or config_file/overrides, not both")
        return config
    return load_config(config_file=config_file, **overrides)


def analyze(
    path: "str | Path",
    config: Optional[AnalysisConfig] = None,
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> AnalysisResult:
    """Analyze the project materialized under ``path``.

    The caller owns ``path``: it must already hold the project's files and
    is responsible for removing it afterwards.

    Args:
        path: Project root
        config: Complete configuration; skips file/env discovery when given
        config_file: Optional explicit TOML config file
        **overrides: Configuration overrides (e.g. ``workers=4``), plus
            ``verbose`` / ``quiet`` to configure logging

    Returns:
        Immutable AnalysisResult including overall score, health label and
        recommendations

    Raises:
        NotFoundError: If ``path`` does not exist
        EmptyProjectError: If no analyzable files are found
        AnalysisTimeoutError: If ``timeout_seconds`` is exceeded
        ConfigurationError: If configuration is invalid
    """
    resolved = _resolve_config(config, config_file, dict(overrides))
    return AnalysisEngine(path, config=resolved).run()


async def analyze_async(
    path: "str | Path",
    config: Optional[AnalysisConfig] = None,
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> AnalysisResult:
    """Awaitable form of :func:`analyze`.

    The run executes in a worker thread. Cancelling the awaiting task
    signals the engine to stop dispatching files; ``asyncio.CancelledError``
    propagates to the awaiter as usual.
    """
    resolved = _resolve_config(config, config_file, dict(overrides))
    cancel_event = threading.Event()
    engine = AnalysisEngine(path, config=resolved, cancel_event=cancel_event)
    try:
        return await asyncio.to_thread(engine.run)
    except asyncio.CancelledError:
        cancel_event.set()
        logger.info(f"Analysis of {path} cancelled")
        raise
