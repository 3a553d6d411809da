"""AnalysisEngine: discover, extract, detect duplication, aggregate, recommend.

Files are dispatched to a thread pool as discovery finds them. Results are
keyed by path and re-ordered by discovery order afterwards, so the output
never depends on completion order. The duplication index is built by this
thread alone once every file has been extracted.

A run either returns a complete AnalysisResult or raises; there is no
partial result.
"""

from __future__ import annotations

import os
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional

from ..config import AnalysisConfig
from ..duplication import detect_duplicates
from ..exceptions import (
    AnalysisCancelledError,
    AnalysisTimeoutError,
    EmptyProjectError,
    UnreadableFileWarning,
)
from ..logging_config import get_logger
from ..metrics import IssueRules, MetricExtractor
from ..models import AnalysisResult, FileExtraction
from ..scanning.discovery import FileDiscovery
from ..scanning.reader import read_source_file
from .aggregator import aggregate
from .recommendations import generate_recommendations

logger = get_logger(__name__)

# CPU count capped at 8 to avoid overwhelming I/O
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)

# How often a waiting run re-checks cancellation
_POLL_SECONDS = 0.1


class AnalysisEngine:
    """Runs one analysis over a project root.

    Args:
        root_dir: Directory holding the project's files
        config: Analysis configuration (defaults apply when None)
        cancel_event: Set by the caller to abort the run
    """

    def __init__(
        self,
        root_dir: "str | Path",
        config: Optional[AnalysisConfig] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.root_dir = Path(root_dir)
        self.config = config or AnalysisConfig()
        self.cancel_event = cancel_event or threading.Event()
        self.discovery = FileDiscovery(
            self.root_dir,
            extensions=self.config.extensions,
            exclude_dirs=self.config.exclude_dirs,
            follow_symlinks=self.config.follow_symlinks,
        )
        self.extractor = MetricExtractor(
            rules=IssueRules(
                max_complexity=self.config.max_complexity,
                max_function_lines=self.config.max_function_lines,
                max_nesting_depth=self.config.max_nesting_depth,
                min_lines_for_comment_check=self.config.min_lines_for_comment_check,
            ),
            min_fragment_lines=self.config.min_duplicate_lines,
        )

    def run(self) -> AnalysisResult:
        """Run the analysis.

        Raises:
            NotFoundError: Root does not exist
            EmptyProjectError: Nothing analyzable was found
            AnalysisTimeoutError: ``timeout_seconds`` elapsed
            AnalysisCancelledError: ``cancel_event`` was set
        """
        started = time.monotonic()
        deadline = None
        if self.config.timeout_seconds is not None:
            deadline = started + self.config.timeout_seconds

        root = self.discovery.validate_root()
        logger.info(f"Analyzing codebase at: {root}")

        extractions, skipped, discovered = self._extract_all(root, deadline)

        if not discovered:
            raise EmptyProjectError(self.root_dir, list(self.config.extensions))
        if not extractions:
            logger.warning(f"All {len(discovered)} discovered files were unreadable")
            raise EmptyProjectError(self.root_dir, list(self.config.extensions))

        metrics = [extractions[path].metric for path in discovered if path in extractions]
        total_lines = sum(m.line_count for m in metrics)

        fragments = [
            fragment
            for path in discovered
            if path in extractions
            for fragment in extractions[path].fragments
        ]
        duplication = detect_duplicates(
            fragments, total_lines, min_lines=self.config.min_duplicate_lines
        )

        result = aggregate(
            metrics,
            duplication,
            total_files=len(discovered),
            skipped_files=[path for path in discovered if path in skipped],
            weights=self.config.weights,
        )
        result = replace(
            result,
            recommendations=tuple(
                generate_recommendations(result, self.config.recommendations)
            ),
        )

        logger.info(
            f"Analyzed {len(metrics)} files ({len(skipped)} skipped, {total_lines} lines) "
            f"in {time.monotonic() - started:.2f}s: overall {result.overall_score} "
            f"({result.health})"
        )
        return result

    def _extract_all(self, root: Path, deadline: Optional[float]):
        """Dispatch read + extract per file while the walk continues.

        Returns:
            (extractions by path, skipped paths, discovered paths sorted)
        """
        workers = self.config.workers or _DEFAULT_WORKERS
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="codegauge")
        futures: Dict[Future, str] = {}
        aborted = False
        try:
            for rel_path in self.discovery.iter_source_files():
                self._check_interrupts(deadline, pending=len(futures))
                futures[executor.submit(self._process, root, rel_path)] = rel_path
            logger.debug(f"Dispatched {len(futures)} files to {workers} workers")

            extractions: Dict[str, FileExtraction] = {}
            skipped: List[str] = []
            pending = set(futures)
            while pending:
                self._check_interrupts(deadline, pending=len(pending))
                timeout = _POLL_SECONDS
                if deadline is not None:
                    timeout = max(0.0, min(timeout, deadline - time.monotonic()))
                done, pending = wait(pending, timeout=timeout, return_when=FIRST_COMPLETED)
                for future in done:
                    rel_path = futures[future]
                    try:
                        extractions[rel_path] = future.result()
                    except UnreadableFileWarning as warning:
                        logger.warning(f"Skipping {rel_path}: {warning.reason}")
                        skipped.append(rel_path)
        except BaseException:
            aborted = True
            raise
        finally:
            executor.shutdown(wait=not aborted, cancel_futures=aborted)

        return extractions, set(skipped), sorted(futures.values())

    def _process(self, root: Path, rel_path: str) -> FileExtraction:
        if self.cancel_event.is_set():
            raise AnalysisCancelledError(self.root_dir)
        source = read_source_file(root, rel_path, self.config.max_file_size_bytes)
        return self.extractor.extract(source)

    def _check_interrupts(self, deadline: Optional[float], pending: int) -> None:
        if self.cancel_event.is_set():
            raise AnalysisCancelledError(self.root_dir)
        if deadline is not None and time.monotonic() >= deadline:
            raise AnalysisTimeoutError(self.config.timeout_seconds, pending)


def run_analysis(
    root_dir: "str | Path",
    config: Optional[AnalysisConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> AnalysisResult:
    """Run one analysis with an explicit configuration."""
    return AnalysisEngine(root_dir, config=config, cancel_event=cancel_event).run()
