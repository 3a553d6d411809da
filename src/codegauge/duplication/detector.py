"""Fingerprint-based duplicate fragment detection.

Fragments (normalized function bodies) are bucketed by a BLAKE2b digest of
their text, so the work is linear in the number of fragments instead of
pairwise across files. A bucket whose fragments come from two or more
distinct files is one duplication instance.

    percentage = min(100, Σ(lines × occurrences) / total_lines × 100)

The index is built by a single writer after all files are extracted.
"""

from __future__ import annotations

import hashlib
from collections import defaultdict
from typing import Dict, Iterable, List

from ..logging_config import get_logger
from ..models import DuplicationInstance, DuplicationSummary, Fragment

logger = get_logger(__name__)

MIN_DUPLICATE_LINES = 4


def fingerprint(text: str) -> str:
    """Content key for a normalized fragment."""
    return hashlib.blake2b(text.encode("utf-8"), digest_size=16).hexdigest()


class FingerprintIndex:
    """Buckets fragments by fingerprint. Not thread-safe; one writer per run."""

    def __init__(self, min_lines: int = MIN_DUPLICATE_LINES):
        self.min_lines = min_lines
        self._buckets: Dict[str, List[Fragment]] = defaultdict(list)
        self.size = 0

    def add(self, fragment: Fragment) -> bool:
        """Index ``fragment``; returns False when it is below the size limit."""
        if fragment.lines < self.min_lines:
            return False
        self._buckets[fingerprint(fragment.text)].append(fragment)
        self.size += 1
        return True

    def add_all(self, fragments: Iterable[Fragment]) -> None:
        for fragment in fragments:
            self.add(fragment)

    def shared_groups(self) -> List[List[Fragment]]:
        """Buckets that span at least two distinct files, largest first."""
        groups = [
            sorted(bucket, key=lambda f: (f.file, f.start_byte))
            for bucket in self._buckets.values()
            if len({f.file for f in bucket}) >= 2
        ]
        groups.sort(key=lambda g: (-g[0].lines, [f.file for f in g], g[0].text))
        return groups


def detect_duplicates(
    fragments: Iterable[Fragment],
    total_lines: int,
    min_lines: int = MIN_DUPLICATE_LINES,
) -> DuplicationSummary:
    """Group fragments into duplication instances and score them.

    An occurrence enclosed by a larger fragment already reported in the
    same file adds no duplicated lines. It still counts toward the
    instance's file set, so an inner callback copied standalone into a
    third file is reported. A group whose every occurrence is enclosed is
    not reported again.

    Args:
        fragments: Candidate fragments from every analyzed file
        total_lines: Sum of analyzed line counts
        min_lines: Smallest fragment (in normalized lines) to report
    """
    index = FingerprintIndex(min_lines)
    index.add_all(fragments)

    reported: Dict[str, List[Fragment]] = defaultdict(list)
    instances: List[DuplicationInstance] = []
    duplicated_lines = 0

    for group in index.shared_groups():
        remaining = [
            frag
            for frag in group
            if not any(outer.encloses(frag) for outer in reported[frag.file])
        ]
        if not remaining:
            continue
        files = sorted({frag.file for frag in group})

        for frag in remaining:
            reported[frag.file].append(frag)

        lines = remaining[0].lines
        instances.append(
            DuplicationInstance(
                files=tuple(files),
                lines=lines,
                fragment=remaining[0].text,
                occurrences=len(group),
            )
        )
        duplicated_lines += lines * len(remaining)

    percentage = 0.0
    if total_lines > 0:
        percentage = round(min(100.0, duplicated_lines / total_lines * 100), 2)

    logger.debug(
        f"Indexed {index.size} fragments: {len(instances)} duplication instances, "
        f"{duplicated_lines} duplicated lines"
    )
    return DuplicationSummary(
        percentage=percentage,
        duplicated_lines=duplicated_lines,
        instances=tuple(instances),
    )
