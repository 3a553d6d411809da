"""Metric extraction: structural complexity and maintainability per file.

Both metrics are densities over the file's line count:

    complexity      = min(100, (1 + branches) / lines * 100)
    maintainability = min(100, (comments + functions) / lines * 100)

Counting happens on the tree-sitter syntax tree, so keywords inside
strings or comments never count. A zero-line file scores 0 on both.

The same pass collects function bodies as normalized duplication
fragments, so each file is parsed exactly once.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Optional

from ..logging_config import get_logger
from ..models import FileExtraction, FileMetric, Fragment, FunctionSpan, SourceFile
from ..scanning.languages import detect_language
from ..scanning.treesitter_parser import TreeSitterParser
from .nodes import (
    ATOMIC_TOKEN_TYPES,
    BINDING_PARENT_TYPES,
    BODY_TYPE,
    BRANCH_TYPES,
    COMMENT_TYPES,
    DECLARATION_TYPES,
    FUNCTION_EXPRESSION_TYPES,
    FUNCTION_TYPES,
)

logger = get_logger(__name__)

ANONYMOUS = "<anonymous>"


@dataclass(frozen=True)
class IssueRules:
    """Limits beyond which a file gets a maintainability issue."""

    max_complexity: float = 70.0
    max_function_lines: int = 50
    max_nesting_depth: int = 4
    min_lines_for_comment_check: int = 20


def density_score(count: int, line_count: int) -> float:
    """Scale ``count`` per line to [0, 100]."""
    if line_count <= 0:
        return 0.0
    return min(100.0, count / line_count * 100)


@dataclass
class _Counts:
    branches: int = 0
    comments: int = 0
    functions: int = 0
    max_nesting: int = 0
    has_error: bool = False


class MetricExtractor:
    """Computes a FileMetric (and duplication fragments) for one file.

    Safe to share across threads: parsers are thread-local and the
    extractor holds no per-file state.
    """

    def __init__(
        self,
        rules: Optional[IssueRules] = None,
        min_fragment_lines: int = 1,
        parser: Optional[TreeSitterParser] = None,
    ):
        self.rules = rules or IssueRules()
        self.min_fragment_lines = min_fragment_lines
        self.parser = parser or TreeSitterParser()

    def extract_metric(self, source: SourceFile) -> FileMetric:
        """Compute the metric for one file."""
        return self.extract(source).metric

    def extract(self, source: SourceFile) -> FileExtraction:
        """Compute the metric and the candidate duplication fragments."""
        if source.line_count == 0:
            return FileExtraction(
                metric=FileMetric(
                    file=source.path, complexity=0.0, maintainability=0.0, line_count=0
                )
            )

        language = detect_language(source.path)
        if language is None:
            raise ValueError(f"No grammar for {source.path}")

        code = source.text.encode("utf-8")
        tree = self.parser.parse(code, language)

        counts = _Counts(has_error=tree.root_node.has_error)
        spans: list[FunctionSpan] = []
        bodies = []
        tokens: list[tuple[int, int, str]] = []

        # Iterative pre-order walk carrying branch nesting depth and whether
        # the node still emits normalization tokens (not inside a literal).
        stack = [(tree.root_node, 0, True)]
        while stack:
            node, depth, emit = stack.pop()
            node_type = node.type

            if node_type in COMMENT_TYPES:
                counts.comments += 1
                continue

            if node.child_count == 0 or (emit and node_type in ATOMIC_TOKEN_TYPES):
                if emit:
                    token = _token_text(code, node)
                    if token:
                        tokens.append((node.start_byte, node.start_point[0], token))
                    emit = False
                if node.child_count == 0:
                    continue

            child_depth = depth
            if node_type in BRANCH_TYPES:
                counts.branches += 1
                chained_else_if = (
                    node_type == "if_statement"
                    and node.parent is not None
                    and node.parent.type == "else_clause"
                )
                child_depth = depth if chained_else_if else depth + 1
                counts.max_nesting = max(counts.max_nesting, child_depth)
            elif node_type in FUNCTION_TYPES:
                if _is_declaration(node):
                    counts.functions += 1
                spans.append(
                    FunctionSpan(
                        name=_function_name(code, node),
                        start_line=node.start_point[0] + 1,
                        end_line=node.end_point[0] + 1,
                    )
                )
                body = node.child_by_field_name("body")
                if body is not None and body.type == BODY_TYPE:
                    bodies.append(body)
                # Branch nesting restarts inside a nested function.
                child_depth = 0

            for child in reversed(node.children):
                stack.append((child, child_depth, emit))

        fragments = self._fragments(source.path, bodies, tokens)

        complexity = density_score(1 + counts.branches, source.line_count)
        maintainability = density_score(counts.comments + counts.functions, source.line_count)
        metric = FileMetric(
            file=source.path,
            complexity=complexity,
            maintainability=maintainability,
            line_count=source.line_count,
            branch_count=counts.branches,
            comment_count=counts.comments,
            function_count=counts.functions,
            max_nesting=counts.max_nesting,
            issues=tuple(self._issues(source.line_count, complexity, counts, spans)),
        )
        return FileExtraction(metric=metric, fragments=tuple(fragments))

    def _fragments(self, path: str, bodies: list, tokens: list[tuple[int, int, str]]) -> list[Fragment]:
        """Normalize each function body: one line per source row, tokens
        joined by single spaces, outer braces and comments dropped."""
        starts = [t[0] for t in tokens]
        fragments = []
        for body in bodies:
            # Tokens strictly between the opening and closing brace.
            lo = bisect_right(starts, body.start_byte)
            hi = bisect_left(starts, body.end_byte - 1)
            rows: list[str] = []
            current_row = None
            for _, row, token in tokens[lo:hi]:
                if row == current_row:
                    rows[-1] = f"{rows[-1]} {token}"
                else:
                    rows.append(token)
                    current_row = row
            if len(rows) < self.min_fragment_lines:
                continue
            fragments.append(
                Fragment(
                    file=path,
                    start_byte=body.start_byte,
                    end_byte=body.end_byte,
                    start_line=body.start_point[0] + 1,
                    text="\n".join(rows),
                )
            )
        return fragments

    def _issues(
        self, line_count: int, complexity: float, counts: _Counts, spans: list[FunctionSpan]
    ) -> list[str]:
        rules = self.rules
        issues = []
        if complexity > rules.max_complexity:
            issues.append(f"High branch density: {counts.branches} branches in {line_count} lines")
        for span in sorted(spans, key=lambda s: (s.start_line, s.name)):
            if span.lines > rules.max_function_lines:
                issues.append(
                    f"Function '{span.name}' spans {span.lines} lines "
                    f"(limit {rules.max_function_lines})"
                )
        if counts.max_nesting > rules.max_nesting_depth:
            issues.append(
                f"Branches nested {counts.max_nesting} levels deep "
                f"(limit {rules.max_nesting_depth})"
            )
        if line_count >= rules.min_lines_for_comment_check and counts.comments == 0:
            issues.append(f"No comments in {line_count} lines")
        if counts.has_error:
            issues.append("File contains syntax errors; metrics may be incomplete")
        return issues


def _token_text(code: bytes, node) -> str:
    text = code[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
    return " ".join(text.split())


def _is_declaration(node) -> bool:
    if node.type in DECLARATION_TYPES:
        return True
    return (
        node.type in FUNCTION_EXPRESSION_TYPES
        and node.parent is not None
        and node.parent.type in BINDING_PARENT_TYPES
    )


def _function_name(code: bytes, node) -> str:
    name_node = node.child_by_field_name("name")
    if name_node is None and node.parent is not None:
        parent = node.parent
        if parent.type in BINDING_PARENT_TYPES:
            name_node = parent.child_by_field_name("name")
        elif parent.type == "pair":
            name_node = parent.child_by_field_name("key")
        elif parent.type == "assignment_expression":
            name_node = parent.child_by_field_name("left")
    if name_node is None:
        return ANONYMOUS
    return code[name_node.start_byte : name_node.end_byte].decode("utf-8", errors="replace")
