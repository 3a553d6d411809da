"""Tests for analysis/recommendations.py - rule order and file ranking."""

from codegauge.analysis import aggregate, files_needing_attention, generate_recommendations
from codegauge.config import RecommendationThresholds
from codegauge.models import DuplicationSummary, FileMetric


def _metric(file, complexity=10.0, maintainability=80.0, issues=()):
    return FileMetric(
        file=file,
        complexity=complexity,
        maintainability=maintainability,
        line_count=10,
        issues=tuple(issues),
    )


def _result(metrics, duplication_percentage=0.0):
    return aggregate(
        metrics,
        DuplicationSummary(percentage=duplication_percentage),
        total_files=len(metrics),
    )


class TestProjectRules:
    def test_healthy_project_has_no_recommendations(self):
        assert generate_recommendations(_result([_metric("a.ts")])) == []

    def test_complexity_rule(self):
        recs = generate_recommendations(_result([_metric("a.ts", complexity=71.0)]))
        assert len(recs) == 1
        assert recs[0].startswith("Break down complex functions")

    def test_complexity_threshold_is_exclusive(self):
        assert generate_recommendations(_result([_metric("a.ts", complexity=70.0)])) == []

    def test_maintainability_rule(self):
        recs = generate_recommendations(_result([_metric("a.ts", maintainability=64.0)]))
        assert len(recs) == 1
        assert recs[0].startswith("Improve documentation")

    def test_duplication_rule(self):
        recs = generate_recommendations(_result([_metric("a.ts")], duplication_percentage=15.5))
        assert len(recs) == 1
        assert recs[0].startswith("Extract duplicated code into shared utilities")
        assert "15.5%" in recs[0]

    def test_all_rules_in_fixed_order(self):
        result = _result(
            [_metric("a.ts", complexity=90.0, maintainability=10.0, issues=["No comments in 40 lines"])],
            duplication_percentage=30.0,
        )
        recs = generate_recommendations(result)
        assert recs[0].startswith("Break down")
        assert recs[1].startswith("Improve documentation")
        assert recs[2].startswith("Extract duplicated code")
        assert recs[3] == "Improve maintainability in a.ts: No comments in 40 lines"

    def test_custom_thresholds(self):
        thresholds = RecommendationThresholds(complexity_score=5)
        recs = generate_recommendations(_result([_metric("a.ts")]), thresholds)
        assert recs[0].startswith("Break down")


class TestFileRecommendations:
    def test_first_three_flagged_files_in_discovery_order(self):
        metrics = [
            _metric("a.ts", maintainability=90.0, issues=["issue a"]),
            _metric("b.ts", maintainability=80.0, issues=["issue b", "second b"]),
            _metric("c.ts", maintainability=70.0, issues=["issue c"]),
            _metric("d.ts", maintainability=66.0, issues=["issue d"]),
            _metric("e.ts", maintainability=60.0),
        ]
        recs = generate_recommendations(_result(metrics))
        assert recs == [
            "Improve maintainability in a.ts: issue a",
            "Improve maintainability in b.ts: issue b",
            "Improve maintainability in c.ts: issue c",
        ]

    def test_unflagged_files_do_not_take_a_slot(self):
        metrics = [
            _metric("a.ts", maintainability=10.0),
            _metric("b.ts", issues=["issue b"]),
        ]
        ranked = files_needing_attention(_result(metrics), limit=1)
        assert [m.file for m in ranked] == ["b.ts"]

    def test_order_ignores_maintainability(self):
        metrics = [
            _metric("z.ts", maintainability=90.0, issues=["z"]),
            _metric("a.ts", maintainability=20.0, issues=["a"]),
        ]
        ranked = files_needing_attention(_result(metrics), limit=3)
        assert [m.file for m in ranked] == ["z.ts", "a.ts"]

    def test_files_without_issues_never_listed(self):
        ranked = files_needing_attention(_result([_metric("a.ts", maintainability=1.0)]), limit=3)
        assert ranked == []

    def test_limit_configurable(self):
        metrics = [_metric(f"{c}.ts", issues=["x"]) for c in "abcde"]
        thresholds = RecommendationThresholds(max_file_recommendations=5)
        recs = generate_recommendations(_result(metrics), thresholds)
        assert len(recs) == 5
