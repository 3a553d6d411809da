"""Tests for the public API."""

import asyncio

import pytest

import codegauge
from codegauge import AnalysisConfig, analyze, analyze_async
from codegauge.analysis.engine import AnalysisEngine
from codegauge.exceptions import AnalysisCancelledError, EmptyProjectError, NotFoundError


class TestAnalyze:
    def test_returns_result_with_recommendations(self, scenario_project):
        result = analyze(scenario_project)
        assert result.overview.total_files == 4
        assert result.recommendations
        assert result.to_report()["overallScore"] == result.overall_score

    def test_accepts_string_path(self, scenario_project):
        assert analyze(str(scenario_project)).overview.total_files == 4

    def test_keyword_overrides(self, scenario_project):
        result = analyze(scenario_project, min_duplicate_lines=10, workers=1)
        assert result.duplication.instances == ()

    def test_explicit_config(self, scenario_project):
        result = analyze(scenario_project, config=AnalysisConfig(min_duplicate_lines=10))
        assert result.duplication.instances == ()

    def test_explicit_config_extensions(self, scenario_project):
        with pytest.raises(EmptyProjectError):
            analyze(scenario_project, config=AnalysisConfig(extensions=(".js",)))

    def test_config_and_overrides_conflict(self, scenario_project):
        with pytest.raises(TypeError):
            analyze(scenario_project, config=AnalysisConfig(), workers=2)

    def test_missing_root(self, tmp_path):
        with pytest.raises(NotFoundError):
            analyze(tmp_path / "missing")

    def test_package_exports(self):
        assert codegauge.__version__
        assert codegauge.analyze is analyze


class TestAnalyzeAsync:
    def test_matches_sync_result(self, scenario_project):
        sync_result = analyze(scenario_project)
        async_result = asyncio.run(analyze_async(scenario_project))
        assert async_result.to_dict() == sync_result.to_dict()

    def test_errors_propagate(self, tmp_path):
        with pytest.raises(NotFoundError):
            asyncio.run(analyze_async(tmp_path / "missing"))

    def test_cancelling_task_stops_engine(self, scenario_project, monkeypatch):
        started = []

        def blocking_process(self, root, rel_path):
            started.append(self.cancel_event)
            self.cancel_event.wait(10)
            raise AnalysisCancelledError(self.root_dir)

        monkeypatch.setattr(AnalysisEngine, "_process", blocking_process)

        async def run_and_cancel():
            task = asyncio.create_task(analyze_async(scenario_project))
            while not started:
                await asyncio.sleep(0.01)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(run_and_cancel())
        assert started[0].is_set()
