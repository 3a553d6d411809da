"""Tests for scanning/discovery.py - project walking and pruning."""

import logging
import os
from pathlib import Path

import pytest

from codegauge.config import DEFAULT_EXTENSIONS
from codegauge.exceptions import EmptyProjectError, NotFoundError
from codegauge.scanning import FileDiscovery, discover_files


class TestDiscoverFiles:
    """Eligible files, ordering and pruning."""

    def test_recognized_extensions_only(self, make_project):
        root = make_project(
            {
                "a.ts": "let a = 1;\n",
                "b.tsx": "let b = 1;\n",
                "c.js": "let c = 1;\n",
                "d.jsx": "let d = 1;\n",
                "README.md": "# readme\n",
                "style.css": "a {}\n",
            }
        )
        assert discover_files(root, DEFAULT_EXTENSIONS) == ["a.ts", "b.tsx", "c.js", "d.jsx"]

    def test_extension_match_is_case_insensitive(self, make_project):
        root = make_project({"Upper.TS": "let a = 1;\n"})
        assert discover_files(root, DEFAULT_EXTENSIONS) == ["Upper.TS"]

    def test_sorted_posix_relative_paths(self, make_project):
        root = make_project(
            {
                "src/z.ts": "let z = 1;\n",
                "src/lib/util.ts": "let u = 1;\n",
                "index.ts": "let i = 1;\n",
                "a/b.ts": "let b = 1;\n",
            }
        )
        assert discover_files(root, DEFAULT_EXTENSIONS) == [
            "a/b.ts",
            "index.ts",
            "src/lib/util.ts",
            "src/z.ts",
        ]

    def test_dot_directories_are_pruned(self, make_project):
        root = make_project(
            {
                "index.ts": "let i = 1;\n",
                ".git/hooks/x.ts": "let x = 1;\n",
                ".cache/deep/nested/y.js": "let y = 1;\n",
                "src/.hidden/z.ts": "let z = 1;\n",
            }
        )
        assert discover_files(root, DEFAULT_EXTENSIONS) == ["index.ts"]

    def test_excluded_directory_names_are_pruned(self, make_project):
        root = make_project(
            {
                "index.ts": "let i = 1;\n",
                "node_modules/pkg/index.js": "let p = 1;\n",
                "packages/app/node_modules/dep.js": "let d = 1;\n",
            }
        )
        files = discover_files(root, DEFAULT_EXTENSIONS, exclude_dirs=("node_modules",))
        assert files == ["index.ts"]

    def test_streaming_yields_same_set_as_discover(self, make_project):
        root = make_project({"b/x.ts": "1;\n", "a.ts": "1;\n", "c/d/e.js": "1;\n"})
        discovery = FileDiscovery(root, DEFAULT_EXTENSIONS)
        assert sorted(discovery.iter_source_files()) == discovery.discover()


class TestDiscoveryErrors:
    """Missing roots and empty projects."""

    def test_missing_root_raises_not_found(self, tmp_path):
        with pytest.raises(NotFoundError) as exc_info:
            discover_files(tmp_path / "missing", DEFAULT_EXTENSIONS)
        assert exc_info.value.path == tmp_path / "missing"

    def test_file_as_root_raises_not_found(self, tmp_path):
        target = tmp_path / "file.ts"
        target.write_text("let a = 1;\n")
        with pytest.raises(NotFoundError) as exc_info:
            discover_files(target, DEFAULT_EXTENSIONS)
        assert exc_info.value.reason == "Path is not a directory"

    def test_no_eligible_files_raises_empty_project(self, make_project):
        root = make_project({"notes.txt": "nothing here\n", ".git/a.ts": "let a = 1;\n"})
        with pytest.raises(EmptyProjectError) as exc_info:
            discover_files(root, DEFAULT_EXTENSIONS)
        assert "no analyzable files found" in str(exc_info.value)


def _deny_listing(monkeypatch, name):
    """Make ``os.scandir`` fail with EACCES for directories called ``name``."""
    real_scandir = os.scandir

    def scandir(path="."):
        if Path(path).name == name:
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)


class TestUnreadableDirectories:
    def test_unreadable_subdirectory_skipped_with_warning(self, make_project, monkeypatch, caplog):
        root = make_project(
            {
                "index.ts": "export const a = 1;\n",
                "locked/secret.ts": "export const b = 2;\n",
                "src/util.ts": "export const c = 3;\n",
            }
        )
        _deny_listing(monkeypatch, "locked")
        caplog.set_level(logging.WARNING, logger="codegauge")

        assert discover_files(root, DEFAULT_EXTENSIONS) == ["index.ts", "src/util.ts"]
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Skipping unreadable directory" in warnings[0]
        assert "locked" in warnings[0]

    def test_unreadable_root_raises_not_found(self, make_project, monkeypatch):
        root = make_project({"index.ts": "export const a = 1;\n"}, name="sealed")
        _deny_listing(monkeypatch, "sealed")
        with pytest.raises(NotFoundError) as exc_info:
            discover_files(root, DEFAULT_EXTENSIONS)
        assert "Cannot list directory" in exc_info.value.reason
