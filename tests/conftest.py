"""Shared test fixtures for codegauge tests."""

import os
from pathlib import Path

import pytest

from codegauge.config import ENV_PREFIX


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user/project config files and CODEGAUGE_* variables out of tests."""
    home = tmp_path / "home"
    cwd = tmp_path / "cwd"
    home.mkdir()
    cwd.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(cwd)
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    return cwd


def write_project(root: Path, files: dict) -> Path:
    """Materialize ``{relative path: text or bytes}`` under ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for rel_path, content in files.items():
        target = root / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_project(tmp_path):
    """Factory building a project tree under tmp_path/project."""

    def _make(files: dict, name: str = "project") -> Path:
        return write_project(tmp_path / name, files)

    return _make


SIMPLE_TS = """\
// Small arithmetic helpers.

export function add(a: number, b: number): number {
  return a + b;
}

export function subtract(a: number, b: number): number {
  return a - b;
}

export function multiply(a: number, b: number): number {
  return a * b;
}
"""

COMPLEX_TS = """\
export function classify(x: number, items: number[]): string {
  if (x > 10) { if (x > 20) { return "huge"; } }
  for (const i of items) { if (i === x) { return "found"; } }
  while (x < 0) { x++; }
  switch (x) { case 1: return "one"; default: break; }
  if (x === 5) { return "five"; } else if (x === 6) { return "six"; }
  return "other";
}
"""

DUPLICATE_TS = """\
export function formatUser(user: any): string {
  const first = user.first.trim();
  const last = user.last.trim();
  const label = `${first} ${last}`;
  return label + " (" + user.age + ")";
}
"""

DUPLICATE2_TS = """\
export function describePerson(user: any): string {
  const first = user.first.trim();
  const last = user.last.trim();
  const label = `${first} ${last}`;
  return label + " (" + user.age + ")";
}
"""

SCENARIO_FILES = {
    "simple.ts": SIMPLE_TS,
    "complex.ts": COMPLEX_TS,
    "duplicate.ts": DUPLICATE_TS,
    "duplicate2.ts": DUPLICATE2_TS,
}


@pytest.fixture
def scenario_project(make_project):
    """Four files: trivial, branch-dense, and two sharing one helper body."""
    return make_project(SCENARIO_FILES)
