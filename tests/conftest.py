"""Shared fixtures for mdoc tests."""
import shutil
import subprocess
import threading
from pathlib import Path

import pytest


class FakeResolver:
    """Include resolver returning canned include lists."""

    def __init__(self, includes=None, failing=(), available=True):
        self.includes = {Path(k): [Path(p) for p in v] for k, v in (includes or {}).items()}
        self.failing = {Path(p) for p in failing}
        self.available = available
        self.calls = []
        self._lock = threading.Lock()

    def is_available(self):
        return self.available

    def resolve(self, filepath):
        with self._lock:
            self.calls.append(Path(filepath))
        if Path(filepath) in self.failing:
            raise RuntimeError(f"parser crashed on {filepath}")
        return list(self.includes.get(Path(filepath), []))


def init_repo(path: Path) -> Path:
    """Turn a directory into an empty git work tree."""
    subprocess.run(['git', 'init', '-q'], cwd=path, capture_output=True, check=True)
    return path.resolve()


@pytest.fixture(autouse=True)
def isolate_from_enclosing_repo(tmp_path, monkeypatch):
    """Keep git from discovering a repository above the temp directory."""
    monkeypatch.setenv('GIT_CEILING_DIRECTORIES', str(tmp_path.resolve()))


@pytest.fixture
def doc_tree(tmp_path):
    """
    A documentation tree without version control:

        master.adoc        includes intro.adoc
        intro.adoc
        extra.adoc         included by nothing
    """
    root = tmp_path / 'docs'
    root.mkdir()
    (root / 'master.adoc').write_text('= Guide\n\ninclude::intro.adoc[]\n')
    (root / 'intro.adoc').write_text('== Introduction\n')
    (root / 'extra.adoc').write_text('== Extra\n')
    return root.resolve()


@pytest.fixture
def doc_repo(doc_tree):
    """The documentation tree as a git work tree."""
    if shutil.which('git') is None:
        pytest.skip("git is not installed")
    return init_repo(doc_tree)


@pytest.fixture
def scenario_resolver(doc_tree):
    """Resolver for doc_tree: master.adoc includes intro.adoc."""
    return FakeResolver({doc_tree / 'master.adoc': [doc_tree / 'intro.adoc']})


@pytest.fixture
def make_resolver():
    """Factory for FakeResolver instances."""
    return FakeResolver
