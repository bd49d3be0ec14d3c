from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """
    cli.main() installs a stderr handler on the root logger; put the
    original handlers back so one test's captured stream doesn't leak.
    """
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture()
def tasks_file(tmp_path, monkeypatch):
    path = tmp_path / "tasks.json"
    monkeypatch.setenv("TASKTRACK_FILE", str(path))
    monkeypatch.delenv("TASKTRACK_LOG_LEVEL", raising=False)
    return path
