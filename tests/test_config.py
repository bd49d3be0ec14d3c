import logging
from pathlib import Path

from tasktrack.cli import main
from tasktrack.config import default_tasks_path, log_level_from_env


def test_default_path_is_tasks_json_in_cwd(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("TASKTRACK_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    assert default_tasks_path() == (tmp_path / "tasks.json").resolve()


def test_env_var_overrides_default_path(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TASKTRACK_FILE", str(tmp_path / "x" / "mine.json"))
    assert default_tasks_path() == (tmp_path / "x" / "mine.json").resolve()


def test_add_without_config_writes_cwd_tasks_json(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.delenv("TASKTRACK_FILE", raising=False)
    monkeypatch.delenv("TASKTRACK_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)

    assert main(["add", "here"]) == 0
    assert (tmp_path / "tasks.json").exists()
    assert '"description": "here"' in (tmp_path / "tasks.json").read_text(encoding="utf-8")


def test_log_level_from_env(monkeypatch):
    monkeypatch.delenv("TASKTRACK_LOG_LEVEL", raising=False)
    assert log_level_from_env() == logging.WARNING
    assert log_level_from_env(logging.ERROR) == logging.ERROR

    monkeypatch.setenv("TASKTRACK_LOG_LEVEL", "DEBUG")
    assert log_level_from_env() == logging.DEBUG

    monkeypatch.setenv("TASKTRACK_LOG_LEVEL", " info ")
    assert log_level_from_env() == logging.INFO


def test_log_level_from_env_ignores_bogus_names(monkeypatch):
    monkeypatch.setenv("TASKTRACK_LOG_LEVEL", "LOUD")
    assert log_level_from_env() == logging.WARNING

    monkeypatch.setenv("TASKTRACK_LOG_LEVEL", "")
    assert log_level_from_env(logging.INFO) == logging.INFO


def test_env_log_level_reaches_stderr(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TASKTRACK_FILE", raising=False)
    monkeypatch.setenv("TASKTRACK_LOG_LEVEL", "DEBUG")
    assert main(["list"]) == 0
    assert "tasktrack.store" in capsys.readouterr().err
