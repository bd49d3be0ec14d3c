from __future__ import annotations

import logging
import os
from pathlib import Path

TASKS_FILENAME = "tasks.json"


def default_tasks_path() -> Path:
    """
    Default tasks file:
      ./tasks.json (current working directory)

    Override with TASKTRACK_FILE env var or --file CLI option.
    """
    env = os.getenv("TASKTRACK_FILE")
    if env:
        return Path(env).expanduser().resolve()

    return (Path.cwd() / TASKS_FILENAME).resolve()


def log_level_from_env(default: int = logging.WARNING) -> int:
    raw = os.getenv("TASKTRACK_LOG_LEVEL")
    if not raw:
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default
