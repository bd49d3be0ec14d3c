from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

from .errors import DecodeError, StorageError
from .models import Task, TaskStatus

logger = logging.getLogger(__name__)

# Older files spelled the update key "updatedAT".
_LEGACY_UPDATED_KEY = "updatedAT"

# Older files carry nanosecond fractions; datetime holds microseconds.
_EXTRA_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "description": task.description,
        "status": task.status.value,
        "createdAt": task.created_at.isoformat(),
        "updatedAt": task.updated_at.isoformat(),
    }


def _parse_timestamp(raw: Any, key: str) -> datetime:
    if not isinstance(raw, str):
        raise ValueError(f"'{key}' must be an ISO-8601 string")
    try:
        ts = datetime.fromisoformat(_EXTRA_FRACTION_RE.sub(r"\1", raw, count=1))
    except ValueError as e:
        raise ValueError(f"'{key}' is not an ISO-8601 timestamp: {raw!r}") from e
    # Naive timestamps are taken as local time.
    return ts if ts.tzinfo else ts.astimezone()


def task_from_dict(raw: Any) -> Task:
    """
    Build a Task from one decoded JSON record.

    Raises ValueError describing the first problem found.
    """
    if not isinstance(raw, dict):
        raise ValueError("task record must be an object")

    task_id = raw.get("id")
    if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
        raise ValueError(f"'id' must be a positive integer, got {task_id!r}")

    description = raw.get("description")
    if not isinstance(description, str):
        raise ValueError(f"task {task_id}: 'description' must be a string")

    status = raw.get("status")
    try:
        status = TaskStatus(status)
    except ValueError as e:
        raise ValueError(f"task {task_id}: unknown status {status!r}") from e

    updated_raw = raw.get("updatedAt", raw.get(_LEGACY_UPDATED_KEY))
    return Task(
        id=task_id,
        description=description,
        status=status,
        created_at=_parse_timestamp(raw.get("createdAt"), "createdAt"),
        updated_at=_parse_timestamp(updated_raw, "updatedAt"),
    )


def _is_blank(data: bytes) -> bool:
    return not data.strip() or data[:1] == b"\x00"


def load(path: Path) -> list[Task]:
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        logger.debug("No tasks file at %s, starting empty", path)
        return []
    except OSError as e:
        raise StorageError(path, f"error reading tasks file ({e.strerror or e})") from e

    if _is_blank(data):
        logger.debug("Tasks file %s is empty", path)
        return []

    try:
        doc = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(path, str(e)) from e

    if doc is None:
        return []
    if not isinstance(doc, list):
        raise DecodeError(path, "expected a JSON array of tasks")

    tasks: list[Task] = []
    seen: set[int] = set()
    for i, raw in enumerate(doc):
        try:
            task = task_from_dict(raw)
        except ValueError as e:
            raise DecodeError(path, f"record {i}: {e}") from e
        if task.id in seen:
            raise DecodeError(path, f"duplicate task ID {task.id}")
        seen.add(task.id)
        tasks.append(task)

    logger.debug("Loaded %d task(s) from %s", len(tasks), path)
    return tasks


def save(path: Path, tasks: list[Task]) -> None:
    """
    Overwrite the tasks file with the full collection.

    Not atomic: a crash mid-write or a concurrent invocation can lose data.
    """
    text = json.dumps([task_to_dict(t) for t in tasks], indent=2, ensure_ascii=False) + "\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise StorageError(path, f"error writing tasks file ({e.strerror or e})") from e
    logger.debug("Saved %d task(s) to %s", len(tasks), path)
