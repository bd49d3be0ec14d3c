from __future__ import annotations

from pathlib import Path


class TaskTrackError(Exception):
    """Base class for every failure reported to the user as a one-line message."""


class StorageError(TaskTrackError):
    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class DecodeError(TaskTrackError):
    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"malformed tasks file {path}: {message}")
        self.path = path


class NotFoundError(TaskTrackError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"task with ID {task_id} not found")
        self.task_id = task_id


class ValidationError(TaskTrackError, ValueError):
    pass
