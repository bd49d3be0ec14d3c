"""
In-memory operations over the loaded task list.

Every function takes the full collection and returns a new list; the input is
never mutated, so a failed operation leaves the caller's list as it was.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from .errors import NotFoundError
from .models import Task, TaskStatus


def _now() -> datetime:
    return datetime.now().astimezone()


def next_id(tasks: list[Task]) -> int:
    return max((t.id for t in tasks), default=0) + 1


def find_task(tasks: list[Task], task_id: int) -> Optional[Task]:
    for t in tasks:
        if t.id == task_id:
            return t
    return None


def _index_of(tasks: list[Task], task_id: int) -> int:
    for i, t in enumerate(tasks):
        if t.id == task_id:
            return i
    raise NotFoundError(task_id)


def _touch(task: Task, now: Optional[datetime], **changes) -> Task:
    # updated_at never goes behind created_at, even if the clock does.
    ts = now or _now()
    if ts < task.created_at:
        ts = task.created_at
    return replace(task, updated_at=ts, **changes)


def add_task(
    tasks: list[Task], description: str, now: Optional[datetime] = None
) -> tuple[list[Task], Task]:
    ts = now or _now()
    task = Task(
        id=next_id(tasks),
        description=description,
        status=TaskStatus.TODO,
        created_at=ts,
        updated_at=ts,
    )
    return [*tasks, task], task


def update_task(
    tasks: list[Task], task_id: int, description: str, now: Optional[datetime] = None
) -> tuple[list[Task], Task]:
    i = _index_of(tasks, task_id)
    updated = _touch(tasks[i], now, description=description)
    return [*tasks[:i], updated, *tasks[i + 1 :]], updated


def delete_task(tasks: list[Task], task_id: int) -> tuple[list[Task], Task]:
    i = _index_of(tasks, task_id)
    return [*tasks[:i], *tasks[i + 1 :]], tasks[i]


def mark_task(
    tasks: list[Task], task_id: int, status: TaskStatus, now: Optional[datetime] = None
) -> tuple[list[Task], Task]:
    """
    Any status may move to any other; there is no enforced workflow order.
    """
    i = _index_of(tasks, task_id)
    updated = _touch(tasks[i], now, status=TaskStatus(status))
    return [*tasks[:i], updated, *tasks[i + 1 :]], updated


def list_tasks(tasks: list[Task], status: Optional[TaskStatus] = None) -> list[Task]:
    if not status:
        return list(tasks)
    return [t for t in tasks if t.status == status]
