from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import repository, store
from .config import default_tasks_path, log_level_from_env
from .errors import TaskTrackError, ValidationError
from .logging_setup import setup_logging
from .models import Task, TaskStatus

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _parse_id(raw: str) -> int:
    try:
        task_id = int(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid task ID '{raw}'.") from e
    if task_id < 1:
        raise argparse.ArgumentTypeError(f"Invalid task ID '{raw}'. IDs are positive integers.")
    return task_id


def _parse_status(raw: str) -> TaskStatus:
    try:
        return TaskStatus.parse(raw)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _tasks_path_from_args(ns: argparse.Namespace) -> Path:
    if getattr(ns, "file", None):
        return Path(ns.file).expanduser().resolve()
    return default_tasks_path()


def _fmt_time(ts) -> str:
    return ts.astimezone().strftime(TIME_FORMAT)


def _print_tasks(tasks: list[Task], status: Optional[TaskStatus]) -> None:
    if not tasks:
        print(f"No tasks found with status: {status or 'all'}")
        return
    print("--- Task List ---")
    for t in tasks:
        print(f"[ID: {t.id}] [{t.status}] {t.description}")
        print(f"  Created: {_fmt_time(t.created_at)} | Updated: {_fmt_time(t.updated_at)}")
    print("-----------------")


def cmd_add(ns: argparse.Namespace) -> int:
    path = _tasks_path_from_args(ns)
    tasks, task = repository.add_task(store.load(path), ns.description)
    store.save(path, tasks)
    print(f"Task added successfully (ID: {task.id})")
    return 0


def cmd_update(ns: argparse.Namespace) -> int:
    path = _tasks_path_from_args(ns)
    tasks, task = repository.update_task(store.load(path), ns.task_id, ns.description)
    store.save(path, tasks)
    print(f"Task ID {task.id} updated successfully")
    return 0


def cmd_delete(ns: argparse.Namespace) -> int:
    path = _tasks_path_from_args(ns)
    tasks, task = repository.delete_task(store.load(path), ns.task_id)
    store.save(path, tasks)
    print(f"Task ID {task.id} deleted successfully")
    return 0


def cmd_mark(ns: argparse.Namespace) -> int:
    path = _tasks_path_from_args(ns)
    tasks, task = repository.mark_task(store.load(path), ns.task_id, ns.status)
    store.save(path, tasks)
    print(f"Task ID {task.id} marked as {task.status}.")
    return 0


def cmd_list(ns: argparse.Namespace) -> int:
    path = _tasks_path_from_args(ns)
    tasks = repository.list_tasks(store.load(path), ns.status)
    _print_tasks(tasks, ns.status)
    return 0


def _common_options(top_level: bool) -> argparse.ArgumentParser:
    # Sub-commands repeat these with SUPPRESS defaults so they don't
    # overwrite values given before the command word.
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument(
        "--file",
        default=None if top_level else argparse.SUPPRESS,
        help="Path to the tasks file (default: ./tasks.json or TASKTRACK_FILE env var)",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0 if top_level else argparse.SUPPRESS,
        help="Log more to stderr (-v for info, -vv for debug).",
    )
    return p


def build_parser() -> argparse.ArgumentParser:
    statuses = ", ".join(s.value for s in TaskStatus)
    p = argparse.ArgumentParser(
        prog="task",
        description="Track personal tasks in a local JSON file.",
        parents=[_common_options(top_level=True)],
    )
    common = [_common_options(top_level=False)]
    sub = p.add_subparsers(dest="cmd", metavar="<command>", required=True)

    s = sub.add_parser("add", parents=common, help="Add a new task.")
    s.add_argument(
        "description", help="Task description, taken literally even if it starts with '-'."
    )
    s.set_defaults(func=cmd_add)

    s = sub.add_parser("update", parents=common, help="Update a task's description.")
    s.add_argument("task_id", type=_parse_id, metavar="id", help="Task ID.")
    s.add_argument("description", help="New description, taken literally.")
    s.set_defaults(func=cmd_update)

    s = sub.add_parser("delete", parents=common, help="Delete a task.")
    s.add_argument("task_id", type=_parse_id, metavar="id", help="Task ID.")
    s.set_defaults(func=cmd_delete)

    s = sub.add_parser("mark", parents=common, help=f"Mark a task with a status ({statuses}).")
    s.add_argument("status", type=_parse_status, help=f"New status ({statuses}).")
    s.add_argument("task_id", type=_parse_id, metavar="id", help="Task ID.")
    s.set_defaults(func=cmd_mark)

    s = sub.add_parser(
        "list", parents=common, help=f"List all tasks or filter by status ({statuses})."
    )
    s.add_argument("status", type=_parse_status, nargs="?", help="Only tasks with this status.")
    s.set_defaults(func=cmd_list)

    return p


# Position of the description token after the command word.
_DESCRIPTION_OFFSET = {"add": 1, "update": 2}


def _literal_descriptions(argv: list[str]) -> list[str]:
    """
    Insert "--" before a description that starts with "-", so
    `task add -urgent` adds a task instead of failing on an unknown option.
    Help flags in that slot still show help.
    """
    args = list(argv)
    i = 0
    while i < len(args) and args[i].startswith("-") and args[i] != "--":
        i += 2 if args[i] == "--file" else 1
    if i >= len(args) or args[i] not in _DESCRIPTION_OFFSET:
        return args

    j = i + _DESCRIPTION_OFFSET[args[i]]
    if j < len(args) and args[j].startswith("-") and args[j] not in ("--", "-h", "--help"):
        if "--" not in args[i + 1 : j]:
            args.insert(j, "--")
    return args


def _log_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return log_level_from_env()


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    ns = parser.parse_args(_literal_descriptions(argv))

    setup_logging(_log_level(ns.verbose))
    logger.debug("Running command %r", ns.cmd)
    try:
        return int(ns.func(ns))
    except TaskTrackError as e:
        logger.info("Command %r failed: %s", ns.cmd, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
