from __future__ import annotations

import logging
import sys


class _OwnLogsFilter(logging.Filter):
    """
    Keep stderr usable next to command output:
    - tasktrack.* records pass at the configured level
    - anything else (third-party, py.warnings) only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "tasktrack" or record.name.startswith("tasktrack."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(level: int = logging.WARNING) -> None:
    """
    Configure a single stderr handler on the root logger.

    Call this once, from main(), before the first command runs.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_OwnLogsFilter())
    root.addHandler(ch)

    logging.captureWarnings(True)
