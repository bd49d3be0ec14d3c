from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from .errors import ValidationError


class TaskStatus(StrEnum):
    TODO = "todo"
    DOING = "doing"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str) -> TaskStatus:
        """
        Case-insensitive lookup: "Done", " doing " are accepted.
        """
        try:
            return cls(raw.strip().lower())
        except ValueError as e:
            choices = ", ".join(s.value for s in cls)
            raise ValidationError(f"Invalid status '{raw}'. Use one of: {choices}.") from e


@dataclass(frozen=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime
