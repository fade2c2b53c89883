"""Data models for task management functionality."""

import time
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from .config import TASK_ID_SUFFIX_LENGTH


class TaskFilter(str, Enum):
    """Completion filter applied to the task view."""

    ALL = "all"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"


def generate_task_id() -> str:
    """Create a task id from the current time in milliseconds and a random suffix."""
    return f"{time.time_ns() // 1_000_000}-{uuid.uuid4().hex[:TASK_ID_SUFFIX_LENGTH]}"


@dataclass
class Task:
    """Represents a task item."""

    id: str
    title: str
    description: str | None = None
    due_date: date | None = None
    completed: bool = False

    def __post_init__(self) -> None:
        # Due dates carry no time of day
        if isinstance(self.due_date, datetime):
            self.due_date = self.due_date.date()

    def matches(self, search_query: str) -> bool:
        """Case-insensitive substring match against title and description."""
        query = search_query.lower()
        if query in self.title.lower():
            return True
        return self.description is not None and query in self.description.lower()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted representation."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a task from its persisted representation."""
        due_date = data.get("due_date")
        if isinstance(due_date, str):
            # Accept full timestamps ("2025-12-31T00:00:00Z"), keep the calendar day
            due_date = date.fromisoformat(due_date[:10])
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description") or None,
            due_date=due_date or None,
            completed=bool(data.get("completed", False)),
        )


@dataclass
class CaptureResult:
    """Result of turning a transcript into stored tasks."""

    phrases: list[str] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    processing_time: float = 0.0
    error: str | None = None

    @property
    def tasks_detected(self) -> bool:
        """Whether at least one task was created."""
        return bool(self.tasks)
