"""Task management module: task store, persistence and transcript capture."""

from .exceptions import TaskManagementError, TaskNotFoundError, ValidationError
from .models import CaptureResult, Task, TaskFilter, generate_task_id
from .task_list_manager import TaskListManager
from .task_store import TaskStore

__all__ = [
    "Task",
    "TaskFilter",
    "CaptureResult",
    "generate_task_id",
    "TaskStore",
    "TaskListManager",
    "TaskManagementError",
    "TaskNotFoundError",
    "ValidationError",
]
