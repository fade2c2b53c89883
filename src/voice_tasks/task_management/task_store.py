"""In-memory task store with due-date ordering and filtered views."""

import dataclasses
import logging
import threading
from collections.abc import Iterable, Iterator
from datetime import date, datetime

from ..speech_parsing.normalizer import normalize_phrase
from .exceptions import TaskNotFoundError, ValidationError
from .models import Task, TaskFilter, generate_task_id

logger = logging.getLogger(__name__)

_UNSET = object()


def _due_date_key(task: Task) -> tuple[bool, date]:
    # Undated tasks sort after every dated task
    if task.due_date is None:
        return (True, date.max)
    return (False, task.due_date)


def sort_by_due_date(tasks: Iterable[Task]) -> tuple[Task, ...]:
    """Stable sort by ascending due date with undated tasks last."""
    return tuple(sorted(tasks, key=_due_date_key))


def validate_title(title: str | None) -> None:
    """
    Check that a title survives normalization.

    Raises:
        ValidationError: If the normalized title is empty
    """
    if not normalize_phrase(title):
        raise ValidationError("Task title cannot be empty")


class TaskStore:
    """
    Holds the task collection and derives filtered views from it.

    The collection is kept sorted by due date after every mutation. Writers
    are serialized by a lock and publish a new immutable snapshot, so
    readers always see a fully applied collection without locking.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        """
        Initialize the store.

        Args:
            tasks: Initial tasks; they are validated and sorted
        """
        self._lock = threading.Lock()
        self._tasks: tuple[Task, ...] = ()
        self.search_query = ""
        self.filter = TaskFilter.ALL
        self.load(tasks)

    @property
    def tasks(self) -> list[Task]:
        """Full, unfiltered collection in store order."""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def get(self, task_id: str) -> Task | None:
        """Return the task with the given id, or None."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def load(self, tasks: Iterable[Task]) -> None:
        """
        Replace the whole collection, e.g. with tasks read from storage.

        Raises:
            ValidationError: If any task has an empty title or ids repeat
        """
        incoming = list(tasks)
        seen_ids: set[str] = set()
        for task in incoming:
            validate_title(task.title)
            if task.id in seen_ids:
                raise ValidationError(f"Duplicate task ID: {task.id}")
            seen_ids.add(task.id)
        with self._lock:
            self._tasks = sort_by_due_date(incoming)
        logger.debug(f"Loaded {len(incoming)} tasks into store")

    def add(self, task: Task) -> Task:
        """
        Insert a task and re-sort the collection by due date.

        Tasks sharing a due date (or both lacking one) keep insertion order.

        Args:
            task: Task to insert

        Returns:
            The stored task

        Raises:
            ValidationError: If the title normalizes to empty or the id is taken
        """
        validate_title(task.title)
        with self._lock:
            if any(existing.id == task.id for existing in self._tasks):
                raise ValidationError(f"Duplicate task ID: {task.id}")
            self._tasks = sort_by_due_date(self._tasks + (task,))
        logger.debug(f"Added task {task.id}: {task.title}")
        return task

    def create(
        self,
        title: str,
        description: str | None = None,
        due_date: date | None = None,
    ) -> Task:
        """Build a task with a generated id and add it."""
        task = Task(
            id=generate_task_id(),
            title=title.strip(),
            description=description or None,
            due_date=due_date,
        )
        return self.add(task)

    def _replace(self, task_id: str, **changes: object) -> Task | None:
        with self._lock:
            for index, task in enumerate(self._tasks):
                if task.id == task_id:
                    updated = dataclasses.replace(task, **changes)
                    tasks = self._tasks[:index] + (updated,) + self._tasks[index + 1 :]
                    if "due_date" in changes:
                        tasks = sort_by_due_date(tasks)
                    self._tasks = tasks
                    return updated
        return None

    def toggle_completion(self, task_id: str) -> Task | None:
        """
        Flip the completion flag of a task.

        Unknown ids are ignored.

        Returns:
            The updated task, or None if no task has that id
        """
        with self._lock:
            for index, current in enumerate(self._tasks):
                if current.id == task_id:
                    updated = dataclasses.replace(current, completed=not current.completed)
                    self._tasks = (
                        self._tasks[:index] + (updated,) + self._tasks[index + 1 :]
                    )
                    break
            else:
                updated = None

        if updated is None:
            logger.debug(f"Toggle ignored, no task {task_id}")
        else:
            logger.debug(f"Task {task_id} completed={updated.completed}")
        return updated

    def delete(self, task_id: str) -> bool:
        """
        Remove a task. Unknown ids are ignored.

        Returns:
            True if a task was removed
        """
        with self._lock:
            remaining = tuple(t for t in self._tasks if t.id != task_id)
            removed = len(remaining) != len(self._tasks)
            self._tasks = remaining
        if removed:
            logger.debug(f"Deleted task {task_id}")
        return removed

    def edit(
        self,
        task_id: str,
        title: str | None = None,
        description: object = _UNSET,
        due_date: object = _UNSET,
    ) -> Task:
        """
        Edit the title, description or due date of a task.

        Pass ``description=None`` or ``due_date=None`` to clear them; omitted
        arguments are left unchanged. Changing the due date re-sorts.

        Raises:
            ValidationError: If the new title normalizes to empty
            TaskNotFoundError: If no task has that id
        """
        changes: dict[str, object] = {}
        if title is not None:
            validate_title(title)
            changes["title"] = title.strip()
        if description is not _UNSET:
            changes["description"] = description or None
        if due_date is not _UNSET:
            changes["due_date"] = due_date

        updated = self._replace(task_id, **changes)
        if updated is None:
            raise TaskNotFoundError(f"Task with ID {task_id} not found")
        logger.debug(f"Edited task {task_id} fields: {list(changes.keys())}")
        return updated

    def view(
        self,
        filter: TaskFilter | str = TaskFilter.ALL,
        search_query: str = "",
    ) -> list[Task]:
        """
        Derive the visible tasks without touching stored order.

        Args:
            filter: Completion filter (enum or its string value)
            search_query: Case-insensitive substring of title or description

        Returns:
            Matching tasks in store order
        """
        task_filter = TaskFilter(filter)
        snapshot = self._tasks
        query = search_query or ""

        def keep(task: Task) -> bool:
            if not task.matches(query):
                return False
            if task_filter == TaskFilter.COMPLETED:
                return task.completed
            if task_filter == TaskFilter.INCOMPLETE:
                return not task.completed
            return True

        return [task for task in snapshot if keep(task)]

    def visible_tasks(self) -> list[Task]:
        """View using the store's current filter and search query."""
        return self.view(self.filter, self.search_query)

    def statistics(self, reference_date: date | datetime | None = None) -> dict[str, int]:
        """
        Count tasks by completion state.

        Args:
            reference_date: Day used to count overdue tasks (defaults to today)

        Returns:
            Dictionary with total, completed, incomplete and overdue counts
        """
        if reference_date is None:
            reference_date = date.today()
        elif isinstance(reference_date, datetime):
            reference_date = reference_date.date()

        snapshot = self._tasks
        completed = sum(1 for task in snapshot if task.completed)
        overdue = sum(
            1
            for task in snapshot
            if not task.completed
            and task.due_date is not None
            and task.due_date < reference_date
        )
        return {
            "total": len(snapshot),
            "completed": completed,
            "incomplete": len(snapshot) - completed,
            "overdue": overdue,
        }
