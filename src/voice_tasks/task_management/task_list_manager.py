"""Task List Manager for managing tasks with persistent storage."""

import asyncio
import logging
from datetime import date
from typing import Any

from .interfaces import TaskStorage
from .models import Task, TaskFilter
from .task_store import TaskStore

logger = logging.getLogger(__name__)


class TaskListManager:
    """
    Manages the task list with persistent storage.

    Wraps a TaskStore and writes the full collection back to storage after
    every mutation. Mutations are serialized so that each one, including
    its re-sort and save, completes before the next begins.
    """

    def __init__(self, storage: TaskStorage, store: TaskStore | None = None) -> None:
        """
        Initialize Task List Manager.

        Args:
            storage: Storage backend for task persistence
            store: Optional pre-built store (a fresh one is created otherwise)
        """
        self._storage = storage
        self._store = store if store is not None else TaskStore()
        self._write_lock = asyncio.Lock()
        self._initialized = False

    @property
    def store(self) -> TaskStore:
        """The underlying in-memory store."""
        return self._store

    async def initialize(self) -> None:
        """
        Initialize the manager and load existing tasks.

        Initializes the storage backend and loads all existing tasks
        into the in-memory store.
        """
        logger.info("Initializing Task List Manager")

        await self._storage.initialize()

        tasks = await self._storage.load_tasks()
        self._store.load(tasks)

        self._initialized = True
        logger.info(f"Task List Manager initialized with {len(self._store)} tasks")

    async def _persist(self, previous: list[Task]) -> None:
        """Save the store, restoring the previous collection if the write fails."""
        try:
            await self._storage.save_tasks(self._store.tasks)
        except Exception as e:
            logger.error(f"❌ Failed to persist tasks, restoring previous state: {e}")
            self._store.load(previous)
            raise

    async def add_task(
        self,
        title: str,
        description: str | None = None,
        due_date: date | None = None,
    ) -> Task:
        """
        Add a new task.

        Args:
            title: Task title
            description: Optional free text
            due_date: Optional due date

        Returns:
            The created task

        Raises:
            ValidationError: If the title is empty after normalization
            DatabaseError: If persisting fails
        """
        async with self._write_lock:
            previous = self._store.tasks
            task = self._store.create(title, description=description, due_date=due_date)
            await self._persist(previous)

        logger.info(f"Added task {task.id}: {task.title}")
        return task

    async def get_task(self, task_id: str) -> Task | None:
        """
        Get a task by ID.

        Args:
            task_id: Task identifier

        Returns:
            Task object, or None if absent
        """
        return self._store.get(task_id)

    async def list_tasks(
        self,
        filter: TaskFilter | str = TaskFilter.ALL,
        search_query: str = "",
    ) -> list[Task]:
        """
        List tasks with optional filters.

        Args:
            filter: Completion filter
            search_query: Case-insensitive substring of title or description

        Returns:
            List of tasks matching filters, in due-date order
        """
        return self._store.view(filter, search_query)

    async def toggle_task_completion(self, task_id: str) -> Task | None:
        """
        Flip the completion flag of a task.

        Unknown ids are ignored and nothing is written.

        Args:
            task_id: Task identifier

        Returns:
            The updated task, or None if absent

        Raises:
            DatabaseError: If persisting fails
        """
        async with self._write_lock:
            previous = self._store.tasks
            task = self._store.toggle_completion(task_id)
            if task is not None:
                await self._persist(previous)

        if task is None:
            logger.debug(f"Toggle ignored for unknown task {task_id}")
        else:
            state = "completed" if task.completed else "incomplete"
            logger.info(f"Task {task_id} marked {state}")
        return task

    async def update_task(self, task_id: str, updates: dict[str, Any]) -> Task:
        """
        Update title, description or due date of a task.

        Args:
            task_id: Task identifier
            updates: Dictionary of field names and values

        Returns:
            The updated task

        Raises:
            ValueError: If an unknown field is given
            ValidationError: If the new title is empty
            TaskNotFoundError: If task not found
            DatabaseError: If update fails
        """
        unknown = set(updates) - {"title", "description", "due_date"}
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")

        async with self._write_lock:
            previous = self._store.tasks
            task = self._store.edit(task_id, **updates)
            await self._persist(previous)

        logger.info(f"Updated task {task_id} fields: {list(updates.keys())}")
        return task

    async def delete_task(self, task_id: str) -> bool:
        """
        Delete a task. Unknown ids are ignored.

        Args:
            task_id: Task identifier

        Returns:
            True if a task was removed

        Raises:
            DatabaseError: If deletion fails
        """
        async with self._write_lock:
            previous = self._store.tasks
            removed = self._store.delete(task_id)
            if removed:
                await self._persist(previous)

        if removed:
            logger.info(f"Deleted task {task_id}")
        return removed

    async def get_statistics(self, reference_date: date | None = None) -> dict[str, int]:
        """
        Get task statistics.

        Returns:
            Dictionary with task counts:
            - total: Total number of tasks
            - completed: Number of completed tasks
            - incomplete: Number of incomplete tasks
            - overdue: Incomplete tasks due before the reference date
        """
        return self._store.statistics(reference_date)

    async def shutdown(self) -> None:
        """
        Shutdown the manager and close storage.

        Handles errors gracefully to ensure cleanup completes.
        """
        logger.info("Shutting down Task List Manager")
        try:
            await self._storage.close()
        except Exception as e:
            logger.error(f"Error closing storage: {e}")

        self._initialized = False
