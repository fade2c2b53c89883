"""Abstract interfaces for task management system."""

from abc import ABC, abstractmethod

from voice_tasks.task_management.models import Task


class TaskStorage(ABC):
    """Abstract interface for persisting the task collection."""

    @abstractmethod
    async def initialize(self) -> None:
        """
        Prepare the storage backend.

        Raises:
            DatabaseError: If the backend cannot be opened
            SchemaError: If the stored schema is newer than supported
        """
        pass

    @abstractmethod
    async def load_tasks(self) -> list[Task]:
        """
        Load the full task collection.

        Returns:
            Tasks in the order they were saved

        Raises:
            DatabaseError: If reading fails
        """
        pass

    @abstractmethod
    async def save_tasks(self, tasks: list[Task]) -> None:
        """
        Replace the persisted collection with the given ordered tasks.

        The write is atomic: either every task is stored or the previous
        collection is kept.

        Args:
            tasks: Full collection in store order

        Raises:
            DatabaseError: If writing fails
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the storage backend."""
        pass
