"""Database layer for task persistence using SQLite."""

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

import aiosqlite

from voice_tasks.task_management.config import DEFAULT_WAL_MODE, SCHEMA_VERSION
from voice_tasks.task_management.exceptions import DatabaseError, SchemaError
from voice_tasks.task_management.interfaces import TaskStorage
from voice_tasks.task_management.models import Task


class TaskDatabase(TaskStorage):
    """SQLite storage for the ordered task collection."""

    def __init__(self, db_path: str, wal_mode: bool = DEFAULT_WAL_MODE) -> None:
        """
        Initialize database connection.

        Args:
            db_path: Path to SQLite database file (use ":memory:" for in-memory)
            wal_mode: Enable WAL mode for concurrent access
        """
        self.db_path = db_path
        self.wal_mode = wal_mode
        self._connection: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Initialize database schema and connection."""
        if self._connection is None:
            if self.db_path != ":memory:":
                directory = os.path.dirname(self.db_path)
                if directory:
                    os.makedirs(directory, exist_ok=True)

            try:
                self._connection = await aiosqlite.connect(self.db_path)
            except Exception as e:
                raise DatabaseError(f"Failed to open database {self.db_path}: {e}") from e
            self._connection.row_factory = aiosqlite.Row

            # Enable WAL mode for concurrent access (not supported in :memory:)
            if self.wal_mode and self.db_path != ":memory:":
                await self._connection.execute("PRAGMA journal_mode=WAL")

        await self._create_schema()

    async def _create_schema(self) -> None:
        """Create database schema with tables and indexes."""
        async with self._get_connection() as conn:
            await conn.execute(
                """
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY,
                    applied_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

            cursor = await conn.execute("SELECT MAX(version) FROM schema_version")
            result = await cursor.fetchone()
            current_version = result[0] if result and result[0] is not None else 0

            if current_version > SCHEMA_VERSION:
                raise SchemaError(
                    f"Database schema version {current_version} is newer than "
                    f"supported version {SCHEMA_VERSION}"
                )

            if current_version < SCHEMA_VERSION:
                await self._apply_migrations(conn, current_version)

            await conn.commit()

    async def _apply_migrations(
        self, conn: aiosqlite.Connection, from_version: int
    ) -> None:
        """
        Apply database migrations.

        Args:
            conn: Database connection
            from_version: Current schema version
        """
        if from_version < 1:
            await conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    position INTEGER NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT,
                    due_date TEXT,
                    completed INTEGER NOT NULL DEFAULT 0
                )
                """
            )
            await conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_tasks_position ON tasks(position)"
            )
            await conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date)"
            )

            await conn.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (SCHEMA_VERSION,),
            )

    @asynccontextmanager
    async def _get_connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Get database connection context manager.

        Yields:
            Database connection

        Raises:
            DatabaseError: If connection is not initialized
        """
        if self._connection is None:
            raise DatabaseError("Database not initialized")
        yield self._connection

    async def get_schema_version(self) -> int:
        """
        Get current schema version.

        Returns:
            Schema version number
        """
        async with self._get_connection() as conn:
            cursor = await conn.execute("SELECT MAX(version) FROM schema_version")
            result = await cursor.fetchone()
            return result[0] if result and result[0] is not None else 0

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def load_tasks(self) -> list[Task]:
        """
        Load all tasks in saved order.

        Returns:
            List of tasks

        Raises:
            DatabaseError: If the query fails
        """
        async with self._get_connection() as conn:
            try:
                cursor = await conn.execute(
                    "SELECT * FROM tasks ORDER BY position ASC"
                )
                rows = await cursor.fetchall()
            except aiosqlite.Error as e:
                raise DatabaseError(f"Failed to load tasks: {e}") from e
            return [self._row_to_task(row) for row in rows]

    async def save_tasks(self, tasks: list[Task]) -> None:
        """
        Replace the stored collection in a single transaction.

        Args:
            tasks: Full collection in store order

        Raises:
            DatabaseError: If the write fails (nothing is changed)
        """
        async with self._get_connection() as conn:
            try:
                await conn.execute("DELETE FROM tasks")
                await conn.executemany(
                    """
                    INSERT INTO tasks (
                        id, position, title, description, due_date, completed
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            task.id,
                            position,
                            task.title,
                            task.description,
                            task.due_date.isoformat() if task.due_date else None,
                            int(task.completed),
                        )
                        for position, task in enumerate(tasks)
                    ],
                )
                await conn.commit()
            except aiosqlite.IntegrityError as e:
                await conn.rollback()
                raise DatabaseError(f"Duplicate task ID in collection: {e}") from e
            except Exception as e:
                await conn.rollback()
                raise DatabaseError(f"Failed to save tasks: {e}") from e

    async def count_tasks(self) -> int:
        """Number of stored tasks."""
        async with self._get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM tasks")
            return (await cursor.fetchone())[0]

    def _row_to_task(self, row: aiosqlite.Row) -> Task:
        """
        Convert database row to Task object.

        Args:
            row: Database row

        Returns:
            Task object
        """
        return Task(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            due_date=date.fromisoformat(row["due_date"]) if row["due_date"] else None,
            completed=bool(row["completed"]),
        )
