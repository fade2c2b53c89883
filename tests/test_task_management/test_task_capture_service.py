"""Unit tests for Task Capture Service."""

from datetime import date, datetime
from typing import Any
from unittest.mock import AsyncMock

import pytest

from voice_tasks.task_management.exceptions import ValidationError
from voice_tasks.task_management.models import Task

# 2025-01-01 is a Wednesday
REFERENCE = date(2025, 1, 1)


@pytest.fixture
def mock_storage() -> AsyncMock:
    """Create a mock storage backend for testing."""
    storage = AsyncMock()
    storage.load_tasks = AsyncMock(return_value=[])
    return storage


@pytest.fixture
def mock_task_manager() -> AsyncMock:
    """Create a mock Task List Manager."""
    manager = AsyncMock()
    manager.add_task = AsyncMock(
        side_effect=lambda title, due_date=None: Task(id=title, title=title, due_date=due_date)
    )
    return manager


@pytest.mark.unit
class TestTaskCaptureService:
    """Test cases for transcript capture."""

    @pytest.mark.asyncio
    async def test_capture_creates_dated_tasks(self, mock_storage: Any) -> None:
        """Test the full flow from transcript to stored, ordered tasks."""
        from voice_tasks.task_management.task_capture_service import TaskCaptureService
        from voice_tasks.task_management.task_list_manager import TaskListManager

        manager = TaskListManager(storage=mock_storage)
        await manager.initialize()
        service = TaskCaptureService(manager)

        result = await service.capture_transcript(
            "Email the boss on friday and call mom tomorrow then pay rent today",
            reference_date=REFERENCE,
        )

        assert result.error is None
        assert result.tasks_detected is True
        assert result.phrases == [
            "Email the boss on friday",
            "Call mom tomorrow",
            "Pay rent today",
        ]
        stored = await manager.list_tasks()
        assert [(t.title, t.due_date) for t in stored] == [
            ("Pay rent today", date(2025, 1, 1)),
            ("Call mom tomorrow", date(2025, 1, 2)),
            ("Email the boss on friday", date(2025, 1, 3)),
        ]

    @pytest.mark.asyncio
    async def test_undated_phrases_have_no_due_date(
        self, mock_task_manager: AsyncMock
    ) -> None:
        """Test that phrases without keywords are created undated."""
        from voice_tasks.task_management.task_capture_service import TaskCaptureService

        service = TaskCaptureService(mock_task_manager)
        result = await service.capture_transcript("Buy milk.", reference_date=REFERENCE)

        mock_task_manager.add_task.assert_called_once_with("Buy milk", due_date=None)
        assert [t.title for t in result.tasks] == ["Buy milk"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("transcript", ["", "   ", None])
    async def test_empty_transcript(
        self, mock_task_manager: AsyncMock, transcript: str | None
    ) -> None:
        """Test that empty input creates nothing."""
        from voice_tasks.task_management.task_capture_service import TaskCaptureService

        service = TaskCaptureService(mock_task_manager)
        result = await service.capture_transcript(transcript)

        assert result.tasks_detected is False
        assert result.phrases == []
        assert result.error is None
        mock_task_manager.add_task.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_phrase_is_skipped(self, mock_task_manager: AsyncMock) -> None:
        """Test that a rejected phrase does not stop the others."""
        from voice_tasks.task_management.task_capture_service import TaskCaptureService

        mock_task_manager.add_task.side_effect = [
            ValidationError("Task title cannot be empty"),
            Task(id="2", title="Call mom"),
        ]
        service = TaskCaptureService(mock_task_manager)

        result = await service.capture_transcript("Buy milk. Call mom.")

        assert result.phrases == ["Buy milk", "Call mom"]
        assert [t.title for t in result.tasks] == ["Call mom"]
        assert result.error is None

    @pytest.mark.asyncio
    async def test_manager_failure_is_reported(self, mock_task_manager: AsyncMock) -> None:
        """Test that unexpected errors are captured in the result."""
        from voice_tasks.task_management.task_capture_service import TaskCaptureService

        mock_task_manager.add_task.side_effect = RuntimeError("storage offline")
        service = TaskCaptureService(mock_task_manager)

        result = await service.capture_transcript("Buy milk")

        assert result.error == "Task capture failed: storage offline"
        assert result.tasks == []
        assert result.processing_time >= 0

    def test_preview_does_not_store(self, mock_task_manager: AsyncMock) -> None:
        """Test that preview segments and resolves without touching the manager."""
        from voice_tasks.task_management.task_capture_service import TaskCaptureService

        service = TaskCaptureService(mock_task_manager)

        pairs = service.preview(
            "clean the garage this weekend and buy milk",
            reference_date=datetime(2025, 1, 1, 9, 30),
        )

        assert pairs == [
            ("Clean the garage this weekend", date(2025, 1, 4)),
            ("Buy milk", None),
        ]
        mock_task_manager.add_task.assert_not_called()

    def test_custom_segmenter_options(self, mock_task_manager: AsyncMock) -> None:
        """Test that a configured segmenter is used."""
        from voice_tasks.speech_parsing.segmenter import TranscriptSegmenter
        from voice_tasks.task_management.task_capture_service import TaskCaptureService

        service = TaskCaptureService(
            mock_task_manager, TranscriptSegmenter(strip_prefixes=True)
        )

        assert service.preview("remember to pay rent tomorrow", REFERENCE) == [
            ("Pay rent tomorrow", date(2025, 1, 2))
        ]
