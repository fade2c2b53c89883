"""Tests for task management data models."""

import re
from datetime import date, datetime

import pytest

from voice_tasks.task_management.models import CaptureResult, Task, TaskFilter, generate_task_id


@pytest.mark.unit
class TestTask:
    """Test cases for the Task model."""

    def test_defaults(self) -> None:
        """Test that a new task is open, undated and undescribed."""
        task = Task(id="1", title="Buy milk")

        assert task.completed is False
        assert task.due_date is None
        assert task.description is None

    def test_to_dict(self) -> None:
        """Test the persisted representation."""
        task = Task(id="1", title="Pay rent", description="Landlord", due_date=date(2025, 1, 1))

        assert task.to_dict() == {
            "id": "1",
            "title": "Pay rent",
            "description": "Landlord",
            "due_date": "2025-01-01",
            "completed": False,
        }

    def test_from_dict_accepts_timestamps(self) -> None:
        """Test that a full timestamp is reduced to its calendar day."""
        task = Task.from_dict(
            {"id": 7, "title": "Call mom", "due_date": "2025-12-31T00:00:00Z", "completed": 1}
        )

        assert task.id == "7"
        assert task.due_date == date(2025, 12, 31)
        assert task.completed is True
        assert task.description is None

    def test_datetime_due_date_becomes_date(self) -> None:
        """Test that the time of day is dropped from due dates."""
        task = Task(id="1", title="Pay rent", due_date=datetime(2025, 1, 1, 9, 30))

        assert task.due_date == date(2025, 1, 1)
        assert type(task.due_date) is date

    def test_from_dict_handles_missing_fields(self) -> None:
        """Test that optional fields may be absent or empty."""
        task = Task.from_dict({"id": "1", "title": "Buy milk", "description": "", "due_date": None})

        assert task == Task(id="1", title="Buy milk")

    def test_matches_title_and_description(self) -> None:
        """Test case-insensitive substring matching."""
        task = Task(id="1", title="Write Report", description="Quarterly numbers")

        assert task.matches("report")
        assert task.matches("QUARTER")
        assert task.matches("")
        assert not task.matches("budget")


@pytest.mark.unit
class TestSupportingModels:
    """Test cases for ids, filters and capture results."""

    def test_generated_id_format(self) -> None:
        """Test that ids are milliseconds plus a hex suffix."""
        assert re.fullmatch(r"\d+-[0-9a-f]{8}", generate_task_id())

    def test_filter_values(self) -> None:
        """Test that filters round-trip through their string values."""
        assert [f.value for f in TaskFilter] == ["all", "completed", "incomplete"]
        assert TaskFilter("incomplete") is TaskFilter.INCOMPLETE

    def test_capture_result(self) -> None:
        """Test the tasks_detected flag."""
        assert CaptureResult().tasks_detected is False
        assert CaptureResult(tasks=[Task(id="1", title="Buy milk")]).tasks_detected is True
