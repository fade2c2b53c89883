"""MCP Server for voice task management using FastMCP."""

import asyncio
import logging
import sys
from datetime import date
from typing import Any

from fastmcp import FastMCP

from .config import (
    DEFAULT_DATABASE_PATH,
    DEFAULT_MCP_HOST,
    DEFAULT_MCP_PORT,
    DEFAULT_MCP_SERVER_NAME,
)
from .database import TaskDatabase
from .exceptions import TaskManagementError
from .models import TaskFilter
from .task_capture_service import TaskCaptureService
from .task_list_manager import TaskListManager

logger = logging.getLogger(__name__)

# Create FastMCP server instance
mcp = FastMCP(DEFAULT_MCP_SERVER_NAME)

# Global task manager (initialized in cli_entry())
_task_manager: TaskListManager | None = None

TOOL_NAMES = [
    "list_tasks",
    "add_task",
    "toggle_task_completion",
    "delete_task",
    "capture_transcript",
    "get_task_statistics",
]


def get_task_manager() -> TaskListManager:
    """Get the global task manager instance."""
    if _task_manager is None:
        raise RuntimeError("Task manager not initialized")
    return _task_manager


def set_task_manager(task_manager: TaskListManager | None) -> None:
    """Set the global task manager instance (for testing)."""
    global _task_manager
    _task_manager = task_manager


def _parse_date(value: str | None) -> date | None:
    """Parse an ISO calendar date, raising ValueError on bad input."""
    if not value:
        return None
    return date.fromisoformat(value[:10])


async def _list_tasks_impl(filter: str = "all", search: str = "") -> dict[str, Any]:
    """Implementation of list_tasks tool."""
    try:
        task_manager = get_task_manager()

        try:
            task_filter = TaskFilter(filter)
        except ValueError:
            return {"success": False, "error": f"Invalid filter: {filter}"}

        tasks = await task_manager.list_tasks(task_filter, search or "")
        return {"success": True, "tasks": [task.to_dict() for task in tasks]}

    except Exception as e:
        logger.error(f"Error listing tasks: {e}")
        return {"success": False, "error": str(e)}


async def _add_task_impl(
    title: str, description: str | None = None, due_date: str | None = None
) -> dict[str, Any]:
    """
    Add a new task.

    Args:
        title: Task title (required)
        description: Optional free text
        due_date: Due date as YYYY-MM-DD (optional)

    Returns:
        Dictionary with the created task and success status
    """
    try:
        task_manager = get_task_manager()

        try:
            parsed_due_date = _parse_date(due_date)
        except ValueError:
            return {"success": False, "error": f"Invalid date format: {due_date}"}

        task = await task_manager.add_task(
            title, description=description, due_date=parsed_due_date
        )
        return {"success": True, "task_id": task.id, "task": task.to_dict()}

    except TaskManagementError as e:
        logger.warning(f"Task rejected: {e}")
        return {"success": False, "error": str(e)}
    except Exception as e:
        logger.error(f"Error adding task: {e}")
        return {"success": False, "error": str(e)}


async def _toggle_task_completion_impl(task_id: str) -> dict[str, Any]:
    """Flip the completion flag of a task; unknown ids are not an error."""
    try:
        task_manager = get_task_manager()
        task = await task_manager.toggle_task_completion(task_id)
        return {
            "success": True,
            "found": task is not None,
            "task": task.to_dict() if task else None,
        }

    except Exception as e:
        logger.error(f"Error toggling task completion: {e}")
        return {"success": False, "error": str(e)}


async def _delete_task_impl(task_id: str) -> dict[str, Any]:
    """Delete a task; unknown ids are not an error."""
    try:
        task_manager = get_task_manager()
        removed = await task_manager.delete_task(task_id)
        return {"success": True, "found": removed}

    except Exception as e:
        logger.error(f"Error deleting task: {e}")
        return {"success": False, "error": str(e)}


async def _capture_transcript_impl(
    transcript: str, reference_date: str | None = None
) -> dict[str, Any]:
    """Segment a transcript and add every detected task."""
    try:
        task_manager = get_task_manager()

        try:
            reference = _parse_date(reference_date)
        except ValueError:
            return {"success": False, "error": f"Invalid date format: {reference_date}"}

        service = TaskCaptureService(task_manager)
        result = await service.capture_transcript(transcript, reference)
        if result.error:
            return {"success": False, "error": result.error, "phrases": result.phrases}
        return {
            "success": True,
            "phrases": result.phrases,
            "tasks": [task.to_dict() for task in result.tasks],
        }

    except Exception as e:
        logger.error(f"Error capturing transcript: {e}")
        return {"success": False, "error": str(e)}


async def _get_task_statistics_impl() -> dict[str, Any]:
    """
    Get task statistics (counts by completion state).

    Returns:
        Dictionary with task counts
    """
    try:
        task_manager = get_task_manager()
        return await task_manager.get_statistics()

    except Exception as e:
        logger.error(f"Error getting task statistics: {e}")
        return {"success": False, "error": str(e)}


# FastMCP decorated wrappers (for actual MCP server)
@mcp.tool()
async def list_tasks(filter: str = "all", search: str = "") -> dict[str, Any]:
    """
    List tasks ordered by due date.

    Args:
        filter: all, completed or incomplete
        search: Case-insensitive text to look for in title or description

    Returns:
        Dictionary with tasks list
    """
    return await _list_tasks_impl(filter=filter, search=search)


@mcp.tool()
async def add_task(
    title: str, description: str | None = None, due_date: str | None = None
) -> dict[str, Any]:
    """
    Add a new task.

    Args:
        title: Task title (required)
        description: Optional details
        due_date: Due date as YYYY-MM-DD (optional)

    Returns:
        Dictionary with task_id and success status
    """
    return await _add_task_impl(title=title, description=description, due_date=due_date)


@mcp.tool()
async def toggle_task_completion(task_id: str) -> dict[str, Any]:
    """
    Mark a task completed, or incomplete again.

    Args:
        task_id: Task identifier

    Returns:
        Dictionary with success status and the updated task
    """
    return await _toggle_task_completion_impl(task_id=task_id)


@mcp.tool()
async def delete_task(task_id: str) -> dict[str, Any]:
    """
    Delete a task.

    Args:
        task_id: Task identifier

    Returns:
        Dictionary with success status
    """
    return await _delete_task_impl(task_id=task_id)


@mcp.tool()
async def capture_transcript(
    transcript: str, reference_date: str | None = None
) -> dict[str, Any]:
    """
    Turn a spoken transcript into tasks.

    Args:
        transcript: Transcribed speech, e.g. "buy milk and call mom tomorrow"
        reference_date: Day relative dates resolve against, YYYY-MM-DD (default today)

    Returns:
        Dictionary with detected phrases and created tasks
    """
    return await _capture_transcript_impl(
        transcript=transcript, reference_date=reference_date
    )


@mcp.tool()
async def get_task_statistics() -> dict[str, Any]:
    """
    Get task statistics (total, completed, incomplete, overdue).

    Returns:
        Dictionary with task counts
    """
    return await _get_task_statistics_impl()


# Compatibility wrapper for tests
class MCPServer:
    """
    Compatibility wrapper for testing.

    The actual MCP server uses FastMCP with function decorators.
    This class provides a compatible interface for existing tests.
    """

    def __init__(
        self,
        task_manager: TaskListManager,
        server_name: str = DEFAULT_MCP_SERVER_NAME,
        host: str = DEFAULT_MCP_HOST,
        port: int = DEFAULT_MCP_PORT,
    ) -> None:
        """Initialize MCP Server wrapper."""
        self._task_manager = task_manager
        self._server_name = server_name
        self._host = host
        self._port = port
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize the server."""
        set_task_manager(self._task_manager)
        self._initialized = True

    async def shutdown(self) -> None:
        """Shutdown the server."""
        self._initialized = False

    def get_available_tools(self) -> list[str]:
        """Get list of available tools."""
        return list(TOOL_NAMES)

    async def handle_list_tasks(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle list_tasks request."""
        return await _list_tasks_impl(
            filter=params.get("filter", "all"), search=params.get("search", "")
        )

    async def handle_add_task(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle add_task request."""
        if "title" not in params:
            return {"success": False, "error": "Missing required field: title"}
        return await _add_task_impl(
            title=params["title"],
            description=params.get("description"),
            due_date=params.get("due_date"),
        )

    async def handle_toggle_task_completion(
        self, params: dict[str, Any]
    ) -> dict[str, Any]:
        """Handle toggle_task_completion request."""
        if "task_id" not in params:
            return {"success": False, "error": "Missing required field: task_id"}
        return await _toggle_task_completion_impl(task_id=params["task_id"])

    async def handle_delete_task(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle delete_task request."""
        if "task_id" not in params:
            return {"success": False, "error": "Missing required field: task_id"}
        return await _delete_task_impl(task_id=params["task_id"])

    async def handle_capture_transcript(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle capture_transcript request."""
        if "transcript" not in params:
            return {"success": False, "error": "Missing required field: transcript"}
        return await _capture_transcript_impl(
            transcript=params["transcript"],
            reference_date=params.get("reference_date"),
        )

    async def handle_get_task_statistics(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle get_task_statistics request."""
        return await _get_task_statistics_impl()


def cli_entry() -> None:
    """CLI entry point for the MCP server."""
    logging.basicConfig(
        level="INFO", format="%(asctime)s - %(levelname)s - %(message)s"
    )

    # Check for transport argument
    transport_type = "stdio"
    if len(sys.argv) > 1 and sys.argv[1] in ("stdio", "sse", "http"):
        transport_type = "sse" if sys.argv[1] == "http" else sys.argv[1]

    # Initialize database and task manager before FastMCP takes over
    async def setup() -> None:
        database = TaskDatabase(DEFAULT_DATABASE_PATH)
        task_manager = TaskListManager(database)
        await task_manager.initialize()
        set_task_manager(task_manager)
        logger.info(
            f"MCP Server initialized with {len(TOOL_NAMES)} tools "
            f"(transport={transport_type})"
        )
        if transport_type == "sse":
            logger.info(
                f"Server will listen on http://{DEFAULT_MCP_HOST}:{DEFAULT_MCP_PORT}"
            )

    asyncio.run(setup())

    # FastMCP's run() manages its own event loop
    if transport_type == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport="sse", host=DEFAULT_MCP_HOST, port=DEFAULT_MCP_PORT)


if __name__ == "__main__":
    cli_entry()
