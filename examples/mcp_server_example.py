"""Walk through the MCP tools with an in-memory task list."""

import asyncio
import logging

from voice_tasks.task_management.database import TaskDatabase
from voice_tasks.task_management.mcp_server import MCPServer
from voice_tasks.task_management.task_list_manager import TaskListManager

logging.basicConfig(level=logging.INFO)


async def main() -> None:
    """Capture a transcript, then work through the resulting list."""
    task_manager = TaskListManager(TaskDatabase(":memory:"))
    await task_manager.initialize()

    mcp_server = MCPServer(task_manager=task_manager)
    await mcp_server.initialize()

    print("Available MCP tools:", mcp_server.get_available_tools())
    print()

    print("=== Capturing a transcript ===")
    result = await mcp_server.handle_capture_transcript(
        {
            "transcript": (
                "Pack apples and oranges for the trip. "
                "Call the plumber tomorrow and pay rent on friday"
            ),
            "reference_date": "2025-01-01",
        }
    )
    print(f"Detected phrases: {result['phrases']}")
    print()

    print("=== Adding a task directly ===")
    result = await mcp_server.handle_add_task(
        {"title": "Renew passport", "description": "Bring photos", "due_date": "2025-01-02"}
    )
    task_id = result["task_id"]
    print(f"Add task result: {result}")
    print()

    print("=== Task list in due-date order ===")
    result = await mcp_server.handle_list_tasks({})
    for task in result["tasks"]:
        print(f"  {task['due_date'] or '----------'}  {task['title']}")
    print()

    print("=== Completing a task ===")
    result = await mcp_server.handle_toggle_task_completion({"task_id": task_id})
    print(f"Toggle result: {result}")
    print()

    print("=== Incomplete tasks mentioning 'rent' ===")
    result = await mcp_server.handle_list_tasks({"filter": "incomplete", "search": "rent"})
    print(f"Matches: {[task['title'] for task in result['tasks']]}")
    print()

    print("=== Statistics ===")
    stats = await mcp_server.handle_get_task_statistics({})
    print(f"Statistics: {stats}")
    print()

    print("=== Deleting a task ===")
    result = await mcp_server.handle_delete_task({"task_id": task_id})
    print(f"Delete result: {result}")

    await mcp_server.shutdown()
    await task_manager.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
