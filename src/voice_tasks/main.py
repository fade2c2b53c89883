"""Command-line interface for voice task capture and management."""

import argparse
import asyncio
import logging
import sys
from datetime import date

from .logging_utils import configure_logging
from .speech_parsing.date_resolver import resolve_due_date
from .speech_parsing.segmenter import TranscriptSegmenter
from .task_management.config import DEFAULT_DATABASE_PATH
from .task_management.database import TaskDatabase
from .task_management.exceptions import TaskManagementError
from .task_management.models import Task, TaskFilter
from .task_management.task_capture_service import TaskCaptureService
from .task_management.task_list_manager import TaskListManager


def format_task(task: Task) -> str:
    """Render one task as a single line."""
    checkbox = "[x]" if task.completed else "[ ]"
    line = f"{checkbox} {task.title}"
    if task.due_date:
        line += f" (due {task.due_date.isoformat()})"
    line += f"  id={task.id}"
    if task.description:
        line += f"\n      {task.description}"
    return line


class VoiceTasksCLI:
    """Command-line front end over the task list manager."""

    def __init__(
        self,
        task_manager: TaskListManager,
        segmenter: TranscriptSegmenter | None = None,
    ) -> None:
        """
        Initialize the CLI.

        Args:
            task_manager: Initialized task list manager
            segmenter: Optional segmenter with custom normalization options
        """
        self._task_manager = task_manager
        self._capture_service = TaskCaptureService(task_manager, segmenter)

    async def capture(self, transcript: str, reference_date: date | None = None) -> bool:
        """Add every task found in a transcript and print them."""
        result = await self._capture_service.capture_transcript(transcript, reference_date)
        if result.error:
            print(f"❌ {result.error}")
            return False

        if not result.tasks_detected:
            print("🤷 No tasks detected. Please try again with a clearer command.")
            return True

        print(f"✅ Added {len(result.tasks)} task{'s' if len(result.tasks) != 1 else ''}:")
        for task in result.tasks:
            print(f"   {format_task(task)}")
        return True

    async def add(
        self, title: str, description: str | None = None, due_date: date | None = None
    ) -> bool:
        """Add a single task entered directly."""
        task = await self._task_manager.add_task(title, description, due_date)
        print(f"✅ Added: {format_task(task)}")
        return True

    async def toggle(self, task_id: str) -> bool:
        """Toggle completion of a task."""
        task = await self._task_manager.toggle_task_completion(task_id)
        if task is None:
            print(f"⚠️ No task with id {task_id}")
        else:
            print(f"🔁 {format_task(task)}")
        return True

    async def delete(self, task_id: str) -> bool:
        """Delete a task."""
        if await self._task_manager.delete_task(task_id):
            print(f"🗑️ Deleted task {task_id}")
        else:
            print(f"⚠️ No task with id {task_id}")
        return True

    async def show(self, task_filter: TaskFilter, search_query: str) -> bool:
        """Print the filtered task view."""
        tasks = await self._task_manager.list_tasks(task_filter, search_query)
        if not tasks:
            print("📭 No tasks.")
            return True
        for index, task in enumerate(tasks, start=1):
            print(f"{index:>3}. {format_task(task)}")
        stats = await self._task_manager.get_statistics()
        print(
            f"\n{stats['total']} total, {stats['completed']} completed, "
            f"{stats['incomplete']} incomplete, {stats['overdue']} overdue"
        )
        return True


def preview_transcript(
    transcript: str, segmenter: TranscriptSegmenter, reference_date: date | None
) -> None:
    """Print the phrases and due dates a transcript would produce."""
    reference = reference_date or date.today()
    phrases = segmenter.segment(transcript)
    if not phrases:
        print("🤷 No tasks detected.")
        return
    for phrase in phrases:
        due_date = resolve_due_date(phrase, reference)
        suffix = f" (due {due_date.isoformat()})" if due_date else ""
        print(f" - {phrase}{suffix}")


async def main(args: argparse.Namespace) -> int:
    """
    Run the requested operations against the task database.

    Returns:
        Process exit code
    """
    segmenter = TranscriptSegmenter(
        strip_prefixes=args.strip_prefixes, drop_fillers=args.drop_fillers
    )

    if args.dry_run:
        preview_transcript(args.transcript or "", segmenter, args.reference_date)
        return 0

    task_manager = TaskListManager(TaskDatabase(args.db))
    try:
        await task_manager.initialize()
        cli = VoiceTasksCLI(task_manager, segmenter)

        if args.transcript:
            if not await cli.capture(args.transcript, args.reference_date):
                return 1
        if args.add:
            await cli.add(args.add, args.description, args.due)
        if args.toggle:
            await cli.toggle(args.toggle)
        if args.delete:
            await cli.delete(args.delete)

        mutated = args.transcript or args.add or args.toggle or args.delete
        if args.list or args.search or not mutated:
            await cli.show(TaskFilter(args.filter), args.search)
        return 0

    except TaskManagementError as e:
        print(f"❌ {e}")
        return 1
    finally:
        await task_manager.shutdown()


def parse_iso_date(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from e


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="voice-tasks",
        description="Voice Tasks CLI - Turn spoken transcripts into a due-date ordered task list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  voice-tasks "buy milk and call mom tomorrow"      # Capture tasks from a transcript
  voice-tasks --dry-run "pack bags, book the hotel" # Show detected tasks, store nothing
  voice-tasks --add "Pay rent" --due 2025-03-01     # Add a task directly
  voice-tasks --list --filter incomplete            # Show open tasks
  voice-tasks --search report                       # Search titles and descriptions
  voice-tasks --toggle 1735689600000-1a2b3c4d       # Mark a task done / not done
  voice-tasks --delete 1735689600000-1a2b3c4d       # Delete a task
        """,
    )

    parser.add_argument(
        "transcript",
        nargs="?",
        default=None,
        help="Completed speech transcript to turn into tasks",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the detected tasks and due dates, do not store them",
    )

    parser.add_argument(
        "--reference-date",
        type=parse_iso_date,
        default=None,
        metavar="YYYY-MM-DD",
        help="Day that relative dates such as 'tomorrow' resolve against (default: today)",
    )

    parser.add_argument("--add", metavar="TITLE", help="Add a task with this title")

    parser.add_argument(
        "--description", default=None, help="Description for the task given with --add"
    )

    parser.add_argument(
        "--due",
        type=parse_iso_date,
        default=None,
        metavar="YYYY-MM-DD",
        help="Due date for the task given with --add",
    )

    parser.add_argument("--toggle", metavar="ID", help="Toggle completion of a task")

    parser.add_argument("--delete", metavar="ID", help="Delete a task")

    parser.add_argument("--list", action="store_true", help="Show the task list")

    parser.add_argument(
        "--filter",
        choices=[task_filter.value for task_filter in TaskFilter],
        default=TaskFilter.ALL.value,
        help="Completion filter for the task list (default: all)",
    )

    parser.add_argument(
        "--search", default="", help="Only show tasks whose title or description contains this"
    )

    parser.add_argument(
        "--db",
        default=DEFAULT_DATABASE_PATH,
        metavar="PATH",
        help=f"SQLite database file (default: {DEFAULT_DATABASE_PATH})",
    )

    parser.add_argument(
        "--strip-prefixes",
        action="store_true",
        help="Remove spoken lead-ins such as 'I need to' or 'don't forget to'",
    )

    parser.add_argument(
        "--drop-fillers",
        action="store_true",
        help="Ignore filler words such as 'um' or 'okay'",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging and debug information",
    )

    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace logging (most verbose, includes segmentation steps)",
    )

    return parser


def handle_arguments(args: argparse.Namespace) -> tuple[bool, bool]:
    """
    Handle parsed command-line arguments.

    Args:
        args: Parsed arguments from argparse

    Returns:
        Tuple of (success, should_continue):
        - success: True if the arguments are usable, False otherwise
        - should_continue: True if execution should continue
    """
    configure_logging(verbose=args.verbose, trace=args.trace)

    if (args.description or args.due) and not args.add:
        print("❌ --description and --due require --add")
        return False, False

    if args.dry_run and not args.transcript:
        print("❌ --dry-run needs a transcript")
        return False, False

    return True, True


def cli_entry_with_args() -> None:
    """CLI entry point with argument parsing."""
    parser = create_argument_parser()

    try:
        args = parser.parse_args()

        success, should_continue = handle_arguments(args)

        if not success:
            sys.exit(1)

        if not should_continue:
            sys.exit(0)

        sys.exit(asyncio.run(main(args)))

    except KeyboardInterrupt:
        pass  # Graceful shutdown
    except SystemExit:
        # Re-raise SystemExit (from argparse help, etc.)
        raise
    except Exception as e:
        logging.error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli_entry_with_args()
