"""Task Capture Service for turning speech transcripts into stored tasks."""

import logging
import time
from datetime import date, datetime

from ..speech_parsing.date_resolver import resolve_due_date
from ..speech_parsing.segmenter import TranscriptSegmenter
from .config import DEFAULT_DROP_FILLER_WORDS, DEFAULT_STRIP_SPOKEN_PREFIXES
from .exceptions import ValidationError
from .models import CaptureResult
from .task_list_manager import TaskListManager

logger = logging.getLogger(__name__)


class TaskCaptureService:
    """
    Service for capturing tasks from transcripts.

    Coordinates transcript segmentation, due date resolution and the task
    list manager: each detected phrase becomes one stored task.
    """

    def __init__(
        self,
        task_manager: TaskListManager,
        segmenter: TranscriptSegmenter | None = None,
    ) -> None:
        """
        Initialize Task Capture Service.

        Args:
            task_manager: Task list manager for task storage
            segmenter: Transcript segmenter (default options when omitted)
        """
        self._task_manager = task_manager
        self._segmenter = segmenter or TranscriptSegmenter(
            strip_prefixes=DEFAULT_STRIP_SPOKEN_PREFIXES,
            drop_fillers=DEFAULT_DROP_FILLER_WORDS,
        )

        logger.info(
            f"Task Capture Service initialized (strip_prefixes="
            f"{self._segmenter.strip_prefixes}, drop_fillers={self._segmenter.drop_fillers})"
        )

    def preview(
        self,
        transcript: str | None,
        reference_date: date | datetime | None = None,
    ) -> list[tuple[str, date | None]]:
        """
        Segment a transcript and resolve due dates without storing anything.

        Args:
            transcript: Completed transcript text
            reference_date: Day relative dates resolve against (defaults to today)

        Returns:
            List of (phrase, due date) pairs in transcript order
        """
        reference = reference_date or date.today()
        return [
            (phrase, resolve_due_date(phrase, reference))
            for phrase in self._segmenter.segment(transcript)
        ]

    async def capture_transcript(
        self,
        transcript: str | None,
        reference_date: date | datetime | None = None,
    ) -> CaptureResult:
        """
        Detect tasks in a transcript and add them to the task list.

        Args:
            transcript: Completed transcript text
            reference_date: Day relative dates resolve against (defaults to today)

        Returns:
            CaptureResult with the detected phrases and created tasks
        """
        start_time = time.time()

        logger.info(f"🎯 Task capture started for transcript: '{transcript}'")

        if not transcript or not transcript.strip():
            logger.warning("❌ Empty or whitespace-only transcript provided")
            return CaptureResult(processing_time=time.time() - start_time)

        result = CaptureResult()
        try:
            pairs = self.preview(transcript, reference_date)
            result.phrases = [phrase for phrase, _ in pairs]
            logger.info(f"📊 Detected {len(pairs)} phrase(s): {result.phrases}")

            for phrase, due_date in pairs:
                try:
                    task = await self._task_manager.add_task(phrase, due_date=due_date)
                except ValidationError as e:
                    logger.warning(f"⚠️ Skipping phrase '{phrase}': {e}")
                    continue
                result.tasks.append(task)
                logger.info(f"✅ Created task '{task.title}' (due_date={task.due_date})")

        except Exception as e:
            error_msg = f"Task capture failed: {str(e)}"
            logger.error(error_msg)
            result.error = error_msg

        result.processing_time = time.time() - start_time
        logger.info(
            f"🎉 Task capture finished: {len(result.tasks)} task(s) created in "
            f"{result.processing_time:.3f}s"
        )
        return result
