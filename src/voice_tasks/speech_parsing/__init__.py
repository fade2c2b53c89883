"""Speech transcript parsing: segmentation, classification and due dates."""

from .classifier import is_independent_clause, is_likely_task
from .date_resolver import resolve_due_date
from .normalizer import normalize_phrase
from .segmenter import CandidatePhrase, TranscriptSegmenter, segment_transcript

__all__ = [
    "CandidatePhrase",
    "TranscriptSegmenter",
    "segment_transcript",
    "normalize_phrase",
    "is_likely_task",
    "is_independent_clause",
    "resolve_due_date",
]
