"""Segmentation of free-form speech transcripts into task phrases."""

import re
from dataclasses import dataclass
from functools import reduce

from ..logging_utils import get_logger
from .classifier import is_independent_clause, is_likely_task
from .config import (
    CONJUNCTIONS,
    FILLER_WORDS,
    LIST_SEPARATOR,
    MERGE_JOINER,
    MIN_TASK_LENGTH,
    SENTENCE_BOUNDARY_CHARS,
)
from .normalizer import normalize_phrase, strip_spoken_prefix

logger = get_logger(__name__)

_SENTENCE_BOUNDARY = re.compile(f"[{re.escape(SENTENCE_BOUNDARY_CHARS)}]+")
_CONJUNCTION_SEPARATOR = re.compile(
    r"\s+(?:" + "|".join(re.escape(word) for word in CONJUNCTIONS) + r")\s+",
    re.IGNORECASE,
)
_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass(frozen=True)
class CandidatePhrase:
    """A phrase under evaluation inside the segmentation pipeline."""

    text: str
    is_task: bool


def split_sentences(transcript: str) -> list[str]:
    """Split on runs of sentence punctuation, dropping empty pieces."""
    return [
        sentence.strip()
        for sentence in _SENTENCE_BOUNDARY.split(transcript)
        if sentence.strip()
    ]


def split_conjunctions(sentence: str) -> list[str]:
    """Split on spoken conjunctions; the conjunctions themselves are discarded."""
    return [
        span.strip()
        for span in _CONJUNCTION_SEPARATOR.split(sentence)
        if span.strip()
    ]


def _merge_or_append(
    candidates: tuple[CandidatePhrase, ...], span: str, strip_prefixes: bool
) -> tuple[CandidatePhrase, ...]:
    cleaned = normalize_phrase(span, strip_prefixes)
    if not cleaned:
        return candidates

    if not candidates or is_independent_clause(cleaned):
        return candidates + (CandidatePhrase(cleaned, is_likely_task(cleaned)),)

    # Merge the raw span so "apples and oranges" keeps its casing
    fragment = _WHITESPACE_RUN.sub(" ", span).strip()
    if strip_prefixes:
        fragment = strip_spoken_prefix(fragment)
    previous = candidates[-1]
    merged = previous.text + MERGE_JOINER + fragment
    return candidates[:-1] + (CandidatePhrase(merged, previous.is_task),)


def candidates_from_sentence(
    sentence: str, strip_prefixes: bool = False
) -> tuple[CandidatePhrase, ...]:
    """
    Turn one sentence into candidate phrases.

    A sentence without conjunctions is a single candidate. Otherwise the
    spans are folded left: a span that stands on its own starts a new
    candidate, anything else is joined back onto the previous one with
    " and ".
    """
    spans = split_conjunctions(sentence)
    if len(spans) <= 1:
        cleaned = normalize_phrase(sentence, strip_prefixes)
        return (CandidatePhrase(sentence, is_likely_task(cleaned)),)

    return reduce(
        lambda acc, span: _merge_or_append(acc, span, strip_prefixes),
        spans,
        (),
    )


def expand_comma_list(candidate: CandidatePhrase, strip_prefixes: bool = False) -> list[str]:
    """
    Split a candidate on commas when it is really a list of tasks.

    The split only applies when there are at least two non-empty pieces and
    at least two of them stand alone as tasks, which keeps phrases such as
    "Visit 123 Main St, Suite 4" intact.
    """
    pieces = [piece.strip() for piece in candidate.text.split(LIST_SEPARATOR)]
    pieces = [piece for piece in pieces if piece]
    if len(pieces) <= 1:
        return [candidate.text]

    cleaned = [normalize_phrase(piece, strip_prefixes) for piece in pieces]
    if sum(1 for piece in cleaned if is_independent_clause(piece)) < 2:
        return [candidate.text]
    return cleaned


def _is_filler(phrase: str) -> bool:
    return len(phrase) < MIN_TASK_LENGTH or phrase.lower() in FILLER_WORDS


def segment_transcript(
    transcript: str | None,
    strip_prefixes: bool = False,
    drop_fillers: bool = False,
) -> list[str]:
    """
    Split a transcript into ordered, unique task phrases.

    Args:
        transcript: Raw speech-to-text output (None is treated as empty)
        strip_prefixes: Remove spoken lead-ins such as "don't forget to"
        drop_fillers: Drop filler words ("um", "okay") and very short phrases

    Returns:
        Normalized task phrases in transcript order, never empty strings
        and never duplicates
    """
    if not transcript or not transcript.strip():
        return []

    candidates: list[CandidatePhrase] = []
    for sentence in split_sentences(transcript):
        sentence_candidates = candidates_from_sentence(sentence, strip_prefixes)
        logger.trace(  # type: ignore[attr-defined]
            f"Sentence '{sentence}' -> {[c.text for c in sentence_candidates]}"
        )
        candidates.extend(sentence_candidates)

    expanded: list[str] = []
    for candidate in candidates:
        expanded.extend(expand_comma_list(candidate, strip_prefixes))

    phrases = [normalize_phrase(phrase, strip_prefixes) for phrase in expanded]
    phrases = [phrase for phrase in phrases if phrase]
    if drop_fillers:
        phrases = [phrase for phrase in phrases if not _is_filler(phrase)]

    result = list(dict.fromkeys(phrases))
    logger.debug(f"Segmented transcript into {len(result)} phrase(s)")
    return result


class TranscriptSegmenter:
    """Reusable segmenter carrying normalization options."""

    def __init__(self, strip_prefixes: bool = False, drop_fillers: bool = False) -> None:
        """
        Initialize the segmenter.

        Args:
            strip_prefixes: Remove spoken lead-ins such as "I need to"
            drop_fillers: Drop filler words and very short phrases
        """
        self.strip_prefixes = strip_prefixes
        self.drop_fillers = drop_fillers

    def segment(self, transcript: str | None) -> list[str]:
        """Split a transcript into task phrases."""
        return segment_transcript(
            transcript,
            strip_prefixes=self.strip_prefixes,
            drop_fillers=self.drop_fillers,
        )
