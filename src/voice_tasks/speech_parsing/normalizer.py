"""Phrase normalization for candidate task phrases."""

import re

from .config import CONJUNCTIONS, EDGE_PUNCTUATION, SPOKEN_PREFIXES

_CONJUNCTION_GROUP = "|".join(re.escape(word) for word in CONJUNCTIONS)
_PUNCTUATION_CLASS = f"[{re.escape(EDGE_PUNCTUATION)}]"

_WHITESPACE_RUN = re.compile(r"\s+")
_LEADING_CONJUNCTION = re.compile(rf"^(?:{_CONJUNCTION_GROUP})\s+", re.IGNORECASE)
_TRAILING_CONJUNCTION = re.compile(rf"\s+(?:{_CONJUNCTION_GROUP})$", re.IGNORECASE)
_LEADING_PUNCTUATION = re.compile(rf"^{_PUNCTUATION_CLASS}\s*")
_TRAILING_PUNCTUATION = re.compile(rf"\s*{_PUNCTUATION_CLASS}$")
_SPOKEN_PREFIX = re.compile(
    r"^(?:" + "|".join(re.escape(prefix) for prefix in SPOKEN_PREFIXES) + r")\s+",
    re.IGNORECASE,
)


def strip_spoken_prefix(phrase: str) -> str:
    """Remove one spoken lead-in ("I need to", "don't forget to") from the start."""
    return _SPOKEN_PREFIX.sub("", phrase, count=1)


def _normalize_once(phrase: str, strip_prefixes: bool) -> str:
    text = _WHITESPACE_RUN.sub(" ", phrase).strip()
    text = _LEADING_CONJUNCTION.sub("", text, count=1)
    text = _TRAILING_CONJUNCTION.sub("", text, count=1)
    text = _LEADING_PUNCTUATION.sub("", text, count=1)
    text = _TRAILING_PUNCTUATION.sub("", text, count=1)
    text = text.strip()
    if strip_prefixes:
        text = strip_spoken_prefix(text)
    if text:
        text = text[0].upper() + text[1:]
    return text


def normalize_phrase(phrase: str | None, strip_prefixes: bool = False) -> str:
    """
    Clean a raw phrase into task-title form.

    Collapses whitespace, strips one leading and one trailing conjunction
    word, strips edge commas/semicolons, trims and capitalizes the first
    character. The steps are repeated until the text stops changing, so
    ``normalize_phrase(normalize_phrase(x)) == normalize_phrase(x)`` for
    any input.

    Args:
        phrase: Raw phrase (None is treated as empty)
        strip_prefixes: Also remove spoken lead-ins such as "I need to"

    Returns:
        Normalized phrase, possibly empty
    """
    if not phrase:
        return ""

    current = phrase
    while True:
        normalized = _normalize_once(current, strip_prefixes)
        if normalized == current:
            return normalized
        current = normalized
