"""Heuristic classification of phrases as independent tasks."""

from .config import ACTION_VERBS, MIN_TASK_LENGTH, PRONOUNS


def _words(phrase: str) -> list[str]:
    return phrase.lower().split()


def starts_with_action_verb(phrase: str | None) -> bool:
    """Check whether the first word is a known imperative verb."""
    words = _words(phrase or "")
    return bool(words) and words[0] in ACTION_VERBS


def starts_with_pronoun(phrase: str | None) -> bool:
    """Check whether the first word is a subject pronoun."""
    words = _words(phrase or "")
    return bool(words) and words[0] in PRONOUNS


def is_likely_task(phrase: str | None) -> bool:
    """
    Decide whether a phrase reads like an independently actionable task.

    Rules are checked in order and the first match wins:

    1. fewer than ``MIN_TASK_LENGTH`` characters -> False
    2. first word is an action verb -> True
    3. three or more words -> True
    4. two or more words not opened by a subject pronoun -> True
    5. anything else -> False

    Args:
        phrase: Cleaned phrase to evaluate

    Returns:
        True if the phrase is likely a task
    """
    if not phrase or len(phrase) < MIN_TASK_LENGTH:
        return False

    words = _words(phrase)
    if not words:
        return False

    if words[0] in ACTION_VERBS:
        return True

    if len(words) >= 3:
        return True

    if words[0] not in PRONOUNS and len(words) >= 2:
        return True

    return False


def is_independent_clause(phrase: str | None) -> bool:
    """
    Decide whether a phrase following a conjunction or comma stands alone.

    A fragment after "and" or "," only becomes its own task when it is a
    likely task and opens a clause of its own, either with an imperative
    verb ("call mom") or with a subject ("we book the hotel"). Noun-led
    fragments ("oranges for the trip") stay attached to the preceding task.
    """
    if not is_likely_task(phrase):
        return False
    return starts_with_action_verb(phrase) or starts_with_pronoun(phrase)
