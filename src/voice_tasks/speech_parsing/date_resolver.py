"""Resolution of relative date keywords to calendar dates."""

from datetime import date, datetime, timedelta

from .config import (
    NEXT_WEEK_KEYWORD,
    TODAY_KEYWORD,
    TOMORROW_KEYWORD,
    WEEKDAY_NAMES,
    WEEKEND_KEYWORD,
)

SATURDAY = WEEKDAY_NAMES.index("saturday")


def _weekday_index(day: date) -> int:
    """Weekday index with sunday as 0, matching WEEKDAY_NAMES."""
    return day.isoweekday() % 7


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_until_weekday(reference_date: date, target: int, allow_same_day: bool) -> int:
    """
    Count days from reference_date to the next target weekday.

    Args:
        reference_date: Starting day
        target: Weekday index (sunday=0 ... saturday=6)
        allow_same_day: Return 0 when reference_date already is the target

    Returns:
        Number of days to add, 0-6 when same day is allowed, otherwise 1-7
    """
    delta = (target - _weekday_index(reference_date)) % 7
    if delta == 0 and not allow_same_day:
        return 7
    return delta


def resolve_due_date(text: str | None, reference_date: date | datetime) -> date | None:
    """
    Extract a due date from relative date language.

    Matching is case-insensitive substring search and the first rule in
    priority order wins: "today", "tomorrow", "next week", "weekend"
    (Saturday on or after the reference), then weekday names (always
    strictly after the reference, a week out when it is the same weekday).

    Args:
        text: Phrase to inspect
        reference_date: The caller's notion of today

    Returns:
        The resolved date, or None when no keyword is present
    """
    if not text:
        return None

    lowered = text.lower()
    today = _as_date(reference_date)

    if TODAY_KEYWORD in lowered:
        return today

    if TOMORROW_KEYWORD in lowered:
        return today + timedelta(days=1)

    if NEXT_WEEK_KEYWORD in lowered:
        return today + timedelta(days=7)

    if WEEKEND_KEYWORD in lowered:
        return today + timedelta(
            days=days_until_weekday(today, SATURDAY, allow_same_day=True)
        )

    for index, name in enumerate(WEEKDAY_NAMES):
        if name in lowered:
            return today + timedelta(
                days=days_until_weekday(today, index, allow_same_day=False)
            )

    return None
