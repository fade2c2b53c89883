"""Tests for relative due date resolution."""

from datetime import date, datetime, timedelta

import pytest

from voice_tasks.speech_parsing.date_resolver import days_until_weekday, resolve_due_date

# 2025-01-01 is a Wednesday
WEDNESDAY = date(2025, 1, 1)
SATURDAY = date(2025, 1, 4)
SUNDAY = date(2025, 1, 5)
MONDAY = date(2025, 1, 6)


@pytest.mark.unit
class TestKeywordResolution:
    """Test cases for individual date keywords."""

    def test_tomorrow(self) -> None:
        """Test that 'tomorrow' resolves to the next day."""
        assert resolve_due_date("remind me tomorrow", WEDNESDAY) == date(2025, 1, 2)

    def test_today_is_case_insensitive(self) -> None:
        """Test that 'today' matches in any case."""
        assert resolve_due_date("Pay rent TODAY", WEDNESDAY) == WEDNESDAY

    def test_next_week(self) -> None:
        """Test that 'next week' adds seven days."""
        assert resolve_due_date("review budget next week", WEDNESDAY) == date(2025, 1, 8)

    def test_tomorrow_crosses_month_and_year(self) -> None:
        """Test calendar rollover."""
        assert resolve_due_date("tomorrow", date(2024, 12, 31)) == date(2025, 1, 1)
        assert resolve_due_date("tomorrow", date(2024, 2, 28)) == date(2024, 2, 29)

    def test_weekend_resolves_to_upcoming_saturday(self) -> None:
        """Test that 'weekend' picks the Saturday on or after the reference."""
        assert resolve_due_date("clean garage this weekend", WEDNESDAY) == SATURDAY

    def test_weekend_on_saturday_is_same_day(self) -> None:
        """Test that 'weekend' on a Saturday stays on that Saturday."""
        assert resolve_due_date("weekend", SATURDAY) == SATURDAY

    def test_weekend_on_sunday_is_next_saturday(self) -> None:
        """Test that 'weekend' on a Sunday moves to the following Saturday."""
        assert resolve_due_date("weekend", SUNDAY) == date(2025, 1, 11)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("call on thursday", date(2025, 1, 2)),
            ("submit by friday", date(2025, 1, 3)),
            ("saturday", date(2025, 1, 4)),
            ("sunday", date(2025, 1, 5)),
            ("Monday standup", date(2025, 1, 6)),
            ("tuesday", date(2025, 1, 7)),
        ],
    )
    def test_weekday_names(self, text: str, expected: date) -> None:
        """Test that weekday names resolve to their next occurrence."""
        assert resolve_due_date(text, WEDNESDAY) == expected

    def test_same_weekday_is_a_week_later(self) -> None:
        """Test that naming today's weekday means next week, never today."""
        assert resolve_due_date("wednesday", WEDNESDAY) == date(2025, 1, 8)
        assert resolve_due_date("saturday", SATURDAY) == date(2025, 1, 11)

    @pytest.mark.parametrize("text", ["", None, "buy milk", "March 3rd", "in two days"])
    def test_no_keyword_returns_none(self, text: str | None) -> None:
        """Test that phrases without keywords resolve to None."""
        assert resolve_due_date(text, WEDNESDAY) is None


@pytest.mark.unit
class TestPriorityOrder:
    """Test cases for keyword precedence."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("today or tomorrow", WEDNESDAY),
            ("tomorrow, not next week", date(2025, 1, 2)),
            ("next week on friday", date(2025, 1, 8)),
            ("this weekend or monday", SATURDAY),
            ("friday or monday", MONDAY),
        ],
    )
    def test_first_rule_in_priority_order_wins(self, text: str, expected: date) -> None:
        """Test that only the highest priority keyword is used."""
        assert resolve_due_date(text, WEDNESDAY) == expected


@pytest.mark.unit
class TestReferenceHandling:
    """Test cases for reference date handling."""

    def test_datetime_reference_returns_plain_date(self) -> None:
        """Test that a datetime reference yields a date without time."""
        result = resolve_due_date("tomorrow", datetime(2025, 1, 1, 23, 59))
        assert result == date(2025, 1, 2)
        assert type(result) is date

    def test_weekday_is_always_strictly_future(self) -> None:
        """Test that a named weekday never resolves to the reference day."""
        for offset in range(14):
            reference = WEDNESDAY + timedelta(days=offset)
            result = resolve_due_date("monday", reference)
            assert result is not None
            assert result > reference
            assert 1 <= (result - reference).days <= 7
            assert result.weekday() == 0

    def test_days_until_weekday(self) -> None:
        """Test the weekday distance helper with and without same-day matches."""
        # sunday=0 ... saturday=6
        assert days_until_weekday(SATURDAY, 6, allow_same_day=True) == 0
        assert days_until_weekday(SATURDAY, 6, allow_same_day=False) == 7
        assert days_until_weekday(WEDNESDAY, 5, allow_same_day=False) == 2
