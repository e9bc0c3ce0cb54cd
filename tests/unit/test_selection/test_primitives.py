"""
Unit tests for CalendarDate, TimeOfDay and range expansion.
"""

import pytest

from meetdown.selection.primitives import (
    CalendarDate,
    TimeOfDay,
    expand_range,
    next_day,
    ordered,
)


class TestCalendarDate:
    """Test CalendarDate arithmetic and ordering."""

    def test_invalid_day_rejected(self):
        """Construction should reject days outside the month."""
        with pytest.raises(ValueError):
            CalendarDate(2025, 2, 30)

    def test_invalid_month_rejected(self):
        with pytest.raises(ValueError):
            CalendarDate(2025, 13, 1)

    def test_total_order(self):
        """Dates order by (year, month, day)."""
        assert CalendarDate(2024, 12, 31) < CalendarDate(2025, 1, 1)
        assert CalendarDate(2025, 1, 31) < CalendarDate(2025, 2, 1)
        assert CalendarDate(2025, 3, 2) > CalendarDate(2025, 3, 1)

    def test_add_days_crosses_month_and_year(self):
        assert CalendarDate(2025, 1, 31).add_days(1) == CalendarDate(2025, 2, 1)
        assert CalendarDate(2024, 12, 31).add_days(1) == CalendarDate(2025, 1, 1)
        assert CalendarDate(2025, 3, 1).add_days(-1) == CalendarDate(2025, 2, 28)

    def test_add_months_clamps_day(self):
        """Adding a month to Jan 31 lands on the last day of February."""
        assert CalendarDate(2025, 1, 31).add_months(1) == CalendarDate(2025, 2, 28)
        assert CalendarDate(2024, 1, 31).add_months(1) == CalendarDate(2024, 2, 29)

    def test_add_months_crosses_year(self):
        assert CalendarDate(2025, 12, 1).add_months(1) == CalendarDate(2026, 1, 1)
        assert CalendarDate(2025, 1, 1).add_months(-1) == CalendarDate(2024, 12, 1)

    def test_day_of_week_sunday_is_zero(self):
        """Jan 5, 2025 is a Sunday; Jan 1, 2025 is a Wednesday."""
        assert CalendarDate(2025, 1, 5).day_of_week == 0
        assert CalendarDate(2025, 1, 1).day_of_week == 3
        assert CalendarDate(2025, 1, 4).day_of_week == 6

    def test_days_in_month(self):
        assert CalendarDate(2025, 2, 1).days_in_month == 28
        assert CalendarDate(2024, 2, 1).days_in_month == 29
        assert CalendarDate(2025, 4, 1).days_in_month == 30
        assert CalendarDate(2025, 12, 1).days_in_month == 31

    def test_parse_and_format(self):
        day = CalendarDate.parse("2025-01-05")
        assert day == CalendarDate(2025, 1, 5)
        assert day.isoformat() == "2025-01-05"
        assert str(day) == "2025-01-05"

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            CalendarDate.parse("2025-02-30")

    def test_hashable_identity(self):
        """Equal dates collapse in a set."""
        assert len({CalendarDate(2025, 1, 5), CalendarDate(2025, 1, 5)}) == 1


class TestTimeOfDay:
    """Test TimeOfDay arithmetic and ordering."""

    def test_invalid_fields_rejected(self):
        with pytest.raises(ValueError):
            TimeOfDay(24, 0)
        with pytest.raises(ValueError):
            TimeOfDay(12, 60)
        with pytest.raises(ValueError):
            TimeOfDay(-1, 0)

    def test_total_order(self):
        assert TimeOfDay(9, 30) < TimeOfDay(10, 0)
        assert TimeOfDay(9, 0) < TimeOfDay(9, 30)

    def test_add_minutes(self):
        assert TimeOfDay(9, 30).add_minutes(30) == TimeOfDay(10, 0)
        assert TimeOfDay(9, 45).add_minutes(90) == TimeOfDay(11, 15)

    def test_add_minutes_wraps_at_midnight(self):
        assert TimeOfDay(23, 30).add_minutes(30) == TimeOfDay(0, 0)
        assert TimeOfDay(0, 0).add_minutes(-30) == TimeOfDay(23, 30)

    def test_minutes_since_midnight(self):
        assert TimeOfDay(0, 0).minutes == 0
        assert TimeOfDay(13, 15).minutes == 795

    def test_parse_and_format(self):
        assert TimeOfDay.parse("09:05") == TimeOfDay(9, 5)
        assert TimeOfDay(9, 5).isoformat() == "09:05"

    @pytest.mark.parametrize("text", ["9:00", "24:00", "12:60", "noon", "12:00:00"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            TimeOfDay.parse(text)


class TestRangeExpansion:
    """Test ordered() and expand_range()."""

    def test_ordered(self):
        a, b = CalendarDate(2025, 1, 12), CalendarDate(2025, 1, 10)
        assert ordered(a, b) == (b, a)
        assert ordered(b, a) == (b, a)

    def test_expand_days_inclusive(self):
        cells = expand_range(CalendarDate(2025, 1, 10), CalendarDate(2025, 1, 12), next_day)
        assert cells == [
            CalendarDate(2025, 1, 10),
            CalendarDate(2025, 1, 11),
            CalendarDate(2025, 1, 12),
        ]

    def test_expand_is_order_independent(self):
        a, b = CalendarDate(2025, 1, 30), CalendarDate(2025, 2, 2)
        assert expand_range(a, b, next_day) == expand_range(b, a, next_day)
        assert len(expand_range(a, b, next_day)) == 4

    def test_expand_single_cell(self):
        day = CalendarDate(2025, 1, 5)
        assert expand_range(day, day, next_day) == [day]

    def test_expand_times_never_wraps(self):
        """A time range stops at its upper end instead of wrapping past 24:00."""
        step = lambda t: t.add_minutes(30)  # noqa: E731
        cells = expand_range(TimeOfDay(23, 0), TimeOfDay(23, 30), step)
        assert cells == [TimeOfDay(23, 0), TimeOfDay(23, 30)]
