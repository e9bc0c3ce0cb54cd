"""
Civil date and time primitives for the selection widgets.

Provides:
- CalendarDate: a (year, month, day) value with no time or timezone
- TimeOfDay: an (hour, minute) value with no date or timezone
- ordered() / expand_range(): the shared range-to-cell-set expansion

Month arithmetic uses python-dateutil's relativedelta so that adding months
clamps the day to the target month's length instead of overflowing.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, TypeVar

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

MINUTES_PER_DAY = 1440

T = TypeVar("T")


@dataclass(frozen=True, order=True)
class CalendarDate:
    """
    A civil date. Ordered by (year, month, day).

    Construction validates the fields; CalendarDate(2025, 2, 30) raises
    ValueError.
    """

    year: int
    month: int
    day: int

    def __post_init__(self):
        # Delegates range checks (month 1-12, day within month) to date()
        date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        return cls(value.year, value.month, value.day)

    @classmethod
    def today(cls) -> "CalendarDate":
        return cls.from_date(date.today())

    @classmethod
    def parse(cls, text: str) -> "CalendarDate":
        """
        Parse an ISO 8601 calendar date (YYYY-MM-DD).

        Raises:
            ValueError: If text is not a valid ISO date
        """
        return cls.from_date(isoparse(text).date())

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def add_days(self, n: int) -> "CalendarDate":
        return CalendarDate.from_date(self.to_date() + timedelta(days=n))

    def add_months(self, n: int) -> "CalendarDate":
        """Shift by n months, clamping the day to the target month's length."""
        return CalendarDate.from_date(self.to_date() + relativedelta(months=n))

    def first_of_month(self) -> "CalendarDate":
        return CalendarDate(self.year, self.month, 1)

    @property
    def day_of_week(self) -> int:
        """Day of week with 0=Sunday .. 6=Saturday."""
        return self.to_date().isoweekday() % 7

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    def isoformat(self) -> str:
        return self.to_date().isoformat()

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    A civil time of day. Ordered by (hour, minute).

    add_minutes() wraps at 24:00 back to 00:00.
    """

    hour: int
    minute: int = 0

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour must be in 0..23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute must be in 0..59, got {self.minute}")

    @classmethod
    def from_minutes(cls, minutes: int) -> "TimeOfDay":
        minutes %= MINUTES_PER_DAY
        return cls(minutes // 60, minutes % 60)

    @classmethod
    def parse(cls, text: str) -> "TimeOfDay":
        """
        Parse an HH:MM string.

        Raises:
            ValueError: If text is not a valid 24-hour HH:MM time
        """
        parts = text.split(":")
        if len(parts) != 2 or not all(p.isdigit() and len(p) == 2 for p in parts):
            raise ValueError(f"Expected HH:MM, got {text!r}")
        return cls(int(parts[0]), int(parts[1]))

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute

    def add_minutes(self, n: int) -> "TimeOfDay":
        return TimeOfDay.from_minutes(self.minutes + n)

    def isoformat(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.isoformat()


def ordered(a: T, b: T) -> tuple[T, T]:
    """Return (lo, hi) under the cells' total order."""
    return (a, b) if a <= b else (b, a)


def expand_range(a: T, b: T, step: Callable[[T], T]) -> list[T]:
    """
    Enumerate every cell from min(a, b) to max(a, b) inclusive.

    Args:
        a: One end of the range
        b: Other end of the range (either order)
        step: Successor function advancing a cell by one unit

    Returns:
        Cells in ascending order. Enumeration stops if step() wraps around
        (e.g. a time stepping past 24:00), so a range never wraps.
    """
    lo, hi = ordered(a, b)
    cells = [lo]
    cell = lo
    while cell < hi:
        nxt = step(cell)
        if nxt <= cell or nxt > hi:
            break
        cells.append(nxt)
        cell = nxt
    return cells


def next_day(day: CalendarDate) -> CalendarDate:
    return day.add_days(1)
