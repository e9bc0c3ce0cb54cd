"""
Date range conversion between selections and stored proposals.

Provides:
- collapse_to_ranges(): merge a day selection into contiguous runs
- format_date_range() / parse_date_range(): Postgres daterange text form
- expand_date_range(): the inclusive day set a range covers
- slot_bounds(): the time window spanned by a slot selection
"""

import re
from typing import Iterable, Sequence

from meetdown.selection.primitives import CalendarDate, expand_range, next_day
from meetdown.selection.slots import TimeSlot

# Inclusive bounds on both ends, e.g. "[2025-01-10,2025-01-12]"
DATE_RANGE_PATTERN = re.compile(r"^\[(\d{4}-\d{2}-\d{2}),(\d{4}-\d{2}-\d{2})\]$")


def collapse_to_ranges(days: Iterable[CalendarDate]) -> list[tuple[CalendarDate, CalendarDate]]:
    """
    Merge days into maximal runs of consecutive dates.

    Args:
        days: Selected days in any order (duplicates ignored)

    Returns:
        Ascending list of inclusive (first, last) pairs

    Example:
        >>> collapse_to_ranges([CalendarDate(2025, 1, 5), CalendarDate(2025, 1, 6)])
        [(CalendarDate(year=2025, month=1, day=5), CalendarDate(year=2025, month=1, day=6))]
    """
    ranges: list[tuple[CalendarDate, CalendarDate]] = []
    for day in sorted(set(days)):
        if ranges and next_day(ranges[-1][1]) == day:
            ranges[-1] = (ranges[-1][0], day)
        else:
            ranges.append((day, day))
    return ranges


def format_date_range(first: CalendarDate, last: CalendarDate) -> str:
    """Format an inclusive range as a Postgres daterange literal."""
    return f"[{first.isoformat()},{last.isoformat()}]"


def parse_date_range(text: str) -> tuple[CalendarDate, CalendarDate]:
    """
    Parse a "[YYYY-MM-DD,YYYY-MM-DD]" literal.

    Raises:
        ValueError: If the text is malformed, a date is invalid, or the
            range is reversed
    """
    match = DATE_RANGE_PATTERN.match(text.strip())
    if not match:
        raise ValueError(f"Expected '[YYYY-MM-DD,YYYY-MM-DD]', got {text!r}")

    first = CalendarDate.parse(match.group(1))
    last = CalendarDate.parse(match.group(2))
    if last < first:
        raise ValueError(f"Date range ends before it starts: {text!r}")
    return first, last


def expand_date_range(text: str) -> list[CalendarDate]:
    """Every day covered by a daterange literal, ascending."""
    first, last = parse_date_range(text)
    return expand_range(first, last, next_day)


def format_selection(days: Iterable[CalendarDate]) -> list[str]:
    """Collapse a day selection into daterange literals."""
    return [format_date_range(first, last) for first, last in collapse_to_ranges(days)]


def slot_bounds(slots: Sequence[TimeSlot]) -> tuple[str, str]:
    """
    Time window spanned by a slot selection.

    Gaps between selected slots are not preserved: the window runs from the
    earliest selected start to the latest selected end, so unselected slots
    inside it are included.

    Returns:
        (earliest start, latest end) as HH:MM strings. A window ending at
        midnight is reported as "24:00".

    Raises:
        ValueError: If no slots are given
    """
    if not slots:
        raise ValueError("At least one time slot is required")

    first = min(slots, key=lambda s: s.start)
    last = max(slots, key=lambda s: s.start)
    end = last.end.isoformat()
    if last.end <= last.start:
        end = "24:00"
    return first.start.isoformat(), end
