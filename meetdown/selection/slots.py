"""
TimeSlotSelector: fixed-length time-of-day slot selection.

The day from 00:00 to 24:00 is tiled by contiguous, non-overlapping slots of
slot_duration minutes. For display the slots are split into morning and
afternoon halves, but gestures run over one unified order and one selection
set, so a drag may cross noon freely.

Ranges are computed on minutes since midnight between the lower and upper
ends, so a drag never wraps past 24:00 back to the start of the day.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from meetdown.exceptions import InvalidCellError
from meetdown.selection.primitives import MINUTES_PER_DAY, TimeOfDay
from meetdown.selection.widget import RangeSelector

logger = logging.getLogger(__name__)

SLOT_DURATION = 30
NOON = TimeOfDay(12, 0)


@dataclass(frozen=True, order=True)
class TimeSlot:
    """A slot of the day. end is always start + duration (wrapping at 24:00)."""

    start: TimeOfDay
    end: TimeOfDay

    @classmethod
    def starting_at(cls, start: TimeOfDay, duration: int = SLOT_DURATION) -> "TimeSlot":
        return cls(start=start, end=start.add_minutes(duration))

    @property
    def label(self) -> str:
        return f"{self.start}-{self.end}"

    def __str__(self) -> str:
        return self.label


def validate_slot_duration(duration: int) -> int:
    """
    Check that duration tiles the day exactly.

    Raises:
        ValueError: If duration is not a positive divisor of 1440
    """
    if duration <= 0 or MINUTES_PER_DAY % duration != 0:
        raise ValueError(
            f"Slot duration must be a positive divisor of {MINUTES_PER_DAY}, got {duration}"
        )
    return duration


def generate_time_slots(duration: int = SLOT_DURATION) -> list[TimeSlot]:
    """
    Generate the ordered slots covering 00:00 inclusive to 24:00 exclusive.

    Returns:
        1440 / duration slots. The last slot's end is 00:00, the next-day
        representation of 24:00.
    """
    validate_slot_duration(duration)
    return [
        TimeSlot.starting_at(TimeOfDay.from_minutes(m), duration)
        for m in range(0, MINUTES_PER_DAY, duration)
    ]


class TimeSlotSelector(RangeSelector[TimeOfDay]):
    """
    Select time slots by click-toggle or drag-range.

    Pointer handlers accept a TimeSlot, its start TimeOfDay, or a slot
    index into the full-day sequence.

    Args:
        on_selection_change: Called with the ascending list of selected
            TimeSlots after every committed change
        slot_duration: Slot length in minutes (must divide 1440)
    """

    def __init__(
        self,
        on_selection_change: Optional[Callable[[list[TimeSlot]], None]] = None,
        slot_duration: int = SLOT_DURATION,
    ):
        super().__init__(on_selection_change)
        self.slot_duration = validate_slot_duration(slot_duration)
        self._slots = generate_time_slots(slot_duration)
        self._by_start = {slot.start: slot for slot in self._slots}

    @property
    def slots(self) -> list[TimeSlot]:
        return list(self._slots)

    @property
    def morning(self) -> list[TimeSlot]:
        """Slots starting 00:00 through 11:59."""
        return [s for s in self._slots if s.start < NOON]

    @property
    def afternoon(self) -> list[TimeSlot]:
        """Slots starting 12:00 through 23:59."""
        return [s for s in self._slots if s.start >= NOON]

    def slot_at(self, index: int) -> TimeSlot:
        if not 0 <= index < len(self._slots):
            raise InvalidCellError(
                f"Slot index {index} outside 0..{len(self._slots) - 1}"
            )
        return self._slots[index]

    # -------------------------------------------------------------------------
    # RangeSelector hooks
    # -------------------------------------------------------------------------

    def _validate(self, cell) -> TimeOfDay:
        if isinstance(cell, bool):
            raise InvalidCellError("Expected a slot, start time or slot index")
        if isinstance(cell, int):
            return self.slot_at(cell).start
        if isinstance(cell, TimeSlot):
            if self._by_start.get(cell.start) != cell:
                raise InvalidCellError(f"{cell} is not a generated slot")
            return cell.start
        if isinstance(cell, TimeOfDay):
            if cell not in self._by_start:
                raise InvalidCellError(
                    f"{cell} is not the start of a {self.slot_duration}-minute slot"
                )
            return cell
        raise InvalidCellError(f"Expected a slot, got {type(cell).__name__}")

    def _step(self, cell: TimeOfDay) -> TimeOfDay:
        return cell.add_minutes(self.slot_duration)

    def _materialize(self, cells: Sequence[TimeOfDay]) -> list[TimeSlot]:
        return [self._by_start[start] for start in cells]
