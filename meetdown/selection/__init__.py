"""
Date and time range-selection widgets.

Provides:
- CalendarDate / TimeOfDay civil primitives
- Gesture state machine (click-toggle, drag-union)
- DaySelector month grids and TimeSlotSelector slot lists
"""

from meetdown.selection.primitives import (
    CalendarDate,
    TimeOfDay,
    ordered,
    expand_range,
)
from meetdown.selection.gesture import (
    Phase,
    GestureState,
    Toggle,
    Span,
    pointer_down,
    pointer_move,
    pointer_up,
    pointer_leave,
    apply_resolution,
    preview_cells,
)
from meetdown.selection.widget import RangeSelector
from meetdown.selection.days import (
    DaySelector,
    DayCell,
    MonthView,
    build_month_grid,
)
from meetdown.selection.slots import (
    SLOT_DURATION,
    TimeSlot,
    TimeSlotSelector,
    generate_time_slots,
)

__all__ = [
    # Primitives
    "CalendarDate",
    "TimeOfDay",
    "ordered",
    "expand_range",
    # Gesture
    "Phase",
    "GestureState",
    "Toggle",
    "Span",
    "pointer_down",
    "pointer_move",
    "pointer_up",
    "pointer_leave",
    "apply_resolution",
    "preview_cells",
    # Widgets
    "RangeSelector",
    "DaySelector",
    "DayCell",
    "MonthView",
    "build_month_grid",
    "SLOT_DURATION",
    "TimeSlot",
    "TimeSlotSelector",
    "generate_time_slots",
]
