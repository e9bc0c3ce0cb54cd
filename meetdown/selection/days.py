"""
DaySelector: month-grid day selection with multi-month navigation.

Each visible month panel renders as a fixed 6x7 matrix (42 cells, column 0 =
Sunday) so panel height never changes. Selection is keyed by absolute
calendar date, so navigating months never filters or shifts it.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from meetdown.exceptions import InvalidCellError
from meetdown.selection.primitives import CalendarDate, next_day
from meetdown.selection.widget import RangeSelector

logger = logging.getLogger(__name__)

GRID_ROWS = 6
GRID_COLUMNS = 7
GRID_CELLS = GRID_ROWS * GRID_COLUMNS

WEEKDAY_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def build_month_grid(year: int, month: int) -> list[Optional[CalendarDate]]:
    """
    Lay out a month as 42 cells.

    Leading cells before day 1 and trailing cells after the last day are
    None placeholders. Day 1 sits at index day_of_week(first) % 7.
    """
    first = CalendarDate(year, month, 1)
    offset = first.day_of_week % GRID_COLUMNS

    cells: list[Optional[CalendarDate]] = [None] * GRID_CELLS
    for day in range(1, first.days_in_month + 1):
        cells[offset + day - 1] = CalendarDate(year, month, day)
    return cells


@dataclass(frozen=True)
class DayCell:
    """One rendered grid cell. day is None for placeholders."""

    day: Optional[CalendarDate]
    selected: bool = False
    highlighted: bool = False

    @property
    def interactive(self) -> bool:
        return self.day is not None


@dataclass(frozen=True)
class MonthView:
    """Render model for one month panel."""

    year: int
    month: int
    title: str
    weekdays: tuple[str, ...]
    cells: tuple[DayCell, ...]

    def rows(self) -> list[tuple[DayCell, ...]]:
        return [
            self.cells[i:i + GRID_COLUMNS]
            for i in range(0, GRID_CELLS, GRID_COLUMNS)
        ]


class DaySelector(RangeSelector[CalendarDate]):
    """
    Select calendar days by click-toggle or drag-range across month panels.

    Args:
        on_selection_change: Called with the ascending list of selected days
            after every committed change
        start: Any day in the first visible month (default: today)
        visible_months: Number of consecutive month panels to show

    Example:
        >>> selector = DaySelector(print, start=CalendarDate(2025, 1, 1))
        >>> selector.pointer_down(CalendarDate(2025, 1, 5))
        >>> selector.pointer_up(CalendarDate(2025, 1, 5))
        [CalendarDate(year=2025, month=1, day=5)]
    """

    def __init__(
        self,
        on_selection_change: Optional[Callable[[list[CalendarDate]], None]] = None,
        start: Optional[CalendarDate] = None,
        visible_months: int = 1,
    ):
        super().__init__(on_selection_change)
        if visible_months < 1:
            raise ValueError(f"visible_months must be at least 1, got {visible_months}")

        first = (start or CalendarDate.today()).first_of_month()
        self._panels: list[CalendarDate] = [
            first.add_months(i) for i in range(visible_months)
        ]

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    @property
    def panels(self) -> list[tuple[int, int]]:
        """(year, month) of each visible panel, in panel order."""
        return [(p.year, p.month) for p in self._panels]

    def previous_month(self, panel: int = 0) -> None:
        self._shift_panel(panel, -1)

    def next_month(self, panel: int = 0) -> None:
        self._shift_panel(panel, 1)

    def _shift_panel(self, panel: int, months: int) -> None:
        self._check_panel(panel)
        self._panels[panel] = self._panels[panel].add_months(months)

    def _check_panel(self, panel: int) -> None:
        if not 0 <= panel < len(self._panels):
            raise InvalidCellError(f"No month panel at index {panel}")

    # -------------------------------------------------------------------------
    # Grid
    # -------------------------------------------------------------------------

    def grid(self, panel: int = 0) -> list[Optional[CalendarDate]]:
        self._check_panel(panel)
        first = self._panels[panel]
        return build_month_grid(first.year, first.month)

    def cell_at(self, panel: int, index: int) -> CalendarDate:
        """
        Resolve a grid position to its day.

        Raises:
            InvalidCellError: If the index is outside the grid or is a
                placeholder
        """
        if not 0 <= index < GRID_CELLS:
            raise InvalidCellError(f"Grid index {index} outside 0..{GRID_CELLS - 1}")
        day = self.grid(panel)[index]
        if day is None:
            raise InvalidCellError(f"Grid index {index} is an empty placeholder")
        return day

    def month_view(self, panel: int = 0) -> MonthView:
        self._check_panel(panel)
        first = self._panels[panel]

        highlighted = self.preview()
        cells = tuple(
            DayCell(
                day=day,
                selected=day is not None and day in self._selected,
                highlighted=day is not None and day in highlighted,
            )
            for day in build_month_grid(first.year, first.month)
        )
        return MonthView(
            year=first.year,
            month=first.month,
            title=first.to_date().strftime("%B %Y"),
            weekdays=WEEKDAY_HEADERS,
            cells=cells,
        )

    def is_visible(self, day: CalendarDate) -> bool:
        return any(
            (day.year, day.month) == (p.year, p.month) for p in self._panels
        )

    # -------------------------------------------------------------------------
    # RangeSelector hooks
    # -------------------------------------------------------------------------

    def _validate(self, cell) -> CalendarDate:
        if not isinstance(cell, CalendarDate):
            raise InvalidCellError(f"Expected CalendarDate, got {type(cell).__name__}")
        if not self.is_visible(cell):
            raise InvalidCellError(f"{cell} is not in a visible month panel")
        return cell

    def _step(self, cell: CalendarDate) -> CalendarDate:
        return next_day(cell)

    def is_selected(self, cell) -> bool:
        # Selection outlives navigation, so membership is not limited to
        # visible panels.
        return cell in self._selected
