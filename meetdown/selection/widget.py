"""
Base class for range-selection widgets.

Holds the gesture state and committed selection for one widget instance,
advancing them through the pure transitions in meetdown.selection.gesture.
Subclasses supply cell validation, the unit step, and how the committed
selection is materialized for the owner callback.
"""

import logging
from typing import Callable, Generic, Optional, Sequence, TypeVar

from meetdown.selection import gesture
from meetdown.selection.gesture import GestureState, Resolution

logger = logging.getLogger(__name__)

C = TypeVar("C")


class RangeSelector(Generic[C]):
    """
    Click-to-toggle / drag-to-union selector over an ordered cell type.

    The owner callback fires synchronously once per committed change with
    the full selection in ascending order. It never fires mid-drag.
    """

    def __init__(self, on_selection_change: Optional[Callable[[list], None]] = None):
        self._on_selection_change = on_selection_change
        self._gesture: GestureState = GestureState()
        self._selected: frozenset = frozenset()

    # -------------------------------------------------------------------------
    # Subclass hooks
    # -------------------------------------------------------------------------

    def _validate(self, cell) -> C:
        """Return the canonical cell or raise InvalidCellError."""
        raise NotImplementedError

    def _step(self, cell: C) -> C:
        raise NotImplementedError

    def _materialize(self, cells: Sequence[C]) -> list:
        return list(cells)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def gesture(self) -> GestureState:
        return self._gesture

    @property
    def selected_cells(self) -> list[C]:
        return sorted(self._selected)

    @property
    def selection(self) -> list:
        """Committed selection in ascending order."""
        return self._materialize(self.selected_cells)

    def is_selected(self, cell) -> bool:
        return self._validate(cell) in self._selected

    def preview(self) -> frozenset:
        """Cells the in-progress gesture would touch if released now."""
        return gesture.preview_cells(self._gesture, self._step)

    # -------------------------------------------------------------------------
    # Pointer handlers
    # -------------------------------------------------------------------------

    def pointer_down(self, cell) -> None:
        self._gesture = gesture.pointer_down(self._gesture, self._validate(cell))

    def pointer_move(self, cell) -> None:
        self._gesture = gesture.pointer_move(self._gesture, self._validate(cell))

    def pointer_up(self, cell) -> None:
        self._gesture, resolution = gesture.pointer_up(
            self._gesture, self._validate(cell)
        )
        self._commit(resolution)

    def pointer_leave(self) -> None:
        self._gesture, resolution = gesture.pointer_leave(self._gesture)
        self._commit(resolution)

    def clear(self) -> None:
        """Drop the whole selection and any open gesture."""
        self._gesture = GestureState()
        self._replace(frozenset())

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _commit(self, resolution: Optional[Resolution]) -> None:
        if resolution is None:
            return
        logger.debug(f"{type(self).__name__} resolved {resolution}")
        self._replace(gesture.apply_resolution(self._selected, resolution, self._step))

    def _replace(self, selected: frozenset) -> None:
        if selected == self._selected:
            return
        self._selected = selected
        if self._on_selection_change is not None:
            self._on_selection_change(self.selection)
