"""
Range-gesture state machine shared by the day and time-slot selectors.

The gesture is a frozen value. Each pointer event is a pure transition
function returning the next state; resolving events additionally return a
Resolution describing the committed change. Applying a Resolution to a
selection set is also pure.

States:
    IDLE -> PENDING -> DRAGGING -> IDLE
    PENDING may resolve directly without passing through DRAGGING.

Resolution policy:
    - No drag: toggle the anchor cell.
    - Drag: union every cell between anchor and cursor (additive only).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar, Union

from meetdown.selection.primitives import expand_range

logger = logging.getLogger(__name__)

C = TypeVar("C")


class Phase(str, Enum):
    """Gesture phase."""

    IDLE = "idle"
    PENDING = "pending"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class GestureState(Generic[C]):
    """
    Per-widget gesture state.

    Invariant: anchor and cursor are None exactly when phase is IDLE.
    """

    phase: Phase = Phase.IDLE
    anchor: Optional[C] = None
    cursor: Optional[C] = None

    @property
    def is_idle(self) -> bool:
        return self.phase is Phase.IDLE

    @property
    def is_dragging(self) -> bool:
        return self.phase is Phase.DRAGGING


@dataclass(frozen=True)
class Toggle(Generic[C]):
    """Flip membership of a single cell."""

    cell: C


@dataclass(frozen=True)
class Span(Generic[C]):
    """Union every cell between two ends (either order) into the selection."""

    start: C
    end: C


Resolution = Union[Toggle, Span]


# =============================================================================
# Transitions
# =============================================================================


def pointer_down(state: GestureState, cell: C) -> GestureState:
    """
    Start a pending gesture anchored at cell.

    A gesture left open by a lost pointer-up is discarded without resolving.
    """
    if not state.is_idle:
        logger.debug(f"Discarding open gesture anchored at {state.anchor}")
    return GestureState(phase=Phase.PENDING, anchor=cell, cursor=cell)


def pointer_move(state: GestureState, cell: C) -> GestureState:
    """
    Track the hovered cell.

    No-op while idle. Hovering the anchor while pending stays pending; any
    other cell enters DRAGGING, which then persists until resolution.
    """
    if state.is_idle:
        return state

    if state.phase is Phase.PENDING and cell == state.anchor:
        return state

    if state.is_dragging and cell == state.cursor:
        return state

    return GestureState(phase=Phase.DRAGGING, anchor=state.anchor, cursor=cell)


def pointer_up(
    state: GestureState, cell: C
) -> tuple[GestureState, Optional[Resolution]]:
    """
    Resolve the gesture and reset to idle.

    Returns:
        Tuple of (idle state, resolution). Resolution is None when the
        gesture was already idle.
    """
    if state.is_idle:
        return state, None

    if state.is_dragging:
        resolution: Resolution = Span(start=state.anchor, end=cell)
    else:
        resolution = Toggle(cell=state.anchor)

    return GestureState(), resolution


def pointer_leave(state: GestureState) -> tuple[GestureState, Optional[Resolution]]:
    """
    Close a gesture when the pointer leaves the widget.

    Acts as pointer_up at the last known cursor, falling back to the anchor.
    If neither is known the state is reset without resolving.
    """
    if state.is_idle:
        return state, None

    last = state.cursor if state.cursor is not None else state.anchor
    if last is None:
        return GestureState(), None

    return pointer_up(state, last)


# =============================================================================
# Selection Updates
# =============================================================================


def resolution_cells(resolution: Resolution, step: Callable[[C], C]) -> list[C]:
    """Cells touched by a resolution, in ascending order."""
    if isinstance(resolution, Toggle):
        return [resolution.cell]
    return expand_range(resolution.start, resolution.end, step)


def apply_resolution(
    selection: frozenset,
    resolution: Resolution,
    step: Callable[[C], C],
) -> frozenset:
    """
    Apply a resolution to a selection set.

    Args:
        selection: Current committed selection
        resolution: Toggle or Span produced by pointer_up / pointer_leave
        step: Successor function for the cell type

    Returns:
        New selection. A Toggle adds or removes one cell; a Span is a pure
        union and never removes anything.
    """
    if isinstance(resolution, Toggle):
        if resolution.cell in selection:
            return selection - {resolution.cell}
        return selection | {resolution.cell}

    return selection | frozenset(resolution_cells(resolution, step))


def preview_cells(state: GestureState, step: Callable[[C], C]) -> frozenset:
    """
    Cells that the in-progress gesture would touch if released now.

    Used for hover highlighting only; never part of the committed selection.
    """
    if state.is_idle:
        return frozenset()
    if state.is_dragging:
        return frozenset(expand_range(state.anchor, state.cursor, step))
    return frozenset([state.anchor])
