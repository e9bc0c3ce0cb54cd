"""
Unit tests for the range-gesture state machine.

Tests pure transitions, resolution policy, and selection updates.
"""

import pytest

from meetdown.selection.gesture import (
    GestureState,
    Phase,
    Span,
    Toggle,
    apply_resolution,
    pointer_down,
    pointer_leave,
    pointer_move,
    pointer_up,
    preview_cells,
)


def step(n: int) -> int:
    return n + 1


IDLE = GestureState()


class TestTransitions:
    """Test phase transitions."""

    def test_initial_state_is_idle(self):
        assert IDLE.phase is Phase.IDLE
        assert IDLE.anchor is None
        assert IDLE.cursor is None

    def test_pointer_down_enters_pending(self):
        state = pointer_down(IDLE, 5)
        assert state == GestureState(Phase.PENDING, anchor=5, cursor=5)

    def test_pointer_down_does_not_mutate(self):
        """Transitions return new values and leave the input untouched."""
        state = pointer_down(IDLE, 5)
        pointer_move(state, 7)
        assert state.phase is Phase.PENDING
        assert state.cursor == 5

    def test_state_is_frozen(self):
        with pytest.raises(AttributeError):
            IDLE.phase = Phase.PENDING

    def test_pointer_down_while_open_restarts(self):
        state = pointer_move(pointer_down(IDLE, 5), 9)
        state = pointer_down(state, 2)
        assert state == GestureState(Phase.PENDING, anchor=2, cursor=2)

    def test_move_to_other_cell_enters_dragging(self):
        state = pointer_move(pointer_down(IDLE, 5), 7)
        assert state == GestureState(Phase.DRAGGING, anchor=5, cursor=7)

    def test_move_over_anchor_stays_pending(self):
        state = pointer_move(pointer_down(IDLE, 5), 5)
        assert state.phase is Phase.PENDING

    def test_repeated_moves_idempotent(self):
        once = pointer_move(pointer_down(IDLE, 5), 7)
        twice = pointer_move(once, 7)
        assert once == twice

    def test_dragging_back_to_anchor_stays_dragging(self):
        state = pointer_move(pointer_move(pointer_down(IDLE, 5), 7), 5)
        assert state == GestureState(Phase.DRAGGING, anchor=5, cursor=5)

    def test_stray_events_while_idle_are_noops(self):
        """Moves, ups and leaves with no prior down change nothing."""
        assert pointer_move(IDLE, 3) == IDLE
        assert pointer_up(IDLE, 3) == (IDLE, None)
        assert pointer_leave(IDLE) == (IDLE, None)


class TestResolution:
    """Test how pointer_up and pointer_leave resolve gestures."""

    def test_up_without_drag_toggles_anchor(self):
        state, resolution = pointer_up(pointer_down(IDLE, 5), 5)
        assert state == IDLE
        assert resolution == Toggle(5)

    def test_up_over_anchor_after_hover_toggles(self):
        state = pointer_move(pointer_down(IDLE, 5), 5)
        _, resolution = pointer_up(state, 5)
        assert resolution == Toggle(5)

    def test_up_after_drag_spans_to_release_cell(self):
        state = pointer_move(pointer_down(IDLE, 5), 7)
        state, resolution = pointer_up(state, 8)
        assert state == IDLE
        assert resolution == Span(5, 8)

    def test_leave_commits_at_last_cursor(self):
        """Leaving mid-drag resolves as if released over the last hovered cell."""
        dragging = pointer_move(pointer_down(IDLE, 5), 9)
        assert pointer_leave(dragging) == pointer_up(dragging, 9)

    def test_leave_while_pending_toggles_anchor(self):
        state, resolution = pointer_leave(pointer_down(IDLE, 5))
        assert state == IDLE
        assert resolution == Toggle(5)

    def test_leave_without_cells_resets_without_resolution(self):
        orphan = GestureState(Phase.PENDING)
        assert pointer_leave(orphan) == (IDLE, None)


class TestApplyResolution:
    """Test selection updates."""

    def test_toggle_adds_then_removes(self):
        selection = apply_resolution(frozenset(), Toggle(5), step)
        assert selection == {5}
        assert apply_resolution(selection, Toggle(5), step) == frozenset()

    def test_span_unions_inclusive_range(self):
        assert apply_resolution(frozenset(), Span(3, 6), step) == {3, 4, 5, 6}

    def test_span_order_independent(self):
        forward = apply_resolution(frozenset({1}), Span(3, 6), step)
        backward = apply_resolution(frozenset({1}), Span(6, 3), step)
        assert forward == backward

    @pytest.mark.parametrize(
        "existing",
        [frozenset(), frozenset({4}), frozenset({1, 4, 9}), frozenset({3, 4, 5, 6})],
    )
    def test_span_is_additive_only(self, existing):
        """A drag over selected cells never removes them."""
        result = apply_resolution(existing, Span(3, 6), step)
        assert result == existing | {3, 4, 5, 6}


class TestPreview:
    """Test hover preview of in-progress gestures."""

    def test_idle_previews_nothing(self):
        assert preview_cells(IDLE, step) == frozenset()

    def test_pending_previews_anchor(self):
        assert preview_cells(pointer_down(IDLE, 5), step) == {5}

    def test_dragging_previews_range(self):
        state = pointer_move(pointer_down(IDLE, 7), 4)
        assert preview_cells(state, step) == {4, 5, 6, 7}
