"""Tests for the outline editor state machine.

Tests cover:
- Drawing phases and axis snapping of clicks
- Closing by clicking near the first point and by finish_drawing
- Live preview and its length
- Start corner placement and classification
- Corner dragging
- Event replay
"""

from __future__ import annotations

import pytest

from calepinage.domain.outline_editor import (
    EditorEvent,
    EditorEventKind,
    EditorState,
    OutlineEditor,
    classify_corner,
    find_corner,
)
from calepinage.domain.value_objects import CornerType, DrawingPhase, Point


@pytest.fixture
def editor() -> OutlineEditor:
    return OutlineEditor(scale=100)


@pytest.fixture
def closed_rectangle(rectangle: tuple[Point, ...]) -> EditorState:
    """Closed 4 x 3 m rectangle at 100 px/m."""
    return EditorState(points=rectangle, phase=DrawingPhase.CLOSED)


def _draw(editor: OutlineEditor, *clicks: tuple[float, float]) -> EditorState:
    state = EditorState()
    for x, y in clicks:
        state = editor.click(state, Point(x, y))
    return state


class TestDrawing:
    """Tests for clicks while drawing."""

    def test_first_click_starts_drawing(self, editor: OutlineEditor) -> None:
        """The first click is stored as is and enters the drawing phase."""
        state = editor.click(EditorState(), Point(13, 27))
        assert state.phase is DrawingPhase.DRAWING
        assert state.points == (Point(13, 27),)

    def test_clicks_snap_to_axis_and_decimeters(self, editor: OutlineEditor) -> None:
        """Each new point is aligned with the previous one and rounded to 0.1 m."""
        state = _draw(editor, (0, 0), (403, 8), (396, 302), (0, 297))
        assert state.points == (
            Point(0, 0),
            Point(400, 0),
            Point(400, 300),
            Point(0, 300),
        )

    def test_click_near_first_point_closes(self, editor: OutlineEditor) -> None:
        """A click within 20 px of the first point closes the outline."""
        state = _draw(editor, (0, 0), (403, 8), (396, 302), (0, 297), (5, 8))
        assert state.phase is DrawingPhase.CLOSED
        assert state.points[0] == state.points[-1]
        assert len(state.points) == 5
        assert editor.area(state) == pytest.approx(12.0)

    def test_closing_adds_forced_corner(self, editor: OutlineEditor) -> None:
        """Closing from a point off both axes inserts the missing corner."""
        state = _draw(editor, (0, 0), (400, 0), (400, 300), (10, 10))
        assert state.phase is DrawingPhase.CLOSED
        assert state.points == (
            Point(0, 0),
            Point(400, 0),
            Point(400, 300),
            Point(0, 300),
            Point(0, 0),
        )

    def test_too_few_points_do_not_close(self, editor: OutlineEditor) -> None:
        """With 2 points a click near the first one adds a point instead."""
        state = _draw(editor, (0, 0), (400, 0), (10, 5))
        assert state.phase is DrawingPhase.DRAWING
        assert len(state.points) == 3

    def test_clicks_on_closed_outline_ignored(
        self, editor: OutlineEditor, closed_rectangle: EditorState
    ) -> None:
        """Clicks after closing change nothing outside placement mode."""
        assert editor.click(closed_rectangle, Point(200, 150)) == closed_rectangle

    def test_start_drawing_then_click(self, editor: OutlineEditor) -> None:
        """After start_drawing the next click places the first point."""
        state = editor.start_drawing(EditorState())
        assert state.phase is DrawingPhase.DRAWING
        state = editor.click(state, Point(50, 60))
        assert state.points == (Point(50, 60),)

    def test_start_drawing_discards_outline(
        self, editor: OutlineEditor, closed_rectangle: EditorState
    ) -> None:
        """start_drawing begins a new empty outline."""
        state = editor.start_drawing(closed_rectangle)
        assert state.points == ()
        assert state.start_point is None


class TestFinishDrawing:
    """Tests for finish_drawing."""

    def test_finish_closes_with_forced_corner(self, editor: OutlineEditor) -> None:
        """finish_drawing closes like a click near the first point."""
        state = _draw(editor, (0, 0), (400, 0), (400, 300))
        state = editor.finish_drawing(state)
        assert state.phase is DrawingPhase.CLOSED
        assert state.points[-2:] == (Point(0, 300), Point(0, 0))
        assert editor.area(state) == pytest.approx(12.0)

    def test_finish_needs_three_points(self, editor: OutlineEditor) -> None:
        """With fewer than 3 points nothing happens."""
        state = _draw(editor, (0, 0), (400, 0))
        assert editor.finish_drawing(state) == state


class TestHover:
    """Tests for the live preview."""

    def test_preview_snaps_without_rounding(self, editor: OutlineEditor) -> None:
        """The preview follows the dominant axis at full precision."""
        state = _draw(editor, (0, 0))
        state = editor.hover(state, Point(237, 11))
        assert state.hover == Point(237, 0)

    def test_preview_length(self, editor: OutlineEditor) -> None:
        """The previewed segment length is reported to 0.1 m."""
        state = editor.hover(_draw(editor, (0, 0)), Point(237, 11))
        assert editor.preview_length(state) == 2.4

    def test_no_preview_when_idle(self, editor: OutlineEditor) -> None:
        """Hovering before drawing does nothing."""
        state = editor.hover(EditorState(), Point(10, 10))
        assert state.hover is None
        assert editor.preview_length(state) is None

    def test_closing_clears_preview(self, editor: OutlineEditor) -> None:
        """The preview disappears once the outline is closed."""
        state = _draw(editor, (0, 0), (400, 0), (400, 300))
        state = editor.hover(state, Point(50, 300))
        state = editor.finish_drawing(state)
        assert state.hover is None


class TestArea:
    """Tests for area reporting."""

    def test_zero_until_closed(self, editor: OutlineEditor) -> None:
        """An open outline has no area."""
        state = _draw(editor, (0, 0), (400, 0), (400, 300), (0, 300))
        assert editor.area(state) == 0.0


class TestStartCorner:
    """Tests for start corner placement."""

    def test_placement_requires_closed_outline(self, editor: OutlineEditor) -> None:
        """Placement mode is refused while drawing."""
        state = _draw(editor, (0, 0), (400, 0))
        assert not editor.begin_placing_start(state).placing_start

    def test_click_on_corner_sets_start(
        self, editor: OutlineEditor, closed_rectangle: EditorState
    ) -> None:
        """A click within 5 px of a corner picks it and leaves placement mode."""
        state = editor.begin_placing_start(closed_rectangle)
        state = editor.click(state, Point(398, 302))
        assert state.start_point == Point(400, 300)
        assert not state.placing_start
        assert editor.start_corner_type(state) is CornerType.BOTTOM_RIGHT

    def test_click_off_corner_keeps_placing(
        self, editor: OutlineEditor, closed_rectangle: EditorState
    ) -> None:
        """A click away from every corner is ignored."""
        state = editor.begin_placing_start(closed_rectangle)
        after = editor.click(state, Point(200, 150))
        assert after == state
        assert after.placing_start

    def test_is_corner(
        self, editor: OutlineEditor, closed_rectangle: EditorState
    ) -> None:
        """Corner detection uses a 5 px box per axis."""
        assert editor.is_corner(closed_rectangle, Point(404, 4))
        assert not editor.is_corner(closed_rectangle, Point(406, 0))


class TestFindCorner:
    """Tests for find_corner."""

    def test_nearest_corner_wins(self) -> None:
        """When two corners are in range the nearest one is returned."""
        points = [Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)]
        assert find_corner(points, Point(3, 1)) == 1

    def test_closing_duplicate_never_returned(self, rectangle: tuple[Point, ...]) -> None:
        """The first corner is reported by its own index."""
        assert find_corner(rectangle, Point(1, 1)) == 0


class TestClassifyCorner:
    """Tests for classify_corner."""

    @pytest.mark.parametrize(
        ("start", "expected"),
        [
            (Point(0, 0), CornerType.TOP_LEFT),
            (Point(400, 0), CornerType.TOP_RIGHT),
            (Point(0, 300), CornerType.BOTTOM_LEFT),
            (Point(401, 299), CornerType.BOTTOM_RIGHT),
        ],
    )
    def test_bounding_box_corners(
        self, rectangle: tuple[Point, ...], start: Point, expected: CornerType
    ) -> None:
        """Start points within 2 px of a box corner are classified."""
        assert classify_corner(start, rectangle) is expected

    def test_inner_corner_falls_back_to_top_left(
        self, l_shape: tuple[Point, ...], caplog: pytest.LogCaptureFixture
    ) -> None:
        """The reflex corner of an L is no box corner: top-left with a warning."""
        assert classify_corner(Point(200, 100), l_shape) is CornerType.TOP_LEFT
        assert "matches no bounding-box corner" in caplog.text

    def test_missing_start_is_top_left(self, rectangle: tuple[Point, ...]) -> None:
        """No start point classifies as top-left."""
        assert classify_corner(None, rectangle) is CornerType.TOP_LEFT


class TestDrag:
    """Tests for corner dragging."""

    def test_drag_keeps_previous_edge_aligned(
        self, editor: OutlineEditor, closed_rectangle: EditorState
    ) -> None:
        """The dragged corner stays aligned with its previous neighbour."""
        state = editor.begin_drag(closed_rectangle, Point(401, 299))
        assert state.dragged_corner == 2
        state = editor.drag(state, Point(500, 310))
        assert state.points[2] == Point(400, 310)

    def test_drag_first_corner_moves_closing_point(
        self, editor: OutlineEditor, closed_rectangle: EditorState
    ) -> None:
        """Dragging corner 0 updates the closing duplicate too."""
        state = editor.begin_drag(closed_rectangle, Point(2, 2))
        state = editor.drag(state, Point(10, 50))
        assert state.points[0] == Point(0, 50)
        assert state.points[-1] == state.points[0]

    def test_start_point_follows_dragged_corner(
        self, editor: OutlineEditor, closed_rectangle: EditorState
    ) -> None:
        """A start point on the dragged corner moves with it."""
        state = editor.click(editor.begin_placing_start(closed_rectangle), Point(400, 300))
        state = editor.begin_drag(state, Point(400, 300))
        state = editor.drag(state, Point(420, 350))
        assert state.start_point == state.points[2]

    def test_end_drag_releases_corner(
        self, editor: OutlineEditor, closed_rectangle: EditorState
    ) -> None:
        """After end_drag further moves do nothing."""
        state = editor.end_drag(editor.begin_drag(closed_rectangle, Point(0, 0)))
        assert state.dragged_corner is None
        assert editor.drag(state, Point(50, 50)) == state

    def test_drag_needs_a_corner(
        self, editor: OutlineEditor, closed_rectangle: EditorState
    ) -> None:
        """Grabbing away from the corners grabs nothing."""
        assert editor.begin_drag(closed_rectangle, Point(200, 150)).dragged_corner is None


class TestReplay:
    """Tests for event dispatch and replay."""

    def test_replay_draws_and_places_start(self, editor: OutlineEditor) -> None:
        """A recorded session rebuilds the outline and the start corner."""
        events = [
            EditorEvent(EditorEventKind.CLICK, 0, 0),
            EditorEvent(EditorEventKind.CLICK, 403, 8),
            EditorEvent(EditorEventKind.CLICK, 396, 302),
            EditorEvent(EditorEventKind.FINISH),
            EditorEvent(EditorEventKind.PLACE_START),
            EditorEvent(EditorEventKind.CLICK, 0, 1),
        ]
        state = editor.replay(events)
        assert state.is_closed
        assert state.start_point == Point(0, 0)
        assert editor.area(state) == pytest.approx(12.0)

    def test_reset_clears_everything(
        self, editor: OutlineEditor, closed_rectangle: EditorState
    ) -> None:
        """reset returns the empty idle state."""
        state = editor.apply(closed_rectangle, EditorEvent(EditorEventKind.RESET))
        assert state == EditorState()

    def test_cancel_while_drawing(self, editor: OutlineEditor) -> None:
        """cancel drops a half-drawn outline."""
        state = editor.click(EditorState(), Point(0, 0))
        state = editor.click(state, Point(200, 3))
        state = editor.apply(state, EditorEvent(EditorEventKind.CANCEL))
        assert state.phase is DrawingPhase.IDLE
        assert state.points == ()

    def test_pointer_event_requires_position(self) -> None:
        """Click events without coordinates are invalid."""
        with pytest.raises(ValueError, match="requires x and y"):
            EditorEvent(EditorEventKind.CLICK)

    def test_scale_must_be_positive(self) -> None:
        """A zero scale is rejected."""
        with pytest.raises(ValueError):
            OutlineEditor(scale=0)
