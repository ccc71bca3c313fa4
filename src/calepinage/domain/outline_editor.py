"""Outline editor state machine.

The editor turns pointer events into an orthogonal outline. Its state is an
immutable :class:`EditorState` record; every transition of
:class:`OutlineEditor` takes a state and returns a new one, so callers keep
the current state in whatever container they use and replace it after each
event.

Phases:
    IDLE -> DRAWING on the first click (or ``start_drawing``)
    DRAWING -> CLOSED when a click lands near the first point (or
    ``finish_drawing``)
    any -> IDLE on ``reset`` or ``cancel``

Placement of the start corner is a flag orthogonal to the phase.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence

from calepinage.domain.geometry import (
    align_with,
    bounding_box,
    distance,
    distinct_corners,
    polygon_area,
    round_tenth,
    snap_to_axis,
)
from calepinage.domain.value_objects import CornerType, DrawingPhase, Point

logger = logging.getLogger(__name__)

# A click this close to the first point closes the outline (pixels)
CLOSE_THRESHOLD_PX = 20.0

# A click within this box around a vertex selects it (pixels, per axis)
CORNER_THRESHOLD_PX = 5.0

# Tolerance when matching the start point to bounding-box extremes (pixels)
CORNER_MATCH_TOLERANCE_PX = 2.0

# Closing needs at least this many committed points
MIN_POINTS_TO_CLOSE = 3


class EditorEventKind(str, Enum):
    """Kinds of events the editor can replay."""

    CLICK = "click"
    MOVE = "move"
    START = "start"
    FINISH = "finish"
    PLACE_START = "place_start"
    DRAG_START = "drag_start"
    DRAG_MOVE = "drag_move"
    DRAG_END = "drag_end"
    RESET = "reset"
    CANCEL = "cancel"


# Events that carry a pointer position
POINTER_EVENTS = frozenset(
    {
        EditorEventKind.CLICK,
        EditorEventKind.MOVE,
        EditorEventKind.DRAG_START,
        EditorEventKind.DRAG_MOVE,
    }
)


@dataclass(frozen=True)
class EditorEvent:
    """A recorded editor event; position is required for pointer events."""

    kind: EditorEventKind
    x: float | None = None
    y: float | None = None

    def __post_init__(self) -> None:
        if self.kind in POINTER_EVENTS and (self.x is None or self.y is None):
            raise ValueError(f"Event '{self.kind.value}' requires x and y")

    @property
    def position(self) -> Point | None:
        if self.x is None or self.y is None:
            return None
        return Point(self.x, self.y)


@dataclass(frozen=True)
class EditorState:
    """Snapshot of the outline being edited.

    Attributes:
        points: Committed vertices; once closed the last repeats the first.
        phase: Current drawing phase.
        placing_start: True while the next click picks the start corner.
        start_point: Corner tile rows are laid out from, if chosen.
        hover: Live preview of the next vertex while drawing.
        dragged_corner: Index in ``points`` of the corner being dragged.
    """

    points: tuple[Point, ...] = ()
    phase: DrawingPhase = DrawingPhase.IDLE
    placing_start: bool = False
    start_point: Point | None = None
    hover: Point | None = None
    dragged_corner: int | None = None

    @property
    def is_closed(self) -> bool:
        return self.phase is DrawingPhase.CLOSED

    @property
    def is_drawing(self) -> bool:
        return self.phase is DrawingPhase.DRAWING

    @property
    def corners(self) -> list[Point]:
        """Vertices without the closing duplicate."""
        return distinct_corners(self.points)


def find_corner(
    points: Sequence[Point],
    pos: Point,
    threshold: float = CORNER_THRESHOLD_PX,
) -> int | None:
    """Index of the vertex nearest to ``pos``, if any vertex is within ``threshold``.

    The closing duplicate is never returned; its index is the first point's.
    """
    corners = distinct_corners(points)
    near = any(
        abs(c.x - pos.x) < threshold and abs(c.y - pos.y) < threshold for c in corners
    )
    if not near:
        return None
    return min(range(len(corners)), key=lambda i: distance(corners[i], pos))


def classify_corner(
    start_point: Point | None,
    points: Sequence[Point],
    tolerance: float = CORNER_MATCH_TOLERANCE_PX,
) -> CornerType:
    """Which bounding-box corner of ``points`` the start point sits on.

    Falls back to top-left when the start point is unset, the outline has
    fewer than 3 points, or the start point matches no corner of the box.
    Only the last case is logged, since it usually means a stale or
    corrupted start point.
    """
    if start_point is None or len(points) < 3:
        return CornerType.TOP_LEFT
    box = bounding_box(points)

    def near(a: float, b: float) -> bool:
        return abs(a - b) < tolerance

    x, y = start_point.x, start_point.y
    if near(x, box.min_x) and near(y, box.min_y):
        return CornerType.TOP_LEFT
    if near(x, box.max_x) and near(y, box.min_y):
        return CornerType.TOP_RIGHT
    if near(x, box.min_x) and near(y, box.max_y):
        return CornerType.BOTTOM_LEFT
    if near(x, box.max_x) and near(y, box.max_y):
        return CornerType.BOTTOM_RIGHT

    logger.warning(
        "Start point (%.2f, %.2f) matches no bounding-box corner; using top-left",
        x,
        y,
    )
    return CornerType.TOP_LEFT


class OutlineEditor:
    """Applies pointer and control events to an :class:`EditorState`.

    The editor holds no state of its own besides the scale used to round
    committed edges to whole decimeters.

    Attributes:
        scale: Pixels per meter.
    """

    def __init__(self, scale: float) -> None:
        if scale <= 0:
            raise ValueError("Scale must be positive")
        self.scale = scale

    # -- drawing ----------------------------------------------------------

    def start_drawing(self, state: EditorState) -> EditorState:
        """Begin a new outline; the next click places its first point."""
        if state.points:
            logger.debug("Discarding %d points to start a new outline", len(state.points))
        return EditorState(phase=DrawingPhase.DRAWING)

    def click(self, state: EditorState, pos: Point) -> EditorState:
        """Handle a click at ``pos``.

        In placement mode the click selects the start corner. Otherwise it
        starts, extends or closes the outline depending on the phase.
        Clicks on a closed outline are ignored.
        """
        if state.placing_start:
            return self._place_start(state, pos)

        if state.phase is DrawingPhase.IDLE:
            return replace(state, points=(pos,), phase=DrawingPhase.DRAWING, hover=None)

        if state.phase is DrawingPhase.CLOSED:
            logger.debug("Ignoring click on closed outline at (%.1f, %.1f)", pos.x, pos.y)
            return state

        if not state.points:
            return replace(state, points=(pos,), hover=None)

        first = state.points[0]
        if (
            len(state.points) >= MIN_POINTS_TO_CLOSE
            and distance(pos, first) < CLOSE_THRESHOLD_PX
        ):
            return self._close(state)

        new_point = snap_to_axis(state.points[-1], pos, self.scale)
        return replace(state, points=state.points + (new_point,))

    def hover(self, state: EditorState, pos: Point) -> EditorState:
        """Update the live preview of the next vertex.

        The preview uses the same dominant-axis projection as committed
        points but without decimeter rounding.
        """
        if not state.is_drawing:
            return state
        if not state.points:
            return replace(state, hover=pos)
        return replace(state, hover=snap_to_axis(state.points[-1], pos))

    def preview_length(self, state: EditorState) -> float | None:
        """Length in meters (to 0.1 m) of the segment being previewed."""
        if not state.is_drawing or not state.points or state.hover is None:
            return None
        return round_tenth(distance(state.points[-1], state.hover) / self.scale)

    def finish_drawing(self, state: EditorState) -> EditorState:
        """Close the outline from the current last point, if it has enough points."""
        if not state.is_drawing or len(state.points) < MIN_POINTS_TO_CLOSE:
            logger.debug("Cannot finish drawing with %d points", len(state.points))
            return state
        return self._close(state)

    def _close(self, state: EditorState) -> EditorState:
        first = state.points[0]
        last = state.points[-1]
        # Corner that makes both closing edges axis-aligned
        forced = align_with(last, first)
        points = state.points
        if forced != last and forced != first:
            points = points + (forced,)
        points = points + (first,)
        logger.debug("Outline closed with %d corners", len(points) - 1)
        return replace(state, points=points, phase=DrawingPhase.CLOSED, hover=None)

    # -- start corner -----------------------------------------------------

    def begin_placing_start(self, state: EditorState) -> EditorState:
        """Enter placement mode; only a closed outline has corners to pick."""
        if not state.is_closed:
            logger.debug("Start corner placement requires a closed outline")
            return state
        return replace(state, placing_start=True, dragged_corner=None)

    def _place_start(self, state: EditorState, pos: Point) -> EditorState:
        index = find_corner(state.points, pos)
        if index is None:
            return state
        corner = state.corners[index]
        logger.debug("Start point set to (%.1f, %.1f)", corner.x, corner.y)
        return replace(state, start_point=corner, placing_start=False)

    def is_corner(self, state: EditorState, pos: Point) -> bool:
        return find_corner(state.points, pos) is not None

    def start_corner_type(self, state: EditorState) -> CornerType:
        return classify_corner(state.start_point, state.points)

    # -- corner drag ------------------------------------------------------

    def begin_drag(self, state: EditorState, pos: Point) -> EditorState:
        """Grab the corner under ``pos`` on a closed outline."""
        if not state.is_closed or state.placing_start:
            return state
        index = find_corner(state.points, pos)
        if index is None:
            return state
        return replace(state, dragged_corner=index)

    def drag(self, state: EditorState, pos: Point) -> EditorState:
        """Move the grabbed corner, keeping it aligned with its previous neighbour.

        The edge to the previous vertex stays axis-aligned; the edge to the
        next vertex is not re-checked. Dragging the first corner also moves
        the closing duplicate, and a start point on the dragged corner
        follows it.
        """
        index = state.dragged_corner
        if index is None:
            return state

        points = list(state.points)
        closed = len(points) > 1 and points[0] == points[-1]
        if index > 0:
            neighbour: Point | None = points[index - 1]
        elif closed and len(points) > 2:
            neighbour = points[-2]
        else:
            neighbour = None

        old = points[index]
        new = align_with(neighbour, pos) if neighbour is not None else pos
        points[index] = new
        if index == 0 and closed:
            points[-1] = new

        start_point = state.start_point
        if start_point == old:
            start_point = new
        return replace(state, points=tuple(points), start_point=start_point)

    def end_drag(self, state: EditorState) -> EditorState:
        return replace(state, dragged_corner=None)

    # -- misc -------------------------------------------------------------

    def reset(self, state: EditorState | None = None) -> EditorState:
        """Clear the outline, start point and all flags."""
        return EditorState()

    def cancel(self, state: EditorState) -> EditorState:
        """Abandon the current outline; same as :meth:`reset`."""
        logger.debug("Outline cancelled in phase %s", state.phase.value)
        return self.reset(state)

    def area(self, state: EditorState) -> float:
        """Outline area in square meters; 0 until the outline is closed."""
        if not state.is_closed:
            return 0.0
        return polygon_area(state.points, self.scale)

    def apply(self, state: EditorState, event: EditorEvent) -> EditorState:
        """Dispatch a recorded event to the matching transition."""
        pos = event.position
        kind = event.kind
        if kind is EditorEventKind.CLICK:
            return self.click(state, pos)
        if kind is EditorEventKind.MOVE:
            return self.hover(state, pos)
        if kind is EditorEventKind.START:
            return self.start_drawing(state)
        if kind is EditorEventKind.FINISH:
            return self.finish_drawing(state)
        if kind is EditorEventKind.PLACE_START:
            return self.begin_placing_start(state)
        if kind is EditorEventKind.DRAG_START:
            return self.begin_drag(state, pos)
        if kind is EditorEventKind.DRAG_MOVE:
            return self.drag(state, pos)
        if kind is EditorEventKind.DRAG_END:
            return self.end_drag(state)
        if kind is EditorEventKind.CANCEL:
            return self.cancel(state)
        return self.reset(state)

    def replay(
        self, events: Sequence[EditorEvent], state: EditorState | None = None
    ) -> EditorState:
        """Apply ``events`` in order, starting from ``state`` or an empty editor."""
        current = state if state is not None else EditorState()
        for event in events:
            current = self.apply(current, event)
        return current
