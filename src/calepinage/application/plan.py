"""Application state container.

:class:`PlanState` bundles everything a drawing session owns: the editor
state (outline, start point, flags), the tile configuration and the scale.
It is immutable; transitions return new instances. It converts to and from
the persisted :class:`PlanDocument` format.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from calepinage.application.config.schema import (
    DEFAULT_SCALE,
    PlanDocument,
    PointSchema,
)
from calepinage.domain.geometry import flatten, points_from_flat, polygon_area
from calepinage.domain.layout import LayoutResult, compute_layout
from calepinage.domain.outline_editor import EditorEvent, EditorState, OutlineEditor
from calepinage.domain.value_objects import (
    DrawingPhase,
    LayoutPattern,
    Point,
    TileConfig,
)


def _phase_for(points: tuple[Point, ...]) -> DrawingPhase:
    """Phase a loaded outline resumes in."""
    if not points:
        return DrawingPhase.IDLE
    if len(points) >= 3 and points[0] == points[-1]:
        return DrawingPhase.CLOSED
    return DrawingPhase.DRAWING


@dataclass(frozen=True)
class PlanState:
    """A floor plan being edited and tiled.

    Attributes:
        editor: Outline editor state.
        tiles: Tile configuration.
        scale: Pixels per meter.
    """

    editor: EditorState = field(default_factory=EditorState)
    tiles: TileConfig = field(default_factory=TileConfig)
    scale: float = DEFAULT_SCALE

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError("Scale must be positive")

    @classmethod
    def from_document(cls, doc: PlanDocument, use_offcuts: bool = True) -> "PlanState":
        """Build a state from a loaded plan.

        A closed outline resumes in the closed phase, an open one in the
        drawing phase.
        """
        points = points_from_flat(doc.points)
        start = Point(doc.start_point.x, doc.start_point.y) if doc.start_point else None
        editor = EditorState(points=points, phase=_phase_for(points), start_point=start)
        tiles = TileConfig(
            tile_w=doc.tile_w,
            tile_h=doc.tile_h,
            spacing=doc.spacing,
            pattern=LayoutPattern(doc.pattern),
            orientation_deg=doc.orientation,
            use_offcuts=use_offcuts,
        )
        return cls(editor=editor, tiles=tiles, scale=doc.scale)

    def to_document(self) -> PlanDocument:
        """Serialize into the persisted plan format."""
        start = self.editor.start_point
        return PlanDocument(
            points=flatten(self.editor.points),
            tile_w=self.tiles.tile_w,
            tile_h=self.tiles.tile_h,
            spacing=self.tiles.spacing,
            pattern=self.tiles.pattern.value,
            orientation=self.tiles.orientation_deg,
            start_point=PointSchema(x=start.x, y=start.y) if start else None,
            scale=self.scale,
        )

    @property
    def outline_editor(self) -> OutlineEditor:
        return OutlineEditor(self.scale)

    @property
    def area(self) -> float:
        """Area in square meters once the outline is closed, else 0."""
        if not self.editor.is_closed:
            return 0.0
        return polygon_area(self.editor.points, self.scale)

    def apply(self, event: EditorEvent) -> "PlanState":
        """Apply one editor event."""
        return replace(self, editor=self.outline_editor.apply(self.editor, event))

    def with_tiles(self, **changes) -> "PlanState":
        """Return a copy with some tile settings replaced (None values ignored)."""
        updates = {k: v for k, v in changes.items() if v is not None}
        if not updates:
            return self
        return replace(self, tiles=replace(self.tiles, **updates))

    def layout(self) -> LayoutResult:
        """Tile the outline; empty until the outline is closed and a start is set."""
        if not self.editor.is_closed:
            return LayoutResult.empty()
        return compute_layout(
            self.editor.points, self.editor.start_point, self.tiles, self.scale
        )
