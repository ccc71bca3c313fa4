"""Domain layer: geometry, outline editor and tile layout engine."""

from .geometry import (
    bounding_box,
    distance,
    edge_lengths,
    flatten,
    is_orthogonal,
    point_in_polygon,
    points_from_flat,
    polygon_area,
    snap_to_axis,
)
from .layout import (
    LayoutResult,
    OffcutPool,
    PlacedTile,
    TileCounts,
    TileLayoutEngine,
    compute_layout,
)
from .outline_editor import (
    EditorEvent,
    EditorEventKind,
    EditorState,
    OutlineEditor,
    classify_corner,
    find_corner,
)
from .value_objects import (
    BoundingBox,
    CornerType,
    DrawingPhase,
    EdgeLength,
    LayoutPattern,
    Point,
    TileCategory,
    TileConfig,
)

__all__ = [
    # Value objects
    "BoundingBox",
    "CornerType",
    "DrawingPhase",
    "EdgeLength",
    "LayoutPattern",
    "Point",
    "TileCategory",
    "TileConfig",
    # Geometry
    "bounding_box",
    "distance",
    "edge_lengths",
    "flatten",
    "is_orthogonal",
    "point_in_polygon",
    "points_from_flat",
    "polygon_area",
    "snap_to_axis",
    # Outline editor
    "EditorEvent",
    "EditorEventKind",
    "EditorState",
    "OutlineEditor",
    "classify_corner",
    "find_corner",
    # Layout
    "LayoutResult",
    "OffcutPool",
    "PlacedTile",
    "TileCounts",
    "TileLayoutEngine",
    "compute_layout",
]
