"""Value objects for the calepinage domain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CornerType(str, Enum):
    """Bounding-box corner a layout starts from."""

    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"

    @property
    def goes_right(self) -> bool:
        """True when rows are laid out left to right from this corner."""
        return self not in (CornerType.TOP_RIGHT, CornerType.BOTTOM_RIGHT)

    @property
    def goes_down(self) -> bool:
        """True when rows are stacked top to bottom from this corner."""
        return self not in (CornerType.BOTTOM_LEFT, CornerType.BOTTOM_RIGHT)


class LayoutPattern(str, Enum):
    """How consecutive tile rows are aligned.

    - STRAIGHT: every row starts at the start corner
    - OFFSET: odd rows start with a half tile (running bond)
    """

    STRAIGHT = "straight"
    OFFSET = "offset"


class TileCategory(str, Enum):
    """Category of a placed tile, used for counting and styling."""

    FULL = "full"
    PARTIAL = "partial"
    OFFCUT = "offcut"


class DrawingPhase(str, Enum):
    """Phase of the outline editor state machine."""

    IDLE = "idle"
    DRAWING = "drawing"
    CLOSED = "closed"


@dataclass(frozen=True)
class Point:
    """A position on the canvas, in pixels."""

    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box of an outline, in pixels."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def __post_init__(self) -> None:
        if self.max_x < self.min_x or self.max_y < self.min_y:
            raise ValueError("Bounding box max must not be below min")

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class TileConfig:
    """Tile and laying parameters.

    The layout engine does not reject degenerate values here; it returns
    an empty layout for them instead. Range checks belong to the plan
    schema at the input boundary.

    Attributes:
        tile_w: Tile width in centimeters.
        tile_h: Tile height in centimeters.
        spacing: Joint width in millimeters.
        pattern: Row alignment pattern.
        orientation_deg: Rotation applied to each tile when rendered.
        use_offcuts: Whether cut-off remainders may serve later partial tiles.
    """

    tile_w: float = 120.0
    tile_h: float = 30.0
    spacing: float = 3.0
    pattern: LayoutPattern = LayoutPattern.STRAIGHT
    orientation_deg: float = 0.0
    use_offcuts: bool = True

    def to_pixels(self, scale: float) -> tuple[float, float, float]:
        """Return (tile width, tile height, joint) in pixels at ``scale`` px/m."""
        return (
            self.tile_w / 100 * scale,
            self.tile_h / 100 * scale,
            self.spacing / 1000 * scale,
        )


@dataclass(frozen=True)
class EdgeLength:
    """Dimension label of one outline edge.

    Attributes:
        start: First endpoint of the edge.
        end: Second endpoint of the edge.
        meters: Edge length rounded to the nearest 0.1 m.
        horizontal: True if the edge runs along the x axis.
    """

    start: Point
    end: Point
    meters: float
    horizontal: bool
