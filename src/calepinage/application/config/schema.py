"""Pydantic models for plan files.

A plan file is the JSON document the drawing application saves and loads::

    {
        "points": [x0, y0, x1, y1, ...],
        "tileW": 120, "tileH": 30, "spacing": 3,
        "pattern": "straight", "orientation": 0,
        "startPoint": {"x": 0, "y": 0},
        "scale": 80
    }

``points`` is the flat outline including the closing duplicate of the first
point. Missing keys take the application defaults below. Field names are
camelCase on disk and snake_case in Python.
"""

from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from calepinage.domain.outline_editor import POINTER_EVENTS, EditorEventKind

# Defaults of a fresh drawing session
DEFAULT_SCALE = 80.0
DEFAULT_TILE_W = 120.0
DEFAULT_TILE_H = 30.0
DEFAULT_SPACING = 3.0


class PointSchema(BaseModel):
    """A canvas point in pixels."""

    model_config = ConfigDict(extra="forbid")

    x: float
    y: float


class PlanDocument(BaseModel):
    """A saved floor plan with its tiling settings.

    Attributes:
        points: Flat outline coordinates in pixels.
        tile_w: Tile width in centimeters.
        tile_h: Tile height in centimeters.
        spacing: Joint width in millimeters.
        pattern: Row alignment pattern.
        orientation: Tile rotation in degrees, for rendering only.
        start_point: Corner tile rows start from.
        scale: Pixels per meter.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    points: list[float] = Field(default_factory=list)
    tile_w: float = Field(
        default=DEFAULT_TILE_W, gt=0, alias="tileW", description="Tile width in cm"
    )
    tile_h: float = Field(
        default=DEFAULT_TILE_H, gt=0, alias="tileH", description="Tile height in cm"
    )
    spacing: float = Field(
        default=DEFAULT_SPACING, ge=0, description="Joint width in mm"
    )
    pattern: Literal["straight", "offset"] = "straight"
    orientation: float = Field(default=0.0, description="Tile rotation in degrees")
    start_point: PointSchema | None = Field(default=None, alias="startPoint")
    scale: float = Field(default=DEFAULT_SCALE, gt=0, description="Pixels per meter")

    @field_validator("points")
    @classmethod
    def validate_points(cls, v: list[float]) -> list[float]:
        """Validate that coordinates come in x, y pairs."""
        if len(v) % 2:
            raise ValueError("points must contain an even number of coordinates")
        return v

    def to_json_dict(self) -> dict:
        """Serialize with the on-disk (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


class EditorEventSchema(BaseModel):
    """One recorded editor event.

    Pointer events (click, move, drag_start, drag_move) need ``x`` and ``y``.
    """

    model_config = ConfigDict(extra="forbid")

    kind: EditorEventKind
    x: float | None = None
    y: float | None = None

    @model_validator(mode="after")
    def validate_position(self) -> "EditorEventSchema":
        """Validate that pointer events carry a position."""
        if self.kind in POINTER_EVENTS and (self.x is None or self.y is None):
            raise ValueError(f"{self.kind.value} events require x and y")
        return self


class EditorEventLog(BaseModel):
    """A replayable sequence of editor events at a given scale."""

    model_config = ConfigDict(extra="forbid")

    scale: float = Field(default=DEFAULT_SCALE, gt=0, description="Pixels per meter")
    events: list[EditorEventSchema] = Field(default_factory=list)
