"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from calepinage.web.schemas.common import EditorStateSchema


class PlacedTileSchema(BaseModel):
    """One placed tile."""

    x: float = Field(..., description="Left edge in pixels")
    y: float = Field(..., description="Top edge in pixels")
    width: float = Field(..., description="Width in pixels")
    height: float = Field(..., description="Height in pixels")
    category: str = Field(..., description="full, partial or offcut")
    row: int = Field(..., description="Row index from the start corner")
    rotation: float = Field(default=0.0, description="Rotation in degrees")


class TileCountsSchema(BaseModel):
    """Aggregate tile counts."""

    full: int
    partial: int
    offcut_used: int
    total: int
    total_no_offcut: int
    gain_percent: float


class EdgeLengthSchema(BaseModel):
    """Dimension label of one outline edge."""

    x1: float
    y1: float
    x2: float
    y2: float
    meters: float
    horizontal: bool


class LayoutResponseSchema(BaseModel):
    """Response for layout computation."""

    is_valid: bool = Field(..., description="Whether the plan could be tiled")
    errors: list[str] = Field(default_factory=list, description="Error messages")
    warnings: list[str] = Field(default_factory=list, description="Warning messages")
    area: float = Field(..., description="Outline area in square meters")
    corner: str | None = Field(default=None, description="Start corner type")
    counts: TileCountsSchema
    tiles: list[PlacedTileSchema] = Field(default_factory=list)
    edges: list[EdgeLengthSchema] = Field(default_factory=list)


class AreaResponseSchema(BaseModel):
    """Response for area measurement."""

    closed: bool = Field(..., description="Whether the outline is closed")
    area: float = Field(..., description="Area in square meters, 0 when open")
    edges: list[EdgeLengthSchema] = Field(default_factory=list)


class ValidationResultSchema(BaseModel):
    """Response for plan validation."""

    is_valid: bool = Field(..., description="Whether the plan is valid")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class EditorStateResponseSchema(BaseModel):
    """Response for editor event application."""

    state: EditorStateSchema
    area: float = Field(..., description="Area in square meters, 0 until closed")
    preview_length: float | None = Field(
        default=None, description="Length of the hovered segment in meters"
    )
    start_corner: str | None = Field(
        default=None, description="Corner type of the start point"
    )


class ExportFormatsSchema(BaseModel):
    """Response for export format listing."""

    formats: list[str] = Field(..., description="Available export formats")


class ErrorResponseSchema(BaseModel):
    """Error response body."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional details")
