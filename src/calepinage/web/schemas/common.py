"""Shared Pydantic schemas for the REST API."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from calepinage.application.config import PointSchema
from calepinage.domain.geometry import flatten, points_from_flat
from calepinage.domain.outline_editor import EditorState
from calepinage.domain.value_objects import DrawingPhase, Point


def _point(schema: PointSchema | None) -> Point | None:
    return Point(schema.x, schema.y) if schema is not None else None


def _schema(point: Point | None) -> PointSchema | None:
    return PointSchema(x=point.x, y=point.y) if point is not None else None


class EditorStateSchema(BaseModel):
    """Outline editor state exchanged with clients.

    The API is stateless: clients post the state they hold and get the next
    state back.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    points: list[float] = Field(default_factory=list, description="Flat outline in pixels")
    phase: DrawingPhase = DrawingPhase.IDLE
    placing_start: bool = Field(default=False, alias="placingStart")
    start_point: PointSchema | None = Field(default=None, alias="startPoint")
    hover: PointSchema | None = None
    dragged_corner: int | None = Field(default=None, ge=0, alias="draggedCorner")

    @field_validator("points")
    @classmethod
    def validate_points(cls, v: list[float]) -> list[float]:
        """Validate that coordinates come in x, y pairs."""
        if len(v) % 2:
            raise ValueError("points must contain an even number of coordinates")
        return v

    def to_domain(self) -> EditorState:
        return EditorState(
            points=points_from_flat(self.points),
            phase=self.phase,
            placing_start=self.placing_start,
            start_point=_point(self.start_point),
            hover=_point(self.hover),
            dragged_corner=self.dragged_corner,
        )

    @classmethod
    def from_domain(cls, state: EditorState) -> "EditorStateSchema":
        return cls(
            points=flatten(state.points),
            phase=state.phase,
            placing_start=state.placing_start,
            start_point=_schema(state.start_point),
            hover=_schema(state.hover),
            dragged_corner=state.dragged_corner,
        )
