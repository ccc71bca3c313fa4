"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from calepinage.application.config import EditorEventSchema
from calepinage.application.config.schema import DEFAULT_SCALE
from calepinage.web.schemas.common import EditorStateSchema


class PlanRequest(BaseModel):
    """Request carrying a plan in its on-disk format.

    Options use the plan's camelCase keys (``useOffcuts``); the snake_case
    field name is accepted too. Unknown keys are rejected.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    plan: dict[str, Any] = Field(..., description="Plan document (camelCase keys)")
    use_offcuts: bool = Field(
        default=True,
        alias="useOffcuts",
        description="Serve cut tiles from earlier offcuts when possible",
    )


class EditorEventsRequest(BaseModel):
    """Request to apply editor events to a posted editor state."""

    model_config = ConfigDict(extra="forbid")

    scale: float = Field(default=DEFAULT_SCALE, gt=0, description="Pixels per meter")
    state: EditorStateSchema = Field(default_factory=EditorStateSchema)
    events: list[EditorEventSchema] = Field(..., description="Events in order")
