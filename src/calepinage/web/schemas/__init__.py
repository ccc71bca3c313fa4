"""Pydantic schemas for the REST API."""

from calepinage.web.schemas.common import EditorStateSchema
from calepinage.web.schemas.requests import EditorEventsRequest, PlanRequest
from calepinage.web.schemas.responses import (
    AreaResponseSchema,
    EdgeLengthSchema,
    EditorStateResponseSchema,
    ErrorResponseSchema,
    ExportFormatsSchema,
    LayoutResponseSchema,
    PlacedTileSchema,
    TileCountsSchema,
    ValidationResultSchema,
)

__all__ = [
    # Common
    "EditorStateSchema",
    # Requests
    "EditorEventsRequest",
    "PlanRequest",
    # Responses
    "AreaResponseSchema",
    "EdgeLengthSchema",
    "EditorStateResponseSchema",
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "LayoutResponseSchema",
    "PlacedTileSchema",
    "TileCountsSchema",
    "ValidationResultSchema",
]
