"""Outline editor endpoint.

The editor is driven by posting the current state with a batch of events;
the response carries the resulting state.
"""

import logging

from fastapi import APIRouter, HTTPException

from calepinage.domain.outline_editor import EditorEvent, OutlineEditor
from calepinage.web.schemas.common import EditorStateSchema
from calepinage.web.schemas.requests import EditorEventsRequest
from calepinage.web.schemas.responses import EditorStateResponseSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/editor", tags=["editor"])


@router.post("/events", response_model=EditorStateResponseSchema)
async def apply_editor_events(request: EditorEventsRequest) -> EditorStateResponseSchema:
    """Apply editor events in order to the posted state.

    Raises:
        HTTPException: If the posted state references a missing corner.
    """
    state = request.state.to_domain()
    if state.dragged_corner is not None and state.dragged_corner >= len(state.corners):
        raise HTTPException(
            status_code=422,
            detail={
                "error": "draggedCorner is out of range",
                "error_type": "invalid_state",
            },
        )

    editor = OutlineEditor(request.scale)
    events = [EditorEvent(kind=e.kind, x=e.x, y=e.y) for e in request.events]
    state = editor.replay(events, state)
    logger.debug("Applied %d editor events", len(events))

    start_corner = None
    if state.is_closed and state.start_point is not None:
        start_corner = editor.start_corner_type(state).value

    return EditorStateResponseSchema(
        state=EditorStateSchema.from_domain(state),
        area=editor.area(state),
        preview_length=editor.preview_length(state),
        start_corner=start_corner,
    )
