"""Area measurement endpoint."""

from fastapi import APIRouter

from calepinage.application import PlanState
from calepinage.application.config import load_plan_from_dict
from calepinage.domain.geometry import edge_lengths
from calepinage.web.routers.layout import edge_schemas
from calepinage.web.schemas.requests import PlanRequest
from calepinage.web.schemas.responses import AreaResponseSchema

router = APIRouter(prefix="/area", tags=["area"])


@router.post("", response_model=AreaResponseSchema)
async def measure_area(request: PlanRequest) -> AreaResponseSchema:
    """Measure a plan's outline: area once closed, and edge lengths."""
    plan = PlanState.from_document(load_plan_from_dict(request.plan))
    return AreaResponseSchema(
        closed=plan.editor.is_closed,
        area=plan.area,
        edges=edge_schemas(edge_lengths(plan.editor.points, plan.scale)),
    )
