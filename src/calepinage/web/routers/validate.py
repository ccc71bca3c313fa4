"""Plan validation endpoints."""

from fastapi import APIRouter

from calepinage.application.config import load_plan_from_dict, validate_plan
from calepinage.web.schemas.requests import PlanRequest
from calepinage.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_plan_document(request: PlanRequest) -> ValidationResultSchema:
    """Validate a plan without computing its layout.

    Schema errors are answered with status 422 by the PlanError handler.
    """
    result = validate_plan(load_plan_from_dict(request.plan))
    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[{"message": w.message, "path": w.path} for w in result.warnings],
    )
