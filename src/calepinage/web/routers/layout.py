"""Layout computation and export endpoints."""

from fastapi import APIRouter
from fastapi.responses import Response

from calepinage.application import LayoutOutput, PlanState
from calepinage.application.config import load_plan_from_dict
from calepinage.domain.value_objects import EdgeLength
from calepinage.infrastructure.exporters import ExporterRegistry
from calepinage.web.dependencies import GenerateCommandDep
from calepinage.web.exceptions import LayoutGenerationError, UnsupportedFormatError
from calepinage.web.schemas.requests import PlanRequest
from calepinage.web.schemas.responses import (
    EdgeLengthSchema,
    ExportFormatsSchema,
    LayoutResponseSchema,
    PlacedTileSchema,
    TileCountsSchema,
)

router = APIRouter(prefix="/layout", tags=["layout"])

# Media types of the registered export formats
MEDIA_TYPES = {
    "json": "application/json",
    "svg": "image/svg+xml",
    "text": "text/plain",
}


def edge_schemas(edges: list[EdgeLength]) -> list[EdgeLengthSchema]:
    return [
        EdgeLengthSchema(
            x1=e.start.x,
            y1=e.start.y,
            x2=e.end.x,
            y2=e.end.y,
            meters=e.meters,
            horizontal=e.horizontal,
        )
        for e in edges
    ]


def _run(command: GenerateCommandDep, request: PlanRequest) -> LayoutOutput:
    document = load_plan_from_dict(request.plan)
    plan = PlanState.from_document(document, use_offcuts=request.use_offcuts)
    return command.execute(plan)


def _to_response(output: LayoutOutput) -> LayoutResponseSchema:
    result = output.result
    counts = result.counts
    return LayoutResponseSchema(
        is_valid=output.is_valid,
        errors=output.errors,
        warnings=output.warnings,
        area=output.area,
        corner=result.corner.value if result.corner else None,
        counts=TileCountsSchema(
            full=counts.full,
            partial=counts.partial,
            offcut_used=counts.offcut_used,
            total=counts.total,
            total_no_offcut=counts.total_no_offcut,
            gain_percent=counts.gain_percent,
        ),
        tiles=[
            PlacedTileSchema(
                x=t.x,
                y=t.y,
                width=t.width,
                height=t.height,
                category=t.category.value,
                row=t.row,
                rotation=t.rotation_deg,
            )
            for t in result.tiles
        ],
        edges=edge_schemas(output.edges),
    )


@router.post("", response_model=LayoutResponseSchema)
async def compute_layout(
    request: PlanRequest,
    command: GenerateCommandDep,
) -> LayoutResponseSchema:
    """Compute the tile layout of a plan.

    Plans with outline errors are answered with ``is_valid`` false and the
    error messages rather than an error status, so clients can show them.
    """
    return _to_response(_run(command, request))


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    """List all available export formats."""
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("/export/{format_name}")
async def export_layout(
    format_name: str,
    request: PlanRequest,
    command: GenerateCommandDep,
) -> Response:
    """Export the tile layout of a plan in a registered format.

    Raises:
        UnsupportedFormatError: If no exporter is registered for the format.
        LayoutGenerationError: If the plan has outline errors.
    """
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    output = _run(command, request)
    if not output.is_valid:
        raise LayoutGenerationError(output.errors)

    exporter = ExporterRegistry.get(format_name)()
    return Response(
        content=exporter.export_string(output),
        media_type=MEDIA_TYPES.get(format_name, "text/plain"),
    )
