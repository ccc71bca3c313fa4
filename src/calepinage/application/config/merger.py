"""Merging of command-line overrides into plan documents."""

from calepinage.application.config.loader import load_plan_from_dict
from calepinage.application.config.schema import PlanDocument


def merge_plan_overrides(
    plan: PlanDocument,
    *,
    tile_w: float | None = None,
    tile_h: float | None = None,
    spacing: float | None = None,
    pattern: str | None = None,
    orientation: float | None = None,
    scale: float | None = None,
) -> PlanDocument:
    """Merge override values into a plan.

    Overrides replace the plan values only when they are not None. The
    merged document is validated again, so out-of-range overrides fail the
    same way as out-of-range file values.

    Returns:
        A new PlanDocument with merged values

    Raises:
        PlanError: If an override fails validation.

    Example:
        >>> plan = load_plan(Path("plan-terrasse.json"))
        >>> merge_plan_overrides(plan, tile_w=60.0).tile_w
        60.0
    """
    overrides = {
        "tileW": tile_w,
        "tileH": tile_h,
        "spacing": spacing,
        "pattern": pattern,
        "orientation": orientation,
        "scale": scale,
    }
    data = plan.to_json_dict()
    data.update({key: value for key, value in overrides.items() if value is not None})
    return load_plan_from_dict(data)
