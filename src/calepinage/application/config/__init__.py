"""Plan file schema, loading and validation.

Public API:
    - PlanDocument: Root plan model (on-disk camelCase format)
    - PointSchema: Canvas point model
    - EditorEventSchema / EditorEventLog: Recorded editor events
    - load_plan: Load a plan from a JSON file
    - load_plan_from_dict: Validate an already-parsed plan
    - save_plan: Write a plan in the on-disk format
    - merge_plan_overrides: Apply command-line overrides to a plan
    - load_event_log: Load recorded editor events
    - PlanError: Exception for plan loading errors
    - ValidationResult / ValidationError / ValidationWarning: Check results
    - validate_plan: Check outline geometry and start point

Example:
    >>> from pathlib import Path
    >>> from calepinage.application.config import load_plan, PlanError
    >>>
    >>> try:
    ...     plan = load_plan(Path("plan-terrasse.json"))
    ...     print(f"Tiles: {plan.tile_w}x{plan.tile_h} cm")
    ... except PlanError as e:
    ...     print(f"Error: {e}")
"""

from calepinage.application.config.loader import (
    PlanError,
    load_event_log,
    load_plan,
    load_plan_from_dict,
    save_plan,
)
from calepinage.application.config.merger import merge_plan_overrides
from calepinage.application.config.schema import (
    EditorEventLog,
    EditorEventSchema,
    PlanDocument,
    PointSchema,
)
from calepinage.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_plan,
)

__all__ = [
    "EditorEventLog",
    "EditorEventSchema",
    "PlanDocument",
    "PlanError",
    "PointSchema",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "load_event_log",
    "load_plan",
    "load_plan_from_dict",
    "merge_plan_overrides",
    "save_plan",
    "validate_plan",
]
