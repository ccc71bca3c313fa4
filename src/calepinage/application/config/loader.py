"""Plan file loader and writer with comprehensive error handling.

This module loads and saves plan files and editor event logs. It turns file
system errors, JSON parsing errors and Pydantic validation errors into a
single :class:`PlanError` with actionable messages.
"""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from calepinage.application.config.schema import EditorEventLog, PlanDocument

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class PlanError(Exception):
    """Exception raised when a plan file cannot be loaded or saved.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, file_write_error, json_parse, validation)
        path: Path to the plan file (if applicable)
        details: Additional error details (line/column for JSON, per-field
            validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("startPoint", "x"))
        'startPoint.x'
        >>> _format_json_path(("events", 2, "kind"))
        'events[2].kind'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Flatten a Pydantic ValidationError into path/message/value dicts."""
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Plan validation failed:"]
    for detail in details:
        path = detail["path"] or "<root>"
        value = detail.get("value")
        if value is not None and not isinstance(value, dict):
            lines.append(f"  - {path}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {detail['message']}")
    return "\n".join(lines)


def _validate(model: type[ModelT], data: Any, path: Path | None = None) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise PlanError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        )


def _read_json(path: Path) -> Any:
    """Read and parse a JSON file, raising PlanError on any failure."""
    if not path.exists():
        raise PlanError(
            message=f"Plan file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise PlanError(
            message=f"Permission denied reading plan file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise PlanError(
            message=f"Error reading plan file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise PlanError(
            message=f"Invalid JSON in plan file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[
                {
                    "line": e.lineno,
                    "column": e.colno,
                    "message": e.msg,
                }
            ],
        )


def load_plan(path: Path) -> PlanDocument:
    """Load and validate a plan from a JSON file.

    Raises:
        PlanError: If the file cannot be read, is not valid JSON, or does
            not match the plan schema. ``error_type`` tells which.

    Example:
        >>> try:
        ...     plan = load_plan(Path("plan-terrasse.json"))
        ... except PlanError as e:
        ...     for detail in e.details:
        ...         print(f"  {detail['path']}: {detail['message']}")
    """
    plan = _validate(PlanDocument, _read_json(path), path)
    logger.debug("Loaded plan %s with %d coordinates", path, len(plan.points))
    return plan


def load_plan_from_dict(data: dict[str, Any]) -> PlanDocument:
    """Validate a plan given as an already-parsed dictionary.

    Raises:
        PlanError: If the data fails validation.
    """
    return _validate(PlanDocument, data)


def save_plan(plan: PlanDocument, path: Path) -> None:
    """Write ``plan`` to ``path`` in the on-disk format.

    Raises:
        PlanError: If the file cannot be written.
    """
    try:
        path.write_text(json.dumps(plan.to_json_dict()), encoding="utf-8")
    except OSError as e:
        raise PlanError(
            message=f"Error writing plan file: {path}: {e}",
            error_type="file_write_error",
            path=path,
        )
    logger.debug("Saved plan to %s", path)


def load_event_log(path: Path) -> EditorEventLog:
    """Load a recorded sequence of editor events.

    The file holds either ``{"scale": ..., "events": [...]}`` or a bare
    list of events (default scale).

    Raises:
        PlanError: If the file cannot be read or validated.
    """
    data = _read_json(path)
    if isinstance(data, list):
        data = {"events": data}
    return _validate(EditorEventLog, data, path)
