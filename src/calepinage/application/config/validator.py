"""Validation structures and outline checks for plan files.

Schema validation (types, ranges) happens when a plan is loaded. The checks
here look at the geometry: whether the outline is closed and orthogonal and
whether the start point is usable for a layout.
"""

from dataclasses import dataclass, field
from typing import Any

from calepinage.application.config.schema import PlanDocument
from calepinage.domain.geometry import bounding_box, distance, points_from_flat
from calepinage.domain.outline_editor import CORNER_MATCH_TOLERANCE_PX
from calepinage.domain.value_objects import Point

# A closed outline needs this many distinct corners
MIN_DISTINCT_CORNERS = 4

# Edge coordinates closer than this (pixels) count as aligned
ALIGNMENT_TOLERANCE_PX = 1e-6


@dataclass
class ValidationError:
    """A blocking problem: the plan cannot be tiled as is.

    Attributes:
        path: JSON path to the offending field (e.g., "points[4]")
        message: Human-readable description of the error
        value: The offending value
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking concern: the plan works but may not do what is expected.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings.

    Attributes:
        errors: Blocking validation errors
        warnings: Non-blocking validation warnings
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_outline(plan: PlanDocument) -> ValidationResult:
    """Check that the outline is closed, orthogonal and has enough corners."""
    result = ValidationResult()
    points = points_from_flat(plan.points)

    if len(points) < 3:
        return result.add_error(
            "points",
            "Outline needs at least 3 points",
            value=len(points),
        )

    if points[0] != points[-1]:
        result.add_error(
            "points",
            "Outline is not closed: the last point must repeat the first",
        )

    corners = set(points)
    if len(corners) < MIN_DISTINCT_CORNERS:
        result.add_error(
            "points",
            f"Closed outline needs at least {MIN_DISTINCT_CORNERS} distinct corners",
            value=len(corners),
        )

    for i, (p1, p2) in enumerate(zip(points, points[1:])):
        if (
            abs(p1.x - p2.x) > ALIGNMENT_TOLERANCE_PX
            and abs(p1.y - p2.y) > ALIGNMENT_TOLERANCE_PX
        ):
            result.add_error(
                f"points[{2 * (i + 1)}]",
                "Edge is not horizontal or vertical",
                value=[p1.x, p1.y, p2.x, p2.y],
            )
    return result


def check_start_point(plan: PlanDocument) -> ValidationResult:
    """Check that the start point is a corner the layout can start from."""
    result = ValidationResult()
    if plan.start_point is None:
        return result.add_warning(
            "startPoint",
            "No start point set; the layout will be empty",
            suggestion="Pick one of the outline's bounding-box corners",
        )

    points = points_from_flat(plan.points)
    if len(points) < 3:
        return result

    start = Point(plan.start_point.x, plan.start_point.y)
    if not any(distance(start, p) < CORNER_MATCH_TOLERANCE_PX for p in points):
        result.add_warning(
            "startPoint",
            "Start point is not an outline corner",
        )

    box = bounding_box(points)
    on_box_corner = any(
        abs(start.x - bx) < CORNER_MATCH_TOLERANCE_PX
        and abs(start.y - by) < CORNER_MATCH_TOLERANCE_PX
        for bx in (box.min_x, box.max_x)
        for by in (box.min_y, box.max_y)
    )
    if not on_box_corner:
        result.add_warning(
            "startPoint",
            "Start point is not a bounding-box corner; rows will be laid "
            "as if starting from the top-left",
            suggestion="Pick one of the four extreme corners of the outline",
        )
    return result


def validate_plan(plan: PlanDocument) -> ValidationResult:
    """Run every plan check and collect the results."""
    result = check_outline(plan)
    result.merge(check_start_point(plan))
    return result
