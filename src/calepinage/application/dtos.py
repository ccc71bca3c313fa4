"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from calepinage.domain.layout import LayoutResult
from calepinage.domain.value_objects import EdgeLength, Point, TileConfig


@dataclass
class LayoutOutput:
    """Everything produced for one plan: area, edge labels and tile layout.

    Attributes:
        outline: Outline vertices in pixels.
        start_point: Start corner the layout is laid from.
        scale: Pixels per meter.
        tiles: Tile configuration the layout used.
        area: Outline area in square meters.
        edges: Dimension labels of the outline edges.
        result: Tile layout (empty when the plan has errors).
        errors: Blocking problems found in the plan.
        warnings: Non-blocking concerns about the plan.
    """

    outline: tuple[Point, ...]
    scale: float
    tiles: TileConfig
    start_point: Point | None = None
    area: float = 0.0
    edges: list[EdgeLength] = field(default_factory=list)
    result: LayoutResult = field(default_factory=LayoutResult.empty)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors
