"""JSON exporter with the plan, counts and every placed tile.

The document carries:
- the plan in its persisted form (flat points, tile settings, start point)
- the measured area and edge lengths
- the tile counts and gain
- one entry per placed tile with its category and row
- validation errors and warnings
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from calepinage.domain.geometry import flatten
from calepinage.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from calepinage.application.dtos import LayoutOutput
    from calepinage.domain.layout import LayoutResult


logger = logging.getLogger(__name__)


# Current schema version for JSON output
SCHEMA_VERSION = "1.0"


@ExporterRegistry.register("json")
class JsonExporter:
    """JSON exporter for layout outputs.

    Attributes:
        format_name: "json"
        file_extension: "json"
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, include_tiles: bool = True, indent: int = 2) -> None:
        """Initialize the JSON exporter.

        Args:
            include_tiles: Whether to list every placed tile.
            indent: JSON indentation level.
        """
        self.include_tiles = include_tiles
        self.indent = indent

    def export(self, output: LayoutOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8")
        logger.info(f"Exported JSON layout to {path}")

    def export_string(self, output: LayoutOutput) -> str:
        return json.dumps(self.build(output), indent=self.indent)

    def build(self, output: LayoutOutput) -> dict[str, Any]:
        """Build the JSON-ready dictionary for ``output``."""
        tiles = output.tiles
        data: dict[str, Any] = {
            "schema_version": SCHEMA_VERSION,
            "plan": {
                "points": flatten(output.outline),
                "scale": output.scale,
                "tileW": tiles.tile_w,
                "tileH": tiles.tile_h,
                "spacing": tiles.spacing,
                "pattern": tiles.pattern.value,
                "orientation": tiles.orientation_deg,
                "useOffcuts": tiles.use_offcuts,
            },
            "area": round(output.area, 4),
            "edges": [
                {
                    "from": edge.start.as_tuple(),
                    "to": edge.end.as_tuple(),
                    "meters": edge.meters,
                    "horizontal": edge.horizontal,
                }
                for edge in output.edges
            ],
            "layout": self._build_layout(output.result),
            "errors": list(output.errors),
            "warnings": list(output.warnings),
        }
        return data

    def _build_layout(self, result: LayoutResult) -> dict[str, Any]:
        counts = result.counts
        layout: dict[str, Any] = {
            "corner": result.corner.value if result.corner else None,
            "counts": {
                "full": counts.full,
                "partial": counts.partial,
                "offcutUsed": counts.offcut_used,
                "total": counts.total,
                "totalNoOffcut": counts.total_no_offcut,
                "gainPercent": round(counts.gain_percent, 2),
            },
        }
        if self.include_tiles:
            layout["tiles"] = [
                {
                    "x": tile.x,
                    "y": tile.y,
                    "width": tile.width,
                    "height": tile.height,
                    "category": tile.category.value,
                    "row": tile.row,
                    "rotation": tile.rotation_deg,
                }
                for tile in result.tiles
            ]
        return layout
