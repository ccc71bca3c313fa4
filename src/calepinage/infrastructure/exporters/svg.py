"""SVG exporter for tile layout drawings.

Wraps LayoutSvgRenderer to write the outline and its tiles as an SVG file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from calepinage.infrastructure.exporters.base import ExporterRegistry
from calepinage.infrastructure.svg_renderer import LayoutSvgRenderer

if TYPE_CHECKING:
    from calepinage.application.dtos import LayoutOutput


logger = logging.getLogger(__name__)


@ExporterRegistry.register("svg")
class SvgExporter:
    """SVG exporter for tile layouts.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for SVG files.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"

    def __init__(self, margin: float = 40.0, show_legend: bool = True) -> None:
        """Initialize the SVG exporter.

        Args:
            margin: Blank border around the outline in pixels.
            show_legend: Whether to draw the tile count legend.
        """
        self.renderer = LayoutSvgRenderer(margin=margin, show_legend=show_legend)

    def export(self, output: LayoutOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8")
        logger.info(f"Exported SVG layout to {path}")

    def export_string(self, output: LayoutOutput) -> str:
        return self.renderer.render(output.outline, output.result, output.start_point)
