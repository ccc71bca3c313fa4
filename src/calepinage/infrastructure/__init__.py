"""Infrastructure layer: formatters, SVG rendering and exporters."""

from .exporters import (
    Exporter,
    ExporterRegistry,
    JsonExporter,
    SvgExporter,
    TextExporter,
)
from .formatters import EdgeListFormatter, LayoutSummaryFormatter, TileCountFormatter
from .svg_renderer import TILE_CATEGORY_STYLES, LayoutSvgRenderer, TileStyle

__all__ = [
    "EdgeListFormatter",
    "Exporter",
    "ExporterRegistry",
    "JsonExporter",
    "LayoutSummaryFormatter",
    "LayoutSvgRenderer",
    "SvgExporter",
    "TILE_CATEGORY_STYLES",
    "TextExporter",
    "TileCountFormatter",
    "TileStyle",
]
