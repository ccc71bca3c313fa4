"""SVG rendering of tile layouts.

Draws the outline, the tiles clipped to the outline, the start corner and a
small legend with the tile counts. Cut tiles are filled with a hatch
pattern so they stand out from whole tiles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from calepinage.domain.layout import LayoutResult, PlacedTile
from calepinage.domain.value_objects import Point, TileCategory


@dataclass(frozen=True)
class TileStyle:
    """Visual style of one tile category.

    Attributes:
        fill: Base fill color.
        hatch: Hatch pattern drawn over the fill ("stripes", "cross" or None).
        label: Legend label.
    """

    fill: str
    hatch: str | None
    label: str


# Tile category -> visual style
TILE_CATEGORY_STYLES: dict[TileCategory, TileStyle] = {
    TileCategory.FULL: TileStyle(fill="#b0b0b0", hatch=None, label="Full tiles"),
    TileCategory.PARTIAL: TileStyle(fill="#e5e7eb", hatch="stripes", label="Cut tiles"),
    TileCategory.OFFCUT: TileStyle(fill="#bae6fd", hatch="cross", label="From offcuts"),
}

HATCH_SIZE = 12


def _fmt(value: float) -> str:
    """Compact number formatting for SVG attributes."""
    return f"{value:.2f}".rstrip("0").rstrip(".")


class LayoutSvgRenderer:
    """Renders an outline and its tile layout as a standalone SVG document.

    Attributes:
        margin: Blank border around the outline in pixels.
        joint_color: Stroke color of tile edges.
        outline_color: Stroke color of the outline.
        start_color: Fill color of the start corner marker.
        show_legend: Whether to append the counts legend below the drawing.
    """

    def __init__(
        self,
        margin: float = 40.0,
        joint_color: str = "#ffffff",
        outline_color: str = "#2563eb",
        start_color: str = "#9333ea",
        show_legend: bool = True,
    ) -> None:
        self.margin = margin
        self.joint_color = joint_color
        self.outline_color = outline_color
        self.start_color = start_color
        self.show_legend = show_legend

    def render(
        self,
        outline: Sequence[Point],
        result: LayoutResult,
        start_point: Point | None = None,
    ) -> str:
        """Render the outline and layout.

        Args:
            outline: Outline vertices in pixels.
            result: Layout to draw; may be empty.
            start_point: Start corner marker, if any.

        Returns:
            SVG document as a string.
        """
        if outline:
            min_x = min(p.x for p in outline)
            min_y = min(p.y for p in outline)
            width = max(p.x for p in outline) - min_x
            height = max(p.y for p in outline) - min_y
        else:
            min_x = min_y = width = height = 0.0

        legend_height = 20 * (len(TILE_CATEGORY_STYLES) + 1) if self.show_legend else 0
        view_x = min_x - self.margin
        view_y = min_y - self.margin
        view_w = width + 2 * self.margin
        view_h = height + 2 * self.margin + legend_height

        parts: list[str] = [
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{_fmt(view_w)}" height="{_fmt(view_h)}" '
            f'viewBox="{_fmt(view_x)} {_fmt(view_y)} {_fmt(view_w)} {_fmt(view_h)}">',
            self._render_defs(outline),
            f'  <rect x="{_fmt(view_x)}" y="{_fmt(view_y)}" '
            f'width="{_fmt(view_w)}" height="{_fmt(view_h)}" fill="white"/>',
        ]

        if result.tiles:
            parts.append('  <g clip-path="url(#outline-clip)">')
            parts.extend(self._render_tile(tile) for tile in result.tiles)
            parts.append("  </g>")

        if outline:
            parts.append(
                f'  <polygon points="{self._points_attr(outline)}" fill="none" '
                f'stroke="{self.outline_color}" stroke-width="2"/>'
            )

        if start_point is not None:
            parts.append(
                f'  <circle cx="{_fmt(start_point.x)}" cy="{_fmt(start_point.y)}" '
                f'r="6" fill="{self.start_color}"/>'
            )

        if self.show_legend:
            parts.append(
                self._render_legend(result, view_x + 10, min_y + height + self.margin)
            )

        parts.append("</svg>")
        return "\n".join(parts)

    def _points_attr(self, outline: Sequence[Point]) -> str:
        return " ".join(f"{_fmt(p.x)},{_fmt(p.y)}" for p in outline)

    def _render_defs(self, outline: Sequence[Point]) -> str:
        s = HATCH_SIZE
        lines = ["  <defs>"]
        if outline:
            lines.append(
                f'    <clipPath id="outline-clip"><polygon '
                f'points="{self._points_attr(outline)}"/></clipPath>'
            )
        for category, style in TILE_CATEGORY_STYLES.items():
            if style.hatch is None:
                continue
            strokes = f'<path d="M0,{s} L{s},0" stroke="#888" stroke-width="2"/>'
            if style.hatch == "cross":
                strokes = (
                    f'<path d="M0,{s} L{s},0 M0,0 L{s},{s}" '
                    f'stroke="#444" stroke-width="2"/>'
                )
            lines.append(
                f'    <pattern id="hatch-{category.value}" width="{s}" height="{s}" '
                f'patternUnits="userSpaceOnUse">'
                f'<rect width="{s}" height="{s}" fill="{style.fill}"/>{strokes}</pattern>'
            )
        lines.append("  </defs>")
        return "\n".join(lines)

    def _render_tile(self, tile: PlacedTile) -> str:
        style = TILE_CATEGORY_STYLES[tile.category]
        fill = style.fill if style.hatch is None else f"url(#hatch-{tile.category.value})"
        transform = ""
        if tile.rotation_deg:
            # Pivot is the stored top-left corner, also for rows laid upward
            transform = (
                f' transform="rotate({_fmt(tile.rotation_deg)} '
                f'{_fmt(tile.x)} {_fmt(tile.y)})"'
            )
        return (
            f'    <rect x="{_fmt(tile.x)}" y="{_fmt(tile.y)}" '
            f'width="{_fmt(tile.width)}" height="{_fmt(tile.height)}" '
            f'fill="{fill}" stroke="{self.joint_color}" stroke-width="0.5"'
            f'{transform} data-category="{tile.category.value}"/>'
        )

    def _render_legend(self, result: LayoutResult, x: float, y: float) -> str:
        counts = {
            TileCategory.FULL: result.counts.full,
            TileCategory.PARTIAL: result.counts.partial - result.counts.offcut_used,
            TileCategory.OFFCUT: result.counts.offcut_used,
        }
        lines = ['  <g font-family="sans-serif" font-size="12">']
        for i, (category, style) in enumerate(TILE_CATEGORY_STYLES.items()):
            row_y = y + 20 * i
            fill = style.fill if style.hatch is None else f"url(#hatch-{category.value})"
            lines.append(
                f'    <rect x="{_fmt(x)}" y="{_fmt(row_y)}" width="14" height="14" '
                f'fill="{fill}" stroke="#444" stroke-width="0.5"/>'
            )
            lines.append(
                f'    <text x="{_fmt(x + 20)}" y="{_fmt(row_y + 11)}">'
                f"{style.label}: {counts[category]}</text>"
            )
        total_y = y + 20 * len(TILE_CATEGORY_STYLES)
        lines.append(
            f'    <text x="{_fmt(x)}" y="{_fmt(total_y + 11)}" font-weight="bold">'
            f"Total: {result.counts.total} "
            f"(gain {result.counts.gain_percent:.2f}%)</text>"
        )
        lines.append("  </g>")
        return "\n".join(lines)
