"""Plain-text formatters for plans and tile layouts."""

from __future__ import annotations

from calepinage.application.dtos import LayoutOutput
from calepinage.domain.layout import TileCounts
from calepinage.domain.value_objects import EdgeLength, TileConfig


class TileCountFormatter:
    """Formats tile counts as a small table."""

    def format(self, counts: TileCounts, use_offcuts: bool = True) -> str:
        lines = [
            "TILE COUNTS",
            "=" * 40,
            f"{'Full tiles':<28} {counts.full:>10}",
            f"{'Cut tiles':<28} {counts.partial:>10}",
        ]
        if use_offcuts:
            lines.append(f"{'  of which from offcuts':<28} {counts.offcut_used:>10}")
        lines.append("-" * 40)
        lines.append(f"{'Tiles to buy':<28} {counts.total:>10}")
        if use_offcuts:
            lines.append(f"{'Without offcut reuse':<28} {counts.total_no_offcut:>10}")
            lines.append(f"{'Gain':<28} {counts.gain_percent:>9.2f}%")
        return "\n".join(lines)


class EdgeListFormatter:
    """Formats outline edge lengths, one line per labelled edge."""

    def format(self, edges: list[EdgeLength]) -> str:
        if not edges:
            return "No edges."

        lines = [
            "EDGES",
            "=" * 40,
            f"{'#':<4} {'From':<14} {'To':<14} {'Length'}",
            "-" * 40,
        ]
        for i, edge in enumerate(edges, start=1):
            start = f"({edge.start.x:g}, {edge.start.y:g})"
            end = f"({edge.end.x:g}, {edge.end.y:g})"
            lines.append(f"{i:<4} {start:<14} {end:<14} {edge.meters:.1f} m")
        return "\n".join(lines)


class LayoutSummaryFormatter:
    """Formats a complete layout summary.

    The summary lists the tile settings, the measured area, the counts and
    any validation messages. Edge lengths are included on request.
    """

    def __init__(self, include_edges: bool = False) -> None:
        """Initialize formatter.

        Args:
            include_edges: Whether to append the edge length table.
        """
        self._include_edges = include_edges
        self._counts = TileCountFormatter()
        self._edges = EdgeListFormatter()

    def format(self, output: LayoutOutput) -> str:
        sections = [self._format_settings(output.tiles, output.scale)]
        sections.append(f"Area: {output.area:.2f} m²")

        if output.errors:
            sections.append(self._format_messages("ERRORS", output.errors))
        else:
            sections.append(
                self._counts.format(output.result.counts, output.tiles.use_offcuts)
            )

        if output.warnings:
            sections.append(self._format_messages("WARNINGS", output.warnings))
        if self._include_edges:
            sections.append(self._edges.format(output.edges))
        return "\n\n".join(sections)

    def _format_settings(self, tiles: TileConfig, scale: float) -> str:
        return "\n".join(
            [
                "TILE SETTINGS",
                "=" * 40,
                f"{'Tile':<28} {tiles.tile_w:g} x {tiles.tile_h:g} cm",
                f"{'Joint':<28} {tiles.spacing:g} mm",
                f"{'Pattern':<28} {tiles.pattern.value}",
                f"{'Orientation':<28} {tiles.orientation_deg:g} deg",
                f"{'Scale':<28} {scale:g} px/m",
            ]
        )

    def _format_messages(self, title: str, messages: list[str]) -> str:
        return "\n".join([title, "-" * 40, *(f"  - {m}" for m in messages)])
