"""Tile layout engine.

Lays tiles row by row over an orthogonal outline, starting from a chosen
corner, and counts full tiles, cut tiles and cut tiles served from
offcuts of earlier cuts.

The engine is a pure function of (outline, start point, tile config,
scale): it keeps no state between calls, and its offcut pool lives only for
the duration of one computation. All result dataclasses are frozen.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Sequence

from calepinage.domain.geometry import (
    bounding_box,
    distinct_corners,
    is_orthogonal,
    point_in_polygon,
)
from calepinage.domain.outline_editor import classify_corner
from calepinage.domain.value_objects import (
    BoundingBox,
    CornerType,
    LayoutPattern,
    Point,
    TileCategory,
    TileConfig,
)

logger = logging.getLogger(__name__)

# Slack when checking whether a tile still fits inside the bounding box (pixels)
FIT_TOLERANCE_PX = 0.01

# Slack when matching a cut width against a stored offcut (pixels)
OFFCUT_TOLERANCE_PX = 0.1

# An outline needs this many distinct corners before it can be tiled
MIN_OUTLINE_CORNERS = 3


@dataclass(frozen=True)
class PlacedTile:
    """A tile rectangle placed on the canvas.

    Attributes:
        x: Left edge in pixels.
        y: Top edge in pixels.
        width: Width in pixels.
        height: Height in pixels.
        category: Whether the tile is whole, freshly cut or cut from an offcut.
        row: Zero-based row index counted from the start corner.
        rotation_deg: Rotation to apply when rendering.
    """

    x: float
    y: float
    width: float
    height: float
    category: TileCategory
    row: int = 0
    rotation_deg: float = 0.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Tile dimensions must be positive")
        if self.row < 0:
            raise ValueError("Row index must be non-negative")

    @property
    def corners(self) -> tuple[Point, Point, Point, Point]:
        """Corners clockwise from the top-left."""
        right = self.x + self.width
        bottom = self.y + self.height
        return (
            Point(self.x, self.y),
            Point(right, self.y),
            Point(right, bottom),
            Point(self.x, bottom),
        )

    @property
    def is_cut(self) -> bool:
        return self.category is not TileCategory.FULL


@dataclass(frozen=True)
class TileCounts:
    """Aggregate tile counts of one layout.

    Attributes:
        full: Whole tiles laid.
        partial: Cut tiles, whether cut from fresh stock or from an offcut.
        offcut_used: Cut tiles served from an earlier offcut.
        total: Tiles to buy.
        total_no_offcut: Tiles to buy if no offcut were reused.
        gain_percent: Share of tiles saved by reusing offcuts.
    """

    full: int = 0
    partial: int = 0
    offcut_used: int = 0
    total: int = 0
    total_no_offcut: int = 0
    gain_percent: float = 0.0

    def __post_init__(self) -> None:
        if min(self.full, self.partial, self.offcut_used) < 0:
            raise ValueError("Tile counts must be non-negative")
        if self.offcut_used > self.partial:
            raise ValueError("Offcut reuses cannot exceed cut tiles")

    @classmethod
    def from_tally(
        cls, full: int, partial: int, offcut_used: int, use_offcuts: bool
    ) -> "TileCounts":
        """Derive totals and gain from raw tallies."""
        total_no_offcut = full + partial
        if use_offcuts:
            total = full + math.ceil(partial - offcut_used)
        else:
            total = total_no_offcut
        gain = 0.0
        if use_offcuts and total_no_offcut > 0:
            gain = 100 * (total_no_offcut - total) / total_no_offcut
        return cls(
            full=full,
            partial=partial,
            offcut_used=offcut_used,
            total=total,
            total_no_offcut=total_no_offcut,
            gain_percent=gain,
        )


@dataclass(frozen=True)
class LayoutResult:
    """Tiles and counts produced by one layout computation.

    Attributes:
        tiles: Placed tiles in laying order.
        counts: Aggregate counts.
        corner: Start corner the rows were laid from, None for empty results.
        bounds: Bounding box of the tiled outline, None for empty results.
    """

    tiles: tuple[PlacedTile, ...] = ()
    counts: TileCounts = field(default_factory=TileCounts)
    corner: CornerType | None = None
    bounds: BoundingBox | None = None

    @classmethod
    def empty(cls) -> "LayoutResult":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.tiles

    def tiles_by_category(self, category: TileCategory) -> list[PlacedTile]:
        return [tile for tile in self.tiles if tile.category is category]


class OffcutPool:
    """Remainders of cut tiles, reusable for later cuts.

    A first-fit pool: :meth:`take` scans stored widths in insertion order
    and consumes the first one wide enough.

    Attributes:
        tolerance: Slack allowed when matching a width, in pixels.
    """

    def __init__(self, tolerance: float = OFFCUT_TOLERANCE_PX) -> None:
        self.tolerance = tolerance
        self._widths: list[float] = []

    def __len__(self) -> int:
        return len(self._widths)

    @property
    def widths(self) -> tuple[float, ...]:
        return tuple(self._widths)

    def add(self, width: float) -> None:
        if width < 0:
            raise ValueError("Offcut width must be non-negative")
        self._widths.append(width)

    def take(self, width: float) -> bool:
        """Consume the first stored offcut at least ``width`` wide.

        Returns:
            True if an offcut was found and removed.
        """
        for i, stored in enumerate(self._widths):
            if stored >= width - self.tolerance:
                del self._widths[i]
                return True
        return False


@dataclass
class _RowContext:
    """Internal per-computation state shared by the row placement helpers.

    Attributes:
        outline: Outline the tiles must touch.
        tile_width: Tile width in pixels.
        tile_height: Tile height in pixels.
        config: Tile configuration.
        pool: Offcuts collected so far.
        tiles: Tiles placed so far.
        full: Whole tiles placed.
        partial: Cut tiles placed.
        offcut_used: Cut tiles served from the pool.
    """

    outline: Sequence[Point]
    tile_width: float
    tile_height: float
    config: TileConfig
    pool: OffcutPool
    tiles: list[PlacedTile] = field(default_factory=list)
    full: int = 0
    partial: int = 0
    offcut_used: int = 0


class TileLayoutEngine:
    """Row-by-row tile layout with greedy offcut reuse.

    Rows start at the start point and grow towards the far side of the
    outline's bounding box. Each row lays whole tiles until the next one
    would pass the far side, then one cut tile for the leftover. In the
    offset pattern, odd rows open with a half tile.

    A tile is kept when any of its four corners lies inside the outline;
    tiles whose interior overlaps the outline but whose corners are all
    outside are dropped.
    """

    def compute(
        self,
        outline: Sequence[Point],
        start_point: Point | None,
        config: TileConfig,
        scale: float,
    ) -> LayoutResult:
        """Compute the layout of ``config`` tiles over ``outline``.

        Args:
            outline: Closed outline vertices in pixels.
            start_point: Corner rows are laid from.
            config: Tile dimensions, joint, pattern and offcut option.
            scale: Pixels per meter.

        Returns:
            LayoutResult; empty when the inputs cannot be tiled.
        """
        if start_point is None or len(distinct_corners(outline)) < MIN_OUTLINE_CORNERS:
            return LayoutResult.empty()

        if scale <= 0:
            logger.warning("Scale must be positive, got %s", scale)
            return LayoutResult.empty()

        tw, th, sp = config.to_pixels(scale)
        if tw <= 0 or th <= 0 or tw + sp <= 0 or th + sp <= 0:
            logger.warning(
                "Degenerate tile size %.3fx%.3f px with joint %.3f px",
                tw,
                th,
                sp,
            )
            return LayoutResult.empty()

        if not is_orthogonal(outline):
            logger.warning("Outline has non axis-aligned edges; no layout computed")
            return LayoutResult.empty()

        box = bounding_box(outline)
        corner = classify_corner(start_point, outline)
        y_sign = 1 if corner.goes_down else -1
        n_rows = math.ceil((box.height + 2 * th) / (th + sp))

        ctx = _RowContext(
            outline=outline,
            tile_width=tw,
            tile_height=th,
            config=config,
            pool=OffcutPool(),
        )

        for row in range(n_rows):
            tile_y = start_point.y + y_sign * row * (th + sp)
            top = tile_y if y_sign > 0 else tile_y - th
            self._lay_row(ctx, row, top, start_point.x, corner.goes_right, box, sp)

        counts = TileCounts.from_tally(
            ctx.full, ctx.partial, ctx.offcut_used, config.use_offcuts
        )
        logger.info(
            "Layout from %s: %d full, %d cut (%d from offcuts), %d tiles total",
            corner.value,
            counts.full,
            counts.partial,
            counts.offcut_used,
            counts.total,
        )
        return LayoutResult(
            tiles=tuple(ctx.tiles),
            counts=counts,
            corner=corner,
            bounds=box,
        )

    def _lay_row(
        self,
        ctx: _RowContext,
        row: int,
        top: float,
        start_x: float,
        going_right: bool,
        box: BoundingBox,
        sp: float,
    ) -> None:
        """Lay one row: optional leading half tile, whole tiles, trailing cut."""
        tw = ctx.tile_width
        x = start_x

        if ctx.config.pattern is LayoutPattern.OFFSET and row % 2 == 1:
            half = tw / 2
            half_left = start_x if going_right else start_x - half
            self._place_cut(ctx, row, half_left, top, half)
            x = half_left + half + sp if going_right else half_left - sp

        if going_right:
            while x + tw <= box.max_x + FIT_TOLERANCE_PX:
                self._place_full(ctx, row, x, top)
                x += tw + sp
            leftover = box.max_x - x
            cut_left = x
        else:
            while x - tw >= box.min_x - FIT_TOLERANCE_PX:
                self._place_full(ctx, row, x - tw, top)
                x -= tw + sp
            leftover = x - box.min_x
            cut_left = box.min_x

        if FIT_TOLERANCE_PX < leftover < tw:
            self._place_cut(ctx, row, cut_left, top, leftover)

        logger.debug("Row %d laid, %d tiles so far", row, len(ctx.tiles))

    def _touches_outline(
        self, ctx: _RowContext, left: float, top: float, width: float
    ) -> bool:
        right = left + width
        bottom = top + ctx.tile_height
        return any(
            point_in_polygon(cx, cy, ctx.outline)
            for cx, cy in ((left, top), (right, top), (right, bottom), (left, bottom))
        )

    def _place_full(self, ctx: _RowContext, row: int, left: float, top: float) -> None:
        if not self._touches_outline(ctx, left, top, ctx.tile_width):
            return
        ctx.tiles.append(
            PlacedTile(
                x=left,
                y=top,
                width=ctx.tile_width,
                height=ctx.tile_height,
                category=TileCategory.FULL,
                row=row,
                rotation_deg=ctx.config.orientation_deg,
            )
        )
        ctx.full += 1

    def _place_cut(
        self, ctx: _RowContext, row: int, left: float, top: float, width: float
    ) -> None:
        """Place a cut tile, serving it from the offcut pool when possible."""
        if not self._touches_outline(ctx, left, top, width):
            return

        category = TileCategory.PARTIAL
        if ctx.config.use_offcuts:
            if ctx.pool.take(width):
                category = TileCategory.OFFCUT
                ctx.offcut_used += 1
            else:
                ctx.pool.add(ctx.tile_width - width)

        ctx.tiles.append(
            PlacedTile(
                x=left,
                y=top,
                width=width,
                height=ctx.tile_height,
                category=category,
                row=row,
                rotation_deg=ctx.config.orientation_deg,
            )
        )
        ctx.partial += 1


def compute_layout(
    outline: Sequence[Point],
    start_point: Point | None,
    config: TileConfig,
    scale: float,
) -> LayoutResult:
    """Convenience wrapper around :meth:`TileLayoutEngine.compute`."""
    return TileLayoutEngine().compute(outline, start_point, config, scale)
