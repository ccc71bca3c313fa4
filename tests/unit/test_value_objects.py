"""Tests for domain value objects."""

from __future__ import annotations

import pytest

from calepinage.domain.layout import PlacedTile, TileCounts
from calepinage.domain.value_objects import (
    BoundingBox,
    CornerType,
    TileCategory,
    TileConfig,
)


class TestCornerType:
    """Tests for CornerType directions."""

    @pytest.mark.parametrize(
        ("corner", "right", "down"),
        [
            (CornerType.TOP_LEFT, True, True),
            (CornerType.TOP_RIGHT, False, True),
            (CornerType.BOTTOM_LEFT, True, False),
            (CornerType.BOTTOM_RIGHT, False, False),
        ],
    )
    def test_directions(self, corner: CornerType, right: bool, down: bool) -> None:
        """Each corner lays rows away from itself."""
        assert corner.goes_right is right
        assert corner.goes_down is down


class TestTileConfig:
    """Tests for TileConfig."""

    def test_defaults(self) -> None:
        """Defaults match a fresh drawing session."""
        config = TileConfig()
        assert (config.tile_w, config.tile_h, config.spacing) == (120.0, 30.0, 3.0)
        assert config.use_offcuts

    def test_to_pixels(self) -> None:
        """Centimeters and millimeters are converted with the scale."""
        tw, th, sp = TileConfig(tile_w=120, tile_h=30, spacing=3).to_pixels(80)
        assert tw == pytest.approx(96.0)
        assert th == pytest.approx(24.0)
        assert sp == pytest.approx(0.24)


class TestBoundingBox:
    """Tests for BoundingBox validation."""

    def test_inverted_box_rejected(self) -> None:
        """max below min raises ValueError."""
        with pytest.raises(ValueError):
            BoundingBox(min_x=10, max_x=0, min_y=0, max_y=10)


class TestPlacedTile:
    """Tests for PlacedTile."""

    def test_corners_clockwise(self) -> None:
        """Corners start top-left and run clockwise."""
        tile = PlacedTile(x=10, y=20, width=100, height=60, category=TileCategory.FULL)
        assert [c.as_tuple() for c in tile.corners] == [
            (10, 20),
            (110, 20),
            (110, 80),
            (10, 80),
        ]
        assert not tile.is_cut

    def test_non_positive_size_rejected(self) -> None:
        """Zero-width tiles are invalid."""
        with pytest.raises(ValueError, match="positive"):
            PlacedTile(x=0, y=0, width=0, height=60, category=TileCategory.PARTIAL)


class TestTileCounts:
    """Tests for TileCounts.from_tally."""

    def test_offcut_reuse_saves_tiles(self) -> None:
        """Each reused offcut saves one tile to buy."""
        counts = TileCounts.from_tally(full=18, partial=4, offcut_used=2, use_offcuts=True)
        assert counts.total == 20
        assert counts.total_no_offcut == 22
        assert counts.gain_percent == pytest.approx(100 * 2 / 22)

    def test_no_gain_without_offcuts(self) -> None:
        """With reuse disabled the totals match and gain is zero."""
        counts = TileCounts.from_tally(full=18, partial=4, offcut_used=0, use_offcuts=False)
        assert counts.total == counts.total_no_offcut == 22
        assert counts.gain_percent == 0.0

    def test_empty_tally(self) -> None:
        """No tiles means no gain and no division by zero."""
        counts = TileCounts.from_tally(0, 0, 0, use_offcuts=True)
        assert counts.total == 0
        assert counts.gain_percent == 0.0

    def test_reuses_cannot_exceed_cuts(self) -> None:
        """More offcut reuses than cut tiles is inconsistent."""
        with pytest.raises(ValueError):
            TileCounts(full=0, partial=1, offcut_used=2)
